"""Project definition document models."""

import logging
from datetime import UTC, datetime
from enum import IntEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_NAME = "LLM Project Definition"


class ConfidenceLevel(IntEnum):
    """Self-reported certainty about a section, 1 (very low) to 5 (very high)."""

    VERY_LOW = 1
    LOW = 2
    MEDIUM = 3
    HIGH = 4
    VERY_HIGH = 5

    @classmethod
    def from_value(cls, value: int) -> "ConfidenceLevel | None":
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def emoji(self) -> str:
        return CONFIDENCE_EMOJI[self]


# Order matters: the assembler checks markers from highest to lowest.
CONFIDENCE_EMOJI = {
    ConfidenceLevel.VERY_HIGH: "⭐",
    ConfidenceLevel.HIGH: "✅",
    ConfidenceLevel.MEDIUM: "\U0001f536",
    ConfidenceLevel.LOW: "\U0001f538",
    ConfidenceLevel.VERY_LOW: "⚠️",
}


class ProjectSection(BaseModel):
    """One titled section of the project definition."""

    model_config = ConfigDict(frozen=True)

    title: str
    content: str
    confidence: ConfidenceLevel = ConfidenceLevel.MEDIUM


class ProjectDefinition(BaseModel):
    """The finished project definition document."""

    model_config = ConfigDict(frozen=True)

    name: str = DEFAULT_PROJECT_NAME
    sections: list[ProjectSection] = Field(default_factory=list)
    generated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def get_section(self, title: str) -> ProjectSection | None:
        for section in self.sections:
            if section.title == title:
                return section
        return None

    def to_markdown(self) -> str:
        """Render the document as flat Markdown."""
        parts = [
            f"# {self.name}\n\n",
            f"*Generated on: {self.generated_at.strftime('%Y-%m-%d %H:%M:%S UTC')}*\n\n",
        ]
        for section in self.sections:
            parts.append(f"## {section.title} {section.confidence.emoji}\n\n")
            parts.append(f"{section.content.rstrip()}\n\n")
        return "".join(parts)

    def save_to_file(self, path: str | Path) -> None:
        Path(path).write_text(self.to_markdown(), encoding="utf-8")
        logger.info("Saved project definition to %s", path)
