"""Assemble a project definition from sectioned Markdown.

Unlike question parsing, assembly never fails: a malformed document is
still useful content. Input without headings yields no sections and the
fallback title.

Rules:
- The title is the first `# ` line; otherwise DEFAULT_PROJECT_NAME.
- Each `## ` line starts a section. Its confidence comes from an emoji
  marker (checked highest to lowest), then a `(Confidence: n/5)` marker,
  else MEDIUM. All markers are removed from the stored title.
- Lines after a section heading belong to that section; lines before the
  first section heading are dropped.
- Blank lines at the start and end of a section body are trimmed. A
  section with an empty title or body is dropped.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime

from projector.models.document import (
    CONFIDENCE_EMOJI,
    DEFAULT_PROJECT_NAME,
    ConfidenceLevel,
    ProjectDefinition,
    ProjectSection,
)

logger = logging.getLogger(__name__)

TITLE_PREFIX = "# "
SECTION_PREFIX = "## "

_CONFIDENCE_TEXT_RE = re.compile(r"\(\s*confidence\s*:\s*([1-5])\s*/\s*5\s*\)", re.IGNORECASE)
# Bare warning sign, for replies that drop the emoji variation selector
_BARE_WARNING = "⚠"
_MARKER_RE = re.compile(
    r"\s*(?:"
    + "|".join(re.escape(emoji) for emoji in CONFIDENCE_EMOJI.values())
    + rf"|{_BARE_WARNING}\ufe0f?|\ufe0f|{_CONFIDENCE_TEXT_RE.pattern})",
    re.IGNORECASE,
)


@dataclass
class AssembledDocument:
    """Title and ordered sections recovered from a Markdown reply."""

    title: str
    sections: list[ProjectSection] = field(default_factory=list)

    def to_definition(self, generated_at: datetime | None = None) -> ProjectDefinition:
        if generated_at is None:
            return ProjectDefinition(name=self.title, sections=self.sections)
        return ProjectDefinition(name=self.title, sections=self.sections, generated_at=generated_at)


def resolve_confidence(heading: str) -> ConfidenceLevel:
    """Resolve a section heading's confidence marker."""
    for level, emoji in CONFIDENCE_EMOJI.items():
        if emoji in heading:
            return level
    if _BARE_WARNING in heading:
        return ConfidenceLevel.VERY_LOW

    match = _CONFIDENCE_TEXT_RE.search(heading)
    if match:
        return ConfidenceLevel(int(match.group(1)))

    return ConfidenceLevel.MEDIUM


def strip_confidence_markers(heading: str) -> str:
    """Remove confidence markers and the whitespace in front of each one."""
    return _MARKER_RE.sub("", heading).strip()


def _trim_blank_lines(lines: list[str]) -> list[str]:
    start, end = 0, len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return lines[start:end]


class _SectionBuffer:
    def __init__(self, heading: str) -> None:
        self.title = strip_confidence_markers(heading)
        self.confidence = resolve_confidence(heading)
        self.lines: list[str] = []

    def build(self) -> ProjectSection | None:
        body = _trim_blank_lines(self.lines)
        if not self.title or not body:
            return None
        content = "".join(f"{line}\n" for line in body)
        return ProjectSection(title=self.title, content=content, confidence=self.confidence)


def assemble_document(markdown: str) -> AssembledDocument:
    """Split a Markdown reply into a title and confidence-scored sections."""
    lines = (markdown or "").splitlines()

    title = next(
        (line[len(TITLE_PREFIX):].strip() for line in lines if line.startswith(TITLE_PREFIX)),
        "",
    ) or DEFAULT_PROJECT_NAME

    sections: list[ProjectSection] = []
    current: _SectionBuffer | None = None

    def flush() -> None:
        if current is None:
            return
        section = current.build()
        if section:
            sections.append(section)
        else:
            logger.debug("Dropping empty section %r", current.title)

    for line in lines:
        if line.startswith(SECTION_PREFIX):
            flush()
            current = _SectionBuffer(line[len(SECTION_PREFIX):].strip())
        elif current is not None:
            current.lines.append(line)
    flush()

    if not sections:
        logger.warning("No sections found in generated document")

    return AssembledDocument(title=title, sections=sections)


def assemble_project_definition(markdown: str) -> ProjectDefinition:
    return assemble_document(markdown).to_definition()
