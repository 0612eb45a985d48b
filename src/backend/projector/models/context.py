"""Session context: hints, persona and the question/answer history."""

from datetime import UTC, datetime
from enum import StrEnum
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from projector.exceptions import AtEndError, AtStartError
from projector.models.question import Question


class Persona(StrEnum):
    """Voice the wizard uses when asking questions."""

    DEFAULT = "Default"
    PRODUCT_MANAGER = "ProductManager"
    ARCHITECT = "Architect"
    UX_DESIGNER = "UxDesigner"
    COMPLIANCE_OFFICER = "ComplianceOfficer"

    @property
    def label(self) -> str:
        return _PERSONA_LABELS[self]

    @classmethod
    def from_name(cls, name: "str | Persona | None") -> "Persona":
        """Map a user-supplied persona name to a persona.

        Matching is case-insensitive and accepts the short aliases the CLI
        documents. Anything unrecognized maps to DEFAULT.
        """
        if isinstance(name, Persona):
            return name
        if not name:
            return cls.DEFAULT
        return _PERSONA_ALIASES.get(name.strip().lower(), cls.DEFAULT)


_PERSONA_LABELS = {
    Persona.DEFAULT: "Default",
    Persona.PRODUCT_MANAGER: "Product Manager",
    Persona.ARCHITECT: "LLM Architect",
    Persona.UX_DESIGNER: "UX Designer",
    Persona.COMPLIANCE_OFFICER: "Compliance Officer",
}

_PERSONA_ALIASES = {
    "default": Persona.DEFAULT,
    "pm": Persona.PRODUCT_MANAGER,
    "product": Persona.PRODUCT_MANAGER,
    "product_manager": Persona.PRODUCT_MANAGER,
    "productmanager": Persona.PRODUCT_MANAGER,
    "architect": Persona.ARCHITECT,
    "llm_architect": Persona.ARCHITECT,
    "llmarchitect": Persona.ARCHITECT,
    "ux": Persona.UX_DESIGNER,
    "designer": Persona.UX_DESIGNER,
    "ux_designer": Persona.UX_DESIGNER,
    "uxdesigner": Persona.UX_DESIGNER,
    "compliance": Persona.COMPLIANCE_OFFICER,
    "compliance_officer": Persona.COMPLIANCE_OFFICER,
    "complianceofficer": Persona.COMPLIANCE_OFFICER,
}


class Answer(BaseModel):
    """A recorded response, embedding its own copy of the question."""

    model_config = ConfigDict(frozen=True)

    question: Question
    response: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


class Context(BaseModel):
    """Everything the wizard knows about the project so far.

    `history` only ever grows at the tail. `current_index` is a navigation
    cursor kept separate from the append point, so rewinding never drops
    answered entries and they can be walked forward again.
    """

    starting_hints: str | None = None
    domain: str | None = None
    persona: Persona = Persona.DEFAULT
    history: list[Answer] = Field(default_factory=list)
    current_index: int = Field(default=0, ge=0)
    metadata: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_cursor(self) -> Self:
        if self.current_index > len(self.history):
            raise ValueError(
                f"current_index {self.current_index} is past the end of history ({len(self.history)})"
            )
        return self

    def record_answer(self, question: Question, response: str) -> Answer:
        """Append an answer and move the cursor to the append point."""
        answer = Answer(question=question, response=response)
        self.history.append(answer)
        self.current_index = len(self.history)
        return answer

    def rewind(self) -> Answer:
        """Move the cursor back one entry and return the answer there."""
        if self.current_index <= 0:
            raise AtStartError()
        self.current_index -= 1
        return self.history[self.current_index]

    def advance(self) -> Answer:
        """Move the cursor forward one entry and return the answer there."""
        if self.current_index >= len(self.history) - 1:
            raise AtEndError()
        self.current_index += 1
        return self.history[self.current_index]

    def current_answer(self) -> Answer | None:
        if self.current_index < len(self.history):
            return self.history[self.current_index]
        return None

    def add_metadata(self, key: str, value: str) -> None:
        self.metadata[key] = value

    def get_metadata(self, key: str) -> str | None:
        return self.metadata.get(key)

    def render_transcript(self) -> str:
        """Render hints, domain and the full history as prompt text.

        Every history entry is included regardless of the cursor, in
        insertion order.
        """
        parts: list[str] = []

        if self.starting_hints is not None:
            parts.append(f"Starting hints: {self.starting_hints}\n\n")

        if self.domain is not None:
            parts.append(f"Domain: {self.domain}\n\n")

        parts.append("Previous questions and answers:\n")
        for number, answer in enumerate(self.history, start=1):
            parts.append(
                f"Q{number}: {answer.question.text}\n"
                f"A{number}: {answer.response}\n\n"
            )

        return "".join(parts)
