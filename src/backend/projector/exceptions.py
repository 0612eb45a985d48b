"""Typed failures raised by the wizard engine.

Every failure the engine can produce is one of these classes, so callers
branch on the type rather than on message text:

- NavigationError: rewinding past the first answer or advancing past the last
- ParseError: the generation service ignored the question output contract
- StateError: an operation was called in a state that does not allow it
- QuestionBudgetExhausted: the question budget is spent (expected, not a crash)
- GenerationError: the generation service call itself failed
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from projector.models.session import SessionState


class ProjectorError(Exception):
    """Base class for all engine failures."""


class NavigationError(ProjectorError):
    """History navigation could not move the cursor."""


class AtStartError(NavigationError):
    """The cursor is already at the first answer."""

    def __init__(self) -> None:
        super().__init__("Cannot go back further")


class AtEndError(NavigationError):
    """The cursor is already at the last answer."""

    def __init__(self) -> None:
        super().__init__("Cannot go forward further")


class ParseError(ProjectorError):
    """Model output could not be turned into a valid question."""


class NotJsonError(ParseError):
    """Model output is not a single JSON value."""


class UnknownKindError(ParseError):
    """`question_type` is missing or not one of the known kinds."""

    def __init__(self, kind: object) -> None:
        self.kind = kind
        super().__init__(f"Invalid question type in model response: {kind!r}")


class MissingFieldError(ParseError):
    """A field required for the question kind is absent or malformed."""

    def __init__(self, field_name: str) -> None:
        self.field_name = field_name
        super().__init__(f"Missing or invalid '{field_name}' in model response")


class StateError(ProjectorError):
    """Operation is not valid in the session's current state."""

    def __init__(self, message: str, state: SessionState | None = None) -> None:
        self.state = state
        super().__init__(message)


class NoPendingQuestionError(StateError):
    """An answer was given but no question is waiting for one."""

    def __init__(self, state: SessionState | None = None) -> None:
        super().__init__("No current question to answer", state)


class QuestionBudgetExhausted(ProjectorError):
    """The session has asked its maximum number of questions."""

    def __init__(self, max_questions: int) -> None:
        self.max_questions = max_questions
        super().__init__(f"Maximum number of questions reached ({max_questions})")


class GenerationError(ProjectorError):
    """The generation service failed to produce text for a request."""
