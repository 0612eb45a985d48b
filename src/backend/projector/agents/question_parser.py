"""Turn raw generation output into a validated question.

The service is asked for a single JSON object, but replies often arrive
wrapped in Markdown code fences or padded with whitespace. Parsing is
lenient about that noise and strict about the payload: the result is either
a fully valid question or a typed ParseError, never a partial question.
"""

import json
import logging
import re
from typing import Any

import ulid

from projector.exceptions import MissingFieldError, NotJsonError, UnknownKindError
from projector.models.question import (
    FreeTextQuestion,
    MultipleChoiceQuestion,
    Question,
    QuestionKind,
    RatingScaleQuestion,
    YesNoQuestion,
)

logger = logging.getLogger(__name__)

_OPENING_FENCE_RE = re.compile(r"^```[\w+-]*[ \t]*\n?")
_CLOSING_FENCE_RE = re.compile(r"\n?[ \t]*```$")


def new_question_id() -> str:
    """Time-ordered question id (ULIDs lead with a millisecond timestamp)."""
    return f"q_{ulid.new().str.lower()}"


def strip_code_fences(raw: str) -> str:
    """Remove surrounding whitespace and Markdown fence lines.

    Only a fence at the very start and one at the very end are removed;
    backticks inside the payload are left alone.
    """
    cleaned = raw.strip()
    cleaned = _OPENING_FENCE_RE.sub("", cleaned)
    cleaned = _CLOSING_FENCE_RE.sub("", cleaned)
    return cleaned.strip()


def _read_options(payload: dict[str, Any]) -> list[str]:
    options = payload.get("options")
    if not isinstance(options, list):
        raise MissingFieldError("options")
    return [option for option in options if isinstance(option, str)]


def _is_non_negative_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _read_scale(payload: dict[str, Any]) -> tuple[int, int]:
    scale = payload.get("scale")
    if not isinstance(scale, list) or len(scale) != 2:
        raise MissingFieldError("scale")
    low, high = scale
    if not (_is_non_negative_int(low) and _is_non_negative_int(high)):
        raise MissingFieldError("scale")
    # Ordering of low/high is left to the caller.
    return low, high


def parse_question_response(raw: str, question_id: str | None = None) -> Question:
    """Parse a generation reply into a question.

    Args:
        raw: Text returned by the generation service.
        question_id: Id to assign; a fresh time-ordered id by default.

    Returns:
        A question whose payload matches its kind.

    Raises:
        NotJsonError: The cleaned text is not a JSON value.
        UnknownKindError: `question_type` is not a known kind.
        MissingFieldError: `question_text` or a kind-specific field is
            missing or malformed.
    """
    cleaned = strip_code_fences(raw or "")
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise NotJsonError(f"Failed to parse model response as JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise UnknownKindError(None)

    raw_kind = payload.get("question_type")
    try:
        kind = QuestionKind(raw_kind)
    except ValueError:
        raise UnknownKindError(raw_kind) from None

    text = payload.get("question_text")
    if not isinstance(text, str):
        raise MissingFieldError("question_text")

    help_text = payload.get("help_text")
    common = {
        "id": question_id or new_question_id(),
        "text": text,
        "help_text": help_text if isinstance(help_text, str) else None,
    }

    match kind:
        case QuestionKind.MULTIPLE_CHOICE:
            question: Question = MultipleChoiceQuestion(options=_read_options(payload), **common)
        case QuestionKind.YES_NO:
            question = YesNoQuestion(**common)
        case QuestionKind.RATING_SCALE:
            question = RatingScaleQuestion(scale=_read_scale(payload), **common)
        case QuestionKind.FREE_TEXT:
            question = FreeTextQuestion(**common)

    logger.debug("Parsed %s question %s", kind.value, question.id)
    return question
