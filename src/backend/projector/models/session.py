"""Session snapshot model: the unit of persistence and resumption."""

import logging
import os
import tempfile
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, Field

from projector.models.context import Context
from projector.models.question import Question
from projector.models.template import Template

logger = logging.getLogger(__name__)

DEFAULT_MAX_QUESTIONS = 10


class SessionState(StrEnum):
    """Lifecycle of a wizard session."""

    INITIAL = "Initial"
    QUESTIONING = "Questioning"
    GENERATING = "Generating"
    COMPLETED = "Completed"
    ERROR = "Error"


class Session(BaseModel):
    """A wizard session.

    `current_question` and `output` are transient: they are excluded from
    the snapshot, so a resumed session never has a pending question or a
    cached document.
    """

    context: Context = Field(default_factory=Context)
    state: SessionState = SessionState.INITIAL
    max_questions: int = Field(default=DEFAULT_MAX_QUESTIONS, ge=0)
    current_question: Question | None = Field(default=None, exclude=True)
    output: str | None = Field(default=None, exclude=True)

    @classmethod
    def from_template(cls, template: Template, max_questions: int = DEFAULT_MAX_QUESTIONS) -> "Session":
        context = template.apply_to_context(Context())
        return cls(context=context, max_questions=max_questions)

    def to_snapshot(self) -> str:
        return self.model_dump_json(indent=2)

    @classmethod
    def from_snapshot(cls, data: str | bytes) -> "Session":
        """Restore a session; any pending question or output in `data` is dropped."""
        session = cls.model_validate_json(data)
        session.current_question = None
        session.output = None
        return session

    def save_to_file(self, path: str | Path) -> None:
        """Write the snapshot, replacing any existing file in one step."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(self.to_snapshot())
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.info("Saved session to %s", path)

    @classmethod
    def load_from_file(cls, path: str | Path) -> "Session":
        session = cls.from_snapshot(Path(path).read_text(encoding="utf-8"))
        logger.info(
            "Loaded session from %s (state=%s, answers=%d)",
            path,
            session.state.value,
            len(session.context.history),
        )
        return session
