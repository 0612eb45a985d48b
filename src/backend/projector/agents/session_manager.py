"""Session state machine for the wizard.

    Initial --start--> Questioning --budget spent--> Generating --finalize--> Completed
                            |                            |
                            +---------mark_error---------+---> Error

`finalize` may also be called straight from Questioning. Every failure is
raised as a typed exception from `projector.exceptions`; nothing is retried
here. One caller drives a manager at a time; there is no locking.
"""

import logging
from collections import deque
from collections.abc import Iterable
from pathlib import Path

from projector.agents.document_assembler import assemble_document
from projector.agents.llm_client import GenerationClient
from projector.agents.prompt_policy import build_document_messages, build_question_messages
from projector.agents.question_parser import parse_question_response
from projector.exceptions import (
    NoPendingQuestionError,
    ParseError,
    QuestionBudgetExhausted,
    StateError,
)
from projector.models.context import Answer
from projector.models.document import ProjectDefinition
from projector.models.question import Question
from projector.models.session import Session, SessionState

logger = logging.getLogger(__name__)

FINALIZABLE_STATES = {SessionState.QUESTIONING, SessionState.GENERATING}


class SessionManager:
    """Drives a Session through asking, answering, navigating and finalizing."""

    def __init__(
        self,
        session: Session,
        client: GenerationClient,
        seed_questions: Iterable[Question] | None = None,
    ) -> None:
        self.session = session
        self.client = client
        self.definition: ProjectDefinition | None = None
        self.last_error: str | None = None
        # Template questions served before asking the generation service
        self._seed_questions: deque[Question] = deque(seed_questions or ())

    # -- accessors -----------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self.session.state

    @property
    def current_question(self) -> Question | None:
        return self.session.current_question

    @property
    def question_count(self) -> int:
        return len(self.session.context.history)

    @property
    def max_questions(self) -> int:
        return self.session.max_questions

    @property
    def pending_seed_count(self) -> int:
        return len(self._seed_questions)

    def is_completed(self) -> bool:
        return self.session.state == SessionState.COMPLETED

    def has_error(self) -> bool:
        return self.session.state == SessionState.ERROR

    # -- transitions ---------------------------------------------------------

    def _require_state(self, *allowed: SessionState, action: str) -> None:
        if self.session.state not in allowed:
            expected = " or ".join(s.value for s in allowed)
            raise StateError(
                f"Cannot {action} in state {self.session.state.value}; expected {expected}",
                self.session.state,
            )

    def _transition(self, new_state: SessionState) -> None:
        if new_state != self.session.state:
            logger.info("Session state %s -> %s", self.session.state.value, new_state.value)
        self.session.state = new_state

    def start(self) -> None:
        """Enter Questioning."""
        self._transition(SessionState.QUESTIONING)

    async def request_next_question(self) -> Question:
        """Fetch the next question and make it the pending question.

        Raises:
            StateError: Not in Questioning, or a question is already pending.
            QuestionBudgetExhausted: The budget is spent; the session has
                moved to Generating and the service was not called.
            ParseError: The service reply broke the output contract. The
                session stays in Questioning and the caller may retry.
            GenerationError: The service call failed.
        """
        self._require_state(SessionState.QUESTIONING, action="request a question")

        if self.question_count >= self.session.max_questions:
            self._transition(SessionState.GENERATING)
            raise QuestionBudgetExhausted(self.session.max_questions)

        if self.session.current_question is not None:
            raise StateError(
                "A question is already pending; answer or discard it first",
                self.session.state,
            )

        if self._seed_questions:
            question = self._seed_questions.popleft()
            logger.debug("Serving seed question %s", question.id)
        else:
            context = self.session.context
            messages = build_question_messages(context.persona, context.render_transcript())
            raw = await self.client.generate(messages)
            try:
                question = parse_question_response(raw)
            except ParseError as exc:
                logger.warning("Rejected question from model: %s", exc)
                raise

        self.session.current_question = question
        return question

    def answer_current(self, response: str) -> Answer:
        """Record a response to the pending question.

        Always appends to history, including when the pending question was
        reached by navigating back.
        """
        self._require_state(SessionState.QUESTIONING, action="answer a question")
        question = self.session.current_question
        if question is None:
            raise NoPendingQuestionError(self.session.state)

        answer = self.session.context.record_answer(question, response)
        self.session.current_question = None
        logger.debug("Recorded answer %d for question %s", self.question_count, question.id)
        return answer

    def discard_pending(self) -> Question | None:
        """Drop the pending question, if any, and return it."""
        question = self.session.current_question
        self.session.current_question = None
        return question

    def go_back(self) -> Question:
        """Make the previous history entry's question the pending question.

        Raises:
            AtStartError: Already at the first entry.
        """
        self._require_state(SessionState.QUESTIONING, action="go back")
        answer = self.session.context.rewind()
        self.session.current_question = answer.question
        return answer.question

    def go_forward(self) -> Question:
        """Make the next history entry's question the pending question.

        Raises:
            AtEndError: Already at the last entry.
        """
        self._require_state(SessionState.QUESTIONING, action="go forward")
        answer = self.session.context.advance()
        self.session.current_question = answer.question
        return answer.question

    async def finalize(self) -> ProjectDefinition:
        """Ask the service for the document and assemble it.

        Each call contacts the service again; nothing is cached. If the
        service call fails the session stays in Generating and finalize can
        be retried.
        """
        self._require_state(*FINALIZABLE_STATES, action="finalize")
        self._transition(SessionState.GENERATING)
        self.session.current_question = None

        context = self.session.context
        messages = build_document_messages(context.persona, context.render_transcript())
        raw = await self.client.generate(messages)

        document = assemble_document(raw)
        definition = document.to_definition()
        logger.info(
            "Assembled project definition %r with %d sections",
            definition.name,
            len(definition.sections),
        )

        self.definition = definition
        self.session.output = definition.to_markdown()
        self._transition(SessionState.COMPLETED)
        return definition

    def mark_error(self, reason: str) -> None:
        """Move the session to the terminal Error state."""
        self._require_state(*FINALIZABLE_STATES, action="mark the session as failed")
        self.last_error = reason
        self.session.current_question = None
        logger.error("Session failed: %s", reason)
        self._transition(SessionState.ERROR)

    def export_output(self, path: str | Path) -> None:
        """Write the finalized Markdown document to a file."""
        if self.session.output is None:
            raise StateError("No output to export", self.session.state)
        Path(path).write_text(self.session.output, encoding="utf-8")
        logger.info("Exported project definition to %s", path)
