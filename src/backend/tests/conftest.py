"""Test fixtures."""

import json

import pytest

from projector.agents.llm_client import ChatMessage
from projector.exceptions import GenerationError
from projector.models.question import FreeTextQuestion, MultipleChoiceQuestion, YesNoQuestion


class ScriptedClient:
    """Generation client that replays canned replies and records requests."""

    def __init__(self, replies: list[str | Exception] | None = None):
        self.replies = list(replies or [])
        self.requests: list[list[ChatMessage]] = []

    def queue(self, *replies: str | Exception) -> None:
        self.replies.extend(replies)

    async def generate(self, messages: list[ChatMessage]) -> str:
        self.requests.append(messages)
        if not self.replies:
            raise GenerationError("No scripted reply left")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    @property
    def call_count(self) -> int:
        return len(self.requests)


@pytest.fixture
def question_reply():
    """Build a JSON question reply, FreeText unless overridden."""
    def build(**overrides) -> str:
        payload = {"question_type": "FreeText", "question_text": "What problem does it solve?"}
        payload.update(overrides)
        return json.dumps(payload)

    return build


@pytest.fixture
def document_reply():
    return (
        "# Support Bot\n"
        "\n"
        "## Project Name and Short Summary (Confidence: 5/5)\n"
        "A chatbot for a bike shop.\n"
        "\n"
        "## Use Cases and Goals (Confidence: 2/5)\n"
        "Answer opening hours questions.\n"
    )


@pytest.fixture
def scripted_client():
    """Empty scripted client; tests queue replies as needed."""
    return ScriptedClient()


@pytest.fixture
def free_text_question():
    return FreeTextQuestion(id="q_free", text="What problem does it solve?")


@pytest.fixture
def yes_no_question():
    return YesNoQuestion(id="q_yes_no", text="Ship it?")


@pytest.fixture
def choice_question():
    return MultipleChoiceQuestion(
        id="q_choice",
        text="Which channel?",
        options=["Web", "Mobile"],
        help_text="Pick the busiest one.",
    )
