"""Unit tests for persona prompts and message building."""

import pytest

from projector.agents.prompt_policy import (
    DOCUMENT_SECTIONS,
    DOCUMENT_SYSTEM_SUFFIX,
    PERSONA_SYSTEM_PROMPTS,
    build_document_messages,
    build_question_messages,
    hydrate_prompt,
    load_prompt,
    system_prompt_for,
)
from projector.models.context import Context, Persona
from projector.models.question import FreeTextQuestion

TRANSCRIPT = "Starting hints: A bike shop bot\n\nPrevious questions and answers:\n"


class TestSystemPrompts:
    """Tests for persona system prompts."""

    def test_every_persona_has_a_prompt(self):
        assert set(PERSONA_SYSTEM_PROMPTS) == set(Persona)

    def test_prompts_are_distinct(self):
        assert len(set(PERSONA_SYSTEM_PROMPTS.values())) == len(Persona)

    @pytest.mark.parametrize(
        "persona, phrase",
        [
            (Persona.PRODUCT_MANAGER, "Product Manager"),
            (Persona.ARCHITECT, "LLM Architect"),
            (Persona.UX_DESIGNER, "UX Designer"),
            (Persona.COMPLIANCE_OFFICER, "Compliance Officer"),
            (Persona.DEFAULT, "project definition wizard"),
        ],
    )
    def test_persona_voice(self, persona, phrase):
        assert phrase in system_prompt_for(persona)

    def test_unknown_persona_uses_default(self):
        assert system_prompt_for("pirate") == PERSONA_SYSTEM_PROMPTS[Persona.DEFAULT]
        assert system_prompt_for(None) == PERSONA_SYSTEM_PROMPTS[Persona.DEFAULT]


class TestHydratePrompt:
    """Tests for placeholder substitution."""

    def test_replaces_placeholders(self):
        assert hydrate_prompt("Hi {{name}}, {{ greeting }}", {"name": "Ada", "greeting": "hello"}) == (
            "Hi Ada, hello"
        )

    def test_missing_values_become_empty(self):
        assert hydrate_prompt("[{{missing}}]", {}) == "[]"

    def test_single_pass(self):
        """Placeholder-looking text inside a value is not expanded again."""
        result = hydrate_prompt("{{a}}", {"a": "{{b}}", "b": "nope"})
        assert result == "{{b}}"

    def test_load_prompt_is_stripped(self):
        prompt = load_prompt("next_question.txt")
        assert prompt == prompt.strip()
        assert "{{transcript}}" in prompt


class TestQuestionMessages:
    """Tests for build_question_messages."""

    def test_system_then_user(self):
        messages = build_question_messages(Persona.ARCHITECT, TRANSCRIPT)

        assert [m.role for m in messages] == ["system", "user"]
        assert messages[0].content == PERSONA_SYSTEM_PROMPTS[Persona.ARCHITECT]

    def test_transcript_embedded_verbatim(self):
        messages = build_question_messages(Persona.DEFAULT, TRANSCRIPT)
        assert TRANSCRIPT in messages[1].content
        assert "{{" not in messages[1].content

    def test_output_contract_keys(self):
        content = build_question_messages(Persona.DEFAULT, TRANSCRIPT)[1].content
        for key in ["question_type", "question_text", "options", "scale", "help_text"]:
            assert key in content
        for kind in ["MultipleChoice", "YesNo", "RatingScale", "FreeText"]:
            assert kind in content

    def test_transcript_with_braces_is_not_rewritten(self):
        context = Context()
        context.record_answer(FreeTextQuestion(id="q1", text="Template?"), "Use {{transcript}} here")

        transcript = context.render_transcript()
        messages = build_question_messages(Persona.DEFAULT, transcript)

        assert "A1: Use {{transcript}} here" in messages[1].content

    def test_same_input_same_messages(self):
        first = build_question_messages("ux", TRANSCRIPT)
        second = build_question_messages("ux", TRANSCRIPT)
        assert first == second


class TestDocumentMessages:
    """Tests for build_document_messages."""

    def test_system_prompt_has_document_suffix(self):
        messages = build_document_messages(Persona.COMPLIANCE_OFFICER, TRANSCRIPT)

        assert [m.role for m in messages] == ["system", "user"]
        assert messages[0].content == (
            f"{PERSONA_SYSTEM_PROMPTS[Persona.COMPLIANCE_OFFICER]} {DOCUMENT_SYSTEM_SUFFIX}"
        )

    def test_sections_listed_in_order(self):
        content = build_document_messages(Persona.DEFAULT, TRANSCRIPT)[1].content

        positions = [content.index(f"{n}. {title}") for n, title in enumerate(DOCUMENT_SECTIONS, start=1)]
        assert positions == sorted(positions)
        assert len(DOCUMENT_SECTIONS) == 10

    def test_asks_for_title_and_confidence_markers(self):
        content = build_document_messages(Persona.DEFAULT, TRANSCRIPT)[1].content
        assert "# <Project Name>" in content
        assert "(Confidence: n/5)" in content
        assert TRANSCRIPT in content
