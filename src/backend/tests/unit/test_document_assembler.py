"""Unit tests for assembling project definitions from Markdown."""

from datetime import UTC, datetime

import pytest

from projector.agents.document_assembler import (
    assemble_document,
    assemble_project_definition,
    resolve_confidence,
    strip_confidence_markers,
)
from projector.models.document import (
    DEFAULT_PROJECT_NAME,
    ConfidenceLevel,
    ProjectDefinition,
    ProjectSection,
)


class TestConfidenceMarkers:
    """Tests for reading and stripping confidence markers."""

    @pytest.mark.parametrize(
        "heading, expected",
        [
            ("Summary ⭐", ConfidenceLevel.VERY_HIGH),
            ("Summary ✅", ConfidenceLevel.HIGH),
            ("Summary \U0001f536", ConfidenceLevel.MEDIUM),
            ("Summary \U0001f538", ConfidenceLevel.LOW),
            ("Summary ⚠️", ConfidenceLevel.VERY_LOW),
            ("Summary ⚠", ConfidenceLevel.VERY_LOW),
            ("Summary (Confidence: 4/5)", ConfidenceLevel.HIGH),
            ("Summary (confidence:1/5)", ConfidenceLevel.VERY_LOW),
            ("Summary", ConfidenceLevel.MEDIUM),
        ],
    )
    def test_resolve_confidence(self, heading, expected):
        assert resolve_confidence(heading) == expected

    def test_highest_emoji_wins(self):
        assert resolve_confidence("Mixed ⚠️ ⭐") == ConfidenceLevel.VERY_HIGH

    def test_emoji_beats_text_marker(self):
        assert resolve_confidence("Mixed ✅ (Confidence: 1/5)") == ConfidenceLevel.HIGH

    @pytest.mark.parametrize(
        "heading",
        ["Use Cases ⭐", "Use Cases (Confidence: 3/5)", "Use Cases ⚠️", "Use Cases ✅ ", "Use Cases ⚠"],
    )
    def test_strip_markers(self, heading):
        assert strip_confidence_markers(heading) == "Use Cases"

    def test_inner_spacing_kept(self):
        assert strip_confidence_markers("Bar  Baz ⭐") == "Bar  Baz"
        assert strip_confidence_markers("Bar ⭐ Baz") == "Bar Baz"


class TestAssembleDocument:
    """Tests for assemble_document."""

    def test_emoji_example(self):
        document = assemble_document("# Proj\n## A ⭐\nHello\n## B\nWorld")

        assert document.title == "Proj"
        assert [s.title for s in document.sections] == ["A", "B"]
        assert [s.content for s in document.sections] == ["Hello\n", "World\n"]
        assert [s.confidence for s in document.sections] == [
            ConfidenceLevel.VERY_HIGH,
            ConfidenceLevel.MEDIUM,
        ]

    def test_blank_line_between_sections_not_kept(self):
        document = assemble_document("# Foo\n\n## Bar ⭐\nHello\n\n## Baz\nWorld\n")

        assert document.title == "Foo"
        assert [(s.title, s.content, s.confidence) for s in document.sections] == [
            ("Bar", "Hello\n", ConfidenceLevel.VERY_HIGH),
            ("Baz", "World\n", ConfidenceLevel.MEDIUM),
        ]

    def test_text_markers(self, document_reply):
        document = assemble_document(document_reply)

        assert document.title == "Support Bot"
        summary, use_cases = document.sections
        assert summary.title == "Project Name and Short Summary"
        assert summary.confidence == ConfidenceLevel.VERY_HIGH
        assert summary.content == "A chatbot for a bike shop.\n"
        assert use_cases.confidence == ConfidenceLevel.LOW

    def test_no_headings(self):
        document = assemble_document("Just some prose.\nNo structure at all.")
        assert document.title == DEFAULT_PROJECT_NAME
        assert document.sections == []

    def test_empty_input(self):
        document = assemble_document("")
        assert document.title == DEFAULT_PROJECT_NAME
        assert document.sections == []

    def test_missing_title_uses_fallback(self):
        document = assemble_document("## Only Section\nBody")
        assert document.title == DEFAULT_PROJECT_NAME
        assert len(document.sections) == 1

    def test_only_first_title_used(self):
        document = assemble_document("# First\n# Second\n## A\nBody")
        assert document.title == "First"

    def test_preamble_is_dropped(self):
        document = assemble_document("# Proj\nIntro text\n\n## A\nBody")
        assert document.sections[0].content == "Body\n"

    def test_empty_sections_are_dropped(self):
        document = assemble_document("# Proj\n## Empty\n\n\n## Full\nBody\n## ⭐\nOrphan body")
        assert [s.title for s in document.sections] == ["Full"]

    def test_multiline_body_keeps_inner_blank_lines(self):
        document = assemble_document("## A\n\nLine one\n\n- bullet\n\n")
        assert document.sections[0].content == "Line one\n\n- bullet\n"

    def test_deeper_headings_stay_in_body(self):
        document = assemble_document("## A\n### Detail\ntext")
        assert len(document.sections) == 1
        assert document.sections[0].content == "### Detail\ntext\n"

    def test_section_order_preserved(self):
        document = assemble_document("## C\nc\n## A\na\n## B\nb")
        assert [s.title for s in document.sections] == ["C", "A", "B"]


class TestProjectDefinition:
    """Tests for the assembled definition and its Markdown form."""

    def test_assemble_project_definition(self, document_reply):
        definition = assemble_project_definition(document_reply)
        assert isinstance(definition, ProjectDefinition)
        assert definition.name == "Support Bot"
        assert definition.get_section("Use Cases and Goals") is not None
        assert definition.get_section("Missing") is None

    def test_to_markdown(self):
        definition = ProjectDefinition(
            name="Proj",
            sections=[
                ProjectSection(title="A", content="Hello\n", confidence=ConfidenceLevel.VERY_HIGH),
                ProjectSection(title="B", content="World\n", confidence=ConfidenceLevel.LOW),
            ],
            generated_at=datetime(2024, 5, 1, 12, 30, 0, tzinfo=UTC),
        )

        assert definition.to_markdown() == (
            "# Proj\n\n"
            "*Generated on: 2024-05-01 12:30:00 UTC*\n\n"
            "## A ⭐\n\nHello\n\n"
            "## B \U0001f538\n\nWorld\n\n"
        )

    def test_markdown_reassembles_to_same_sections(self, document_reply):
        definition = assemble_project_definition(document_reply)
        again = assemble_project_definition(definition.to_markdown())
        assert again.name == definition.name
        assert again.sections == definition.sections

    def test_save_to_file(self, tmp_path, document_reply):
        definition = assemble_project_definition(document_reply)
        path = tmp_path / "definition.md"

        definition.save_to_file(path)

        assert path.read_text(encoding="utf-8") == definition.to_markdown()
