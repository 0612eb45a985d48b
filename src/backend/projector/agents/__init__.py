"""Wizard engine: prompts, generation client, parsers and session state machine."""

from projector.agents.document_assembler import (
    AssembledDocument,
    assemble_document,
    assemble_project_definition,
)
from projector.agents.llm_client import (
    AnthropicGenerationClient,
    ChatMessage,
    GenerationClient,
    GenerationConfig,
)
from projector.agents.prompt_policy import build_document_messages, build_question_messages
from projector.agents.question_parser import parse_question_response
from projector.agents.session_manager import SessionManager

__all__ = [
    "AnthropicGenerationClient",
    "AssembledDocument",
    "ChatMessage",
    "GenerationClient",
    "GenerationConfig",
    "SessionManager",
    "assemble_document",
    "assemble_project_definition",
    "build_document_messages",
    "build_question_messages",
    "parse_question_response",
]
