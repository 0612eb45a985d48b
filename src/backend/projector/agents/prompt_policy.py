"""Prompt policy: persona + transcript -> prompt messages.

Pure functions. The persona fixes the system message voice; the user
message embeds the transcript verbatim together with the output contract
the parser and assembler expect back.
"""

import re
from functools import lru_cache
from pathlib import Path
from typing import Any

from projector.agents.llm_client import ChatMessage
from projector.models.context import Persona

# Paths to prompt files
PROMPTS_DIR = Path(__file__).parent / "prompts"

PERSONA_SYSTEM_PROMPTS = {
    Persona.DEFAULT: (
        "You are an intelligent project definition wizard that helps users define LLM-based applications. "
        "Generate thoughtful, context-aware questions to understand the user's project requirements. "
        "Your questions should build upon previous answers and help create a comprehensive project definition."
    ),
    Persona.PRODUCT_MANAGER: (
        "You are a Product Manager helping to define an LLM-based application. "
        "Ask questions focused on user needs, market fit, success metrics, and product roadmap. "
        "Your goal is to ensure the project has clear objectives and delivers value to users."
    ),
    Persona.ARCHITECT: (
        "You are an LLM Architect helping to define an LLM-based application. "
        "Ask technical questions about model selection, prompt engineering, data requirements, and system architecture. "
        "Your goal is to ensure the project is technically feasible and optimally designed."
    ),
    Persona.UX_DESIGNER: (
        "You are a UX Designer helping to define an LLM-based application. "
        "Ask questions about user experience, interface design, user flows, and accessibility. "
        "Your goal is to ensure the project delivers an excellent user experience."
    ),
    Persona.COMPLIANCE_OFFICER: (
        "You are a Compliance Officer helping to define an LLM-based application. "
        "Ask questions about data privacy, ethical considerations, regulatory requirements, and risk mitigation. "
        "Your goal is to ensure the project complies with relevant regulations and ethical standards."
    ),
}

DOCUMENT_SYSTEM_SUFFIX = (
    "Based on the user's answers to your questions, write a comprehensive project definition "
    "document in Markdown format."
)

DOCUMENT_SECTIONS = [
    "Project Name and Short Summary",
    "Use Cases and Goals",
    "Target User Profiles",
    "Required Inputs and Expected Outputs",
    "Functional Components and Modules",
    "Prompt Engineering Strategy",
    "Dataset Needs and Sources",
    "Evaluation Metrics and Success Criteria",
    "Scalability and Deployment Recommendations",
    "Ethical and Bias Considerations",
]


@lru_cache
def load_prompt(filename: str) -> str:
    """Load a prompt from the prompts directory."""
    prompt_path = PROMPTS_DIR / filename
    with open(prompt_path, encoding="utf-8") as f:
        return f.read().strip()


def hydrate_prompt(template: str, values: dict[str, Any]) -> str:
    """Replace {{placeholders}} in a prompt with values.

    Substitution is a single pass, so placeholder-like text inside a value
    is left as is.
    """
    def replace_placeholder(match: re.Match) -> str:
        value = values.get(match.group(1).strip(), "")
        return "" if value is None else str(value)

    return re.sub(r"\{\{(\s*\w+\s*)\}\}", replace_placeholder, template)


def system_prompt_for(persona: Persona | str | None) -> str:
    return PERSONA_SYSTEM_PROMPTS[Persona.from_name(persona)]


def build_question_messages(persona: Persona | str | None, transcript: str) -> list[ChatMessage]:
    """Messages asking the service for the next question as JSON."""
    user_prompt = hydrate_prompt(load_prompt("next_question.txt"), {"transcript": transcript})
    return [
        ChatMessage(role="system", content=system_prompt_for(persona)),
        ChatMessage(role="user", content=user_prompt),
    ]


def build_document_messages(persona: Persona | str | None, transcript: str) -> list[ChatMessage]:
    """Messages asking the service for the sectioned Markdown document."""
    sections = "\n".join(
        f"{number}. {title}" for number, title in enumerate(DOCUMENT_SECTIONS, start=1)
    )
    user_prompt = hydrate_prompt(
        load_prompt("project_definition.txt"),
        {"transcript": transcript, "sections": sections},
    )
    return [
        ChatMessage(role="system", content=f"{system_prompt_for(persona)} {DOCUMENT_SYSTEM_SUFFIX}"),
        ChatMessage(role="user", content=user_prompt),
    ]
