"""Generation service client.

The engine talks to the text-generation service through one contract,
`GenerationClient`: an ordered list of role-tagged messages goes in, a
single text blob comes out. `AnthropicGenerationClient` is the production
implementation; tests substitute scripted fakes.
"""

import logging
import os
from typing import Any, Literal, Protocol, runtime_checkable

import anthropic
from pydantic import BaseModel, Field

from projector.config import Settings
from projector.exceptions import GenerationError

logger = logging.getLogger(__name__)

CLIENT_CONTRACT_VERSION = "1"

# Map friendly names to Anthropic model identifiers
MODEL_ID_MAP = {
    "haiku": "claude-3-5-haiku-20241022",
    "sonnet": "claude-sonnet-4-20250514",
    "opus": "claude-opus-4-20250514",
}


class ChatMessage(BaseModel):
    """A role-tagged prompt message."""

    role: Literal["system", "user"]
    content: str


class GenerationConfig(BaseModel):
    """Model, sampling and credential settings for a generation client."""

    model: str = "sonnet"
    temperature: float = Field(default=0.7, ge=0.0, le=1.0)
    max_tokens: int = Field(default=2000, gt=0)
    api_key: str | None = Field(default=None, repr=False)

    @classmethod
    def from_settings(cls, settings: Settings) -> "GenerationConfig":
        return cls(
            model=settings.generation_model,
            temperature=settings.generation_temperature,
            max_tokens=settings.generation_max_tokens,
            api_key=settings.anthropic_api_key,
        )

    @property
    def model_id(self) -> str:
        return MODEL_ID_MAP.get(self.model, self.model)


@runtime_checkable
class GenerationClient(Protocol):
    """Contract for anything that turns prompt messages into text."""

    async def generate(self, messages: list[ChatMessage]) -> str:
        """Return the service's text reply, or raise GenerationError."""
        ...


def split_messages(messages: list[ChatMessage]) -> tuple[str, list[dict[str, str]]]:
    """Split messages into the system prompt and the conversational turns."""
    system_parts = [m.content for m in messages if m.role == "system"]
    turns = [{"role": m.role, "content": m.content} for m in messages if m.role != "system"]
    return "\n\n".join(system_parts), turns


def _extract_text(response: Any) -> str:
    if not response or not hasattr(response, "content"):
        return ""
    parts: list[str] = []
    for block in response.content:
        if isinstance(block, dict):
            if block.get("type") == "text":
                parts.append(block.get("text") or "")
            continue
        if getattr(block, "type", None) == "text":
            parts.append(getattr(block, "text", "") or "")
    return "".join(parts)


class AnthropicGenerationClient:
    """Generation client backed by the Anthropic Messages API."""

    def __init__(self, config: GenerationConfig | None = None) -> None:
        self.config = config or GenerationConfig()
        self._client: anthropic.AsyncAnthropic | None = None

    def is_available(self) -> bool:
        return bool(self.config.api_key or os.getenv("ANTHROPIC_API_KEY"))

    def _get_client(self) -> anthropic.AsyncAnthropic:
        if not self._client:
            if self.config.api_key:
                self._client = anthropic.AsyncAnthropic(api_key=self.config.api_key)
            else:
                self._client = anthropic.AsyncAnthropic()
        return self._client

    async def generate(self, messages: list[ChatMessage]) -> str:
        system_prompt, turns = split_messages(messages)
        if not turns:
            raise GenerationError("At least one user message is required")

        logger.debug(
            "Sending generation request (model=%s, messages=%d)",
            self.config.model_id,
            len(messages),
        )
        try:
            response = await self._get_client().messages.create(
                model=self.config.model_id,
                max_tokens=self.config.max_tokens,
                temperature=self.config.temperature,
                system=system_prompt,
                messages=turns,
            )
        except anthropic.AnthropicError as exc:
            logger.warning("Generation request failed: %s", exc)
            raise GenerationError(f"Generation request failed: {exc}") from exc

        text = _extract_text(response)
        if not text.strip():
            raise GenerationError("No response content from model")
        return text
