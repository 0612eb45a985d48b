"""Project templates: named presets that seed a fresh context."""

from pydantic import BaseModel, ConfigDict, Field

from projector.models.context import Context
from projector.models.question import Question


class Template(BaseModel):
    """Read-only preset for a kind of LLM application.

    Applying a template sets hints, domain and metadata on a context. The
    `initial_questions` are not written into history; a session manager may
    serve them as seed questions ahead of the generation service.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    description: str = ""
    domain: str
    starting_hints: str
    initial_questions: list[Question] = Field(default_factory=list)
    metadata: dict[str, str] = Field(default_factory=dict)

    def apply_to_context(self, context: Context) -> Context:
        context.starting_hints = self.starting_hints
        context.domain = self.domain
        for key, value in self.metadata.items():
            context.add_metadata(key, value)
        return context
