"""Wizard data models.

Questions, the answer history, the finished document, templates and the
persisted session snapshot.
"""

from projector.models.context import Answer, Context, Persona
from projector.models.document import (
    DEFAULT_PROJECT_NAME,
    ConfidenceLevel,
    ProjectDefinition,
    ProjectSection,
)
from projector.models.question import (
    YES_NO_OPTIONS,
    FreeTextQuestion,
    MultipleChoiceQuestion,
    Question,
    QuestionKind,
    RatingScaleQuestion,
    YesNoQuestion,
    question_adapter,
)
from projector.models.session import DEFAULT_MAX_QUESTIONS, Session, SessionState
from projector.models.template import Template

__all__ = [
    # Questions
    "FreeTextQuestion",
    "MultipleChoiceQuestion",
    "Question",
    "QuestionKind",
    "RatingScaleQuestion",
    "YES_NO_OPTIONS",
    "YesNoQuestion",
    "question_adapter",
    # Context
    "Answer",
    "Context",
    "Persona",
    # Document
    "ConfidenceLevel",
    "DEFAULT_PROJECT_NAME",
    "ProjectDefinition",
    "ProjectSection",
    # Session
    "DEFAULT_MAX_QUESTIONS",
    "Session",
    "SessionState",
    # Templates
    "Template",
]
