"""Question models.

A question is a closed tagged variant: the `kind` tag alone decides which
payload fields exist. Multiple choice carries `options`, yes/no carries the
fixed Yes/No options, rating scale carries `scale`, free text carries
neither.
"""

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, TypeAdapter, field_validator

YES_NO_OPTIONS = ["Yes", "No"]


class QuestionKind(StrEnum):
    """Kinds of question the wizard can ask."""

    MULTIPLE_CHOICE = "MultipleChoice"
    YES_NO = "YesNo"
    RATING_SCALE = "RatingScale"
    FREE_TEXT = "FreeText"

    @property
    def label(self) -> str:
        return {
            QuestionKind.MULTIPLE_CHOICE: "Multiple Choice",
            QuestionKind.YES_NO: "Yes/No",
            QuestionKind.RATING_SCALE: "Rating Scale",
            QuestionKind.FREE_TEXT: "Free Text",
        }[self]


class QuestionBase(BaseModel):
    """Fields shared by every question kind."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Stable identifier for the question")
    text: str = Field(description="The question shown to the user")
    help_text: str | None = Field(default=None, description="Optional hint shown under the question")


class MultipleChoiceQuestion(QuestionBase):
    kind: Literal["MultipleChoice"] = "MultipleChoice"
    options: list[str] = Field(description="Choices, in display order")


class YesNoQuestion(QuestionBase):
    kind: Literal["YesNo"] = "YesNo"
    options: list[str] = Field(default_factory=lambda: list(YES_NO_OPTIONS))

    @field_validator("options")
    @classmethod
    def validate_options(cls, v: list[str]) -> list[str]:
        if v != YES_NO_OPTIONS:
            raise ValueError("Yes/No questions must have exactly the options Yes and No")
        return v


class RatingScaleQuestion(QuestionBase):
    kind: Literal["RatingScale"] = "RatingScale"
    # min <= max is not checked
    scale: tuple[NonNegativeInt, NonNegativeInt] = Field(description="(min, max) of the scale")


class FreeTextQuestion(QuestionBase):
    kind: Literal["FreeText"] = "FreeText"


Question = Annotated[
    MultipleChoiceQuestion | YesNoQuestion | RatingScaleQuestion | FreeTextQuestion,
    Field(discriminator="kind"),
]

question_adapter: TypeAdapter[Question] = TypeAdapter(Question)
