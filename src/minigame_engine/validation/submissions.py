"""
Submission schemas, one per interaction method.

The host relays raw player input as a dict (or an instance of one of these
models); the session controller parses it against the active strategy's
input model before any state is touched.
"""
import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_INTEGER_RE = re.compile(r"^[+-]?\d+$")

MAX_HYPOTHESIS_LENGTH = 2000


class Submission(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class ChoiceSubmission(Submission):
    """Multiple-choice click (quiz, pattern)."""
    option_index: int = Field(ge=0, description="Index into the item's options")


class NumericGuessSubmission(Submission):
    """Typed number for the missing sequence element."""
    text: str = Field(description="Raw text from the number input")

    @field_validator("text")
    @classmethod
    def _must_be_integer(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("guess cannot be empty")
        if not _INTEGER_RE.match(value):
            raise ValueError(f"guess must be a whole number, got {value!r}")
        return value

    @property
    def value(self) -> int:
        return int(self.text)


class PlacementSubmission(Submission):
    """Drop of a sortable item onto a bucket."""
    item_id: str = Field(min_length=1)
    bucket_id: str = Field(min_length=1)


class CardPairSubmission(Submission):
    """Two memory cards flipped in one turn."""
    first_card_id: str = Field(min_length=1)
    second_card_id: str = Field(min_length=1)

    @model_validator(mode="after")
    def _distinct_cards(self):
        if self.first_card_id == self.second_card_id:
            raise ValueError("a turn needs two different cards")
        return self


class OptionValueSubmission(Submission):
    """Numeric answer option clicked in math race."""
    value: float


class ExperimentSubmission(Submission):
    """Hypothesis text, or forward/backward step navigation."""
    action: Literal["hypothesis", "forward", "backward"]
    text: str = Field(default="", max_length=MAX_HYPOTHESIS_LENGTH)

    @field_validator("text")
    @classmethod
    def _strip_nulls(cls, value: str) -> str:
        return value.replace("\x00", "")
