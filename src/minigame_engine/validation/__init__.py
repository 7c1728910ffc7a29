"""
Input boundary: submission schemas and their validator.
"""
from .exceptions import InputValidationError
from .input_validator import InputValidator
from .submissions import (
    CardPairSubmission,
    ChoiceSubmission,
    ExperimentSubmission,
    NumericGuessSubmission,
    OptionValueSubmission,
    PlacementSubmission,
    Submission,
)

__all__ = [
    "InputValidationError",
    "InputValidator",
    "CardPairSubmission",
    "ChoiceSubmission",
    "ExperimentSubmission",
    "NumericGuessSubmission",
    "OptionValueSubmission",
    "PlacementSubmission",
    "Submission",
]
