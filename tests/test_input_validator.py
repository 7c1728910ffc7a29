"""
Tests for the input boundary.
"""
import pytest

from minigame_engine.validation import (
    CardPairSubmission,
    ChoiceSubmission,
    ExperimentSubmission,
    InputValidationError,
    InputValidator,
    NumericGuessSubmission,
    PlacementSubmission,
)


class TestNumericGuess:
    """Tests for numeric guess parsing."""

    @pytest.mark.parametrize("text,expected", [("6", 6), (" 12 ", 12), ("-3", -3), ("+4", 4)])
    def test_valid_integers(self, text, expected):
        """Test that whole numbers parse, surrounding spaces ignored."""
        submission = InputValidator.parse(NumericGuessSubmission, {"text": text})

        assert submission.value == expected

    @pytest.mark.parametrize("text", ["", "   ", "abc", "1.5", "4 5", "12a"])
    def test_non_numeric_text_rejected(self, text):
        """Test that anything but a whole number is rejected."""
        with pytest.raises(InputValidationError):
            InputValidator.parse(NumericGuessSubmission, {"text": text})


class TestSubmissionShapes:
    """Tests for the other submission models."""

    def test_model_instance_passes_through(self):
        """Test that an already-built submission is returned as is."""
        submission = ChoiceSubmission(option_index=2)

        assert InputValidator.parse(ChoiceSubmission, submission) is submission

    def test_other_model_instance_rejected(self):
        """Test that a submission for another strategy is rejected."""
        with pytest.raises(InputValidationError, match="Expected ChoiceSubmission"):
            InputValidator.parse(ChoiceSubmission, PlacementSubmission(item_id="a", bucket_id="b"))

    def test_negative_option_index_rejected(self):
        with pytest.raises(InputValidationError):
            InputValidator.parse(ChoiceSubmission, {"option_index": -1})

    def test_unknown_fields_rejected(self):
        """Test that extra fields are not silently dropped."""
        with pytest.raises(InputValidationError):
            InputValidator.parse(ChoiceSubmission, {"option_index": 1, "bucket_id": "x"})

    def test_same_card_twice_rejected(self):
        """Test that a memory turn needs two different cards."""
        with pytest.raises(InputValidationError):
            InputValidator.parse(CardPairSubmission, {"first_card_id": "term:m1:0", "second_card_id": "term:m1:0"})

    def test_unknown_experiment_action_rejected(self):
        with pytest.raises(InputValidationError):
            InputValidator.parse(ExperimentSubmission, {"action": "skip"})

    def test_hypothesis_null_bytes_stripped(self):
        submission = InputValidator.parse(ExperimentSubmission, {"action": "hypothesis", "text": "salt\x00 floats"})

        assert submission.text == "salt floats"

    @pytest.mark.parametrize("raw", [None, 3, "6", ["text"]])
    def test_non_mapping_rejected(self, raw):
        """Test that raw values must be mappings or models."""
        with pytest.raises(InputValidationError):
            InputValidator.parse(NumericGuessSubmission, raw)
