"""
Tests for the session controller lifecycle, driven through the quiz game.
"""
import pytest

from minigame_engine.exceptions import InvalidTransitionError
from minigame_engine.models import GameKind
from minigame_engine.session import SessionStatus
from minigame_engine.session.controller import SessionController
from minigame_engine.validation import InputValidationError
from conftest import score_events


def answer(controller, index):
    return controller.submit_resolution({"option_index": index})


class TestQuizFlow:
    """Tests for single-shot choice resolution."""

    def test_correct_answer_scores_and_advances(self, make_controller, quiz_items, host, scheduler):
        """Test +10 for a correct answer and immediate advance."""
        controller = make_controller(GameKind.QUIZ, quiz_items)

        outcome = answer(controller, 1)
        scheduler.run_pending()

        assert outcome.correct and outcome.points_awarded == 10
        assert controller.score == 10
        assert controller.position == 1
        assert controller.status == SessionStatus.ITEM_ACTIVE
        assert score_events(host) == [10]

    def test_wrong_answer_scores_nothing(self, make_controller, quiz_items, host, scheduler):
        controller = make_controller(GameKind.QUIZ, quiz_items)

        outcome = answer(controller, 0)
        scheduler.run_pending()

        assert outcome.correct is False
        assert controller.score == 0
        assert controller.position == 1
        host.on_score_update.assert_not_called()

    def test_two_of_three_correct_wins(self, make_controller, quiz_items, host, scheduler):
        """Test that 2/3 (0.667) clears the 60% threshold."""
        controller = make_controller(GameKind.QUIZ, quiz_items)

        for index in (1, 0, 1):
            answer(controller, index)
        scheduler.run_pending()

        assert controller.status == SessionStatus.COMPLETE
        assert controller.result.won is True
        assert controller.result.correct_count == 2
        assert controller.result.percentage == 67
        host.on_game_complete.assert_called_once_with(True)

    def test_one_of_three_correct_loses(self, make_controller, quiz_items, host, scheduler):
        controller = make_controller(GameKind.QUIZ, quiz_items)

        for index in (1, 0, 0):
            answer(controller, index)
        scheduler.run_pending()

        assert controller.result.won is False
        host.on_game_complete.assert_called_once_with(False)

    def test_input_after_completion_ignored(self, make_controller, quiz_items, host, scheduler):
        controller = make_controller(GameKind.QUIZ, quiz_items)
        for _ in quiz_items:
            answer(controller, 1)

        assert answer(controller, 1) is None
        scheduler.run_pending()

        assert controller.score == 30
        host.on_game_complete.assert_called_once_with(True)

    def test_out_of_range_option_ignored(self, make_controller, quiz_items):
        """Test that an option the item does not have is not an attempt."""
        controller = make_controller(GameKind.QUIZ, quiz_items)

        assert answer(controller, 9) is None
        assert controller.current_state.attempts == 0
        assert controller.position == 0


class TestInputBoundary:
    """Tests for malformed input handling."""

    def test_malformed_input_raises_without_attempt(self, make_controller, quiz_items):
        """Test that malformed input never reaches the session."""
        controller = make_controller(GameKind.QUIZ, quiz_items)

        with pytest.raises(InputValidationError):
            controller.submit_resolution({"option_index": "second"})

        assert controller.current_state.attempts == 0
        assert controller.status == SessionStatus.ITEM_ACTIVE

    def test_wrong_submission_shape_raises(self, make_controller, quiz_items):
        controller = make_controller(GameKind.QUIZ, quiz_items)

        with pytest.raises(InputValidationError):
            controller.submit_resolution({"text": "6"})


class TestLifecycle:
    """Tests for start / advance / restart / dispose."""

    def test_empty_sequence_rejected(self, host, scheduler):
        with pytest.raises(ValueError):
            SessionController(GameKind.QUIZ, [], host, scheduler)

    def test_input_before_start_ignored(self, host, scheduler, quiz_items):
        controller = SessionController(GameKind.QUIZ, quiz_items, host, scheduler)

        assert controller.status == SessionStatus.READY
        assert answer(controller, 1) is None
        assert controller.score == 0

    def test_advance_not_supported_for_quiz(self, make_controller, quiz_items):
        """Test that host-driven advance is refused for immediate games."""
        controller = make_controller(GameKind.QUIZ, quiz_items)

        with pytest.raises(InvalidTransitionError):
            controller.advance()

    def test_restart_resets_and_keeps_order(self, make_controller, quiz_items, host, scheduler):
        """Test restart: position 0, score 0, fresh records, same order, scoreChanged(0)."""
        controller = make_controller(GameKind.QUIZ, quiz_items)
        order_before = [item.id for item in controller.sequence]
        answer(controller, 1)
        answer(controller, 1)
        scheduler.run_pending()

        controller.restart()
        scheduler.run_pending()

        assert controller.position == 0
        assert controller.score == 0
        assert controller.status == SessionStatus.ITEM_ACTIVE
        assert all(
            state.attempts == 0 and not state.resolved and state.points_awarded == 0
            for state in controller.item_states.values()
        )
        assert [item.id for item in controller.sequence] == order_before
        assert score_events(host) == [10, 20, 0]

    def test_restart_after_completion_allows_new_completion(self, make_controller, quiz_items, host, scheduler):
        """Test that the one-shot guard is per play-through."""
        controller = make_controller(GameKind.QUIZ, quiz_items)
        for _ in quiz_items:
            answer(controller, 1)
        scheduler.run_pending()
        controller.restart()
        for _ in quiz_items:
            answer(controller, 0)
        scheduler.run_pending()

        assert [c.args[0] for c in host.on_game_complete.call_args_list] == [True, False]

    def test_restart_drops_undelivered_events(self, make_controller, quiz_items, host, scheduler):
        """Test that a completion queued before restart never reaches the host."""
        controller = make_controller(GameKind.QUIZ, quiz_items)
        for _ in quiz_items:
            answer(controller, 1)

        controller.restart()
        scheduler.run_pending()

        host.on_game_complete.assert_not_called()
        assert score_events(host) == [0]
        assert controller.status == SessionStatus.ITEM_ACTIVE

    def test_dispose_drops_pending_events(self, make_controller, quiz_items, host, scheduler):
        """Test that events not yet delivered are cancelled on dispose."""
        controller = make_controller(GameKind.QUIZ, quiz_items)
        answer(controller, 1)

        controller.dispose()
        scheduler.advance(60.0)

        host.on_score_update.assert_not_called()
        assert controller.status == SessionStatus.DISPOSED

    def test_calls_after_dispose_are_noops(self, make_controller, quiz_items, host, scheduler):
        controller = make_controller(GameKind.QUIZ, quiz_items)
        controller.dispose()

        assert answer(controller, 1) is None
        controller.restart()
        scheduler.run_pending()

        assert controller.status == SessionStatus.DISPOSED
        host.on_score_update.assert_not_called()
