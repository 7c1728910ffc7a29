"""
Tests for resolution strategy rules in isolation.
"""
import pytest

from minigame_engine.exceptions import UnsupportedGameKindError
from minigame_engine.models import GameKind
from minigame_engine.resolution import (
    AdvanceMode,
    MathRaceStrategy,
    ResolutionContext,
    ResolutionOutcome,
    SortStrategy,
    TimerKind,
    create_strategy,
)
from minigame_engine.resolution.experiment import hypothesis_points
from minigame_engine.resolution.math_race import time_bonus
from minigame_engine.resolution.memory import memory_final_score
from minigame_engine.session import ItemResolutionState
from minigame_engine.validation import OptionValueSubmission
from conftest import make_item


class TestStrategyFactory:
    """Tests for create_strategy."""

    @pytest.mark.parametrize("kind", list(GameKind))
    def test_every_kind_has_a_strategy(self, kind):
        strategy = create_strategy(kind)

        assert strategy.kind == kind

    def test_string_kind_accepted(self):
        """Test that the content service's string ids work."""
        assert isinstance(create_strategy("mathRace"), MathRaceStrategy)

    def test_unknown_kind_raises(self):
        with pytest.raises(UnsupportedGameKindError):
            create_strategy("hangman")

    def test_instances_are_not_shared(self):
        """Test that each session gets its own strategy state."""
        assert create_strategy(GameKind.SORT) is not create_strategy(GameKind.SORT)

    def test_strategy_traits(self):
        sort = create_strategy(GameKind.SORT)
        race = create_strategy(GameKind.MATH_RACE)

        assert sort.set_based and sort.floors_score
        assert sort.timer_kind == TimerKind.STOPWATCH
        assert sort.initial_score == 100
        assert race.advance_mode == AdvanceMode.AUTO
        assert race.timer_kind == TimerKind.COUNTDOWN
        assert create_strategy(GameKind.QUIZ).advance_mode == AdvanceMode.IMMEDIATE


class TestMathRaceScoring:
    """Tests for the math race speed bonus."""

    @pytest.mark.parametrize(
        "elapsed,bonus",
        [(0, 5), (3, 5), (6, 4), (15, 3), (21, 2), (27, 1), (29, 0), (30, 0), (45, 0)],
    )
    def test_time_bonus(self, elapsed, bonus):
        """Test bonus = 5 x remaining fraction, rounded half up."""
        assert time_bonus(elapsed, 30) == bonus

    def test_correct_at_full_elapsed_earns_base_only(self):
        """Test that a correct answer with no time left earns exactly 10."""
        strategy = MathRaceStrategy()
        item = make_item(GameKind.MATH_RACE, "r0", answer=7, options=[6, 7])
        state = ItemResolutionState(id="r0")

        outcome = strategy.resolve_item(
            item, state, OptionValueSubmission(value=7), ResolutionContext(elapsed_units=30, duration_units=30)
        )

        assert outcome == ResolutionOutcome(correct=True, points_awarded=10, terminal=True)
        assert state.resolved and state.points_awarded == 10

    def test_wrong_answer_penalty(self):
        strategy = MathRaceStrategy()
        item = make_item(GameKind.MATH_RACE, "r0", answer=7, options=[6, 7])

        outcome = strategy.resolve_item(
            item, ItemResolutionState(id="r0"), OptionValueSubmission(value=6), ResolutionContext(0, 30)
        )

        assert outcome.points_awarded == -5
        assert outcome.terminal


class TestScoringHelpers:
    """Tests for hypothesis tiers and the memory final score."""

    @pytest.mark.parametrize(
        "text,points",
        [
            ("", 0),
            ("   ", 0),
            ("it floats", 10),
            ("the egg will float up", 20),
            ("the egg will float because salt water is denser than fresh water", 30),
        ],
    )
    def test_hypothesis_tiers(self, text, points):
        assert hypothesis_points(text) == points

    @pytest.mark.parametrize("moves,score", [(0, 1050), (6, 990), (90, 150), (200, 150)])
    def test_memory_final_score(self, moves, score):
        """Test max(100, 1000 - 10 x moves) + 50."""
        assert memory_final_score(moves) == score


class TestSortLayout:
    """Tests for sortable sub-element layout."""

    def test_layout_covers_every_sortable_item(self, sort_items):
        strategy = SortStrategy()

        states = strategy.initial_states(sort_items)

        assert sorted(states) == ["s1:0", "s1:1", "s1:2", "s1:3"]
        assert sorted(entry.id for entry in strategy.layout) == sorted(states)

    def test_layout_reused_for_same_sequence(self, sort_items):
        """Test that a restart keeps the item layout."""
        strategy = SortStrategy()
        sequence = tuple(sort_items)
        strategy.initial_states(sequence)
        layout = strategy.layout

        strategy.initial_states(sequence)

        assert strategy.layout is layout
