"""
Shared fixtures: virtual clock, mock host and small content pools.
"""
import random
from dataclasses import replace
from unittest.mock import Mock

import pytest

from minigame_engine.config import EngineConfig
from minigame_engine.models import ContentItem, Difficulty, GameKind
from minigame_engine.session.controller import SessionController
from minigame_engine.timers import ManualScheduler


def make_item(kind: GameKind, item_id: str, **payload) -> ContentItem:
    return ContentItem(id=item_id, kind=kind, grade="3", difficulty=Difficulty.EASY, payload=payload)


def score_events(host) -> list:
    """Scores delivered to the host so far, in order."""
    return [c.args[0] for c in host.on_score_update.call_args_list]


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def host():
    """Host double recording on_score_update / on_game_complete calls."""
    return Mock(spec=["on_score_update", "on_game_complete"])


@pytest.fixture
def config():
    return EngineConfig()


@pytest.fixture
def make_controller(host, scheduler, config):
    """Build and start a controller over an already ordered sequence."""
    def factory(kind, items, **overrides):
        cfg = replace(config, **overrides) if overrides else config
        controller = SessionController(kind, items, host, scheduler, config=cfg, rng=random.Random(1234))
        controller.start()
        return controller
    return factory


@pytest.fixture
def quiz_items():
    return [
        make_item(GameKind.QUIZ, f"q{i}", question=f"Question {i}", options=["a", "b", "c", "d"], correctIndex=1)
        for i in range(3)
    ]


@pytest.fixture
def number_pattern_items():
    return [
        make_item(GameKind.NUMBER_PATTERN, "np0", sequence=[2, 4, None, 8], answer=6, rule="+2"),
        make_item(GameKind.NUMBER_PATTERN, "np1", sequence=[1, 3, 5, None], answer=7, rule="+2"),
    ]


@pytest.fixture
def pattern_items():
    return [
        make_item(GameKind.PATTERN, "p0", sequence=["red", "blue", "red"], options=["red", "blue", "green"], correctIndex=1),
        make_item(GameKind.PATTERN, "p1", sequence=["1", "2", "1"], options=["1", "2"], correctIndex=1),
    ]


@pytest.fixture
def sort_items():
    return [
        make_item(
            GameKind.SORT,
            "s1",
            buckets=["land", "water"],
            items=[
                {"text": "dog", "correctBucket": "land"},
                {"text": "fish", "correctBucket": "water"},
                {"text": "cat", "correctBucket": "land"},
                {"text": "whale", "correctBucket": "water"},
            ],
        )
    ]


@pytest.fixture
def memory_items():
    return [
        make_item(
            GameKind.MEMORY,
            "m1",
            pairs=[
                {"term": "H2O", "match": "water"},
                {"term": "NaCl", "match": "salt"},
            ],
        )
    ]


@pytest.fixture
def math_race_items():
    return [
        make_item(GameKind.MATH_RACE, "r0", problem="3 + 4", answer=7, options=[6, 7, 8, 9]),
        make_item(GameKind.MATH_RACE, "r1", problem="5 x 2", answer=10, options=[10, 12, 7, 25]),
    ]


@pytest.fixture
def experiment_items():
    return [
        make_item(
            GameKind.EXPERIMENT,
            "e1",
            title="Floating egg",
            hypothesisPrompt="What happens to an egg in salt water?",
            steps=[{"instruction": "Fill a glass"}, {"instruction": "Add salt"}],
            conclusion="Salt water is denser.",
        )
    ]
