"""
Integration tests on a real asyncio event loop.
"""
import asyncio
from unittest.mock import Mock

from minigame_engine.config import EngineConfig
from minigame_engine.models import GameKind
from minigame_engine.session import SessionStatus
from minigame_engine.session.controller import SessionController

FAST = EngineConfig(tick_seconds=0.01, math_race_duration_units=3, math_race_result_units=1)


def new_host():
    return Mock(spec=["on_score_update", "on_game_complete"])


class TestRealEventLoop:
    """Tests with the running loop as scheduler."""

    def test_dispose_with_outstanding_countdown_is_silent(self, math_race_items):
        """Test that no event arrives after dispose, even past the countdown deadline."""
        host = new_host()

        async def scenario():
            loop = asyncio.get_running_loop()
            controller = SessionController(GameKind.MATH_RACE, math_race_items, host, loop, config=FAST)
            controller.start()
            await asyncio.sleep(0.015)
            controller.dispose()
            await asyncio.sleep(0.2)
            return controller

        controller = asyncio.run(scenario())

        assert controller.status == SessionStatus.DISPOSED
        host.on_score_update.assert_not_called()
        host.on_game_complete.assert_not_called()

    def test_timeouts_complete_the_session(self, math_race_items):
        """Test countdown expiry and auto-advance driven by the loop's clock."""
        host = new_host()

        async def scenario():
            loop = asyncio.get_running_loop()
            controller = SessionController(GameKind.MATH_RACE, math_race_items, host, loop, config=FAST)
            controller.start()
            for _ in range(100):
                if controller.status == SessionStatus.COMPLETE:
                    break
                await asyncio.sleep(0.02)
            await asyncio.sleep(0)
            return controller

        controller = asyncio.run(scenario())

        assert controller.status == SessionStatus.COMPLETE
        assert controller.score == 0
        host.on_game_complete.assert_called_once_with(False)

    def test_answer_then_dispose_drops_deferred_score(self, quiz_items):
        """Test that a score event queued for the next turn is dropped by dispose."""
        host = new_host()

        async def scenario():
            loop = asyncio.get_running_loop()
            controller = SessionController(GameKind.QUIZ, quiz_items, host, loop)
            controller.start()
            controller.submit_resolution({"option_index": 1})
            controller.dispose()
            await asyncio.sleep(0.01)

        asyncio.run(scenario())

        host.on_score_update.assert_not_called()
