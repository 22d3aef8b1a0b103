"""
Tests for the LogManager battle log.
"""
import os

import pytest

from autobattler.core.data import Direction, Side, Vector2
from autobattler.core.events import (
    BattleEnded, BattleStarted, DebugMessage, EventManager, EventType, LogMessage,
    UnitAttacked, UnitDefeated, UnitMoved,
)
from autobattler.game.managers import LogCategory, LogLevel, LogManager


@pytest.fixture
def log_manager(event_manager):
    return LogManager(event_manager, max_messages=50)


def deliver(event_manager, event):
    event_manager.publish(event)
    event_manager.process_events()


def texts(log_manager, **kwargs):
    return [entry.text for entry in log_manager.get_messages(**kwargs)]


class TestLogManager:

    def test_log_message_event(self, event_manager, log_manager):
        deliver(event_manager, LogMessage(timeline_time=12, message="loaded", category="SCENARIO", source="Loader"))

        entry = log_manager.get_messages()[0]
        assert entry.text == "[Loader] loaded"
        assert entry.category == LogCategory.SCENARIO
        assert entry.timeline_time == 12

    def test_unknown_category_falls_back_to_system(self, event_manager, log_manager):
        deliver(event_manager, LogMessage(timeline_time=0, message="x", category="nonsense"))
        assert log_manager.get_messages()[0].category == LogCategory.SYSTEM

    def test_battle_lines(self, event_manager, log_manager, make_unit):
        attacker = make_unit(Side.PLAYER, 0, 0)
        target = make_unit(Side.ENEMY, 1, 0)
        target.take_damage(8)

        event_manager.publish(BattleStarted(timeline_time=0, unit_count=2))
        event_manager.publish(UnitMoved(1500, attacker, Vector2(0, 1), Vector2(0, 0), Direction.UP, 1500))
        event_manager.publish(UnitAttacked(2000, attacker, target, Direction.RIGHT, 8))
        event_manager.publish(UnitDefeated(2000, target, Vector2(1, 0)))
        event_manager.publish(BattleEnded(2000, Side.PLAYER, 2))
        event_manager.process_events()

        assert texts(log_manager) == [
            "Battle started with 2 units",
            "tester moves (0, 1) -> (0, 0) facing up",
            "tester hits tester for 8 (22/30 HP left)",
            "tester (enemy) is defeated",
            "Battle ended after 2 turns: player wins",
        ]

    def test_draw_line(self, event_manager, log_manager):
        deliver(event_manager, BattleEnded(100, None, 500))
        assert texts(log_manager) == ["Battle ended after 500 turns: no winner"]

    def test_debug_hidden_until_enabled(self, event_manager, log_manager):
        deliver(event_manager, DebugMessage(timeline_time=0, message="details", source="AI"))
        assert texts(log_manager) == []
        assert not log_manager.is_debug_enabled()

        log_manager.toggle_debug()
        assert log_manager.is_debug_enabled()
        assert texts(log_manager) == ["[AI] details"]

        log_manager.toggle_debug()
        assert texts(log_manager) == []

    def test_bus_errors_are_logged_as_debug(self):
        event_manager = EventManager(enable_debug_logging=True)
        log_manager = LogManager(event_manager)
        log_manager.set_log_level(LogLevel.DEBUG)

        def broken(event):
            raise RuntimeError("boom")

        event_manager.subscribe(EventType.BATTLE_STARTED, broken, "broken")
        deliver(event_manager, BattleStarted(timeline_time=0, unit_count=0))

        debug = texts(log_manager, categories={LogCategory.DEBUG})
        assert any("Error in subscriber broken: boom" in text for text in debug)
        assert "Battle started with 0 units" in texts(log_manager)

    def test_warning_and_error_categories_force_level(self, log_manager):
        log_manager.set_log_level(LogLevel.WARNING)
        log_manager.log("fine", LogCategory.BATTLE)
        log_manager.log("careful", LogCategory.WARNING, LogLevel.DEBUG)
        log_manager.log("broken", LogCategory.ERROR)

        assert texts(log_manager) == ["careful", "broken"]

    def test_category_filters(self, log_manager):
        log_manager.log("a", LogCategory.BATTLE)
        log_manager.log("b", LogCategory.MOVEMENT)
        log_manager.log("c", LogCategory.BATTLE)

        assert texts(log_manager, categories={LogCategory.BATTLE}) == ["a", "c"]

        log_manager.disable_category(LogCategory.BATTLE)
        assert texts(log_manager) == ["b"]
        log_manager.enable_category(LogCategory.BATTLE)
        assert texts(log_manager, count=2) == ["b", "c"]

    def test_buffer_is_bounded(self, event_manager):
        log_manager = LogManager(event_manager, max_messages=3)
        for i in range(5):
            log_manager.log(str(i))
        assert texts(log_manager) == ["2", "3", "4"]

    def test_clear(self, log_manager):
        log_manager.log("gone")
        log_manager.clear()
        assert log_manager.get_messages() == []

    def test_format(self, log_manager):
        log_manager.log("hit", LogCategory.BATTLE, timeline_time=40)
        entry = log_manager.get_messages()[0]

        assert entry.format() == "[BTL] hit"
        assert entry.format(include_time=True) == "[t=40] [BTL] hit"
        assert entry.format(include_category=False) == "hit"

    def test_save_log_to_file(self, log_manager, tmp_path):
        log_manager.log("first", LogCategory.BATTLE, timeline_time=5)

        path = log_manager.save_log_to_file(str(tmp_path / "logs"))

        assert path is not None and os.path.exists(path)
        with open(path, encoding="utf-8") as f:
            content = f.read()
        assert "[t=5] [BATTLE] first" in content
        assert texts(log_manager)[-1].startswith("Battle log saved to")

    def test_save_log_failure_is_logged(self, log_manager, tmp_path):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("")

        assert log_manager.save_log_to_file(str(blocker)) is None
        assert log_manager.get_messages()[-1].category == LogCategory.ERROR
