"""
Basic test fixtures for the auto-battler test suite.

Provides simple fixtures for boards, units, the event bus and the timeline.
"""

import sys
import os
import pytest

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from autobattler.core.config_loader import CombatConfig
from autobattler.core.data import Side, UnitStats, Vector2
from autobattler.core.engine import Timeline
from autobattler.core.events import EventManager
from autobattler.game.board import Board, Occupant
from autobattler.game.entities import CombatUnit


@pytest.fixture
def config():
    """Default combat configuration, independent of assets/combat.yaml."""
    return CombatConfig()


@pytest.fixture
def event_manager():
    return EventManager(enable_debug_logging=False)


@pytest.fixture
def timeline(config):
    return Timeline(config)


@pytest.fixture
def small_board():
    """An empty 5x5 board."""
    return Board(width=5, height=5)


@pytest.fixture
def player():
    return Occupant(Side.PLAYER, "player")


@pytest.fixture
def enemy():
    return Occupant(Side.ENEMY, "enemy")


@pytest.fixture
def base_stats():
    return UnitStats(name="tester", hp_max=30, attack=10, defense=2, speed=50, attack_range=1, pp_max=10)


@pytest.fixture
def make_unit(base_stats):
    """Factory for CombatUnits with optional stat overrides."""
    def _make(side=Side.PLAYER, x=0, y=0, **overrides):
        stats = base_stats.with_overrides(overrides) if overrides else base_stats
        return CombatUnit(stats=stats, side=side, position=Vector2(x, y))
    return _make
