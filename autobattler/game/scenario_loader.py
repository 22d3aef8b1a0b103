"""Battle setup loading from YAML files.

A battle file describes the board size and the units placed on it::

    name: "Skirmish"
    board:
      width: 6
      height: 6
    units:
      - template: charmander
        side: player
        at: [1, 4]
      - template: rattata
        side: enemy
        at: [4, 1]
        stats:
          hp_max: 20
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional

import yaml

from ..core.data import Side, UnitStats, Vector2
from .board import Board
from .entities.unit import CombatUnit
from .entities.unit_templates import get_template


@dataclass
class Battle:
    """A loaded battle: its name, populated board and units."""
    name: str
    board: Board
    units: list[CombatUnit] = field(default_factory=list)
    description: str = ""


class ScenarioLoader:
    """Handles loading battles from YAML files."""

    @staticmethod
    def load_from_file(
        file_path: str, template_lookup: Optional[Callable[[str], UnitStats]] = None
    ) -> Battle:
        """Load a battle from a YAML file.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file cannot be parsed or describes an invalid battle
        """
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            raise FileNotFoundError(f"Battle file not found: {file_path}")
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse YAML battle {Path(file_path).name}: {e}")

        return ScenarioLoader.load_from_dict(data, template_lookup)

    @staticmethod
    def load_from_dict(
        data: Any, template_lookup: Optional[Callable[[str], UnitStats]] = None
    ) -> Battle:
        """Build a battle from already parsed data."""
        if not isinstance(data, dict):
            raise ValueError("Battle data must be a mapping")

        template_lookup = template_lookup or get_template

        board_data = data.get("board")
        if not isinstance(board_data, dict):
            raise ValueError("Battle must define 'board' with width and height")
        try:
            board = Board(int(board_data["width"]), int(board_data["height"]))
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid board definition: {e}")

        battle = Battle(
            name=data.get("name", "Unnamed Battle"),
            description=data.get("description", ""),
            board=board,
        )

        for index, unit_data in enumerate(data.get("units") or []):
            unit = ScenarioLoader._parse_unit(index, unit_data, template_lookup)
            if not board.place(unit, unit.position):
                raise ValueError(
                    f"Unit #{index} ({unit.name}) cannot be placed at {unit.position.to_tuple()}: "
                    "cell is off the board or already occupied"
                )
            battle.units.append(unit)

        return battle

    @staticmethod
    def _parse_unit(
        index: int, unit_data: Any, template_lookup: Callable[[str], UnitStats]
    ) -> CombatUnit:
        if not isinstance(unit_data, dict):
            raise ValueError(f"Unit #{index} must be a mapping")

        try:
            stats = template_lookup(unit_data["template"])
            side = Side(str(unit_data["side"]).lower())
            position = Vector2.from_list(unit_data["at"])
        except KeyError as e:
            raise ValueError(f"Unit #{index} is missing or references unknown {e}")
        except (TypeError, ValueError) as e:
            raise ValueError(f"Unit #{index} is invalid: {e}")

        overrides = unit_data.get("stats")
        if overrides:
            if not isinstance(overrides, dict):
                raise ValueError(f"Unit #{index} 'stats' must be a mapping")
            try:
                stats = stats.with_overrides(overrides)
            except (TypeError, ValueError) as e:
                raise ValueError(f"Unit #{index} has invalid stat overrides: {e}")

        return CombatUnit(stats=stats, side=side, position=position)
