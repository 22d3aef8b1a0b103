"""
Combat manager: the reference tick loop around the combat queries.

Each turn the next unit is popped from the timeline, asks the target
selector for its nearest opponent, then either attacks (target within
range) or asks the pathfinder for its next step and applies it to the
board. Deciding and applying happen back to back for one unit at a time,
so every decision sees a fully applied board.

All dependencies are passed in explicitly; presentation layers subscribe
to the published events.
"""

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from ...core.config_loader import CombatConfig, get_combat_config
from ...core.data import ActionType, Direction, Side, Vector2
from ...core.engine import Timeline, get_move_duration
from ...core.events import (
    BattleEnded,
    BattleStarted,
    LogMessage,
    UnitAttacked,
    UnitDamaged,
    UnitDefeated,
    UnitMoved,
    UnitTurnStarted,
)
from ..combat import get_facing, get_nearest_target, is_within_range, pathfind
from ..entities.unit import CombatUnit

if TYPE_CHECKING:
    from ...core.events import EventManager
    from ..board import Board


@dataclass(frozen=True)
class TurnOutcome:
    """What a unit did on its turn.

    Returned synchronously from CombatManager.step(), so callers can chain
    animation on a completed decision without callbacks.
    """
    unit: CombatUnit
    action: ActionType
    timeline_time: int
    target: Optional[Vector2] = None
    destination: Optional[Vector2] = None
    facing: Optional[Direction] = None
    damage: int = 0
    duration: int = 0
    defeated: Optional[CombatUnit] = None


class CombatManager:
    """Runs a battle on a board populated with CombatUnits."""

    def __init__(
        self,
        board: "Board",
        event_manager: "EventManager",
        config: Optional[CombatConfig] = None,
        timeline: Optional[Timeline] = None,
    ):
        self.board = board
        self.event_manager = event_manager
        self.config = config or get_combat_config()
        self.timeline = timeline or Timeline(self.config)

        self._units: dict[str, CombatUnit] = {}
        self.turns_taken = 0
        self.winner: Optional[Side] = None
        self.is_started = False
        self.is_finished = False

    @property
    def units(self) -> list[CombatUnit]:
        return list(self._units.values())

    def get_unit(self, unit_id: str) -> Optional[CombatUnit]:
        return self._units.get(unit_id)

    def start(self) -> None:
        """Register every unit on the board and schedule its first turn.

        Raises:
            ValueError: If the board holds something other than a CombatUnit
        """
        if self.is_started:
            return

        for position, occupant in self.board.occupants():
            if not isinstance(occupant, CombatUnit):
                raise ValueError(f"Board cell {position.to_tuple()} holds a non-combat occupant: {occupant!r}")
            occupant.position = position
            self._units[occupant.unit_id] = occupant
            self.timeline.schedule_unit(occupant)

        self.is_started = True
        self.event_manager.publish(BattleStarted(self.timeline.current_time, len(self._units)),
                                   source="CombatManager")
        self._check_battle_end()
        self.event_manager.process_events()

    def step(self) -> Optional[TurnOutcome]:
        """Play the next turn on the timeline.

        Returns:
            The outcome of the turn, or None once the battle is over
        """
        if not self.is_started:
            self.start()

        while not self.is_finished:
            entry = self.timeline.pop_next()
            if entry is None:
                self._finish(None)
                break

            unit = self._units.get(entry.unit_id)
            if unit is None or not unit.is_alive:
                continue

            outcome = self._take_turn(unit)
            self.turns_taken += 1
            if unit.is_alive:
                self.timeline.schedule_unit(unit)

            self._check_battle_end()
            self.event_manager.process_events()
            return outcome

        self.event_manager.process_events()
        return None

    def run(self, max_turns: Optional[int] = None) -> Optional[Side]:
        """Play turns until one side remains or the turn cap is reached.

        Returns:
            The winning side, or None for a draw or when the cap was hit
        """
        if max_turns is None:
            max_turns = self.config.max_turns

        while not self.is_finished:
            if self.turns_taken >= max_turns:
                self._log(f"Turn cap of {max_turns} reached", "WARNING", level="WARNING")
                self._finish(None)
                break
            self.step()

        self.event_manager.process_events()
        return self.winner

    def _take_turn(self, unit: CombatUnit) -> TurnOutcome:
        now = self.timeline.current_time
        self.event_manager.publish(UnitTurnStarted(now, unit), source="CombatManager")

        target_position = get_nearest_target(self.board, unit.position)
        if target_position is None:
            return TurnOutcome(unit, ActionType.WAIT, now)

        target = self.board.get_occupant(target_position)
        self._log(f"{unit.name} targets {target.name} at {target_position.to_tuple()}", "AI", level="DEBUG")

        if is_within_range(unit.position, target_position, unit.attack_range):
            return self._attack(unit, target, now)
        return self._advance(unit, target_position, now)

    def _attack(self, unit: CombatUnit, target: CombatUnit, now: int) -> TurnOutcome:
        facing = get_facing(unit.position, target.position)
        unit.facing = facing

        damage = max(1, unit.stats.attack - target.stats.defense)
        dealt = target.take_damage(damage)
        unit.deal_damage(dealt)

        self.event_manager.publish(UnitAttacked(now, unit, target, facing, dealt), source="CombatManager")
        self.event_manager.publish(UnitDamaged(now, target, dealt, target.hp_current), source="CombatManager")

        defeated = None
        if not target.is_alive:
            defeated = target
            self.board.remove(target.position)
            self.timeline.remove_entry(target.unit_id)
            self.event_manager.publish(UnitDefeated(now, target, target.position), source="CombatManager")

        return TurnOutcome(unit, ActionType.ATTACK, now, target=target.position,
                           facing=facing, damage=dealt, defeated=defeated)

    def _advance(self, unit: CombatUnit, target_position: Vector2, now: int) -> TurnOutcome:
        destination = pathfind(self.board, unit.position, target_position, self.config.step_budget)
        if destination is None or destination == unit.position:
            self._log(f"{unit.name} has no route toward {target_position.to_tuple()}", "AI", level="DEBUG")
            return TurnOutcome(unit, ActionType.WAIT, now, target=target_position)

        origin = unit.position
        facing = get_facing(origin, destination)
        if not self.board.move(origin, destination):
            # pathfind only returns empty cells, so this is a board/unit desync
            self._log(f"Board rejected move of {unit.name} to {destination.to_tuple()}", "ERROR", level="ERROR")
            return TurnOutcome(unit, ActionType.WAIT, now, target=target_position)

        unit.position = destination
        unit.facing = facing
        duration = get_move_duration(unit, self.config)
        self.event_manager.publish(UnitMoved(now, unit, origin, destination, facing, duration),
                                   source="CombatManager")

        return TurnOutcome(unit, ActionType.MOVE, now, target=target_position,
                           destination=destination, facing=facing, duration=duration)

    def _check_battle_end(self) -> bool:
        remaining = {side: self.board.count_by_side(side) for side in Side}
        standing = [side for side, count in remaining.items() if count > 0]
        if len(standing) > 1:
            return False
        self._finish(standing[0] if standing else None)
        return True

    def _finish(self, winner: Optional[Side]) -> None:
        if self.is_finished:
            return
        self.is_finished = True
        self.winner = winner
        self.event_manager.publish(BattleEnded(self.timeline.current_time, winner, self.turns_taken),
                                   source="CombatManager")

    def _log(self, message: str, category: str, level: str = "INFO") -> None:
        self.event_manager.publish(
            LogMessage(self.timeline.current_time, message, category=category, level=level,
                       source="CombatManager"),
            source="CombatManager"
        )
