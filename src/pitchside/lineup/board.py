from __future__ import annotations

import copy
import logging
from typing import Iterable, Sequence

from pitchside.config import default_lineup_config
from pitchside.contracts import (
    BenchTarget,
    FieldTarget,
    FormationSlot,
    LineupConfig,
    PlacementOutcome,
    PlacementReason,
    PlacementResult,
    Player,
    WorkingLineup,
)
from pitchside.core import LineupStateError
from pitchside.lineup.messages import describe_target, friendly_placement_message
from pitchside.lineup.placement import find_best_slot_for_player, first_open_bench_index

logger = logging.getLogger(__name__)

LINEUP_ROLES = frozenset({"captain", "gk", "pk", "ck", "fk"})


def start_lineup(
    team_id: str,
    formation_code: str,
    slots: Sequence[FormationSlot],
    config: LineupConfig | None = None,
) -> WorkingLineup:
    config = config or default_lineup_config()
    return WorkingLineup(
        team_id=team_id,
        formation_code=formation_code,
        on_field={slot.slot_id: None for slot in slots},
        bench_slots=[None] * config.bench_capacity,
    )


class LineupBoard:
    """Applies placement decisions to a working lineup and keeps one undo step."""

    def __init__(self, lineup: WorkingLineup, slots: Sequence[FormationSlot], roster: Iterable[Player]) -> None:
        self.lineup = lineup
        self._slots = list(slots)
        self._roster = {player.player_id: player for player in roster}
        self._undo_snapshot: WorkingLineup | None = None

    @property
    def can_undo(self) -> bool:
        return self._undo_snapshot is not None

    def auto_place(self, player_id: str) -> PlacementOutcome:
        player = self._roster.get(player_id)
        if player is None:
            logger.warning("auto placement refused: unknown player %s", player_id)
            return PlacementOutcome(success=False, message=f"Player {player_id} not found")

        # The player's current spot is released before resolving.
        on_field = {sid: pid for sid, pid in self.lineup.on_field.items() if pid != player_id}
        bench = [None if pid == player_id else pid for pid in self.lineup.bench_slots]
        result = find_best_slot_for_player(player, self._slots, on_field, bench)

        self._undo_snapshot = copy.deepcopy(self.lineup)
        self._apply(player_id, result)
        message = friendly_placement_message(result.reason, player.name, describe_target(result.target, self._slots))
        logger.info("auto placement: %s", message)
        return PlacementOutcome(success=True, message=message, result=result)

    def send_to_bench(self, player_id: str) -> PlacementOutcome:
        player = self._roster.get(player_id)
        if player is None:
            logger.warning("bench move refused: unknown player %s", player_id)
            return PlacementOutcome(success=False, message=f"Player {player_id} not found")
        bench = [None if pid == player_id else pid for pid in self.lineup.bench_slots]
        result = PlacementResult(
            target=BenchTarget(bench_index=first_open_bench_index(bench)),
            reason=PlacementReason.MOVED_TO_BENCH,
        )
        self._undo_snapshot = copy.deepcopy(self.lineup)
        self._apply(player_id, result)
        message = f"{player.name} → Bench"
        logger.info("bench move: %s", message)
        return PlacementOutcome(success=True, message=message, result=result)

    def undo_last_placement(self) -> bool:
        if self._undo_snapshot is None:
            return False
        self.lineup = self._undo_snapshot
        self._undo_snapshot = None
        logger.info("undid last placement for team %s", self.lineup.team_id)
        return True

    def place(self, slot_id: str, player_id: str) -> None:
        self._require_slot(slot_id)
        displaced = self.lineup.on_field.get(slot_id)
        previous_slot = self._slot_of(player_id)
        self._release(player_id)
        self.lineup.on_field[slot_id] = player_id
        if displaced and displaced != player_id:
            if previous_slot is not None:
                self.lineup.on_field[previous_slot] = displaced
            else:
                self._bench_at(first_open_bench_index(self.lineup.bench_slots), displaced)

    def remove_from_slot(self, slot_id: str) -> None:
        self._require_slot(slot_id)
        player_id = self.lineup.on_field.get(slot_id)
        self.lineup.on_field[slot_id] = None
        if player_id:
            self._bench_at(first_open_bench_index(self.lineup.bench_slots), player_id)

    def assign_to_bench(self, index: int, player_id: str) -> None:
        if index < 0 or index > len(self.lineup.bench_slots):
            raise LineupStateError("INVALID_BENCH_INDEX", str(index), "bench index out of range")
        self._release(player_id)
        self._bench_at(index, player_id)

    def remove_from_bench(self, index: int) -> None:
        self._require_bench_index(index)
        self.lineup.bench_slots[index] = None

    def swap_slots(self, slot_id_a: str, slot_id_b: str) -> None:
        self._require_slot(slot_id_a)
        self._require_slot(slot_id_b)
        on_field = self.lineup.on_field
        on_field[slot_id_a], on_field[slot_id_b] = on_field.get(slot_id_b) or None, on_field.get(slot_id_a) or None

    def swap_bench(self, index_a: int, index_b: int) -> None:
        self._require_bench_index(index_a)
        self._require_bench_index(index_b)
        bench = self.lineup.bench_slots
        bench[index_a], bench[index_b] = bench[index_b], bench[index_a]

    def set_formation(self, formation_code: str, slots: Sequence[FormationSlot]) -> None:
        starters = [pid for pid in self.lineup.on_field.values() if pid]
        self._slots = list(slots)
        self.lineup.formation_code = formation_code
        self.lineup.on_field = {slot.slot_id: None for slot in slots}
        for player_id in starters:
            self._bench_at(first_open_bench_index(self.lineup.bench_slots), player_id)
        self._undo_snapshot = None

    def set_role(self, role: str, player_id: str | None) -> None:
        if role not in LINEUP_ROLES:
            raise LineupStateError("UNKNOWN_ROLE", role, f"role must be one of {sorted(LINEUP_ROLES)}")
        if player_id is None:
            self.lineup.roles.pop(role, None)
            return
        if player_id not in self._roster:
            raise LineupStateError("UNKNOWN_PLAYER", player_id, "player is not on the roster")
        self.lineup.roles[role] = player_id

    def available_player_ids(self) -> list[str]:
        used = {pid for pid in self.lineup.on_field.values() if pid}
        used.update(pid for pid in self.lineup.bench_slots if pid)
        return [pid for pid in self._roster if pid not in used]

    def _apply(self, player_id: str, result: PlacementResult) -> None:
        self._release(player_id)
        match result.target:
            case FieldTarget(slot_id=slot_id):
                self.lineup.on_field[slot_id] = player_id
            case BenchTarget(bench_index=bench_index):
                self._bench_at(bench_index, player_id)

    def _release(self, player_id: str) -> None:
        for slot_id, occupant in self.lineup.on_field.items():
            if occupant == player_id:
                self.lineup.on_field[slot_id] = None
        self.lineup.bench_slots = [None if pid == player_id else pid for pid in self.lineup.bench_slots]

    def _bench_at(self, index: int, player_id: str) -> None:
        bench = self.lineup.bench_slots
        if index >= len(bench):
            bench.extend([None] * (index + 1 - len(bench)))
        bench[index] = player_id

    def _slot_of(self, player_id: str) -> str | None:
        for slot_id, occupant in self.lineup.on_field.items():
            if occupant == player_id:
                return slot_id
        return None

    def _require_slot(self, slot_id: str) -> None:
        if slot_id not in self.lineup.on_field:
            raise LineupStateError("UNKNOWN_SLOT", slot_id, "slot is not part of the current formation")

    def _require_bench_index(self, index: int) -> None:
        if index < 0 or index >= len(self.lineup.bench_slots):
            raise LineupStateError("INVALID_BENCH_INDEX", str(index), "bench index out of range")
