from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Mapping, Sequence

from pitchside.contracts import (
    BenchTarget,
    FieldTarget,
    FormationSlot,
    PlacementReason,
    PlacementResult,
    Player,
    PositionCode,
)
from pitchside.lineup.compatibility import ATTACKING_NEIGHBOR_SCORE, get_compatibility_score
from pitchside.lineup.positions import GOALKEEPER, position_value

logger = logging.getLogger(__name__)

EXACT_PRIMARY_BUCKET = 1
EXACT_SECONDARY_BUCKET = 2
ALTERNATE_BUCKET = 3

# Players without a recorded primary position are scored as centre backs.
DEFAULT_PRIMARY_POSITION = PositionCode.CB


@dataclass(frozen=True, slots=True)
class _ScoredSlot:
    slot: FormationSlot
    score: float
    bucket: int

    def sort_key(self) -> tuple[int, float, float, float, str]:
        return (
            self.bucket,
            -self.score,
            _coordinate(self.slot.x),
            _coordinate(self.slot.y),
            str(self.slot.slot_id),
        )


def _coordinate(value: float | None) -> float:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return math.inf
    return float(value)


def first_open_bench_index(bench_slots: Sequence[str | None] | None) -> int:
    bench = list(bench_slots or [])
    for idx, occupant in enumerate(bench):
        if not occupant:
            return idx
    return len(bench)


def is_goalkeeper_capable(player: Player) -> bool:
    goalkeeper = GOALKEEPER.value
    if position_value(player.primary_position) == goalkeeper:
        return True
    return any(position_value(pos) == goalkeeper for pos in player.secondary_positions or [])


def score_slot(player: Player, slot: FormationSlot) -> tuple[float, int]:
    """Return ``(score, bucket)`` for one slot.

    Bucket 1 is an exact primary match, bucket 2 an exact secondary match and
    bucket 3 the best alternate score over every position the player has.
    """
    slot_position = position_value(slot.position)
    primary = position_value(player.primary_position) or DEFAULT_PRIMARY_POSITION.value
    secondaries = [position_value(pos) for pos in player.secondary_positions or []]

    if slot_position == primary:
        return 1.0, EXACT_PRIMARY_BUCKET
    if slot_position in secondaries:
        return 1.0, EXACT_SECONDARY_BUCKET

    best = get_compatibility_score(slot_position, primary)
    for secondary in secondaries:
        best = max(best, get_compatibility_score(slot_position, secondary))
    return best, ALTERNATE_BUCKET


def rank_slots(player: Player, slots: Sequence[FormationSlot]) -> list[tuple[FormationSlot, float, int]]:
    scored = []
    for slot in slots:
        score, bucket = score_slot(player, slot)
        scored.append(_ScoredSlot(slot=slot, score=score, bucket=bucket))
    scored.sort(key=_ScoredSlot.sort_key)
    return [(entry.slot, entry.score, entry.bucket) for entry in scored]


def find_best_slot_for_player(
    player: Player,
    formation_slots: Sequence[FormationSlot] | None,
    current_on_field: Mapping[str, str | None] | None,
    bench_slots: Sequence[str | None] | None,
) -> PlacementResult:
    if not formation_slots:
        return _bench(player, bench_slots, PlacementReason.NO_FORMATION)

    occupancy = current_on_field or {}
    open_slots = [slot for slot in formation_slots if not occupancy.get(slot.slot_id)]
    if not open_slots:
        return _bench(player, bench_slots, PlacementReason.NO_OPEN_SLOTS)

    if not is_goalkeeper_capable(player):
        open_slots = [slot for slot in open_slots if position_value(slot.position) != GOALKEEPER.value]
    if not open_slots:
        return _bench(player, bench_slots, PlacementReason.GK_RULE)

    for slot, score, bucket in rank_slots(player, open_slots):
        if score <= 0:
            continue
        result = PlacementResult(target=FieldTarget(slot_id=slot.slot_id), reason=_field_reason(bucket, score))
        logger.debug("placed %s into %s (%s)", player.player_id, slot.slot_id, result.reason.value)
        return result

    return _bench(player, bench_slots, PlacementReason.BENCH_FALLBACK)


def _field_reason(bucket: int, score: float) -> PlacementReason:
    if bucket == EXACT_PRIMARY_BUCKET:
        return PlacementReason.EXACT_PRIMARY
    if bucket == EXACT_SECONDARY_BUCKET:
        return PlacementReason.EXACT_SECONDARY
    if round(score, 1) <= ATTACKING_NEIGHBOR_SCORE:
        return PlacementReason.ALTERNATE_LOW
    return PlacementReason.ALTERNATE_HIGH


def _bench(player: Player, bench_slots: Sequence[str | None] | None, reason: PlacementReason) -> PlacementResult:
    bench_index = first_open_bench_index(bench_slots)
    logger.debug("benched %s at index %d (%s)", player.player_id, bench_index, reason.value)
    return PlacementResult(target=BenchTarget(bench_index=bench_index), reason=reason)
