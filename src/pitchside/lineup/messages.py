from __future__ import annotations

from typing import Sequence

from pitchside.contracts import BenchTarget, FieldTarget, FormationSlot, PlacementReason, PlacementTarget
from pitchside.lineup.positions import position_value

# Checked in order; the first rule whose fragment matches wins.
_CONTAINS_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("alternate (0.8)",), "Good fit"),
    (("alternate (0.6)",), "Acceptable fit"),
    (("no compatible slots", "gk rule"), "Bench (GK rule)"),
    (("bench fallback", "score=0"), "Bench (no fit)"),
    (("no formation", "no open"), "Bench (no space)"),
)

_EXACT_RULES: dict[str, str] = {
    PlacementReason.EXACT_PRIMARY.value: "Perfect match",
    PlacementReason.EXACT_SECONDARY.value: "Secondary match",
    PlacementReason.MOVED_TO_BENCH.value: "Moved to bench",
}


def friendly_reason(reason: PlacementReason | str) -> str:
    raw = reason.value if isinstance(reason, PlacementReason) else str(reason)
    lowered = raw.lower()
    if lowered in _EXACT_RULES:
        return _EXACT_RULES[lowered]
    for fragments, phrase in _CONTAINS_RULES:
        if any(fragment in lowered for fragment in fragments):
            return phrase
    return raw


def friendly_placement_message(reason: PlacementReason | str, player_name: str, target_description: str) -> str:
    return f"{player_name} → {target_description} ({friendly_reason(reason)})"


def describe_target(target: PlacementTarget, slots: Sequence[FormationSlot] | None = None) -> str:
    match target:
        case BenchTarget():
            return "Bench"
        case FieldTarget(slot_id=slot_id):
            for slot in slots or []:
                if slot.slot_id == slot_id:
                    return position_value(slot.position)
            return slot_id
    raise TypeError(f"unsupported placement target {target!r}")
