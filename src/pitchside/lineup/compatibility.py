from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from pitchside.contracts import PositionCode, ValidationIssue
from pitchside.core import blocking_issue
from pitchside.lineup.positions import position_value

P = PositionCode

DIRECT_NEIGHBOR_SCORE = 0.8
ATTACKING_NEIGHBOR_SCORE = 0.6

RELATIONS: dict[PositionCode, tuple[PositionCode, ...]] = {
    P.GK: (),
    P.CB: (),
    P.LB: (P.LWB,),
    P.LWB: (P.LB,),
    P.RB: (P.RWB,),
    P.RWB: (P.RB,),
    P.CDM: (P.CM,),
    P.CM: (P.CDM, P.CAM),
    P.CAM: (P.CM, P.LAM, P.RAM, P.CF),
    P.LAM: (P.CAM, P.LF, P.LM),
    P.RAM: (P.CAM, P.RF, P.RM),
    P.LM: (P.LW, P.LAM),
    P.RM: (P.RW, P.RAM),
    P.LF: (P.LAM, P.CF),
    P.RF: (P.RAM, P.CF),
    P.CF: (P.ST, P.LF, P.RF, P.CAM),
    P.LW: (P.LM,),
    P.RW: (P.RM,),
    P.ST: (P.CF,),
}

# (player position, slot position)
DIRECT_NEIGHBOR_PAIRS: tuple[tuple[PositionCode, PositionCode], ...] = (
    (P.LB, P.LWB), (P.LWB, P.LB),
    (P.RB, P.RWB), (P.RWB, P.RB),
    (P.LM, P.LW), (P.LW, P.LM),
    (P.RM, P.RW), (P.RW, P.RM),
    (P.CDM, P.CM), (P.CM, P.CDM),
    (P.CM, P.CAM), (P.CAM, P.CM),
    (P.CF, P.ST), (P.ST, P.CF),
)

ATTACKING_NEIGHBOR_PAIRS: tuple[tuple[PositionCode, PositionCode], ...] = (
    (P.CAM, P.LAM), (P.LAM, P.CAM),
    (P.CAM, P.RAM), (P.RAM, P.CAM),
    (P.CAM, P.CF), (P.CF, P.CAM),
    (P.LAM, P.LM), (P.LM, P.LAM),
    (P.LAM, P.LF), (P.LF, P.LAM),
    (P.RAM, P.RM), (P.RM, P.RAM),
    (P.RAM, P.RF), (P.RF, P.RAM),
    (P.LF, P.CF), (P.CF, P.LF),
    (P.RF, P.CF), (P.CF, P.RF),
)


def _tier_for(player_position: PositionCode, slot_position: PositionCode) -> float:
    pair = (player_position, slot_position)
    if pair in DIRECT_NEIGHBOR_PAIRS:
        return DIRECT_NEIGHBOR_SCORE
    if pair in ATTACKING_NEIGHBOR_PAIRS:
        return ATTACKING_NEIGHBOR_SCORE
    return 0.0


def build_compatibility_matrix(
    relations: Mapping[PositionCode, tuple[PositionCode, ...]] = RELATIONS,
) -> Mapping[str, Mapping[str, float]]:
    matrix: dict[str, Mapping[str, float]] = {}
    for player_position, slot_positions in relations.items():
        scores: dict[str, float] = {}
        for slot_position in slot_positions:
            score = _tier_for(player_position, slot_position)
            if score > 0:
                scores[slot_position.value] = score
        matrix[player_position.value] = MappingProxyType(scores)
    return MappingProxyType(matrix)


# player position -> {slot position: score}; self matches are implicit.
COMPATIBILITY_MATRIX = build_compatibility_matrix()


def get_compatibility_score(slot_position: PositionCode | str | None, player_position: PositionCode | str | None) -> float:
    slot_key = position_value(slot_position)
    player_key = position_value(player_position)
    if slot_key and slot_key == player_key:
        return 1.0
    return COMPATIBILITY_MATRIX.get(player_key, {}).get(slot_key, 0.0)


def relation_asymmetries(
    relations: Mapping[PositionCode, tuple[PositionCode, ...]] = RELATIONS,
) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    matrix = build_compatibility_matrix(relations)
    for player_position, slot_positions in relations.items():
        for slot_position in slot_positions:
            pair_id = f"{player_position.value}->{slot_position.value}"
            score = matrix[player_position.value].get(slot_position.value, 0.0)
            if score == 0.0:
                issues.append(
                    blocking_issue(
                        "RELATION_WITHOUT_TIER",
                        f"relations.{player_position.value}",
                        pair_id,
                        "relation is in no score tier and is dropped from the matrix",
                    )
                )
                continue
            reverse = matrix.get(slot_position.value, {}).get(player_position.value, 0.0)
            if reverse != score:
                issues.append(
                    blocking_issue(
                        "ASYMMETRIC_RELATION",
                        f"relations.{slot_position.value}",
                        pair_id,
                        f"reverse pair scores {reverse} instead of {score}",
                    )
                )
    return issues
