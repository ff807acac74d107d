from .board import LineupBoard, start_lineup
from .compatibility import COMPATIBILITY_MATRIX, RELATIONS, get_compatibility_score, relation_asymmetries
from .formations import FormationCatalog, normalize_formation_key, normalize_slot, normalized_slots, validate_formation
from .messages import describe_target, friendly_placement_message, friendly_reason
from .placement import find_best_slot_for_player, first_open_bench_index
from .positions import normalize_position, normalize_positions, position_line
from .status import compute_lineup_status

__all__ = [
    "COMPATIBILITY_MATRIX",
    "FormationCatalog",
    "LineupBoard",
    "RELATIONS",
    "compute_lineup_status",
    "describe_target",
    "find_best_slot_for_player",
    "first_open_bench_index",
    "friendly_placement_message",
    "friendly_reason",
    "get_compatibility_score",
    "normalize_formation_key",
    "normalize_position",
    "normalize_positions",
    "normalize_slot",
    "normalized_slots",
    "position_line",
    "relation_asymmetries",
    "start_lineup",
    "validate_formation",
]
