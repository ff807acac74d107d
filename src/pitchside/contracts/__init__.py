from .types import (
    BenchTarget,
    FieldTarget,
    Formation,
    FormationSlot,
    Line,
    LineupConfig,
    LineupStatus,
    PlacementOutcome,
    PlacementReason,
    PlacementResult,
    PlacementTarget,
    Player,
    PositionCode,
    ResourceManifest,
    ValidationError,
    ValidationIssue,
    ValidationResult,
    WorkingLineup,
)

__all__ = [
    "BenchTarget",
    "FieldTarget",
    "Formation",
    "FormationSlot",
    "Line",
    "LineupConfig",
    "LineupStatus",
    "PlacementOutcome",
    "PlacementReason",
    "PlacementResult",
    "PlacementTarget",
    "Player",
    "PositionCode",
    "ResourceManifest",
    "ValidationError",
    "ValidationIssue",
    "ValidationResult",
    "WorkingLineup",
]
