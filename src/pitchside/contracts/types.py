from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal


class PositionCode(str, Enum):
    GK = "GK"
    CB = "CB"
    LB = "LB"
    RB = "RB"
    LWB = "LWB"
    RWB = "RWB"
    CDM = "CDM"
    CM = "CM"
    CAM = "CAM"
    LM = "LM"
    RM = "RM"
    LAM = "LAM"
    RAM = "RAM"
    CF = "CF"
    ST = "ST"
    LW = "LW"
    RW = "RW"
    LF = "LF"
    RF = "RF"


class Line(str, Enum):
    GK = "GK"
    DEF = "DEF"
    MID = "MID"
    ATT = "ATT"


class PlacementReason(str, Enum):
    EXACT_PRIMARY = "exact primary"
    EXACT_SECONDARY = "exact secondary"
    ALTERNATE_HIGH = "alternate (0.8)"
    ALTERNATE_LOW = "alternate (0.6)"
    NO_FORMATION = "no formation/slots"
    NO_OPEN_SLOTS = "no open field slots"
    GK_RULE = "no compatible slots (GK rule)"
    BENCH_FALLBACK = "bench fallback (score=0)"
    MOVED_TO_BENCH = "moved to bench"


@dataclass(slots=True)
class Player:
    player_id: str
    name: str
    primary_position: str | None
    secondary_positions: list[str] = field(default_factory=list)
    jersey: int | None = None


@dataclass(frozen=True, slots=True)
class FormationSlot:
    slot_id: str
    position: str
    x: float | None = None
    y: float | None = None


@dataclass(slots=True)
class Formation:
    code: str
    name: str
    orientation: str
    slots: list[FormationSlot]
    nickname: str | None = None


@dataclass(frozen=True, slots=True)
class FieldTarget:
    slot_id: str
    kind: Literal["field"] = "field"


@dataclass(frozen=True, slots=True)
class BenchTarget:
    bench_index: int
    kind: Literal["bench"] = "bench"


PlacementTarget = FieldTarget | BenchTarget


@dataclass(frozen=True, slots=True)
class PlacementResult:
    target: PlacementTarget
    reason: PlacementReason


@dataclass(slots=True)
class WorkingLineup:
    team_id: str
    formation_code: str
    on_field: dict[str, str | None]
    bench_slots: list[str | None]
    roles: dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class PlacementOutcome:
    success: bool
    message: str
    result: PlacementResult | None = None


@dataclass(slots=True)
class LineupStatus:
    starters: int
    available_count: int
    can_save: bool
    reasons: list[str]


@dataclass(slots=True)
class ValidationIssue:
    code: str
    severity: str
    field_path: str
    entity_id: str
    message: str


@dataclass(slots=True)
class ValidationResult:
    ok: bool
    issues: list[ValidationIssue]


class ValidationError(ValueError):
    def __init__(self, issues: list[ValidationIssue]) -> None:
        message = "; ".join(f"{i.code}:{i.entity_id}:{i.message}" for i in issues)
        super().__init__(message)
        self.issues = issues


@dataclass(slots=True)
class ResourceManifest:
    resource_type: str
    schema_version: str
    resource_version: str
    generated_at: str
    checksum: str


@dataclass(slots=True)
class LineupConfig:
    bench_capacity: int = 8
    starters_required: int = 11
    pitch_length: float = 105.0
    pitch_width: float = 68.0

    def validate(self) -> None:
        values = [self.bench_capacity, self.starters_required, self.pitch_length, self.pitch_width]
        if any(v <= 0 for v in values):
            raise ValueError("lineup configuration values must be positive")
