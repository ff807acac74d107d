from __future__ import annotations

import hashlib
import json
import logging
from dataclasses import dataclass
from importlib import resources
from typing import Any, Iterable, Mapping

from pitchside.config import default_lineup_config
from pitchside.contracts import (
    Formation,
    FormationSlot,
    LineupConfig,
    ResourceManifest,
    ValidationError,
    ValidationIssue,
    ValidationResult,
)
from pitchside.core import blocking_issue
from pitchside.lineup.positions import GOALKEEPER, is_valid_position

logger = logging.getLogger(__name__)

EXPECTED_SCHEMA_VERSION = "1.0"
EXPECTED_ORIENTATION = "left-right"
MANIFEST_FIELDS = ("resource_type", "schema_version", "resource_version", "generated_at", "checksum")

_ID_KEYS = ("id", "slotId", "slot_id", "key", "name", "uid")
_POSITION_KEYS = ("expectedPos", "pos", "position", "role", "slot_code", "expected", "code")
_X_KEYS = ("x", "x_pct", "left", "cx")
_Y_KEYS = ("y", "y_pct", "top", "cy")


def _first(raw: Mapping[str, Any], keys: Iterable[str], default: Any = None) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return default


def normalize_slot(raw: object, idx: int) -> FormationSlot | None:
    """Read one slot from any of the shapes older formation seeds used."""
    if not isinstance(raw, Mapping):
        return None
    slot_id = str(_first(raw, _ID_KEYS, f"slot_{idx}"))
    position = _first(raw, _POSITION_KEYS)
    if position is None or not slot_id:
        return None
    try:
        x = float(_first(raw, _X_KEYS, 0))
        y = float(_first(raw, _Y_KEYS, 0))
    except (TypeError, ValueError):
        return None
    return FormationSlot(slot_id=slot_id, position=str(position).upper(), x=x, y=y)


def normalized_slots(formation: Mapping[str, Any] | None) -> list[FormationSlot]:
    if not formation:
        return []
    raw_list = formation.get("slots") or formation.get("slot_map") or []
    slots = []
    for idx, raw in enumerate(raw_list):
        slot = normalize_slot(raw, idx)
        if slot is not None:
            slots.append(slot)
    return slots


def generate_slot_ids(formation_code: str, slot_codes: Iterable[str]) -> list[str]:
    counts: dict[str, int] = {}
    ids = []
    for slot_code in slot_codes:
        count = counts.get(slot_code, 0)
        counts[slot_code] = count + 1
        ids.append(f"{formation_code}:{slot_code}:{count}")
    return ids


def normalize_formation_key(value: str | None) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    if "-" in text:
        return text
    digits = "".join(ch for ch in text if ch.isdigit())
    if 3 <= len(digits) <= 5:
        return "-".join(digits)
    return text


def formation_key_variants(value: str | None) -> list[str]:
    hyphenated = normalize_formation_key(value) or ""
    compact = hyphenated.replace("-", "")
    variants: list[str] = []
    for candidate in (value or "", hyphenated, compact):
        if candidate and candidate not in variants:
            variants.append(candidate)
    return variants


def validate_formation(formation: Formation, config: LineupConfig | None = None) -> ValidationResult:
    config = config or default_lineup_config()
    issues: list[ValidationIssue] = []
    code = formation.code
    if len(formation.slots) != config.starters_required:
        issues.append(
            blocking_issue(
                "FORMATION_SLOT_COUNT",
                f"formation.{code}.slot_map",
                code,
                f"expected {config.starters_required} slots, got {len(formation.slots)}",
            )
        )
    if formation.orientation != EXPECTED_ORIENTATION:
        issues.append(
            blocking_issue(
                "FORMATION_ORIENTATION",
                f"formation.{code}.orientation",
                code,
                f"orientation must be '{EXPECTED_ORIENTATION}', got '{formation.orientation}'",
            )
        )
    slot_ids = [slot.slot_id for slot in formation.slots]
    if len(slot_ids) != len(set(slot_ids)):
        issues.append(blocking_issue("DUPLICATE_SLOT_ID", f"formation.{code}.slot_map", code, "slot ids must be unique"))

    for slot in formation.slots:
        if not is_valid_position(slot.position):
            issues.append(
                blocking_issue(
                    "UNKNOWN_SLOT_POSITION",
                    f"formation.{code}.{slot.slot_id}",
                    slot.slot_id,
                    f"'{slot.position}' is not a canonical position code",
                )
            )
        x = slot.x if slot.x is not None else -1.0
        y = slot.y if slot.y is not None else -1.0
        if not (0 <= x <= config.pitch_length and 0 <= y <= config.pitch_width):
            issues.append(
                blocking_issue(
                    "SLOT_OUT_OF_BOUNDS",
                    f"formation.{code}.{slot.slot_id}",
                    slot.slot_id,
                    f"coordinates ({slot.x}, {slot.y}) outside {config.pitch_length}x{config.pitch_width}",
                )
            )

    keepers = [slot for slot in formation.slots if slot.position == GOALKEEPER.value]
    outfield = [slot for slot in formation.slots if slot.position != GOALKEEPER.value and slot.x is not None]
    if len(keepers) != 1:
        issues.append(
            blocking_issue("GOALKEEPER_SLOT_COUNT", f"formation.{code}.slot_map", code, "exactly one GK slot is required")
        )
    elif outfield and keepers[0].x is not None and keepers[0].x >= min(slot.x for slot in outfield):
        issues.append(
            blocking_issue("GOALKEEPER_NOT_DEEPEST", f"formation.{code}.{keepers[0].slot_id}", code, "GK must be leftmost")
        )
    return ValidationResult(ok=not issues, issues=issues)


@dataclass(slots=True)
class FormationBundle:
    manifest: ResourceManifest
    formations_by_code: dict[str, Formation]


class FormationCatalog:
    """Packaged formation registry with manifest and checksum verification."""

    RESOURCE_PACKAGE = "pitchside.resources.lineup"
    RESOURCE_FILE = "formations.json"
    RESOURCE_TYPE = "formation"

    def __init__(self, bundle_override: dict[str, Any] | None = None, config: LineupConfig | None = None) -> None:
        self._config = config or default_lineup_config()
        self._config.validate()
        self._bundle = self._load_bundle(bundle_override)
        logger.info(
            "loaded %d formations (resource_version=%s)",
            len(self._bundle.formations_by_code),
            self._bundle.manifest.resource_version,
        )

    @property
    def manifest(self) -> ResourceManifest:
        return self._bundle.manifest

    def formation_codes(self) -> list[str]:
        return sorted(self._bundle.formations_by_code.keys())

    def formations(self) -> list[Formation]:
        return [self._bundle.formations_by_code[code] for code in self.formation_codes()]

    def resolve(self, key: str) -> Formation:
        variants = formation_key_variants(key)
        for variant in variants:
            if variant in self._bundle.formations_by_code:
                return self._bundle.formations_by_code[variant]
        for formation in self._bundle.formations_by_code.values():
            if formation.name in variants or (formation.nickname and formation.nickname in variants):
                return formation
        raise ValidationError(
            [blocking_issue("UNKNOWN_FORMATION", "formation_code", str(key), f"formation '{key}' is not registered")]
        )

    def slots(self, key: str) -> list[FormationSlot]:
        return list(self.resolve(key).slots)

    def _load_bundle(self, bundle_override: dict[str, Any] | None) -> FormationBundle:
        if bundle_override is not None:
            payload = bundle_override
        else:
            package = resources.files(self.RESOURCE_PACKAGE)
            payload = json.loads((package / self.RESOURCE_FILE).read_text(encoding="utf-8"))

        manifest_data = payload.get("manifest")
        resources_list = payload.get("resources")
        if not isinstance(manifest_data, dict) or not isinstance(resources_list, list):
            raise self._bundle_error(
                "INVALID_RESOURCE_BUNDLE", self.RESOURCE_FILE, "bundle needs a manifest and a resources list"
            )
        missing = sorted(set(MANIFEST_FIELDS) - manifest_data.keys())
        if missing:
            raise self._bundle_error(
                "MISSING_REQUIRED_RUNTIME_CONFIG", f"{self.RESOURCE_FILE}.manifest", f"manifest lacks {missing}"
            )
        manifest = ResourceManifest(**{name: str(manifest_data[name]) for name in MANIFEST_FIELDS})
        issues = self._validate_manifest(manifest, resources_list)
        if issues:
            raise ValidationError(issues)

        by_code: dict[str, Formation] = {}
        for entry in resources_list:
            code = str(entry.get("id", "")) if isinstance(entry, dict) else ""
            if not code:
                continue
            formation = Formation(
                code=code,
                name=str(entry.get("name", code)),
                orientation=str(entry.get("orientation", "")),
                slots=normalized_slots(entry),
                nickname=entry.get("nickname"),
            )
            issues.extend(validate_formation(formation, self._config).issues)
            by_code[code] = formation
        if issues:
            raise ValidationError(issues)
        if not by_code:
            raise self._bundle_error("EMPTY_RESOURCE_SET", self.RESOURCE_FILE, "no entry carries a formation id")
        return FormationBundle(manifest=manifest, formations_by_code=by_code)

    def _validate_manifest(self, manifest: ResourceManifest, resources_list: list[Any]) -> list[ValidationIssue]:
        checks = (
            (
                manifest.resource_type == self.RESOURCE_TYPE,
                "RESOURCE_TYPE_MISMATCH",
                "resource_type",
                f"'{manifest.resource_type}' is not '{self.RESOURCE_TYPE}'",
            ),
            (
                manifest.schema_version == EXPECTED_SCHEMA_VERSION,
                "RESOURCE_SCHEMA_MISMATCH",
                "schema_version",
                f"schema {manifest.schema_version} is not {EXPECTED_SCHEMA_VERSION}",
            ),
            (
                manifest.checksum == resource_checksum(resources_list),
                "RESOURCE_CHECKSUM_MISMATCH",
                "checksum",
                "checksum does not match the resources payload",
            ),
        )
        return [
            blocking_issue(code, f"manifest.{field}", self.RESOURCE_TYPE, message)
            for passed, code, field, message in checks
            if not passed
        ]

    def _bundle_error(self, code: str, field_path: str, message: str) -> ValidationError:
        return ValidationError([blocking_issue(code, field_path, self.RESOURCE_TYPE, message)])


def resource_checksum(resources_list: list[Any]) -> str:
    canonical = json.dumps(resources_list, sort_keys=True, separators=(",", ":")).encode("utf-8")
    return hashlib.sha256(canonical).hexdigest()
