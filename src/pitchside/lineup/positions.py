from __future__ import annotations

import re
from typing import Iterable

from pitchside.contracts import Line, PositionCode

GOALKEEPER = PositionCode.GK

POSITION_LABELS: dict[PositionCode, str] = {
    PositionCode.GK: "Goalkeeper",
    PositionCode.CB: "Center Back",
    PositionCode.LB: "Left Back",
    PositionCode.RB: "Right Back",
    PositionCode.LWB: "Left Wing Back",
    PositionCode.RWB: "Right Wing Back",
    PositionCode.CDM: "Central Defensive Midfielder",
    PositionCode.CM: "Center Midfielder",
    PositionCode.CAM: "Central Attacking Midfielder",
    PositionCode.LM: "Left Midfielder",
    PositionCode.RM: "Right Midfielder",
    PositionCode.LAM: "Left Attacking Midfielder",
    PositionCode.RAM: "Right Attacking Midfielder",
    PositionCode.CF: "Center Forward",
    PositionCode.ST: "Striker",
    PositionCode.LW: "Left Winger",
    PositionCode.RW: "Right Winger",
    PositionCode.LF: "Left Forward",
    PositionCode.RF: "Right Forward",
}

# Sided and legacy codes are accepted for line grouping only.
_LINE_MEMBERS: dict[Line, frozenset[str]] = {
    Line.GK: frozenset({"GK"}),
    Line.DEF: frozenset({"CB", "LB", "RB", "LWB", "RWB", "LCB", "RCB"}),
    Line.MID: frozenset({"CDM", "CM", "CAM", "LM", "RM", "LAM", "RAM", "DM", "LCM", "RCM"}),
    Line.ATT: frozenset({"CF", "ST", "LW", "RW", "LF", "RF", "LST", "RST"}),
}

LEGACY_POSITION_MAP: dict[str, PositionCode] = {
    "CB1": PositionCode.CB,
    "CB2": PositionCode.CB,
    "LCB": PositionCode.CB,
    "RCB": PositionCode.CB,
    "CM1": PositionCode.CM,
    "CM2": PositionCode.CM,
    "CM3": PositionCode.CM,
    "LCM": PositionCode.CM,
    "RCM": PositionCode.CM,
    "DM": PositionCode.CDM,
    "ST1": PositionCode.ST,
    "ST2": PositionCode.ST,
    "D": PositionCode.CB,
    "DEF": PositionCode.CB,
    "DEFENSE": PositionCode.CB,
    "DEFENDER": PositionCode.CB,
    "BACK": PositionCode.CB,
    "CENTRE BACK": PositionCode.CB,
    "CENTER BACK": PositionCode.CB,
    "M": PositionCode.CM,
    "MID": PositionCode.CM,
    "MIDFIELD": PositionCode.CM,
    "MIDFIELDER": PositionCode.CM,
    "CENTRE MID": PositionCode.CM,
    "CENTER MID": PositionCode.CM,
    "CENTRE MIDFIELDER": PositionCode.CM,
    "CENTER MIDFIELDER": PositionCode.CM,
    "F": PositionCode.ST,
    "FWD": PositionCode.ST,
    "FORWARD": PositionCode.ST,
    "ATT": PositionCode.ST,
    "ATTACK": PositionCode.ST,
    "STRIKER": PositionCode.ST,
    "CENTRE FORWARD": PositionCode.CF,
    "CENTER FORWARD": PositionCode.CF,
    "WING": PositionCode.LW,
    "WINGER": PositionCode.LW,
    "LEFT ATTACKING MID": PositionCode.LAM,
    "LEFT ATTACKING MIDFIELDER": PositionCode.LAM,
    "LEFT AM": PositionCode.LAM,
    "L AM": PositionCode.LAM,
    "RIGHT ATTACKING MID": PositionCode.RAM,
    "RIGHT ATTACKING MIDFIELDER": PositionCode.RAM,
    "RIGHT AM": PositionCode.RAM,
    "R AM": PositionCode.RAM,
}

_TRAILING_NUMBER = re.compile(r"\d+$")
_CANONICAL_CODES = frozenset(code.value for code in PositionCode)


def is_valid_position(code: object) -> bool:
    if not isinstance(code, str) or not code:
        return False
    return code in _CANONICAL_CODES


def position_line(code: str | None) -> Line:
    if not code:
        return Line.MID
    upper = str(code).upper()
    for line, members in _LINE_MEMBERS.items():
        if upper in members:
            return line
    return Line.MID


def normalize_position(raw: object) -> PositionCode | None:
    """Map a loose or legacy position string onto a canonical code.

    Separators (``-`` and ``_``) become spaces, a trailing squad number is
    ignored when nothing matches with it. Returns None for anything that
    cannot be resolved.
    """
    if isinstance(raw, PositionCode):
        return raw
    if not isinstance(raw, str) or not raw.strip():
        return None
    normalized = re.sub(r"[-_]", " ", raw.strip().upper())
    for candidate in (normalized, _TRAILING_NUMBER.sub("", normalized).strip()):
        if is_valid_position(candidate):
            return PositionCode(candidate)
        if candidate in LEGACY_POSITION_MAP:
            return LEGACY_POSITION_MAP[candidate]
    return None


def normalize_positions(values: Iterable[object] | None) -> list[PositionCode]:
    if not values or isinstance(values, str):
        return []
    codes: list[PositionCode] = []
    for value in values:
        code = normalize_position(value)
        if code is not None:
            codes.append(code)
    return codes


def position_value(code: object) -> str:
    if isinstance(code, PositionCode):
        return code.value
    return str(code) if code is not None else ""
