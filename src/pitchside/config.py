from __future__ import annotations

from typing import Any, Mapping

from pitchside.contracts import LineupConfig

_CONFIG_KEYS = {"bench_capacity", "starters_required", "pitch_length", "pitch_width"}


def default_lineup_config() -> LineupConfig:
    return LineupConfig()


def config_from_mapping(payload: Mapping[str, Any]) -> LineupConfig:
    unknown = sorted(set(payload.keys()) - _CONFIG_KEYS)
    if unknown:
        raise ValueError(f"unknown lineup configuration keys: {', '.join(unknown)}")
    defaults = default_lineup_config()
    config = LineupConfig(
        bench_capacity=int(payload.get("bench_capacity", defaults.bench_capacity)),
        starters_required=int(payload.get("starters_required", defaults.starters_required)),
        pitch_length=float(payload.get("pitch_length", defaults.pitch_length)),
        pitch_width=float(payload.get("pitch_width", defaults.pitch_width)),
    )
    config.validate()
    return config
