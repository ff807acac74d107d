from __future__ import annotations

from typing import Iterable

from pitchside.config import default_lineup_config
from pitchside.contracts import LineupConfig, LineupStatus, WorkingLineup


def compute_lineup_status(
    lineup: WorkingLineup | None,
    roster_ids: Iterable[str],
    config: LineupConfig | None = None,
) -> LineupStatus:
    config = config or default_lineup_config()
    on_field = {pid for pid in (lineup.on_field.values() if lineup else []) if pid}
    bench = {pid for pid in (lineup.bench_slots if lineup else []) if pid}
    available_count = sum(1 for pid in roster_ids if pid not in on_field and pid not in bench)

    starters = len(on_field)
    reasons: list[str] = []
    if starters != config.starters_required:
        reasons.append(f"{starters}/{config.starters_required} on field")
    if available_count > 0:
        reasons.append(f"{available_count} player(s) still in Available")
    return LineupStatus(
        starters=starters,
        available_count=available_count,
        can_save=starters == config.starters_required and available_count == 0,
        reasons=reasons,
    )
