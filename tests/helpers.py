from __future__ import annotations

from pitchside.contracts import FormationSlot, Player


def make_player(player_id: str, primary: str | None, secondaries: list[str] | None = None, name: str | None = None) -> Player:
    return Player(
        player_id=player_id,
        name=name or f"Player {player_id}",
        primary_position=primary,
        secondary_positions=list(secondaries or []),
        jersey=1,
    )


def make_slot(slot_id: str, position: str, x: float | None = 50, y: float | None = 50) -> FormationSlot:
    return FormationSlot(slot_id=slot_id, position=position, x=x, y=y)


def empty_bench(size: int = 8) -> list[str | None]:
    return [None] * size
