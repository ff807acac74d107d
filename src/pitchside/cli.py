from __future__ import annotations

import argparse
import logging
import sys

from pitchside.contracts import FieldTarget, Player, ValidationError
from pitchside.core import make_id
from pitchside.lineup import (
    FormationCatalog,
    describe_target,
    find_best_slot_for_player,
    friendly_placement_message,
    get_compatibility_score,
    normalize_position,
)


def _position_arg(value: str) -> str:
    code = normalize_position(value)
    if code is None:
        raise argparse.ArgumentTypeError(f"unknown position '{value}'")
    return code.value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pitchside", description="Pitchside: lineup placement engine")
    parser.add_argument("--verbose", action="store_true", help="enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("formations", help="list packaged formations")

    place = sub.add_parser("place", help="auto-place one player into a formation")
    place.add_argument("--formation", required=True, help="formation code, e.g. 4-3-3")
    place.add_argument("--primary", required=True, type=_position_arg, help="primary position")
    place.add_argument(
        "--secondary", action="append", default=[], type=_position_arg, help="secondary position (repeatable)"
    )
    place.add_argument("--occupied", action="append", default=[], help="slot id already taken (repeatable)")
    place.add_argument("--bench-filled", type=int, default=0, help="number of leading bench entries taken")
    place.add_argument("--bench-size", type=int, default=8, help="bench length")
    place.add_argument("--name", default="Player", help="display name")

    score = sub.add_parser("score", help="compatibility score of a player position in a slot position")
    score.add_argument("slot_position", type=_position_arg)
    score.add_argument("player_position", type=_position_arg)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.command == "score":
        print(f"{get_compatibility_score(args.slot_position, args.player_position):.1f}")
        return 0

    try:
        catalog = FormationCatalog()
        if args.command == "formations":
            for formation in catalog.formations():
                positions = " ".join(slot.position for slot in formation.slots)
                print(f"- {formation.name} ({formation.code}): {positions}")
            return 0

        slots = catalog.slots(args.formation)
    except ValidationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    player = Player(
        player_id=make_id("player"),
        name=args.name,
        primary_position=args.primary,
        secondary_positions=args.secondary,
    )
    on_field = {slot_id: "occupied" for slot_id in args.occupied}
    filled = max(0, min(args.bench_filled, args.bench_size))
    bench = [f"bench_{idx}" for idx in range(filled)] + [None] * (args.bench_size - filled)

    result = find_best_slot_for_player(player, slots, on_field, bench)
    print(friendly_placement_message(result.reason, player.name, describe_target(result.target, slots)))
    if isinstance(result.target, FieldTarget):
        print(f"target=field slot_id={result.target.slot_id} reason={result.reason.value}")
    else:
        print(f"target=bench bench_index={result.target.bench_index} reason={result.reason.value}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
