from __future__ import annotations

import pytest

from pitchside.cli import main


def test_formations_lists_packaged_shapes(capsys):
    assert main(["formations"]) == 0
    out = capsys.readouterr().out
    assert "- 4-3-3 (433): GK LB CB CB RB CDM CM CM LW ST RW" in out
    assert "4-2-3-1" in out


def test_place_prints_friendly_message_and_decision(capsys):
    assert main(["place", "--formation", "4-3-3", "--primary", "st", "--name", "Nine"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "Nine → ST (Perfect match)"
    assert out[1] == "target=field slot_id=433:ST:0 reason=exact primary"


def test_place_reports_bench_index(capsys):
    args = ["place", "--formation", "433", "--primary", "GK", "--occupied", "433:GK:0", "--bench-filled", "3"]
    assert main(args) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "Player → Bench (Bench (no fit))"
    assert out[1] == "target=bench bench_index=3 reason=bench fallback (score=0)"


def test_place_with_secondary_position(capsys):
    assert main(["place", "--formation", "4-2-3-1", "--primary", "CB", "--secondary", "lam"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[1] == "target=field slot_id=4231:CB:1 reason=exact primary"


def test_unknown_formation_exits_with_error(capsys):
    assert main(["place", "--formation", "9-9-9", "--primary", "ST"]) == 1
    assert "UNKNOWN_FORMATION" in capsys.readouterr().err


def test_score_command(capsys):
    assert main(["score", "CAM", "CM"]) == 0
    assert capsys.readouterr().out.strip() == "0.8"


def test_invalid_position_is_usage_error():
    with pytest.raises(SystemExit) as exc:
        main(["score", "CAM", "keeper"])
    assert exc.value.code == 2


def test_unknown_secondary_position_is_usage_error():
    with pytest.raises(SystemExit) as exc:
        main(["place", "--formation", "4-3-3", "--primary", "CM", "--secondary", "CMM"])
    assert exc.value.code == 2
