from __future__ import annotations

from pitchside.contracts import BenchTarget, FieldTarget, PlacementReason
from pitchside.lineup.placement import find_best_slot_for_player, first_open_bench_index, score_slot
from tests.helpers import empty_bench, make_player, make_slot


def test_prioritizes_exact_primary_match():
    player = make_player("p1", "ST")
    slots = [make_slot("slot1", "CF", 40, 50), make_slot("slot2", "ST", 50, 50), make_slot("slot3", "LW", 60, 50)]

    result = find_best_slot_for_player(player, slots, {}, [])

    assert result.target == FieldTarget(slot_id="slot2")
    assert result.reason == PlacementReason.EXACT_PRIMARY
    assert result.reason == "exact primary"


def test_exact_secondary_beats_primary_alternate():
    player = make_player("p1", "CM", ["ST"])
    slots = [make_slot("slot1", "CAM", 40, 50), make_slot("slot2", "ST", 50, 50)]

    result = find_best_slot_for_player(player, slots, {}, [])

    assert result.target == FieldTarget(slot_id="slot2")
    assert result.reason == "exact secondary"


def test_higher_compatibility_score_wins():
    player = make_player("p1", "CM")
    slots = [make_slot("slot1", "LAM", 40, 50), make_slot("slot2", "CAM", 50, 50)]

    result = find_best_slot_for_player(player, slots, {}, [])

    assert result.target == FieldTarget(slot_id="slot2")
    assert result.reason == "alternate (0.8)"


def test_low_tier_alternate_reason():
    player = make_player("p1", "CAM")
    slots = [make_slot("slot1", "LAM", 50, 50)]

    result = find_best_slot_for_player(player, slots, {}, [])

    assert result.target == FieldTarget(slot_id="slot1")
    assert result.reason == "alternate (0.6)"


def test_high_tier_beats_low_tier_regardless_of_position():
    player = make_player("p1", "CAM")
    slots = [make_slot("slot1", "CF", 10, 10), make_slot("slot2", "CM", 90, 60)]

    result = find_best_slot_for_player(player, slots, {}, [])

    assert result.target == FieldTarget(slot_id="slot2")


def test_secondary_alternate_can_beat_primary_alternate():
    player = make_player("p1", "CAM", ["LB"])
    slots = [make_slot("slot1", "RAM", 10, 50), make_slot("slot2", "LWB", 90, 50)]

    result = find_best_slot_for_player(player, slots, {}, [])

    assert result.target == FieldTarget(slot_id="slot2")
    assert result.reason == "alternate (0.8)"


def test_x_coordinate_breaks_ties():
    player = make_player("p1", "CM")
    slots = [make_slot("slot1", "CDM", 60, 50), make_slot("slot2", "CAM", 40, 50), make_slot("slot3", "CDM", 50, 50)]

    result = find_best_slot_for_player(player, slots, {}, [])

    assert result.target == FieldTarget(slot_id="slot2")


def test_y_coordinate_breaks_ties_after_x():
    player = make_player("p1", "CM")
    slots = [make_slot("slot1", "CDM", 50, 60), make_slot("slot2", "CAM", 50, 40)]

    result = find_best_slot_for_player(player, slots, {}, [])

    assert result.target == FieldTarget(slot_id="slot2")


def test_slot_id_breaks_ties_after_coordinates():
    player = make_player("p1", "CM")
    slots = [make_slot("slot_z", "CDM"), make_slot("slot_a", "CAM"), make_slot("slot_m", "CDM")]

    result = find_best_slot_for_player(player, slots, {}, [])

    assert result.target == FieldTarget(slot_id="slot_a")


def test_missing_coordinates_rank_after_known_ones():
    player = make_player("p1", "CM")
    slots = [make_slot("slot_a", "CDM", None, None), make_slot("slot_b", "CAM", 99, 60)]

    result = find_best_slot_for_player(player, slots, {}, [])

    assert result.target == FieldTarget(slot_id="slot_b")


def test_empty_formation_goes_to_bench_with_own_reason():
    player = make_player("p1", "ST")

    for slots in ([], None):
        result = find_best_slot_for_player(player, slots, {}, empty_bench())
        assert result.target == BenchTarget(bench_index=0)
        assert result.reason == PlacementReason.NO_FORMATION


def test_full_formation_goes_to_bench_with_own_reason():
    player = make_player("p1", "ST")
    slots = [make_slot("slot1", "ST"), make_slot("slot2", "CF")]

    result = find_best_slot_for_player(player, slots, {"slot1": "p2", "slot2": "p3"}, ["p4", None])

    assert result.target == BenchTarget(bench_index=1)
    assert result.reason == PlacementReason.NO_OPEN_SLOTS


def test_gk_rule_never_places_outfield_player_in_goal():
    player = make_player("p1", "CB")
    slots = [make_slot("slot1", "GK")]

    result = find_best_slot_for_player(player, slots, {}, [])

    assert isinstance(result.target, BenchTarget)
    assert result.reason == "no compatible slots (GK rule)"


def test_bench_reasons_differ_between_empty_formation_and_gk_rule():
    player = make_player("p1", "ST")
    empty = find_best_slot_for_player(player, [], {}, [])
    gk_only = find_best_slot_for_player(player, [make_slot("slot1", "GK")], {}, [])

    assert empty.target.kind == gk_only.target.kind == "bench"
    assert empty.reason != gk_only.reason


def test_goalkeeper_enters_goal_slot():
    player = make_player("p1", "GK")
    result = find_best_slot_for_player(player, [make_slot("slot1", "GK")], {}, [])

    assert result.target == FieldTarget(slot_id="slot1")
    assert result.reason == "exact primary"


def test_secondary_goalkeeper_enters_goal_slot():
    player = make_player("p1", "CB", ["GK"])
    result = find_best_slot_for_player(player, [make_slot("slot1", "GK")], {}, [])

    assert result.target == FieldTarget(slot_id="slot1")
    assert result.reason == "exact secondary"


def test_goalkeeper_capable_player_still_prefers_outfield_primary():
    player = make_player("p1", "CB", ["GK"])
    slots = [make_slot("gk", "GK", 5, 34), make_slot("cb", "CB", 20, 34)]

    result = find_best_slot_for_player(player, slots, {}, [])

    assert result.target == FieldTarget(slot_id="cb")
    assert result.reason == "exact primary"


def test_zero_score_falls_back_to_first_open_bench_entry():
    player = make_player("p1", "GK")
    result = find_best_slot_for_player(player, [make_slot("slot1", "ST")], {}, empty_bench())

    assert result.target == BenchTarget(bench_index=0)
    assert result.reason == "bench fallback (score=0)"


def test_bench_fallback_uses_first_empty_index():
    player = make_player("p1", "GK")
    bench = ["p2", "p3", None, None, None, None, None, None]

    result = find_best_slot_for_player(player, [make_slot("slot1", "ST")], {}, bench)

    assert result.target == BenchTarget(bench_index=2)


def test_full_bench_appends():
    player = make_player("p1", "GK")
    bench = ["p2", "p3", "p4", "p5", "p6", "p7", "p8", "p9"]

    result = find_best_slot_for_player(player, [make_slot("slot1", "ST")], {}, bench)

    assert result.target == BenchTarget(bench_index=8)


def test_bench_capacity_is_not_fixed():
    assert first_open_bench_index(["a", "b", "c"]) == 3
    assert first_open_bench_index(["a", "", "c"]) == 1
    assert first_open_bench_index([]) == 0
    assert first_open_bench_index(None) == 0


def test_filled_slots_are_skipped():
    player = make_player("p1", "ST")
    slots = [make_slot("slot1", "ST", 50, 50), make_slot("slot2", "CF", 60, 50)]

    result = find_best_slot_for_player(player, slots, {"slot1": "p2"}, [])

    assert result.target == FieldTarget(slot_id="slot2")
    assert result.reason == "alternate (0.8)"


def test_empty_occupant_values_count_as_open():
    player = make_player("p1", "ST")
    slots = [make_slot("slot1", "ST")]

    assert find_best_slot_for_player(player, slots, {"slot1": None}, []).target == FieldTarget(slot_id="slot1")
    assert find_best_slot_for_player(player, slots, {"slot1": ""}, []).target == FieldTarget(slot_id="slot1")
    assert find_best_slot_for_player(player, slots, None, None).target == FieldTarget(slot_id="slot1")


def test_missing_primary_is_scored_as_centre_back():
    player = make_player("p1", None)
    slots = [make_slot("slot1", "ST", 10, 10), make_slot("slot2", "CB", 90, 60)]

    result = find_best_slot_for_player(player, slots, {}, [])

    assert result.target == FieldTarget(slot_id="slot2")


def test_score_slot_buckets():
    player = make_player("p1", "CM", ["ST", "LB"])
    assert score_slot(player, make_slot("a", "CM")) == (1.0, 1)
    assert score_slot(player, make_slot("b", "ST")) == (1.0, 2)
    assert score_slot(player, make_slot("c", "CF")) == (0.8, 3)
    assert score_slot(player, make_slot("d", "RB")) == (0.0, 3)


def test_resolution_is_deterministic():
    player = make_player("p1", "CM")
    slots = [make_slot("slot1", "CDM"), make_slot("slot2", "CAM")]

    results = [find_best_slot_for_player(player, slots, {}, []) for _ in range(3)]

    assert results[0] == results[1] == results[2]


def test_input_order_does_not_change_winner():
    player = make_player("p1", "CM")
    slots = [make_slot("slot_z", "CDM"), make_slot("slot_a", "CAM"), make_slot("slot_m", "CDM")]

    forward = find_best_slot_for_player(player, slots, {}, [])
    backward = find_best_slot_for_player(player, list(reversed(slots)), {}, [])

    assert forward == backward


def test_inputs_are_not_mutated():
    player = make_player("p1", "GK")
    slots = [make_slot("slot1", "ST")]
    on_field = {"slot1": None}
    bench = ["p2", None]

    find_best_slot_for_player(player, slots, on_field, bench)

    assert slots == [make_slot("slot1", "ST")]
    assert on_field == {"slot1": None}
    assert bench == ["p2", None]
