from palletcalc.models import BoxPlacement, BoxSpec, PalletEnvelope, PalletResult
from palletcalc.sanity import (
    has_overlap,
    is_sane,
    layer_counts,
    out_of_bounds,
    overlapping_pairs,
    placement_rect,
    sanity_flags,
)

BOX = BoxSpec("b", "SKU", length=12, width=10, height=8, quantity=1)
PALLET = PalletEnvelope(width=48, depth=40, height=5.5, max_height=72)


def _place(x, z, layer=0, rotation=0):
    return BoxPlacement(x=x, z=z, box=BOX, rotation=rotation, layer=layer)


def _pallet_result(placements, layers=1):
    return PalletResult(1, placements, layers, 16, len(placements), 0.0, 0.0, 13.5)


def test_placement_rect_respects_rotation():
    assert placement_rect(_place(0, 0)) == (-6, -5, 6, 5)
    assert placement_rect(_place(0, 0, rotation=90)) == (-5, -6, 5, 6)


def test_touching_boxes_do_not_overlap():
    placements = [_place(-6, 0), _place(6, 0)]
    assert overlapping_pairs(placements) == []


def test_overlap_detected_on_same_layer_only():
    placements = [_place(0, 0), _place(4, 0), _place(0, 0, layer=1)]
    assert overlapping_pairs(placements) == [(0, 1)]


def test_out_of_bounds():
    placements = [_place(0, 0), _place(20, 0)]
    assert out_of_bounds(placements, PALLET) == [1]


def test_layer_counts():
    placements = [_place(-6, 0), _place(6, 0), _place(0, 0, layer=1)]
    assert layer_counts(placements) == {0: 2, 1: 1}


def test_sanity_flags():
    good = _pallet_result([_place(-6, 0), _place(6, 0)])
    assert is_sane(good, PALLET)

    bad = _pallet_result([_place(0, 0), _place(4, 0), _place(20, 0, layer=1)])
    assert sanity_flags(bad, PALLET) == {
        "overlapping_boxes",
        "overhang",
        "layer_index_out_of_range",
    }


def test_overlap_found_across_columns():
    placements = [_place(-6, 0), _place(6, 0), _place(6, 4), _place(-18, 0)]
    assert overlapping_pairs(placements) == [(1, 2)]
    assert has_overlap(placements)


def test_repeated_layers_checked_once():
    layer = [(-6, 0), (6, 0), (-6, 10), (6, 10)]
    placements = [_place(x, z, layer=n) for n in range(3) for x, z in layer]
    assert not has_overlap(placements)

    placements.append(_place(0, 10, layer=3))
    placements.append(_place(4, 10, layer=3))
    assert has_overlap(placements)
    assert overlapping_pairs(placements) == [(12, 13)]


def test_full_pallet_of_small_boxes_is_sane():
    box = BoxSpec("s", "SKU", length=2, width=2, height=2, quantity=1)
    placements = [
        BoxPlacement(x=-23 + 2 * c, z=-19 + 2 * r, box=box, rotation=0, layer=n)
        for n in range(33)
        for r in range(20)
        for c in range(24)
    ]
    result = PalletResult(1, placements, 33, 480, len(placements), 0.0, 0.0, 71.5)
    assert sanity_flags(result, PALLET) == set()
