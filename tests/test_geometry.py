import pytest

from palletcalc.geometry import (
    EPS,
    bounds_of,
    cell_center_on_pallet,
    clamp_center_inside_pallet,
    footprints,
)
from palletcalc.models import BoxSpec, Cell, Footprint


def test_footprints_swap_length_and_width():
    box = BoxSpec("b", "SKU", length=12, width=10, height=8, quantity=1)
    fp0, fp90 = footprints(box)
    assert (fp0.length, fp0.width, fp0.rotation) == (12, 10, 0)
    assert (fp90.length, fp90.width, fp90.rotation) == (10, 12, 90)


def test_clamp_keeps_inner_center():
    assert clamp_center_inside_pallet(0.0, 0.0, 12, 10, 48, 40) == (0.0, 0.0)


def test_clamp_pulls_center_strictly_inside():
    cx, cz = clamp_center_inside_pallet(-30.0, 25.0, 12, 10, 48, 40)
    assert cx == pytest.approx(-18 + EPS)
    assert cz == pytest.approx(15 - EPS)
    assert cx - 6 > -24
    assert cz + 5 < 20


def test_cell_center_on_pallet_is_centre_based():
    cell = Cell(12.0, 10.0, Footprint(12, 10, 0))
    assert cell_center_on_pallet(cell, 48, 40) == pytest.approx((-6.0, -5.0))


def test_bounds_include_footprint_extent():
    cells = [
        Cell(0.0, 0.0, Footprint(12, 10, 0)),
        Cell(40.0, 7.5, Footprint(10, 20, 90)),
    ]
    bounds = bounds_of(cells)
    assert (bounds.min_x, bounds.min_z, bounds.max_x, bounds.max_z) == (0.0, 0.0, 50.0, 27.5)
    assert bounds.corners()[1] == (0.0, 27.5)


def test_bounds_of_empty_layer_raises():
    with pytest.raises(ValueError):
        bounds_of([])
