import pytest

from palletcalc.metrics import average_efficiency, layer_area_ratio, volumetric_efficiency
from palletcalc.models import BoxSpec, Footprint, PalletEnvelope, PalletResult
from palletcalc.pattern_families import build_grid_pattern


def _pallet():
    return PalletEnvelope(width=48, depth=40, height=5.5, max_height=72)


def test_volumetric_efficiency_uses_stacking_volume():
    box = BoxSpec("b", "SKU", length=12, width=10, height=8, quantity=100)
    eff = volumetric_efficiency(100, box, _pallet())
    assert eff == pytest.approx(100 * 960 / (48 * 40 * 66.5) * 100)


def test_volumetric_efficiency_is_capped():
    box = BoxSpec("b", "SKU", length=48, width=40, height=70, quantity=1)
    assert volumetric_efficiency(5, box, _pallet()) == 100.0


def test_layer_area_ratio_full_deck():
    pattern = build_grid_pattern(48, 40, Footprint(12, 10, 0))
    assert layer_area_ratio(pattern, 48, 40) == pytest.approx(1.0)


def test_layer_area_ratio_empty_pattern():
    pattern = build_grid_pattern(48, 40, Footprint(60, 10, 0))
    assert layer_area_ratio(pattern, 48, 40) == 0.0


def test_average_efficiency():
    pallets = [
        PalletResult(1, [], 1, 16, 16, 0.0, 40.0, 13.5),
        PalletResult(2, [], 1, 16, 8, 0.0, 20.0, 13.5),
    ]
    assert average_efficiency(pallets) == pytest.approx(30.0)
    assert average_efficiency([]) == 0.0
