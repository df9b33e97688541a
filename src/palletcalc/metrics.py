from __future__ import annotations

from typing import Sequence

from .geometry import EPS
from .models import BoxSpec, LayerPattern, PalletEnvelope, PalletResult


def volumetric_efficiency(count: int, box: BoxSpec, pallet: PalletEnvelope) -> float:
    """Used box volume over the stacking volume of the pallet, in percent."""
    used = count * box.volume
    available = pallet.width * pallet.depth * pallet.usable_height
    return min(100.0, used / max(available, EPS) * 100.0)


def layer_area_ratio(pattern: LayerPattern, pallet_w: float, pallet_d: float) -> float:
    deck_area = pallet_w * pallet_d
    if deck_area <= 0 or not pattern.per_layer:
        return 0.0
    box_area = sum(
        block.count * block.footprint.length * block.footprint.width
        for block in pattern.blocks
    )
    return box_area / deck_area


def average_efficiency(pallets: Sequence[PalletResult]) -> float:
    if not pallets:
        return 0.0
    return sum(p.efficiency for p in pallets) / len(pallets)
