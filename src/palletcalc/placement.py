from __future__ import annotations

from dataclasses import replace
from typing import Callable, List, NamedTuple

from .geometry import cell_center_on_pallet
from .layers import materialize_layer_cells
from .models import BoxPlacement, BoxSpec, Cell, LayerPattern, PalletEnvelope
from .partial import pick_corner_edge_cells


class PalletPlacements(NamedTuple):
    placements: List[BoxPlacement]
    layers_used: int


def _place_cells(
    cells: List[Cell],
    layer: int,
    base: BoxSpec,
    pallet: PalletEnvelope,
    make_id: Callable[[], str],
) -> List[BoxPlacement]:
    placements = []
    for cell in cells:
        cx, cz = cell_center_on_pallet(cell, pallet.width, pallet.depth)
        placements.append(
            BoxPlacement(
                x=cx,
                z=cz,
                box=replace(base, id=make_id()),
                rotation=cell.footprint.rotation,
                layer=layer,
            )
        )
    return placements


def build_placements_for_pallet(
    target: int,
    layers_max: int,
    pattern: LayerPattern,
    base: BoxSpec,
    pallet: PalletEnvelope,
    make_id: Callable[[], str],
    all_full: bool = False,
) -> PalletPlacements:
    """Stack ``target`` boxes: full layers first, then at most one partial layer."""
    per_layer = max(1, pattern.per_layer)
    placements: List[BoxPlacement] = []
    remaining = target
    layer = 0

    full_layers = min(remaining // per_layer, layers_max)
    for _ in range(full_layers):
        cells = materialize_layer_cells(pattern, pallet.width, pallet.depth)
        placements.extend(_place_cells(cells, layer, base, pallet, make_id))
        remaining -= per_layer
        layer += 1

    if not all_full and remaining > 0 and layer < layers_max:
        cells = materialize_layer_cells(pattern, pallet.width, pallet.depth)
        picked = pick_corner_edge_cells(cells, remaining)
        placements.extend(_place_cells(picked, layer, base, pallet, make_id))
        layer += 1

    return PalletPlacements(placements, layer)
