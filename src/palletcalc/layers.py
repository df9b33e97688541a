from __future__ import annotations

from typing import List

from .models import Cell, LayerBlock, LayerPattern


def _block_cells(x0: float, z0: float, block: LayerBlock) -> List[Cell]:
    fp = block.footprint
    return [
        Cell(x0 + c * fp.length, z0 + r * fp.width, fp)
        for r in range(block.rows)
        for c in range(block.cols)
    ]


def materialize_layer_cells(
    pattern: LayerPattern, pallet_w: float, pallet_d: float
) -> List[Cell]:
    """Expand ``pattern`` to concrete cells on a ``pallet_w`` x ``pallet_d`` deck.

    The occupied area is centred on the deck and every block is centred
    within the occupied area across its stacking axis. Coordinates are cell
    origins relative to the deck's front-left corner; a fresh list is built on
    every call.
    """
    offset_x = (pallet_w - pattern.used_width) / 2
    offset_z = (pallet_d - pattern.used_depth) / 2

    if pattern.kind == "grid":
        block = pattern.blocks[0]
        fp = block.footprint
        x0 = offset_x + (pattern.used_width - block.cols * fp.length) / 2
        z0 = offset_z + (pattern.used_depth - block.rows * fp.width) / 2
        return _block_cells(x0, z0, block)

    if pattern.kind == "split-x":
        cells: List[Cell] = []
        cur_x = offset_x
        for block in pattern.blocks:
            fp = block.footprint
            z0 = offset_z + (pattern.used_depth - block.rows * fp.width) / 2
            cells.extend(_block_cells(cur_x, z0, block))
            cur_x += block.cols * fp.length
        return cells

    if pattern.kind == "split-z":
        cells = []
        cur_z = offset_z
        for block in pattern.blocks:
            fp = block.footprint
            x0 = offset_x + (pattern.used_width - block.cols * fp.length) / 2
            cells.extend(_block_cells(x0, cur_z, block))
            cur_z += block.rows * fp.width
        return cells

    raise ValueError(f"Unknown pattern kind: {pattern.kind!r}")
