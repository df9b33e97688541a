from __future__ import annotations

from typing import List, Sequence

from .geometry import Bounds, bounds_of
from .models import Cell


def _dist2(cell: Cell, px: float, pz: float) -> float:
    cx, cz = cell.center
    return (cx - px) * (cx - px) + (cz - pz) * (cz - pz)


def _edge_score(cell: Cell, bounds: Bounds) -> float:
    cx, cz = cell.center
    return min(
        cx - bounds.min_x,
        bounds.max_x - cx,
        cz - bounds.min_z,
        bounds.max_z - cz,
    )


def pick_corner_edge_cells(cells: Sequence[Cell], count: int) -> List[Cell]:
    """Pick exactly ``count`` cells of a full layer, corners first, then edges.

    Corners are visited front-left, back-left, front-right, back-right. For
    each one the cell sitting on that grid corner is taken when still free,
    otherwise the free cell whose centre is closest to the corner of the
    occupied bounds. The rest is filled with the cells closest to any edge of
    the occupied bounds. Ties go to the earlier cell. Picked cells keep their
    full-layer coordinates and are returned in pick order.
    """
    if count <= 0 or not cells:
        return []

    bounds = bounds_of(cells)
    min_col = min(c.x for c in cells)
    max_col = max(c.x for c in cells)
    min_row = min(c.z for c in cells)
    max_row = max(c.z for c in cells)
    grid_corners = (
        (min_col, min_row),
        (min_col, max_row),
        (max_col, min_row),
        (max_col, max_row),
    )

    remaining = list(range(len(cells)))
    picked: List[int] = []

    for (col, row), (px, pz) in zip(grid_corners, bounds.corners()):
        if len(picked) >= count or not remaining:
            break
        choice = next(
            (i for i in remaining if cells[i].x == col and cells[i].z == row),
            None,
        )
        if choice is None:
            choice = min(remaining, key=lambda i: _dist2(cells[i], px, pz))
        picked.append(choice)
        remaining.remove(choice)

    while len(picked) < count and remaining:
        choice = min(remaining, key=lambda i: _edge_score(cells[i], bounds))
        picked.append(choice)
        remaining.remove(choice)

    return [cells[i] for i in picked]
