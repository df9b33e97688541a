from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from .models import BoxSpec, Cell, Footprint

EPS = 1e-6


def footprints(box: BoxSpec) -> Tuple[Footprint, Footprint]:
    """Return the unrotated and the 90 degree footprint of ``box``."""
    return (
        Footprint(box.length, box.width, 0),
        Footprint(box.width, box.length, 90),
    )


@dataclass(frozen=True)
class Bounds:
    min_x: float
    min_z: float
    max_x: float
    max_z: float

    def corners(self) -> Tuple[Tuple[float, float], ...]:
        # front-left, back-left, front-right, back-right
        return (
            (self.min_x, self.min_z),
            (self.min_x, self.max_z),
            (self.max_x, self.min_z),
            (self.max_x, self.max_z),
        )


def bounds_of(cells: Sequence[Cell]) -> Bounds:
    if not cells:
        raise ValueError("cannot compute bounds of an empty layer")
    return Bounds(
        min_x=min(c.x for c in cells),
        min_z=min(c.z for c in cells),
        max_x=max(c.x + c.footprint.length for c in cells),
        max_z=max(c.z + c.footprint.width for c in cells),
    )


def clamp_center_inside_pallet(
    cx: float,
    cz: float,
    length: float,
    width: float,
    pallet_w: float,
    pallet_d: float,
) -> Tuple[float, float]:
    half_w = pallet_w / 2
    half_d = pallet_d / 2
    min_cx = -half_w + length / 2 + EPS
    max_cx = half_w - length / 2 - EPS
    min_cz = -half_d + width / 2 + EPS
    max_cz = half_d - width / 2 - EPS
    return max(min_cx, min(max_cx, cx)), max(min_cz, min(max_cz, cz))


def cell_center_on_pallet(cell: Cell, pallet_w: float, pallet_d: float) -> Tuple[float, float]:
    """Convert a local cell origin to a pallet-centred, clamped box centre."""
    fp = cell.footprint
    cx = (cell.x + fp.length / 2) - pallet_w / 2
    cz = (cell.z + fp.width / 2) - pallet_d / 2
    return clamp_center_inside_pallet(cx, cz, fp.length, fp.width, pallet_w, pallet_d)
