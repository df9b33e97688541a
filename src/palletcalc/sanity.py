from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Sequence, Set, Tuple

from .models import BoxPlacement, PalletEnvelope, PalletResult

Rect = Tuple[float, float, float, float]


@dataclass(frozen=True)
class SanityPolicy:
    eps: float = 1e-4


DEFAULT_SANITY_POLICY = SanityPolicy()


def placement_rect(placement: BoxPlacement) -> Rect:
    """Footprint of a placed box as ``(x_min, z_min, x_max, z_max)``."""
    box = placement.box
    if placement.rotation == 90:
        length, width = box.width, box.length
    else:
        length, width = box.length, box.width
    return (
        placement.x - length / 2,
        placement.z - width / 2,
        placement.x + length / 2,
        placement.z + width / 2,
    )


def layer_counts(placements: Sequence[BoxPlacement]) -> Dict[int, int]:
    counts: Dict[int, int] = {}
    for placement in placements:
        counts[placement.layer] = counts.get(placement.layer, 0) + 1
    return counts


def _rects_overlap(a: Rect, b: Rect, eps: float) -> bool:
    return not (
        a[2] <= b[0] + eps
        or b[2] <= a[0] + eps
        or a[3] <= b[1] + eps
        or b[3] <= a[1] + eps
    )


def _indices_by_layer(placements: Sequence[BoxPlacement]) -> Dict[int, List[int]]:
    layers: Dict[int, List[int]] = {}
    for i, placement in enumerate(placements):
        layers.setdefault(placement.layer, []).append(i)
    return layers


def _sweep_pairs(
    rects: Sequence[Rect], order: Sequence[int], eps: float
) -> Iterator[Tuple[int, int]]:
    """Yield overlapping pairs among ``order``, which must be sorted by ``x_min``.

    Scanning stops at the first box starting right of the current one, so a
    box is only compared with boxes sharing its x span.
    """
    for pos, i in enumerate(order):
        a = rects[i]
        for k in range(pos + 1, len(order)):
            j = order[k]
            b = rects[j]
            if a[2] <= b[0] + eps:
                break
            if _rects_overlap(a, b, eps):
                yield (i, j) if i < j else (j, i)


def overlapping_pairs(
    placements: Sequence[BoxPlacement], eps: float = 1e-4
) -> List[Tuple[int, int]]:
    """Index pairs of same-layer boxes whose footprints overlap."""
    rects = [placement_rect(p) for p in placements]
    pairs: List[Tuple[int, int]] = []
    for indices in _indices_by_layer(placements).values():
        order = sorted(indices, key=lambda i: rects[i][0])
        pairs.extend(_sweep_pairs(rects, order, eps))
    return sorted(pairs)


def has_overlap(placements: Sequence[BoxPlacement], eps: float = 1e-4) -> bool:
    """True if any layer holds two overlapping boxes.

    Layers repeating an arrangement that was already checked are skipped;
    full layers of one pallet share a single pattern.
    """
    rects = [placement_rect(p) for p in placements]
    seen: Set[Tuple[Rect, ...]] = set()
    for indices in _indices_by_layer(placements).values():
        order = sorted(indices, key=lambda i: rects[i])
        shape = tuple(rects[i] for i in order)
        if shape in seen:
            continue
        seen.add(shape)
        if next(_sweep_pairs(rects, order, eps), None) is not None:
            return True
    return False


def out_of_bounds(
    placements: Sequence[BoxPlacement], pallet: PalletEnvelope, eps: float = 1e-4
) -> List[int]:
    half_w = pallet.width / 2
    half_d = pallet.depth / 2
    bad: List[int] = []
    for i, placement in enumerate(placements):
        x0, z0, x1, z1 = placement_rect(placement)
        if x0 < -half_w - eps or z0 < -half_d - eps or x1 > half_w + eps or z1 > half_d + eps:
            bad.append(i)
    return bad


def sanity_flags(
    result: PalletResult,
    pallet: PalletEnvelope,
    policy: SanityPolicy | None = None,
) -> set[str]:
    if policy is None:
        policy = DEFAULT_SANITY_POLICY
    flags: set[str] = set()
    placements = result.placements

    if has_overlap(placements, eps=policy.eps):
        flags.add("overlapping_boxes")
    if out_of_bounds(placements, pallet, eps=policy.eps):
        flags.add("overhang")

    counts = layer_counts(placements)
    if sum(counts.values()) != result.total_boxes:
        flags.add("count_mismatch")
    if any(count > result.boxes_per_layer for count in counts.values()):
        flags.add("layer_over_capacity")
    if counts and max(counts) >= result.layers:
        flags.add("layer_index_out_of_range")

    return flags


def is_sane(
    result: PalletResult,
    pallet: PalletEnvelope,
    policy: SanityPolicy | None = None,
) -> bool:
    return not sanity_flags(result, pallet, policy)
