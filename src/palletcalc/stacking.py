from __future__ import annotations

import math
from typing import List

from .geometry import EPS
from .models import PalletEnvelope


def compute_layers_max(pallet: PalletEnvelope, box_h: float) -> int:
    if box_h <= 0:
        return 0
    available = pallet.max_height - pallet.height
    return max(int(math.floor((available + EPS) / box_h)), 0)


def compute_stack_height(deck_height: float, layers: int, box_h: float) -> float:
    return deck_height + max(layers, 0) * box_h


def compute_min_pallets(total: int, per_layer: int, layers_max: int) -> int:
    capacity = per_layer * layers_max
    return max(1, math.ceil(total / max(1, capacity)))


def build_targets_by_full_layers(
    total: int, pallets: int, per_layer: int, layers_max: int
) -> List[int]:
    """Split ``total`` boxes over ``pallets`` by whole layers.

    Full layers are spread as evenly as possible (earlier pallets take the
    extra ones) and the remainder below one layer goes onto a single pallet,
    the last one with a free layer slot. The returned counts always sum to
    ``total``; when the pallets are under-provisioned the last pallet absorbs
    the difference even beyond its layer capacity.
    """
    if pallets <= 0:
        raise ValueError("at least one pallet is required")
    if per_layer <= 0:
        raise ValueError("per_layer must be positive")

    total_full_layers = total // per_layer
    rem = total % per_layer

    base_layers = total_full_layers // pallets
    extra_layers = total_full_layers % pallets
    layers_per_pallet = [base_layers] * pallets
    for i in range(pallets):
        if extra_layers > 0:
            layers_per_pallet[i] += 1
            extra_layers -= 1
        layers_per_pallet[i] = min(layers_per_pallet[i], layers_max)

    counts = [layers * per_layer for layers in layers_per_pallet]

    if rem > 0:
        for i in range(pallets - 1, -1, -1):
            if layers_per_pallet[i] < layers_max:
                counts[i] += rem
                rem = 0
                break

    # every pallet is at its layer limit: top up open layer slots from the back
    idx = pallets - 1
    while rem > 0 and idx >= 0:
        room = per_layer - (counts[idx] % per_layer or per_layer)
        take = min(rem, room)
        counts[idx] += take
        rem -= take
        idx -= 1

    diff = total - sum(counts)
    if diff:
        counts[-1] += diff
    return counts
