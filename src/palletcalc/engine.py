from __future__ import annotations

import asyncio
import itertools
import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from .geometry import footprints
from .metrics import average_efficiency, volumetric_efficiency
from .models import BoxSpec, CalculationResult, PalletEnvelope, PalletResult
from .placement import build_placements_for_pallet
from .sanity import sanity_flags
from .selector import PatternSelector
from .stacking import (
    build_targets_by_full_layers,
    compute_layers_max,
    compute_min_pallets,
    compute_stack_height,
)

logger = logging.getLogger(__name__)

ERROR_INVALID_PALLET = "Invalid pallet configuration"
ERROR_NO_VALID_BOXES = "No valid boxes with dimensions defined"
ERROR_FOOTPRINT_DOES_NOT_FIT = "Box footprint does not fit on pallet area"
ERROR_NO_VERTICAL_CLEARANCE = "No vertical clearance for a single layer"
ERROR_CALCULATION_FAILED = "Calculation failed"


def _is_valid_pallet(pallet: Optional[PalletEnvelope]) -> bool:
    return (
        pallet is not None
        and pallet.width > 0
        and pallet.depth > 0
        and pallet.max_height > pallet.height
    )


def _is_usable_box(box: Optional[BoxSpec]) -> bool:
    return (
        box is not None
        and box.length > 0
        and box.width > 0
        and box.height > 0
        and (box.quantity or 0) > 0
    )


def aggregate_boxes(boxes: Optional[Iterable[Optional[BoxSpec]]]) -> Optional[BoxSpec]:
    """Merge usable records into one SKU; the first record's fields win."""
    valid = [box for box in (boxes or []) if _is_usable_box(box)]
    if not valid:
        return None
    total = sum(box.quantity for box in valid)
    return replace(valid[0], quantity=total)


def perform_calc(
    boxes: Optional[Iterable[Optional[BoxSpec]]], pallet: Optional[PalletEnvelope]
) -> CalculationResult:
    if not _is_valid_pallet(pallet):
        return CalculationResult.failed(ERROR_INVALID_PALLET)

    base = aggregate_boxes(boxes)
    if base is None:
        return CalculationResult.failed(ERROR_NO_VALID_BOXES)
    total_qty = base.quantity

    fp0, fp90 = footprints(base)
    selector = PatternSelector(pallet.width, pallet.depth, fp0, fp90, total_qty)
    pattern = selector.best()
    if pattern is None:
        return CalculationResult.failed(ERROR_FOOTPRINT_DOES_NOT_FIT)

    per_layer = pattern.per_layer
    layers_max = compute_layers_max(pallet, base.height)
    if layers_max <= 0:
        return CalculationResult.failed(ERROR_NO_VERTICAL_CLEARANCE)

    capacity = per_layer * layers_max
    min_pallets = compute_min_pallets(total_qty, per_layer, layers_max)
    targets = build_targets_by_full_layers(total_qty, min_pallets, per_layer, layers_max)
    logger.debug(
        "SKU %s: %d boxes, %d per layer, %d layers max, targets %s",
        base.sku,
        total_qty,
        per_layer,
        layers_max,
        targets,
    )

    counter = itertools.count()

    def make_id() -> str:
        return f"{base.id}-{next(counter)}"

    all_full = all(target % per_layer == 0 for target in targets)
    pallets: List[PalletResult] = []
    distribution: Dict[str, Dict[int, int]] = {base.sku: {}}

    for number, target in enumerate(targets, start=1):
        placements, layers_used = build_placements_for_pallet(
            min(target, capacity),
            layers_max,
            pattern,
            base,
            pallet,
            make_id,
            all_full,
        )
        count = len(placements)
        result = PalletResult(
            pallet_number=number,
            placements=placements,
            layers=layers_used,
            boxes_per_layer=per_layer,
            total_boxes=count,
            total_weight=count * (base.weight or 0),
            efficiency=volumetric_efficiency(count, base, pallet),
            total_height=compute_stack_height(pallet.height, layers_used, base.height),
        )
        flags = sanity_flags(result, pallet)
        if flags:
            logger.warning("Pallet %d failed sanity checks: %s", number, sorted(flags))
        pallets.append(result)
        distribution[base.sku][number] = count

    total_boxes = sum(p.total_boxes for p in pallets)
    if total_boxes != total_qty:
        raise RuntimeError(
            f"placed {total_boxes} boxes but {total_qty} were requested"
        )

    return CalculationResult(
        pallets=pallets,
        total_pallets=len(pallets),
        total_boxes=total_boxes,
        total_weight=sum(p.total_weight for p in pallets),
        average_efficiency=average_efficiency(pallets),
        box_distribution=distribution,
    )


def calculate_layout(
    boxes: Optional[Iterable[Optional[BoxSpec]]], pallet: Optional[PalletEnvelope]
) -> CalculationResult:
    """Run :func:`perform_calc`; any failure is returned as an error result."""
    try:
        return perform_calc(boxes, pallet)
    except Exception:
        logger.exception("Failed to compute pallet layout")
        return CalculationResult.failed(ERROR_CALCULATION_FAILED)


async def compute(
    boxes: Optional[Iterable[Optional[BoxSpec]]], pallet: Optional[PalletEnvelope]
) -> CalculationResult:
    """Compute off the event loop; always resolves, never raises."""
    try:
        if boxes is not None:
            boxes = list(boxes)
        return await asyncio.to_thread(calculate_layout, boxes, pallet)
    except Exception:
        logger.exception("Failed to schedule pallet layout computation")
        return CalculationResult.failed(ERROR_CALCULATION_FAILED)
