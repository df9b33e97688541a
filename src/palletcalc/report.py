from __future__ import annotations

from typing import Any, Dict, List

from .models import BoxPlacement, BoxSpec, CalculationResult, PalletResult
from .units import format_length, format_percent, format_weight


def _box_dict(box: BoxSpec) -> Dict[str, Any]:
    return {
        "id": box.id,
        "sku": box.sku,
        "length": box.length,
        "width": box.width,
        "height": box.height,
        "weight": box.weight,
        "quantity": box.quantity,
        "color": box.color,
    }


def _placement_dict(placement: BoxPlacement) -> Dict[str, Any]:
    return {
        "x": placement.x,
        "z": placement.z,
        "box": _box_dict(placement.box),
        "rotation": placement.rotation,
        "layer": placement.layer,
    }


def _pallet_dict(pallet: PalletResult) -> Dict[str, Any]:
    return {
        "palletNumber": pallet.pallet_number,
        "placements": [_placement_dict(p) for p in pallet.placements],
        "layers": pallet.layers,
        "boxesPerLayer": pallet.boxes_per_layer,
        "totalBoxes": pallet.total_boxes,
        "totalWeight": pallet.total_weight,
        "efficiency": pallet.efficiency,
        "totalHeight": pallet.total_height,
    }


def result_to_dict(result: CalculationResult) -> Dict[str, Any]:
    """Return ``result`` as a JSON-serialisable dict for renderers and reports."""
    data: Dict[str, Any] = {
        "pallets": [_pallet_dict(p) for p in result.pallets],
        "totalPallets": result.total_pallets,
        "totalBoxes": result.total_boxes,
        "totalWeight": result.total_weight,
        "averageEfficiency": result.average_efficiency,
        # JSON object keys are strings
        "boxDistribution": {
            sku: {str(number): count for number, count in per_pallet.items()}
            for sku, per_pallet in result.box_distribution.items()
        },
    }
    if result.error is not None:
        data["error"] = result.error
    return data


def format_summary(result: CalculationResult) -> str:
    if result.error is not None:
        return f"Error: {result.error}"
    lines: List[str] = [
        f"{'Pallet':>6} {'Layers':>6} {'Per layer':>9} {'Boxes':>6} "
        f"{'Weight':>12} {'Height':>9} {'Efficiency':>10}"
    ]
    for pallet in result.pallets:
        lines.append(
            f"{pallet.pallet_number:>6} {pallet.layers:>6} {pallet.boxes_per_layer:>9} "
            f"{pallet.total_boxes:>6} {format_weight(pallet.total_weight):>12} "
            f"{format_length(pallet.total_height):>9} {format_percent(pallet.efficiency):>10}"
        )
    lines.append(
        f"Total: {result.total_pallets} pallets, {result.total_boxes} boxes, "
        f"{format_weight(result.total_weight)}, "
        f"{format_percent(result.average_efficiency)} average efficiency"
    )
    return "\n".join(lines)
