"""Single-SKU palletization engine."""

from .engine import (
    ERROR_CALCULATION_FAILED,
    ERROR_FOOTPRINT_DOES_NOT_FIT,
    ERROR_INVALID_PALLET,
    ERROR_NO_VALID_BOXES,
    ERROR_NO_VERTICAL_CLEARANCE,
    aggregate_boxes,
    calculate_layout,
    compute,
    perform_calc,
)
from .models import (
    BoxPlacement,
    BoxSpec,
    CalculationResult,
    Cell,
    Footprint,
    LayerBlock,
    LayerPattern,
    PalletEnvelope,
    PalletResult,
)
from .scheduling import CalculationDebouncer, LatestResultGate
from .selector import PatternScore, PatternSelector, choose_best_layer_pattern

__all__ = [
    "BoxSpec",
    "PalletEnvelope",
    "Footprint",
    "LayerBlock",
    "LayerPattern",
    "Cell",
    "BoxPlacement",
    "PalletResult",
    "CalculationResult",
    "PatternSelector",
    "PatternScore",
    "choose_best_layer_pattern",
    "aggregate_boxes",
    "perform_calc",
    "calculate_layout",
    "compute",
    "CalculationDebouncer",
    "LatestResultGate",
    "ERROR_INVALID_PALLET",
    "ERROR_NO_VALID_BOXES",
    "ERROR_FOOTPRINT_DOES_NOT_FIT",
    "ERROR_NO_VERTICAL_CLEARANCE",
    "ERROR_CALCULATION_FAILED",
]
