from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional, Tuple

from .units import IN, LB

Rotation = Literal[0, 90]
PatternKind = Literal["grid", "split-x", "split-z"]


@dataclass(frozen=True)
class BoxSpec:
    """One SKU of identical boxes."""

    id: str
    sku: str
    length: IN
    width: IN
    height: IN
    weight: LB = 0.0
    quantity: int = 0
    color: str = ""

    @property
    def volume(self) -> float:
        return self.length * self.width * self.height


@dataclass(frozen=True)
class PalletEnvelope:
    """Pallet deck plus the total height limit (deck included)."""

    width: IN
    depth: IN
    height: IN
    max_height: IN
    type: str = "custom"

    @property
    def usable_height(self) -> float:
        return self.max_height - self.height


@dataclass(frozen=True)
class Footprint:
    length: IN
    width: IN
    rotation: Rotation = 0


@dataclass(frozen=True)
class LayerBlock:
    cols: int
    rows: int
    footprint: Footprint

    @property
    def count(self) -> int:
        return max(0, self.cols) * max(0, self.rows)


@dataclass(frozen=True)
class LayerPattern:
    kind: PatternKind
    blocks: Tuple[LayerBlock, ...]
    used_width: IN
    used_depth: IN
    per_layer: int
    max_cols: int = 0
    max_rows: int = 0

    @property
    def used_area(self) -> float:
        return self.used_width * self.used_depth


@dataclass(frozen=True)
class Cell:
    """Box slot of a materialized layer, origin at the deck's front-left."""

    x: IN
    z: IN
    footprint: Footprint

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.footprint.length / 2, self.z + self.footprint.width / 2


@dataclass(frozen=True)
class BoxPlacement:
    """Centre-based position of one box instance on its pallet."""

    x: IN
    z: IN
    box: BoxSpec
    rotation: Rotation
    layer: int


@dataclass
class PalletResult:
    pallet_number: int
    placements: List[BoxPlacement]
    layers: int
    boxes_per_layer: int
    total_boxes: int
    total_weight: LB
    efficiency: float
    total_height: IN


@dataclass
class CalculationResult:
    pallets: List[PalletResult] = field(default_factory=list)
    total_pallets: int = 0
    total_boxes: int = 0
    total_weight: LB = 0.0
    average_efficiency: float = 0.0
    box_distribution: Dict[str, Dict[int, int]] = field(default_factory=dict)
    error: Optional[str] = None

    @classmethod
    def failed(cls, error: str) -> "CalculationResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None
