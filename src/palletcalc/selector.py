from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .geometry import EPS
from .metrics import layer_area_ratio
from .models import Footprint, LayerPattern
from .pattern_families import generate_candidates

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PatternScore:
    """Ranking criteria of one candidate, most significant first."""

    per_layer: int
    used_area: float
    squareness: float
    simplicity: int
    divisible: int
    remainder: int
    area_ratio: float = 0.0

    @property
    def key(self) -> Tuple[float, ...]:
        return (
            self.per_layer,
            self.used_area,
            self.squareness,
            self.simplicity,
            self.divisible,
            -self.remainder,
        )


class PatternSelector:
    """Generate → score → rank layer patterns for one deck."""

    def __init__(
        self,
        width: float,
        depth: float,
        a: Footprint,
        b: Footprint,
        total_qty: int,
    ) -> None:
        self.width = width
        self.depth = depth
        self.a = a
        self.b = b
        self.total_qty = total_qty

    def generate_all(self) -> List[LayerPattern]:
        return generate_candidates(self.width, self.depth, self.a, self.b)

    def fits(self, pattern: LayerPattern) -> bool:
        return (
            pattern.per_layer > 0
            and pattern.used_width - EPS <= self.width
            and pattern.used_depth - EPS <= self.depth
        )

    def viable(self) -> List[LayerPattern]:
        return [pattern for pattern in self.generate_all() if self.fits(pattern)]

    def score(self, pattern: LayerPattern) -> PatternScore:
        if pattern.per_layer <= 0:
            raise ValueError("cannot score a pattern without capacity")
        remainder = self.total_qty % pattern.per_layer
        return PatternScore(
            per_layer=pattern.per_layer,
            used_area=pattern.used_area,
            squareness=-abs(pattern.used_width - pattern.used_depth),
            simplicity=-(len(pattern.blocks) - 1),
            divisible=1 if remainder == 0 else 0,
            remainder=remainder,
            area_ratio=layer_area_ratio(pattern, self.width, self.depth),
        )

    def best(self) -> Optional[LayerPattern]:
        """Highest score tuple; the earliest candidate wins exact ties."""
        candidates = self.viable()
        if not candidates:
            return None
        best = candidates[0]
        best_key = self.score(best).key
        for pattern in candidates[1:]:
            key = self.score(pattern).key
            if key > best_key:
                best, best_key = pattern, key
        logger.debug(
            "Selected %s pattern with %d boxes per layer out of %d candidates",
            best.kind,
            best.per_layer,
            len(candidates),
        )
        return best


def choose_best_layer_pattern(
    width: float, depth: float, a: Footprint, b: Footprint, total_qty: int
) -> Optional[LayerPattern]:
    return PatternSelector(width, depth, a, b, total_qty).best()
