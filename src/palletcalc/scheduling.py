from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from .engine import compute
from .models import BoxSpec, CalculationResult, PalletEnvelope

logger = logging.getLogger(__name__)


class CalculationDebouncer:
    """Coalesce bursts of recalculation requests; the last request wins.

    ``schedule`` registers a callback to run later (e.g. ``loop.call_later``
    bound to the debounce delay) and returns a handle, ``cancel`` drops a
    scheduled handle, ``apply`` receives the latest inputs.
    """

    def __init__(
        self,
        schedule: Callable[[Callable[[], None]], Any],
        cancel: Callable[[Any], None],
        apply: Callable[[list[BoxSpec], PalletEnvelope], None],
    ) -> None:
        self._schedule = schedule
        self._cancel = cancel
        self._apply = apply
        self._after_id: Any | None = None
        self._pending: tuple[list[BoxSpec], PalletEnvelope] | None = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def request(self, boxes: Iterable[BoxSpec], pallet: PalletEnvelope) -> None:
        self._pending = (list(boxes), pallet)
        if self._after_id is not None:
            self._cancel(self._after_id)
        self._after_id = self._schedule(self.flush)

    def cancel(self) -> None:
        if self._after_id is not None:
            self._cancel(self._after_id)
        self._after_id = None
        self._pending = None

    def flush(self) -> None:
        self._after_id = None
        pending = self._pending
        self._pending = None
        if pending is None:
            return
        self._apply(*pending)


class LatestResultGate:
    """Drop results of calculations superseded by a newer call."""

    def __init__(self) -> None:
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    async def compute(
        self, boxes: Iterable[BoxSpec], pallet: PalletEnvelope
    ) -> CalculationResult | None:
        self._generation += 1
        generation = self._generation
        result = await compute(boxes, pallet)
        if generation != self._generation:
            logger.debug(
                "Discarding calculation %d, superseded by %d",
                generation,
                self._generation,
            )
            return None
        return result
