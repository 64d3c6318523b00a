"""
Module: weighted.py
Project: Passforge (Open Source)
License: MIT
Description:
    Weighted Random Set (non-uniform sampling).

    Selects values with a probability proportional to their weight. The structure
    is an interval index over accumulated weights: every entry is assigned the
    half-open interval

        total <= x < total + weight

    where `total` is the sum of the weights placed before it. The result is a run
    of immediately adjacent intervals covering [0, total_weight). Drawing a
    uniform value in that range lands in exactly one interval, and the chance of
    landing in any interval equals its width divided by the total width.

    The intervals are stored as a sorted array of upper boundaries and queried
    with a binary search, giving O(log n) lookups without a pointer-based tree.
"""

import bisect
import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, List, Optional

from .random_source import RandomSource, default_source

logger = logging.getLogger(__name__)


class WeightError(ValueError):
    """Raised when a weighted set is built from unusable weights."""


@dataclass(frozen=True)
class WeightedEntry:
    """A value and the (non-negative) probability mass assigned to it."""
    value: Any
    weight: float


class WeightedRandomSet:
    """
    An immutable set of values sampled according to their weights.

    Args:
        entries (Iterable[WeightedEntry]): Values and weights. Several entries may
            share a value; their weights add up.
        random_source (RandomSource): Uniform source. Defaults to the process-wide
            cryptographic source.

    Raises:
        WeightError: If there are no entries, a weight is negative or not finite,
            or the weights sum to zero.
    """

    def __init__(self, entries: Iterable[WeightedEntry], random_source: Optional[RandomSource] = None):
        self._source = random_source or default_source
        self._values: List[Any] = []
        self._bounds: List[float] = []

        total = 0.0
        last_reachable = None
        for entry in entries:
            weight = float(entry.weight)
            if math.isnan(weight) or math.isinf(weight):
                raise WeightError(f"Weight must be finite, got {entry.weight!r} for {entry.value!r}.")
            if weight < 0:
                raise WeightError(f"Negative weight {entry.weight!r} for {entry.value!r}.")

            total += weight
            if weight > 0:
                last_reachable = len(self._values)
            self._values.append(entry.value)
            self._bounds.append(total)

        if not self._values:
            raise WeightError("Weighted set requires at least one entry.")
        if total <= 0.0:
            raise WeightError("Sum of weights must be > 0.")

        self._total_weight = total
        self._last_reachable = last_reachable

    @property
    def total_weight(self) -> float:
        return self._total_weight

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Any]:
        while True:
            yield self.next()

    def _index_of(self, x: float) -> int:
        # First interval whose upper bound lies strictly above x. Zero width
        # intervals share their bound with a predecessor and are never chosen.
        index = bisect.bisect_right(self._bounds, x)
        if index >= len(self._values):
            logger.debug("Sample %r at or beyond total weight %r.", x, self._total_weight)
            return self._last_reachable
        return index

    def next(self) -> Any:
        """
        Draws the next value of the weighted sequence.

        Returns:
            Any: The value of the interval containing `u * total_weight`, where
            `u` is a uniform draw in [0, 1).
        """
        x = self._source.next_f64() * self._total_weight
        return self._values[self._index_of(x)]

    def probability(self, value: Any) -> float:
        """Aggregated probability of drawing `value` (0.0 if unknown)."""
        mass = 0.0
        lower = 0.0
        for candidate, upper in zip(self._values, self._bounds):
            if candidate == value:
                mass += upper - lower
            lower = upper
        return mass / self._total_weight
