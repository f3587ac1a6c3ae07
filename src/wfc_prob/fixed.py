"""Fixed-width distributions whose outcome count is known up front."""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable

import numpy as np

from wfc_prob.distribution import (
    DEFAULT_RANGE_TOLERANCE,
    SupportsUniformDraw,
    cumulative_ranges,
    entropy,
    normalize,
    pick,
)
from wfc_prob.sequences import (
    DEFAULT_FLOAT_KIND,
    as_weight_array,
    index_dtype_for,
    resolve_float_kind,
)

if TYPE_CHECKING:  # pragma: no cover - typing only
    from wfc_prob.configuration import ProbabilitySettings

__all__ = ["FixedWidth"]


@dataclass(frozen=True, slots=True)
class FixedWidth:
    """Probability helpers bound to ``width`` outcomes of a given float kind.

    Every vector handed to the helpers must hold exactly ``width`` weights.
    Picked indices are returned as :attr:`index_dtype` scalars, the smallest
    unsigned integer type able to address every outcome.
    """

    width: int
    dtype: Any = DEFAULT_FLOAT_KIND
    tolerance: float = DEFAULT_RANGE_TOLERANCE

    def __post_init__(self) -> None:
        width = operator.index(self.width)
        if width < 1:
            raise ValueError(f"Distribution width must be positive, got {width}")
        object.__setattr__(self, "width", width)
        object.__setattr__(self, "dtype", resolve_float_kind(self.dtype))

    @classmethod
    def from_settings(cls, width: int, settings: "ProbabilitySettings") -> "FixedWidth":
        return cls(width, dtype=settings.float_kind, tolerance=settings.range_tolerance)

    @property
    def index_dtype(self) -> np.dtype:
        return index_dtype_for(self.width)

    def vector(self, values: Iterable[float]) -> np.ndarray:
        """Return a fresh array of ``values`` checked against :attr:`width`."""

        array = as_weight_array(values, self.dtype)
        if array.size != self.width:
            raise ValueError(
                f"Expected {self.width} weights, got {array.size}"
            )
        return array.copy()

    def zeros(self) -> np.ndarray:
        return np.zeros(self.width, dtype=self.dtype)

    def full(self, value: float) -> np.ndarray:
        return np.full(self.width, value, dtype=self.dtype)

    def normalize(self, values: Iterable[float]) -> np.ndarray:
        return normalize(self.vector(values))

    def entropy(self, values: Iterable[float]) -> float:
        return entropy(self.vector(values))

    def ranges(self, values: Iterable[float]) -> np.ndarray:
        return cumulative_ranges(self.vector(values), tolerance=self.tolerance)

    def pick(self, draw: float, values: Iterable[float]) -> np.unsignedinteger:
        index = pick(draw, self.vector(values), tolerance=self.tolerance)
        return self.index_dtype.type(index)

    def pick_from(
        self, source: SupportsUniformDraw, values: Iterable[float]
    ) -> np.unsignedinteger:
        return self.pick(source.random(), values)
