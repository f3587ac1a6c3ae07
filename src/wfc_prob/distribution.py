"""Discrete probability primitives for weighted collapse style generators.

Three operations are provided, each usable on its own:

``normalize``
    Turn raw non-negative weights into a distribution summing to one.
    Negative weights are clamped to zero and a vector without any positive
    weight is returned as all zeros, the sole representation of "no viable
    outcome".
``entropy``
    Shannon entropy, in bits, of a normalised distribution.
``pick``
    Map a uniform draw in ``[0, 1)`` onto an outcome index through a
    cumulative range table built fresh for every call.

Inputs may be any sequence of reals or a numpy array; outputs are numpy
arrays carrying the input's float kind.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, MutableSequence
from typing import Protocol, TypeVar, runtime_checkable

import numpy as np

from wfc_prob.errors import ContractViolation, NoChoices
from wfc_prob.sequences import as_weight_array

__all__ = [
    "DEFAULT_RANGE_TOLERANCE",
    "SupportsUniformDraw",
    "cumulative_ranges",
    "entropy",
    "normalize",
    "normalize_in_place",
    "pick",
    "pick_from",
]


logger = logging.getLogger(__name__)

DEFAULT_RANGE_TOLERANCE = 0.001

_MutableWeights = TypeVar("_MutableWeights", MutableSequence[float], np.ndarray)


@runtime_checkable
class SupportsUniformDraw(Protocol):
    """Random source returning one float in ``[0, 1)`` per call."""

    def random(self) -> float:  # pragma: no cover - protocol definition
        ...


def _is_normalised_total(total: float, tolerance: float) -> bool:
    return total == 0.0 or abs(total - 1.0) < tolerance


def normalize(weights: Iterable[float], *, dtype: object = None) -> np.ndarray:
    """Return ``weights`` scaled so that they sum to one.

    Negative entries are clamped to zero before the total is computed. When
    nothing positive remains the clamped all-zero vector is returned without
    dividing. Non-finite weights raise :class:`ValueError`.
    """

    array = as_weight_array(weights, dtype)
    if not np.all(np.isfinite(array)):
        raise ValueError("Weights must be finite numbers")

    clamped = np.where(array > 0.0, array, np.zeros_like(array))
    with np.errstate(over="ignore"):
        total = clamped.sum()
    if total == 0.0:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Distribution has no positive weight; returning zeros",
                extra={"width": int(array.size)},
            )
        return clamped
    if not np.isfinite(total):
        # The total overflowed the float kind; rescale by the peak weight first.
        scaled = clamped / clamped.max()
        return scaled / scaled.sum()
    return clamped / total


def normalize_in_place(weights: _MutableWeights) -> _MutableWeights:
    """Normalise a mutable sequence or writable float array in place.

    The same clamping and zero-total rules as :func:`normalize` apply. The
    caller must serialise concurrent writers of ``weights``.
    """

    if isinstance(weights, np.ndarray):
        if weights.dtype.kind != "f":
            raise TypeError(
                f"In-place normalisation needs a float array, got {weights.dtype.name!r}"
            )
        weights[...] = normalize(weights).reshape(weights.shape)
        return weights

    normalised = normalize(weights)
    for index, value in enumerate(normalised.tolist()):
        weights[index] = value
    return weights


def entropy(weights: Iterable[float]) -> float:
    """Return the Shannon entropy, in bits, of a normalised distribution.

    Zero probabilities contribute nothing; ``log2`` is only evaluated on
    strictly positive entries. The input is not renormalised.
    """

    array = as_weight_array(weights)
    if array.size == 0:
        return 0.0

    assert _is_normalised_total(
        float(array.sum()), DEFAULT_RANGE_TOLERANCE
    ), "entropy() expects a normalised distribution"

    positive = array > 0.0
    safe = np.where(positive, array, np.ones_like(array))
    terms = np.where(positive, array * np.log2(safe), np.zeros_like(array))
    bits = -float(terms.sum())
    if bits <= 0.0:
        return 0.0
    return bits


def cumulative_ranges(
    weights: Iterable[float], *, tolerance: float = DEFAULT_RANGE_TOLERANCE
) -> np.ndarray:
    """Return the cumulative range table of a normalised distribution.

    Entry ``i`` holds the running total of weights ``0..i``, capped at
    ``1.0``. The entries from the last positive weight onwards are pinned to
    exactly ``1.0`` so that any draw up to one finds a slot despite rounding
    drift.

    Raises :class:`NoChoices` when the distribution sums to zero and
    :class:`ContractViolation` when it is not normalised.
    """

    array = as_weight_array(weights)
    if np.any(array < 0.0):
        raise ContractViolation("Range tables need non-negative weights; normalise first")

    ranges = np.cumsum(array)
    total = float(ranges[-1]) if ranges.size else 0.0
    if total == 0.0:
        raise NoChoices(int(array.size))
    if not abs(total - 1.0) < tolerance:
        raise ContractViolation(
            f"Distribution sums to {total!r}; normalise it before picking"
        )

    np.minimum(ranges, 1.0, out=ranges)
    last_positive = int(np.flatnonzero(array > 0.0)[-1])
    ranges[last_positive:] = 1.0
    return ranges


def pick(
    draw: float,
    weights: Iterable[float],
    *,
    tolerance: float = DEFAULT_RANGE_TOLERANCE,
) -> int:
    """Return the outcome index selected by ``draw`` in ``weights``.

    Outcomes partition ``[0, 1]`` left to right in distribution order with
    inclusive upper bounds; the first outcome whose boundary reaches
    ``draw`` wins. Zero-weight outcomes occupy empty intervals and are never
    returned.
    """

    value = float(draw)
    if not math.isfinite(value) or not 0.0 <= value <= 1.0:
        raise ValueError(f"Uniform draw must lie in [0, 1], got {draw!r}")

    ranges = cumulative_ranges(weights, tolerance=tolerance)
    occupied = np.flatnonzero(np.diff(ranges, prepend=0.0) > 0.0)
    slot = int(np.searchsorted(ranges[occupied], value, side="left"))
    if slot >= occupied.size:
        raise ContractViolation(f"No range slot found for draw {value!r}")

    index = int(occupied[slot])
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Picked outcome",
            extra={"width": int(ranges.size), "draw": value, "index": index},
        )
    return index


def pick_from(
    source: SupportsUniformDraw,
    weights: Iterable[float],
    *,
    tolerance: float = DEFAULT_RANGE_TOLERANCE,
) -> int:
    """Draw once from ``source`` and :func:`pick` an index with it."""

    return pick(source.random(), weights, tolerance=tolerance)
