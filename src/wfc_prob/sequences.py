"""Numeric sequence plumbing shared by the dynamic and fixed-width variants."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import numpy as np

__all__ = [
    "DEFAULT_FLOAT_KIND",
    "SUPPORTED_FLOAT_KINDS",
    "as_weight_array",
    "index_dtype_for",
    "resolve_float_kind",
]


DEFAULT_FLOAT_KIND = np.dtype(np.float64)
SUPPORTED_FLOAT_KINDS: tuple[np.dtype, ...] = (np.dtype(np.float32), DEFAULT_FLOAT_KIND)


def resolve_float_kind(dtype: Any) -> np.dtype:
    """Return the numpy dtype for ``dtype`` when it is a supported float kind."""

    if dtype is None:
        return DEFAULT_FLOAT_KIND
    try:
        resolved = np.dtype(dtype)
    except TypeError as exc:
        raise TypeError(f"Unsupported weight type: {dtype!r}") from exc
    if resolved not in SUPPORTED_FLOAT_KINDS:
        raise TypeError(
            "Weights have to be a floating point type (float32 or float64), "
            f"got {resolved.name!r}"
        )
    return resolved


def index_dtype_for(width: int) -> np.dtype:
    """Return the smallest unsigned integer dtype able to index ``width`` outcomes."""

    if width < 1:
        raise ValueError(f"Distribution width must be positive, got {width}")
    return np.min_scalar_type(width - 1)


def as_weight_array(values: Iterable[Any], dtype: Any = None) -> np.ndarray:
    """Coerce ``values`` into a flat floating point array.

    Arrays that already carry a supported float kind keep it unless ``dtype``
    requests another one; every other input is materialised as ``float64``.
    The result may share memory with ``values`` when no conversion is needed.
    """

    if hasattr(values, "shape"):
        array = np.asarray(values)
        if dtype is None and array.dtype in SUPPORTED_FLOAT_KINDS:
            kind = array.dtype
        else:
            kind = resolve_float_kind(dtype)
        return np.ravel(array.astype(kind, copy=False))

    materialised = values
    if not isinstance(materialised, (list, tuple)):
        materialised = list(materialised)
    return np.ravel(np.asarray(materialised, dtype=resolve_float_kind(dtype)))
