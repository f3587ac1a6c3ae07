"""Discrete probability primitives for weighted collapse style generators.

The package normalises weight vectors, measures their Shannon entropy and
picks outcome indices from a caller supplied uniform draw. The helpers work on
plain sequences (:mod:`wfc_prob.distribution`) and on fixed-width vectors
(:class:`wfc_prob.fixed.FixedWidth`) through one shared implementation.
"""

from ._version import __version__
from .configuration import ProbabilitySettings, load_settings
from .distribution import (
    DEFAULT_RANGE_TOLERANCE,
    SupportsUniformDraw,
    cumulative_ranges,
    entropy,
    normalize,
    normalize_in_place,
    pick,
    pick_from,
)
from .errors import ContractViolation, NoChoices
from .fixed import FixedWidth
from .logging import JsonFormatter, setup_logging

__all__ = [
    "DEFAULT_RANGE_TOLERANCE",
    "SupportsUniformDraw",
    "normalize",
    "normalize_in_place",
    "entropy",
    "cumulative_ranges",
    "pick",
    "pick_from",
    "FixedWidth",
    "NoChoices",
    "ContractViolation",
    "ProbabilitySettings",
    "load_settings",
    "JsonFormatter",
    "setup_logging",
    "__version__",
]
