"""Load probability settings from project configuration files."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping as ABCMapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - Python < 3.11 fallback
    import tomli as tomllib  # type: ignore

import numpy as np
import yaml

from wfc_prob.distribution import DEFAULT_RANGE_TOLERANCE
from wfc_prob.logging.config import setup_logging
from wfc_prob.sequences import DEFAULT_FLOAT_KIND, resolve_float_kind

__all__ = ["ProbabilitySettings", "load_settings"]


logger = logging.getLogger(__name__)

_PROJECT_FILENAME = "pyproject.toml"
_TOOL_SECTION = "wfc_prob"
_YAML_SUFFIXES = {".yaml", ".yml"}


def _as_dict(payload: ABCMapping[str, Any]) -> dict[str, Any]:
    """Recursively coerce TOML/YAML mappings into regular dictionaries."""

    result: dict[str, Any] = {}
    for key, value in payload.items():
        key_str = str(key)
        if isinstance(value, ABCMapping):
            result[key_str] = _as_dict(value)
        else:
            result[key_str] = value
    return result


@dataclass(frozen=True, slots=True)
class ProbabilitySettings:
    """Immutable settings parsed from ``[tool.wfc_prob]`` or a YAML file."""

    range_tolerance: float = DEFAULT_RANGE_TOLERANCE
    dtype: str = DEFAULT_FLOAT_KIND.name
    logging_config: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def from_config(
        cls, config: Mapping[str, Any] | None = None
    ) -> "ProbabilitySettings":
        """Coerce a raw configuration mapping, falling back to defaults."""

        def _coerce_tolerance(value: Any, fallback: float) -> float:
            try:
                numeric = float(value)
            except (TypeError, ValueError):
                return fallback
            if not math.isfinite(numeric) or numeric <= 0.0:
                return fallback
            return numeric

        def _coerce_dtype(value: Any, fallback: str) -> str:
            if value is None:
                return fallback
            try:
                return resolve_float_kind(value).name
            except TypeError:
                logger.warning("Ignoring unsupported weight dtype %r", value)
                return fallback

        payload = config if isinstance(config, ABCMapping) else {}
        logging_section = payload.get("logging")
        logging_config = (
            _as_dict(logging_section) if isinstance(logging_section, ABCMapping) else {}
        )
        return cls(
            range_tolerance=_coerce_tolerance(
                payload.get("range_tolerance"), DEFAULT_RANGE_TOLERANCE
            ),
            dtype=_coerce_dtype(payload.get("dtype"), DEFAULT_FLOAT_KIND.name),
            logging_config=MappingProxyType(logging_config),
        )

    @property
    def float_kind(self) -> np.dtype:
        return resolve_float_kind(self.dtype)

    def configure_logging(self) -> logging.Logger:
        """Apply the ``logging`` section through :func:`setup_logging`."""

        return setup_logging(self.logging_config)


def _read_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as handle:
        data = tomllib.load(handle)
    if not isinstance(data, ABCMapping):
        return {}
    tool_section = data.get("tool")
    if isinstance(tool_section, ABCMapping):
        section = tool_section.get(_TOOL_SECTION)
        return _as_dict(section) if isinstance(section, ABCMapping) else {}
    if path.name == _PROJECT_FILENAME:
        return {}
    return _as_dict(data)


def _read_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf8") as handle:
        data = yaml.safe_load(handle)
    if not isinstance(data, ABCMapping):
        return {}
    section = data.get(_TOOL_SECTION)
    if isinstance(section, ABCMapping):
        return _as_dict(section)
    return _as_dict(data)


def _read_config(path: Path) -> dict[str, Any]:
    if path.suffix in _YAML_SUFFIXES:
        return _read_yaml(path)
    if path.suffix == ".toml":
        return _read_toml(path)
    raise ValueError(f"Unsupported configuration format: {path}")


def load_settings(path: str | Path | None = None) -> ProbabilitySettings:
    """Load :class:`ProbabilitySettings` from ``path`` or the working directory.

    Parameters
    ----------
    path:
        A ``pyproject.toml``, a standalone ``.toml`` file or a YAML file. In a
        ``pyproject.toml`` only the ``[tool.wfc_prob]`` table is read. When
        omitted, ``pyproject.toml`` in the current directory is used if it
        exists and defaults are returned otherwise.
    """

    if path is not None:
        candidate = Path(path).expanduser()
        if not candidate.is_file():
            raise FileNotFoundError(candidate)
    else:
        candidate = Path.cwd() / _PROJECT_FILENAME
        if not candidate.is_file():
            return ProbabilitySettings()

    payload = _read_config(candidate)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Loaded probability settings",
            extra={"config_path": str(candidate), "keys": sorted(payload)},
        )
    return ProbabilitySettings.from_config(payload)
