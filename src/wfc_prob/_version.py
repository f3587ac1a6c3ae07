"""Resolve the package version from metadata or the source checkout."""

from __future__ import annotations

import re
from importlib import metadata
from pathlib import Path

from packaging.version import InvalidVersion, Version

_DISTRIBUTION_NAME = "wfc-prob"
_CHANGELOG = Path(__file__).resolve().parents[2] / "CHANGELOG.md"
_RELEASE_HEADING = re.compile(r"^## v(?P<version>\d+\.\d+\.\d+)\b")


def _changelog_version(changelog: Path | None = None) -> str:
    """Return the newest release heading of ``CHANGELOG.md``.

    Used when running from a checkout that was never installed.
    """

    changelog = changelog or _CHANGELOG
    if changelog.is_file():
        for line in changelog.read_text(encoding="utf-8").splitlines():
            match = _RELEASE_HEADING.match(line)
            if match:
                return match.group("version")
    raise RuntimeError(
        f"No installed metadata for {_DISTRIBUTION_NAME!r} and no release "
        f"heading in {changelog}"
    )


def _resolve_version(raw_version: str | None = None) -> str:
    """Return ``raw_version`` (or the discovered one) once it passes as ``X.Y.Z``."""

    if raw_version is None:
        try:
            raw_version = metadata.version(_DISTRIBUTION_NAME)
        except metadata.PackageNotFoundError:
            raw_version = _changelog_version()

    try:
        parsed = Version(raw_version)
    except InvalidVersion as exc:
        raise RuntimeError(f"Invalid version string {raw_version!r}") from exc
    if len(parsed.release) != 3:
        raise RuntimeError(
            f"Version {raw_version!r} must follow the MAJOR.MINOR.PATCH format"
        )
    return raw_version


__version__ = _resolve_version()

__all__ = ["__version__"]
