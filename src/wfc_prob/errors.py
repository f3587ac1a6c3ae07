"""Exceptions raised by the probability helpers."""

from __future__ import annotations

__all__ = ["ContractViolation", "NoChoices"]


class NoChoices(RuntimeError):
    """Raised when a distribution has no outcome with non-zero probability."""

    def __init__(self, width: int) -> None:
        super().__init__(
            f"distribution of width {width} has no outcome with non-zero probability"
        )
        self.width = width


class ContractViolation(AssertionError):
    """Raised when a caller breaks a precondition of the probability helpers.

    These are programming errors (an un-normalised distribution handed to the
    picker, a range scan that finds no slot) and are never handled inside the
    package.
    """
