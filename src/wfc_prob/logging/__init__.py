"""Logging utilities for wfc_prob."""

from wfc_prob.logging.config import JsonFormatter, setup_logging

__all__ = ["JsonFormatter", "setup_logging"]
