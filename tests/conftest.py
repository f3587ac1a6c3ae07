from __future__ import annotations

import logging
import random
import sys
from pathlib import Path
from typing import Iterator

import pytest


ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = ROOT / "src"
for entry in (SRC_ROOT, ROOT):
    if str(entry) not in sys.path:
        sys.path.insert(0, str(entry))


@pytest.fixture
def seeded_random() -> random.Random:
    """Deterministic uniform source for sampling tests."""

    return random.Random(20240611)


@pytest.fixture
def package_logger() -> Iterator[logging.Logger]:
    """Yield the package logger and restore its handlers and level afterwards."""

    logger = logging.getLogger("wfc_prob")
    handlers = list(logger.handlers)
    level = logger.level
    try:
        yield logger
    finally:
        for handler in list(logger.handlers):
            if handler not in handlers:
                logger.removeHandler(handler)
                handler.close()
        logger.setLevel(level)
