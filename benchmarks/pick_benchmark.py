from __future__ import annotations

import random

import numpy as np
import pytest

from wfc_prob import FixedWidth, entropy, normalize, pick

pytestmark = pytest.mark.benchmark(group="pick")


def _weights(width: int, *, seed: int = 11) -> list[float]:
    rng = random.Random(seed)
    return [rng.random() for _ in range(width)]


@pytest.mark.parametrize("width", [4, 64, 1024])
def test_pick_dynamic(benchmark: pytest.BenchmarkFixture, width: int) -> None:
    distribution = normalize(_weights(width)).tolist()

    index = benchmark(pick, 0.73, distribution)
    assert 0 <= index < width


def test_pick_fixed_width(benchmark: pytest.BenchmarkFixture) -> None:
    tiles = FixedWidth(16, dtype=np.float32)
    distribution = tiles.normalize(_weights(16))

    index = benchmark(tiles.pick, 0.5, distribution)
    assert index < 16


def test_entropy(benchmark: pytest.BenchmarkFixture) -> None:
    distribution = normalize(_weights(1024))

    bits = benchmark(entropy, distribution)
    assert 0.0 < bits <= 10.0
