"""Tests for fixed-width distributions."""

from __future__ import annotations

import dataclasses

import numpy as np
import pytest

from wfc_prob.configuration import ProbabilitySettings
from wfc_prob.errors import NoChoices
from wfc_prob.fixed import FixedWidth

from tests.helpers import ScriptedDraws, assert_distribution_close


@pytest.fixture
def four() -> FixedWidth:
    return FixedWidth(4)


@pytest.mark.parametrize(
    ("width", "index_dtype"),
    [(1, np.uint8), (4, np.uint8), (256, np.uint8), (257, np.uint16), (70_000, np.uint32)],
)
def test_index_dtype_is_minimal(width: int, index_dtype: type) -> None:
    assert FixedWidth(width).index_dtype == np.dtype(index_dtype)


@pytest.mark.parametrize("dtype", [np.int32, "int8", np.complex128, "bogus"])
def test_rejects_non_float_kinds(dtype: object) -> None:
    with pytest.raises(TypeError):
        FixedWidth(4, dtype=dtype)


@pytest.mark.parametrize("width", [0, -3])
def test_rejects_empty_widths(width: int) -> None:
    with pytest.raises(ValueError):
        FixedWidth(width)


def test_is_immutable(four: FixedWidth) -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        four.width = 5  # type: ignore[misc]


def test_rejects_vectors_of_the_wrong_length(four: FixedWidth) -> None:
    with pytest.raises(ValueError):
        four.normalize([1.0, 2.0, 3.0])


def test_normalize_returns_new_vector(four: FixedWidth) -> None:
    weights = np.array([1.0, -1.0, 3.0, 0.0])

    result = four.normalize(weights)

    assert result is not weights
    assert weights.tolist() == [1.0, -1.0, 3.0, 0.0]
    assert_distribution_close(result, [0.25, 0.0, 0.75, 0.0])


def test_normalize_keeps_zero_vector(four: FixedWidth) -> None:
    result = four.normalize([0.0, -1.0, 0.0, -5.0])

    assert result.tolist() == [0.0, 0.0, 0.0, 0.0]


def test_float32_width(four: FixedWidth) -> None:
    narrow = FixedWidth(4, dtype="float32")

    result = narrow.normalize([1.0, 1.0, 2.0, 0.0])

    assert result.dtype == np.float32
    assert narrow.entropy(narrow.full(0.25)) == pytest.approx(2.0, rel=0.001)
    assert four.zeros().dtype == np.float64


def test_entropy_and_ranges(four: FixedWidth) -> None:
    assert four.entropy([0.8, 0.2, 0.0, 0.0]) == pytest.approx(0.7219, rel=0.001)
    assert_distribution_close(four.ranges([0.25, 0.25, 0.5, 0.0]), [0.25, 0.5, 1.0, 1.0])


def test_pick_returns_index_dtype(four: FixedWidth) -> None:
    index = four.pick(0.6, [0.25, 0.25, 0.5, 0.0])

    assert isinstance(index, np.uint8)
    assert index == 2


def test_pick_from_source(four: FixedWidth) -> None:
    source = ScriptedDraws([0.0, 0.99])

    assert four.pick_from(source, [0.5, 0.5, 0.0, 0.0]) == 0
    assert four.pick_from(source, [0.5, 0.5, 0.0, 0.0]) == 1


def test_pick_on_zero_vector_raises(four: FixedWidth) -> None:
    with pytest.raises(NoChoices) as excinfo:
        four.pick(0.5, four.zeros())

    assert excinfo.value.width == 4


def test_from_settings() -> None:
    settings = ProbabilitySettings(range_tolerance=0.05, dtype="float32")

    width = FixedWidth.from_settings(3, settings)

    assert width.dtype == np.float32
    assert width.tolerance == 0.05
    assert width.pick(0.99, [0.5, 0.48, 0.0]) == 1
