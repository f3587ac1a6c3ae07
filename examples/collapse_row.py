"""Collapse a row of cells, always resolving the least uncertain cell first.

Every cell starts with the same tile weights. Choosing a tile for a cell
forbids the same tile in its neighbours, which lowers their entropy.

Run with ``python examples/collapse_row.py``.
"""

from __future__ import annotations

import random
from typing import Sequence

from wfc_prob import NoChoices, entropy, normalize, pick_from

TILE_WEIGHTS = (3.0, 2.0, 1.0)


def collapse_row(
    length: int, rng: random.Random, weights: Sequence[float] = TILE_WEIGHTS
) -> list[int | None]:
    """Return the tile chosen for each cell, ``None`` when no tile fits."""

    candidates = [list(weights) for _ in range(length)]
    result: list[int | None] = [None] * length
    open_cells = set(range(length))

    while open_cells:
        cell = min(
            open_cells,
            key=lambda index: (entropy(normalize(candidates[index])), index),
        )
        open_cells.discard(cell)
        try:
            tile = pick_from(rng, normalize(candidates[cell]))
        except NoChoices:
            continue
        result[cell] = tile
        for neighbour in (cell - 1, cell + 1):
            if neighbour in open_cells:
                candidates[neighbour][tile] = 0.0
    return result


if __name__ == "__main__":
    print(collapse_row(12, random.Random(3)))
