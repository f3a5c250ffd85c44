from __future__ import annotations

import random

import numpy as np
import pytest

from block_blast.game import COLORS, SHAPE_CATALOG, Shape


@pytest.mark.parametrize("rows", [
    [],
    [[]],
    [[0, 0], [0, 0]],
    [[1, 1], [1]],
    [[1, 2]],
])
def test_malformed_structures_rejected(rows):
    with pytest.raises(ValueError):
        Shape(rows, (1, 2, 3))


def test_catalog_shapes_are_trimmed_and_small():
    for structure in SHAPE_CATALOG:
        assert structure.any(axis=1).all()
        assert structure.any(axis=0).all()
        assert structure.shape[0] <= 5 and structure.shape[1] <= 5


def test_shape_is_immutable():
    shape = Shape.from_catalog(9)
    with pytest.raises(ValueError):
        shape.block_structure[0, 0] = 0
    with pytest.raises(AttributeError):
        shape.color = (0, 0, 0)  # type: ignore[misc]


def test_from_catalog_uses_color_entry():
    shape = Shape.from_catalog(3, 2)
    assert shape.color == COLORS[2].main
    assert shape.hint_color == COLORS[2].hint
    assert shape.block_count == 3
    assert (shape.height, shape.width) == (1, 3)


def test_from_catalog_bad_index():
    with pytest.raises(ValueError):
        Shape.from_catalog(len(SHAPE_CATALOG))


def test_cells_at_offsets_anchor():
    shape = Shape([[0, 1], [1, 1]], (9, 9, 9))
    assert shape.offsets() == [(0, 1), (1, 0), (1, 1)]
    assert shape.cells_at(2, 3) == [(2, 4), (3, 3), (3, 4)]


def test_random_draws_from_catalogs():
    rng = random.Random(7)
    mains = {c.main for c in COLORS}
    for _ in range(50):
        shape = Shape.random(rng)
        assert any(np.array_equal(shape.block_structure, s) for s in SHAPE_CATALOG)
        assert shape.color in mains


def test_random_is_reproducible_with_seed():
    a = Shape.random(random.Random(3))
    b = Shape.random(random.Random(3))
    assert np.array_equal(a.block_structure, b.block_structure)
    assert a.color == b.color


def test_padded_canvas():
    shape = Shape([[1, 1, 1]], (1, 1, 1))
    padded = shape.padded(5)
    assert padded.shape == (5, 5)
    assert padded.sum() == 3
    assert padded[0, :3].tolist() == [1, 1, 1]
