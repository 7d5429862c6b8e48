import numpy as np
import pytest

from pongnet.data.grid import (
    GRID_HEIGHT,
    GRID_WIDTH,
    decode_position,
    enumerate_samples,
    one_hot_cell,
    pattern_from_frame,
)


def test_enumeration_covers_every_cell_once():
    samples = enumerate_samples()
    assert len(samples) == GRID_WIDTH * GRID_HEIGHT == 1024
    inputs = np.stack([s.inputs for s in samples])
    assert np.all(inputs.sum(axis=1) == 1.0)
    cells = inputs.argmax(axis=1)
    assert sorted(cells.tolist()) == list(range(1024))
    for sample, cell in zip(samples, cells):
        assert sample.label == cell % GRID_WIDTH
        assert sample.target.shape == (1,)
        assert sample.target[0] == sample.label / GRID_WIDTH


def test_enumeration_order_is_column_major():
    samples = enumerate_samples(4, 3)
    assert [s.label for s in samples] == [0, 0, 0, 1, 1, 1, 2, 2, 2, 3, 3, 3]
    assert int(samples[1].inputs.argmax()) == 0 + 1 * 4


def test_one_hot_cell_layout_and_bounds():
    pattern = one_hot_cell(5, 2)
    assert pattern.shape == (1024,)
    assert pattern[5 + 2 * 32] == 1.0
    assert pattern.sum() == 1.0
    with pytest.raises(ValueError):
        one_hot_cell(32, 0)
    with pytest.raises(ValueError):
        one_hot_cell(0, -1)


@pytest.mark.parametrize("value,expected", [(0.0, 0), (0.5, 16), (31 / 32, 31), (0.99, 32)])
def test_decode_position(value, expected):
    assert decode_position(value) == expected


def test_pattern_from_frame_thresholds_first_channel():
    frame = np.zeros((32, 32, 4), dtype=np.uint8)
    frame[7, 3] = (255, 255, 255, 255)
    frame[1, 1, 1] = 255  # green only: ignored
    pattern = pattern_from_frame(frame)
    assert np.array_equal(pattern, one_hot_cell(3, 7))

    gray = np.zeros((32, 32))
    gray[0, 31] = 0.4
    assert np.array_equal(pattern_from_frame(gray), one_hot_cell(31, 0))

    with pytest.raises(ValueError):
        pattern_from_frame(np.zeros(1024))
