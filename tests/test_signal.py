"""Tests for the moving-average signal and price window."""

import math

import pytest

from sma_swap_bot.engine.signal import PriceWindow, calculate_sma


def test_calculate_sma_small_set():
    assert calculate_sma([1, 2, 3, 4, 5]) == 3


def test_calculate_sma_single_element():
    assert calculate_sma([10]) == 10


def test_calculate_sma_empty_is_nan():
    assert math.isnan(calculate_sma([]))


def test_calculate_sma_floats():
    assert calculate_sma([1.5, 2.5, 3.5]) == pytest.approx(2.5, abs=1e-5)


def test_calculate_sma_large_set():
    assert calculate_sma(list(range(1, 101))) == 50.5


def test_calculate_sma_order_invariant():
    prices = [0.31, 0.29, 0.35, 0.27, 0.33]
    assert calculate_sma(prices) == pytest.approx(calculate_sma(list(reversed(prices))))
    assert calculate_sma(prices) == pytest.approx(calculate_sma(sorted(prices)))


def test_window_rejects_non_positive_size():
    with pytest.raises(ValueError):
        PriceWindow(0)


def test_window_starts_empty():
    window = PriceWindow(3)
    assert len(window) == 0
    assert math.isnan(window.sma())
    assert not window.is_full()


@pytest.mark.parametrize("extra", [0, 1, 7, 50])
def test_window_keeps_most_recent_observations(extra):
    """After N + k appends the window holds exactly the N most recent prices."""
    size = 5
    window = PriceWindow(size)
    prices = [float(i) for i in range(size + extra)]

    for i, price in enumerate(prices):
        window.append(price)
        assert len(window) <= size
        assert len(window) == min(i + 1, size)

    assert window.snapshot() == prices[-size:]
    assert list(window) == prices[-size:]
    assert window.is_full()


def test_window_sma_tracks_evictions():
    window = PriceWindow(3, [1.0, 2.0, 3.0])
    assert window.sma() == 2.0

    window.append(6.0)
    assert window.snapshot() == [2.0, 3.0, 6.0]
    assert window.sma() == pytest.approx(11.0 / 3)


def test_window_reset():
    window = PriceWindow(3, [1.0, 2.0])
    window.reset()
    assert len(window) == 0
