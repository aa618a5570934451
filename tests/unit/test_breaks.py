"""Tests for Rhat axis breaks."""

import pytest

import numpy as np

from chaindiag.core.diagnostics.breaks import rhat_breaks
from chaindiag.core.diagnostics.validation import validate_rhat


@pytest.mark.parametrize(
    ("values", "expected"),
    [
        ([1.0, 1.01, 1.04], (1.0, 1.05)),
        ([1.01, 1.06, 1.12], (1.0, 1.05, 1.1)),
        ([1.01, 1.3], (1.0, 1.05, 1.1, 1.3)),
        ([1.01, 1.55], (1.0, 1.05, 1.1, 1.5)),
        ([1.01, 1.72], (1.0, 1.05, 1.1, 1.5, 1.72)),
        ([1.01, 2.5], (1.0, 1.05, 1.1, 1.5, 2.0, 2.5)),
        ([1.0, 2.05], (1.0, 1.05, 1.1, 1.5, 2.0)),
        ([0.9, 1.02], (1.0, 1.05)),
    ],
)
def test_breaks(values, expected):
    assert rhat_breaks(np.array(values)) == pytest.approx(expected)


def test_max_value_rounded_to_two_decimals():
    breaks = rhat_breaks(np.array([1.0, 1.23456]))
    assert breaks[-1] == 1.23


def test_empty_input_gives_anchors():
    assert rhat_breaks(np.array([])) == (1.0, 1.05)


def test_accepts_validated_vector():
    assert rhat_breaks(validate_rhat([1.01, 1.06, 1.12])) == (1.0, 1.05, 1.1)


def test_breaks_properties(rng):
    for _ in range(50):
        values = rng.uniform(0.9, 3.0, size=rng.integers(1, 20))
        breaks = rhat_breaks(values)
        assert all(a < b for a, b in zip(breaks, breaks[1:]))
        assert breaks[:2] == (1.0, 1.05)
        # Either the maximum got its own tick or it sits close to the last break
        assert breaks[-1] >= round(values.max(), 2) or values.max() < breaks[-1] + 0.1


def test_infinite_maximum_is_not_a_break():
    assert rhat_breaks(np.array([1.0, np.inf])) == (1.0, 1.05, 1.1, 1.5, 2.0)
