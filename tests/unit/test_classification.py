"""Tests for threshold classification."""

import pytest

import numpy as np

from chaindiag.core.diagnostics.classification import (
    BUCKET_LEVELS,
    Bucket,
    check_breakpoints,
    classify,
    classify_vector,
)
from chaindiag.core.diagnostics.validation import validate_neff_ratio, validate_rhat
from chaindiag.core.shared.exceptions import ConfigurationError


class TestClassify:
    """Closed-on-the-right bucket intervals."""

    def test_rhat_scenario(self):
        buckets = classify(np.array([1.01, 1.06, 1.12]), (1.05, 1.10))
        assert buckets == (Bucket.LOW, Bucket.OK, Bucket.HIGH)

    def test_neff_scenario_uses_numeric_rule(self):
        buckets = classify(np.array([0.05, 0.3, 0.8]), (0.10, 0.50))
        assert buckets == (Bucket.LOW, Bucket.OK, Bucket.HIGH)

    def test_values_on_breakpoints_fall_in_lower_bucket(self):
        buckets = classify(np.array([1.05, 1.10]), (1.05, 1.10))
        assert buckets == (Bucket.LOW, Bucket.OK)

    def test_infinite_value_is_high(self):
        assert classify(np.array([np.inf]), (1.05, 1.10)) == (Bucket.HIGH,)

    def test_empty_input(self):
        assert classify(np.array([]), (1.05, 1.10)) == ()

    def test_rhat_property(self, rhat_values):
        for value, bucket in zip(rhat_values, classify(rhat_values, (1.05, 1.10)), strict=True):
            assert (bucket is Bucket.LOW) == (value <= 1.05)
            assert (bucket is Bucket.OK) == (1.05 < value <= 1.10)
            assert (bucket is Bucket.HIGH) == (value > 1.10)

    def test_neff_property(self, neff_ratios):
        for value, bucket in zip(neff_ratios, classify(neff_ratios, (0.1, 0.5)), strict=True):
            assert (bucket is Bucket.LOW) == (value <= 0.1)
            assert (bucket is Bucket.OK) == (0.1 < value <= 0.5)
            assert (bucket is Bucket.HIGH) == (value > 0.5)


class TestBreakpoints:
    """Breakpoint validation."""

    @pytest.mark.parametrize(
        "breakpoints",
        [(1.0,), (1.0, 1.1, 1.2), (1.1, 1.05), (1.05, 1.05), (np.nan, 1.1), (1.0, np.inf)],
    )
    def test_invalid_breakpoints(self, breakpoints):
        with pytest.raises(ConfigurationError):
            check_breakpoints(breakpoints)

    def test_valid_breakpoints_returned_as_floats(self):
        assert check_breakpoints([1, 2]) == (1.0, 2.0)


class TestClassifyVector:
    """Defaults come from the vector's diagnostic."""

    def test_rhat_defaults(self):
        vector = validate_rhat([1.05, 1.07, 1.2])
        assert classify_vector(vector) == (Bucket.LOW, Bucket.OK, Bucket.HIGH)

    def test_neff_defaults(self):
        vector = validate_neff_ratio([0.1, 0.5, 0.51])
        assert classify_vector(vector) == (Bucket.LOW, Bucket.OK, Bucket.HIGH)

    def test_custom_breakpoints(self):
        vector = validate_rhat([1.02])
        assert classify_vector(vector, (1.01, 1.05)) == (Bucket.OK,)


def test_bucket_levels_legend_order():
    assert BUCKET_LEVELS == (Bucket.HIGH, Bucket.OK, Bucket.LOW)
