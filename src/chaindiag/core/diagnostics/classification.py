"""Threshold classification of diagnostic values into three buckets.

Buckets are directionless: ``low`` only means "at or below the first
breakpoint". Whether low is good (Rhat) or bad (Neff/N) is decided by the
shade mapping in :mod:`chaindiag.core.diagnostics.scales`.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from enum import Enum

import numpy as np

from chaindiag.core.diagnostics.validation import DiagnosticVector
from chaindiag.core.shared.exceptions import ConfigurationError
from chaindiag.core.shared.typing import FloatArray


class Bucket(str, Enum):
    """Severity bucket of a single diagnostic value."""

    LOW = "low"
    OK = "ok"
    HIGH = "high"


# Legend / factor order used by renderers
BUCKET_LEVELS: tuple[Bucket, Bucket, Bucket] = (Bucket.HIGH, Bucket.OK, Bucket.LOW)

_BUCKETS_BY_INDEX = (Bucket.LOW, Bucket.OK, Bucket.HIGH)


def check_breakpoints(breakpoints: Sequence[float]) -> tuple[float, float]:
    """Return breakpoints as a validated ``(lower, upper)`` pair.

    Raises:
        ConfigurationError: Not exactly two finite, strictly ascending values
    """
    if len(breakpoints) != 2:
        msg = f"'breakpoints' must contain exactly two values, got {len(breakpoints)}."
        raise ConfigurationError(msg)
    lower, upper = (float(b) for b in breakpoints)
    if not (math.isfinite(lower) and math.isfinite(upper)):
        msg = f"'breakpoints' must be finite, got ({lower}, {upper})."
        raise ConfigurationError(msg)
    if not lower < upper:
        msg = f"'breakpoints' must be strictly ascending, got ({lower}, {upper})."
        raise ConfigurationError(msg)
    return lower, upper


def classify(values: FloatArray, breakpoints: Sequence[float]) -> tuple[Bucket, ...]:
    """Assign each value to ``low``, ``ok`` or ``high``.

    Intervals are closed on the right: ``low`` is ``v <= b1``, ``ok`` is
    ``b1 < v <= b2`` and ``high`` is ``v > b2``.

    Args:
        values: 1D array of values without missing entries
        breakpoints: Two ascending breakpoints ``(b1, b2)``

    Returns:
        One bucket per value, in input order
    """
    edges = np.asarray(check_breakpoints(breakpoints))
    # side="left" counts edges strictly below v, so v == b1 stays in "low"
    indices = np.searchsorted(edges, np.asarray(values, dtype=np.float64), side="left")
    return tuple(_BUCKETS_BY_INDEX[i] for i in indices)


def classify_vector(
    vector: DiagnosticVector, breakpoints: Sequence[float] | None = None
) -> tuple[Bucket, ...]:
    """Classify a validated vector, defaulting to its diagnostic's breakpoints."""
    if breakpoints is None:
        breakpoints = vector.kind.default_breakpoints
    return classify(vector.values, breakpoints)


__all__ = ["BUCKET_LEVELS", "Bucket", "check_breakpoints", "classify", "classify_vector"]
