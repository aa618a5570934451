"""Data-adaptive axis breaks for Rhat plots."""

from __future__ import annotations

import logging

import numpy as np

from chaindiag.core.diagnostics.validation import DiagnosticVector
from chaindiag.core.shared.typing import FloatArray

logger = logging.getLogger(__name__)

BreakSet = tuple[float, ...]

RHAT_ANCHORS: BreakSet = (1.0, 1.05)
RHAT_OPTIONAL_BREAKS: BreakSet = (1.5, 2.0)
# Gap above the largest break before the maximum value gets its own tick
MAX_VALUE_GAP = 0.1


def rhat_breaks(rhat: FloatArray | DiagnosticVector) -> BreakSet:
    """Compute reference breaks for a vector of Rhat values.

    Starts from (1.0, 1.05); adds 1.1 when any value exceeds 1.05, then 1.5
    and 2.0 when any value exceeds each of them. If the largest value sits at
    least 0.1 above the largest break so far, it is added rounded to two
    decimals so an outlying parameter still lands on a labelled tick. An
    infinite maximum never becomes a break.

    Args:
        rhat: Validated Rhat values (no missing entries)

    Returns:
        Strictly increasing tuple of breaks
    """
    values = rhat.values if isinstance(rhat, DiagnosticVector) else np.asarray(rhat, dtype=float)
    breaks = list(RHAT_ANCHORS)
    if values.size == 0:
        return tuple(breaks)

    if np.any(values > 1.05):
        breaks.append(1.1)
    for k in RHAT_OPTIONAL_BREAKS:
        if np.any(values > k):
            breaks.append(k)

    max_value = float(np.max(values))
    if np.isfinite(max_value) and max_value >= max(breaks) + MAX_VALUE_GAP:
        breaks.append(round(max_value, 2))

    result = tuple(sorted(set(breaks)))
    logger.debug("Rhat breaks for max value %.4f: %s", max_value, result)
    return result


__all__ = ["MAX_VALUE_GAP", "RHAT_ANCHORS", "BreakSet", "rhat_breaks"]
