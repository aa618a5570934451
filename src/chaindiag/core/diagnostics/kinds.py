"""Closed set of per-value convergence diagnostics.

Every choice that depends on the diagnostic (domain check, default
breakpoints, shade direction, axis and legend text) is a member of
``DiagnosticKind``. Callers pass the enum member, never a function name.
"""

from __future__ import annotations

from enum import Enum

import numpy as np

from chaindiag.core.shared.exceptions import ValidationError
from chaindiag.core.shared.typing import FloatArray


class Shade(str, Enum):
    """Relative shade of a bucket in a three-level palette (lighter is better)."""

    LIGHT = "light"
    MID = "mid"
    DARK = "dark"


class AcfStyle(str, Enum):
    """Autocorrelation plot style."""

    LINE = "line"
    BAR = "bar"


class DiagnosticKind(str, Enum):
    """Diagnostics reported as one value per parameter."""

    RHAT = "rhat"
    NEFF_RATIO = "neff_ratio"

    @property
    def argument_name(self) -> str:
        """Name used for the input vector in messages."""
        if self is DiagnosticKind.RHAT:
            return "rhat"
        return "ratio"

    @property
    def default_breakpoints(self) -> tuple[float, float]:
        if self is DiagnosticKind.RHAT:
            return (1.05, 1.10)
        return (0.10, 0.50)

    @property
    def axis_title(self) -> str:
        if self is DiagnosticKind.RHAT:
            return "R-hat"
        return "Neff/N"

    @property
    def shades(self) -> tuple[Shade, Shade, Shade]:
        """Shades for the ``low``, ``ok`` and ``high`` buckets, in that order.

        A low Rhat is good, a low effective-sample-size ratio is bad, so the
        two kinds run the palette in opposite directions.
        """
        if self is DiagnosticKind.RHAT:
            return (Shade.LIGHT, Shade.MID, Shade.DARK)
        return (Shade.DARK, Shade.MID, Shade.LIGHT)

    def check_domain(self, values: FloatArray) -> None:
        """Raise ``ValidationError`` if any non-missing value is out of domain.

        Args:
            values: 1D float array, possibly containing NaN

        Raises:
            ValidationError: Rhat value <= 0 or infinite, or ratio outside [0, 1]
        """
        present = values[~np.isnan(values)]
        if self is DiagnosticKind.RHAT:
            if np.any(present <= 0):
                msg = "All 'rhat' values must be positive."
                raise ValidationError(msg)
            if np.any(np.isinf(present)):
                msg = "All 'rhat' values must be finite."
                raise ValidationError(msg)
        elif np.any((present < 0) | (present > 1)):
            msg = "All elements of 'ratio' must be between 0 and 1."
            raise ValidationError(msg)


__all__ = ["AcfStyle", "DiagnosticKind", "Shade"]
