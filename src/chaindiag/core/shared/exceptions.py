"""Exception taxonomy for chaindiag.

This module defines a small, coherent hierarchy of exceptions so callers can
tell bad input apart from bad settings. Both fatal errors also derive from
``ValueError`` so generic callers keep working.
"""

from __future__ import annotations


class ChainDiagError(Exception):
    """Base class for all chaindiag-specific exceptions."""


class ValidationError(ChainDiagError, ValueError):
    """Raw input violates a domain constraint (negative Rhat, ratio outside [0, 1])."""


class ConfigurationError(ChainDiagError, ValueError):
    """Requested settings are incompatible with the data (lags, breakpoints)."""


class MissingValueWarning(UserWarning):
    """Missing values were dropped from a diagnostic vector."""


__all__ = [
    "ChainDiagError",
    "ConfigurationError",
    "MissingValueWarning",
    "ValidationError",
]
