"""Shared foundational utilities for chaindiag."""

from chaindiag.core.shared import typing
from chaindiag.core.shared.exceptions import (
    ChainDiagError,
    ConfigurationError,
    MissingValueWarning,
    ValidationError,
)

__all__ = [
    "ChainDiagError",
    "ConfigurationError",
    "MissingValueWarning",
    "ValidationError",
    "typing",
]
