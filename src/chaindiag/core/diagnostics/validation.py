"""Input validation for per-parameter diagnostic vectors.

Raw Rhat or effective-sample-size ratio vectors are checked against the
domain of their diagnostic, missing entries are dropped with a
``MissingValueWarning``, and parameter names are carried along.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

import numpy as np
import pandas as pd

from chaindiag.core.diagnostics.kinds import DiagnosticKind
from chaindiag.core.shared.exceptions import MissingValueWarning, ValidationError
from chaindiag.core.shared.typing import FloatArray, VectorLike

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiagnosticVector:
    """Validated diagnostic values with no missing entries.

    Attributes:
        kind: Diagnostic the values belong to
        values: 1D float64 array in input order
        names: Parameter names aligned with ``values`` (None if unnamed)
        n_dropped: Number of missing values removed during validation
    """

    kind: DiagnosticKind
    values: FloatArray
    names: tuple[str, ...] | None = None
    n_dropped: int = 0

    def __len__(self) -> int:
        return int(self.values.size)

    @property
    def is_named(self) -> bool:
        return self.names is not None


def _split_names(
    values: VectorLike, names: Sequence[str] | None
) -> tuple[object, list[str] | None]:
    """Separate labelled containers into raw values and names."""
    if isinstance(values, pd.Series):
        if names is None and not isinstance(values.index, pd.RangeIndex):
            names = [str(label) for label in values.index]
        return values.to_numpy(na_value=np.nan), names
    if isinstance(values, Mapping):
        if names is None:
            names = [str(key) for key in values]
        return list(values.values()), names
    return values, None if names is None else list(names)


def _as_float_vector(values: object, argument: str) -> FloatArray:
    try:
        array = np.asarray(values, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        msg = f"'{argument}' must be numeric."
        raise ValidationError(msg) from exc

    if array.ndim == 0:
        array = array.reshape(1)
    elif array.ndim == 2 and 1 in array.shape:
        # 1D arrays stored as a single row or column
        array = array.reshape(-1)
    elif array.ndim != 1:
        msg = f"'{argument}' must be a vector or 1D array, got shape {array.shape}."
        raise ValidationError(msg)
    return array


def drop_missing(
    values: FloatArray,
    names: list[str] | None,
    name: str,
    stacklevel: int = 2,
) -> tuple[FloatArray, list[str] | None, int]:
    """Drop NaN entries, warning once with the number removed.

    Args:
        values: 1D float array
        names: Optional names aligned with ``values``
        name: Argument name used in the warning
        stacklevel: Passed to ``warnings.warn``

    Returns:
        Tuple of (kept values, kept names, number dropped)
    """
    missing = np.isnan(values)
    n_dropped = int(missing.sum())
    if n_dropped == 0:
        return values, names, 0

    message = f"dropped {n_dropped} missing values from '{name}'"
    logger.warning(message)
    warnings.warn(message, MissingValueWarning, stacklevel=stacklevel)

    keep = ~missing
    kept_names = None if names is None else [n for n, k in zip(names, keep, strict=True) if k]
    return values[keep], kept_names, n_dropped


def validate_diagnostic(
    values: VectorLike,
    kind: DiagnosticKind,
    names: Sequence[str] | None = None,
    name: str | None = None,
    stacklevel: int = 2,
) -> DiagnosticVector:
    """Validate a raw diagnostic vector and drop missing values.

    Args:
        values: Raw values. A ``pandas.Series`` with a non-default index or a
            mapping also provides parameter names.
        kind: Diagnostic the values belong to
        names: Optional parameter names, one per value
        name: Name of the input used in messages (defaults to the
            diagnostic's argument name)
        stacklevel: Stack level of the missing-value warning, relative to
            this function (2 points at its caller)

    Returns:
        DiagnosticVector with missing values removed

    Raises:
        ValidationError: If the input is not a numeric vector, names do not
            match the values, or a value violates the diagnostic's domain
    """
    argument = name or kind.argument_name
    raw, label_list = _split_names(values, names)
    array = _as_float_vector(raw, argument)

    if label_list is not None and len(label_list) != array.size:
        msg = (
            f"Got {len(label_list)} names for {array.size} values in '{argument}'; "
            "lengths must match."
        )
        raise ValidationError(msg)

    kind.check_domain(array)

    cleaned, kept_names, n_dropped = drop_missing(
        array, label_list, argument, stacklevel=stacklevel + 1
    )
    logger.debug(
        "Validated %s: %d values kept, %d dropped", kind.value, cleaned.size, n_dropped
    )
    return DiagnosticVector(
        kind=kind,
        values=cleaned,
        names=None if kept_names is None else tuple(kept_names),
        n_dropped=n_dropped,
    )


def validate_rhat(
    rhat: VectorLike, names: Sequence[str] | None = None, name: str = "rhat"
) -> DiagnosticVector:
    """Validate Rhat estimates (all values strictly positive)."""
    return validate_diagnostic(
        rhat, DiagnosticKind.RHAT, names=names, name=name, stacklevel=3
    )


def validate_neff_ratio(
    ratio: VectorLike, names: Sequence[str] | None = None, name: str = "ratio"
) -> DiagnosticVector:
    """Validate effective-sample-size ratios (all values in [0, 1])."""
    return validate_diagnostic(
        ratio, DiagnosticKind.NEFF_RATIO, names=names, name=name, stacklevel=3
    )


__all__ = [
    "DiagnosticVector",
    "drop_missing",
    "validate_diagnostic",
    "validate_neff_ratio",
    "validate_rhat",
]
