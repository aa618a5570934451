"""Preparation of plot-ready diagnostic tables.

These are the entry points used by renderers. Each call validates its input,
computes everything from scratch and returns immutable tables; nothing is
cached between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from chaindiag.core.diagnostics.autocorrelation import (
    MCMCArray,
    as_mcmc_array,
    compute_autocorrelation,
    select_parameters,
)
from chaindiag.core.diagnostics.breaks import BreakSet, rhat_breaks
from chaindiag.core.diagnostics.classification import classify
from chaindiag.core.diagnostics.kinds import AcfStyle, DiagnosticKind
from chaindiag.core.diagnostics.tidy import (
    AutocorrelationTable,
    DiagnosticTable,
    assemble_diagnostic_table,
)
from chaindiag.core.diagnostics.validation import validate_diagnostic
from chaindiag.core.domain.config import AutocorrelationConfig, ThresholdConfig
from chaindiag.core.shared.exceptions import ConfigurationError
from chaindiag.core.shared.typing import FloatArray, VectorLike

logger = logging.getLogger(__name__)

# Default lag count of the autocorrelation line plot
LINE_PLOT_LAGS = 20


def _diagnostic_table(
    values: VectorLike,
    kind: DiagnosticKind,
    names: Sequence[str] | None,
    thresholds: ThresholdConfig | None,
    name: str,
) -> tuple[DiagnosticTable, FloatArray]:
    # Missing-value warnings point at the caller of prepare_*
    vector = validate_diagnostic(values, kind, names=names, name=name, stacklevel=4)
    thresholds = thresholds or ThresholdConfig.for_kind(kind)
    buckets = classify(vector.values, thresholds.breakpoints)
    table = assemble_diagnostic_table(vector, buckets)
    logger.debug(
        "Prepared %s table: %d rows, breakpoints %s",
        kind.value,
        len(table),
        thresholds.breakpoints,
    )
    return table, vector.values


def prepare_rhat(
    values: VectorLike,
    names: Sequence[str] | None = None,
    *,
    thresholds: ThresholdConfig | None = None,
    name: str = "rhat",
) -> tuple[DiagnosticTable, BreakSet]:
    """Prepare a table of Rhat values and the matching axis breaks.

    Args:
        values: Rhat estimates, one per parameter
        names: Optional parameter names
        thresholds: Bucket breakpoints (default 1.05 and 1.10)
        name: Name of the input used in messages

    Returns:
        Tuple of (table, breaks)

    Raises:
        ValidationError: If any value is <= 0 or the input is malformed

    Example:
        >>> table, breaks = prepare_rhat([1.01, 1.06, 1.12])
        >>> [r.bucket.value for r in table]
        ['low', 'ok', 'high']
        >>> breaks
        (1.0, 1.05, 1.1)
    """
    table, cleaned = _diagnostic_table(values, DiagnosticKind.RHAT, names, thresholds, name)
    return table, rhat_breaks(cleaned)


def prepare_neff_ratio(
    values: VectorLike,
    names: Sequence[str] | None = None,
    *,
    thresholds: ThresholdConfig | None = None,
    name: str = "ratio",
) -> DiagnosticTable:
    """Prepare a table of effective-sample-size ratios.

    Buckets follow the numeric rule only (``low`` means a small ratio);
    renderers shade ``low`` darkest for this diagnostic.

    Raises:
        ValidationError: If any value lies outside [0, 1] or the input is malformed
    """
    table, _ = _diagnostic_table(values, DiagnosticKind.NEFF_RATIO, names, thresholds, name)
    return table


def prepare_autocorrelation(
    draws: FloatArray | MCMCArray,
    lags: int = LINE_PLOT_LAGS,
    *,
    parameter_names: Sequence[str] | None = None,
    pars: Iterable[str] = (),
    regex_pars: Iterable[str] = (),
    style: AcfStyle | str = AcfStyle.LINE,
    n_workers: int | None = None,
) -> AutocorrelationTable:
    """Prepare the autocorrelation table of MCMC draws.

    Args:
        draws: Array of shape (iteration, chain, parameter), or an MCMCArray
        lags: Maximum lag
        parameter_names: Names of the parameters when ``draws`` is a raw array
        pars: Parameters to keep
        regex_pars: Regular expressions selecting more parameters
        style: Plot style; stored on the returned table and reported by ``acf_hints``
        n_workers: Threads used across (chain, parameter) groups

    Returns:
        AutocorrelationTable with chains * parameters * (lags + 1) rows

    Raises:
        ConfigurationError: If ``lags + 1 >= n_iterations`` or ``style`` is unknown
        ValidationError: If the draws or the parameter selection are invalid
    """
    try:
        style = AcfStyle(style)
    except ValueError as exc:
        msg = f"'style' must be one of 'line' or 'bar', got {style!r}."
        raise ConfigurationError(msg) from exc

    array = select_parameters(
        as_mcmc_array(draws, parameter_names), pars=pars, regex_pars=regex_pars
    )
    logger.debug(
        "Autocorrelation input: %d iterations, %d chains, %d parameters",
        array.n_iterations,
        array.n_chains,
        array.n_parameters,
    )
    return compute_autocorrelation(array, lags=lags, n_workers=n_workers, style=style)


def prepare_autocorrelation_with_config(
    draws: FloatArray | MCMCArray,
    config: AutocorrelationConfig,
    **kwargs: object,
) -> AutocorrelationTable:
    """Prepare the autocorrelation table using lags, style and workers from ``config``."""
    return prepare_autocorrelation(
        draws,
        lags=config.lags,
        style=config.style,
        n_workers=config.n_workers,
        **kwargs,  # type: ignore[arg-type]
    )


__all__ = [
    "LINE_PLOT_LAGS",
    "prepare_autocorrelation",
    "prepare_autocorrelation_with_config",
    "prepare_neff_ratio",
    "prepare_rhat",
]
