"""Grouped autocorrelation of MCMC draws.

Draws are stored as a 3D array indexed ``(iteration, chain, parameter)``.
The sample autocorrelation function is computed independently for every
(chain, parameter) series with the biased autocovariance estimator::

    c_k = 1/n * sum_{t=0}^{n-k-1} (x_t - mean) * (x_{t+k} - mean)
    acf_k = c_k / c_0

so that ``acf_0`` is exactly 1.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

import numpy as np
from threadpoolctl import threadpool_limits

from chaindiag.core.diagnostics.kinds import AcfStyle
from chaindiag.core.diagnostics.tidy import (
    AutocorrelationTable,
    assemble_autocorrelation_table,
)
from chaindiag.core.shared.exceptions import ConfigurationError, ValidationError
from chaindiag.core.shared.typing import FloatArray

logger = logging.getLogger(__name__)

DEFAULT_LAGS = 25


@dataclass(frozen=True)
class MCMCArray:
    """Draws indexed by (iteration, chain, parameter) with parameter names.

    Attributes:
        draws: Array of shape (n_iterations, n_chains, n_parameters)
        parameter_names: One name per parameter
    """

    draws: FloatArray
    parameter_names: tuple[str, ...]

    def __post_init__(self) -> None:
        if self.draws.ndim != 3:
            msg = f"'draws' must be 3D (iteration, chain, parameter), got {self.draws.ndim}D."
            raise ValidationError(msg)
        n_iterations, n_chains, n_parameters = self.draws.shape
        if n_iterations < 1 or n_chains < 1 or n_parameters < 1:
            msg = f"'draws' needs at least one iteration, chain and parameter, got {self.draws.shape}."
            raise ValidationError(msg)
        if len(self.parameter_names) != n_parameters:
            msg = (
                f"Got {len(self.parameter_names)} parameter names for "
                f"{n_parameters} parameters."
            )
            raise ValidationError(msg)
        if len(set(self.parameter_names)) != n_parameters:
            msg = "Parameter names must be unique."
            raise ValidationError(msg)

    @property
    def n_iterations(self) -> int:
        return self.draws.shape[0]

    @property
    def n_chains(self) -> int:
        return self.draws.shape[1]

    @property
    def n_parameters(self) -> int:
        return self.draws.shape[2]

    def series(self, chain_index: int, parameter_index: int) -> FloatArray:
        """Return the draws of one chain for one parameter (0-based indices)."""
        return self.draws[:, chain_index, parameter_index]


def as_mcmc_array(
    draws: FloatArray | MCMCArray,
    parameter_names: Sequence[str] | None = None,
) -> MCMCArray:
    """Wrap raw draws as an :class:`MCMCArray`.

    A 2D array is read as ``(iteration, parameter)`` draws from a single
    chain. Without names, parameters are called ``V1``, ``V2``, ...

    Raises:
        ValidationError: Wrong dimensionality, non-numeric draws or
            mismatched names
    """
    if isinstance(draws, MCMCArray):
        if parameter_names is None:
            return draws
        draws = draws.draws

    try:
        array = np.asarray(draws, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        msg = "'draws' must be numeric."
        raise ValidationError(msg) from exc

    if array.ndim == 2:
        array = array[:, np.newaxis, :]
    if array.ndim != 3:
        msg = f"'draws' must be a 3D array (iteration, chain, parameter), got {array.ndim}D."
        raise ValidationError(msg)

    if parameter_names is None:
        parameter_names = [f"V{i + 1}" for i in range(array.shape[2])]
    return MCMCArray(draws=array, parameter_names=tuple(str(n) for n in parameter_names))


def select_parameters(
    array: MCMCArray,
    pars: Iterable[str] = (),
    regex_pars: Iterable[str] = (),
) -> MCMCArray:
    """Keep the named parameters and those matching any regular expression.

    The selection keeps the order of the parameters in ``array``. With no
    selectors every parameter is kept.

    Raises:
        ValidationError: Unknown parameter name, invalid pattern or empty selection
    """
    # A bare string is a single selector
    if isinstance(pars, str):
        pars = [pars]
    if isinstance(regex_pars, str):
        regex_pars = [regex_pars]
    pars = list(pars)
    patterns = list(regex_pars)
    if not pars and not patterns:
        return array

    unknown = [p for p in pars if p not in array.parameter_names]
    if unknown:
        msg = f"Some 'pars' don't match parameter names: {', '.join(unknown)}"
        raise ValidationError(msg)

    try:
        compiled = [re.compile(p) for p in patterns]
    except re.error as exc:
        msg = f"Invalid pattern in 'regex_pars': {exc}"
        raise ValidationError(msg) from exc

    wanted = set(pars)
    keep = [
        i
        for i, name in enumerate(array.parameter_names)
        if name in wanted or any(rx.search(name) for rx in compiled)
    ]
    if not keep:
        msg = "No parameters were found matching those names."
        raise ValidationError(msg)

    return MCMCArray(
        draws=array.draws[:, :, keep],
        parameter_names=tuple(array.parameter_names[i] for i in keep),
    )


def sample_acf(series: FloatArray, lags: int) -> FloatArray:
    """Sample autocorrelation function of a 1D series at lags ``0..lags``.

    A constant series has zero variance; its autocorrelation is reported as
    1 at lag 0 and 0 elsewhere.
    """
    x = np.asarray(series, dtype=np.float64)
    n = x.size
    centered = x - x.mean()
    c0 = float(np.dot(centered, centered)) / n

    acf = np.zeros(lags + 1, dtype=np.float64)
    acf[0] = 1.0
    if c0 == 0.0:
        return acf

    for k in range(1, lags + 1):
        ck = float(np.dot(centered[: n - k], centered[k:])) / n
        acf[k] = ck / c0
    return acf


def _check_lags(lags: int, n_iterations: int) -> int:
    if isinstance(lags, bool) or not isinstance(lags, int | np.integer):
        msg = f"'lags' must be an integer, got {lags!r}."
        raise ConfigurationError(msg)
    if lags < 0:
        msg = f"'lags' must be non-negative, got {lags}."
        raise ConfigurationError(msg)
    if lags + 1 >= n_iterations:
        msg = f"Too few iterations for lags={lags}."
        raise ConfigurationError(msg)
    return int(lags)


def _check_finite(array: MCMCArray) -> None:
    finite = np.isfinite(array.draws).all(axis=(0, 1))
    if not finite.all():
        bad = [name for name, ok in zip(array.parameter_names, finite, strict=True) if not ok]
        msg = f"Draws contain missing or infinite values for: {', '.join(bad)}"
        raise ValidationError(msg)


def compute_autocorrelation(
    array: MCMCArray,
    lags: int = DEFAULT_LAGS,
    n_workers: int | None = None,
    style: AcfStyle = AcfStyle.LINE,
) -> AutocorrelationTable:
    """Compute the autocorrelation of every (chain, parameter) series.

    Args:
        array: Validated draws
        lags: Maximum lag; requires ``lags + 1 < n_iterations``
        n_workers: Threads used across groups (sequential when None or 1)
        style: Plot style stored on the table

    Returns:
        AutocorrelationTable with one row per (chain, parameter, lag),
        ordered by chain, then parameter, then lag

    Raises:
        ConfigurationError: If ``lags`` is invalid for the number of iterations
        ValidationError: If any draw is missing or infinite
    """
    lags = _check_lags(lags, array.n_iterations)
    _check_finite(array)

    groups = [(c, p) for c in range(array.n_chains) for p in range(array.n_parameters)]

    def _acf_for(group: tuple[int, int]) -> FloatArray:
        chain_index, parameter_index = group
        return sample_acf(array.series(chain_index, parameter_index), lags)

    if n_workers is not None and n_workers > 1 and len(groups) > 1:
        n_workers = min(n_workers, len(groups))
        logger.debug("Computing %d ACF groups on %d threads", len(groups), n_workers)
        # Avoid BLAS oversubscription while Python threads run in parallel
        with (
            threadpool_limits(limits=1, user_api="blas"),
            ThreadPoolExecutor(max_workers=n_workers) as pool,
        ):
            acf_values = list(pool.map(_acf_for, groups))
    else:
        acf_values = [_acf_for(group) for group in groups]

    logger.debug(
        "Computed ACF for %d chains x %d parameters up to lag %d",
        array.n_chains,
        array.n_parameters,
        lags,
    )
    return assemble_autocorrelation_table(
        chains=[c + 1 for c, _ in groups],
        parameters=[array.parameter_names[p] for _, p in groups],
        acf_values=acf_values,
        parameter_levels=array.parameter_names,
        lags=lags,
        style=style,
    )


__all__ = [
    "DEFAULT_LAGS",
    "MCMCArray",
    "as_mcmc_array",
    "compute_autocorrelation",
    "sample_acf",
    "select_parameters",
]
