"""Service layer: plot-ready table preparation."""

from chaindiag.services.prepare import (
    LINE_PLOT_LAGS,
    prepare_autocorrelation,
    prepare_autocorrelation_with_config,
    prepare_neff_ratio,
    prepare_rhat,
)

__all__ = [
    "LINE_PLOT_LAGS",
    "prepare_autocorrelation",
    "prepare_autocorrelation_with_config",
    "prepare_neff_ratio",
    "prepare_rhat",
]
