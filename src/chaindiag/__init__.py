"""chaindiag - Plot-ready MCMC convergence diagnostics.

Public API:
    - prepare_rhat: Rhat table and axis breaks
    - prepare_neff_ratio: Effective-sample-size ratio table
    - prepare_autocorrelation: Autocorrelation table by chain and parameter

Configuration:
    - DiagnosticsConfig: Main configuration object
    - ThresholdConfig, AutocorrelationConfig: Sub-configurations

Errors:
    - ValidationError, ConfigurationError, MissingValueWarning
"""

import contextlib
import logging
from importlib import metadata

__version__ = "0.1.0"

with contextlib.suppress(metadata.PackageNotFoundError):
    __version__ = metadata.version(__name__)

logging.getLogger(__name__).addHandler(logging.NullHandler())

from chaindiag.core.diagnostics import (  # noqa: E402
    AcfStyle,
    AutocorrelationRecord,
    AutocorrelationTable,
    Bucket,
    DiagnosticKind,
    DiagnosticRecord,
    DiagnosticTable,
    MCMCArray,
    acf_hints,
    diagnostic_scale,
    neff_hints,
    rhat_hints,
)
from chaindiag.core.domain.config import (  # noqa: E402
    AutocorrelationConfig,
    DiagnosticsConfig,
    ThresholdConfig,
)
from chaindiag.core.shared.exceptions import (  # noqa: E402
    ChainDiagError,
    ConfigurationError,
    MissingValueWarning,
    ValidationError,
)
from chaindiag.services import (  # noqa: E402
    prepare_autocorrelation,
    prepare_autocorrelation_with_config,
    prepare_neff_ratio,
    prepare_rhat,
)

__all__ = [
    # Version
    "__version__",
    # Services
    "prepare_rhat",
    "prepare_neff_ratio",
    "prepare_autocorrelation",
    "prepare_autocorrelation_with_config",
    # Tables
    "AutocorrelationRecord",
    "AutocorrelationTable",
    "Bucket",
    "DiagnosticKind",
    "DiagnosticRecord",
    "DiagnosticTable",
    "MCMCArray",
    # Render parameters
    "AcfStyle",
    "acf_hints",
    "diagnostic_scale",
    "neff_hints",
    "rhat_hints",
    # Configuration
    "DiagnosticsConfig",
    "ThresholdConfig",
    "AutocorrelationConfig",
    # Errors
    "ChainDiagError",
    "ConfigurationError",
    "MissingValueWarning",
    "ValidationError",
]
