"""Convergence diagnostics data preparation.

This module turns Rhat values, effective-sample-size ratios and raw MCMC
draws into tidy tables for plotting:

- Input validation and missing-value handling
- Threshold classification into low / ok / high buckets
- Data-adaptive Rhat axis breaks
- Grouped autocorrelation over (chain, parameter)
- Scale and layout parameters for renderers (no plotting dependency)
"""

from chaindiag.core.diagnostics.autocorrelation import (
    DEFAULT_LAGS,
    MCMCArray,
    as_mcmc_array,
    compute_autocorrelation,
    sample_acf,
    select_parameters,
)
from chaindiag.core.diagnostics.breaks import BreakSet, rhat_breaks
from chaindiag.core.diagnostics.classification import (
    BUCKET_LEVELS,
    Bucket,
    check_breakpoints,
    classify,
    classify_vector,
)
from chaindiag.core.diagnostics.kinds import AcfStyle, DiagnosticKind, Shade
from chaindiag.core.diagnostics.scales import (
    AcfHints,
    DiagnosticScale,
    FacetLayout,
    NeffHints,
    RhatHints,
    acf_hints,
    diagnostic_scale,
    neff_hints,
    rhat_hints,
)
from chaindiag.core.diagnostics.tidy import (
    AutocorrelationRecord,
    AutocorrelationTable,
    DiagnosticRecord,
    DiagnosticTable,
    assemble_autocorrelation_table,
    assemble_diagnostic_table,
)
from chaindiag.core.diagnostics.validation import (
    DiagnosticVector,
    validate_diagnostic,
    validate_neff_ratio,
    validate_rhat,
)

__all__ = [
    "BUCKET_LEVELS",
    "DEFAULT_LAGS",
    "AcfHints",
    "AcfStyle",
    "AutocorrelationRecord",
    "AutocorrelationTable",
    "BreakSet",
    "Bucket",
    "DiagnosticKind",
    "DiagnosticRecord",
    "DiagnosticScale",
    "DiagnosticTable",
    "DiagnosticVector",
    "FacetLayout",
    "MCMCArray",
    "NeffHints",
    "RhatHints",
    "Shade",
    "acf_hints",
    "as_mcmc_array",
    "assemble_autocorrelation_table",
    "assemble_diagnostic_table",
    "check_breakpoints",
    "classify",
    "classify_vector",
    "compute_autocorrelation",
    "diagnostic_scale",
    "neff_hints",
    "rhat_breaks",
    "rhat_hints",
    "sample_acf",
    "select_parameters",
    "validate_diagnostic",
    "validate_neff_ratio",
    "validate_rhat",
]
