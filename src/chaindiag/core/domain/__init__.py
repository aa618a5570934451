"""Domain configuration models for chaindiag."""

from chaindiag.core.domain.config import AutocorrelationConfig, DiagnosticsConfig, ThresholdConfig

__all__ = ["AutocorrelationConfig", "DiagnosticsConfig", "ThresholdConfig"]
