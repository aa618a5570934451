"""Configuration models for diagnostics preparation.

Configuration is always passed explicitly to the ``prepare_*`` functions;
there is no process-wide default that can be mutated.

Example TOML::

    [rhat]
    breakpoints = [1.01, 1.05]

    [neff_ratio]
    breakpoints = [0.1, 0.5]

    [autocorrelation]
    lags = 20
    style = "bar"
"""

from __future__ import annotations

import math
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from chaindiag.core.diagnostics.kinds import DiagnosticKind

AcfStyleName = Literal["line", "bar"]


class ThresholdConfig(BaseModel):
    """Breakpoints separating the low, ok and high buckets."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    breakpoints: tuple[float, float] = Field(
        description="Two strictly ascending values (b1, b2): low <= b1 < ok <= b2 < high.",
    )

    @field_validator("breakpoints")
    @classmethod
    def _ascending(cls, value: tuple[float, float]) -> tuple[float, float]:
        lower, upper = value
        if not (math.isfinite(lower) and math.isfinite(upper)):
            msg = "breakpoints must be finite"
            raise ValueError(msg)
        if not lower < upper:
            msg = f"breakpoints must be strictly ascending, got ({lower}, {upper})"
            raise ValueError(msg)
        return value

    @classmethod
    def for_kind(cls, kind: DiagnosticKind) -> ThresholdConfig:
        """Default thresholds of a diagnostic."""
        return cls(breakpoints=kind.default_breakpoints)


class AutocorrelationConfig(BaseModel):
    """Settings for the autocorrelation table."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    lags: Annotated[int, Field(ge=0)] = Field(
        default=20,
        description="Maximum lag; must be smaller than the number of iterations minus one.",
    )
    style: AcfStyleName = Field(default="line", description="Plot style passed to renderers.")
    n_workers: Annotated[int, Field(ge=1)] | None = Field(
        default=None,
        description="Threads used across (chain, parameter) groups. None runs sequentially.",
    )


class DiagnosticsConfig(BaseModel):
    """Top-level configuration."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    rhat: ThresholdConfig = Field(
        default_factory=lambda: ThresholdConfig.for_kind(DiagnosticKind.RHAT)
    )
    neff_ratio: ThresholdConfig = Field(
        default_factory=lambda: ThresholdConfig.for_kind(DiagnosticKind.NEFF_RATIO)
    )
    autocorrelation: AutocorrelationConfig = Field(default_factory=AutocorrelationConfig)

    def thresholds_for(self, kind: DiagnosticKind) -> ThresholdConfig:
        if kind is DiagnosticKind.RHAT:
            return self.rhat
        return self.neff_ratio


__all__ = ["AutocorrelationConfig", "DiagnosticsConfig", "ThresholdConfig"]
