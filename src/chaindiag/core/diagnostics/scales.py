"""Scale and layout parameters for rendering diagnostic tables.

Nothing here draws. These are the values a plotting backend needs to turn
the tidy tables into the usual diagnostic plots: which shade each bucket
gets, legend text, reference lines, axis breaks and limits, and how to
facet autocorrelation panels.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

import numpy as np

from chaindiag.core.diagnostics.breaks import BreakSet
from chaindiag.core.diagnostics.classification import BUCKET_LEVELS, Bucket, check_breakpoints
from chaindiag.core.diagnostics.kinds import AcfStyle, DiagnosticKind, Shade
from chaindiag.core.diagnostics.tidy import AutocorrelationTable
from chaindiag.core.diagnostics.validation import DiagnosticVector


class FacetLayout(str, Enum):
    """How autocorrelation panels are arranged."""

    GRID = "grid"  # rows = chain, columns = parameter
    WRAP = "wrap"  # one panel per parameter


@dataclass(frozen=True)
class DiagnosticScale:
    """Color scale description for a Rhat or Neff/N table.

    Attributes:
        kind: Diagnostic the scale belongs to
        shades: Shade of each bucket
        levels: Buckets in legend order
        labels: Legend label of each bucket, aligned with ``levels``
        axis_title: Title of the value axis
    """

    kind: DiagnosticKind
    shades: dict[Bucket, Shade]
    levels: tuple[Bucket, Bucket, Bucket]
    labels: tuple[str, str, str]
    axis_title: str

    def shade_for(self, bucket: Bucket) -> Shade:
        return self.shades[bucket]


def diagnostic_scale(
    kind: DiagnosticKind, breakpoints: Sequence[float] | None = None
) -> DiagnosticScale:
    """Build the shade mapping and legend text for a diagnostic.

    Lighter is better: for Rhat the ``low`` bucket is light, for Neff/N the
    ``high`` bucket is light.
    """
    if breakpoints is None:
        breakpoints = kind.default_breakpoints
    lower, upper = check_breakpoints(breakpoints)
    shades = dict(zip((Bucket.LOW, Bucket.OK, Bucket.HIGH), kind.shades, strict=True))

    title = kind.axis_title
    text = {
        Bucket.HIGH: f"{title} > {upper:g}",
        Bucket.OK: f"{title} <= {upper:g}",
        Bucket.LOW: f"{title} <= {lower:g}",
    }
    return DiagnosticScale(
        kind=kind,
        shades=shades,
        levels=BUCKET_LEVELS,
        labels=tuple(text[b] for b in BUCKET_LEVELS),
        axis_title=title,
    )


@dataclass(frozen=True)
class RhatHints:
    """Axis parameters for a Rhat plot.

    Attributes:
        breaks: Axis breaks
        reference_lines: Dashed reference lines (every break but the first)
        unit_line: Whether to draw a solid line at 1 (some value is below 1)
        segment_origin: Where lollipop segments start (1.0, or -inf)
    """

    breaks: BreakSet
    reference_lines: tuple[float, ...]
    unit_line: bool
    segment_origin: float


def rhat_hints(vector: DiagnosticVector, breaks: BreakSet) -> RhatHints:
    below_one = vector.values.size > 0 and float(np.min(vector.values)) < 1
    return RhatHints(
        breaks=breaks,
        reference_lines=tuple(breaks[1:]),
        unit_line=below_one,
        segment_origin=1.0 if below_one else float("-inf"),
    )


@dataclass(frozen=True)
class NeffHints:
    """Axis parameters for a Neff/N plot."""

    breaks: tuple[float, ...] = (0.0, 0.1, 0.25, 0.5, 0.75, 1.0)
    reference_lines: tuple[float, ...] = (0.1, 0.5, 1.0)
    limits: tuple[float, float] = (0.0, 1.0)
    segment_origin: float = float("-inf")


def neff_hints() -> NeffHints:
    return NeffHints()


@dataclass(frozen=True)
class AcfHints:
    """Axis and facet parameters for an autocorrelation plot."""

    style: AcfStyle
    layout: FacetLayout
    y_limits: tuple[float, float]
    y_breaks: tuple[float, ...]
    x_limits: tuple[float, float]


def acf_hints(
    table: AutocorrelationTable, style: AcfStyle | str | None = None
) -> AcfHints:
    """Derive facet layout and axis limits from an autocorrelation table.

    The plot style is the one stored on ``table`` unless ``style`` overrides it.
    """
    if style is None:
        style = table.style
    layout = FacetLayout.GRID if table.n_chains > 1 else FacetLayout.WRAP
    return AcfHints(
        style=AcfStyle(style),
        layout=layout,
        y_limits=(min(0.0, table.min_autocorrelation), 1.05),
        y_breaks=(0.0, 0.5, 1.0),
        x_limits=(-0.5, table.lags + 0.5),
    )


__all__ = [
    "AcfHints",
    "DiagnosticScale",
    "FacetLayout",
    "NeffHints",
    "RhatHints",
    "acf_hints",
    "diagnostic_scale",
    "neff_hints",
    "rhat_hints",
]
