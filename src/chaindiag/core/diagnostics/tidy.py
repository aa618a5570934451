"""Tidy record tables handed to renderers.

Each table has a fixed column contract, exposed as module-level column-name
constants, so a renderer can map columns to visual channels without knowing
which diagnostic produced them.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

import numpy as np
import pandas as pd

from chaindiag.core.diagnostics.classification import BUCKET_LEVELS, Bucket
from chaindiag.core.diagnostics.kinds import AcfStyle, DiagnosticKind
from chaindiag.core.diagnostics.validation import DiagnosticVector
from chaindiag.core.shared.exceptions import ValidationError
from chaindiag.core.shared.typing import FloatArray

# Diagnostic table columns
VALUE = "value"
DISPLAY_LABEL = "display_label"
BUCKET = "bucket"
DIAGNOSTIC_COLUMNS = (VALUE, DISPLAY_LABEL, BUCKET)

# Autocorrelation table columns
CHAIN = "chain"
PARAMETER = "parameter"
LAG = "lag"
AUTOCORRELATION = "autocorrelation"
AUTOCORRELATION_COLUMNS = (CHAIN, PARAMETER, LAG, AUTOCORRELATION)


@dataclass(frozen=True, slots=True)
class DiagnosticRecord:
    """One Rhat or Neff/N value with its label and bucket."""

    value: float
    display_label: str
    bucket: Bucket


@dataclass(frozen=True, slots=True)
class AutocorrelationRecord:
    """Autocorrelation of one chain and parameter at one lag."""

    chain: int
    parameter: str
    lag: int
    autocorrelation: float


@dataclass(frozen=True)
class DiagnosticTable:
    """Rows of a Rhat or Neff/N table.

    Attributes:
        kind: Diagnostic the rows belong to
        records: One record per validated value, in input order
        label_levels: Distinct labels ordered by ascending value, used as
            the category order of the label axis
    """

    kind: DiagnosticKind
    records: tuple[DiagnosticRecord, ...]
    label_levels: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[DiagnosticRecord]:
        return iter(self.records)

    @property
    def bucket_levels(self) -> tuple[Bucket, Bucket, Bucket]:
        return BUCKET_LEVELS

    def column(self, name: str) -> tuple[object, ...]:
        """Return all values of one column, in row order."""
        if name not in DIAGNOSTIC_COLUMNS:
            msg = f"Unknown column {name!r}; expected one of {DIAGNOSTIC_COLUMNS}."
            raise KeyError(msg)
        return tuple(getattr(record, name) for record in self.records)

    def to_frame(self) -> pd.DataFrame:
        """Convert to a DataFrame with categorical label and bucket columns."""
        return pd.DataFrame(
            {
                VALUE: pd.Series([r.value for r in self.records], dtype="float64"),
                DISPLAY_LABEL: pd.Categorical(
                    [r.display_label for r in self.records],
                    categories=list(self.label_levels),
                    ordered=True,
                ),
                BUCKET: pd.Categorical(
                    [r.bucket.value for r in self.records],
                    categories=[b.value for b in BUCKET_LEVELS],
                    ordered=True,
                ),
            },
            columns=list(DIAGNOSTIC_COLUMNS),
        )


@dataclass(frozen=True)
class AutocorrelationTable:
    """Rows of an autocorrelation table.

    Attributes:
        records: One record per (chain, parameter, lag)
        parameter_levels: Parameter names in array order
        lags: Maximum lag computed
        style: Plot style requested for the table
    """

    records: tuple[AutocorrelationRecord, ...]
    parameter_levels: tuple[str, ...]
    lags: int
    style: AcfStyle = AcfStyle.LINE

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[AutocorrelationRecord]:
        return iter(self.records)

    @property
    def n_chains(self) -> int:
        return len({r.chain for r in self.records})

    @property
    def min_autocorrelation(self) -> float:
        return min(r.autocorrelation for r in self.records)

    def column(self, name: str) -> tuple[object, ...]:
        """Return all values of one column, in row order."""
        if name not in AUTOCORRELATION_COLUMNS:
            msg = f"Unknown column {name!r}; expected one of {AUTOCORRELATION_COLUMNS}."
            raise KeyError(msg)
        return tuple(getattr(record, name) for record in self.records)

    def to_frame(self) -> pd.DataFrame:
        """Convert to a DataFrame with a categorical parameter column."""
        return pd.DataFrame(
            {
                CHAIN: pd.Series([r.chain for r in self.records], dtype="int64"),
                PARAMETER: pd.Categorical(
                    [r.parameter for r in self.records],
                    categories=list(self.parameter_levels),
                ),
                LAG: pd.Series([r.lag for r in self.records], dtype="int64"),
                AUTOCORRELATION: pd.Series(
                    [r.autocorrelation for r in self.records], dtype="float64"
                ),
            },
            columns=list(AUTOCORRELATION_COLUMNS),
        )


def display_labels(vector: DiagnosticVector) -> tuple[str, ...]:
    """Parameter names, or 1-based row numbers for unnamed vectors."""
    if vector.names is not None:
        return vector.names
    return tuple(str(i + 1) for i in range(len(vector)))


def assemble_diagnostic_table(
    vector: DiagnosticVector, buckets: Sequence[Bucket]
) -> DiagnosticTable:
    """Merge validated values, labels and buckets into a DiagnosticTable.

    Raises:
        ValidationError: If ``buckets`` is not aligned with ``vector``
    """
    if len(buckets) != len(vector):
        msg = f"Got {len(buckets)} buckets for {len(vector)} values."
        raise ValidationError(msg)

    labels = display_labels(vector)
    records = tuple(
        DiagnosticRecord(value=float(v), display_label=label, bucket=bucket)
        for v, label, bucket in zip(vector.values, labels, buckets, strict=True)
    )

    order = np.argsort(vector.values, kind="stable")
    levels = tuple(dict.fromkeys(labels[i] for i in order))
    return DiagnosticTable(kind=vector.kind, records=records, label_levels=levels)


def assemble_autocorrelation_table(
    chains: Sequence[int],
    parameters: Sequence[str],
    acf_values: Sequence[FloatArray],
    parameter_levels: Sequence[str],
    lags: int,
    style: AcfStyle = AcfStyle.LINE,
) -> AutocorrelationTable:
    """Expand per-group ACF arrays into one record per lag.

    Args:
        chains: 1-based chain number of each group
        parameters: Parameter name of each group
        acf_values: ACF array of length ``lags + 1`` for each group
        parameter_levels: Parameter names in array order
        lags: Maximum lag
        style: Plot style carried to renderers

    Returns:
        AutocorrelationTable, rows in group order with lags contiguous
    """
    records: list[AutocorrelationRecord] = []
    for chain, parameter, acf in zip(chains, parameters, acf_values, strict=True):
        if len(acf) != lags + 1:
            msg = f"Expected {lags + 1} autocorrelations for chain {chain}, {parameter!r}."
            raise ValidationError(msg)
        records.extend(
            AutocorrelationRecord(
                chain=int(chain),
                parameter=parameter,
                lag=lag,
                autocorrelation=float(value),
            )
            for lag, value in enumerate(acf)
        )
    return AutocorrelationTable(
        records=tuple(records),
        parameter_levels=tuple(parameter_levels),
        lags=lags,
        style=AcfStyle(style),
    )


__all__ = [
    "AUTOCORRELATION",
    "AUTOCORRELATION_COLUMNS",
    "BUCKET",
    "CHAIN",
    "DIAGNOSTIC_COLUMNS",
    "DISPLAY_LABEL",
    "LAG",
    "PARAMETER",
    "VALUE",
    "AutocorrelationRecord",
    "AutocorrelationTable",
    "DiagnosticRecord",
    "DiagnosticTable",
    "assemble_autocorrelation_table",
    "assemble_diagnostic_table",
    "display_labels",
]
