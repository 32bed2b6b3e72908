# profit_threshold/data/rate_table.py
"""
Classifier rate table

Ordered, immutable table of (threshold, tpr, fpr, fnr, tnr) rows measured on a
held-out evaluation set. Every consumer reads it; nothing writes to it after
construction.
"""

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, astuple
from typing import Any, Iterable, Iterator, NamedTuple, Optional

import numpy as np
import pandas as pd

from ..config import get_settings
from ..utils.exceptions import MalformedRateTableError, ThresholdNotFoundError
from ..utils.helpers import calculate_hash


@dataclass(frozen=True)
class ThresholdRate:
    """Confusion-matrix rates of the classifier at one cut-off"""
    threshold: float
    tpr: float
    fpr: float
    fnr: float
    tnr: float


class RateArrays(NamedTuple):
    """Column view of a rate table as read-only numpy arrays"""
    threshold: np.ndarray
    tpr: np.ndarray
    fpr: np.ndarray
    fnr: np.ndarray
    tnr: np.ndarray


class ThresholdSequence(Sequence):
    """Lazy view over the thresholds of a rate table, ascending"""

    def __init__(self, rows: tuple):
        self._rows = rows

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [row.threshold for row in self._rows[index]]
        return self._rows[index].threshold

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self) -> str:
        return f"ThresholdSequence(n={len(self._rows)})"


class RateTable:
    """
    Immutable classifier rate table

    Rows are strictly ascending by threshold. For every row
    ``tpr + fnr == 1`` and ``fpr + tnr == 1`` within ``tolerance``.
    Malformed input raises MalformedRateTableError and is never repaired.
    """

    COLUMNS = ("threshold", "tpr", "fpr", "fnr", "tnr")

    def __init__(self, rows: Iterable[Any], tolerance: Optional[float] = None):
        if tolerance is None:
            tolerance = get_settings().rate_table.tolerance

        coerced = tuple(self._coerce_row(i, row) for i, row in enumerate(rows))
        self._validate(coerced, tolerance)

        self._rows = coerced
        self.tolerance = tolerance
        self._index = {row.threshold: i for i, row in enumerate(coerced)}
        self._arrays = self._build_arrays(coerced)

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_records(cls, records: Iterable[Any], tolerance: Optional[float] = None) -> "RateTable":
        """Build from mappings, 5-tuples or ThresholdRate rows"""
        return cls(records, tolerance=tolerance)

    @classmethod
    def from_frame(cls, df: pd.DataFrame, tolerance: Optional[float] = None) -> "RateTable":
        """Build from a DataFrame with threshold, tpr, fpr, fnr and tnr columns"""
        missing = [c for c in cls.COLUMNS if c not in df.columns]
        if missing:
            raise MalformedRateTableError(
                "Rate table is missing required columns",
                details={"missing_columns": missing}
            )
        rows = df[list(cls.COLUMNS)].itertuples(index=False, name=None)
        return cls(rows, tolerance=tolerance)

    @classmethod
    def _coerce_row(cls, position: int, row: Any) -> ThresholdRate:
        if isinstance(row, ThresholdRate):
            values = astuple(row)
        elif isinstance(row, Mapping):
            try:
                values = tuple(row[c] for c in cls.COLUMNS)
            except KeyError as e:
                raise MalformedRateTableError(
                    f"Row {position} is missing column {e.args[0]!r}",
                    details={"row": position}
                ) from e
        else:
            values = tuple(row)
            if len(values) != len(cls.COLUMNS):
                raise MalformedRateTableError(
                    f"Row {position} has {len(values)} fields, expected {len(cls.COLUMNS)}",
                    details={"row": position}
                )

        try:
            return ThresholdRate(*(float(v) for v in values))
        except (TypeError, ValueError) as e:
            raise MalformedRateTableError(
                f"Row {position} contains a non-numeric value",
                details={"row": position, "values": values}
            ) from e

    @staticmethod
    def _validate(rows: tuple, tolerance: float) -> None:
        if not rows:
            raise MalformedRateTableError("Rate table is empty")

        previous = None
        for i, row in enumerate(rows):
            context = {"row": i, "threshold": row.threshold}

            if not all(math.isfinite(v) for v in astuple(row)):
                raise MalformedRateTableError(f"Row {i} contains a non-finite value", details=context)

            if not 0.0 <= row.threshold <= 1.0:
                raise MalformedRateTableError(f"Threshold {row.threshold} outside [0, 1]", details=context)

            for name in ("tpr", "fpr", "fnr", "tnr"):
                value = getattr(row, name)
                if value < -tolerance or value > 1.0 + tolerance:
                    raise MalformedRateTableError(
                        f"{name}={value} outside [0, 1] at threshold {row.threshold}",
                        details=context
                    )

            if abs(row.tpr + row.fnr - 1.0) > tolerance:
                raise MalformedRateTableError(
                    f"tpr + fnr = {row.tpr + row.fnr} at threshold {row.threshold}",
                    details={**context, "tolerance": tolerance}
                )
            if abs(row.fpr + row.tnr - 1.0) > tolerance:
                raise MalformedRateTableError(
                    f"fpr + tnr = {row.fpr + row.tnr} at threshold {row.threshold}",
                    details={**context, "tolerance": tolerance}
                )

            if previous is not None and row.threshold <= previous:
                problem = "Duplicate" if row.threshold == previous else "Non-monotonic"
                raise MalformedRateTableError(
                    f"{problem} threshold {row.threshold} after {previous}",
                    details=context
                )
            previous = row.threshold

    @staticmethod
    def _build_arrays(rows: tuple) -> RateArrays:
        matrix = np.array([astuple(row) for row in rows], dtype=float)
        columns = []
        for j in range(matrix.shape[1]):
            column = matrix[:, j].copy()
            column.setflags(write=False)
            columns.append(column)
        return RateArrays(*columns)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def rates_at(self, threshold: float) -> ThresholdRate:
        """Exact lookup of the rates at ``threshold``; no interpolation"""
        try:
            key = float(threshold)
        except (TypeError, ValueError):
            key = None
        index = self._index.get(key)
        if index is None:
            raise ThresholdNotFoundError(
                f"Threshold {threshold!r} is not in the rate table",
                threshold=threshold
            )
        return self._rows[index]

    def all_thresholds(self) -> ThresholdSequence:
        """Ascending thresholds; the returned view can be iterated repeatedly"""
        return ThresholdSequence(self._rows)

    def as_arrays(self) -> RateArrays:
        return self._arrays

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame({name: np.array(values) for name, values in self._arrays._asdict().items()})

    def fingerprint(self) -> str:
        """Stable hash of the table contents"""
        return calculate_hash([list(astuple(row)) for row in self._rows])

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[ThresholdRate]:
        return iter(self._rows)

    def __contains__(self, threshold: object) -> bool:
        try:
            return float(threshold) in self._index
        except (TypeError, ValueError):
            return False

    def __repr__(self) -> str:
        return (f"RateTable(n={len(self._rows)}, "
                f"thresholds=[{self._rows[0].threshold}, {self._rows[-1].threshold}])")


__all__ = [
    "ThresholdRate",
    "RateArrays",
    "ThresholdSequence",
    "RateTable",
]
