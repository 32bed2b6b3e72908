"""
Classifier rates on a scored evaluation set.
Builds the rate table consumed by the profit engine and finds the
classifier's default max-F1 cut-off.
"""
from typing import Optional, Sequence, Union

import numpy as np
import pandas as pd
from sklearn.metrics import confusion_matrix, f1_score

from ..config import get_settings
from ..data.rate_table import RateTable
from ..utils.exceptions import MalformedRateTableError
from ..utils.logging import logger

log = logger.getChild("evaluation.rates")

ArrayLike = Union[pd.Series, np.ndarray, Sequence[float]]


def _validate_scored_set(y_true: ArrayLike, y_score: ArrayLike):
    y_true = np.asarray(y_true)
    y_score = np.asarray(y_score, dtype=float)

    if len(y_true) != len(y_score):
        raise MalformedRateTableError(
            f"y_true and y_score must have same length: {len(y_true)} vs {len(y_score)}"
        )
    if not np.isin(y_true, (0, 1)).all():
        raise MalformedRateTableError("y_true must contain only 0/1 labels")
    y_true = y_true.astype(int)
    if y_true.sum() == 0 or y_true.sum() == len(y_true):
        raise MalformedRateTableError(
            "Both classes must be present to measure classifier rates",
            details={"n_samples": int(len(y_true)), "n_positive": int(y_true.sum())}
        )
    return y_true, y_score


def default_threshold_grid(grid_size: Optional[int] = None) -> np.ndarray:
    """Evenly spaced thresholds over [0, 1]"""
    if grid_size is None:
        grid_size = get_settings().rate_table.grid_size
    return np.linspace(0.0, 1.0, grid_size)


def build_rate_table(
    y_true: ArrayLike,
    y_score: ArrayLike,
    thresholds: Optional[Sequence[float]] = None
) -> RateTable:
    """
    Measure tpr/fpr/fnr/tnr at every threshold of a grid.

    A sample is predicted positive when its score is >= the threshold.

    Args:
        y_true: True labels (0/1)
        y_score: Positive-class probabilities
        thresholds: Ascending grid in [0, 1] (default: settings grid)

    Returns:
        Validated RateTable with one row per grid threshold
    """
    y_true, y_score = _validate_scored_set(y_true, y_score)
    grid = default_threshold_grid() if thresholds is None else np.asarray(thresholds, dtype=float)

    rows = []
    for t in grid:
        y_pred = (y_score >= t).astype(int)
        tn, fp, fn, tp = confusion_matrix(y_true, y_pred, labels=[0, 1]).ravel()
        positives = tp + fn
        negatives = fp + tn
        rows.append((
            float(t),
            tp / positives,
            fp / negatives,
            fn / positives,
            tn / negatives,
        ))

    table = RateTable(rows)
    log.info(f"Built rate table with {len(table)} thresholds from {len(y_true)} scored samples")
    return table


def max_f1_threshold(y_true: ArrayLike, y_score: ArrayLike, rate_table: RateTable) -> float:
    """
    Classifier's default cut-off: the rate-table threshold with the highest F1.

    Ties resolve to the lowest threshold.
    """
    y_true, y_score = _validate_scored_set(y_true, y_score)

    best_threshold, best_f1 = None, -1.0
    for t in rate_table.all_thresholds():
        y_pred = (y_score >= t).astype(int)
        score = f1_score(y_true, y_pred, zero_division=0)
        if score > best_f1:
            best_threshold, best_f1 = t, score

    log.info(f"Max-F1 threshold {best_threshold} (f1={best_f1:.4f})")
    return best_threshold


__all__ = [
    "default_threshold_grid",
    "build_rate_table",
    "max_f1_threshold",
]
