# profit_threshold/optimization/sensitivity.py
"""
How the optimal threshold moves when the uniform cost/benefit pair changes.
"""
from typing import Hashable, Mapping, Optional, Sequence

import pandas as pd

from .portfolio import PortfolioOptimizer
from ..data.customers import CostPolicy, build_population
from ..data.rate_table import RateTable
from ..utils.exceptions import ValidationError
from ..utils.logging import get_logger

log = get_logger("sensitivity")


def cost_sensitivity(
    probabilities: Mapping[Hashable, float],
    rate_table: RateTable,
    cb_tp_values: Sequence[float],
    cb_fp_values: Sequence[float],
    optimizer: Optional[PortfolioOptimizer] = None
) -> pd.DataFrame:
    """
    Re-optimize the threshold for every (cb_tp, cb_fp) pair of a grid.

    Args:
        probabilities: Customer id -> p1
        rate_table: Classifier rates
        cb_tp_values: True-positive values to try
        cb_fp_values: False-positive values to try
        optimizer: Optimizer to use (default: a fresh PortfolioOptimizer)

    Returns:
        One row per pair with the optimal thresholds (a tuple, ties included),
        the maximum total and the maximum per customer
    """
    if not cb_tp_values or not cb_fp_values:
        raise ValidationError("Both cost grids need at least one value")

    optimizer = optimizer or PortfolioOptimizer()

    rows = []
    for cb_tp in cb_tp_values:
        for cb_fp in cb_fp_values:
            population = build_population(probabilities, CostPolicy.uniform(cb_tp, cb_fp))
            curve = optimizer.aggregate(population, rate_table)
            optimum = optimizer.find_optimum(curve)
            rows.append({
                "cb_tp": float(cb_tp),
                "cb_fp": float(cb_fp),
                "optimal_thresholds": optimum.thresholds,
                "max_total_expected_profit": optimum.total_expected_profit,
                "max_expected_profit_per_customer": optimum.total_expected_profit / curve.n_customers,
            })

    log.info("cost_sensitivity_completed", n_pairs=len(rows), n_customers=len(probabilities))
    return pd.DataFrame(rows)


__all__ = ["cost_sensitivity"]
