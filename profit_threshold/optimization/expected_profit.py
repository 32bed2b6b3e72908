# profit_threshold/optimization/expected_profit.py
"""
Expected profit of a single customer across the threshold grid
"""

from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterator, Tuple

import numpy as np
import pandas as pd

from ..data.customers import CostBenefit, Customer
from ..data.rate_table import RateTable, ThresholdRate
from ..utils.exceptions import InvalidProbabilityError, ThresholdNotFoundError


@dataclass(frozen=True)
class ExpectedProfitCurve:
    """(threshold, expected_profit) points of one customer, ascending by threshold"""
    customer_id: Hashable
    thresholds: Tuple[float, ...]
    values: Tuple[float, ...]
    _index: Dict[float, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_index", {t: i for i, t in enumerate(self.thresholds)})

    def value_at(self, threshold: float) -> float:
        index = self._index.get(threshold)
        if index is None:
            raise ThresholdNotFoundError(
                f"Threshold {threshold!r} is not on the curve of customer {self.customer_id!r}",
                threshold=threshold
            )
        return self.values[index]

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame({"threshold": self.thresholds, "expected_profit": self.values})

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        return iter(zip(self.thresholds, self.values))

    def __len__(self) -> int:
        return len(self.thresholds)


def validate_probability(customer: Customer) -> float:
    """Return ``customer.p1`` as a float, rejecting anything outside [0, 1]"""
    try:
        p1 = float(customer.p1)
    except (TypeError, ValueError) as e:
        raise InvalidProbabilityError(
            f"p1={customer.p1!r} of customer {customer.id!r} is not a number",
            customer_id=customer.id, p1=customer.p1
        ) from e

    # NaN fails both comparisons
    if not 0.0 <= p1 <= 1.0:
        raise InvalidProbabilityError(
            f"p1={customer.p1!r} of customer {customer.id!r} outside [0, 1]",
            customer_id=customer.id, p1=customer.p1
        )
    return p1


def expected_profit(p1: float, rate: ThresholdRate, cost: CostBenefit) -> float:
    """
    Expected profit of contacting one customer at one threshold.

    p1*tpr*tp + (1-p1)*fpr*fp + p1*fnr*fn + (1-p1)*tnr*tn; the last two terms
    vanish under the canonical cost model (tn = fn = 0).
    """
    return (p1 * rate.tpr * cost.tp
            + (1.0 - p1) * rate.fpr * cost.fp
            + p1 * rate.fnr * cost.fn
            + (1.0 - p1) * rate.tnr * cost.tn)


class ExpectedProfitEngine:
    """
    Computes a customer's expected-profit curve over a rate table.

    Stateless: the same (customer, rate_table) pair always yields the same
    curve, so one engine can be shared across threads or processes.
    """

    def compute_curve(self, customer: Customer, rate_table: RateTable) -> ExpectedProfitCurve:
        """
        Args:
            customer: Scored customer with its cost/benefit pair
            rate_table: Classifier rates, read only

        Returns:
            One expected profit per rate-table row, in ascending threshold order
        """
        p1 = validate_probability(customer)
        values = self._profit_values(p1, customer.cost, rate_table)
        return ExpectedProfitCurve(
            customer_id=customer.id,
            thresholds=tuple(rate_table.all_thresholds()),
            values=tuple(values.tolist())
        )

    @staticmethod
    def _profit_values(p1: float, cost: CostBenefit, rate_table: RateTable) -> np.ndarray:
        # Same operation order as expected_profit(), elementwise
        rates = rate_table.as_arrays()
        q0 = 1.0 - p1
        return (p1 * rates.tpr * cost.tp
                + q0 * rates.fpr * cost.fp
                + p1 * rates.fnr * cost.fn
                + q0 * rates.tnr * cost.tn)


__all__ = [
    "ExpectedProfitCurve",
    "ExpectedProfitEngine",
    "expected_profit",
    "validate_probability",
]
