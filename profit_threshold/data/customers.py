# profit_threshold/data/customers.py
"""
Customers and the cost/benefit policy applied to them
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Hashable, List, Mapping, Optional, Union

import pandas as pd

from ..utils.exceptions import InvalidCostBenefitError, ValidationError


@dataclass(frozen=True)
class CostBenefit:
    """
    Net monetary value of each outcome of contacting a customer.

    ``tn`` and ``fn`` are zero under the canonical model: no contact means no
    cost and no revenue. Non-zero values extend the model to all four outcomes.
    """
    tp: float
    fp: float
    tn: float = 0.0
    fn: float = 0.0

    def __post_init__(self):
        for name in ("tp", "fp", "tn", "fn"):
            value = getattr(self, name)
            try:
                finite = math.isfinite(value)
            except TypeError:
                finite = False
            if not finite:
                raise InvalidCostBenefitError(
                    f"Cost/benefit coefficient {name}={value!r} must be a finite real",
                    details={"coefficient": name}
                )


@dataclass(frozen=True)
class Customer:
    """A scored customer and its cost/benefit pair"""
    id: Hashable
    p1: float
    cost: CostBenefit

    @property
    def cb_tp(self) -> float:
        return self.cost.tp

    @property
    def cb_fp(self) -> float:
        return self.cost.fp


class CostPolicy:
    """Uniform cost/benefit with optional per-customer overrides keyed by id"""

    def __init__(self, default: CostBenefit, overrides: Optional[Mapping[Hashable, CostBenefit]] = None):
        self.default = default
        self._overrides: Dict[Hashable, CostBenefit] = dict(overrides or {})

    @classmethod
    def uniform(cls, cb_tp: float, cb_fp: float) -> "CostPolicy":
        return cls(CostBenefit(tp=cb_tp, fp=cb_fp))

    @property
    def overrides(self) -> Dict[Hashable, CostBenefit]:
        return dict(self._overrides)

    def cost_for(self, customer_id: Hashable) -> CostBenefit:
        return self._overrides.get(customer_id, self.default)

    def __repr__(self) -> str:
        return f"CostPolicy(default={self.default}, overrides={len(self._overrides)})"


def build_population(
    scores: Union[Mapping[Hashable, float], pd.DataFrame],
    policy: CostPolicy,
    id_col: str = "id",
    p1_col: str = "p1"
) -> List[Customer]:
    """
    Attach cost/benefit pairs to scored customers.

    Args:
        scores: Mapping of customer id to p1, or a DataFrame with id/p1 columns
        policy: Cost policy resolving each customer's cost/benefit
        id_col: Id column name when ``scores`` is a DataFrame
        p1_col: Probability column name when ``scores`` is a DataFrame

    Returns:
        Customers in input order. Repeated ids are kept; aggregation rejects them.
    """
    if isinstance(scores, pd.DataFrame):
        missing = [c for c in (id_col, p1_col) if c not in scores.columns]
        if missing:
            raise ValidationError(
                "Scored dataset is missing required columns",
                details={"missing_columns": missing}
            )
        pairs: Any = zip(scores[id_col].tolist(), scores[p1_col].astype(float).tolist())
    else:
        pairs = ((customer_id, float(p1)) for customer_id, p1 in scores.items())

    return [
        Customer(id=customer_id, p1=p1, cost=policy.cost_for(customer_id))
        for customer_id, p1 in pairs
    ]


__all__ = [
    "CostBenefit",
    "Customer",
    "CostPolicy",
    "build_population",
]
