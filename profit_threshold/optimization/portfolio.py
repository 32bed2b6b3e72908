# profit_threshold/optimization/portfolio.py
"""
Portfolio-level expected profit

Sums customer curves over the shared threshold grid, finds the threshold(s)
with the highest total and compares any two thresholds of the total curve.
"""

import math
from collections import Counter
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass, field
from itertools import repeat
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .expected_profit import ExpectedProfitCurve, ExpectedProfitEngine
from ..config import get_settings
from ..data.customers import Customer
from ..data.rate_table import RateTable
from ..utils.exceptions import (
    DuplicateCustomerError,
    EmptyCurveError,
    EmptyPopulationError,
    ThresholdNotFoundError,
    ValidationError,
)
from ..utils.helpers import Timer, create_batches, safe_divide
from ..utils.logging import log_performance_metrics, logger


@dataclass(frozen=True)
class AggregateProfitCurve:
    """Total expected profit of a population at every threshold of the grid"""
    thresholds: Tuple[float, ...]
    totals: Tuple[float, ...]
    n_customers: int
    _index: Dict[float, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if len(self.thresholds) != len(self.totals):
            raise ValidationError(
                "Curve needs one total per threshold",
                details={"thresholds": len(self.thresholds), "totals": len(self.totals)}
            )
        if self.n_customers < 0:
            raise ValidationError(f"n_customers must be >= 0, got {self.n_customers}")
        object.__setattr__(self, "_index", {t: i for i, t in enumerate(self.thresholds)})

    @classmethod
    def from_points(cls, points: Sequence[Tuple[float, float]], n_customers: int) -> "AggregateProfitCurve":
        thresholds = tuple(float(t) for t, _ in points)
        totals = tuple(float(v) for _, v in points)
        return cls(thresholds=thresholds, totals=totals, n_customers=n_customers)

    def value_at(self, threshold: float) -> float:
        index = self._index.get(threshold)
        if index is None:
            raise ThresholdNotFoundError(
                f"Threshold {threshold!r} is not on the aggregate curve",
                threshold=threshold
            )
        return self.totals[index]

    def to_frame(self) -> pd.DataFrame:
        totals = np.array(self.totals, dtype=float)
        return pd.DataFrame({
            "threshold": self.thresholds,
            "total_expected_profit": totals,
            "expected_profit_per_customer": totals / self.n_customers if self.n_customers else np.nan,
        })

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        return iter(zip(self.thresholds, self.totals))

    def __len__(self) -> int:
        return len(self.thresholds)


@dataclass(frozen=True)
class OptimalThreshold:
    """Every threshold attaining the maximum total; tie-breaking is left to the caller"""
    thresholds: Tuple[float, ...]
    total_expected_profit: float

    @property
    def is_tie(self) -> bool:
        return len(self.thresholds) > 1


@dataclass(frozen=True)
class ComparisonResult:
    """Profit difference between two thresholds of the same aggregate curve"""
    threshold_a: float
    threshold_b: float
    profit_a: float
    profit_b: float
    absolute_difference: float
    per_customer_difference: float
    n_customers: int

    def extrapolate(self, target_population: int) -> float:
        """Linear projection of the per-customer difference to a larger customer base"""
        if target_population < 0:
            raise ValidationError(f"target_population must be >= 0, got {target_population}")
        return self.per_customer_difference * target_population


def _curves_for_batch(batch: List[Customer], rate_table: RateTable,
                      engine: ExpectedProfitEngine) -> List[ExpectedProfitCurve]:
    return [engine.compute_curve(customer, rate_table) for customer in batch]


class PortfolioOptimizer:
    """
    Aggregates expected profit across a customer population.

    Holds configuration only; every public method is a pure function of its
    arguments. Per-threshold totals use math.fsum, which is exactly rounded,
    so a total does not depend on customer order or on how the population was
    split across workers.
    """

    def __init__(self,
                 engine: Optional[ExpectedProfitEngine] = None,
                 max_workers: Optional[int] = None,
                 executor_type: Optional[str] = None,
                 batch_size: Optional[int] = None):
        config = get_settings().optimization
        self.engine = engine or ExpectedProfitEngine()
        self.max_workers = max_workers or config.max_workers
        self.executor_type = executor_type or config.executor_type
        self.batch_size = batch_size or config.batch_size

        if self.executor_type not in ("thread", "process"):
            raise ValidationError(f"executor_type must be 'thread' or 'process', got {self.executor_type!r}")

        self.logger = logger.getChild("portfolio_optimizer")

    def aggregate(self, customers: Sequence[Customer], rate_table: RateTable) -> AggregateProfitCurve:
        """
        Sum customer expected-profit curves threshold by threshold.

        Args:
            customers: Non-empty population with distinct ids
            rate_table: Shared classifier rates

        Returns:
            One total per rate-table threshold, same order as the rate table
        """
        customers = list(customers)
        self._validate_population(customers)

        with Timer("aggregate") as timer:
            curves = self._compute_curves(customers, rate_table)
            matrix = np.array([curve.values for curve in curves], dtype=float)
            totals = tuple(math.fsum(column) for column in matrix.T)

        log_performance_metrics(self.logger, "aggregate", timer.duration, {
            "n_customers": len(customers),
            "n_thresholds": len(rate_table),
            "rate_table_fingerprint": rate_table.fingerprint(),
            "max_workers": self.max_workers,
        })

        return AggregateProfitCurve(
            thresholds=tuple(rate_table.all_thresholds()),
            totals=totals,
            n_customers=len(customers)
        )

    def find_optimum(self, curve: AggregateProfitCurve) -> OptimalThreshold:
        """Threshold(s) with the maximum total expected profit; exact ties are all returned"""
        if len(curve) == 0:
            raise EmptyCurveError("Cannot find the optimum of an empty curve")

        best = max(curve.totals)
        winners = tuple(t for t, total in curve if total == best)

        if len(winners) > 1:
            self.logger.info(f"{len(winners)} thresholds tie at total expected profit {best}")
        return OptimalThreshold(thresholds=winners, total_expected_profit=best)

    def compare(self, curve: AggregateProfitCurve, threshold_a: float, threshold_b: float) -> ComparisonResult:
        """
        Profit of ``threshold_a`` relative to ``threshold_b``.

        Positive differences mean ``threshold_a`` earns more.
        """
        profit_a = curve.value_at(threshold_a)
        profit_b = curve.value_at(threshold_b)
        difference = profit_a - profit_b

        return ComparisonResult(
            threshold_a=threshold_a,
            threshold_b=threshold_b,
            profit_a=profit_a,
            profit_b=profit_b,
            absolute_difference=difference,
            per_customer_difference=safe_divide(difference, curve.n_customers),
            n_customers=curve.n_customers
        )

    def _validate_population(self, customers: List[Customer]) -> None:
        if not customers:
            raise EmptyPopulationError("Customer population is empty")

        counts = Counter(customer.id for customer in customers)
        duplicates = [customer_id for customer_id, n in counts.items() if n > 1]
        if duplicates:
            raise DuplicateCustomerError(
                f"{len(duplicates)} customer id(s) appear more than once",
                duplicate_ids=duplicates,
                details={"duplicate_ids": duplicates[:10]}
            )

    def _compute_curves(self, customers: List[Customer], rate_table: RateTable) -> List[ExpectedProfitCurve]:
        if self.max_workers <= 1 or len(customers) <= self.batch_size:
            return _curves_for_batch(customers, rate_table, self.engine)

        batches = create_batches(customers, self.batch_size)
        executor_class = ProcessPoolExecutor if self.executor_type == "process" else ThreadPoolExecutor

        self.logger.info(f"Computing {len(customers)} curves in {len(batches)} batches "
                         f"(workers: {self.max_workers}, type: {self.executor_type})")

        curves: List[ExpectedProfitCurve] = []
        with executor_class(max_workers=self.max_workers) as executor:
            # map preserves batch order and re-raises the first worker error
            for batch_curves in executor.map(_curves_for_batch, batches,
                                             repeat(rate_table), repeat(self.engine)):
                curves.extend(batch_curves)
        return curves


__all__ = [
    "AggregateProfitCurve",
    "OptimalThreshold",
    "ComparisonResult",
    "PortfolioOptimizer",
]
