"""
Pytest configuration and shared fixtures.
"""
import pytest
import pandas as pd
import numpy as np

from profit_threshold.data import CostPolicy, RateTable, build_population
from profit_threshold.optimization import PortfolioOptimizer


REFERENCE_ROWS = [
    # threshold, tpr, fpr, fnr, tnr
    (0.0, 1.0, 1.0, 0.0, 0.0),
    (0.092, 0.9, 0.5, 0.1, 0.5),
    (0.19, 0.78, 0.38, 0.22, 0.62),
    (0.5, 0.4, 0.1, 0.6, 0.9),
    (1.0, 0.0, 0.0, 1.0, 1.0),
]

REFERENCE_P1 = [0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9, 1.0]


@pytest.fixture
def reference_rows():
    """Rate rows measured on a reference evaluation set."""
    return list(REFERENCE_ROWS)


@pytest.fixture
def rate_table(reference_rows):
    """Validated rate table built from the reference rows."""
    return RateTable(reference_rows)


@pytest.fixture
def probabilities():
    """Ten customers with p1 = 0.1 ... 1.0."""
    return {f"c{i:02d}": p1 for i, p1 in enumerate(REFERENCE_P1)}


@pytest.fixture
def population(probabilities):
    """Ten-customer population with the uniform 50 / -30 cost model."""
    return build_population(probabilities, CostPolicy.uniform(50.0, -30.0))


@pytest.fixture
def optimizer():
    """Single-worker optimizer."""
    return PortfolioOptimizer(max_workers=1)


@pytest.fixture
def scored_evaluation_set():
    """Synthetic scored hold-out set with informative scores."""
    rng = np.random.default_rng(42)
    n_samples = 2000

    y_true = rng.binomial(1, 0.15, n_samples)
    scores = np.clip(0.15 + 0.45 * y_true + rng.normal(0, 0.18, n_samples), 0.0, 1.0)
    return y_true, scores


@pytest.fixture
def rate_csv(tmp_path, reference_rows):
    """Reference rate table on disk."""
    path = tmp_path / "rates.csv"
    pd.DataFrame(reference_rows, columns=list(RateTable.COLUMNS)).to_csv(path, index=False)
    return path


@pytest.fixture
def customers_csv(tmp_path):
    """Reference customers on disk."""
    path = tmp_path / "customers.csv"
    pd.DataFrame({"id": list(range(1, 11)), "p1": REFERENCE_P1}).to_csv(path, index=False)
    return path
