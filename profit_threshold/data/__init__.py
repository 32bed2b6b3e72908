# Data module
# Rate tables, customers, cost policies and file loaders

from .rate_table import (
    ThresholdRate,
    RateArrays,
    ThresholdSequence,
    RateTable
)
from .customers import (
    CostBenefit,
    Customer,
    CostPolicy,
    build_population
)
from .loaders import (
    load_table,
    load_rate_table,
    load_cost_overrides,
    load_population
)

__all__ = [
    # Rate table
    "ThresholdRate",
    "RateArrays",
    "ThresholdSequence",
    "RateTable",

    # Customers
    "CostBenefit",
    "Customer",
    "CostPolicy",
    "build_population",

    # Loaders
    "load_table",
    "load_rate_table",
    "load_cost_overrides",
    "load_population"
]
