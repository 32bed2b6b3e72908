# Expected-value threshold optimizer
# Version: 1.0.0
# Description: Turns per-customer subscription probabilities into a profit-maximizing decision threshold

__version__ = "1.0.0"
__description__ = "Expected-value threshold optimization for binary classifiers"

# Configuration
from .config import settings, ProfitSettings, load_settings

# Utilities
from .utils import logger, setup_logging, Timer

# Data
from .data import (
    ThresholdRate,
    RateTable,
    CostBenefit,
    Customer,
    CostPolicy,
    build_population
)

# Rate derivation
from .evaluation import build_rate_table, max_f1_threshold

# Optimization
from .optimization import (
    ExpectedProfitCurve,
    ExpectedProfitEngine,
    AggregateProfitCurve,
    OptimalThreshold,
    ComparisonResult,
    PortfolioOptimizer,
    cost_sensitivity
)

# Reporting
from .reporting import summarize_decision, print_business_case

__all__ = [
    # Configuration
    "settings",
    "ProfitSettings",
    "load_settings",

    # Utilities
    "logger",
    "setup_logging",
    "Timer",

    # Data
    "ThresholdRate",
    "RateTable",
    "CostBenefit",
    "Customer",
    "CostPolicy",
    "build_population",

    # Rate derivation
    "build_rate_table",
    "max_f1_threshold",

    # Optimization
    "ExpectedProfitCurve",
    "ExpectedProfitEngine",
    "AggregateProfitCurve",
    "OptimalThreshold",
    "ComparisonResult",
    "PortfolioOptimizer",
    "cost_sensitivity",

    # Reporting
    "summarize_decision",
    "print_business_case"
]
