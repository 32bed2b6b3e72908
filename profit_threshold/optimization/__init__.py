"""
Optimization Module - expected-profit curves and threshold selection
"""

from .expected_profit import (
    ExpectedProfitCurve,
    ExpectedProfitEngine,
    expected_profit,
    validate_probability
)
from .portfolio import (
    AggregateProfitCurve,
    OptimalThreshold,
    ComparisonResult,
    PortfolioOptimizer
)
from .sensitivity import cost_sensitivity

__all__ = [
    'ExpectedProfitCurve',
    'ExpectedProfitEngine',
    'expected_profit',
    'validate_probability',
    'AggregateProfitCurve',
    'OptimalThreshold',
    'ComparisonResult',
    'PortfolioOptimizer',
    'cost_sensitivity'
]
