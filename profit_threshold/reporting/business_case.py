"""
Business case for a threshold decision
Turns the optimizer outputs into a plain summary for reporting layers
"""

from typing import Any, Dict, Optional

from ..optimization.portfolio import AggregateProfitCurve, ComparisonResult, OptimalThreshold
from ..utils.helpers import safe_divide


def summarize_decision(
    curve: AggregateProfitCurve,
    optimum: OptimalThreshold,
    comparison: Optional[ComparisonResult] = None,
    target_population: Optional[int] = None
) -> Dict[str, Any]:
    """
    Collect the numbers behind a threshold recommendation.

    The extrapolated difference is a linear projection: per-customer
    difference times the target population.
    """
    summary: Dict[str, Any] = {
        'n_customers': curve.n_customers,
        'n_thresholds': len(curve),
        'optimal_thresholds': list(optimum.thresholds),
        'is_tie': optimum.is_tie,
        'max_total_expected_profit': optimum.total_expected_profit,
        'max_expected_profit_per_customer': safe_divide(optimum.total_expected_profit, curve.n_customers),
    }

    if comparison is not None:
        summary['comparison'] = {
            'threshold_a': comparison.threshold_a,
            'threshold_b': comparison.threshold_b,
            'profit_a': comparison.profit_a,
            'profit_b': comparison.profit_b,
            'absolute_difference': comparison.absolute_difference,
            'per_customer_difference': comparison.per_customer_difference,
        }
        if target_population is not None:
            summary['comparison']['target_population'] = target_population
            summary['comparison']['extrapolated_difference'] = comparison.extrapolate(target_population)

    return summary


def print_business_case(summary: Dict[str, Any], title: str = "Expected Value Threshold Decision"):
    """
    Print a formatted business case.

    Args:
        summary: Output of summarize_decision
        title: Report title
    """
    print(f"\n{'='*60}")
    print(f"{title:^60}")
    print(f"{'='*60}")

    print(f"  {'customers':.<35} {summary['n_customers']}")
    print(f"  {'thresholds evaluated':.<35} {summary['n_thresholds']}")
    thresholds = ", ".join(f"{t:.4f}" for t in summary['optimal_thresholds'])
    print(f"  {'optimal threshold(s)':.<35} {thresholds}")
    print(f"  {'max total expected profit':.<35} {summary['max_total_expected_profit']:,.2f}")
    print(f"  {'max expected profit / customer':.<35} {summary['max_expected_profit_per_customer']:,.4f}")

    comparison = summary.get('comparison')
    if comparison:
        print(f"\nThreshold {comparison['threshold_a']} vs {comparison['threshold_b']}:")
        print("-" * 60)
        print(f"  {'profit a':.<35} {comparison['profit_a']:,.2f}")
        print(f"  {'profit b':.<35} {comparison['profit_b']:,.2f}")
        print(f"  {'difference':.<35} {comparison['absolute_difference']:,.2f}")
        print(f"  {'difference / customer':.<35} {comparison['per_customer_difference']:,.4f}")
        if 'extrapolated_difference' in comparison:
            label = f"difference @ {comparison['target_population']:,} customers"
            print(f"  {label:.<35} {comparison['extrapolated_difference']:,.2f}")

    print("=" * 60)
