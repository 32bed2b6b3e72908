"""
Tests for the per-customer expected profit engine.
"""
import pytest

from profit_threshold.data import CostBenefit, Customer, RateTable
from profit_threshold.optimization import ExpectedProfitEngine, expected_profit
from profit_threshold.utils import InvalidProbabilityError, ThresholdNotFoundError


@pytest.fixture
def engine():
    return ExpectedProfitEngine()


def test_curve_has_one_point_per_threshold(engine, rate_table):
    customer = Customer(id="a", p1=0.3, cost=CostBenefit(50.0, -30.0))

    curve = engine.compute_curve(customer, rate_table)

    assert curve.customer_id == "a"
    assert len(curve) == len(rate_table)
    assert list(curve.thresholds) == list(rate_table.all_thresholds())


def test_curve_matches_formula(engine, rate_table):
    """p1*tpr*cb_tp + (1-p1)*fpr*cb_fp at every row."""
    p1, cb_tp, cb_fp = 0.3, 50.0, -30.0
    customer = Customer(id="a", p1=p1, cost=CostBenefit(cb_tp, cb_fp))

    curve = engine.compute_curve(customer, rate_table)

    for (threshold, value), row in zip(curve, rate_table):
        assert threshold == row.threshold
        assert value == p1 * row.tpr * cb_tp + (1 - p1) * row.fpr * cb_fp


def test_curve_matches_scalar_function(engine, rate_table):
    cost = CostBenefit(tp=42.0, fp=-17.5, tn=1.25, fn=-3.0)
    customer = Customer(id="a", p1=0.37, cost=cost)

    curve = engine.compute_curve(customer, rate_table)

    assert list(curve.values) == [expected_profit(0.37, row, cost) for row in rate_table]


@pytest.mark.parametrize("p1", [0.0, 0.1, 0.55, 1.0])
def test_canonical_cost_model_endpoints(engine, rate_table, p1):
    """Contacting nobody earns nothing; contacting everyone earns the plain expectation."""
    cb_tp, cb_fp = 50.0, -30.0
    curve = engine.compute_curve(Customer(id="a", p1=p1, cost=CostBenefit(cb_tp, cb_fp)), rate_table)

    assert curve.value_at(1.0) == 0
    assert curve.value_at(0.0) == p1 * cb_tp + (1 - p1) * cb_fp


def test_tn_fn_terms_extend_the_formula(engine):
    table = RateTable([(0.5, 0.6, 0.2, 0.4, 0.8)])
    cost = CostBenefit(tp=10.0, fp=-5.0, tn=1.0, fn=-2.0)

    curve = engine.compute_curve(Customer(id="a", p1=0.5, cost=cost), table)

    expected = 0.5 * 0.6 * 10.0 + 0.5 * 0.2 * -5.0 + 0.5 * 0.4 * -2.0 + 0.5 * 0.8 * 1.0
    assert curve.value_at(0.5) == pytest.approx(expected)


@pytest.mark.parametrize("p1", [-0.01, 1.0001, float("nan"), "high", None])
def test_invalid_probability_rejected(engine, rate_table, p1):
    customer = Customer(id="bad", p1=p1, cost=CostBenefit(50.0, -30.0))

    with pytest.raises(InvalidProbabilityError) as exc_info:
        engine.compute_curve(customer, rate_table)

    assert exc_info.value.customer_id == "bad"


def test_invalid_probability_is_not_clamped(engine, rate_table):
    customer = Customer(id="bad", p1=1.2, cost=CostBenefit(50.0, -30.0))

    with pytest.raises(InvalidProbabilityError, match="outside"):
        engine.compute_curve(customer, rate_table)


def test_compute_curve_is_deterministic(engine, rate_table):
    customer = Customer(id="a", p1=0.123456789, cost=CostBenefit(57.3, -31.9))

    first = engine.compute_curve(customer, rate_table)
    second = engine.compute_curve(customer, rate_table)

    assert first == second


def test_compute_curve_leaves_inputs_untouched(engine, rate_table):
    customer = Customer(id="a", p1=0.4, cost=CostBenefit(50.0, -30.0))
    fingerprint = rate_table.fingerprint()

    engine.compute_curve(customer, rate_table)

    assert rate_table.fingerprint() == fingerprint
    assert customer == Customer(id="a", p1=0.4, cost=CostBenefit(50.0, -30.0))


def test_value_at_missing_threshold(engine, rate_table):
    curve = engine.compute_curve(Customer(id="a", p1=0.4, cost=CostBenefit(50.0, -30.0)), rate_table)

    with pytest.raises(ThresholdNotFoundError):
        curve.value_at(0.25)


def test_curve_to_frame(engine, rate_table):
    curve = engine.compute_curve(Customer(id="a", p1=0.4, cost=CostBenefit(50.0, -30.0)), rate_table)

    df = curve.to_frame()

    assert list(df.columns) == ["threshold", "expected_profit"]
    assert df["expected_profit"].tolist() == list(curve.values)
