"""
Tests for customers, cost/benefit pairs and cost policies.
"""
import pytest
import pandas as pd

from profit_threshold.data import CostBenefit, CostPolicy, Customer, build_population
from profit_threshold.utils import InvalidCostBenefitError, ValidationError


def test_cost_benefit_defaults_tn_fn_to_zero():
    cost = CostBenefit(tp=50.0, fp=-30.0)

    assert cost.tn == 0.0
    assert cost.fn == 0.0


def test_cost_benefit_has_no_sign_constraint():
    """Other KPI framings flip the usual signs."""
    cost = CostBenefit(tp=-1.0, fp=2.5)

    assert (cost.tp, cost.fp) == (-1.0, 2.5)


@pytest.mark.parametrize("value", [float("inf"), float("nan"), None, "50"])
def test_cost_benefit_rejects_non_finite(value):
    with pytest.raises(InvalidCostBenefitError):
        CostBenefit(tp=value, fp=-30.0)


def test_customer_exposes_cost_pair():
    customer = Customer(id="a", p1=0.3, cost=CostBenefit(50.0, -30.0))

    assert customer.cb_tp == 50.0
    assert customer.cb_fp == -30.0


def test_customer_accepts_any_p1_until_scored():
    """Probability checks belong to the profit engine."""
    customer = Customer(id="a", p1=1.7, cost=CostBenefit(50.0, -30.0))

    assert customer.p1 == 1.7


def test_uniform_policy():
    policy = CostPolicy.uniform(50.0, -30.0)

    assert policy.cost_for("anyone") == CostBenefit(50.0, -30.0)
    assert policy.overrides == {}


def test_policy_overrides_by_id():
    vip = CostBenefit(120.0, -45.0)
    policy = CostPolicy(CostBenefit(50.0, -30.0), overrides={"vip": vip})

    assert policy.cost_for("vip") is vip
    assert policy.cost_for("regular") == CostBenefit(50.0, -30.0)


def test_build_population_from_mapping(probabilities):
    population = build_population(probabilities, CostPolicy.uniform(50.0, -30.0))

    assert [c.id for c in population] == list(probabilities)
    assert [c.p1 for c in population] == list(probabilities.values())
    assert all(c.cost == CostBenefit(50.0, -30.0) for c in population)


def test_build_population_from_frame_with_overrides():
    df = pd.DataFrame({"customer": [1, 2, 3], "score": [0.2, 0.5, 0.9]})
    policy = CostPolicy(CostBenefit(50.0, -30.0), overrides={2: CostBenefit(80.0, -10.0)})

    population = build_population(df, policy, id_col="customer", p1_col="score")

    assert [c.id for c in population] == [1, 2, 3]
    assert population[1].cost == CostBenefit(80.0, -10.0)
    assert population[0].cost == CostBenefit(50.0, -30.0)


def test_build_population_keeps_repeated_ids():
    df = pd.DataFrame({"id": [1, 1], "p1": [0.2, 0.5]})

    population = build_population(df, CostPolicy.uniform(50.0, -30.0))

    assert len(population) == 2


def test_build_population_missing_columns():
    df = pd.DataFrame({"id": [1, 2]})

    with pytest.raises(ValidationError) as exc_info:
        build_population(df, CostPolicy.uniform(50.0, -30.0))

    assert exc_info.value.details["missing_columns"] == ["p1"]
