"""
Tests for the command-line interface and file loaders.
"""
import pytest
import pandas as pd
from typer.testing import CliRunner

from entrypoints.cli import app
from profit_threshold.data import CostBenefit, CostPolicy, load_cost_overrides, load_population, load_rate_table
from profit_threshold.utils import InvalidCostBenefitError, ValidationError


@pytest.fixture
def runner():
    return CliRunner()


def test_load_rate_table(rate_csv, rate_table):
    assert list(load_rate_table(rate_csv)) == list(rate_table)


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_rate_table(tmp_path / "missing.csv")


def test_load_population_with_overrides(tmp_path, customers_csv):
    overrides_csv = tmp_path / "overrides.csv"
    pd.DataFrame({"id": [3], "cb_tp": [90.0], "cb_fp": [-40.0], "cb_tn": [0.5]}).to_csv(overrides_csv, index=False)

    policy = CostPolicy(CostBenefit(50.0, -30.0), load_cost_overrides(overrides_csv))
    population = load_population(customers_csv, policy)

    assert len(population) == 10
    assert population[2].cost == CostBenefit(90.0, -40.0, tn=0.5, fn=0.0)
    assert population[0].cost == CostBenefit(50.0, -30.0)


def test_load_cost_overrides_requires_columns(tmp_path):
    path = tmp_path / "overrides.csv"
    pd.DataFrame({"id": [1], "cb_tp": [90.0]}).to_csv(path, index=False)

    with pytest.raises(ValidationError):
        load_cost_overrides(path)


def test_load_cost_overrides_rejects_blank_costs(tmp_path):
    path = tmp_path / "overrides.csv"
    pd.DataFrame({"id": [1, 2], "cb_tp": [90.0, None], "cb_fp": [-40.0, -40.0]}).to_csv(path, index=False)

    with pytest.raises(InvalidCostBenefitError):
        load_cost_overrides(path)


def test_optimize_command(runner, rate_csv, customers_csv, tmp_path):
    output = tmp_path / "curve.csv"

    result = runner.invoke(app, [
        "optimize",
        "--rates", str(rate_csv),
        "--customers", str(customers_csv),
        "--cb-tp", "50",
        "--cb-fp=-30",
        "--reference", "0.19",
        "--target-population", "1000",
        "--output", str(output),
    ])

    assert result.exit_code == 0, result.output
    assert "0.0920" in result.output
    assert "16.80" in result.output

    curve = pd.read_csv(output)
    assert len(curve) == 5
    assert curve["total_expected_profit"].tolist() == pytest.approx([140.0, 180.0, 163.2, 96.5, 0.0])


def test_optimize_command_uses_configured_costs(runner, rate_csv, customers_csv):
    """Defaults are 50 / -30, the reference scenario."""
    result = runner.invoke(app, ["optimize", "--rates", str(rate_csv), "--customers", str(customers_csv)])

    assert result.exit_code == 0, result.output
    assert "180.00" in result.output


def test_optimize_command_malformed_rates(runner, tmp_path, customers_csv):
    rates = tmp_path / "bad_rates.csv"
    pd.DataFrame({
        "threshold": [0.5, 0.2],
        "tpr": [0.4, 0.8],
        "fpr": [0.1, 0.4],
        "fnr": [0.6, 0.2],
        "tnr": [0.9, 0.6],
    }).to_csv(rates, index=False)

    result = runner.invoke(app, ["optimize", "--rates", str(rates), "--customers", str(customers_csv)])

    assert result.exit_code == 1
    assert "MalformedRateTableError" in result.output


def test_optimize_command_unknown_reference(runner, rate_csv, customers_csv):
    result = runner.invoke(app, [
        "optimize", "--rates", str(rate_csv), "--customers", str(customers_csv), "--reference", "0.3",
    ])

    assert result.exit_code == 1
    assert "ThresholdNotFoundError" in result.output


def test_optimize_command_duplicate_customers(runner, rate_csv, tmp_path):
    customers = tmp_path / "dupes.csv"
    pd.DataFrame({"id": [1, 1, 2], "p1": [0.2, 0.4, 0.9]}).to_csv(customers, index=False)

    result = runner.invoke(app, ["optimize", "--rates", str(rate_csv), "--customers", str(customers)])

    assert result.exit_code == 1
    assert "DuplicateCustomerError" in result.output


def test_sensitivity_command(runner, rate_csv, customers_csv, tmp_path):
    output = tmp_path / "grid.csv"

    result = runner.invoke(app, [
        "sensitivity",
        "--rates", str(rate_csv),
        "--customers", str(customers_csv),
        "--cb-tp-values", "40,50",
        "--cb-fp-values=-30,-300",
        "--output", str(output),
    ])

    assert result.exit_code == 0, result.output
    assert len(pd.read_csv(output)) == 4
    assert "1.0000" in result.output


def test_sensitivity_command_bad_values(runner, rate_csv, customers_csv):
    result = runner.invoke(app, [
        "sensitivity",
        "--rates", str(rate_csv),
        "--customers", str(customers_csv),
        "--cb-tp-values", "forty",
        "--cb-fp-values=-30",
    ])

    assert result.exit_code == 1
    assert "ValidationError" in result.output
