"""
Command-line interface for the expected-value threshold optimizer.
"""
import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from profit_threshold.config import get_settings, load_settings
from profit_threshold.data import CostBenefit, CostPolicy, load_cost_overrides, load_population, load_rate_table, load_table
from profit_threshold.optimization import PortfolioOptimizer, cost_sensitivity
from profit_threshold.reporting import summarize_decision
from profit_threshold.utils import (
    DuplicateCustomerError,
    ProfitThresholdError,
    ValidationError,
    create_error_context,
    log_error_with_context,
    logger,
)

app = typer.Typer(help="Pick the classification threshold that maximizes expected profit.")
console = Console()
log = logger.getChild("cli")


def _parse_values(raw: str) -> List[float]:
    try:
        return [float(v) for v in raw.split(",") if v.strip()]
    except ValueError as e:
        raise ValidationError(f"Could not parse value list {raw!r}") from e


def _fail(error: Exception, operation: str, **context) -> None:
    log_error_with_context(log, error, create_error_context(operation, **context))
    console.print(f"[bold red]{type(error).__name__}: {escape(str(error))}[/bold red]")
    raise typer.Exit(code=1)


@app.command()
def optimize(
    rates: Path = typer.Option(..., "--rates", "-r", help="Rate table file (threshold, tpr, fpr, fnr, tnr)"),
    customers: Path = typer.Option(..., "--customers", "-c", help="Scored customers file (id, p1)"),
    cb_tp: Optional[float] = typer.Option(None, "--cb-tp", help="Uniform true-positive value"),
    cb_fp: Optional[float] = typer.Option(None, "--cb-fp", help="Uniform false-positive value"),
    overrides: Optional[Path] = typer.Option(None, "--overrides", help="Per-customer cost file (id, cb_tp, cb_fp)"),
    reference: Optional[float] = typer.Option(None, "--reference", help="Threshold to compare the optimum against"),
    target_population: Optional[int] = typer.Option(None, "--target-population", help="Customer base for extrapolation"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the aggregate curve to CSV"),
    id_col: str = typer.Option("id", "--id-col"),
    p1_col: str = typer.Option("p1", "--p1-col"),
    config_file: Optional[Path] = typer.Option(None, "--config", help="YAML settings file"),
):
    """Aggregate expected profit over all thresholds and report the optimum."""
    try:
        if config_file:
            load_settings(config_file)
        costs = get_settings().costs
        default = CostBenefit(
            tp=costs.cb_tp if cb_tp is None else cb_tp,
            fp=costs.cb_fp if cb_fp is None else cb_fp,
        )
        policy = CostPolicy(default, load_cost_overrides(overrides, id_col=id_col) if overrides else None)

        rate_table = load_rate_table(rates)
        population = load_population(customers, policy, id_col=id_col, p1_col=p1_col)

        optimizer = PortfolioOptimizer()
        curve = optimizer.aggregate(population, rate_table)
        optimum = optimizer.find_optimum(curve)

        comparison = None
        if reference is not None:
            # Lowest optimal threshold when several tie
            comparison = optimizer.compare(curve, min(optimum.thresholds), reference)

        summary = summarize_decision(curve, optimum, comparison, target_population)
    except (ProfitThresholdError, FileNotFoundError) as e:
        _fail(e, "optimize", rates=str(rates), customers=str(customers))

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        curve.to_frame().to_csv(output, index=False)
        log.info(f"Aggregate curve saved to {output}")

    table = Table(title="Expected Value Threshold Decision")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Customers", str(summary["n_customers"]))
    table.add_row("Thresholds evaluated", str(summary["n_thresholds"]))
    table.add_row("Optimal threshold(s)", ", ".join(f"{t:.4f}" for t in summary["optimal_thresholds"]))
    table.add_row("Max total expected profit", f"{summary['max_total_expected_profit']:,.2f}")
    table.add_row("Max expected profit / customer", f"{summary['max_expected_profit_per_customer']:,.4f}")

    if comparison is not None:
        table.add_row(f"Profit @ {reference}", f"{comparison.profit_b:,.2f}")
        table.add_row("Difference vs reference", f"{comparison.absolute_difference:,.2f}")
        table.add_row("Difference / customer", f"{comparison.per_customer_difference:,.4f}")
        if target_population is not None:
            table.add_row(f"Difference @ {target_population:,} customers",
                          f"{summary['comparison']['extrapolated_difference']:,.2f}")

    console.print(table)
    log.info("Threshold decision", extra={"extra_fields": {"summary": json.loads(json.dumps(summary, default=str))}})


@app.command()
def sensitivity(
    rates: Path = typer.Option(..., "--rates", "-r", help="Rate table file"),
    customers: Path = typer.Option(..., "--customers", "-c", help="Scored customers file (id, p1)"),
    cb_tp_values: str = typer.Option(..., "--cb-tp-values", help="Comma-separated true-positive values"),
    cb_fp_values: str = typer.Option(..., "--cb-fp-values", help="Comma-separated false-positive values"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the grid to CSV"),
    id_col: str = typer.Option("id", "--id-col"),
    p1_col: str = typer.Option("p1", "--p1-col"),
):
    """Re-optimize the threshold over a grid of uniform cost/benefit pairs."""
    try:
        rate_table = load_rate_table(rates)
        scored = load_table(customers)
        duplicated = scored[id_col].duplicated()
        if duplicated.any():
            raise DuplicateCustomerError(
                "Scored customers contain repeated ids",
                duplicate_ids=scored.loc[duplicated, id_col].unique().tolist()
            )
        probabilities = dict(zip(scored[id_col].tolist(), scored[p1_col].astype(float).tolist()))

        grid = cost_sensitivity(probabilities, rate_table,
                                _parse_values(cb_tp_values), _parse_values(cb_fp_values))
    except (ProfitThresholdError, FileNotFoundError, KeyError) as e:
        _fail(e, "sensitivity", rates=str(rates), customers=str(customers))

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        grid.to_csv(output, index=False)

    table = Table(title="Cost Sensitivity")
    table.add_column("cb_tp", justify="right")
    table.add_column("cb_fp", justify="right")
    table.add_column("Optimal threshold(s)")
    table.add_column("Max total profit", justify="right")
    for row in grid.itertuples(index=False):
        table.add_row(
            f"{row.cb_tp:,.2f}",
            f"{row.cb_fp:,.2f}",
            ", ".join(f"{t:.4f}" for t in row.optimal_thresholds),
            f"{row.max_total_expected_profit:,.2f}",
        )
    console.print(table)


if __name__ == "__main__":
    app()
