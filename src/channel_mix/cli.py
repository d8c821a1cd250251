"""
Command-line interface for channel-mix.

Provides commands for running the allocator on a plan file, sweeping
budgets, tabulating response curves, and serving the API.
"""

from pathlib import Path
from typing import Optional

import numpy as np
import pandas as pd
import typer
from loguru import logger

from channel_mix.config import ChannelMixConfig, dump_plan, load_config, load_plan
from channel_mix.core.catalog import default_channels
from channel_mix.core.contracts import Objective, RunRequest
from channel_mix.core.exceptions import ChannelMixError

app = typer.Typer(
    name="channel-mix",
    help="Channel mix budget optimizer CLI",
    add_completion=False,
)


def _build_request(
    plan: Optional[Path],
    config_path: Optional[Path],
    budget: Optional[float] = None,
    step: Optional[float] = None,
    objective: Optional[Objective] = None,
) -> tuple[RunRequest, ChannelMixConfig]:
    """Load the plan (or defaults) and apply command-line overrides."""
    config = load_config(config_path)

    try:
        if plan is not None:
            request = load_plan(plan, config)
        else:
            request = RunRequest.from_config(config, default_channels())
    except ChannelMixError as e:
        logger.error(str(e))
        raise typer.Exit(code=1)

    overrides = {}
    if budget is not None:
        overrides["total_budget"] = budget
    if step is not None:
        overrides["step"] = step
    if objective is not None:
        overrides["objective"] = objective

    if overrides:
        request = RunRequest(**{**request.model_dump(), **overrides})
    return request, config


@app.command()
def optimize(
    plan: Optional[Path] = typer.Option(
        None, "--plan", "-p", help="Run plan (YAML/JSON); defaults if omitted"
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to config file"
    ),
    budget: Optional[float] = typer.Option(None, "--budget", "-b", help="Total budget"),
    step: Optional[float] = typer.Option(None, "--step", "-s", help="Allocation increment"),
    objective: Optional[Objective] = typer.Option(
        None, "--objective", help="Objective to maximize"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write CSV export (.csv) or JSON + CSV (.json)"
    ),
):
    """Optimize the budget split and print the allocation table."""
    from channel_mix.optimization import optimize_allocation
    from channel_mix.reporting import format_currency, write_csv

    request, config = _build_request(plan, config_path, budget, step, objective)
    symbol = config.reporting.currency_symbol

    result = optimize_allocation(request)

    table = pd.DataFrame({
        "Channel": [row.name for row in result.rows],
        "Spend": [format_currency(row.spend, symbol) for row in result.rows],
        "Revenue": [format_currency(row.revenue, symbol) for row in result.rows],
        "ROAS": [f"{row.roas:.2f}x" for row in result.rows],
    })
    typer.echo(table.to_string(index=False))
    typer.echo("")
    typer.echo(
        f"Total spend: {format_currency(result.totals.spend, symbol)} | "
        f"Attributed revenue: {format_currency(result.totals.revenue, symbol)} | "
        f"Blended ROAS: {result.blended_roas:.2f}x | "
        f"Objective: {request.objective.value}"
    )

    if output is not None:
        if output.suffix.lower() == ".json":
            result.save(output)
            logger.info(f"Saved results to {output}")
        else:
            write_csv(result, output)


@app.command()
def frontier(
    plan: Optional[Path] = typer.Option(None, "--plan", "-p", help="Run plan (YAML/JSON)"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to config file"
    ),
    min_budget: float = typer.Option(50000, "--min-budget", help="Lowest budget"),
    max_budget: float = typer.Option(500000, "--max-budget", help="Highest budget"),
    points: int = typer.Option(10, "--points", "-n", help="Number of budget levels"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="CSV output file"),
):
    """Optimize across a range of budgets (efficiency frontier)."""
    from channel_mix.optimization import compute_efficiency_frontier

    request, _ = _build_request(plan, config_path)
    df = compute_efficiency_frontier(request, (min_budget, max_budget), n_points=points)

    typer.echo(df[["budget", "spend", "revenue", "roas"]].round(2).to_string(index=False))

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(output, index=False)
        logger.info(f"Saved frontier to {output}")


@app.command()
def curves(
    plan: Optional[Path] = typer.Option(None, "--plan", "-p", help="Run plan (YAML/JSON)"),
    max_spend: float = typer.Option(200000, "--max-spend", help="Largest spend level"),
    points: int = typer.Option(11, "--points", "-n", help="Spend levels per curve"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="CSV output file"),
):
    """Tabulate each enabled channel's modeled revenue curve."""
    from channel_mix.transforms import response_curve, seasonality_factor

    request, _ = _build_request(plan, None)
    season = seasonality_factor(request.seasonality, request.active_months)
    spends = np.linspace(0, max_spend, points)

    df = pd.DataFrame({"spend": spends})
    for ch in request.enabled_channels:
        df[ch.id] = response_curve(ch, spends, seasonality=season)

    typer.echo(df.round(0).to_string(index=False))

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(output, index=False)


@app.command()
def defaults(
    output: Path = typer.Option(
        Path("plan.yaml"), "--output", "-o", help="Where to write the sample plan"
    ),
):
    """Write a sample plan with the default channel catalog."""
    request = RunRequest.from_config(load_config(), default_channels())
    output.parent.mkdir(parents=True, exist_ok=True)
    dump_plan(request, output)
    logger.info(f"Wrote sample plan to {output}")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", "-h", help="Host to bind"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to bind"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload"),
):
    """Start the API server."""
    from channel_mix.api.app import run_server

    run_server(host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
