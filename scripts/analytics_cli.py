# ABOUTME: Provides a CLI that runs the observation analytics passes over exported records.
# ABOUTME: Renders trends, peer rankings, alerts, and recommendations as rich tables.

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from src.observation_analytics.alerts import generate_intervention_alerts
from src.observation_analytics.config import AnalyticsConfig, load_config
from src.observation_analytics.demo_data import generate_demo_observations
from src.observation_analytics.peer_comparison import calculate_peer_comparison
from src.observation_analytics.recommendation import generate_recommendations
from src.observation_analytics.records import (
    ObservationFormatError,
    dump_observations,
    load_observations,
    to_frame,
    to_rows,
)
from src.observation_analytics.schemas import ObservationRecord
from src.observation_analytics.summaries import summarize_students
from src.observation_analytics.trends import calculate_trends

console = Console()
app = typer.Typer(help="Derive trends, peer percentiles, alerts, and recommendations from classroom observations.")

SEVERITY_COLORS = {"low": "yellow", "medium": "orange3", "high": "red"}


def _default_observations() -> Path:
    return Path("data/observations.json")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log engine internals at DEBUG level.")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _load(observations: Path, config: Optional[Path]) -> tuple:
    if not observations.exists():
        console.print(f"[red]Missing observations file at {observations}[/red]")
        raise typer.Exit(code=1)
    try:
        records = load_observations(observations)
    except ObservationFormatError as exc:
        raise typer.BadParameter(str(exc), param_hint="--observations") from exc

    cfg = AnalyticsConfig()
    if config is not None:
        try:
            cfg = load_config(config)
        except (OSError, ValueError) as exc:
            raise typer.BadParameter(str(exc), param_hint="--config") from exc
    return records, cfg


def _write(items: List, output: Optional[Path]) -> None:
    if output is None:
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    if output.suffix == ".parquet":
        to_frame(items).to_parquet(output, index=False)
    else:
        output.write_text(json.dumps(to_rows(items), indent=2), encoding="utf-8")
    console.print(f"[bold]Wrote {len(items):,} rows to {output}[/bold]")


@app.command()
def trends(
    observations: Path = typer.Option(_default_observations(), "--observations", help="Observation records JSON."),
    config: Optional[Path] = typer.Option(None, "--config", help="Analytics config YAML."),
    student_id: Optional[str] = typer.Option(None, "--student-id", help="Restrict trends to one student."),
    output: Optional[Path] = typer.Option(None, "--output", help="Write results to .json or .parquet."),
) -> None:
    """
    Week and month category averages for the cohort or one student.
    """
    records, cfg = _load(observations, config)
    data = calculate_trends(records, student_id=student_id, config=cfg)

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Period")
    table.add_column("Observations")
    for category in cfg.categories:
        table.add_column(category)
    for entry in data:
        cells = [f"{entry.scores[c]:.2f}" if c in entry.scores else "-" for c in cfg.categories]
        table.add_row(entry.period, str(entry.total_observations), *cells)
    console.print(table)
    _write(data, output)


@app.command()
def peers(
    observations: Path = typer.Option(_default_observations(), "--observations", help="Observation records JSON."),
    config: Optional[Path] = typer.Option(None, "--config", help="Analytics config YAML."),
    output: Optional[Path] = typer.Option(None, "--output", help="Write results to .json or .parquet."),
) -> None:
    """
    Cohort percentile of every student per category.
    """
    records, cfg = _load(observations, config)
    data = calculate_peer_comparison(records, config=cfg)

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Student")
    table.add_column("Overall")
    for category in cfg.categories:
        table.add_column(category)
    for entry in data:
        cells = [str(entry.percentile.get(c, 0)) for c in cfg.categories]
        table.add_row(entry.student_name, str(entry.overall_percentile), *cells)
    console.print(table)
    _write(data, output)


@app.command()
def alerts(
    observations: Path = typer.Option(_default_observations(), "--observations", help="Observation records JSON."),
    config: Optional[Path] = typer.Option(None, "--config", help="Analytics config YAML."),
    severity: Optional[str] = typer.Option(None, "--severity", help="Only show alerts of this severity."),
    output: Optional[Path] = typer.Option(None, "--output", help="Write results to .json or .parquet."),
) -> None:
    """
    Decline and low-score intervention alerts.
    """
    records, cfg = _load(observations, config)
    data = generate_intervention_alerts(records, config=cfg)
    if severity:
        data = [a for a in data if a.severity == severity]

    if not data:
        console.print("[green]✅ No intervention alerts[/green]")
    for alert in data:
        color = SEVERITY_COLORS.get(alert.severity, "white")
        console.print(f"[{color}]{alert.student_name}: {alert.alert_type} ({alert.severity})[/{color}]")
        console.print(f"  → {alert.message}")
    _write(data, output)


@app.command()
def recommend(
    observations: Path = typer.Option(_default_observations(), "--observations", help="Observation records JSON."),
    config: Optional[Path] = typer.Option(None, "--config", help="Analytics config YAML."),
    student_id: Optional[str] = typer.Option(None, "--student-id", help="Only show recommendations for one student."),
    output: Optional[Path] = typer.Option(None, "--output", help="Write results to .json or .parquet."),
) -> None:
    """
    Suggested activities for every alert, matched by category and score band.
    """
    records, cfg = _load(observations, config)
    data = generate_recommendations(generate_intervention_alerts(records, config=cfg), config=cfg)
    if student_id:
        data = [r for r in data if r.student_id == student_id]

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Student")
    table.add_column("Category")
    table.add_column("Priority")
    table.add_column("Activity")
    table.add_column("Resources")
    for rec in data:
        table.add_row(rec.student_name, rec.category, rec.priority, rec.activity, ", ".join(rec.resources))
    console.print(table)
    _write(data, output)


@app.command()
def summary(
    observations: Path = typer.Option(_default_observations(), "--observations", help="Observation records JSON."),
    config: Optional[Path] = typer.Option(None, "--config", help="Analytics config YAML."),
    output: Optional[Path] = typer.Option(None, "--output", help="Write results to .json or .parquet."),
) -> None:
    """
    Roster view: observation counts, last observation, tags, and category averages.
    """
    records, cfg = _load(observations, config)
    data = summarize_students(records, config=cfg)

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Student")
    table.add_column("Observations")
    table.add_column("Last")
    table.add_column("Tags")
    for entry in data:
        last = entry.last_observation.isoformat() if entry.last_observation else "-"
        table.add_row(entry.student_name, str(entry.observation_count), last, ", ".join(entry.common_tags[:3]))
    console.print(table)
    _write(data, output)


@app.command()
def demo(
    output: Path = typer.Option(_default_observations(), "--output", help="Where to write the demo records JSON."),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed for reproducible demo data."),
    per_week: Optional[int] = typer.Option(None, "--per-week", help="Observations per student/category/week (default 2-3)."),
    jitter: float = typer.Option(0.5, "--jitter", help="Total width of the uniform score noise."),
) -> None:
    """
    Write the eight-student, six-week demo cohort.
    """
    records: List[ObservationRecord] = generate_demo_observations(
        now=datetime.now(timezone.utc),
        seed=seed,
        observations_per_week=per_week,
        jitter=jitter,
    )
    dump_observations(records, output)
    console.print(f"[bold]Wrote {len(records):,} demo observations to {output}[/bold]")


if __name__ == "__main__":
    app()
