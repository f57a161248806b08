from __future__ import annotations

from contextlib import nullcontext
from datetime import date
from pathlib import Path
from typing import Any, Callable

import click
import pandas as pd
import typer
from rich.console import Console
from rich.table import Table

from rotacost.cli._utils import format_amount, parse_now, parse_period, status_strip
from rotacost.costing import compute_month_costs
from rotacost.core.errors import InvalidConfigError, RotacostValueError
from rotacost.evaluation import (
    GroupBoundary,
    budget_estimate,
    category_totals,
    client_totals,
    client_trade_summary,
    cost_dataframe,
    filter_people,
    group_people,
    location_totals,
    monthly_statement,
    monthly_trend,
    trade_totals,
    trend_summary,
)
from rotacost.roster.io import RosterBundle, load_roster
from rotacost.scheduling.status import (
    days_on_board,
    is_departure_alert,
    is_on_board,
    month_status_cells,
    on_board_counts,
)
from rotacost.telemetry import ReportTelemetryLogger

app = typer.Typer(add_completion=False, no_args_is_help=True)
console = Console()
BREAKDOWN_MODE = click.Choice(["client", "trade", "location", "client-trade"], case_sensitive=False)

NOW_OPTION = typer.Option(None, "--now", help="Pin the current date (YYYY-MM-DD); defaults to today.")
TELEMETRY_OPTION = typer.Option(
    None, "--telemetry-log", help="Append a run record to this JSONL file."
)


def _load(bundle: Path) -> RosterBundle:
    try:
        return load_roster(bundle)
    except FileNotFoundError as exc:
        console.print(f"[red]Missing file:[/red] {exc}")
        raise typer.Exit(1)
    except InvalidConfigError as exc:
        console.print(f"[red]Invalid report configuration:[/red] {', '.join(exc.fields) or exc}")
        raise typer.Exit(1)
    except RotacostValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)


def _resolve(parser: Callable[[Any], Any], value: Any) -> Any:
    try:
        return parser(value)
    except RotacostValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)


def _telemetry(
    log: Path | None,
    command: str,
    roster: RosterBundle,
    *,
    period: str | None = None,
    context: dict[str, Any] | None = None,
):
    if log is None:
        return nullcontext(None)
    return ReportTelemetryLogger(
        log_path=log,
        command=command,
        roster=roster.name,
        roster_path=str(roster.source) if roster.source else None,
        period=period,
        config=roster.config.model_dump(),
        context=context,
    )


def _print_frame(df: pd.DataFrame, title: str, money_columns: tuple[str, ...] = ()) -> None:
    table = Table(title=title)
    for column in df.columns:
        table.add_column(str(column), justify="right" if column in money_columns else "left")
    for _, row in df.iterrows():
        cells = []
        for column in df.columns:
            value = row[column]
            cells.append(format_amount(float(value)) if column in money_columns else str(value))
        table.add_row(*cells)
    console.print(table)


@app.command()
def validate(bundle: Path):
    """Validate a roster bundle and print summary counts."""
    roster = _load(bundle)
    unmatched = roster.unmatched_people()
    t = Table(title=f"Roster: {roster.name}")
    t.add_column("Entities")
    t.add_column("Count")
    t.add_row("People", str(len(roster.people)))
    t.add_row("Cycles", str(sum(len(person.cycles) for person in roster.people)))
    t.add_row("Rate records", str(len(roster.rates)))
    t.add_row("People without rates", str(len(unmatched)))
    console.print(t)
    for person in unmatched:
        console.print(f"[yellow]No pay master record:[/yellow] {person.name}")


@app.command()
def costs(
    bundle: Path,
    period: str = typer.Option(..., "--period", help="Month to cost (YYYY-MM)."),
    out: Path | None = typer.Option(None, "--out", help="Optional CSV export path."),
    telemetry_log: Path | None = TELEMETRY_OPTION,
):
    """Per-person cost records for one month."""
    roster = _load(bundle)
    year, month = _resolve(parse_period, period)
    with _telemetry(telemetry_log, "costs", roster, period=period) as logger:
        records = compute_month_costs(roster.people, roster.rates, year, month)
        df = cost_dataframe(records)
        if out is not None:
            out.parent.mkdir(parents=True, exist_ok=True)
            df.to_csv(out, index=False)
            console.print(f"Saved {len(df)} cost records to {out}")
        view = df[["name", "client", "trade", "total_days", "salary", "fixed_allowance",
                   "offshore_pay", "relief", "standby", "medevac_pay", "total"]]
        _print_frame(
            view,
            f"Costs {year}-{month:02d}",
            money_columns=("salary", "fixed_allowance", "offshore_pay", "relief", "standby",
                           "medevac_pay", "total"),
        )
        console.print(f"Total: {format_amount(float(df['total'].sum()) if not df.empty else 0.0)}")
        if logger is not None:
            logger.finalize(
                metrics={"records": len(records), "total": sum(r.total for r in records)},
                artifacts=[str(out)] if out is not None else None,
            )


@app.command()
def trend(
    bundle: Path,
    now: str | None = NOW_OPTION,
    telemetry_log: Path | None = TELEMETRY_OPTION,
):
    """Monthly cost trend from the anchor month through the lookahead window."""
    roster = _load(bundle)
    today: date = _resolve(parse_now, now)
    with _telemetry(telemetry_log, "trend", roster, context={"now": today.isoformat()}) as logger:
        df = monthly_trend(roster.people, roster.rates, roster.config.month_range(today), today)
        view = df.assign(kind=df["is_future"].map({True: "estimated", False: "actual"}))
        _print_frame(
            view[["label", "kind", "salary", "allowances", "total"]],
            f"Cost trend ({roster.name})",
            money_columns=("salary", "allowances", "total"),
        )
        summary = trend_summary(df)
        console.print(
            f"Actual to date: {format_amount(summary.total_actual)}  "
            f"Monthly average: {format_amount(summary.monthly_average)} "
            f"over {summary.actual_months} month(s)"
        )
        categories = category_totals(df)
        if not categories.empty:
            _print_frame(categories[["category", "total"]], "Actual cost by category", ("total",))
        if logger is not None:
            logger.finalize(metrics={"months": len(df), "total": float(df["total"].sum())})


@app.command()
def breakdown(
    bundle: Path,
    by: str = typer.Option("client", "--by", click_type=BREAKDOWN_MODE, help="Grouping key."),
    period: str | None = typer.Option(
        None, "--period", help="Month for client/client-trade breakdowns (defaults to --now)."
    ),
    now: str | None = NOW_OPTION,
    telemetry_log: Path | None = TELEMETRY_OPTION,
):
    """Cost breakdown by client, trade, location or client and trade."""
    roster = _load(bundle)
    today: date = _resolve(parse_now, now)
    year, month = _resolve(parse_period, period) if period else (today.year, today.month)
    by = by.lower()
    with _telemetry(
        telemetry_log, "breakdown", roster, period=f"{year}-{month:02d}", context={"by": by}
    ) as logger:
        months = roster.config.month_range(today)
        if by == "client":
            df = client_totals(compute_month_costs(roster.people, roster.rates, year, month))
            _print_frame(df, f"Cost by client {year}-{month:02d}", ("total",))
        elif by == "trade":
            df = trade_totals(roster.people, roster.rates, months, today)
            _print_frame(df, "Cost by trade (actual months)", ("total",))
        elif by == "location":
            df = location_totals(
                roster.people, roster.rates, months, today, top=roster.config.top_locations
            )
            _print_frame(df, "Cost by location (actual months)", ("total",))
        else:
            summary = client_trade_summary(
                compute_month_costs(roster.people, roster.rates, year, month)
            )
            df = summary.buckets
            money = tuple(column for column in df.columns if column not in {"client", "trade", "people"})
            _print_frame(df, f"Cost by client and trade {year}-{month:02d}", money)
            console.print(f"Grand total: {format_amount(summary.grand_total['total'])}")
        if logger is not None:
            logger.finalize(metrics={"rows": len(df)})


@app.command()
def budget(
    bundle: Path,
    period: str = typer.Option(..., "--period", help="Month to budget (YYYY-MM)."),
    buffer: float | None = typer.Option(
        None, "--buffer", min=0.0, help="Contingency percent on variable pay (defaults to config)."
    ),
    telemetry_log: Path | None = TELEMETRY_OPTION,
):
    """One-month budget estimate with a contingency buffer on variable pay."""
    roster = _load(bundle)
    year, month = _resolve(parse_period, period)
    buffer_pct = roster.config.budget_buffer_pct if buffer is None else buffer
    with _telemetry(
        telemetry_log, "budget", roster, period=period, context={"buffer_pct": buffer_pct}
    ) as logger:
        records = compute_month_costs(roster.people, roster.rates, year, month)
        estimate = budget_estimate(records, buffer_pct, year=year, month=month)
        money = ("fixed", "variable", "total")
        _print_frame(estimate.by_client, f"Budget {year}-{month:02d} by client (+{buffer_pct:g}%)", money)
        _print_frame(estimate.by_trade, f"Budget {year}-{month:02d} by trade (+{buffer_pct:g}%)", money)
        console.print(
            f"Fixed: {format_amount(estimate.grand_fixed)}  "
            f"Variable: {format_amount(estimate.grand_variable)}  "
            f"Total: {format_amount(estimate.grand_total)}"
        )
        if logger is not None:
            logger.finalize(metrics={"records": len(records), "total": estimate.grand_total})


@app.command()
def statement(
    bundle: Path,
    period: str = typer.Option(..., "--period", help="Month of the statement (YYYY-MM)."),
    search: str | None = typer.Option(None, "--search", help="Only names containing this text."),
    client: str | None = typer.Option(None, "--client", help="Only show this client."),
    trade: str | None = typer.Option(None, "--trade", help="Only show this trade (OM, EM, OHN)."),
    detail: bool = typer.Option(False, "--detail", help="Also list the contributing cycles."),
    out: Path | None = typer.Option(None, "--out", help="Optional CSV export of the cycle rows."),
    telemetry_log: Path | None = TELEMETRY_OPTION,
):
    """Variable-pay statement (offshore, relief, standby, medevac) for one month."""
    roster = _load(bundle)
    year, month = _resolve(parse_period, period)
    context = {"search": search, "client": client, "trade": trade}
    with _telemetry(telemetry_log, "statement", roster, period=period, context=context) as logger:
        result = monthly_statement(
            roster.people, roster.rates, year, month, search=search, client=client, trade=trade
        )
        if result.people.empty:
            console.print("No variable pay in this month.")
        else:
            _print_frame(
                result.people[["name", "trade", "offshore_days", "offshore_pay", "relief",
                               "standby", "medevac_events", "medevac_pay", "total"]],
                f"Statement {year}-{month:02d}",
                money_columns=("offshore_pay", "relief", "standby", "medevac_pay", "total"),
            )
        if detail and not result.cycles.empty:
            _print_frame(
                result.cycles[["name", "cycle_number", "sign_on", "sign_off", "days",
                               "relief", "standby", "medevac_dates"]],
                "Cycles",
                money_columns=("relief", "standby"),
            )
        if out is not None:
            out.parent.mkdir(parents=True, exist_ok=True)
            result.cycles.to_csv(out, index=False)
            console.print(f"Saved {len(result.cycles)} cycle rows to {out}")
        totals = result.totals
        console.print(
            f"Offshore: {format_amount(totals['offshore_pay'])}  "
            f"Relief: {format_amount(totals['relief'])}  "
            f"Standby: {format_amount(totals['standby'])}"
        )
        console.print(
            f"Medevac: {format_amount(totals['medevac_pay'])}  "
            f"Total: {format_amount(totals['total'])}"
        )
        if logger is not None:
            logger.finalize(
                metrics={"people": len(result.people), "total": totals["total"]},
                artifacts=[str(out)] if out is not None else None,
            )


@app.command()
def calendar(
    bundle: Path,
    period: str = typer.Option(..., "--period", help="Month to display (YYYY-MM)."),
    client: str | None = typer.Option(None, "--client", help="Only show this client."),
    trade: str | None = typer.Option(None, "--trade", help="Only show this trade (OM, EM, OHN)."),
):
    """Rotation map: one glyph per day, grouped by client, trade and location."""
    roster = _load(bundle)
    year, month = _resolve(parse_period, period)
    people = filter_people(roster.people, client=client, trade=trade, active_in=(year, month))
    if not people:
        console.print("No personnel with activity in this month.")
        return
    config = roster.config
    for entry in group_people(people, config.client_priority, config.default_client_rank):
        if isinstance(entry, GroupBoundary):
            console.print(f"[bold]{entry.label}[/bold]")
            continue
        cells = month_status_cells(entry.person, year, month)
        strip = status_strip([cell.status for cell in cells])
        console.print(f"  {entry.person.name:<28} {strip}", markup=False, highlight=False)


@app.command()
def onboard(
    bundle: Path,
    on: str | None = typer.Option(None, "--date", help="Date to check (defaults to today)."),
):
    """Personnel on board on a given date with days on board and departure alerts."""
    roster = _load(bundle)
    day: date = _resolve(parse_now, on)
    config = roster.config
    people = [person for person in roster.people if is_on_board(person, day)]
    counts = on_board_counts(roster.people, day)
    t = Table(title=f"On board {day.isoformat()} ({counts.total})")
    t.add_column("Name")
    t.add_column("Client")
    t.add_column("Location")
    t.add_column("Days", justify="right")
    t.add_column("Departing")
    for entry in group_people(people, config.client_priority, config.default_client_rank):
        if isinstance(entry, GroupBoundary):
            continue
        person = entry.person
        days = "-" if person.is_office else str(days_on_board(person, day))
        alert = "yes" if is_departure_alert(person, day, config.departure_alert_days) else ""
        t.add_row(person.name, person.client, person.location or "-", days, alert)
    console.print(t)
    for name, count in sorted(counts.by_client.items()):
        console.print(f"{name}: {count}")


if __name__ == "__main__":
    app()
