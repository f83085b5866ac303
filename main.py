"""Command line entry point for the Flow dashboard.

Usage:
    flow-dashboard init-db                              # Create / upgrade the schema
    flow-dashboard projects                             # List projects
    flow-dashboard sprints <project-id>                 # List sprints of a project
    flow-dashboard summary <project-id> --sprint all    # Dashboard figures
    flow-dashboard export <project-id> --pdf out.pdf    # Excel / PDF / PNG exports
"""

from __future__ import annotations

import json as json_mod
import logging
import sys
from datetime import date, datetime

import click

from core.exceptions import DomainError
from core.services.dashboard import ALL_SPRINTS, DashboardCalculations
from infra.db.base import DB_URL_ENV, SessionLocal, database_url, init_engine
from infra.logging_config import setup_logging
from infra.operational_support import bind_trace_id, get_operational_support
from infra.services import ServiceGraph, build_service_graph
from infra.version import get_app_version

logger = logging.getLogger("flow.cli")


def _get_services(ctx: click.Context) -> ServiceGraph:
    """Open a session on the configured database and wire the services once per invocation."""
    obj = ctx.ensure_object(dict)
    graph = obj.get("services")
    if graph is None:
        init_engine(obj.get("db_url"))
        graph = build_service_graph(SessionLocal())
        ctx.call_on_close(graph.close)
        obj["services"] = graph
    return graph


def _fail(exc: Exception, context: str) -> None:
    logger.error("%s failed: %s", context, exc)
    get_operational_support().capture_exception(exc, context=context)
    click.echo(f"Error: {exc}", err=True)
    sys.exit(1)


def _as_date(value: datetime | None) -> date | None:
    return value.date() if value else None


def _print_summary(project_name: str, sprint: str | None, calc: DashboardCalculations) -> None:
    scope = "todas as sprints" if sprint == ALL_SPRINTS else (f"sprint {sprint}" if sprint else "sprints em andamento")
    click.echo(f"{project_name} ({scope})")
    if not calc.metrics:
        click.echo("  Nenhuma atividade ativa.")
    for metric in calc.metrics:
        click.echo(f"  {metric.label}: {metric.value} {metric.unit}".rstrip())
        if metric.additional_info:
            click.echo(f"      {metric.additional_info}")
    click.echo(f"  Lead time médio: {calc.average_lead_time} dias")
    if calc.velocity_data:
        click.echo("  Velocidade:")
        for point in calc.velocity_data:
            click.echo(f"    {point.schedule}: {point.completed}/{point.created} concluídas")


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=get_app_version(), prog_name="flow-dashboard")
@click.option("--db-url", envvar=DB_URL_ENV, default=None, help="SQLAlchemy database URL (default: per-user SQLite file)")
@click.option("-v", "--verbose", is_flag=True, help="Also log to the console")
@click.pass_context
def cli(ctx: click.Context, db_url: str | None, verbose: bool) -> None:
    """Flow project dashboard: delivery, reliability, projected end date and health."""
    ctx.ensure_object(dict)
    ctx.obj["db_url"] = db_url
    setup_logging(logging.DEBUG if verbose else logging.INFO, console=verbose)
    ctx.with_resource(bind_trace_id())


@cli.command("init-db")
@click.pass_context
def init_db(ctx: click.Context) -> None:
    """Create or upgrade the database schema."""
    from infra.migrate import run_migrations

    url = ctx.obj.get("db_url") or database_url()
    try:
        run_migrations(url)
    except Exception as exc:
        _fail(exc, "init-db")
    click.echo(f"Database ready at {url}")


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def projects(ctx: click.Context, as_json: bool) -> None:
    """List projects."""
    options = _get_services(ctx).dashboard_service.get_available_projects()
    if as_json:
        click.echo(json_mod.dumps([{"id": o.id, "name": o.name, "description": o.description} for o in options], indent=2, ensure_ascii=False))
        return
    if not options:
        click.echo("No projects.")
        return
    for option in options:
        click.echo(f"{option.id}  {option.name}")


@cli.command()
@click.argument("project_id")
@click.pass_context
def sprints(ctx: click.Context, project_id: str) -> None:
    """List sprints of a project."""
    options = _get_services(ctx).dashboard_service.list_sprint_options(project_id)
    if not options:
        click.echo("No sprints.")
        return
    for option in options:
        click.echo(f"{option.name}  [{option.status}]")


@cli.command()
@click.argument("project_id")
@click.option("--sprint", "sprint_filter", default=None, help="Sprint name, or 'all' for every sprint")
@click.option("--today", type=click.DateTime(formats=["%Y-%m-%d"]), default=None, help="Reference date (YYYY-MM-DD)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def summary(ctx: click.Context, project_id: str, sprint_filter: str | None, today: datetime | None, as_json: bool) -> None:
    """Show the dashboard figures of a project."""
    dashboard = _get_services(ctx).dashboard_service
    try:
        calc = dashboard.get_calculations(project_id, sprint_filter, today=_as_date(today))
        name = dashboard.get_dashboard_data(project_id, today=_as_date(today)).project.name
    except DomainError as exc:
        _fail(exc, "summary")
        return

    if as_json:
        payload = {"project": name, "sprint": sprint_filter, **calc.as_dict()}
        click.echo(json_mod.dumps(payload, indent=2, ensure_ascii=False))
        return
    _print_summary(name, sprint_filter, calc)


@cli.command()
@click.argument("project_id")
@click.option("--excel", "excel_path", type=click.Path(dir_okay=False), default=None, help="Write an .xlsx workbook")
@click.option("--pdf", "pdf_path", type=click.Path(dir_okay=False), default=None, help="Write a PDF summary")
@click.option("--chart", "chart_path", type=click.Path(dir_okay=False), default=None, help="Write the velocity chart as PNG")
@click.option("--sprint", "sprint_filter", default=None, help="Sprint name, or 'all' for every sprint")
@click.option("--today", type=click.DateTime(formats=["%Y-%m-%d"]), default=None, help="Reference date (YYYY-MM-DD)")
@click.pass_context
def export(
    ctx: click.Context,
    project_id: str,
    excel_path: str | None,
    pdf_path: str | None,
    chart_path: str | None,
    sprint_filter: str | None,
    today: datetime | None,
) -> None:
    """Export the dashboard of a project."""
    from core.reporting import generate_excel_report, generate_pdf_report, generate_velocity_png

    if not (excel_path or pdf_path or chart_path):
        raise click.UsageError("Choose at least one of --excel, --pdf or --chart.")

    dashboard = _get_services(ctx).dashboard_service
    as_of = _as_date(today)
    written = []
    try:
        if excel_path:
            written.append(generate_excel_report(dashboard, project_id, excel_path, sprint_filter=sprint_filter, as_of=as_of))
        if pdf_path:
            written.append(generate_pdf_report(dashboard, project_id, pdf_path, sprint_filter=sprint_filter, as_of=as_of))
        if chart_path:
            written.append(generate_velocity_png(dashboard, project_id, chart_path, sprint_filter=sprint_filter, as_of=as_of))
    except (DomainError, ValueError) as exc:
        _fail(exc, "export")
        return

    get_operational_support().emit_event(
        event_type="dashboard.export.completed",
        message=f"Exported dashboard of project {project_id}",
        data={"project_id": project_id, "files": [str(p) for p in written]},
    )
    for path in written:
        click.echo(f"Wrote {path}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
