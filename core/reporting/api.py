"""Reporting API wrappers around renderer classes."""

import logging
from contextlib import suppress
from datetime import date
from pathlib import Path

from core.reporting.contexts import DashboardReportContext, ExcelReportContext, PdfReportContext
from core.reporting.renderers.excel import ExcelReportRenderer
from core.reporting.renderers.pdf import PdfReportRenderer
from core.reporting.renderers.velocity import VelocityPngRenderer
from core.services.dashboard import DashboardService

logger = logging.getLogger(__name__)


def _ensure_parent(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def _cleanup_temp_artifact(path: Path | None, temp_dir: Path | None = None) -> None:
    if path:
        with suppress(FileNotFoundError, PermissionError, OSError):
            path.unlink()

    parent = temp_dir if temp_dir is not None else (path.parent if path else None)
    if parent is None:
        return
    if parent.exists():
        with suppress(FileNotFoundError, PermissionError, OSError):
            if not any(parent.iterdir()):
                parent.rmdir()


def build_report_context(
    dashboard_service: DashboardService,
    project_id: str,
    sprint_filter: str | None = None,
    as_of: date | None = None,
    context_cls: type[DashboardReportContext] = DashboardReportContext,
    **extra,
) -> DashboardReportContext:
    as_of = as_of or dashboard_service.today()
    data = dashboard_service.get_dashboard_data(project_id, today=as_of)
    calculations = dashboard_service.get_calculations(project_id, sprint_filter, today=as_of)
    return context_cls(
        project_id=project_id,
        project_name=data.project.name,
        sprint_filter=sprint_filter,
        calculations=calculations,
        metrics=data.metrics,
        tasks=list(data.tasks),
        as_of=as_of,
        **extra,
    )


def generate_velocity_png(
    dashboard_service: DashboardService,
    project_id: str,
    output_path: str | Path,
    sprint_filter: str | None = None,
    as_of: date | None = None,
) -> Path:
    calculations = dashboard_service.get_calculations(project_id, sprint_filter, today=as_of)
    renderer = VelocityPngRenderer()
    return renderer.render(calculations.velocity_data, _ensure_parent(Path(output_path)))


def generate_excel_report(
    dashboard_service: DashboardService,
    project_id: str,
    output_path: str | Path,
    sprint_filter: str | None = None,
    as_of: date | None = None,
) -> Path:
    ctx = build_report_context(
        dashboard_service, project_id, sprint_filter, as_of, context_cls=ExcelReportContext
    )
    path = ExcelReportRenderer().render(ctx, _ensure_parent(Path(output_path)))
    logger.info("Excel dashboard for project %s written to %s", project_id, path)
    return path


def generate_pdf_report(
    dashboard_service: DashboardService,
    project_id: str,
    output_path: str | Path,
    temp_dir: str | Path = "tmp_reports",
    sprint_filter: str | None = None,
    as_of: date | None = None,
) -> Path:
    temp_dir = Path(temp_dir)
    temp_dir.mkdir(parents=True, exist_ok=True)
    chart_path: Path | None = temp_dir / f"velocity_{project_id}.png"
    try:
        generate_velocity_png(dashboard_service, project_id, chart_path, sprint_filter, as_of)
    except ValueError:
        logger.info("No velocity data for project %s; PDF without chart", project_id)
        chart_path = None

    ctx = build_report_context(
        dashboard_service,
        project_id,
        sprint_filter,
        as_of,
        context_cls=PdfReportContext,
        velocity_png_path=str(chart_path) if chart_path else "",
    )
    try:
        path = PdfReportRenderer().render(ctx, _ensure_parent(Path(output_path)))
    finally:
        _cleanup_temp_artifact(chart_path, temp_dir=temp_dir)
    logger.info("PDF dashboard for project %s written to %s", project_id, path)
    return path


__all__ = [
    "build_report_context",
    "generate_velocity_png",
    "generate_excel_report",
    "generate_pdf_report",
]
