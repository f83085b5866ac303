from __future__ import annotations

from datetime import date

import matplotlib.pyplot as plt
import pytest
from openpyxl import load_workbook

from core.reporting import api as reporting_api
from core.reporting.contexts import PdfReportContext
from core.reporting.renderers.velocity import VelocityPngRenderer
from core.services.dashboard.models import VelocityPoint

AS_OF = date(2024, 1, 10)


def test_excel_report_has_metrics_velocity_and_tasks(services, portal, tmp_path):
    out = tmp_path / "reports" / "dashboard.xlsx"

    path = reporting_api.generate_excel_report(
        services["dashboard_service"], portal.project.id, out, sprint_filter="all", as_of=AS_OF
    )

    assert path == out
    wb = load_workbook(path)
    assert wb.sheetnames == ["Metrics", "Velocity", "Tasks"]
    assert wb["Metrics"]["A1"].value == "Dashboard - Portal"
    assert wb["Metrics"]["A2"].value == "Todas as sprints • 2024-01-10"
    assert wb["Velocity"].cell(row=2, column=1).value == "Portal"
    assert wb["Velocity"].cell(row=2, column=2).value == 3
    titles = {wb["Tasks"].cell(row=r, column=2).value for r in range(2, 6)}
    assert titles == {"Login", "Relatórios", "Exportar", "Integração"}


def test_velocity_png(services, portal, tmp_path):
    out = tmp_path / "velocity.png"

    path = reporting_api.generate_velocity_png(services["dashboard_service"], portal.project.id, out, as_of=AS_OF)

    assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_velocity_png_without_data_raises(tmp_path):
    with pytest.raises(ValueError):
        VelocityPngRenderer().render([], tmp_path / "empty.png")


def test_velocity_png_closes_figure_when_save_fails(tmp_path):
    open_before = plt.get_fignums()
    points = [VelocityPoint(schedule="Portal", created=3, completed=1, state="active")]

    with pytest.raises(OSError):
        VelocityPngRenderer().render(points, tmp_path / "missing" / "chart.png")

    assert plt.get_fignums() == open_before


def test_pdf_report_with_chart_cleans_temp_files(services, portal, tmp_path):
    out = tmp_path / "dashboard.pdf"
    temp_dir = tmp_path / "tmp_reports"

    path = reporting_api.generate_pdf_report(
        services["dashboard_service"], portal.project.id, out, temp_dir=temp_dir, as_of=AS_OF
    )

    assert path.read_bytes()[:4] == b"%PDF"
    assert not temp_dir.exists()


def test_pdf_report_without_tasks_is_still_written(services, tmp_path):
    project = services["project_service"].create_project("Vazio")
    out = tmp_path / "empty.pdf"

    path = reporting_api.generate_pdf_report(
        services["dashboard_service"], project.id, out, temp_dir=tmp_path / "tmp", as_of=AS_OF
    )

    assert path.exists()
    assert path.stat().st_size > 0


def test_report_context_for_one_sprint(services, portal):
    ctx = reporting_api.build_report_context(
        services["dashboard_service"],
        portal.project.id,
        "Sprint 2",
        AS_OF,
        context_cls=PdfReportContext,
        velocity_png_path="chart.png",
    )

    assert ctx.project_name == "Portal"
    assert ctx.scope_label == "Sprint Sprint 2"
    assert ctx.velocity_png_path == "chart.png"
    assert ctx.calculations.velocity_data[0].created == 1
