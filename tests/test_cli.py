"""CLI integration tests using Click's CliRunner."""
from __future__ import annotations

import json
from datetime import date, datetime, timezone
from pathlib import Path

import pytest
from click.testing import CliRunner
from sqlalchemy.orm import sessionmaker

from core.models import TaskStatus
from infra.db.base import create_db_engine
from infra.services import build_service_graph
from main import cli


def _now() -> datetime:
    return datetime(2024, 1, 10, 12, tzinfo=timezone.utc)


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def db_url(tmp_path: Path, cli_runner: CliRunner) -> str:
    url = f"sqlite:///{(tmp_path / 'flow.db').as_posix()}"
    result = cli_runner.invoke(cli, ["--db-url", url, "init-db"])
    assert result.exit_code == 0, result.output
    return url


@pytest.fixture
def seeded(db_url: str) -> str:
    engine = create_db_engine(db_url)
    session = sessionmaker(bind=engine, expire_on_commit=False)()
    graph = build_service_graph(session, today=lambda: _now().date(), now=_now)
    try:
        project = graph.project_service.create_project(
            "Portal", start_date=date(2024, 1, 1), end_date=date(2024, 1, 20)
        )
        graph.sprint_service.create_sprint(project.id, "Sprint 1", date(2024, 1, 1), date(2024, 1, 14))
        graph.task_service.create_task(project.id, "Login", status=TaskStatus.COMPLETED, end_date=date(2024, 1, 10))
        graph.task_service.create_task(project.id, "Relatórios", end_date=date(2024, 1, 15))
        return project.id
    finally:
        graph.close()
        engine.dispose()


class TestInitDb:
    def test_init_db_reports_location(self, tmp_path: Path, cli_runner: CliRunner) -> None:
        url = f"sqlite:///{(tmp_path / 'new.db').as_posix()}"
        result = cli_runner.invoke(cli, ["--db-url", url, "init-db"])
        assert result.exit_code == 0
        assert "Database ready" in result.output
        assert (tmp_path / "new.db").exists()

    def test_init_db_is_repeatable(self, db_url: str, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--db-url", db_url, "init-db"])
        assert result.exit_code == 0


class TestProjects:
    def test_empty_database(self, db_url: str, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--db-url", db_url, "projects"])
        assert result.exit_code == 0
        assert "No projects." in result.output

    def test_list_projects(self, db_url: str, seeded: str, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--db-url", db_url, "projects"])
        assert result.exit_code == 0
        assert f"{seeded}  Portal" in result.output

    def test_list_projects_json(self, db_url: str, seeded: str, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--db-url", db_url, "projects", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == [{"id": seeded, "name": "Portal", "description": ""}]

    def test_db_url_from_environment(self, db_url: str, seeded: str, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["projects"], env={"FLOW_DB_URL": db_url})
        assert result.exit_code == 0
        assert "Portal" in result.output


class TestSprints:
    def test_list_sprints(self, db_url: str, seeded: str, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--db-url", db_url, "sprints", seeded])
        assert result.exit_code == 0
        assert "Sprint 1  [Pendente]" in result.output


class TestSummary:
    def test_summary_text(self, db_url: str, seeded: str, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["--db-url", db_url, "summary", seeded, "--sprint", "all", "--today", "2024-01-10"]
        )
        assert result.exit_code == 0, result.output
        assert "Portal (todas as sprints)" in result.output
        assert "Escopo Entregue: 50% do planejado" in result.output
        assert "Data Prevista: 15/01/2024 5 dias antecipado" in result.output

    def test_summary_json(self, db_url: str, seeded: str, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["--db-url", db_url, "summary", seeded, "--sprint", "all", "--today", "2024-01-10", "--json"]
        )
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["project"] == "Portal"
        assert payload["sprint"] == "all"
        assert payload["scope_delivery"] == 50
        assert payload["team_reliability"] == 100
        assert payload["project_end_info"] == {
            "end_date": "2024-01-15",
            "days_remaining": 5,
            "status": "on-time",
            "is_before_project_end_date": True,
        }
        assert payload["project_health"]["score"] == 70
        assert [m["label"] for m in payload["metrics"]][0] == "Escopo Entregue"

    def test_summary_unknown_project(self, db_url: str, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--db-url", db_url, "summary", "prj-missing"])
        assert result.exit_code == 1
        assert "Error: Project not found." in result.output

    def test_summary_rejects_bad_date(self, db_url: str, seeded: str, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--db-url", db_url, "summary", seeded, "--today", "10/01/2024"])
        assert result.exit_code == 2


class TestExport:
    def test_export_requires_a_target(self, db_url: str, seeded: str, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--db-url", db_url, "export", seeded])
        assert result.exit_code == 2
        assert "--excel" in result.output

    def test_export_excel_and_chart(self, tmp_path: Path, db_url: str, seeded: str, cli_runner: CliRunner) -> None:
        xlsx = tmp_path / "out" / "dashboard.xlsx"
        png = tmp_path / "out" / "velocity.png"
        result = cli_runner.invoke(
            cli,
            [
                "--db-url", db_url, "export", seeded,
                "--excel", str(xlsx), "--chart", str(png),
                "--sprint", "all", "--today", "2024-01-10",
            ],
        )
        assert result.exit_code == 0, result.output
        assert xlsx.exists()
        assert png.exists()
        assert f"Wrote {xlsx}" in result.output

    def test_export_chart_without_tasks_fails(self, tmp_path: Path, db_url: str, cli_runner: CliRunner) -> None:
        engine = create_db_engine(db_url)
        session = sessionmaker(bind=engine)()
        graph = build_service_graph(session)
        project_id = graph.project_service.create_project("Vazio").id
        graph.close()
        engine.dispose()

        result = cli_runner.invoke(
            cli, ["--db-url", db_url, "export", project_id, "--chart", str(tmp_path / "v.png")]
        )
        assert result.exit_code == 1
        assert "Error:" in result.output
