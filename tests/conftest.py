# tests/conftest.py
from datetime import date, datetime, timezone
from types import SimpleNamespace

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.events.domain_events import DomainEvents
from core.models import SprintStatus
from core.services.dashboard.calculations import clear_dashboard_cache
from infra.db.base import Base
import infra.db.models  # noqa: F401
from infra.services import build_service_graph


class FakeClock:
    """Settable clock shared by the services under test."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def today(self) -> date:
        return self.now.date()

    def set(self, year: int, month: int, day: int, hour: int = 12) -> None:
        self.now = datetime(year, month, day, hour, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def _isolated_data_dir(tmp_path, monkeypatch):
    # Logs and support events go to a throwaway directory.
    monkeypatch.setenv("FLOW_DATA_DIR", str(tmp_path / "flow-data"))
    monkeypatch.delenv("FLOW_DB_URL", raising=False)
    clear_dashboard_cache()
    yield
    clear_dashboard_cache()


@pytest.fixture
def session():
    # separate in-memory DB for tests
    engine = create_engine("sqlite:///:memory:", future=True)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, future=True)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 1, 10, 12, tzinfo=timezone.utc))


@pytest.fixture
def events():
    return DomainEvents()


@pytest.fixture
def services(session, events, clock):
    graph = build_service_graph(session, events, today=clock.today, now=clock)
    try:
        yield graph.as_dict()
    finally:
        graph.dashboard_service.close()


@pytest.fixture
def portal(services):
    """
    One project with two sprints and four tasks:

    - "Login" in Sprint 1 (in progress), due 2024-01-12
    - "Relatórios" without sprint, due 2024-01-20
    - "Exportar" in the backlog, due 2024-02-10
    - "Integração" in Sprint 2 (pending), due 2024-01-25
    """
    ps = services["project_service"]
    ss = services["sprint_service"]
    ts = services["task_service"]

    project = ps.create_project(
        "Portal",
        "Portal do cliente",
        start_date=date(2024, 1, 1),
        end_date=date(2024, 1, 31),
    )
    sprint1 = ss.create_sprint(
        project.id, "Sprint 1", date(2024, 1, 1), date(2024, 1, 14), status=SprintStatus.IN_PROGRESS
    )
    sprint2 = ss.create_sprint(project.id, "Sprint 2", date(2024, 1, 15), date(2024, 1, 28))

    login = ts.create_task(
        project.id, "Login", estimated_hours=8, end_date=date(2024, 1, 12), sprint_id=sprint1.id, assignee="Ana"
    )
    reports = ts.create_task(project.id, "Relatórios", estimated_hours=4, end_date=date(2024, 1, 20))
    export = ts.create_task(project.id, "Exportar", end_date=date(2024, 2, 10), is_backlog=True)
    integration = ts.create_task(project.id, "Integração", end_date=date(2024, 1, 25), sprint_id=sprint2.id)

    return SimpleNamespace(
        project=project,
        sprint1=sprint1,
        sprint2=sprint2,
        login=login,
        reports=reports,
        export=export,
        integration=integration,
    )
