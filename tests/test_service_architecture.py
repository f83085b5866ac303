from core.services import DashboardService, ProjectService, SprintService, TaskService
from infra.services import ServiceGraph, build_service_dict, build_service_graph


def test_service_graph_builder_wires_all_services(session):
    graph = build_service_graph(session)

    assert isinstance(graph, ServiceGraph)
    assert isinstance(graph.project_service, ProjectService)
    assert isinstance(graph.sprint_service, SprintService)
    assert isinstance(graph.task_service, TaskService)
    assert isinstance(graph.dashboard_service, DashboardService)
    graph.dashboard_service.close()


def test_service_dict_exposes_graph_members(session):
    services = build_service_dict(session)

    assert set(services) == {
        "session",
        "events",
        "project_service",
        "sprint_service",
        "task_service",
        "dashboard_service",
    }
    assert services["session"] is session
    services["dashboard_service"].close()


def test_each_graph_gets_its_own_event_bus(session):
    first = build_service_graph(session)
    second = build_service_graph(session)

    assert first.events is not second.events
    assert first.events.tasks_changed.subscriber_count() == 1
    first.dashboard_service.close()
    second.dashboard_service.close()
