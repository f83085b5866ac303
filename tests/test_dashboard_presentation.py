from __future__ import annotations

from core.services.dashboard.calculations import compute_dashboard
from core.services.dashboard.models import SelectedSprintData
from core.services.dashboard.presentation import (
    END_DATE_LABEL,
    HEALTH_LABEL,
    RELIABILITY_LABEL,
    SCOPE_LABEL,
)
from factories import d, data, project, task

TODAY = d("2024-01-10")


def _sample():
    return data(
        task("completed", end_date="2024-01-10", created="2024-01-01", updated="2024-01-05"),
        task("todo", end_date="2024-01-15"),
    )


def _cards(calc):
    return {metric.label: metric for metric in calc.metrics}


def test_cards_come_in_display_order():
    calc = compute_dashboard(_sample(), project(start="2024-01-01", end="2024-01-20"), "all", today=TODAY)

    assert [m.label for m in calc.metrics] == [SCOPE_LABEL, RELIABILITY_LABEL, END_DATE_LABEL, HEALTH_LABEL]


def test_scope_and_reliability_cards():
    calc = compute_dashboard(_sample(), project(start="2024-01-01", end="2024-01-20"), "all", today=TODAY)
    cards = _cards(calc)

    scope = cards[SCOPE_LABEL]
    assert scope.value == "50%"
    assert scope.unit == "do planejado"
    assert scope.additional_info == "1 de 2 atividades"

    reliability = cards[RELIABILITY_LABEL]
    assert reliability.value == "50%"
    assert reliability.unit == "concluído"
    assert reliability.additional_info == "1 concluídas • 1 pendentes (2 total)"
    assert reliability.tooltip.startswith("Percentual de atividades concluídas")


def test_reliability_card_shows_completion_not_on_time_share():
    dashboard = data(
        task("completed", end_date="2024-01-05", on_time=False, updated="2024-01-08"),
        task("todo", end_date="2024-01-20", on_time=True),
        task("todo", end_date="2024-01-20", on_time=True),
        task("todo", end_date="2024-01-20", on_time=True),
    )
    calc = compute_dashboard(dashboard, project(), "all", today=TODAY)

    card = _cards(calc)[RELIABILITY_LABEL]
    assert calc.team_reliability == 75
    assert card.value == "25%"
    assert card.unit == "concluído"
    assert card.additional_info == "1 concluídas • 3 pendentes (4 total)"
    assert "Confiabilidade: 75%" in _cards(calc)[HEALTH_LABEL].additional_info


def test_scope_card_without_deliveries_shows_na():
    calc = compute_dashboard(data(task("todo")), project(), "all", today=TODAY)

    assert _cards(calc)[SCOPE_LABEL].value == "N/A"


def test_end_date_card_compares_committed_and_current_end():
    info = project(start="2024-01-01", end="2024-01-20", expected="2024-01-15")
    calc = compute_dashboard(_sample(), info, "all", today=TODAY)

    card = _cards(calc)[END_DATE_LABEL]
    assert card.value == "15/01/2024"
    assert card.unit == "5 dias antecipado"
    assert card.custom_status == "on-time"
    assert card.additional_info.startswith("Comparação")


def test_end_date_card_when_latest_task_is_late():
    dashboard = data(task("todo", end_date="2024-01-25"))
    calc = compute_dashboard(dashboard, project(end="2024-01-20", expected="2024-01-25"), "all", today=TODAY)

    card = _cards(calc)[END_DATE_LABEL]
    assert card.value == "25/01/2024"
    assert card.unit == "5 dias em atraso"
    assert card.custom_status == "overdue"


def test_end_date_card_without_committed_end():
    dashboard = data(task("todo", end_date="2024-01-10"))
    calc = compute_dashboard(dashboard, project(), "all", today=TODAY)

    card = _cards(calc)[END_DATE_LABEL]
    assert card.value == "N/A"
    assert card.unit == "no prazo"
    assert card.custom_status == "on-time"
    assert card.additional_info == "Baseado em 1 atividades com prazo"


def test_end_date_card_with_committed_end_and_no_task_deadlines():
    calc = compute_dashboard(data(task("todo")), project(end="2024-01-20"), "all", today=TODAY)

    card = _cards(calc)[END_DATE_LABEL]
    assert card.value == "20/01/2024"
    assert card.unit == "10 dias antecipado"
    assert card.additional_info == "Baseado na data fim prevista inicial do projeto"
    assert card.custom_status == "on-time"


def test_end_date_card_without_any_deadline():
    calc = compute_dashboard(data(task("todo")), project(), "all", today=TODAY)

    card = _cards(calc)[END_DATE_LABEL]
    assert card.unit == "sem prazo"
    assert card.additional_info == "Nenhuma atividade com prazo definido"
    assert card.custom_status == "overdue"


def test_end_date_card_shows_selected_sprint_period():
    dashboard = data(task("todo", sprint="Sprint 1", sprint_status="Em andamento", end_date="2024-01-12"))
    sprint = SelectedSprintData(expect_date=d("2024-01-01"), expect_end_date=d("2024-01-14"))

    calc = compute_dashboard(dashboard, project(end="2024-01-20"), "Sprint 1", sprint, today=TODAY)

    card = _cards(calc)[END_DATE_LABEL]
    assert card.value == "01/01/2024 - 14/01/2024"
    assert card.additional_info == "Período da sprint selecionada (Início - Término)"


def test_sprint_without_period_falls_back_to_project_view():
    dashboard = data(task("todo", sprint="Sprint 1", sprint_status="Em andamento", end_date="2024-01-12"))
    sprint = SelectedSprintData(expect_date=d("2024-01-01"))

    calc = compute_dashboard(dashboard, project(end="2024-01-20", expected="2024-01-12"), "Sprint 1", sprint, today=TODAY)

    assert _cards(calc)[END_DATE_LABEL].value == "12/01/2024"


def test_health_card_explains_the_formula():
    calc = compute_dashboard(_sample(), project(start="2024-01-01", end="2024-01-20"), "all", today=TODAY)

    card = _cards(calc)[HEALTH_LABEL]
    assert calc.project_health.score == 70
    assert card.value == "Moderado"
    assert card.unit == "70%"
    assert card.status == "warning"
    assert card.additional_info == "Escopo: 50% • Confiabilidade: 100% • Data Prevista: 60%"
    assert "(50% + 100% + 60%) ÷ 3 = 70%" in card.tooltip
