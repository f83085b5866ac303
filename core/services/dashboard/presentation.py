from __future__ import annotations

from typing import List, Optional, Sequence

from core.models import TaskStatus
from core.services.dashboard.dates import format_br_date, round_half_up
from core.services.dashboard.models import (
    ALL_SPRINTS,
    DashboardData,
    EndDateStatus,
    Metric,
    ProjectEndInfo,
    ProjectHealthInfo,
    ProjectInfo,
    ScheduleTaskInfo,
    SelectedSprintData,
)

SCOPE_LABEL = "Escopo Entregue"
RELIABILITY_LABEL = "Confiabilidade"
END_DATE_LABEL = "Data Prevista"
HEALTH_LABEL = "Saúde do Projeto"

_STATUS_PARTS = (
    (TaskStatus.COMPLETED, "concluídas"),
    (TaskStatus.IN_PROGRESS, "em andamento"),
    (TaskStatus.BLOCKED, "bloqueadas"),
    (TaskStatus.TODO, "pendentes"),
)


def _count_status(tasks: Sequence[ScheduleTaskInfo], status: TaskStatus) -> int:
    return sum(1 for task in tasks if task.status == status.value)


def _sprint_period(
    sprint_filter: Optional[str],
    selected_sprint: Optional[SelectedSprintData],
) -> Optional[SelectedSprintData]:
    if not sprint_filter or sprint_filter == ALL_SPRINTS:
        return None
    if selected_sprint is None or not selected_sprint.has_period:
        return None
    return selected_sprint


def _days_unit(end_info: ProjectEndInfo) -> str:
    days = end_info.days_remaining
    if days is None:
        return "sem prazo"
    if days == 0:
        return "no prazo"
    if days > 0:
        return f"{days} dias antecipado"
    return f"{abs(days)} dias em atraso"


def _scope_metric(active: Sequence[ScheduleTaskInfo], scope: int) -> Metric:
    completed = _count_status(active, TaskStatus.COMPLETED)
    return Metric(
        label=SCOPE_LABEL,
        value=f"{scope}%" if scope > 0 else "N/A",
        unit="do planejado",
        additional_info=f"{completed} de {len(active)} atividades",
        tooltip=(
            "Quantas atividades foram concluídas em relação ao total de atividades ativas "
            "(filtradas por sprint quando aplicável)."
        ),
    )


def _reliability_metric(active: Sequence[ScheduleTaskInfo]) -> Metric:
    completion = round_half_up(_count_status(active, TaskStatus.COMPLETED) / len(active) * 100)
    parts = []
    for status, noun in _STATUS_PARTS:
        count = _count_status(active, status)
        if count > 0:
            parts.append(f"{count} {noun}")
    breakdown = " • ".join(parts)
    return Metric(
        label=RELIABILITY_LABEL,
        value=f"{completion}%",
        unit="concluído",
        additional_info=f"{breakdown} ({len(active)} total)".strip(),
        tooltip=(
            "Percentual de atividades concluídas em relação ao total de atividades ativas "
            "(não incluindo backlog). Mostra o progresso real de conclusão das atividades do projeto."
        ),
    )


def _end_date_metric(
    active: Sequence[ScheduleTaskInfo],
    project: Optional[ProjectInfo],
    end_info: ProjectEndInfo,
    sprint_period: Optional[SelectedSprintData],
) -> Metric:
    project_end = project.end_date if project else None
    tasks_with_deadline = sum(1 for task in active if task.end_date)

    if sprint_period is not None:
        value = f"{format_br_date(sprint_period.expect_date)} - {format_br_date(sprint_period.expect_end_date)}"
        additional_info = "Período da sprint selecionada (Início - Término)"
        tooltip = "Mostra o período de duração da sprint selecionada (data de início e término previstas)."
    else:
        if project_end:
            value = format_br_date(project.actual_expected_end_date or end_info.end_date)
        else:
            value = "N/A"

        if project_end and tasks_with_deadline:
            additional_info = "Comparação: Data Fim Prevista (Inicial) vs Data Fim Prevista (Atual)"
            tooltip = (
                "Comparação entre Data Fim Prevista (Inicial) e Data Fim Prevista (Atual) calculada "
                "das atividades. Verde = projeto antecipado/no prazo, Vermelho = projeto em atraso."
            )
        elif project_end:
            additional_info = "Baseado na data fim prevista inicial do projeto"
            tooltip = "Data prevista de finalização inicial do projeto comparada com hoje."
        else:
            additional_info = (
                f"Baseado em {tasks_with_deadline} atividades com prazo"
                if end_info.end_date
                else "Nenhuma atividade com prazo definido"
            )
            tooltip = "Data prevista de finalização baseada na atividade com maior data de término."

    if not project_end:
        on_time = end_info.status == EndDateStatus.ON_TIME
    else:
        on_time = end_info.is_before_project_end_date

    return Metric(
        label=END_DATE_LABEL,
        value=value,
        unit=_days_unit(end_info),
        additional_info=additional_info,
        tooltip=tooltip,
        custom_status="on-time" if on_time else "overdue",
    )


def _health_metric(scope: int, reliability: int, health: ProjectHealthInfo) -> Metric:
    date_score = health.date_prevista
    return Metric(
        label=HEALTH_LABEL,
        value=health.value,
        unit=f"{health.score}%",
        additional_info=f"Escopo: {scope}% • Confiabilidade: {reliability}% • Data Prevista: {date_score}%",
        tooltip=(
            "Fórmula: Média simples dos 3 indicadores "
            f"({scope}% + {reliability}% + {date_score}%) ÷ 3 = {health.score}% de saúde do projeto"
        ),
        status=health.status.value,
    )


def build_metrics(
    data: Optional[DashboardData],
    active: Sequence[ScheduleTaskInfo],
    project: Optional[ProjectInfo],
    *,
    sprint_filter: Optional[str],
    selected_sprint: Optional[SelectedSprintData],
    scope: int,
    reliability: int,
    health: ProjectHealthInfo,
    end_info: ProjectEndInfo,
) -> List[Metric]:
    """The four dashboard cards, in display order. Empty without active tasks."""
    if data is None or not active:
        return []
    return [
        _scope_metric(active, scope),
        _reliability_metric(active),
        _end_date_metric(active, project, end_info, _sprint_period(sprint_filter, selected_sprint)),
        _health_metric(scope, reliability, health),
    ]


__all__ = [
    "SCOPE_LABEL",
    "RELIABILITY_LABEL",
    "END_DATE_LABEL",
    "HEALTH_LABEL",
    "build_metrics",
]
