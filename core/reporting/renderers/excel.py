from pathlib import Path
from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side

from core.reporting.contexts import ExcelReportContext


class ExcelReportRenderer:
    def render(self, ctx: ExcelReportContext, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb = Workbook()

        header_font = Font(bold=True)
        title_font = Font(bold=True, size=14)
        center = Alignment(horizontal="center")
        thin_border = Border(
            left=Side(style="thin"),
            right=Side(style="thin"),
            top=Side(style="thin"),
            bottom=Side(style="thin"),
        )
        header_fill = PatternFill("solid", fgColor="DDDDDD")
        calc = ctx.calculations

        def header_row(sheet, headers):
            for col_index, h in enumerate(headers, start=1):
                cell = sheet.cell(row=1, column=col_index, value=h)
                cell.font = header_font
                cell.alignment = center
                cell.fill = header_fill
                cell.border = thin_border

        # ---------------- Metrics ----------------
        ws = wb.active
        ws.title = "Metrics"

        ws["A1"] = f"Dashboard - {ctx.project_name}"
        ws["A1"].font = title_font
        ws["A2"] = f"{ctx.scope_label} • {ctx.as_of.isoformat()}"

        row = 4

        def kv(key, value):
            nonlocal row
            ws[f"A{row}"] = key
            ws[f"B{row}"] = value
            ws[f"A{row}"].font = header_font
            ws[f"A{row}"].border = thin_border
            ws[f"B{row}"].border = thin_border
            row += 1

        for metric in calc.metrics:
            kv(metric.label, f"{metric.value} {metric.unit}".strip())

        row += 1
        kv("Escopo entregue (%)", calc.scope_delivery)
        kv("Confiabilidade (%)", calc.team_reliability)
        kv("Lead time médio (dias)", calc.average_lead_time)
        kv("Saúde (score)", calc.project_health.score)
        end_info = calc.project_end_info
        kv("Data prevista", end_info.end_date.isoformat() if end_info.end_date else "")
        kv("Dias de folga", "" if end_info.days_remaining is None else end_info.days_remaining)

        row += 1
        kv("Atividades", ctx.metrics.total_tasks)
        kv("Concluídas", ctx.metrics.completed_tasks)
        kv("Em atraso", ctx.metrics.overdue_tasks)
        kv("Horas estimadas", ctx.metrics.total_estimated_hours)
        kv("Horas realizadas", ctx.metrics.total_actual_hours)

        ws.column_dimensions["A"].width = 30
        ws.column_dimensions["B"].width = 30

        # ---------------- Velocity ----------------
        ws_vel = wb.create_sheet("Velocity")
        header_row(ws_vel, ["Cronograma", "Criadas", "Concluídas", "Estado"])
        for r, point in enumerate(calc.velocity_data, start=2):
            for c, v in enumerate([point.schedule, point.created, point.completed, point.state], 1):
                ws_vel.cell(r, c, v).border = thin_border
        ws_vel.column_dimensions["A"].width = 30
        for col_letter in ("B", "C", "D"):
            ws_vel.column_dimensions[col_letter].width = 14

        # ---------------- Tasks ----------------
        ws_tasks = wb.create_sheet("Tasks")
        header_row(ws_tasks, ["ID", "Título", "Status", "Sprint", "Início", "Término", "Estimadas", "Realizadas", "Backlog", "No prazo"])
        for row_index, t in enumerate(ctx.tasks, start=2):
            values = [
                str(t.id),
                t.title,
                t.status,
                t.sprint or "",
                t.start_date.isoformat() if t.start_date else "",
                t.end_date.isoformat() if t.end_date else "",
                t.estimated_hours,
                t.actual_hours,
                "Sim" if t.is_backlog else "Não",
                "" if t.on_time is None else ("Sim" if t.on_time else "Não"),
            ]
            for c, v in enumerate(values, 1):
                ws_tasks.cell(row=row_index, column=c, value=v).border = thin_border

        ws_tasks.column_dimensions["A"].width = 20
        ws_tasks.column_dimensions["B"].width = 36
        for col_letter in ("C", "D", "E", "F", "G", "H", "I", "J"):
            ws_tasks.column_dimensions[col_letter].width = 14

        wb.save(output_path)
        return output_path
