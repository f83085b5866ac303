from pathlib import Path
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib import colors
from reportlab.platypus import (
    SimpleDocTemplate,
    Paragraph,
    Spacer,
    Table,
    TableStyle,
    Image,
)
from reportlab.lib.styles import getSampleStyleSheet

from core.reporting.contexts import PdfReportContext
from core.services.dashboard.dates import format_br_date

_STATUS_COLORS = {
    "healthy": "#3f9e5a",
    "warning": "#d9a400",
    "critical": "#c0392b",
}


class PdfReportRenderer:
    def render(self, ctx: PdfReportContext, output_path: Path) -> Path:
        doc = SimpleDocTemplate(
            str(output_path),
            pagesize=landscape(A4),
            leftMargin=40,
            rightMargin=40,
            topMargin=40,
            bottomMargin=40,
        )

        styles = getSampleStyleSheet()
        story = []
        calc = ctx.calculations

        # ---------------- Title ----------------
        story.append(Paragraph(f"Dashboard - {ctx.project_name}", styles["Title"]))
        story.append(Paragraph(f"{ctx.scope_label} • {format_br_date(ctx.as_of)}", styles["Normal"]))
        story.append(Spacer(1, 12))

        # ---------------- Metrics ----------------
        if calc.metrics:
            data = [["Indicador", "Valor", "Detalhe"]]
            for metric in calc.metrics:
                data.append([
                    metric.label,
                    f"{metric.value} {metric.unit}".strip(),
                    Paragraph(metric.additional_info, styles["BodyText"]),
                ])
            table = Table(data, colWidths=[160, 200, 380])
            table.setStyle(TableStyle([
                ("BACKGROUND", (0,0), (-1,0), colors.lightgrey),
                ("FONTNAME", (0,0), (-1,0), "Helvetica-Bold"),
                ("GRID", (0,0), (-1,-1), 0.5, colors.grey),
                ("VALIGN", (0,0), (-1,-1), "MIDDLE"),
            ]))
            story.append(table)
        else:
            story.append(Paragraph("Nenhuma atividade ativa para os filtros selecionados.", styles["Normal"]))
        story.append(Spacer(1, 16))

        # ---------------- Summary ----------------
        health = calc.project_health
        health_color = _STATUS_COLORS.get(health.status.value, "#000000")
        end_info = calc.project_end_info
        info = [
            f'Saúde do projeto: <font color="{health_color}">{health.value}</font> ({health.score}%)',
            f"Data prevista: {format_br_date(end_info.end_date)}",
            f"Lead time médio: {calc.average_lead_time} dias",
            f"Atividades em atraso: {ctx.metrics.overdue_tasks}",
        ]
        for line in info:
            story.append(Paragraph(line, styles["Normal"]))
        story.append(Spacer(1, 16))

        # ---------------- Velocity ----------------
        if ctx.velocity_png_path:
            story.append(Paragraph("Velocidade", styles["Heading2"]))
            story.append(Spacer(1, 8))
            img = Image(ctx.velocity_png_path)
            img._restrictSize(720, 280)
            story.append(img)

        doc.build(story)
        return output_path
