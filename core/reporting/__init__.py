from core.reporting.api import (
    build_report_context,
    generate_excel_report,
    generate_pdf_report,
    generate_velocity_png,
)

__all__ = [
    "build_report_context",
    "generate_excel_report",
    "generate_pdf_report",
    "generate_velocity_png",
]
