from core.reporting.renderers.excel import ExcelReportRenderer
from core.reporting.renderers.pdf import PdfReportRenderer
from core.reporting.renderers.velocity import VelocityPngRenderer

__all__ = ["ExcelReportRenderer", "PdfReportRenderer", "VelocityPngRenderer"]
