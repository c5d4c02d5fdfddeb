from .duplicate_service import DuplicateService
from .report_service import ReportBuilder
from .export_service import ExportService

__all__ = ["DuplicateService", "ReportBuilder", "ExportService"]
