"""Services layer - Business logic"""

from .import_service import ImportService
from .reconcile_service import ReconcileService
from .export_service import ExportService
from .chart_service import ChartService
from .session import EvaluatorSession

__all__ = ["ImportService", "ReconcileService", "ExportService", "ChartService", "EvaluatorSession"]
