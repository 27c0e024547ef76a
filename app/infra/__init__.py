"""Infrastructure layer - Input validation and configuration"""

from .config import Settings, get_settings, reload_settings
from .schema import ExportDocument, parse_document

__all__ = ["Settings", "get_settings", "reload_settings", "ExportDocument", "parse_document"]
