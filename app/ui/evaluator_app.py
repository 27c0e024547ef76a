"""
Evaluator Application - Main UI entry point.

Architecture Decision: Presentation Layer
This layer only handles UI logic. Business logic is delegated to the
EvaluatorSession and its services.
"""

import sys
import asyncio
import logging
from pathlib import Path
from typing import Optional
from PySide6.QtWidgets import QApplication
from PySide6.QtGui import QIcon, QPixmap, QColor
import qdarktheme

from app.services.session import EvaluatorSession
from app.infra.config import get_settings
from app.i18n import set_language
from app.utils import get_resource_path
from .main_window import MainWindow

logger = logging.getLogger(__name__)


class EvaluatorApp:
    """
    Owns the QApplication, the asyncio loop used for file reads and the
    single evaluation session.
    """

    def __init__(self, initial_file: Optional[Path] = None):
        self.app = QApplication(sys.argv)
        self.app.setWindowIcon(self._create_icon())

        self.settings = get_settings()
        set_language(self.settings.preferences.language)
        self._apply_theme(self.settings.preferences.theme)

        # Event loop for async file reads
        self.loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self.loop)

        self.session = EvaluatorSession.from_settings(self.settings)
        self.main_window = MainWindow(self.session, self.settings, loop=self.loop)
        self.main_window.show()

        if initial_file is not None:
            self.main_window.load_file(initial_file)

    def _create_icon(self):
        """Create the window icon from assets"""
        icon_path = get_resource_path("app/assets/icon.png")
        if icon_path.exists():
            return QIcon(str(icon_path))

        # Fallback if icon not found
        pixmap = QPixmap(16, 16)
        pixmap.fill(QColor("#a0c63a"))
        return QIcon(pixmap)

    def _apply_theme(self, theme: str):
        """Apply the specified theme using qdarktheme.

        Args:
            theme: 'light', 'dark', or 'auto' (follows system)
        """
        if theme not in ("auto", "dark", "light"):
            logger.warning(f"Unknown theme {theme!r}, using light")
            theme = "light"
        qdarktheme.setup_theme(theme)

    def run(self) -> int:
        try:
            return self.app.exec()
        finally:
            self.loop.close()
