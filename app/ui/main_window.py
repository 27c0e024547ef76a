"""
Main Window - File picker, evaluation tabs and export controls.

Architecture Decision: Presentation Layer
The window owns no data. Every user action is forwarded to the
EvaluatorSession; the window re-renders from the session's views whenever
the session reports a change.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QLabel,
    QComboBox, QGroupBox, QFileDialog, QMessageBox, QTabWidget, QFormLayout
)
from PySide6.QtCore import Qt, Signal

from app.domain.errors import ParseError, InvalidSelectionError
from app.services.session import EvaluatorSession
from app.infra.config import Settings
from app.i18n import tr, on_language_changed, remove_language_callback
from .records_table import RecordsTable
from .weekly_chart import WeeklyChart

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """
    Single window of the evaluator.

    Features:
    - Open a Tim export
    - Evaluation tab with the weekly chart
    - Records tab with enable/disable checkboxes
    - Export of the updated Tim file and of a CSV timesheet
    """

    closed = Signal()

    def __init__(self, session: EvaluatorSession, settings: Settings,
                 loop: Optional[asyncio.AbstractEventLoop] = None, parent=None):
        super().__init__(parent)
        self.session = session
        self.settings = settings
        self.loop = loop or asyncio.get_event_loop()

        self.setWindowTitle(tr("main.title"))
        self.resize(900, 650)

        self._setup_ui()
        self.session.on_change(self.update_view)
        on_language_changed(self._on_language_change)
        self.update_view()

    def _setup_ui(self):
        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        layout = QVBoxLayout(central_widget)

        # --- Header: file selection ---
        header_layout = QHBoxLayout()
        self.open_btn = QPushButton()
        self.open_btn.clicked.connect(self._open_file)
        header_layout.addWidget(self.open_btn)

        self.status_label = QLabel()
        header_layout.addWidget(self.status_label, stretch=1)
        layout.addLayout(header_layout)

        # --- Tabs ---
        self.tabs = QTabWidget()
        self.chart_view = WeeklyChart()
        self.records_table = RecordsTable()
        # Queued: the table is rebuilt by the resulting update, not inside its own signal
        self.records_table.record_toggled.connect(self._toggle_record, Qt.QueuedConnection)
        self.tabs.addTab(self.chart_view, "")
        self.tabs.addTab(self.records_table, "")
        layout.addWidget(self.tabs, stretch=1)

        # --- Export ---
        self.export_group = QGroupBox()
        export_layout = QFormLayout()

        self.gap_destination = QComboBox()
        self.export_btn = QPushButton()
        self.export_btn.clicked.connect(self._export_json)
        gap_row = QHBoxLayout()
        gap_row.addWidget(self.gap_destination, stretch=1)
        gap_row.addWidget(self.export_btn)
        self.gap_label = QLabel()
        export_layout.addRow(self.gap_label, gap_row)

        self.csv_source = QComboBox()
        self.csv_export_btn = QPushButton()
        self.csv_export_btn.clicked.connect(self._export_csv)
        csv_row = QHBoxLayout()
        csv_row.addWidget(self.csv_source, stretch=1)
        csv_row.addWidget(self.csv_export_btn)
        self.csv_label = QLabel()
        export_layout.addRow(self.csv_label, csv_row)

        self.export_group.setLayout(export_layout)
        layout.addWidget(self.export_group)

        self.retranslate_ui()

    def retranslate_ui(self):
        self.setWindowTitle(tr("main.title"))
        self.open_btn.setText(tr("main.open_file"))
        self.tabs.setTabText(0, tr("main.show_evaluation"))
        self.tabs.setTabText(1, tr("main.show_records"))
        self.export_group.setTitle(tr("export.title"))
        self.gap_label.setText(tr("export.gap_destination"))
        self.export_btn.setText(tr("export.button"))
        self.csv_label.setText(tr("export.csv_source"))
        self.csv_export_btn.setText(tr("export.csv_button"))
        self.records_table.retranslate_ui()

    def _on_language_change(self, lang):
        self.retranslate_ui()
        self.update_view()

    # --- Rendering ---

    def update_view(self):
        """Re-render every view from the session"""
        has_records = self.session.has_records
        self.tabs.setVisible(has_records)
        self.export_group.setVisible(has_records)

        if has_records:
            gaps = sum(1 for row in self.session.rows() if row.is_gap)
            self.status_label.setText(tr("main.loaded", records=len(self.session.graph.records), gaps=gaps))
        else:
            self.status_label.setText(tr("main.no_file"))

        self.chart_view.set_data(self.session.chart())
        self.records_table.set_rows(self.session.rows())
        self._update_export_lists()

    def _update_export_lists(self):
        choices = self.session.task_choices()
        for combo in (self.gap_destination, self.csv_source):
            selected = combo.currentData()
            combo.blockSignals(True)
            combo.clear()
            for task_id, title in choices:
                combo.addItem(title, task_id)
            index = combo.findData(selected)
            if index >= 0:
                combo.setCurrentIndex(index)
            combo.blockSignals(False)

    # --- Actions ---

    def _start_directory(self) -> str:
        return self.settings.preferences.last_directory or str(Path.home())

    def _open_file(self):
        path, _ = QFileDialog.getOpenFileName(
            self, tr("main.open_file"), self._start_directory(), tr("main.file_filter")
        )
        if path:
            self.load_file(Path(path))

    def load_file(self, path: Path):
        """Import a Tim export, reporting failures to the user"""
        try:
            self.loop.run_until_complete(self.session.load_file(path))
        except ParseError as e:
            QMessageBox.critical(self, tr("error.title"), tr("error.parse", error=e))
            return
        except OSError as e:
            self.session.clear()
            QMessageBox.critical(self, tr("error.title"), tr("error.io", error=e))
            return

        self.settings.preferences.last_directory = str(path.parent)
        try:
            self.settings.save_preferences()
        except OSError as e:
            logger.warning(f"Could not save preferences: {e}")

    def _toggle_record(self, record_id: int):
        try:
            self.session.toggle_disabled(record_id)
        except InvalidSelectionError as e:
            logger.warning(f"Toggle ignored: {e}")

    def _export_json(self):
        task_id = self.gap_destination.currentData()
        if task_id is None:
            QMessageBox.warning(self, tr("error.title"), tr("error.selection", error=""))
            return

        path, _ = QFileDialog.getSaveFileName(
            self, tr("export.button"), str(Path(self._start_directory()) / "export.json"),
            tr("export.json_filter")
        )
        if not path:
            return

        try:
            written = self.session.save_json(task_id, Path(path))
        except InvalidSelectionError as e:
            QMessageBox.warning(self, tr("error.title"), tr("error.selection", error=e))
            return
        except OSError as e:
            QMessageBox.critical(self, tr("error.title"), tr("error.io", error=e))
            return
        self.statusBar().showMessage(tr("export.saved", path=written), 5000)

    def _export_csv(self):
        task_id = self.csv_source.currentData()
        if task_id is None:
            QMessageBox.warning(self, tr("error.title"), tr("error.selection", error=""))
            return

        path, _ = QFileDialog.getSaveFileName(
            self, tr("export.csv_button"), str(Path(self._start_directory()) / "export.csv"),
            tr("export.csv_filter")
        )
        if not path:
            return

        try:
            written = self.session.save_csv(task_id, Path(path))
        except InvalidSelectionError as e:
            QMessageBox.warning(self, tr("error.title"), tr("error.selection", error=e))
            return
        except OSError as e:
            QMessageBox.critical(self, tr("error.title"), tr("error.io", error=e))
            return
        self.statusBar().showMessage(tr("export.saved", path=written), 5000)

    def closeEvent(self, event):
        self.session.remove_listener(self.update_view)
        remove_language_callback(self._on_language_change)
        self.closed.emit()
        super().closeEvent(event)
