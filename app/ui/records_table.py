"""
Records Table - Editable list of all records, gaps included.

The only editable cell is the "enabled" checkbox; toggling it emits
`record_toggled` with the record id and leaves the actual change to the
session.
"""

from typing import List
from PySide6.QtWidgets import QTableWidget, QTableWidgetItem, QHeaderView, QAbstractItemView
from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QColor

from app.services.chart_service import RecordRow
from app.i18n import tr

ENABLED_COLUMN = 4


class RecordsTable(QTableWidget):

    record_toggled = Signal(int)  # record_id

    def __init__(self, parent=None):
        super().__init__(0, 5, parent)
        self.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.verticalHeader().setVisible(False)
        self.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self.horizontalHeader().setSectionResizeMode(ENABLED_COLUMN, QHeaderView.ResizeToContents)
        self.itemChanged.connect(self._on_item_changed)
        self.retranslate_ui()

    def retranslate_ui(self):
        self.setHorizontalHeaderLabels([
            tr("records.start"),
            tr("records.end"),
            tr("records.duration"),
            tr("records.task"),
            tr("records.enabled"),
        ])

    def set_rows(self, rows: List[RecordRow]):
        """Replace the table content. Does not emit record_toggled."""
        self.blockSignals(True)
        try:
            self.setRowCount(len(rows))
            muted = QColor("#9e9e9e")

            for row, record in enumerate(rows):
                cells = [record.start_str, record.end_str, record.duration_str, record.task_title]
                for column, text in enumerate(cells):
                    item = QTableWidgetItem(text)
                    if record.disabled:
                        item.setForeground(muted)
                    if record.is_gap:
                        font = item.font()
                        font.setItalic(True)
                        item.setFont(font)
                    self.setItem(row, column, item)

                check = QTableWidgetItem()
                check.setFlags(Qt.ItemIsUserCheckable | Qt.ItemIsEnabled)
                check.setCheckState(Qt.Unchecked if record.disabled else Qt.Checked)
                check.setData(Qt.UserRole, record.record_id)
                self.setItem(row, ENABLED_COLUMN, check)
        finally:
            self.blockSignals(False)

    def _on_item_changed(self, item: QTableWidgetItem):
        if item.column() != ENABLED_COLUMN:
            return
        record_id = item.data(Qt.UserRole)
        if record_id is not None:
            self.record_toggled.emit(int(record_id))
