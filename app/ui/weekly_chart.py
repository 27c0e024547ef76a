"""
Weekly Chart - Horizontal stacked bars of tracked hours per week and task.
"""

from PySide6.QtCharts import (
    QChart, QChartView, QHorizontalStackedBarSeries, QBarSet,
    QBarCategoryAxis, QValueAxis
)
from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QPainter, QCursor
from PySide6.QtWidgets import QToolTip

from app.domain.models import format_hours
from app.services.chart_service import ChartData
from app.i18n import tr

# Same palette the exported Tim charts use
COLOR_PALETTE = [
    '#a0c63a', '#009993', '#343084', '#a42384', '#d32027',
    '#fedb00', '#17ad6d', '#6b2b85', '#bf2459', '#e97924',
    '#84be43', '#028798', '#572d85', '#ad2572', '#d94b27',
]


class WeeklyChart(QChartView):

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setRenderHint(QPainter.Antialiasing)
        self.set_data(ChartData())

    def set_data(self, data: ChartData):
        chart = QChart()
        chart.setAnimationOptions(QChart.NoAnimation)
        chart.legend().setAlignment(Qt.AlignTop)

        if not data.categories:
            chart.setTitle(tr("chart.empty"))
            self.setChart(chart)
            return

        series = QHorizontalStackedBarSeries()
        for index, task_series in enumerate(data.series):
            bar_set = QBarSet(task_series.name)
            bar_set.append(list(task_series.values))
            bar_set.setColor(QColor(COLOR_PALETTE[index % len(COLOR_PALETTE)]))
            bar_set.hovered.connect(
                lambda status, i, s=bar_set: self._show_tooltip(status, i, s)
            )
            series.append(bar_set)
        chart.addSeries(series)

        # Weeks top to bottom
        axis_y = QBarCategoryAxis()
        axis_y.append(list(data.categories))
        axis_y.setReverse(True)
        chart.addAxis(axis_y, Qt.AlignLeft)
        series.attachAxis(axis_y)

        axis_x = QValueAxis()
        axis_x.setLabelFormat("%.0f h")
        chart.addAxis(axis_x, Qt.AlignBottom)
        series.attachAxis(axis_x)

        self.setChart(chart)

    def _show_tooltip(self, status: bool, index: int, bar_set: QBarSet):
        if not status:
            QToolTip.hideText()
            return
        hours = bar_set.at(index)
        if hours > 0:
            QToolTip.showText(QCursor.pos(), f"{bar_set.label()}: {format_hours(hours)}")
