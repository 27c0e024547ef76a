"""
Chart Service - Builds the read-only views the UI renders.

The weekly chart stacks the tracked hours of every task per calendar week.
The table view exposes every record with its display strings.
"""

from datetime import datetime
from typing import List, Tuple
from pydantic import BaseModel, ConfigDict, Field

from app.domain.models import TimeGraph


def week_label(moment: datetime) -> str:
    """Label of the ISO week containing `moment`, e.g. 'KW 2026-09'"""
    year, week, _ = moment.isocalendar()
    return f"KW {year}-{week:02d}"


class ChartSeries(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    values: Tuple[float, ...] = ()


class ChartData(BaseModel):
    """Categories are week labels; each series holds one value per category."""
    model_config = ConfigDict(frozen=True)

    categories: Tuple[str, ...] = ()
    series: Tuple[ChartSeries, ...] = ()


class RecordRow(BaseModel):
    """One line of the records table."""
    model_config = ConfigDict(frozen=True)

    record_id: int
    start_str: str
    end_str: str
    duration_str: str
    task_title: str = "-"
    disabled: bool = False
    is_gap: bool = Field(default=False, description="Record has no task yet")


class ChartService:
    """Stateless builders for chart and table views."""

    @staticmethod
    def weekly_series(graph: TimeGraph) -> ChartData:
        """
        Sum enabled task hours per week and task.

        A new category opens whenever the week label changes while walking
        the time-sorted record list. Disabled records and gaps are skipped.
        """
        task_ids = list(graph.tasks)
        index_of = {task_id: i for i, task_id in enumerate(task_ids)}
        categories: List[str] = []
        values: List[List[float]] = [[] for _ in task_ids]
        last_week = ""

        for record in graph.records:
            if record.disabled or record.is_gap:
                continue

            label = week_label(record.start)
            if label != last_week:
                categories.append(label)
                for column in values:
                    column.append(0.0)
                last_week = label

            column = values[index_of[record.task_id]]
            column[-1] += record.duration_hours

        return ChartData(
            categories=tuple(categories),
            series=tuple(
                ChartSeries(name=graph.tasks[task_id].title, values=tuple(values[i]))
                for i, task_id in enumerate(task_ids)
            ),
        )

    @staticmethod
    def table_rows(graph: TimeGraph) -> List[RecordRow]:
        rows = []
        for record in graph.records:
            task = graph.tasks.get(record.task_id) if record.task_id else None
            rows.append(RecordRow(
                record_id=record.id,
                start_str=record.start_str,
                end_str=record.end_str,
                duration_str=record.duration_str,
                task_title=task.title if task else "-",
                disabled=record.disabled,
                is_gap=record.is_gap,
            ))
        return rows

    @staticmethod
    def task_choices(graph: TimeGraph) -> List[Tuple[str, str]]:
        """(task id, title) pairs for the export selectors"""
        return [(task.id, task.title) for task in graph.tasks.values()]
