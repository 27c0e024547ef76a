"""
Import Service - Builds the in-memory graph from a Tim export.

Architecture Decision: Two-step import
The raw text is validated into an ExportDocument first (app.infra.schema).
Only a valid document is turned into domain entities, so a failed import
never leaves a half-built graph behind.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional, Union

from app.domain.errors import ParseError
from app.domain.models import Group, Task, Record, TimeGraph
from app.infra.schema import ExportDocument, parse_document
from app.utils import from_epoch_ms

logger = logging.getLogger(__name__)

DEFAULT_MIN_GAP = timedelta(minutes=5)


class ImportService:
    """
    Parses Tim exports and synthesizes gap records for idle time.
    """

    def __init__(self, min_gap: timedelta = DEFAULT_MIN_GAP):
        """
        Args:
            min_gap: Silence between two records must exceed this to become a gap

        Raises:
            ValueError: if min_gap is negative
        """
        if min_gap < timedelta(0):
            raise ValueError(f"min_gap must not be negative, got {min_gap}")
        self.min_gap = min_gap

    def parse(self, raw: Union[str, bytes]) -> TimeGraph:
        """
        Parse raw JSON text into a TimeGraph.

        Raises:
            ParseError: if the text is not a valid Tim export
        """
        document = parse_document(raw)
        try:
            graph = self.build_graph(document)
        except (ValueError, OverflowError, OSError) as e:
            raise ParseError(f"Invalid Tim export: {e}") from e
        logger.info(
            f"Imported {len(graph.groups)} groups, {len(graph.tasks)} tasks, "
            f"{len(graph.records)} records ({sum(1 for _ in graph.gaps())} gaps)"
        )
        return graph

    def build_graph(self, document: ExportDocument) -> TimeGraph:
        """Turn a validated document into groups, tasks and a sorted record list"""
        graph = TimeGraph()
        now = datetime.now().astimezone()

        for group_id, group_src in document.groups.items():
            graph.groups[group_id] = Group(
                id=group_id,
                title=group_src.title,
                created_at=self._timestamp(group_src.created_at, now),
            )

        parents = document.parent_of()
        next_id = 1

        for task_id, task_src in document.tasks.items():
            task = Task(
                id=task_id,
                title=task_src.title,
                created_at=self._timestamp(task_src.created_at, now),
            )

            for record_src in task_src.records:
                record = Record(
                    id=next_id,
                    start=from_epoch_ms(record_src.start),
                    end=from_epoch_ms(record_src.end),
                    task_id=task_id,
                )
                next_id += 1
                task.record_ids.append(record.id)
                graph.records.append(record)

            graph.tasks[task_id] = task

            parent_id = parents.get(task_id)
            if parent_id:
                group = graph.get_group(parent_id)
                if group is None:
                    logger.warning(f"Task {task_id!r} references unknown group {parent_id!r}, importing it without group")
                else:
                    task.group_id = group.id
                    group.task_ids.append(task_id)

        graph.sort_records()

        gaps = self.find_gaps(graph.records, first_id=next_id)
        graph.records.extend(gaps)
        graph.sort_records()

        return graph

    def find_gaps(self, records: List[Record], first_id: int = 1) -> List[Record]:
        """
        Find idle time between consecutive records.

        `records` must already be sorted by start. The walk uses the
        adjacency of the given list only: gaps are never merged and never
        influence each other.
        """
        gaps: List[Record] = []
        previous: Optional[Record] = None

        for record in records:
            if previous is not None and previous.end + self.min_gap < record.start:
                gaps.append(Record(
                    id=first_id + len(gaps),
                    start=previous.end,
                    end=record.start,
                    disabled=True,
                ))
            previous = record

        return gaps

    @staticmethod
    def _timestamp(value: Optional[int], default: datetime) -> datetime:
        if value is None:
            return default
        return from_epoch_ms(value)
