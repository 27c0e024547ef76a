"""
Reconcile Service - Reclassifies idle gap time into a task.
"""

import logging
from typing import List, Optional

from app.domain.models import Record, TimeGraph

logger = logging.getLogger(__name__)


class ReconcileService:
    """
    Mutates the record set of a TimeGraph.

    Both operations work in place; views for rendering are rebuilt from the
    graph afterwards.
    """

    def __init__(self, graph: TimeGraph):
        self.graph = graph

    def toggle_disabled(self, record_id: int) -> Record:
        """
        Flip the disabled flag of one record. Nothing else changes.

        Raises:
            InvalidSelectionError: if the record does not exist
        """
        record = self.graph.get_record(record_id)
        record.disabled = not record.disabled
        return record

    def enabled_gaps(self) -> List[Record]:
        return [record for record in self.graph.gaps() if not record.disabled]

    def assign_gaps_to_task(self, task_id: Optional[str]) -> List[Record]:
        """
        Hand every enabled gap over to a task.

        The assignment is permanent: an assigned gap is an ordinary task
        record from then on. Disabled gaps stay task-less.

        Args:
            task_id: Destination task

        Returns:
            The records that were assigned

        Raises:
            InvalidSelectionError: if no task is selected or it does not exist
        """
        task = self.graph.get_task(task_id)
        gaps = self.enabled_gaps()

        for gap in gaps:
            gap.task_id = task.id
            task.record_ids.append(gap.id)

        if gaps:
            self.graph.sort_records()
            logger.info(f"Assigned {len(gaps)} gaps to task {task.id!r} ({task.title})")

        return gaps
