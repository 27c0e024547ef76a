"""
Export Service - Serializes the graph back to Tim's format and to timesheet CSV.

Architecture Decision: Why two independent exports?
The structured export is meant to be re-imported into Tim, so it only
carries enabled records. The CSV export is a flat timesheet for one task and
lists every record of that task, enabled or not.
"""

import csv
import io
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from app.domain.models import TimeGraph
from app.utils import to_epoch_ms

logger = logging.getLogger(__name__)


class ExportService:
    """
    Read-only serializer over a TimeGraph.
    """

    def __init__(self, csv_name: str = "Doe, John", csv_email: str = "john.doe@example.com"):
        """
        Args:
            csv_name: Name written into every CSV row
            csv_email: Email written into every CSV row
        """
        self.csv_name = csv_name
        self.csv_email = csv_email

    def to_document(self, graph: TimeGraph, now: Optional[datetime] = None) -> Dict[str, Any]:
        """
        Rebuild the nested Tim export structure.

        Disabled records are left out entirely.

        Args:
            graph: Graph to serialize
            now: Timestamp written to every `updatedAt` (defaults to the current time)
        """
        updated_at = to_epoch_ms(now or datetime.now().astimezone())

        result: Dict[str, Any] = {
            "tasks": {},
            "groups": {},
            "nodes": [],
        }

        for group in graph.groups.values():
            result["groups"][group.id] = {
                "id": group.id,
                "title": group.title,
                "updatedAt": updated_at,
                "createdAt": to_epoch_ms(group.created_at),
            }
            result["nodes"].append({"id": group.id})

        for task in graph.tasks.values():
            result["tasks"][task.id] = {
                "records": [
                    {"start": to_epoch_ms(record.start), "end": to_epoch_ms(record.end)}
                    for record in graph.records_of(task)
                    if not record.disabled
                ],
                "id": task.id,
                "title": task.title,
                "updatedAt": updated_at,
                "createdAt": to_epoch_ms(task.created_at),
            }
            node = {"id": task.id}
            if task.group_id is not None:
                node["parent"] = task.group_id
            result["nodes"].append(node)

        return result

    def to_json(self, graph: TimeGraph, now: Optional[datetime] = None) -> str:
        return json.dumps(self.to_document(graph, now), indent=2, ensure_ascii=False)

    def csv_rows(self, graph: TimeGraph, task_id: Optional[str]) -> List[List[str]]:
        """
        Build timesheet rows for one task, one row per record (disabled included).

        Raises:
            InvalidSelectionError: if the task does not exist
        """
        task = graph.get_task(task_id)
        rows = []
        for record in graph.records_of(task):
            rows.append([
                self.csv_name,
                self.csv_email,
                "",
                record.start.strftime("%d/%m/%Y"),
                record.start.strftime("%H:%M"),
                record.end.strftime("%H:%M"),
                "",
                "0",
            ])
        return rows

    def to_csv(self, graph: TimeGraph, task_id: Optional[str]) -> str:
        """Render the rows fully quoted, comma-separated, one line per record"""
        output = io.StringIO()
        writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator='\n')
        writer.writerows(self.csv_rows(graph, task_id))
        return output.getvalue().rstrip('\n')

    def write_json(self, graph: TimeGraph, output_file: Path, now: Optional[datetime] = None) -> Path:
        content = self.to_json(graph, now)
        self._write(output_file, content)
        logger.info(f"Tim export written: {output_file}")
        return output_file

    def write_csv(self, graph: TimeGraph, task_id: Optional[str], output_file: Path) -> Path:
        content = self.to_csv(graph, task_id)
        self._write(output_file, content)
        logger.info(f"CSV export written: {output_file}")
        return output_file

    @staticmethod
    def _write(output_file: Path, content: str) -> None:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        with open(output_file, 'w', encoding='utf-8', newline='') as f:
            f.write(content)
