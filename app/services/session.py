"""
Evaluator Session - The single owner of the imported graph.

Architecture Decision: Explicit session object
All state of one evaluation lives here and is only changed through the
methods below (import, toggle, assign, export). The UI reads immutable
views (rows, chart, task choices) and re-renders when notified.

File reads are asynchronous. Every import request gets a generation number;
a read that completes after a newer request was started is discarded.
"""

import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from app.domain.models import Record, TimeGraph
from app.domain.errors import ParseError
from app.infra.config import Settings
from .import_service import ImportService
from .reconcile_service import ReconcileService
from .export_service import ExportService
from .chart_service import ChartService, ChartData, RecordRow

logger = logging.getLogger(__name__)


class EvaluatorSession:
    """
    Owns the current TimeGraph and dispatches user actions to the services.
    """

    def __init__(self, import_service: Optional[ImportService] = None,
                 export_service: Optional[ExportService] = None):
        self.import_service = import_service or ImportService()
        self.export_service = export_service or ExportService()
        self.graph = TimeGraph()
        self.source_path: Optional[Path] = None
        self._generation = 0
        self._listeners: List[Callable[[], None]] = []

    @classmethod
    def from_settings(cls, settings: Settings) -> 'EvaluatorSession':
        """Create a session configured from application settings"""
        prefs = settings.preferences
        return cls(
            import_service=ImportService(min_gap=settings.min_gap),
            export_service=ExportService(csv_name=prefs.csv_name, csv_email=prefs.csv_email),
        )

    # --- Observers ---

    def on_change(self, callback: Callable[[], None]) -> None:
        """Register a callback invoked after every state change"""
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback()

    # --- Import ---

    @property
    def generation(self) -> int:
        return self._generation

    def clear(self) -> None:
        self.graph = TimeGraph()
        self.source_path = None
        self._notify()

    def begin_import(self) -> int:
        """Clear all state and start a new import. Returns its generation."""
        self._generation += 1
        self.clear()
        return self._generation

    def complete_import(self, generation: int, raw: Union[str, bytes],
                        source_path: Optional[Path] = None) -> bool:
        """
        Finish an import started with begin_import().

        Returns:
            False if a newer import has started since; the data is dropped

        Raises:
            ParseError: if the data is not a valid Tim export (state stays empty)
        """
        if generation != self._generation:
            logger.info(f"Discarding stale import (generation {generation}, current {self._generation})")
            return False

        try:
            graph = self.import_service.parse(raw)
        except ParseError:
            self.clear()
            raise

        self.graph = graph
        self.source_path = source_path
        self._notify()
        return True

    def import_text(self, raw: Union[str, bytes]) -> None:
        """Synchronous import of already loaded text"""
        self.complete_import(self.begin_import(), raw)

    async def load_file(self, path: Path) -> bool:
        """
        Read a Tim export from disk and import it.

        The read runs in the default executor. If another load starts while
        this one is reading, this one's result (or read error) is discarded.
        """
        generation = self.begin_import()
        loop = asyncio.get_running_loop()
        try:
            raw = await loop.run_in_executor(None, Path(path).read_bytes)
        except OSError as e:
            if generation != self._generation:
                logger.info(f"Ignoring failed read of superseded import {path}: {e}")
                return False
            raise
        return self.complete_import(generation, raw, source_path=Path(path))

    # --- Reconciliation ---

    def toggle_disabled(self, record_id: int) -> Record:
        record = ReconcileService(self.graph).toggle_disabled(record_id)
        self._notify()
        return record

    def assign_gaps(self, task_id: Optional[str]) -> List[Record]:
        assigned = ReconcileService(self.graph).assign_gaps_to_task(task_id)
        self._notify()
        return assigned

    # --- Export ---

    def export_json(self, task_id: Optional[str], now: Optional[datetime] = None) -> str:
        """
        Assign enabled gaps to `task_id`, then serialize the Tim export.

        Raises:
            InvalidSelectionError: if no valid destination task is selected
        """
        self.assign_gaps(task_id)
        return self.export_service.to_json(self.graph, now)

    def export_csv(self, task_id: Optional[str]) -> str:
        return self.export_service.to_csv(self.graph, task_id)

    def save_json(self, task_id: Optional[str], output_file: Path) -> Path:
        """export_json() written to a file. Nothing is written on a bad selection."""
        self.assign_gaps(task_id)
        return self.export_service.write_json(self.graph, output_file)

    def save_csv(self, task_id: Optional[str], output_file: Path) -> Path:
        return self.export_service.write_csv(self.graph, task_id, output_file)

    # --- Views ---

    @property
    def has_records(self) -> bool:
        return bool(self.graph.records)

    def rows(self) -> List[RecordRow]:
        return ChartService.table_rows(self.graph)

    def chart(self) -> ChartData:
        return ChartService.weekly_series(self.graph)

    def task_choices(self) -> List[Tuple[str, str]]:
        return ChartService.task_choices(self.graph)
