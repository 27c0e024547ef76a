"""
Domain Models using Pydantic for validation.

Architecture Decision: Arena instead of object references
Groups, tasks and records reference each other by id only. The TimeGraph
owns every entity; a back-reference is a lookup into the graph, never an
owning pointer. This keeps the graph free of cycles and trivially rebuilt
on every import.
"""

from datetime import datetime
from typing import Optional, List, Dict, Iterator
from pydantic import BaseModel, Field, ConfigDict

from .errors import InvalidSelectionError


def format_duration(seconds: int) -> str:
    """Format seconds as HH:MM:SS"""
    hours, remainder = divmod(seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_hours(hours: float) -> str:
    """Format fractional hours as HH:MM (used for chart totals)"""
    total_seconds = round(hours * 3600)
    hours, remainder = divmod(total_seconds, 3600)
    minutes = remainder // 60
    return f"{hours:02d}:{minutes:02d}"


class Group(BaseModel):
    """
    A named collection of tasks.

    Created on import and never mutated afterwards, apart from the task list
    being filled while the tasks are linked.
    """
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str = ""
    created_at: datetime = Field(default_factory=datetime.now)
    task_ids: List[str] = Field(default_factory=list)


class Task(BaseModel):
    """
    A named activity owning zero or more records.

    Examples: "Software Development", "Meetings", "General Admin"
    """
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str = ""
    created_at: datetime = Field(default_factory=datetime.now)
    record_ids: List[int] = Field(default_factory=list)

    # Back-reference to the owning group (relation only)
    group_id: Optional[str] = None


class Record(BaseModel):
    """
    A single time interval.

    A record without a task is a gap: idle time synthesized during import.
    Gaps start disabled and only take part in exports once the user
    enables them.
    """
    model_config = ConfigDict(from_attributes=True)

    id: int
    start: datetime
    end: datetime
    disabled: bool = False
    task_id: Optional[str] = None

    @property
    def is_gap(self) -> bool:
        return self.task_id is None

    @property
    def duration_seconds(self) -> int:
        """Whole seconds of wall-clock difference, sub-second part truncated"""
        return int((self.end - self.start).total_seconds())

    @property
    def duration_hours(self) -> float:
        return (self.end - self.start).total_seconds() / 3600

    @property
    def start_str(self) -> str:
        return self.start.strftime("%b %d, %Y %H:%M")

    @property
    def end_str(self) -> str:
        return self.end.strftime("%b %d, %Y %H:%M")

    @property
    def duration_str(self) -> str:
        return format_duration(self.duration_seconds)


class TimeGraph(BaseModel):
    """
    The in-memory graph of one imported file.

    `records` is the flattened, globally time-sorted view of every task's
    records plus every synthesized gap.
    """

    groups: Dict[str, Group] = Field(default_factory=dict)
    tasks: Dict[str, Task] = Field(default_factory=dict)
    records: List[Record] = Field(default_factory=list)

    def get_task(self, task_id: Optional[str]) -> Task:
        """Look up a task, raising InvalidSelectionError if it does not exist"""
        if not task_id or task_id not in self.tasks:
            raise InvalidSelectionError(f"Unknown task: {task_id!r}")
        return self.tasks[task_id]

    def get_record(self, record_id: int) -> Record:
        for record in self.records:
            if record.id == record_id:
                return record
        raise InvalidSelectionError(f"Unknown record: {record_id!r}")

    def get_group(self, group_id: Optional[str]) -> Optional[Group]:
        if group_id is None:
            return None
        return self.groups.get(group_id)

    def records_of(self, task: Task) -> List[Record]:
        """The task's records in the order the task owns them"""
        by_id = {record.id: record for record in self.records}
        return [by_id[record_id] for record_id in task.record_ids if record_id in by_id]

    def gaps(self) -> Iterator[Record]:
        return (record for record in self.records if record.is_gap)

    def sort_records(self) -> None:
        # list.sort is stable: records with equal start keep insertion order
        self.records.sort(key=lambda record: record.start)

    def next_record_id(self) -> int:
        return max((record.id for record in self.records), default=0) + 1

    @property
    def is_empty(self) -> bool:
        return not self.records and not self.tasks and not self.groups


class UserPreferences(BaseModel):
    """
    User configuration and preferences.

    This allows users to customize behavior without touching code.
    """
    model_config = ConfigDict(from_attributes=True)

    # Gap detection
    min_gap_minutes: float = Field(
        default=5.0,
        ge=0,
        description="Silence between two records must exceed this to become a gap"
    )

    # Timesheet CSV identity fields
    csv_name: str = Field(default="Doe, John", description="Name written into every CSV row")
    csv_email: str = Field(default="john.doe@example.com", description="Email written into every CSV row")

    # UI settings
    theme: str = Field(default="auto", description="Theme: 'light', 'dark', or 'auto' (follows system)")
    language: str = Field(default="auto", description="UI language: 'en', 'de', or 'auto' (detect from system)")
    last_directory: Optional[str] = Field(default=None, description="Directory of the last opened export")
