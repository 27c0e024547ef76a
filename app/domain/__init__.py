"""Domain layer - Pure business entities and logic"""

from .errors import ParseError, InvalidSelectionError
from .models import Group, Task, Record, TimeGraph, UserPreferences, format_duration, format_hours

__all__ = [
    "Group", "Task", "Record", "TimeGraph", "UserPreferences",
    "ParseError", "InvalidSelectionError",
    "format_duration", "format_hours",
]
