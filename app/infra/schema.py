"""
Input schema for Tim export files.

Architecture Decision: Validate before building
The raw JSON is validated into these Pydantic models first. Domain entities
are only constructed from a document that passed validation, so the importer
never has to trust field presence.
"""

from typing import Annotated, Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from app.domain.errors import ParseError

# Epoch milliseconds representable as a local datetime: 0001-01-02 .. 9999-12-30 UTC
MIN_EPOCH_MS = -62135510400000
MAX_EPOCH_MS = 253402128000000

EpochMs = Annotated[int, Field(ge=MIN_EPOCH_MS, le=MAX_EPOCH_MS)]


class SourceModel(BaseModel):
    """Base for all file-level models: unknown keys are ignored."""
    model_config = ConfigDict(extra='ignore', populate_by_name=True)


class RecordSource(SourceModel):
    start: EpochMs
    end: EpochMs

    @model_validator(mode='after')
    def _check_interval(self) -> 'RecordSource':
        if self.end <= self.start:
            raise ValueError(f"record must end after it starts (start={self.start}, end={self.end})")
        return self


class TitledSource(SourceModel):
    """Groups and tasks: a null title reads as an empty one."""
    title: Optional[str] = ""
    created_at: Optional[EpochMs] = Field(default=None, alias='createdAt')

    @field_validator('title')
    @classmethod
    def _null_title(cls, value: Optional[str]) -> str:
        return value or ""


class GroupSource(TitledSource):
    pass


class TaskSource(TitledSource):
    records: List[RecordSource]


class NodeSource(SourceModel):
    id: str
    parent: Optional[str] = None


class ExportDocument(SourceModel):
    """
    A complete Tim export.

    Shape: {groups: {id: {...}}, tasks: {id: {...}}, nodes: [{id, parent?}]}
    """
    groups: Dict[str, GroupSource]
    tasks: Dict[str, TaskSource]
    nodes: List[NodeSource]

    def parent_of(self) -> Dict[str, Optional[str]]:
        """Map node id -> parent id. The first node listed for an id wins."""
        parents: Dict[str, Optional[str]] = {}
        for node in self.nodes:
            parents.setdefault(node.id, node.parent)
        return parents


def _describe(exc: ValidationError, limit: int = 5) -> str:
    """Condense a ValidationError into a short, user-facing message"""
    parts = []
    for error in exc.errors()[:limit]:
        location = ".".join(str(part) for part in error.get('loc', ())) or "document"
        parts.append(f"{location}: {error.get('msg')}")
    remaining = exc.error_count() - limit
    if remaining > 0:
        parts.append(f"... and {remaining} more")
    return "; ".join(parts)


def parse_document(raw: Union[str, bytes]) -> ExportDocument:
    """
    Validate raw JSON text into an ExportDocument.

    Raises:
        ParseError: if the text is not JSON or does not match the export shape
    """
    try:
        return ExportDocument.model_validate_json(raw)
    except ValidationError as e:
        raise ParseError(f"Invalid Tim export: {_describe(e)}") from e
