# backend/schemas.py
"""Request and response bodies. Field names travel as camelCase on the wire."""
from datetime import datetime, timezone
from typing import Annotated, Any, Generic, List, Optional, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from agents.task_parser import normalize_tags
from backend.models import TaskPriority, TaskStatus

MIN_TRANSCRIPT_LENGTH = 10
MAX_TRANSCRIPT_LENGTH = 50_000

T = TypeVar("T")


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; they were stored as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# ---------------- requests ----------------

class CreateTranscriptRequest(CamelModel):
    content: str

    @field_validator("content")
    @classmethod
    def check_length(cls, value: str) -> str:
        value = value.strip()
        if len(value) < MIN_TRANSCRIPT_LENGTH:
            raise PydanticCustomError(
                "too_short", "Transcript must be at least {min} characters long", {"min": MIN_TRANSCRIPT_LENGTH}
            )
        if len(value) > MAX_TRANSCRIPT_LENGTH:
            raise PydanticCustomError("too_long", "Transcript cannot exceed 50,000 characters")
        return value


class UpdateTaskRequest(CamelModel):
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    tags: Optional[List[str]] = None

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, value: Any) -> Any:
        if value is None:
            return value
        if not isinstance(value, str) or value.strip().upper() not in TaskStatus.__members__:
            raise PydanticCustomError("enum", "Status must be either PENDING or COMPLETED")
        return value.strip().upper()

    @field_validator("priority", mode="before")
    @classmethod
    def check_priority(cls, value: Any) -> Any:
        if value is None:
            return value
        if not isinstance(value, str) or value.strip().upper() not in TaskPriority.__members__:
            raise PydanticCustomError("enum", "Priority must be one of LOW, MEDIUM, HIGH or URGENT")
        return value.strip().upper()

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        return None if value is None else normalize_tags(value)

    @model_validator(mode="after")
    def require_change(self) -> "UpdateTaskRequest":
        if self.status is None and self.priority is None and self.tags is None:
            raise PydanticCustomError("empty_update", "At least one of status, priority or tags is required")
        return self


# ---------------- responses ----------------

class TranscriptRef(CamelModel):
    id: str
    created_at: UtcDatetime


class TranscriptWithContent(TranscriptRef):
    content: str


class TaskOut(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    status: TaskStatus
    priority: TaskPriority
    tags: List[str] = Field(default_factory=list)
    transcript_id: str
    created_at: UtcDatetime
    updated_at: UtcDatetime


class TaskWithTranscript(TaskOut):
    transcript: TranscriptRef


class TaskDetail(TaskOut):
    transcript: TranscriptWithContent


class TaskSummary(CamelModel):
    total_tasks: int
    pending_tasks: int
    completed_tasks: int
    completion_percentage: int


class TranscriptOut(CamelModel):
    id: str
    content: str
    created_at: UtcDatetime
    tasks: List[TaskOut]
    summary: TaskSummary


class CreatedTranscript(CamelModel):
    transcript: TranscriptWithContent
    tasks: List[TaskOut]
    summary: TaskSummary
    task_source: str


class TaskList(CamelModel):
    tasks: List[TaskWithTranscript]
    summary: TaskSummary


class TranscriptStats(TaskSummary):
    transcript_id: str
    created_at: UtcDatetime


class ChartPoint(CamelModel):
    name: str
    value: int
    color: str


class ChartData(CamelModel):
    pie_chart: List[ChartPoint]
    bar_chart: List[ChartPoint]


class TaskStats(CamelModel):
    overall: TaskSummary
    by_transcript: List[TranscriptStats]
    chart_data: ChartData


class ApiResponse(CamelModel, Generic[T]):
    message: str
    data: T


class MessageResponse(CamelModel):
    message: str
