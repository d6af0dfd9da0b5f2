# taskhub/schemas/task.py
from pydantic import BaseModel, field_validator
from datetime import date, datetime
from typing import Optional, List, Literal
from .base import CanonicalModel, WireModel, EntityId, require_text
from .user import UserRef
from .project import ProjectRef
from taskhub.utils.vocabulary import canonical_task_status, canonical_priority, PRIORITIES


def _check_priority(v):
    if v is None:
        return v
    if str(v).strip().lower() not in PRIORITIES:
        raise ValueError(f"Priority must be one of: {', '.join(PRIORITIES)}")
    return canonical_priority(v)


class TaskOut(CanonicalModel):
    id: str
    title: str
    description: str
    status: str
    priority: Literal["low", "medium", "high"]
    due_date: Optional[date] = None
    project_id: str
    project: ProjectRef
    assigned_to: UserRef
    created_at: datetime
    updated_at: datetime

    @property
    def is_assigned(self) -> bool:
        return self.assigned_to.is_set


class TaskCreate(WireModel):
    title: str
    project_id: EntityId
    description: str = ""
    status: Optional[str] = None
    priority: Optional[str] = None
    due_date: Optional[date] = None
    assigned_to: Optional[EntityId] = None

    @field_validator("title")
    @classmethod
    def title_required(cls, v):
        return require_text(v, "Task title")

    @field_validator("status")
    @classmethod
    def status_vocabulary(cls, v):
        return canonical_task_status(v)

    @field_validator("priority", mode="before")
    @classmethod
    def priority_vocabulary(cls, v):
        return _check_priority(v)

    @field_validator("due_date", mode="before")
    @classmethod
    def date_part(cls, v):
        # ISO datetimes from date pickers carry a time part
        if isinstance(v, str) and len(v) > 10:
            return v[:10]
        return v


class TaskUpdate(WireModel):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    due_date: Optional[date] = None
    project_id: Optional[EntityId] = None
    assigned_to: Optional[EntityId] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v):
        return None if v is None else require_text(v, "Task title")

    @field_validator("status")
    @classmethod
    def status_vocabulary(cls, v):
        return None if v is None else canonical_task_status(v)

    @field_validator("priority", mode="before")
    @classmethod
    def priority_vocabulary(cls, v):
        return _check_priority(v)

    @field_validator("due_date", mode="before")
    @classmethod
    def date_part(cls, v):
        if isinstance(v, str) and len(v) > 10:
            return v[:10]
        return v


class TaskListWithStats(BaseModel):
    total: int
    done: int
    overdue: int
    tasks: List[TaskOut]
