from pydantic import field_validator
from typing import Optional
from datetime import datetime
from .base import CanonicalModel, WireModel, EntityId, require_text
from .user import UserRef


class CommentOut(CanonicalModel):
    id: str
    text: str
    author: UserRef
    task_id: str
    timestamp: datetime


class CommentUpdate(WireModel):
    text: str

    @field_validator("text")
    @classmethod
    def text_required(cls, v):
        return require_text(v, "Comment")


class CommentTaskCreate(CommentUpdate):
    """Body of POST /comments/task/{taskId}: the task comes from the path"""


class CommentCreate(CommentUpdate):
    task_id: EntityId
    author: Optional[EntityId] = None
