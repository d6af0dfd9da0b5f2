from pydantic import AliasChoices, Field, field_validator
from typing import Optional, List
from datetime import datetime
from .base import CanonicalModel, WireModel, EntityId, require_text
from .user import UserRef
from taskhub.utils.vocabulary import canonical_project_status


class ProjectRef(CanonicalModel):
    id: str
    title: str


class ProjectOut(CanonicalModel):
    id: str
    title: str
    description: str
    status: str
    members: List[UserRef]
    created_by: UserRef
    created_at: datetime
    updated_at: datetime

    @property
    def member_ids(self) -> List[str]:
        return [member.id for member in self.members]

    def as_ref(self) -> ProjectRef:
        return ProjectRef(id=self.id, title=self.title)


class ProjectCreate(WireModel):
    # Older screens send `name`, newer ones `title`
    title: str = Field(validation_alias=AliasChoices("title", "name"))
    description: str = ""
    status: Optional[str] = None
    members: List[EntityId] = []

    @field_validator("title")
    @classmethod
    def title_required(cls, v):
        return require_text(v, "Project title")

    @field_validator("status")
    @classmethod
    def status_default(cls, v):
        return canonical_project_status(v)


class ProjectUpdate(WireModel):
    title: Optional[str] = Field(default=None, validation_alias=AliasChoices("title", "name"))
    description: Optional[str] = None
    status: Optional[str] = None
    members: Optional[List[EntityId]] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v):
        return None if v is None else require_text(v, "Project title")

    @field_validator("status")
    @classmethod
    def status_not_blank(cls, v):
        return None if v is None else canonical_project_status(v)


class ProjectMemberAdd(WireModel):
    user_id: EntityId = Field(validation_alias=AliasChoices("userId", "user_id", "id"))


class ProjectMembers(CanonicalModel):
    members: List[UserRef]
