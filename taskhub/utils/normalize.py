# taskhub/utils/normalize.py
"""
Canonical entity normalizer.

Payloads reach us in several shapes: ``_id`` or ``id``, ``name`` or ``title``,
relations as a bare id string or as a nested object, envelopes such as
``{"tasks": [...]}``. Every function here maps one accepted shape onto the
single canonical record defined in ``taskhub.schemas`` and never raises for a
missing or renamed field; gaps are filled with defaults and sentinels instead.

All normalizers are idempotent and accept an already-canonical record, so
``normalize(normalize(x)) == normalize(x)`` and
``normalize(serialize(record)) == record``.
"""

from datetime import date, datetime, timezone
from typing import Any, Callable, List, Mapping, Optional, TypeVar

from pydantic import BaseModel

from taskhub.schemas.user import UserRef, UserOut
from taskhub.schemas.project import ProjectRef, ProjectOut
from taskhub.schemas.task import TaskOut
from taskhub.schemas.comment import CommentOut
from taskhub.utils.vocabulary import (
    canonical_priority,
    canonical_project_status,
    canonical_role,
    canonical_task_status,
)

__all__ = [
    "UNKNOWN_USER", "UNASSIGNED", "UNKNOWN_PROJECT", "UNTITLED_PROJECT", "UNTITLED_TASK",
    "normalize_user", "normalize_user_ref", "normalize_project_ref", "normalize_project",
    "normalize_task", "normalize_comment", "normalize_many", "serialize",
    "canonical_task_status", "canonical_project_status", "canonical_priority", "canonical_role",
]

UNKNOWN_USER = "Unknown User"
UNASSIGNED = "Unassigned"
UNKNOWN_PROJECT = "Unknown Project"
UNTITLED_PROJECT = "Untitled Project"
UNTITLED_TASK = "Untitled Task"

R = TypeVar("R", bound=BaseModel)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _as_mapping(payload: Any) -> Mapping[str, Any]:
    if isinstance(payload, BaseModel):
        return payload.model_dump(by_alias=True)
    if isinstance(payload, Mapping):
        return payload
    return {}


def _pick(raw: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """First value under `keys` that is neither None nor an empty string"""
    for key in keys:
        value = raw.get(key)
        if value is not None and value != "":
            return value
    return default


def _as_id(value: Any) -> str:
    if value is None or isinstance(value, bool):
        return ""
    return str(value).strip()


def _record_id(raw: Mapping[str, Any]) -> str:
    return _as_id(_pick(raw, "id", "_id"))


def _as_text(value: Any, default: str = "") -> str:
    if value is None:
        return default
    text = str(value)
    return text if text.strip() else default


def _as_datetime(value: Any, fallback: Optional[datetime] = None) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            pass
    return fallback if fallback is not None else _now()


def _as_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and len(value.strip()) >= 10:
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


def normalize_user_ref(value: Any, missing_name: str = UNKNOWN_USER) -> UserRef:
    """
    Resolve a relation to a user.

    A bare string is taken as the user's id with an unknown display name;
    None or an object without an id becomes the sentinel ``UserRef(id="")``
    named `missing_name` ("Unknown User" for authors, "Unassigned" for
    assignees).
    """
    if isinstance(value, UserRef):
        return value
    if isinstance(value, (str, int)) and not isinstance(value, bool):
        ref_id = _as_id(value)
        if not ref_id:
            return UserRef(id="", name=missing_name)
        return UserRef(id=ref_id, name=UNKNOWN_USER)

    raw = _as_mapping(value)
    ref_id = _record_id(raw)
    if not ref_id:
        return UserRef(id="", name=_as_text(raw.get("name"), missing_name))

    role = raw.get("role")
    return UserRef(
        id=ref_id,
        name=_as_text(_pick(raw, "name", "username"), UNKNOWN_USER),
        email=_as_text(raw.get("email")),
        role=canonical_role(role) if role else None,
    )


def normalize_project_ref(value: Any) -> ProjectRef:
    if isinstance(value, ProjectRef):
        return value
    if isinstance(value, (str, int)) and not isinstance(value, bool):
        return ProjectRef(id=_as_id(value), title=UNKNOWN_PROJECT)

    raw = _as_mapping(value)
    return ProjectRef(
        id=_record_id(raw),
        title=_as_text(_pick(raw, "title", "name"), UNKNOWN_PROJECT),
    )


def normalize_user(payload: Any) -> UserOut:
    raw = _as_mapping(payload)
    # Some auth responses wrap the user: {"user": {...}, "token": ...}
    if isinstance(raw.get("user"), Mapping) and not _record_id(raw):
        raw = raw["user"]

    created_at = _as_datetime(raw.get("createdAt"))
    return UserOut(
        id=_record_id(raw),
        name=_as_text(_pick(raw, "name", "username"), UNKNOWN_USER),
        email=_as_text(raw.get("email")),
        role=canonical_role(raw.get("role")),
        created_at=created_at,
        updated_at=_as_datetime(raw.get("updatedAt"), created_at),
    )


def _members(value: Any) -> List[UserRef]:
    if not isinstance(value, (list, tuple)):
        return []
    members: List[UserRef] = []
    seen = set()
    for entry in value:
        ref = normalize_user_ref(entry)
        if not ref.id or ref.id in seen:
            continue
        seen.add(ref.id)
        members.append(ref)
    return members


def normalize_project(payload: Any) -> ProjectOut:
    raw = _as_mapping(payload)
    if isinstance(raw.get("project"), Mapping):
        raw = raw["project"]

    created_at = _as_datetime(raw.get("createdAt"))
    return ProjectOut(
        id=_record_id(raw),
        title=_as_text(_pick(raw, "title", "name"), UNTITLED_PROJECT),
        description=_as_text(raw.get("description")),
        status=canonical_project_status(raw.get("status")),
        members=_members(raw.get("members")),
        created_by=normalize_user_ref(raw.get("createdBy")),
        created_at=created_at,
        updated_at=_as_datetime(raw.get("updatedAt"), created_at),
    )


def _task_project(raw: Mapping[str, Any]) -> ProjectRef:
    source = raw.get("project")
    if not isinstance(source, (Mapping, ProjectRef)):
        source = raw.get("projectId")
    ref = normalize_project_ref(source)

    if ref.title == UNKNOWN_PROJECT:
        title = _pick(raw, "projectTitle", "projectName")
        if title:
            ref = ProjectRef(id=ref.id, title=str(title))
    return ref


def normalize_task(payload: Any) -> TaskOut:
    raw = _as_mapping(payload)
    if isinstance(raw.get("task"), Mapping):
        raw = raw["task"]

    project = _task_project(raw)
    created_at = _as_datetime(raw.get("createdAt"))
    return TaskOut(
        id=_record_id(raw),
        title=_as_text(raw.get("title"), UNTITLED_TASK),
        description=_as_text(raw.get("description")),
        status=canonical_task_status(raw.get("status")),
        priority=canonical_priority(raw.get("priority")),
        due_date=_as_date(raw.get("dueDate")),
        project_id=project.id,
        project=project,
        assigned_to=normalize_user_ref(raw.get("assignedTo"), missing_name=UNASSIGNED),
        created_at=created_at,
        updated_at=_as_datetime(raw.get("updatedAt"), created_at),
    )


def normalize_comment(payload: Any, task_id: Optional[str] = None) -> CommentOut:
    """`task_id` fills in the task when the payload omits it (lists fetched per task)"""
    raw = _as_mapping(payload)
    if isinstance(raw.get("comment"), Mapping):
        raw = raw["comment"]

    task_ref = raw.get("taskId")
    if isinstance(task_ref, Mapping):
        task_ref = _record_id(task_ref)
    return CommentOut(
        id=_record_id(raw),
        text=_as_text(raw.get("text")),
        author=normalize_user_ref(raw.get("author")),
        task_id=_as_id(task_ref) or _as_id(task_id),
        timestamp=_as_datetime(_pick(raw, "timestamp", "createdAt")),
    )


def normalize_many(payload: Any, normalizer: Callable[[Any], R], key: str) -> List[R]:
    """Normalize a bare list or an envelope such as ``{"tasks": [...]}``"""
    if isinstance(payload, Mapping):
        payload = payload.get(key)
    if not isinstance(payload, (list, tuple)):
        return []
    return [normalizer(item) for item in payload if isinstance(item, (Mapping, BaseModel))]


def serialize(record: BaseModel) -> dict:
    """Canonical record to its JSON-safe camelCase wire form"""
    return record.model_dump(mode="json", by_alias=True)
