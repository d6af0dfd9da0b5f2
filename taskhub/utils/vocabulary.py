# taskhub/utils/vocabulary.py
# Canonical value sets for roles, statuses and priorities

ROLES = ("admin", "manager", "user")
PRIVILEGED_ROLES = ("admin", "manager")

PROJECT_STATUSES = ("pending", "in progress", "completed")
TASK_STATUSES = ("todo", "in-progress", "done")
PRIORITIES = ("low", "medium", "high")

DEFAULT_PROJECT_STATUS = PROJECT_STATUSES[0]
DEFAULT_TASK_STATUS = TASK_STATUSES[0]
DEFAULT_PRIORITY = "medium"
DEFAULT_ROLE = "user"

# Older screens used the project vocabulary for tasks
LEGACY_TASK_STATUSES = {
    "pending": "todo",
    "in progress": "in-progress",
    "in_progress": "in-progress",
    "inprogress": "in-progress",
    "completed": "done",
}


def _clean(value) -> str:
    if value is None:
        return ""
    return str(value).strip().lower()


def canonical_task_status(value) -> str:
    status = _clean(value)
    if not status:
        return DEFAULT_TASK_STATUS
    return LEGACY_TASK_STATUSES.get(status, status)


def canonical_project_status(value) -> str:
    # Open enum: unknown statuses are kept as entered
    status = str(value).strip() if value is not None else ""
    return status or DEFAULT_PROJECT_STATUS


def canonical_priority(value) -> str:
    priority = _clean(value)
    return priority if priority in PRIORITIES else DEFAULT_PRIORITY


def canonical_role(value) -> str:
    role = _clean(value)
    return role if role in ROLES else DEFAULT_ROLE
