# taskhub/client/views.py
"""
Screen loaders for the client.

Each loader fetches what one screen needs, normalizes it and works out which
actions the current actor may offer, using the same policy functions the
server enforces. The primary record of a screen decides whether it renders at
all; secondary lists (tasks on a dashboard, comments on a task) degrade to
empty when their request fails, and a per-project task count falls back to 0.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from taskhub.client.api import ApiClient, ApiError
from taskhub.schemas.comment import CommentOut
from taskhub.schemas.project import ProjectOut
from taskhub.schemas.task import TaskOut
from taskhub.schemas.user import UserOut, UserRef
from taskhub.utils import access_policy as policy
from taskhub.utils.normalize import (
    UNKNOWN_PROJECT,
    canonical_task_status,
    normalize_comment,
    normalize_many,
    normalize_project,
    normalize_task,
    normalize_user_ref,
)

logger = logging.getLogger(__name__)

DASHBOARD_PROJECT_LIMIT = 5


def project_affordances(actor: UserOut, project: Optional[ProjectOut]) -> Dict[str, bool]:
    can_modify = policy.can_modify_project(actor, project)
    return {
        "edit": can_modify,
        "delete": can_modify,
        "manageMembers": can_modify,
        "createTask": policy.can_create_task(actor, project),
    }


def task_affordances(actor: UserOut, task: TaskOut, project: Optional[ProjectOut]) -> Dict[str, bool]:
    can_modify = policy.can_modify_task(actor, task, project)
    return {
        "edit": can_modify,
        "delete": can_modify,
        "comment": policy.can_create_comment(actor, task),
    }


def comment_affordances(actor: UserOut, comment: CommentOut) -> Dict[str, bool]:
    can_modify = policy.can_modify_comment(actor, comment)
    return {"edit": can_modify, "delete": can_modify}


@dataclass
class DashboardView:
    projects: List[ProjectOut]
    tasks: List[TaskOut]
    can_create_project: bool
    errors: List[str] = field(default_factory=list)


@dataclass
class ProjectListView:
    projects: List[ProjectOut]
    actions: Dict[str, Dict[str, bool]]
    can_create_project: bool
    task_counts: Dict[str, int] = field(default_factory=dict)
    error: Optional[str] = None


@dataclass
class TaskListView:
    tasks: List[TaskOut]
    stats: Dict[str, int]
    actions: Dict[str, Dict[str, bool]]
    error: Optional[str] = None


@dataclass
class CommentListView:
    task_id: str
    comments: List[CommentOut]
    actions: Dict[str, Dict[str, bool]]
    can_add: bool


@dataclass
class ProjectDetailView:
    project: Optional[ProjectOut]
    tasks: List[TaskOut] = field(default_factory=list)
    members: List[UserRef] = field(default_factory=list)
    actions: Dict[str, bool] = field(default_factory=dict)
    not_found: bool = False
    error: Optional[str] = None


@dataclass
class TaskDetailView:
    task: Optional[TaskOut]
    project: Optional[ProjectOut] = None
    comments: Optional[CommentListView] = None
    actions: Dict[str, bool] = field(default_factory=dict)
    not_found: bool = False
    error: Optional[str] = None


def load_dashboard(client: ApiClient, actor: UserOut) -> DashboardView:
    errors = []
    try:
        data = client.get("/projects", params={"limit": DASHBOARD_PROJECT_LIMIT, "sort": "createdAt:desc"})
        projects = normalize_many(data, normalize_project, "projects")
    except ApiError as e:
        logger.warning(f"Dashboard projects unavailable: {e}")
        errors.append(e.message)
        projects = []

    try:
        data = client.get("/tasks", params={"assignedTo": "me"})
        tasks = normalize_many(data, normalize_task, "tasks")
    except ApiError as e:
        logger.warning(f"Dashboard tasks unavailable: {e}")
        errors.append(e.message)
        tasks = []

    return DashboardView(
        projects=projects,
        tasks=tasks,
        can_create_project=policy.can_create_project(actor),
        errors=errors,
    )


def load_project_list(client: ApiClient, actor: UserOut) -> ProjectListView:
    can_create = policy.can_create_project(actor)
    try:
        projects = normalize_many(client.get("/projects"), normalize_project, "projects")
    except ApiError as e:
        logger.warning(f"Project list unavailable: {e}")
        return ProjectListView(projects=[], actions={}, can_create_project=can_create, error=e.message)

    actions = {project.id: project_affordances(actor, project) for project in projects}
    task_counts = {project.id: _project_task_count(client, project.id) for project in projects}
    return ProjectListView(
        projects=projects,
        actions=actions,
        can_create_project=can_create,
        task_counts=task_counts,
    )


def _project_task_count(client: ApiClient, project_id: str) -> int:
    try:
        return len(normalize_many(client.get(f"/tasks/project/{project_id}"), normalize_task, "tasks"))
    except ApiError as e:
        logger.warning(f"Task count for project {project_id} unavailable: {e}")
        return 0


def load_task_list(
    client: ApiClient,
    actor: UserOut,
    search: str = "",
    status: str = "all",
    priority: str = "all",
) -> TaskListView:
    """All tasks, filtered on the client like the task list screen does"""
    try:
        data = client.get("/tasks")
    except ApiError as e:
        logger.warning(f"Task list unavailable: {e}")
        return TaskListView(tasks=[], stats={"total": 0, "done": 0, "overdue": 0}, actions={}, error=e.message)

    tasks = normalize_many(data, normalize_task, "tasks")
    counts = data if isinstance(data, dict) else {}
    stats = {key: int(counts.get(key) or 0) for key in ("total", "done", "overdue")}
    if not counts:
        stats["total"] = len(tasks)

    # Membership facts for the edit/delete buttons; without them only admins and assignees qualify
    try:
        projects = {p.id: p for p in normalize_many(client.get("/projects"), normalize_project, "projects")}
    except ApiError as e:
        logger.warning(f"Projects for the task list unavailable: {e}")
        projects = {}

    visible = filter_tasks(tasks, search=search, status=status, priority=priority)
    return TaskListView(
        tasks=visible,
        stats=stats,
        actions={task.id: task_affordances(actor, task, projects.get(task.project_id)) for task in visible},
    )


def load_project_detail(client: ApiClient, actor: UserOut, project_id: str) -> ProjectDetailView:
    try:
        project = normalize_project(client.get(f"/projects/{project_id}"))
    except ApiError as e:
        logger.warning(f"Project {project_id} unavailable: {e}")
        return ProjectDetailView(project=None, not_found=e.is_not_found, error=e.message)

    try:
        tasks = normalize_many(client.get(f"/tasks/project/{project_id}"), normalize_task, "tasks")
    except ApiError as e:
        logger.warning(f"Tasks for project {project_id} unavailable: {e}")
        tasks = []

    try:
        members = normalize_many(client.get(f"/projects/{project_id}/members"), normalize_user_ref, "members")
    except ApiError as e:
        logger.warning(f"Members endpoint for project {project_id} unavailable: {e}")
        members = list(project.members)

    return ProjectDetailView(
        project=project,
        tasks=tasks,
        members=members,
        actions=project_affordances(actor, project),
    )


def load_comments(client: ApiClient, actor: UserOut, task_id: str, task: Optional[TaskOut] = None) -> CommentListView:
    try:
        data = client.get(f"/comments/task/{task_id}")
        comments = normalize_many(data, lambda item: normalize_comment(item, task_id=task_id), "comments")
    except ApiError as e:
        logger.warning(f"Comments for task {task_id} unavailable: {e}")
        comments = []

    return CommentListView(
        task_id=task_id,
        comments=comments,
        actions={comment.id: comment_affordances(actor, comment) for comment in comments},
        can_add=policy.can_create_comment(actor, task),
    )


def load_task_detail(client: ApiClient, actor: UserOut, task_id: str) -> TaskDetailView:
    try:
        task = normalize_task(client.get(f"/tasks/{task_id}"))
    except ApiError as e:
        logger.warning(f"Task {task_id} unavailable: {e}")
        return TaskDetailView(task=None, not_found=e.is_not_found, error=e.message)

    project = None
    if task.project_id:
        try:
            project = normalize_project(client.get(f"/projects/{task.project_id}"))
        except ApiError as e:
            logger.warning(f"Project {task.project_id} of task {task_id} unavailable: {e}")

    if project is not None and task.project.title == UNKNOWN_PROJECT:
        task = task.model_copy(update={"project": project.as_ref()})

    return TaskDetailView(
        task=task,
        project=project,
        comments=load_comments(client, actor, task_id, task),
        actions=task_affordances(actor, task, project),
    )


def filter_tasks(
    tasks: Iterable[TaskOut],
    search: str = "",
    status: str = "all",
    priority: str = "all",
) -> List[TaskOut]:
    """The task list's search box and status/priority filters"""
    needle = (search or "").strip().lower()
    wanted_status = None if status in (None, "", "all") else canonical_task_status(status)
    wanted_priority = None if priority in (None, "", "all") else priority.strip().lower()

    matches = []
    for task in tasks:
        if needle and needle not in task.title.lower() and needle not in task.description.lower():
            continue
        if wanted_status and task.status != wanted_status:
            continue
        if wanted_priority and task.priority != wanted_priority:
            continue
        matches.append(task)
    return matches
