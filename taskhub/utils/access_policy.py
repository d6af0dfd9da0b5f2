# taskhub/utils/access_policy.py
"""
Access policy evaluator.

Pure predicates over canonical records: the server uses them to authorize
requests and the client uses the same functions to decide which controls to
offer. The actor is always passed in explicitly. Nothing here performs I/O or
mutates its arguments, and a missing relation counts as a failed check
(the one exception is commenting on a task with no assignment data).
"""

from enum import Enum
from typing import Optional, Union

from taskhub.schemas.user import UserOut, UserRef
from taskhub.schemas.project import ProjectOut
from taskhub.schemas.task import TaskOut
from taskhub.schemas.comment import CommentOut
from taskhub.utils.vocabulary import PRIVILEGED_ROLES

Actor = Union[UserOut, UserRef]


class Resource(str, Enum):
    PROJECT = "project"
    TASK = "task"
    COMMENT = "comment"
    USER = "user"


class Operation(str, Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    MANAGE = "manage"


def _role(actor: Optional[Actor]) -> str:
    if actor is None or not actor.role:
        return ""
    return actor.role.lower()


def is_admin(actor: Optional[Actor]) -> bool:
    return _role(actor) == "admin"


def is_manager(actor: Optional[Actor]) -> bool:
    return _role(actor) == "manager"


def is_privileged(actor: Optional[Actor]) -> bool:
    return _role(actor) in PRIVILEGED_ROLES


def _same_user(actor: Optional[Actor], ref: Optional[UserRef]) -> bool:
    # An empty id never matches, so the unassigned sentinel never grants access
    if actor is None or ref is None or not actor.id:
        return False
    return actor.id == ref.id


def is_member(actor: Optional[Actor], project: Optional[ProjectOut]) -> bool:
    if actor is None or project is None or not actor.id:
        return False
    return actor.id in project.member_ids


def is_assignee(actor: Optional[Actor], task: Optional[TaskOut]) -> bool:
    if task is None:
        return False
    return _same_user(actor, task.assigned_to)


def can_create_project(actor: Optional[Actor]) -> bool:
    return is_privileged(actor)


def can_modify_project(actor: Optional[Actor], project: Optional[ProjectOut] = None) -> bool:
    """Update, delete and membership changes.

    Any admin or manager qualifies, with no creator or membership check
    (unlike tasks and comments).
    """
    return is_privileged(actor)


def can_create_task(actor: Optional[Actor], project: Optional[ProjectOut]) -> bool:
    if is_admin(actor):
        return True
    return is_manager(actor) and is_member(actor, project)


def can_modify_task(actor: Optional[Actor], task: Optional[TaskOut], project: Optional[ProjectOut]) -> bool:
    if is_admin(actor):
        return True
    if not is_manager(actor):
        return False
    return is_assignee(actor, task) or is_member(actor, project)


def can_create_comment(actor: Optional[Actor], task: Optional[TaskOut]) -> bool:
    if is_admin(actor):
        return True
    if not is_manager(actor):
        return False
    # No assignment data on the task: managers may comment
    if task is None or not task.is_assigned:
        return True
    return is_assignee(actor, task)


def can_modify_comment(actor: Optional[Actor], comment: Optional[CommentOut]) -> bool:
    if comment is not None and _same_user(actor, comment.author):
        return True
    return is_privileged(actor)


def can_manage_users(actor: Optional[Actor]) -> bool:
    return is_admin(actor)


def can_view_user(actor: Optional[Actor], user: Optional[Union[UserOut, UserRef]]) -> bool:
    if is_admin(actor):
        return True
    return user is not None and _same_user(actor, UserRef(id=user.id, name=user.name))


def is_allowed(
    actor: Optional[Actor],
    resource: Union[Resource, str],
    operation: Union[Operation, str],
    *,
    entity=None,
    project: Optional[ProjectOut] = None,
    task: Optional[TaskOut] = None,
) -> bool:
    """Single entry point: may `actor` perform `operation` on `resource`?

    `entity` is the record being acted on (absent for creation). `project`
    and `task` carry the related records the decision depends on: the task's
    project for task rules, the comment's task for comment creation.
    """
    resource = Resource(resource)
    operation = Operation(operation)
    if actor is None:
        return False

    if resource is Resource.USER:
        if operation is Operation.READ:
            return can_view_user(actor, entity)
        return can_manage_users(actor)

    if operation is Operation.READ:
        return True

    if resource is Resource.PROJECT:
        if operation is Operation.CREATE:
            return can_create_project(actor)
        return can_modify_project(actor, entity or project)

    if resource is Resource.TASK:
        if operation is Operation.CREATE:
            return can_create_task(actor, project)
        return can_modify_task(actor, entity or task, project)

    if operation is Operation.CREATE:
        return can_create_comment(actor, task)
    return can_modify_comment(actor, entity)
