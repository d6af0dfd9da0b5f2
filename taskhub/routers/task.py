# taskhub/routers/task.py
import logging
from datetime import date
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import false, or_
from sqlalchemy.orm import Session
from typing import List, Optional

from taskhub.database import get_db
from taskhub.models.project import Project
from taskhub.models.task import Task
from taskhub.models.user import User
from taskhub.schemas.task import TaskCreate, TaskUpdate, TaskOut, TaskListWithStats
from taskhub.schemas.user import UserOut
from taskhub.services.lookups import get_or_404, commit_or_500, parse_id
from taskhub.services.records import task_record
from taskhub.routers.project import project_out
from taskhub.utils.access_policy import can_create_task, can_modify_task
from taskhub.utils.auth import get_current_actor
from taskhub.utils.errors import AuthorizationError
from taskhub.utils.normalize import normalize_task, canonical_task_status
from taskhub.utils.vocabulary import DEFAULT_PRIORITY, DEFAULT_TASK_STATUS

logger = logging.getLogger(__name__)

router = APIRouter()


def task_out(db_task: Task) -> TaskOut:
    return normalize_task(task_record(db_task))


def _assignee_id(db: Session, assigned_to: Optional[str]) -> Optional[int]:
    if not assigned_to:
        return None
    return get_or_404(db, User, assigned_to, "Assigned user").id


@router.get("", response_model=TaskListWithStats)
def get_all_tasks(
    status_filter: Optional[str] = Query(None, alias="status"),
    priority: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    assigned_to: Optional[str] = Query(None, alias="assignedTo"),
    db: Session = Depends(get_db),
    actor: UserOut = Depends(get_current_actor),
):
    """List tasks with summary counts; `assignedTo=me` means the caller"""
    query = db.query(Task)
    if status_filter:
        query = query.filter(Task.status == canonical_task_status(status_filter))
    if priority:
        # Compared as given, so an unknown priority matches no task
        query = query.filter(Task.priority == priority.strip().lower())
    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(or_(Task.title.ilike(pattern), Task.description.ilike(pattern)))
    if assigned_to:
        assignee_pk = parse_id(actor.id if assigned_to == "me" else assigned_to)
        query = query.filter(Task.assigned_to == assignee_pk) if assignee_pk is not None else query.filter(false())

    tasks = [task_out(task) for task in query.order_by(Task.created_at.desc(), Task.id.desc()).all()]

    today = date.today()
    return {
        "total": len(tasks),
        "done": sum(task.status == "done" for task in tasks),
        "overdue": sum(
            task.due_date is not None and task.due_date < today and task.status != "done"
            for task in tasks
        ),
        "tasks": tasks,
    }


@router.get("/project/{project_id}", response_model=List[TaskOut])
def get_project_tasks(project_id: str, db: Session = Depends(get_db), actor: UserOut = Depends(get_current_actor)):
    project = get_or_404(db, Project, project_id, "Project")
    tasks = (
        db.query(Task)
        .filter(Task.project_id == project.id)
        .order_by(Task.created_at.desc(), Task.id.desc())
        .all()
    )
    return [task_out(task) for task in tasks]


@router.get("/{task_id}", response_model=TaskOut)
def get_task(task_id: str, db: Session = Depends(get_db), actor: UserOut = Depends(get_current_actor)):
    return task_out(get_or_404(db, Task, task_id, "Task"))


@router.post("", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
def create_task(
    task: TaskCreate,
    db: Session = Depends(get_db),
    actor: UserOut = Depends(get_current_actor),
):
    """Create a task - admins, or managers who are members of the project"""
    db_project = get_or_404(db, Project, task.project_id, "Project")
    assignee_id = _assignee_id(db, task.assigned_to)
    if not can_create_task(actor, project_out(db_project)):
        logger.warning(f"User {actor.id} ({actor.role}) denied task creation in project {db_project.id}")
        raise AuthorizationError("Only admins, or managers who are project members, can create tasks")

    db_task = Task(
        title=task.title,
        description=task.description,
        status=task.status or DEFAULT_TASK_STATUS,
        priority=task.priority or DEFAULT_PRIORITY,
        due_date=task.due_date,
        project_id=db_project.id,
        assigned_to=assignee_id,
        created_by=int(actor.id),
    )
    db.add(db_task)
    commit_or_500(db, "create task")
    db.refresh(db_task)

    logger.info(f"Task {db_task.id} created in project {db_project.id} by user {actor.id}")
    return task_out(db_task)


@router.put("/{task_id}", response_model=TaskOut)
def update_task(
    task_id: str,
    task_update: TaskUpdate,
    db: Session = Depends(get_db),
    actor: UserOut = Depends(get_current_actor),
):
    """Partial update - admins, or managers assigned to the task or in its project"""
    db_task = get_or_404(db, Task, task_id, "Task")
    if not can_modify_task(actor, task_out(db_task), project_out(db_task.project)):
        raise AuthorizationError("Not authorized to update this task")

    update_data = task_update.model_dump(exclude_unset=True)

    if update_data.get("project_id"):
        target = get_or_404(db, Project, update_data["project_id"], "Project")
        if target.id != db_task.project_id and not can_create_task(actor, project_out(target)):
            raise AuthorizationError("Not authorized to move tasks into this project")
        update_data["project_id"] = target.id
    else:
        update_data.pop("project_id", None)

    if "assigned_to" in update_data:
        update_data["assigned_to"] = _assignee_id(db, update_data["assigned_to"])

    for field in ("title", "status", "priority"):
        if update_data.get(field) is None:
            update_data.pop(field, None)
    if "description" in update_data and update_data["description"] is None:
        update_data["description"] = ""

    for field, value in update_data.items():
        setattr(db_task, field, value)

    commit_or_500(db, "update task")
    db.refresh(db_task)
    return task_out(db_task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: str, db: Session = Depends(get_db), actor: UserOut = Depends(get_current_actor)):
    """Delete a task and its comments"""
    db_task = get_or_404(db, Task, task_id, "Task")
    if not can_modify_task(actor, task_out(db_task), project_out(db_task.project)):
        raise AuthorizationError("Not authorized to delete this task")

    db.delete(db_task)
    commit_or_500(db, "delete task")
    logger.info(f"Task {task_id} deleted by user {actor.id}")
    return None
