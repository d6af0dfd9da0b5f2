# taskhub/routers/project.py
import logging
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List, Optional

from taskhub.database import get_db
from taskhub.models.project import Project
from taskhub.models.user import User
from taskhub.schemas.project import ProjectCreate, ProjectUpdate, ProjectOut, ProjectMemberAdd, ProjectMembers
from taskhub.schemas.user import UserOut
from taskhub.services.lookups import get_or_404, commit_or_500
from taskhub.services.records import project_record
from taskhub.utils.access_policy import can_create_project, can_modify_project
from taskhub.utils.auth import get_current_actor
from taskhub.utils.errors import AuthorizationError, ValidationError
from taskhub.utils.normalize import normalize_project
from taskhub.utils.vocabulary import DEFAULT_PROJECT_STATUS

logger = logging.getLogger(__name__)

router = APIRouter()

SORT_FIELDS = {
    "createdAt": Project.created_at,
    "updatedAt": Project.updated_at,
    "title": Project.title,
}


def project_out(db_project: Project) -> ProjectOut:
    return normalize_project(project_record(db_project))


def _load_members(db: Session, member_ids: List[str]) -> List[User]:
    """Resolve member ids in order, dropping repeats; unknown ids are 404"""
    members = []
    seen = set()
    for member_id in member_ids:
        if member_id in seen:
            continue
        seen.add(member_id)
        members.append(get_or_404(db, User, member_id, "User"))
    return members


def _order_by(sort: str):
    field, _, direction = sort.partition(":")
    column = SORT_FIELDS.get(field)
    if column is None or direction.lower() not in ("", "asc", "desc"):
        raise ValidationError("sort", f"Sort must be one of {', '.join(SORT_FIELDS)} with :asc or :desc")
    return column.asc() if direction.lower() == "asc" else column.desc()


@router.get("", response_model=List[ProjectOut])
def get_all_projects(
    limit: Optional[int] = Query(None, ge=1, le=500),
    sort: str = Query("createdAt:desc"),
    status_filter: Optional[str] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    actor: UserOut = Depends(get_current_actor),
):
    """List projects, newest first unless `sort` says otherwise"""
    query = db.query(Project)
    if status_filter:
        query = query.filter(Project.status == status_filter)
    query = query.order_by(_order_by(sort), Project.id.desc())
    if limit:
        query = query.limit(limit)
    return [project_out(project) for project in query.all()]


@router.get("/{project_id}", response_model=ProjectOut)
def get_project(project_id: str, db: Session = Depends(get_db), actor: UserOut = Depends(get_current_actor)):
    return project_out(get_or_404(db, Project, project_id, "Project"))


@router.post("", response_model=ProjectOut, status_code=status.HTTP_201_CREATED)
def create_project(
    project_data: ProjectCreate,
    db: Session = Depends(get_db),
    actor: UserOut = Depends(get_current_actor),
):
    """Create a project - admins and managers only"""
    if not can_create_project(actor):
        logger.warning(f"User {actor.id} ({actor.role}) denied project creation")
        raise AuthorizationError("Only admin and manager users can create projects")

    members = _load_members(db, project_data.members)
    db_project = Project(
        title=project_data.title,
        description=project_data.description,
        status=project_data.status or DEFAULT_PROJECT_STATUS,
        created_by=int(actor.id),
    )
    db_project.members = members
    db.add(db_project)
    commit_or_500(db, "create project")
    db.refresh(db_project)

    logger.info(f"Project {db_project.id} '{db_project.title}' created by user {actor.id}")
    return project_out(db_project)


@router.put("/{project_id}", response_model=ProjectOut)
def update_project(
    project_id: str,
    project_update: ProjectUpdate,
    db: Session = Depends(get_db),
    actor: UserOut = Depends(get_current_actor),
):
    """Update a project - any admin or manager, regardless of who created it"""
    db_project = get_or_404(db, Project, project_id, "Project")
    if not can_modify_project(actor, project_out(db_project)):
        raise AuthorizationError("Only admin and manager users can edit projects")

    members = None
    if project_update.members is not None:
        members = _load_members(db, project_update.members)

    update_data = project_update.model_dump(exclude_unset=True, exclude_none=True, exclude={"members"})
    for field, value in update_data.items():
        setattr(db_project, field, value)
    if members is not None:
        db_project.members = members

    commit_or_500(db, "update project")
    db.refresh(db_project)
    return project_out(db_project)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(project_id: str, db: Session = Depends(get_db), actor: UserOut = Depends(get_current_actor)):
    """Delete a project together with its tasks and their comments"""
    db_project = get_or_404(db, Project, project_id, "Project")
    if not can_modify_project(actor, project_out(db_project)):
        raise AuthorizationError("Only admin and manager users can delete projects")

    task_count = len(db_project.tasks)
    db.delete(db_project)
    commit_or_500(db, "delete project")
    logger.info(f"Project {project_id} deleted by user {actor.id} ({task_count} tasks removed)")
    return None


@router.get("/{project_id}/members", response_model=ProjectMembers)
def get_project_members(project_id: str, db: Session = Depends(get_db), actor: UserOut = Depends(get_current_actor)):
    project = project_out(get_or_404(db, Project, project_id, "Project"))
    return ProjectMembers(members=project.members)


@router.post("/{project_id}/members", response_model=ProjectOut)
def add_project_member(
    project_id: str,
    member: ProjectMemberAdd,
    db: Session = Depends(get_db),
    actor: UserOut = Depends(get_current_actor),
):
    """Add a member; adding someone who is already a member changes nothing"""
    db_project = get_or_404(db, Project, project_id, "Project")
    user = get_or_404(db, User, member.user_id, "User")
    if not can_modify_project(actor, project_out(db_project)):
        raise AuthorizationError("Only admin and manager users can change project members")

    if user in db_project.members:
        return project_out(db_project)

    db_project.members.append(user)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent request inserted the same (project, user) row first
        db.rollback()
        logger.info(f"User {user.id} is already a member of project {db_project.id}")
    else:
        logger.info(f"User {user.id} added to project {db_project.id} by user {actor.id}")

    db.refresh(db_project)
    return project_out(db_project)


@router.delete("/{project_id}/members/{user_id}", response_model=ProjectOut)
def remove_project_member(
    project_id: str,
    user_id: str,
    db: Session = Depends(get_db),
    actor: UserOut = Depends(get_current_actor),
):
    db_project = get_or_404(db, Project, project_id, "Project")
    user = get_or_404(db, User, user_id, "User")
    if not can_modify_project(actor, project_out(db_project)):
        raise AuthorizationError("Only admin and manager users can change project members")

    if user in db_project.members:
        db_project.members.remove(user)
        commit_or_500(db, "remove project member")
        db.refresh(db_project)
        logger.info(f"User {user.id} removed from project {db_project.id} by user {actor.id}")
    return project_out(db_project)
