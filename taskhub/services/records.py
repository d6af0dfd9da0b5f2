# taskhub/services/records.py
# ORM rows to wire mappings; endpoints pass these through the normalizer
from typing import Any, Dict, Optional

from taskhub.models.user import User
from taskhub.models.project import Project
from taskhub.models.task import Task
from taskhub.models.comment import Comment


def _ref(user: Optional[User]) -> Optional[Dict[str, Any]]:
    if user is None:
        return None
    return {"id": user.id, "name": user.name, "email": user.email, "role": user.role}


def user_record(user: User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "createdAt": user.created_at,
        "updatedAt": user.updated_at,
    }


def project_record(project: Project) -> Dict[str, Any]:
    return {
        "id": project.id,
        "title": project.title,
        "description": project.description,
        "status": project.status,
        "members": [_ref(member) for member in project.members],
        "createdBy": _ref(project.creator),
        "createdAt": project.created_at,
        "updatedAt": project.updated_at,
    }


def task_record(task: Task) -> Dict[str, Any]:
    project = task.project
    return {
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "status": task.status,
        "priority": task.priority,
        "dueDate": task.due_date,
        "projectId": {"id": project.id, "title": project.title} if project else task.project_id,
        "assignedTo": _ref(task.assignee),
        "createdAt": task.created_at,
        "updatedAt": task.updated_at,
    }


def comment_record(comment: Comment) -> Dict[str, Any]:
    return {
        "id": comment.id,
        "text": comment.text,
        "author": _ref(comment.author) or comment.author_id,
        "taskId": comment.task_id,
        "timestamp": comment.timestamp,
    }
