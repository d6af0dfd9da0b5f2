# taskhub/routers/comment.py
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional

from taskhub.database import get_db
from taskhub.models.comment import Comment
from taskhub.models.task import Task
from taskhub.models.user import User
from taskhub.schemas.comment import CommentCreate, CommentTaskCreate, CommentUpdate, CommentOut
from taskhub.schemas.user import UserOut
from taskhub.services.lookups import get_or_404, commit_or_500
from taskhub.services.records import comment_record
from taskhub.routers.task import task_out
from taskhub.utils.access_policy import can_create_comment, can_modify_comment, is_admin
from taskhub.utils.auth import get_current_actor
from taskhub.utils.errors import AuthorizationError
from taskhub.utils.normalize import normalize_comment

logger = logging.getLogger(__name__)

router = APIRouter()


def comment_out(comment: Comment) -> CommentOut:
    return normalize_comment(comment_record(comment))


def _create_comment(db: Session, actor: UserOut, task_id: str, text: str, author_id: Optional[str] = None) -> CommentOut:
    db_task = get_or_404(db, Task, task_id, "Task")

    author = int(actor.id)
    if author_id and author_id != actor.id:
        if not is_admin(actor):
            raise AuthorizationError("Only admins can comment on behalf of another user")
        author = get_or_404(db, User, author_id, "Author").id

    if not can_create_comment(actor, task_out(db_task)):
        logger.warning(f"User {actor.id} ({actor.role}) denied commenting on task {db_task.id}")
        raise AuthorizationError("Not authorized to comment on this task")

    comment = Comment(text=text, task_id=db_task.id, author_id=author)
    db.add(comment)
    commit_or_500(db, "create comment")
    db.refresh(comment)
    return comment_out(comment)


@router.post("", response_model=CommentOut, status_code=status.HTTP_201_CREATED)
def create_comment(
    comment: CommentCreate,
    db: Session = Depends(get_db),
    actor: UserOut = Depends(get_current_actor),
):
    """Create a comment; the author defaults to the caller"""
    return _create_comment(db, actor, comment.task_id, comment.text, comment.author)


@router.post("/task/{task_id}", response_model=CommentOut, status_code=status.HTTP_201_CREATED)
def create_task_comment(
    task_id: str,
    comment: CommentTaskCreate,
    db: Session = Depends(get_db),
    actor: UserOut = Depends(get_current_actor),
):
    return _create_comment(db, actor, task_id, comment.text)


@router.get("/task/{task_id}", response_model=List[CommentOut])
def get_task_comments(task_id: str, db: Session = Depends(get_db), actor: UserOut = Depends(get_current_actor)):
    """All comments for a task, newest first"""
    db_task = get_or_404(db, Task, task_id, "Task")
    comments = (
        db.query(Comment)
        .filter(Comment.task_id == db_task.id)
        .order_by(Comment.timestamp.desc(), Comment.id.desc())
        .all()
    )
    return [comment_out(comment) for comment in comments]


@router.put("/{comment_id}", response_model=CommentOut)
def update_comment(
    comment_id: str,
    comment_update: CommentUpdate,
    db: Session = Depends(get_db),
    actor: UserOut = Depends(get_current_actor),
):
    """Edit comment text - the author, or any admin or manager"""
    comment = get_or_404(db, Comment, comment_id, "Comment")
    if not can_modify_comment(actor, comment_out(comment)):
        raise AuthorizationError("Not authorized to update this comment")

    comment.text = comment_update.text
    commit_or_500(db, "update comment")
    db.refresh(comment)
    return comment_out(comment)


@router.delete("/{comment_id}")
def delete_comment(comment_id: str, db: Session = Depends(get_db), actor: UserOut = Depends(get_current_actor)):
    comment = get_or_404(db, Comment, comment_id, "Comment")
    if not can_modify_comment(actor, comment_out(comment)):
        raise AuthorizationError("Not authorized to delete this comment")

    db.delete(comment)
    commit_or_500(db, "delete comment")
    logger.info(f"Comment {comment_id} deleted by user {actor.id}")
    return {"message": "Comment removed"}
