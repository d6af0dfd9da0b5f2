# taskhub/routers/user.py
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from taskhub.database import get_db
from taskhub.models.user import User
from taskhub.schemas.user import UserOut, UserUpdate
from taskhub.services.lookups import get_or_404
from taskhub.services.records import user_record
from taskhub.utils.access_policy import can_manage_users, can_view_user
from taskhub.utils.auth import get_current_actor
from taskhub.utils.errors import AuthorizationError, ConflictError
from taskhub.utils.normalize import normalize_user

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[UserOut])
def get_all_users(db: Session = Depends(get_db), actor: UserOut = Depends(get_current_actor)):
    """List all users - admin only"""
    if not can_manage_users(actor):
        raise AuthorizationError("Only admins can list users")
    return [normalize_user(user_record(user)) for user in db.query(User).order_by(User.id).all()]


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: str, db: Session = Depends(get_db), actor: UserOut = Depends(get_current_actor)):
    user = normalize_user(user_record(get_or_404(db, User, user_id, "User")))
    if not can_view_user(actor, user):
        raise AuthorizationError("Not authorized to view this user")
    return user


@router.put("/{user_id}", response_model=UserOut)
def update_user(
    user_id: str,
    user_update: UserUpdate,
    db: Session = Depends(get_db),
    actor: UserOut = Depends(get_current_actor),
):
    """Update a user's name, email or role - admin only"""
    db_user = get_or_404(db, User, user_id, "User")
    if not can_manage_users(actor):
        raise AuthorizationError("Only admins can manage users")

    update_data = user_update.model_dump(exclude_unset=True, exclude_none=True)
    if "email" in update_data:
        update_data["email"] = update_data["email"].lower()
        clash = db.query(User).filter(User.email == update_data["email"], User.id != db_user.id).first()
        if clash:
            raise ConflictError("Email already registered")

    for field, value in update_data.items():
        setattr(db_user, field, value)
    db.commit()
    db.refresh(db_user)

    if "role" in update_data:
        logger.info(f"Admin {actor.id} set role of user {db_user.id} to {db_user.role}")
    return normalize_user(user_record(db_user))
