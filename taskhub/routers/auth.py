# taskhub/routers/auth.py
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from taskhub.database import get_db
from taskhub.models.user import User
from taskhub.schemas.user import UserCreate, UserLogin, UserOut, ProfileUpdate, PasswordUpdate
from taskhub.schemas.tokens import Token
from taskhub.services.records import user_record
from taskhub.utils.auth import get_current_user
from taskhub.utils.errors import AuthenticationError, ConflictError, ValidationError
from taskhub.utils.normalize import normalize_user
from taskhub.utils.security import hash_password, verify_password, create_access_token

logger = logging.getLogger(__name__)

router = APIRouter()


def _token_response(user: User) -> dict:
    token = create_access_token(data={"sub": str(user.id)})
    return {
        "access_token": token,
        "token_type": "bearer",
        "user": normalize_user(user_record(user)),
    }


def _email_taken(db: Session, email: str, exclude_id: int = None) -> bool:
    query = db.query(User).filter(User.email == email)
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    return query.first() is not None


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
def register(user: UserCreate, db: Session = Depends(get_db)):
    """Self-service registration; new accounts always get the `user` role"""
    email = user.email.lower()
    if _email_taken(db, email):
        raise ConflictError("Email already registered")

    new_user = User(
        name=user.name,
        email=email,
        hashed_password=hash_password(user.password),
        role="user",
    )
    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        # Another registration claimed the email after the check above
        db.rollback()
        raise ConflictError("Email already registered")
    db.refresh(new_user)

    logger.info(f"Registered user {new_user.id} ({new_user.email})")
    return _token_response(new_user)


@router.post("/login", response_model=Token)
def login(user: UserLogin, db: Session = Depends(get_db)):
    db_user = db.query(User).filter(User.email == user.email.lower()).first()
    if not db_user or not verify_password(user.password, db_user.hashed_password):
        logger.info(f"Failed login for {user.email}")
        raise AuthenticationError("Invalid credentials")
    return _token_response(db_user)


@router.get("/profile", response_model=UserOut)
def get_profile(current_user: User = Depends(get_current_user)):
    return normalize_user(user_record(current_user))


@router.put("/profile", response_model=UserOut)
def update_profile(
    profile: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update own name/email, and the password when both passwords are given"""
    if profile.new_password:
        if not profile.current_password:
            raise ValidationError("currentPassword", "Current password is required to set a new password")
        if not verify_password(profile.current_password, current_user.hashed_password):
            raise ValidationError("currentPassword", "Current password is incorrect")

    if profile.email:
        email = profile.email.lower()
        if email != current_user.email and _email_taken(db, email, exclude_id=current_user.id):
            raise ConflictError("Email already registered")
        current_user.email = email
    if profile.name:
        current_user.name = profile.name
    if profile.new_password:
        current_user.hashed_password = hash_password(profile.new_password)

    db.commit()
    db.refresh(current_user)
    return normalize_user(user_record(current_user))


@router.put("/update-password")
def update_password(
    passwords: PasswordUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not verify_password(passwords.current_password, current_user.hashed_password):
        raise ValidationError("currentPassword", "Current password is incorrect")

    current_user.hashed_password = hash_password(passwords.new_password)
    db.commit()
    logger.info(f"User {current_user.id} changed their password")
    return {"message": "Password updated successfully"}
