# taskhub/utils/auth.py
import logging
from typing import Optional
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session
from taskhub.config.settings import Settings
from taskhub.database import get_db
from taskhub.models.user import User
from taskhub.schemas.user import UserOut
from taskhub.services.records import user_record
from taskhub.utils.errors import AuthenticationError
from taskhub.utils.normalize import normalize_user

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    payload = verify_token(token)
    if payload is None:
        raise AuthenticationError()

    subject = payload.get("sub")
    if subject is None or not str(subject).isdigit():
        raise AuthenticationError()

    user = db.query(User).filter(User.id == int(subject)).first()
    if user is None:
        logger.info(f"Token for unknown user {subject} rejected")
        raise AuthenticationError()
    return user


def get_current_actor(current_user: User = Depends(get_current_user)) -> UserOut:
    """The authenticated user as a canonical record, for the access policy"""
    return normalize_user(user_record(current_user))


def verify_token(token: str) -> Optional[dict]:
    """Verify JWT token and return payload without raising exceptions"""
    try:
        return jwt.decode(token, Settings.SECRET_KEY, algorithms=[Settings.ALGORITHM])
    except JWTError:
        return None
