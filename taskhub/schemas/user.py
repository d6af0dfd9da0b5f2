from pydantic import EmailStr, field_validator
from typing import Optional, Literal
from datetime import datetime
from .base import CanonicalModel, WireModel, require_text
from taskhub.utils.vocabulary import canonical_role

# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72
MIN_PASSWORD_LENGTH = 6


def check_password(value: str) -> str:
    if len(value) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


class UserRef(CanonicalModel):
    """A reference to a user, materialized with whatever display fields are known"""
    id: str
    name: str
    email: str = ""
    role: Optional[str] = None

    @property
    def is_set(self) -> bool:
        return bool(self.id)


class UserOut(CanonicalModel):
    id: str
    name: str
    email: str
    role: str
    created_at: datetime
    updated_at: datetime


class UserCreate(WireModel):
    name: str
    email: EmailStr
    password: str

    @field_validator("name")
    @classmethod
    def name_required(cls, v):
        return require_text(v, "Name")

    @field_validator("password")
    @classmethod
    def password_rules(cls, v):
        return check_password(v)


class UserLogin(WireModel):
    email: EmailStr
    password: str


class UserUpdate(WireModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    role: Optional[Literal["admin", "manager", "user"]] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v):
        return None if v is None else require_text(v, "Name")

    @field_validator("role", mode="before")
    @classmethod
    def lower_role(cls, v):
        if v is None:
            return v
        if str(v).strip().lower() != canonical_role(v):
            raise ValueError("Role must be one of: admin, manager, user")
        return canonical_role(v)


class ProfileUpdate(WireModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    current_password: Optional[str] = None
    new_password: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v):
        return None if v is None else require_text(v, "Name")

    @field_validator("new_password")
    @classmethod
    def password_rules(cls, v):
        return None if not v else check_password(v)


class PasswordUpdate(WireModel):
    current_password: str
    new_password: str

    @field_validator("new_password")
    @classmethod
    def password_rules(cls, v):
        return check_password(v)
