import re
from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional, List

_PHONE_RE = re.compile(r"^[0-9]{10}$")


def _check_phone(v):
    if v is None:
        return None
    v = str(v).strip()
    if not v:
        return None
    if not _PHONE_RE.match(v):
        raise ValueError("Please enter a valid 10-digit phone number")
    return v


class UserCreate(BaseModel):
    email: EmailStr
    password: str
    full_name: Optional[str] = Field(default=None, validate_default=True)
    phone: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        if v is None or not str(v).strip():
            raise ValueError("Email is required")
        return str(v).strip().lower()

    @field_validator("password")
    @classmethod
    def password_length(cls, v):
        if not v:
            raise ValueError("Password is required")
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v

    @field_validator("full_name", mode="before")
    @classmethod
    def full_name_required(cls, v):
        if v is None or not str(v).strip():
            raise ValueError("Full name is required")
        v = str(v).strip()
        if len(v) < 2:
            raise ValueError("Full name must be at least 2 characters")
        return v

    @field_validator("phone", mode="before")
    @classmethod
    def phone_digits(cls, v):
        return _check_phone(v)


class UserLogin(BaseModel):
    email: EmailStr
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return str(v or "").strip().lower()


class ProfileUpdate(BaseModel):
    full_name: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("full_name", mode="before")
    @classmethod
    def full_name_not_blank(cls, v):
        if v is None or not str(v).strip():
            raise ValueError("Full name is required")
        return str(v).strip()

    @field_validator("phone", mode="before")
    @classmethod
    def phone_digits(cls, v):
        return _check_phone(v)


class PasswordReset(BaseModel):
    email: EmailStr


class ProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    phone: Optional[str] = None
    role: str = "user"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class IdentityOut(BaseModel):
    id: str
    email: Optional[str] = None
    user_metadata: dict = {}


class SessionOut(BaseModel):
    user: IdentityOut
    profile: ProfileOut
    is_admin: bool


class SignupResponse(BaseModel):
    message: str
    user: Optional[IdentityOut] = None


class LoginResponse(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    user: IdentityOut


class UserRoleOut(BaseModel):
    id: str
    role: str


class UserListResponse(BaseModel):
    users: List[ProfileOut]


class MakeAdminIn(BaseModel):
    userId: Optional[str] = None
