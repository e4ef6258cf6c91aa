"""
Pydantic schemas for identities, login and user administration
"""
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from enum import Enum
from datetime import datetime


class Role(str, Enum):
    """User roles; adding a role means extending this enum and HOME_VIEWS"""
    STUDENT = "student"
    MENTOR = "mentor"
    ADMIN = "admin"


class Identity(BaseModel):
    """An authenticated user record"""
    id: str
    email: str
    name: str
    role: Role
    created_at: datetime

    class Config:
        from_attributes = True
        frozen = True


class UserCreate(BaseModel):
    """Admin request for a new user"""
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    role: Role = Role.STUDENT
    password: str


class UserUpdate(BaseModel):
    """Admin edit of an existing user"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    role: Optional[Role] = None


class PasswordReset(BaseModel):
    new_password: str
    confirm_password: str


class LoginRequest(BaseModel):
    email: str
    password: str
    next: Optional[str] = None


class LoginResponse(BaseModel):
    identity: Identity
    redirect_to: str


class SessionStateResponse(BaseModel):
    identity: Optional[Identity] = None
    loading: bool
