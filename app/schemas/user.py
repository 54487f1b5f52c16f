from pydantic import EmailStr, Field
from typing import List
from datetime import datetime
from enum import Enum

from .common import CamelModel


class UserRole(str, Enum):
    """أدوار المستخدمين - يجب أن تتطابق مع models/user.py"""
    ADMIN = "admin"
    USER = "user"


class UserSummary(CamelModel):
    """Display subset used wherever a user is referenced from another record"""
    id: str
    full_name: str
    username: str
    email: str


class UserResponse(UserSummary):
    role: UserRole
    is_active: bool
    created_at: datetime


class UserSearchResponse(CamelModel):
    users: List[UserResponse]


class RegisterRequest(CamelModel):
    full_name: str = Field(..., min_length=1, max_length=200, description="الاسم الكامل")
    username: str = Field(..., min_length=3, max_length=50, description="اسم المستخدم")
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128, description="كلمة المرور")


class LoginRequest(CamelModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class Token(CamelModel):
    access_token: str
    token_type: str = "bearer"
