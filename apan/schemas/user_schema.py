# apan/schemas/user_schema.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


# Request bodies keep every field optional: presence is checked in the
# handlers so a missing field is a 400, not a 422.
class RegisterRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class ForgotPasswordRequest(BaseModel):
    email: Optional[str] = None


class ResetPasswordRequest(BaseModel):
    password: Optional[str] = None


class UserUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: str


class UserDetail(UserRead):
    created_at: datetime


class LoginResponse(BaseModel):
    message: str
    token: str
    token_type: str = "bearer"
    user: UserRead


# identity carried by the bearer token
class TokenUser(BaseModel):
    id: int
    email: str


class MessageResponse(BaseModel):
    message: str
