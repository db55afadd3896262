from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from audioscribe.schemas.base import IdentifiedBase


class SignupRequest(BaseModel):
    """User signup body"""
    email: EmailStr
    password: str = Field(..., min_length=1)
    name: Optional[str] = None


class LoginRequest(BaseModel):
    """User login body

    ``email`` is not format-checked so that any unknown address gets the
    same answer as a wrong password.
    """
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserOut(BaseModel):
    """User output schema without the password digest"""
    id: UUID
    email: str
    name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class UserCreated(IdentifiedBase):
    """User returned after signup"""
    email: str
    name: Optional[str] = None


class SignupResponse(BaseModel):
    message: str = "Signup successful!"
    user: UserCreated


class LoginResponse(BaseModel):
    success: bool = True
    message: str = "Login successful!"
    user: UserOut
