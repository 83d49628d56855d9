# fridge/schemas/auth.py
"""
Pydantic schemas for authentication and profile endpoints.
Email and pseudo are normalized (trimmed, lower-cased) here, before they
reach the uniqueness checks.
"""
from typing import Optional

from pydantic import BaseModel, Field, constr, field_validator

EMAIL_PATTERN = r"^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,})+$"

Name = constr(strip_whitespace=True, min_length=1, max_length=64)
Pseudo = constr(strip_whitespace=True, to_lower=True, min_length=3, max_length=10)
Email = constr(strip_whitespace=True, to_lower=True, pattern=EMAIL_PATTERN, max_length=256)


class RegisterIn(BaseModel):
    """Registration always creates a regular "user"; there is no role field."""
    name: Name
    lastname: Name
    pseudo: Pseudo
    email: Email
    password: str = Field(min_length=6)


class LoginRequest(BaseModel):
    email: Email
    password: str = Field(min_length=1)


class ProfileUpdateIn(BaseModel):
    name: Optional[Name] = None
    lastname: Optional[Name] = None
    pseudo: Optional[Pseudo] = None
    profilePicture: Optional[str] = None

    @field_validator("profilePicture")
    @classmethod
    def _strip_picture(cls, v):
        return v.strip() if v is not None else v


class ChangePasswordIn(BaseModel):
    currentPassword: str = Field(min_length=1)
    newPassword: str = Field(min_length=6)

