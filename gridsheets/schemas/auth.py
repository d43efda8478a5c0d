"""
schemas/auth.py
----------------

Pydantic models for signup, login and logout.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class Credentials(BaseModel):
    # Blank usernames are rejected by the services with a 400.
    username: str
    password: str = Field(min_length=1)

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value


class SignupResponse(BaseModel):
    success: bool
    message: str


class LoginResponse(BaseModel):
    success: bool
    token: Optional[str] = None


class LogoutResponse(BaseModel):
    success: bool = True
