"""
HealthTrack Backend — Authentication Schemas
=============================================

Request fields are Optional on purpose: a missing or empty field must
produce the service's 400 "All fields required" rather than FastAPI's
generic schema error, so presence is checked in AuthService.

Lengths are capped at the users table's VARCHAR(255) columns so an
over-long value is a 400 here rather than a driver error on insert.
"""

from typing import Optional

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    name: Optional[str] = Field(default=None, max_length=255, description="Display name")
    email: Optional[str] = Field(default=None, max_length=255, description="Login email (unique)")
    password: Optional[str] = Field(default=None, description="Plain-text password")


class RegisterResponse(BaseModel):
    message: str = Field(default="User registered successfully")
    user_id: int = Field(serialization_alias="userId", description="New user's id")


class LoginRequest(BaseModel):
    email: Optional[str] = Field(default=None)
    password: Optional[str] = Field(default=None)


class TokenResponse(BaseModel):
    """Signed bearer token; send back as `Authorization: Bearer <token>`."""
    token: str = Field(description="HS256 JWT carrying the user id, valid for 7 days")
