"""Schemas for the admin login/session endpoints."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    login: str = ""
    password: str = ""


class LoginResponse(BaseModel):
    success: bool
    user: Optional[str] = None
    message: Optional[str] = None


class SessionStatus(BaseModel):
    logged_in: bool = Field(alias="loggedIn")
    user: Optional[str] = None

    model_config = {"populate_by_name": True}


class LogoutResponse(BaseModel):
    success: bool
