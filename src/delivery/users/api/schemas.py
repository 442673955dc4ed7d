"""
Account API Schemas
"""
from __future__ import annotations

from datetime import datetime
from typing import Annotated, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints, field_validator

from delivery.users.domain.role import Role

# passwords are taken verbatim; every other text field is stripped
StrippedStr = Annotated[str, StringConstraints(strip_whitespace=True)]


class SignupRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    username: StrippedStr = Field(..., min_length=1, max_length=50, description="Unique login name")
    email: EmailStr = Field(..., description="Contact e-mail")
    password: str = Field(..., min_length=1, max_length=128, description="Plain text password")
    nickname: StrippedStr = Field(..., min_length=1, max_length=50, description="Display name")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        if any(ch.isspace() for ch in v):
            raise ValueError("Username must not contain whitespace")
        return v


class SigninRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    username: StrippedStr = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1, max_length=128)


class ReissueRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    refresh_token: str = Field(..., min_length=1, description="Refresh token from signin/reissue")


class TokenResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    access_token: str
    refresh_token: str
    token_type: str = "Bearer"


class UpdateProfileBody(BaseModel):
    """Omitted fields keep their stored values."""
    model_config = ConfigDict(extra="forbid")

    current_password: str = Field(..., min_length=1, description="Current password of the account")
    new_password: Optional[str] = Field(None, min_length=1, max_length=128)
    email: Optional[EmailStr] = None
    nickname: Optional[StrippedStr] = Field(None, min_length=1, max_length=50)


class UpdateRoleBody(BaseModel):
    model_config = ConfigDict(extra="forbid")

    role: Role = Field(..., description="New role: CUSTOMER, MANAGER or MASTER")


class AccountResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(..., description="Account UUID")
    username: str
    email: str
    nickname: str
    role: Role
    created_at: datetime
    updated_at: datetime
