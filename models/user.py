# backend/models/user.py
from typing import Optional

from pydantic import BaseModel, EmailStr, field_validator

from auth.models import UserName
from models.constraints import normalize_email


class UserProfileUpdate(BaseModel):
    name: Optional[UserName] = None
    email: Optional[EmailStr] = None

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, v):
        return normalize_email(v) if isinstance(v, str) else v
