# backend/auth/models.py
from pydantic import BaseModel, EmailStr, Field, StringConstraints, field_validator
from typing import Annotated

from models.constraints import (
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    PASSWORD_MAX_BYTES,
    PASSWORD_MIN_LENGTH,
    normalize_email,
    password_fits_bcrypt,
)

UserName = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH),
]


class UserRegister(BaseModel):
    name: UserName
    email: EmailStr
    password: str = Field(min_length=PASSWORD_MIN_LENGTH)

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, v):
        return normalize_email(v) if isinstance(v, str) else v

    @field_validator("password")
    @classmethod
    def _password_length(cls, v):
        if not password_fits_bcrypt(v):
            raise ValueError(f"La contraseña no puede superar {PASSWORD_MAX_BYTES} bytes")
        return v


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, v):
        return normalize_email(v) if isinstance(v, str) else v
