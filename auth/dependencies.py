# backend/auth/dependencies.py
from typing import Optional

from fastapi import Header

from .controllers import verify_token
from .utils import extract_bearer_token


def get_current_user_id(authorization: Optional[str] = Header(None)) -> str:
    """Resuelve el usuario autenticado a partir de `Authorization: Bearer <token>`."""
    return verify_token(extract_bearer_token(authorization))
