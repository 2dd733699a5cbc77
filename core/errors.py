# backend/core/errors.py
"""
Errores de dominio de la API.

Cada handler lanza una variante concreta; core/handlers.py la convierte
al sobre JSON {success, message, errors}.
"""
from typing import Dict, List, Optional


class ApiError(Exception):
    status_code: int = 500
    default_message: str = "Error interno del servidor."

    def __init__(self, message: Optional[str] = None, errors: Optional[List[Dict]] = None):
        self.message = message or self.default_message
        self.errors = errors or []
        super().__init__(self.message)


class ValidationError(ApiError):
    status_code = 400
    default_message = "Datos de entrada inválidos."


class ConflictError(ApiError):
    status_code = 400
    default_message = "El recurso ya existe."


class AuthError(ApiError):
    status_code = 401
    default_message = "No autorizado."


class OwnershipError(ApiError):
    status_code = 403
    default_message = "No autorizado para acceder a este recurso."


class NotFoundError(ApiError):
    status_code = 404
    default_message = "Recurso no encontrado."


class InternalError(ApiError):
    status_code = 500
