# backend/users/controllers.py
from pymongo.errors import DuplicateKeyError
from core.errors import ConflictError, NotFoundError
from models.user import UserProfileUpdate
from repositories.user_repository import get_user_by_email, get_user_by_id, update_user
import logging

logger = logging.getLogger("users.controllers")

# =====================================================
# 🔹 Perfil del usuario autenticado
# =====================================================
def get_profile(user_id: str) -> dict:
    user = get_user_by_id(user_id)
    if not user:
        raise NotFoundError("Usuario no encontrado.")
    return user

# =====================================================
# 🔹 Actualizar perfil (name / email)
# =====================================================
def update_profile(user_id: str, data: UserProfileUpdate) -> dict:
    user = get_profile(user_id)

    changes = {}
    if data.email and data.email != user["email"]:
        if get_user_by_email(data.email):
            logger.warning(f"⚠️ Email en uso, perfil no actualizado: {data.email}")
            raise ConflictError("El email ya está en uso.")
        changes["email"] = data.email
    if data.name:
        changes["name"] = data.name

    if not changes:
        return user

    try:
        updated = update_user(user_id, changes)
    except DuplicateKeyError:
        raise ConflictError("El email ya está en uso.") from None
    if not updated:
        raise NotFoundError("Usuario no encontrado.")
    return updated
