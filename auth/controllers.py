# backend/auth/controllers.py
from pymongo.errors import DuplicateKeyError
from core.errors import AuthError, ConflictError, NotFoundError
from repositories.user_repository import create_user, get_user_by_email, get_user_by_id
from .utils import hash_password, verify_password, create_access_token, decode_access_token
from .models import UserRegister, UserLogin
import logging

logger = logging.getLogger("auth.controllers")

# =====================================================
# 🔹 Registrar usuario
# =====================================================
def register_user(data: UserRegister) -> dict:
    if get_user_by_email(data.email):
        logger.warning(f"⚠️ Registro rechazado, email ya existe: {data.email}")
        raise ConflictError("Ya existe un usuario con este email.")

    try:
        user = create_user(data.name, data.email, hash_password(data.password))
    except DuplicateKeyError:
        logger.warning(f"⚠️ Registro concurrente con email duplicado: {data.email}")
        raise ConflictError("Ya existe un usuario con este email.") from None

    return {"user": user, "token": create_access_token(user["id"])}

# =====================================================
# 🔹 Login con password
# =====================================================
def login_with_password(data: UserLogin) -> dict:
    user = get_user_by_email(data.email, with_password=True)
    if not user or not verify_password(data.password, user.pop("password")):
        logger.warning(f"⚠️ Credenciales inválidas para {data.email}")
        raise AuthError("Email o contraseña inválidos.")

    logger.info(f"🔐 Login exitoso: {data.email}")
    return {"user": user, "token": create_access_token(user["id"])}

# =====================================================
# 🔹 Verificar token -> ID de usuario
# =====================================================
def verify_token(token: str) -> str:
    user_id = decode_access_token(token)
    if not get_user_by_id(user_id):
        logger.warning(f"⚠️ Token válido para usuario inexistente: {user_id}")
        raise NotFoundError("Usuario no encontrado.")
    return user_id
