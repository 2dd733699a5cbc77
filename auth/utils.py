# backend/auth/utils.py
import jwt
import bcrypt
from datetime import datetime, timedelta, timezone
from typing import Optional
from config import settings
from core.errors import AuthError
from models.constraints import password_fits_bcrypt

# =====================================================
# 🔹 Hashing
# =====================================================
def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode()

def verify_password(password: str, hashed: str) -> bool:
    if not hashed or not password_fits_bcrypt(password):
        return False
    return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))

# =====================================================
# 🔹 Tokens (JWT firmado, sin sesión en servidor)
# =====================================================
def create_access_token(user_id: str, expires_minutes: Optional[int] = None) -> str:
    if expires_minutes is None:
        expires_minutes = settings.JWT_EXPIRE_MINUTES
    issued_at = datetime.now(timezone.utc)
    payload = {
        "id": user_id,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=expires_minutes),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

def decode_access_token(token: str) -> str:
    """Valida firma y expiración; devuelve el ID de usuario embebido."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthError("Token expirado.") from None
    except jwt.InvalidTokenError:
        raise AuthError("Token inválido.") from None
    user_id = payload.get("id")
    if not isinstance(user_id, str) or not user_id:
        raise AuthError("Token inválido.")
    return user_id

def extract_bearer_token(authorization: Optional[str]) -> str:
    if not authorization:
        raise AuthError("No autorizado, no se envió token.")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthError("No autorizado, no se envió token.")
    return token.strip()
