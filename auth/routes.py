# backend/auth/routes.py
from fastapi import APIRouter, status
from core.handlers import envelope
from .models import UserRegister, UserLogin
from .controllers import register_user, login_with_password

router = APIRouter()

# ------------------------------------------------------------
# 🔹 Registro
# ------------------------------------------------------------
@router.post("/register", status_code=status.HTTP_201_CREATED, summary="Registrar nuevo usuario")
def register(data: UserRegister):
    return envelope(True, "Usuario registrado con éxito.", data=register_user(data))

# ------------------------------------------------------------
# 🔹 Login
# ------------------------------------------------------------
@router.post("/login", summary="Iniciar sesión con email y password")
def login(data: UserLogin):
    return envelope(True, "Login exitoso.", data=login_with_password(data))
