# backend/users/routes.py
from fastapi import APIRouter, Depends
from auth.dependencies import get_current_user_id
from core.handlers import envelope
from models.user import UserProfileUpdate
from .controllers import get_profile, update_profile

router = APIRouter()

# ------------------------------------------------------------
# 🔹 Obtener perfil
# ------------------------------------------------------------
@router.get("/profile", summary="Perfil del usuario autenticado")
def read_profile(user_id: str = Depends(get_current_user_id)):
    return envelope(True, data={"user": get_profile(user_id)})

# ------------------------------------------------------------
# 🔹 Actualizar perfil
# ------------------------------------------------------------
@router.put("/profile", summary="Actualizar nombre o email")
def edit_profile(data: UserProfileUpdate, user_id: str = Depends(get_current_user_id)):
    user = update_profile(user_id, data)
    return envelope(True, "Perfil actualizado correctamente.", data={"user": user})
