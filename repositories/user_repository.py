# backend/repositories/user_repository.py
from database.connection import get_db
from bson import ObjectId
from bson.errors import InvalidId
from datetime import datetime, timezone
from pymongo import ReturnDocument
from pymongo.collection import Collection
from typing import Optional
import logging

logger = logging.getLogger("repositories.users")

# ============================================================
# 🗂️ Colección de usuarios
# ============================================================
def users_collection() -> Collection:
    return get_db()["users"]

def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()

def to_object_id(value: str) -> Optional[ObjectId]:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None

# ------------------------------------------------------------
# 🔹 Serialización segura de usuario
# ------------------------------------------------------------
def serialize_user(user: dict) -> Optional[dict]:
    """Convierte ObjectId a str y limpia campos no serializables."""
    if not user:
        return None
    return {
        "id": str(user["_id"]),
        "name": user.get("name"),
        "email": user.get("email"),
        "created_at": user.get("created_at"),
        "updated_at": user.get("updated_at"),
    }

# ------------------------------------------------------------
# 🔹 Crear usuario
# ------------------------------------------------------------
def create_user(name: str, email: str, password_hash: str) -> dict:
    """Inserta el usuario; DuplicateKeyError se propaga si el email ya existe."""
    created_at = now_iso()
    user_doc = {
        "name": name,
        "email": email,
        "password": password_hash,
        "created_at": created_at,
        "updated_at": created_at,
    }
    result = users_collection().insert_one(user_doc)
    user_doc["_id"] = result.inserted_id
    logger.info(f"✅ Usuario creado con ID {result.inserted_id}")
    return serialize_user(user_doc)

# ------------------------------------------------------------
# 🔹 Obtener usuario por email / ID
# ------------------------------------------------------------
def get_user_by_email(email: str, with_password: bool = False) -> Optional[dict]:
    user = users_collection().find_one({"email": email})
    if not user:
        return None
    if with_password:
        return {**serialize_user(user), "password": user.get("password")}
    return serialize_user(user)

def get_user_by_id(user_id: str) -> Optional[dict]:
    obj_id = to_object_id(user_id)
    if obj_id is None:
        logger.warning(f"⚠️ ID de usuario inválido: {user_id}")
        return None
    return serialize_user(users_collection().find_one({"_id": obj_id}))

# ------------------------------------------------------------
# 🔹 Actualizar usuario
# ------------------------------------------------------------
def update_user(user_id: str, changes: dict) -> Optional[dict]:
    obj_id = to_object_id(user_id)
    if obj_id is None:
        return None
    update = dict(changes)
    update["updated_at"] = now_iso()
    doc = users_collection().find_one_and_update(
        {"_id": obj_id},
        {"$set": update},
        return_document=ReturnDocument.AFTER,
    )
    if doc:
        logger.info(f"📝 Usuario actualizado: {user_id}")
    return serialize_user(doc)
