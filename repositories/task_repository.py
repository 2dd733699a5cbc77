# backend/repositories/task_repository.py
from database.connection import get_db
from repositories.user_repository import now_iso, to_object_id
from pymongo import DESCENDING, ReturnDocument
from pymongo.collection import Collection
from typing import Dict, List, Optional
import logging
import re

logger = logging.getLogger("repositories.tasks")

# ============================================================
# 🗂️ Colección de tareas
# ============================================================
def tasks_collection() -> Collection:
    return get_db()["tasks"]

# ============================================================
# 🔹 Serializador de tarea
# ============================================================
def serialize_task(doc: dict) -> Optional[Dict]:
    """Convierte un documento Mongo en un dict JSON serializable."""
    if not doc:
        return None
    return {
        "id": str(doc["_id"]),
        "title": doc.get("title"),
        "description": doc.get("description"),
        "status": doc.get("status"),
        "user_id": str(doc.get("user_id")),
        "created_at": doc.get("created_at"),
        "updated_at": doc.get("updated_at"),
    }

# ============================================================
# 🔹 Construcción de la consulta (dueño + estado + búsqueda)
# ============================================================
def build_task_query(owner_id: str, search: Optional[str] = None, status: Optional[str] = None) -> dict:
    query = {"user_id": to_object_id(owner_id)}
    if status:
        query["status"] = status
    if search:
        pattern = re.escape(search)
        query["$or"] = [
            {"title": {"$regex": pattern, "$options": "i"}},
            {"description": {"$regex": pattern, "$options": "i"}},
        ]
    return query

# ============================================================
# 🔹 Listar tareas del usuario (más recientes primero)
# ============================================================
def find_tasks(owner_id: str, search: Optional[str] = None, status: Optional[str] = None) -> List[Dict]:
    query = build_task_query(owner_id, search, status)
    cursor = tasks_collection().find(query).sort([("created_at", DESCENDING), ("_id", DESCENDING)])
    return [serialize_task(doc) for doc in cursor]

# ============================================================
# 🔹 Obtener tarea por ID (sin filtrar por dueño)
# ============================================================
def get_task_by_id(task_id: str) -> Optional[Dict]:
    obj_id = to_object_id(task_id)
    if obj_id is None:
        return None
    return serialize_task(tasks_collection().find_one({"_id": obj_id}))

# ============================================================
# 🔹 Crear tarea
# ============================================================
def create_task(owner_id: str, title: str, description: str, status: str) -> Dict:
    created_at = now_iso()
    task_doc = {
        "title": title,
        "description": description,
        "status": status,
        "user_id": to_object_id(owner_id),
        "created_at": created_at,
        "updated_at": created_at,
    }
    result = tasks_collection().insert_one(task_doc)
    task_doc["_id"] = result.inserted_id
    logger.info(f"✅ Tarea creada: {result.inserted_id} (usuario {owner_id})")
    return serialize_task(task_doc)

# ============================================================
# 🔹 Actualizar tarea
# ============================================================
def update_task(task_id: str, changes: Dict) -> Optional[Dict]:
    """Aplica solo title/description/status; user_id nunca se modifica."""
    update = {k: v for k, v in changes.items() if k in ("title", "description", "status")}
    update["updated_at"] = now_iso()
    doc = tasks_collection().find_one_and_update(
        {"_id": to_object_id(task_id)},
        {"$set": update},
        return_document=ReturnDocument.AFTER,
    )
    if doc:
        logger.info(f"📝 Tarea actualizada: {task_id}")
    return serialize_task(doc)

# ============================================================
# 🔹 Eliminar tarea
# ============================================================
def delete_task(task_id: str) -> bool:
    result = tasks_collection().delete_one({"_id": to_object_id(task_id)})
    if result.deleted_count > 0:
        logger.info(f"🗑️ Tarea eliminada: {task_id}")
        return True
    logger.warning(f"⚠️ No se encontró tarea para eliminar: {task_id}")
    return False
