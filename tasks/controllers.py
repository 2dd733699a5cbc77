# backend/tasks/controllers.py
from bson import ObjectId
from core.errors import NotFoundError, OwnershipError, ValidationError
from models.task import TaskCreate, TaskFilter, TaskUpdate
from repositories.task_repository import (
    create_task,
    delete_task,
    find_tasks,
    get_task_by_id,
    update_task,
)
from typing import Dict, List
import logging

logger = logging.getLogger("tasks.controllers")

# ============================================================
# 🔹 Validación de ID + existencia + propiedad
# ============================================================
def ensure_task_id(task_id: str) -> None:
    if not ObjectId.is_valid(task_id):
        raise ValidationError(
            "ID de tarea inválido.",
            errors=[{"field": "id", "message": "Formato de ID de tarea inválido", "location": "path"}],
        )

def get_owned_task(owner_id: str, task_id: str) -> Dict:
    """Primero existencia (404), después propiedad (403)."""
    ensure_task_id(task_id)
    task = get_task_by_id(task_id)
    if not task:
        raise NotFoundError("Tarea no encontrada.")
    if task["user_id"] != owner_id:
        logger.warning(f"⚠️ Usuario {owner_id} intentó acceder a tarea ajena {task_id}")
        raise OwnershipError("No autorizado para acceder a esta tarea.")
    return task

# ============================================================
# 🔹 Operaciones
# ============================================================
def list_tasks(owner_id: str, filters: TaskFilter) -> List[Dict]:
    status = filters.status.value if filters.status else None
    return find_tasks(owner_id, search=filters.search, status=status)

def add_task(owner_id: str, data: TaskCreate) -> Dict:
    return create_task(owner_id, data.title, data.description, data.status.value)

def fetch_task(owner_id: str, task_id: str) -> Dict:
    return get_owned_task(owner_id, task_id)

def edit_task(owner_id: str, task_id: str, data: TaskUpdate) -> Dict:
    task = get_owned_task(owner_id, task_id)
    changes = data.changes()
    if not changes:
        return task
    updated = update_task(task_id, changes)
    if not updated:
        # borrada entre la lectura y la escritura
        raise NotFoundError("Tarea no encontrada.")
    return updated

def remove_task(owner_id: str, task_id: str) -> None:
    get_owned_task(owner_id, task_id)
    if not delete_task(task_id):
        raise NotFoundError("Tarea no encontrada.")
