# backend/tasks/routes.py
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from auth.dependencies import get_current_user_id
from core.handlers import envelope
from models.task import TaskCreate, TaskFilter, TaskUpdate
from .controllers import add_task, edit_task, fetch_task, list_tasks, remove_task
import logging

router = APIRouter()
LOG = logging.getLogger("tasks.routes")

# ============================================================
# 🔹 Listar tareas (búsqueda y filtro por estado)
# ============================================================
@router.get("", summary="Listar tareas del usuario")
def list_tasks_route(
    filters: Annotated[TaskFilter, Query()],
    user_id: str = Depends(get_current_user_id),
):
    tasks = list_tasks(user_id, filters)
    LOG.info(f"📜 {len(tasks)} tarea(s) para usuario {user_id}")
    return envelope(True, count=len(tasks), data={"tasks": tasks})

# ============================================================
# 🔹 Crear tarea
# ============================================================
@router.post("", status_code=status.HTTP_201_CREATED, summary="Crear tarea")
def create_task_route(data: TaskCreate, user_id: str = Depends(get_current_user_id)):
    task = add_task(user_id, data)
    return envelope(True, "Tarea creada correctamente.", data={"task": task})

# ============================================================
# 🔹 Obtener tarea por ID
# ============================================================
@router.get("/{task_id}", summary="Obtener tarea por ID")
def get_task_route(task_id: str, user_id: str = Depends(get_current_user_id)):
    return envelope(True, data={"task": fetch_task(user_id, task_id)})

# ============================================================
# 🔹 Actualizar tarea
# ============================================================
@router.put("/{task_id}", summary="Actualizar tarea")
def update_task_route(task_id: str, data: TaskUpdate, user_id: str = Depends(get_current_user_id)):
    task = edit_task(user_id, task_id, data)
    return envelope(True, "Tarea actualizada correctamente.", data={"task": task})

# ============================================================
# 🔹 Eliminar tarea
# ============================================================
@router.delete("/{task_id}", summary="Eliminar tarea")
def delete_task_route(task_id: str, user_id: str = Depends(get_current_user_id)):
    remove_task(user_id, task_id)
    return envelope(True, "Tarea eliminada correctamente.", data={})
