# client/api.py
import logging
from typing import Any, Dict, List, Optional

import requests

from auth.models import UserLogin, UserRegister
from config import settings
from models.task import TaskCreate, TaskFilter, TaskUpdate
from models.user import UserProfileUpdate

from .session import Session

logger = logging.getLogger("client.api")


class ApiClientError(Exception):
    """Error devuelto por la API (o de red) en formato uniforme."""

    def __init__(self, message: str, errors: Optional[List[Dict]] = None, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []
        self.status = status


class TaskboardClient:
    """
    Cliente de la API de tareas.

    `http` puede ser cualquier objeto con `.request(method, url, **kwargs)`
    (requests.Session por defecto, o el TestClient de FastAPI en pruebas).
    Los payloads se construyen con los mismos modelos pydantic que valida
    el servidor, así que un dato inválido falla antes de salir a la red.
    """

    def __init__(self, base_url: Optional[str] = None, session: Optional[Session] = None, http=None, timeout: float = 10):
        self.base_url = (base_url or settings.API_URL).rstrip("/")
        self.session = session if session is not None else Session()
        self.http = http if http is not None else requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------
    # 🔹 Transporte
    # ------------------------------------------------------------
    def _request(self, method: str, path: str, json: Any = None, params: Optional[dict] = None) -> dict:
        headers = {}
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"
        url = f"{self.base_url}{path}"
        try:
            resp = self.http.request(method, url, json=json, params=params, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"❌ Error de red en {method} {url}: {e}")
            raise ApiClientError(f"Error de conexión: {e}") from e

        try:
            body = resp.json()
        except ValueError:
            body = {}

        if resp.status_code == 401:
            # token vencido o inválido: se descarta la sesión local
            self.session.clear()
        if resp.status_code >= 400:
            raise ApiClientError(
                body.get("message") or "Ocurrió un error.",
                body.get("errors", []),
                resp.status_code,
            )
        return body

    def _store_auth(self, body: dict) -> dict:
        data = body.get("data") or {}
        if body.get("success") and data.get("token"):
            self.session.update(token=data["token"], user=data.get("user"))
        return body

    # ------------------------------------------------------------
    # 🔹 Autenticación
    # ------------------------------------------------------------
    def register(self, name: str, email: str, password: str) -> dict:
        payload = UserRegister(name=name, email=email, password=password).model_dump(mode="json")
        return self._store_auth(self._request("POST", "/auth/register", json=payload))

    def login(self, email: str, password: str) -> dict:
        payload = UserLogin(email=email, password=password).model_dump(mode="json")
        return self._store_auth(self._request("POST", "/auth/login", json=payload))

    def logout(self) -> None:
        self.session.clear()

    def is_authenticated(self) -> bool:
        return self.session.is_authenticated

    # ------------------------------------------------------------
    # 🔹 Perfil
    # ------------------------------------------------------------
    def get_profile(self) -> dict:
        body = self._request("GET", "/users/profile")
        self.session.update(user=(body.get("data") or {}).get("user"))
        return body

    def update_profile(self, name: Optional[str] = None, email: Optional[str] = None) -> dict:
        payload = UserProfileUpdate(name=name, email=email).model_dump(mode="json", exclude_none=True)
        body = self._request("PUT", "/users/profile", json=payload)
        self.session.update(user=(body.get("data") or {}).get("user"))
        return body

    # ------------------------------------------------------------
    # 🔹 Tareas
    # ------------------------------------------------------------
    def list_tasks(self, search: Optional[str] = None, status: Optional[str] = None) -> dict:
        filters = TaskFilter(search=search, status=status)
        params = {}
        if filters.search:
            params["search"] = filters.search
        if filters.status:
            params["status"] = filters.status.value
        return self._request("GET", "/tasks", params=params or None)

    def get_task(self, task_id: str) -> dict:
        return self._request("GET", f"/tasks/{task_id}")

    def create_task(self, title: str, description: str, status: Optional[str] = None) -> dict:
        fields = {"title": title, "description": description}
        if status is not None:
            fields["status"] = status
        payload = TaskCreate(**fields).model_dump(mode="json")
        return self._request("POST", "/tasks", json=payload)

    def update_task(self, task_id: str, **fields) -> dict:
        return self._request("PUT", f"/tasks/{task_id}", json=TaskUpdate(**fields).changes())

    def delete_task(self, task_id: str) -> dict:
        return self._request("DELETE", f"/tasks/{task_id}")
