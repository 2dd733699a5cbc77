# client/session.py
"""
Sesión del cliente Python.

Reemplaza el localStorage del navegador: el token y el usuario en caché
viven en un objeto explícito que se carga y se guarda en puntos
concretos (login, registro, perfil, logout).
"""
import json
import logging
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger("client.session")

PathLike = Union[str, Path]


class Session:
    def __init__(self, token: Optional[str] = None, user: Optional[dict] = None, path: Optional[PathLike] = None):
        self.token = token
        self.user = user
        self.path = Path(path) if path else None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @classmethod
    def load(cls, path: PathLike) -> "Session":
        """Lee la sesión desde disco; un archivo ausente o corrupto da una sesión vacía."""
        path = Path(path)
        if not path.exists():
            return cls(path=path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"⚠️ No se pudo leer la sesión {path}: {e}")
            return cls(path=path)
        if not isinstance(data, dict):
            logger.warning(f"⚠️ Sesión con formato inesperado en {path}, se ignora")
            return cls(path=path)
        return cls(token=data.get("token"), user=data.get("user"), path=path)

    def save(self, path: Optional[PathLike] = None) -> None:
        target = Path(path) if path else self.path
        if target is None:
            return
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(
            json.dumps({"token": self.token, "user": self.user}, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        self.path = target

    def update(self, token: Optional[str] = None, user: Optional[dict] = None) -> None:
        if token is not None:
            self.token = token
        if user is not None:
            self.user = user
        self.save()

    def clear(self) -> None:
        self.token = None
        self.user = None
        self.save()
