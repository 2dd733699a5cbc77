# backend/core/handlers.py
import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import settings
from core.errors import ApiError, InternalError

logger = logging.getLogger("core.handlers")

VALUE_ERROR_PREFIX = "Value error, "

# ============================================================
# 🔹 Sobre de respuesta
# ============================================================
def envelope(
    success: bool,
    message: Optional[str] = None,
    data: Optional[Dict[str, Any]] = None,
    errors: Optional[List[Dict]] = None,
    **extra,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": success}
    if message is not None:
        body["message"] = message
    body.update(extra)
    if data is not None:
        body["data"] = data
    if errors:
        body["errors"] = errors
    return body


def format_validation_errors(raw_errors) -> List[Dict]:
    """Convierte errores de pydantic al formato {field, message, location}."""
    formatted = []
    for err in raw_errors:
        loc = [str(part) for part in err.get("loc", ())]
        location = loc[0] if loc else "body"
        field = ".".join(loc[1:]) if len(loc) > 1 else location
        message = str(err.get("msg", "Valor inválido"))
        if message.startswith(VALUE_ERROR_PREFIX):
            message = message[len(VALUE_ERROR_PREFIX):]
        formatted.append({"field": field, "message": message, "location": location})
    return formatted

# ============================================================
# 🔹 Handlers
# ============================================================
async def api_error_handler(request: Request, exc: ApiError):
    if isinstance(exc, InternalError):
        logger.error(f"❌ {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=envelope(False, exc.message, errors=exc.errors),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = format_validation_errors(exc.errors())
    logger.warning(f"⚠️ Validación fallida en {request.url.path}: {len(errors)} error(es)")
    return JSONResponse(
        status_code=400,
        content=envelope(False, "Datos de entrada inválidos.", errors=errors),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail if isinstance(exc.detail, str) else "Error en la solicitud."
    if exc.status_code == 404 and exc.detail == "Not Found":
        message = "Ruta no encontrada."
    return JSONResponse(
        status_code=exc.status_code,
        content=envelope(False, message),
        headers=getattr(exc, "headers", None),
    )


async def database_error_handler(request: Request, exc: PyMongoError):
    logger.error(f"❌ Error de MongoDB: {exc}")
    return await api_error_handler(request, InternalError("Error de base de datos."))


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"❌ Error no controlado en {request.method} {request.url.path}")
    error = InternalError()
    extra = {"error": str(exc)} if settings.DEBUG else {}
    return JSONResponse(
        status_code=error.status_code,
        content=envelope(False, error.message, **extra),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(PyMongoError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
