from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from config import settings
from core.handlers import envelope, register_exception_handlers
from database.connection import init_db
import logging

# =====================================================
# * Importación de Routers
# =====================================================
from auth.routes import router as auth_router
from users.routes import router as user_router
from tasks.routes import router as task_router

# =====================================================
# * Configuración de Logging global
# =====================================================
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s - %(message)s"
)
logger = logging.getLogger("main")

# =====================================================
# * Inicialización de la Base de Datos (al arrancar)
# =====================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.db = init_db()
    logger.info("✅ Base de datos inicializada correctamente y aplicación lista.")
    yield

# =====================================================
# * Inicialización de la aplicación
# =====================================================
app = FastAPI(
    title=f"{settings.PROJECT_NAME} Backend",
    version=settings.VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
)

# =====================================================
# * Configuración CORS
# =====================================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# =====================================================
# * Log de cada endpoint solicitado
# =====================================================
@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"{request.method} {request.url.path}")
    return await call_next(request)

register_exception_handlers(app)

# =====================================================
# * Registro de Rutas
# =====================================================
app.include_router(auth_router, prefix="/api/auth", tags=["Auth"])
app.include_router(user_router, prefix="/api/users", tags=["Users"])
app.include_router(task_router, prefix="/api/tasks", tags=["Tasks"])

logger.info("📜 Routers registrados:")
logger.info(" - /api/auth -> AuthRouter")
logger.info(" - /api/users -> UserRouter")
logger.info(" - /api/tasks -> TaskRouter")

# =====================================================
# * Rutas de estado
# =====================================================
@app.get("/", summary="Ruta raíz del backend")
def root():
    return {
        "message": f"🚀 {settings.PROJECT_NAME} Backend activo",
        "version": settings.VERSION,
        "env": settings.ENV
    }

@app.get("/api/health", summary="Estado del servidor")
def health():
    return envelope(True, "El servidor está funcionando.")

# =====================================================
# * Mensaje de arranque
# =====================================================
logger.info(f"🌍 {settings.PROJECT_NAME} backend iniciado en modo '{settings.ENV}'.")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
