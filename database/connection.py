# backend/database/connection.py
import logging
from typing import Optional

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database

from config import settings

logger = logging.getLogger("database.connection")

_client: Optional[MongoClient] = None
_db: Optional[Database] = None

# ============================================================
# 🔧 CONSTRUCTOR DE URI
# ============================================================
def build_mongo_uri() -> str:
    if settings.MONGO_URI:
        return settings.MONGO_URI
    host = settings.MONGO_HOST
    port = settings.MONGO_PORT
    if settings.MONGO_USER and settings.MONGO_PASSWORD:
        return f"mongodb://{settings.MONGO_USER}:{settings.MONGO_PASSWORD}@{host}:{port}"
    return f"mongodb://{host}:{port}"

# ============================================================
# 🗄️ CONEXIÓN (pool compartido, se crea en el primer uso)
# ============================================================
def get_db() -> Database:
    global _client, _db
    if _db is not None:
        return _db
    try:
        _client = MongoClient(build_mongo_uri(), serverSelectionTimeoutMS=settings.MONGO_TIMEOUT_MS)
        _db = _client[settings.MONGO_DB]
        logger.info(f"✅ Conectado a base de datos: {settings.MONGO_DB}")
        return _db
    except Exception as e:
        logger.error(f"❌ Error conectando a MongoDB ({settings.MONGO_DB}): {e}")
        raise

def set_database(db: Optional[Database]) -> None:
    """Reemplaza la base activa (tests o almacenes alternativos). None fuerza reconexión."""
    global _client, _db
    _client = None
    _db = db

# ============================================================
# 🚀 INICIALIZACIÓN DE ÍNDICES
# ============================================================
def init_db() -> Database:
    db = get_db()
    db["users"].create_index([("email", ASCENDING)], unique=True)
    db["tasks"].create_index([("user_id", ASCENDING), ("status", ASCENDING)])
    db["tasks"].create_index([("user_id", ASCENDING), ("created_at", DESCENDING)])
    logger.info("✅ Índices de usuarios y tareas inicializados.")
    return db
