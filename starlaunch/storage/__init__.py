import logging

from starlaunch.core.config import Settings, get_settings
from starlaunch.db.session import build_engine
from starlaunch.storage.base import Storage
from starlaunch.storage.memory import MemStorage
from starlaunch.storage.sql import SqlStorage

logger = logging.getLogger(__name__)

__all__ = ["MemStorage", "SqlStorage", "Storage", "build_storage"]


def build_storage(settings: Settings | None = None) -> Storage:
    settings = settings or get_settings()
    backend = settings.STORAGE_BACKEND.strip().lower()
    logger.info("Using %s storage backend", backend)
    if backend == "memory":
        return MemStorage()
    if backend == "sql":
        return SqlStorage(build_engine(settings.DATABASE_URL))
    raise ValueError(f"Unknown STORAGE_BACKEND: {settings.STORAGE_BACKEND!r}")
