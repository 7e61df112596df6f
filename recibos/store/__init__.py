"""Receipt store layer - provides persistence for the application.

This module re-exports the store backends and picks one from configuration.
"""

from recibos.config import StoreSettings
from recibos.store.base import ReceiptNotFoundError, ReceiptStore
from recibos.store.firestore import FirestoreReceiptStore
from recibos.store.schema import database_exists, get_data_dir, get_db_path, init_database
from recibos.store.sqlite import SqliteReceiptStore


def open_store(settings: StoreSettings) -> ReceiptStore:
    """Open the store selected in configuration.

    Args:
        settings: Store settings (see recibos.config.get_store_settings).

    Returns:
        A ready-to-use receipt store.
    """
    if settings.backend == "firestore":
        return FirestoreReceiptStore(project_id=settings.project_id, collection=settings.collection)
    return SqliteReceiptStore(settings.path)


__all__ = [
    # Backends
    "FirestoreReceiptStore",
    "ReceiptNotFoundError",
    "ReceiptStore",
    "SqliteReceiptStore",
    "open_store",
    # Schema
    "database_exists",
    "get_data_dir",
    "get_db_path",
    "init_database",
]
