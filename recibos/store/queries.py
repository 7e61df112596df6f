"""Database query functions."""

import json
import sqlite3
import uuid
from pathlib import Path
from typing import Any

from recibos.dates import utc_now_iso
from recibos.domain.models import ReceiptId
from recibos.store.schema import get_db_path


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def _row_to_record(row: sqlite3.Row) -> dict[str, Any]:
    record: dict[str, Any] = json.loads(row["data"])
    record["id"] = row["id"]
    record["createdAt"] = row["created_at"]
    return record


def insert_receipt(record: dict[str, Any], db_path: Path | None = None, created_at: str | None = None) -> ReceiptId:
    """Insert a receipt record.

    Args:
        record: Receipt record (see WarrantyReceipt.to_record). Store metadata
            keys ("id", "createdAt") are ignored.
        db_path: Path to the database file. If None, uses default location.
        created_at: ISO-8601 creation time. If None, uses the current UTC time.

    Returns:
        ID of the new receipt.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    receipt_id = ReceiptId(uuid.uuid4().hex)
    data = {k: v for k, v in record.items() if k not in ("id", "createdAt")}

    conn = _connect(db_path)
    cursor = conn.cursor()

    try:
        cursor.execute(
            "INSERT INTO warranty_receipts (id, created_at, data) VALUES (?, ?, ?)",
            (receipt_id, created_at or utc_now_iso(), json.dumps(data, ensure_ascii=False)),
        )
        conn.commit()
        return receipt_id
    except sqlite3.Error:
        conn.rollback()
        raise
    finally:
        conn.close()


def get_all_receipts(db_path: Path | None = None) -> list[dict[str, Any]]:
    """Get all receipt records, newest first.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        List of record dictionaries including "id" and "createdAt".

    Raises:
        sqlite3.Error: If database operation fails.
    """
    conn = _connect(db_path)
    cursor = conn.cursor()

    try:
        cursor.execute("SELECT id, created_at, data FROM warranty_receipts ORDER BY created_at DESC, rowid DESC")
        return [_row_to_record(row) for row in cursor.fetchall()]
    finally:
        conn.close()


def get_receipt(receipt_id: str, db_path: Path | None = None) -> dict[str, Any] | None:
    """Get one receipt record by ID.

    Args:
        receipt_id: Receipt ID.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Record dictionary, or None if not found.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    conn = _connect(db_path)
    cursor = conn.cursor()

    try:
        cursor.execute("SELECT id, created_at, data FROM warranty_receipts WHERE id = ?", (receipt_id,))
        row = cursor.fetchone()
        return _row_to_record(row) if row else None
    finally:
        conn.close()


def delete_receipt(receipt_id: str, db_path: Path | None = None) -> bool:
    """Delete a receipt.

    Args:
        receipt_id: Receipt ID.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        True if a receipt was deleted, False if the ID was unknown.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    conn = _connect(db_path)
    cursor = conn.cursor()

    try:
        cursor.execute("DELETE FROM warranty_receipts WHERE id = ?", (receipt_id,))
        deleted = cursor.rowcount > 0
        conn.commit()
        return deleted
    except sqlite3.Error:
        conn.rollback()
        raise
    finally:
        conn.close()

