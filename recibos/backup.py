"""JSON backup export and import for stored receipts.

Envelope format:

    {
      "version": "1.0",
      "exportedAt": "2025-03-05T14:30:00.000Z",
      "receipts": [{...record without id/createdAt...}, ...]
    }

Import is best effort: every record is created on its own, and a record the
schema or the store rejects is logged and skipped.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from recibos.domain.receipt import WarrantyReceipt
from recibos.store.base import ReceiptStore

logger = logging.getLogger(__name__)

BACKUP_VERSION = "1.0"
DEFAULT_BACKUP_FILENAME = "backup-recibos.json"

# Identifiers and timestamps are regenerated by the store on import
NON_PORTABLE_KEYS = ("id", "createdAt")


class BackupError(Exception):
    """Base class for backup file errors."""


class BackupFormatError(BackupError):
    """The backup file is not valid JSON."""


class BackupEnvelopeError(BackupError):
    """The backup file is JSON but not a backup envelope."""


def export_receipts(store: ReceiptStore, now: datetime | None = None) -> str:
    """Serialize every stored receipt into a backup envelope.

    Args:
        store: Receipt store to read from.
        now: Export timestamp. If None, uses the current UTC time.

    Returns:
        Backup as indented JSON text.

    Raises:
        Whatever the store raises on read failures.
    """
    exported_at = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)

    receipts = []
    for stored in store.list_all():
        record = stored.receipt.to_record()
        for key in NON_PORTABLE_KEYS:
            record.pop(key, None)
        receipts.append(record)

    envelope = {
        "version": BACKUP_VERSION,
        "exportedAt": exported_at.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        "receipts": receipts,
    }
    return json.dumps(envelope, ensure_ascii=False, indent=2)


def import_receipts(store: ReceiptStore, backup_data: str) -> int:
    """Create every receipt in a backup envelope.

    Records are created one at a time, in file order. A failing record is
    logged and skipped; the rest still import.

    Args:
        store: Receipt store to write to.
        backup_data: Backup JSON text.

    Returns:
        Number of receipts created.

    Raises:
        BackupFormatError: If the text is not valid JSON.
        BackupEnvelopeError: If "version" or "receipts" is missing.
    """
    try:
        envelope = json.loads(backup_data)
    except json.JSONDecodeError as e:
        raise BackupFormatError("Arquivo de backup inválido. Formato JSON incorreto.") from e

    if (
        not isinstance(envelope, dict)
        or not envelope.get("version")
        or not isinstance(envelope.get("receipts"), list)
    ):
        raise BackupEnvelopeError("Arquivo de backup inválido ou corrompido.")

    if envelope["version"] != BACKUP_VERSION:
        logger.warning("Backup version %s differs from %s, importing anyway", envelope["version"], BACKUP_VERSION)

    imported_count = 0
    for index, record in enumerate(envelope["receipts"]):
        try:
            store.create(WarrantyReceipt.from_record(record))
        except Exception:
            logger.warning("Skipping receipt #%d of the backup", index + 1, exc_info=True)
            continue
        imported_count += 1

    return imported_count


def write_backup(store: ReceiptStore, output_path: Path) -> Path:
    """Export all receipts to a UTF-8 JSON file.

    Args:
        store: Receipt store to read from.
        output_path: Destination file.

    Returns:
        The written path.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(export_receipts(store) + "\n", encoding="utf-8")
    return output_path


def read_backup_file(path: Path) -> str:
    """Read a backup file as UTF-8 text.

    Raises:
        OSError: If the file can't be read.
        BackupFormatError: If the file is not UTF-8 text.
    """
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise BackupFormatError("Arquivo de backup inválido. Formato JSON incorreto.") from e
