"""Record store interface shared by every backend."""

import logging
from collections.abc import Iterable
from typing import Any, Protocol

from recibos.domain.models import ReceiptId
from recibos.domain.receipt import ReceiptSchemaError, StoredReceipt, WarrantyReceipt

logger = logging.getLogger(__name__)


class ReceiptNotFoundError(LookupError):
    """Raised when a receipt ID doesn't exist in the store."""

    def __init__(self, receipt_id: str) -> None:
        super().__init__(f"Recibo não encontrado: {receipt_id}")
        self.receipt_id = receipt_id


def record_to_stored(record: dict[str, Any]) -> StoredReceipt:
    """Split a stored record into metadata and the validated receipt.

    Raises:
        ReceiptSchemaError: If the record doesn't match the receipt schema.
    """
    return StoredReceipt(
        id=ReceiptId(str(record["id"])),
        created_at=str(record.get("createdAt") or ""),
        receipt=WarrantyReceipt.from_record(record),
    )


def records_to_stored(records: Iterable[dict[str, Any]]) -> list[StoredReceipt]:
    """Convert stored records, skipping (and logging) the ones that don't validate.

    A single record written by another client must not hide every other
    receipt from listings and backups.
    """
    stored: list[StoredReceipt] = []
    for record in records:
        try:
            stored.append(record_to_stored(record))
        except ReceiptSchemaError as e:
            logger.warning("Skipping stored receipt %s: %s", record.get("id"), e)
    return stored


class ReceiptStore(Protocol):
    """Persistence for warranty receipts.

    Backends raise their own I/O errors (sqlite3.Error,
    requests.RequestException); callers let them propagate.
    """

    def create(self, receipt: WarrantyReceipt) -> ReceiptId:
        """Persist a receipt and return its new ID."""
        ...

    def list_all(self) -> list[StoredReceipt]:
        """Every stored receipt that validates, newest first."""
        ...

    def delete(self, receipt_id: str) -> None:
        """Delete a receipt. Raises ReceiptNotFoundError for unknown IDs."""
        ...

    def get(self, receipt_id: str) -> StoredReceipt:
        """One receipt by ID.

        Raises ReceiptNotFoundError for unknown IDs and ReceiptSchemaError
        when the stored record doesn't validate.
        """
        ...
