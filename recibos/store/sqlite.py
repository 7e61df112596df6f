"""SQLite-backed receipt store."""

import logging
from pathlib import Path

from recibos.domain.models import ReceiptId
from recibos.domain.receipt import StoredReceipt, WarrantyReceipt
from recibos.store import queries
from recibos.store.base import ReceiptNotFoundError, record_to_stored, records_to_stored
from recibos.store.schema import get_db_path, init_database

logger = logging.getLogger(__name__)


class SqliteReceiptStore:
    """Receipt store in a local SQLite file."""

    def __init__(self, db_path: Path | None = None) -> None:
        self.db_path = db_path or get_db_path()
        init_database(self.db_path)

    def create(self, receipt: WarrantyReceipt) -> ReceiptId:
        receipt_id = queries.insert_receipt(receipt.to_record(), self.db_path)
        logger.debug("Created receipt %s for %s", receipt_id, receipt.customer_name)
        return receipt_id

    def list_all(self) -> list[StoredReceipt]:
        return records_to_stored(queries.get_all_receipts(self.db_path))

    def get(self, receipt_id: str) -> StoredReceipt:
        record = queries.get_receipt(receipt_id, self.db_path)
        if record is None:
            raise ReceiptNotFoundError(receipt_id)
        return record_to_stored(record)

    def delete(self, receipt_id: str) -> None:
        if not queries.delete_receipt(receipt_id, self.db_path):
            raise ReceiptNotFoundError(receipt_id)
        logger.debug("Deleted receipt %s", receipt_id)
