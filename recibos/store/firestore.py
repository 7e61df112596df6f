"""Cloud Firestore receipt store, over the Firestore REST API."""

import logging
import os
from decimal import Decimal
from typing import Any

import requests

from recibos.dates import utc_now_iso
from recibos.domain.models import ReceiptId
from recibos.domain.receipt import StoredReceipt, WarrantyReceipt
from recibos.store.base import ReceiptNotFoundError, record_to_stored, records_to_stored

logger = logging.getLogger(__name__)

API_BASE_URL = "https://firestore.googleapis.com/v1"
REQUEST_TIMEOUT = 30


def get_api_key() -> str | None:
    """Get the Firebase web API key from environment.

    Returns:
        API key or None if not set.
    """
    return os.environ.get("FIRESTORE_API_KEY")


def get_token() -> str | None:
    """Get an OAuth bearer token for Firestore from environment.

    Returns:
        Token string or None if not set.
    """
    return os.environ.get("FIRESTORE_TOKEN")


def encode_value(value: Any) -> dict[str, Any]:
    """Encode a Python value as a Firestore typed value."""
    if value is None:
        return {"nullValue": None}
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, (float, Decimal)):
        return {"doubleValue": float(value)}
    if isinstance(value, str):
        return {"stringValue": value}
    raise TypeError(f"Cannot store {type(value).__name__} in Firestore")


def decode_value(value: dict[str, Any]) -> Any:
    """Decode a Firestore typed value."""
    if "nullValue" in value:
        return None
    if "booleanValue" in value:
        return bool(value["booleanValue"])
    if "integerValue" in value:
        return int(value["integerValue"])
    if "doubleValue" in value:
        return float(value["doubleValue"])
    if "timestampValue" in value:
        return str(value["timestampValue"])
    if "stringValue" in value:
        return str(value["stringValue"])
    raise ValueError(f"Unsupported Firestore value: {sorted(value)}")


def encode_document(record: dict[str, Any], created_at: str) -> dict[str, Any]:
    """Build a Firestore document body from a receipt record."""
    fields = {key: encode_value(value) for key, value in record.items() if key not in ("id", "createdAt")}
    fields["createdAt"] = {"timestampValue": created_at}
    return {"fields": fields}


def decode_document(document: dict[str, Any]) -> dict[str, Any]:
    """Turn a Firestore document into a record with "id" and "createdAt"."""
    record = {key: decode_value(value) for key, value in document.get("fields", {}).items()}
    record["id"] = document["name"].rsplit("/", 1)[-1]
    record.setdefault("createdAt", document.get("createTime", ""))
    return record


class FirestoreReceiptStore:
    """Receipt store in a Firestore collection."""

    def __init__(
        self,
        project_id: str,
        collection: str = "warranty_receipts",
        api_key: str | None = None,
        token: str | None = None,
    ) -> None:
        self.project_id = project_id
        self.collection = collection
        self.api_key = api_key if api_key is not None else get_api_key()
        self.token = token if token is not None else get_token()

    @property
    def documents_url(self) -> str:
        return f"{API_BASE_URL}/projects/{self.project_id}/databases/(default)/documents"

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _params(self, **extra: str) -> dict[str, str]:
        params = dict(extra)
        if self.api_key:
            params["key"] = self.api_key
        return params

    def create(self, receipt: WarrantyReceipt) -> ReceiptId:
        """Add a document to the collection.

        Raises:
            requests.RequestException: If API request fails.
        """
        url = f"{self.documents_url}/{self.collection}"
        body = encode_document(receipt.to_record(), utc_now_iso())
        logger.debug("POST %s", url)
        response = requests.post(
            url, json=body, headers=self._headers(), params=self._params(), timeout=REQUEST_TIMEOUT
        )
        response.raise_for_status()
        receipt_id = ReceiptId(response.json()["name"].rsplit("/", 1)[-1])
        logger.debug("Created receipt %s for %s", receipt_id, receipt.customer_name)
        return receipt_id

    def list_records(self) -> list[dict[str, Any]]:
        """Every document in the collection as raw records, newest first.

        Raises:
            requests.RequestException: If API request fails.
        """
        url = f"{self.documents_url}:runQuery"
        query = {
            "structuredQuery": {
                "from": [{"collectionId": self.collection}],
                "orderBy": [{"field": {"fieldPath": "createdAt"}, "direction": "DESCENDING"}],
            }
        }
        logger.debug("POST %s", url)
        response = requests.post(
            url, json=query, headers=self._headers(), params=self._params(), timeout=REQUEST_TIMEOUT
        )
        response.raise_for_status()
        # Results without a "document" only carry a readTime (e.g. empty collection)
        return [decode_document(item["document"]) for item in response.json() if "document" in item]

    def list_all(self) -> list[StoredReceipt]:
        return records_to_stored(self.list_records())

    def get(self, receipt_id: str) -> StoredReceipt:
        """Find one receipt by scanning the collection.

        Raises:
            ReceiptNotFoundError: If no document has this ID.
            ReceiptSchemaError: If the document doesn't match the receipt schema.
            requests.RequestException: If API request fails.
        """
        for record in self.list_records():
            if record["id"] == receipt_id:
                return record_to_stored(record)
        raise ReceiptNotFoundError(receipt_id)

    def delete(self, receipt_id: str) -> None:
        """Delete a document.

        Raises:
            ReceiptNotFoundError: If the document doesn't exist.
            requests.RequestException: If API request fails.
        """
        url = f"{self.documents_url}/{self.collection}/{receipt_id}"
        logger.debug("DELETE %s", url)
        response = requests.delete(
            url,
            headers=self._headers(),
            params=self._params(**{"currentDocument.exists": "true"}),
            timeout=REQUEST_TIMEOUT,
        )
        if response.status_code == 404:
            raise ReceiptNotFoundError(receipt_id)
        response.raise_for_status()
        logger.debug("Deleted receipt %s", receipt_id)
