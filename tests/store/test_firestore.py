"""Tests for the Firestore REST receipt store, with requests stubbed out."""

import logging
from typing import Any

import pytest
import requests

from recibos.domain.receipt import ReceiptSchemaError, WarrantyReceipt
from recibos.store import FirestoreReceiptStore, ReceiptNotFoundError
from recibos.store.firestore import decode_document, decode_value, encode_document, encode_value

DOCUMENTS_URL = "https://firestore.googleapis.com/v1/projects/telecell/databases/(default)/documents"


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, payload: Any = None, status_code: int = 200) -> None:
        self.payload = payload
        self.status_code = status_code

    def json(self) -> Any:
        return self.payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


def make_store() -> FirestoreReceiptStore:
    return FirestoreReceiptStore(project_id="telecell", api_key="secret", token="")


class TestValueCodec:
    """Tests for Firestore typed values."""

    def test_encode(self) -> None:
        """Should map Python types to Firestore value types."""
        assert encode_value("x") == {"stringValue": "x"}
        assert encode_value(1500.5) == {"doubleValue": 1500.5}
        assert encode_value(3) == {"integerValue": "3"}
        assert encode_value(None) == {"nullValue": None}

    def test_decode(self) -> None:
        """Should read Firestore value types back."""
        assert decode_value({"integerValue": "3"}) == 3
        assert decode_value({"timestampValue": "2025-03-05T14:30:00Z"}) == "2025-03-05T14:30:00Z"

    def test_unsupported(self) -> None:
        """Should refuse values it can't store or read."""
        with pytest.raises(TypeError):
            encode_value(["a"])
        with pytest.raises(ValueError):
            decode_value({"mapValue": {}})


class TestDocuments:
    """Tests for encode_document and decode_document."""

    def test_round_trip(self, receipt: WarrantyReceipt) -> None:
        """Should rebuild the record with id and createdAt."""
        document = encode_document(receipt.to_record(), "2025-03-05T14:30:00.000Z")
        document["name"] = "projects/telecell/databases/(default)/documents/warranty_receipts/abc123"

        record = decode_document(document)

        assert record["id"] == "abc123"
        assert record["createdAt"] == "2025-03-05T14:30:00.000Z"
        assert WarrantyReceipt.from_record(record) == receipt


class TestFirestoreReceiptStore:
    """Tests for FirestoreReceiptStore."""

    def test_create(self, receipt: WarrantyReceipt, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should POST the document and return the generated ID."""
        calls: list[dict[str, Any]] = []

        def fake_post(url: str, **kwargs: Any) -> FakeResponse:
            calls.append({"url": url, **kwargs})
            return FakeResponse({"name": f"{DOCUMENTS_URL}/warranty_receipts/new-id"})

        monkeypatch.setattr(requests, "post", fake_post)

        receipt_id = make_store().create(receipt)

        assert receipt_id == "new-id"
        assert calls[0]["url"] == f"{DOCUMENTS_URL}/warranty_receipts"
        assert calls[0]["params"] == {"key": "secret"}
        fields = calls[0]["json"]["fields"]
        assert fields["customerName"] == {"stringValue": "Maria Silva"}
        assert fields["saleValue"] == {"doubleValue": 1500.5}
        assert "timestampValue" in fields["createdAt"]

    def test_list_all(self, receipt: WarrantyReceipt, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should decode query results and skip entries without a document."""
        document = encode_document(receipt.to_record(), "2025-03-05T14:30:00.000Z")
        document["name"] = f"{DOCUMENTS_URL}/warranty_receipts/abc"
        payload = [{"document": document, "readTime": "x"}, {"readTime": "x"}]

        def fake_post(url: str, **kwargs: Any) -> FakeResponse:
            assert url.endswith(":runQuery")
            assert kwargs["json"]["structuredQuery"]["orderBy"][0]["direction"] == "DESCENDING"
            return FakeResponse(payload)

        monkeypatch.setattr(requests, "post", fake_post)

        stored = make_store().list_all()

        assert [s.id for s in stored] == ["abc"]
        assert stored[0].receipt == receipt

    def test_list_skips_invalid_documents(
        self, receipt: WarrantyReceipt, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Should keep listing when another client wrote a document with extra fields."""
        good = encode_document(receipt.to_record(), "2025-03-05T14:30:00.000Z")
        good["name"] = f"{DOCUMENTS_URL}/warranty_receipts/abc"
        bad = encode_document({**receipt.to_record(), "legacy": "x"}, "2025-03-04T14:30:00.000Z")
        bad["name"] = f"{DOCUMENTS_URL}/warranty_receipts/def"
        payload = [{"document": good}, {"document": bad}]
        monkeypatch.setattr(requests, "post", lambda url, **kwargs: FakeResponse(payload))

        with caplog.at_level(logging.WARNING, logger="recibos.store.base"):
            stored = make_store().list_all()

        assert [s.id for s in stored] == ["abc"]
        assert "Skipping stored receipt def" in caplog.text

        with pytest.raises(ReceiptSchemaError):
            make_store().get("def")

    def test_get_unknown(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should raise ReceiptNotFoundError when the ID isn't listed."""
        monkeypatch.setattr(requests, "post", lambda url, **kwargs: FakeResponse([{"readTime": "x"}]))

        with pytest.raises(ReceiptNotFoundError):
            make_store().get("missing")

    def test_delete(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should DELETE the document with an existence precondition."""
        calls: list[dict[str, Any]] = []

        def fake_delete(url: str, **kwargs: Any) -> FakeResponse:
            calls.append({"url": url, **kwargs})
            return FakeResponse({})

        monkeypatch.setattr(requests, "delete", fake_delete)

        make_store().delete("abc")

        assert calls[0]["url"] == f"{DOCUMENTS_URL}/warranty_receipts/abc"
        assert calls[0]["params"]["currentDocument.exists"] == "true"

    def test_delete_unknown(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should map 404 to ReceiptNotFoundError."""
        monkeypatch.setattr(requests, "delete", lambda url, **kwargs: FakeResponse(status_code=404))

        with pytest.raises(ReceiptNotFoundError):
            make_store().delete("abc")

    def test_http_errors_propagate(self, receipt: WarrantyReceipt, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should let other HTTP errors through."""
        monkeypatch.setattr(requests, "post", lambda url, **kwargs: FakeResponse(status_code=403))

        with pytest.raises(requests.HTTPError):
            make_store().create(receipt)
