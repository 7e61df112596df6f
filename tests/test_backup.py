"""Tests for JSON backup export and import."""

import json
import logging
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path

import pytest

from recibos.backup import (
    BACKUP_VERSION,
    BackupEnvelopeError,
    BackupFormatError,
    export_receipts,
    import_receipts,
    read_backup_file,
    write_backup,
)
from recibos.domain.models import ReceiptId
from recibos.domain.receipt import StoredReceipt, WarrantyReceipt
from recibos.store import SqliteReceiptStore


class FlakyStore:
    """In-memory store that fails to create receipts for one customer."""

    def __init__(self, reject_name: str) -> None:
        self.reject_name = reject_name
        self.created: list[WarrantyReceipt] = []

    def create(self, receipt: WarrantyReceipt) -> ReceiptId:
        if receipt.customer_name == self.reject_name:
            raise OSError("disk full")
        self.created.append(receipt)
        return ReceiptId(str(len(self.created)))

    def list_all(self) -> list[StoredReceipt]:
        return [StoredReceipt(id=ReceiptId(str(i)), created_at="", receipt=r) for i, r in enumerate(self.created)]

    def get(self, receipt_id: str) -> StoredReceipt:
        raise NotImplementedError

    def delete(self, receipt_id: str) -> None:
        raise NotImplementedError


def envelope(*records: dict) -> str:
    return json.dumps({"version": BACKUP_VERSION, "exportedAt": "2025-03-05T14:30:00.000Z", "receipts": list(records)})


class TestExportReceipts:
    """Tests for export_receipts."""

    def test_envelope(self, tmp_path: Path, receipt: WarrantyReceipt) -> None:
        """Should wrap portable records in a versioned envelope."""
        store = SqliteReceiptStore(tmp_path / "recibos.db")
        store.create(receipt)

        backup = json.loads(export_receipts(store, now=datetime(2025, 3, 5, 14, 30, tzinfo=timezone.utc)))

        assert backup["version"] == "1.0"
        assert backup["exportedAt"] == "2025-03-05T14:30:00.000Z"
        assert len(backup["receipts"]) == 1
        record = backup["receipts"][0]
        assert record["customerName"] == "Maria Silva"
        assert "id" not in record
        assert "createdAt" not in record

    def test_keeps_accents(self, tmp_path: Path, receipt: WarrantyReceipt) -> None:
        """Should write non-ASCII text as is."""
        store = SqliteReceiptStore(tmp_path / "recibos.db")
        store.create(replace(receipt, customer_name="João Gonçalves"))

        assert "João Gonçalves" in export_receipts(store)

    def test_empty_store(self, tmp_path: Path) -> None:
        """Should export an empty list."""
        backup = json.loads(export_receipts(SqliteReceiptStore(tmp_path / "recibos.db")))

        assert backup["receipts"] == []


class TestImportReceipts:
    """Tests for import_receipts."""

    def test_imports_all(self, tmp_path: Path, receipt: WarrantyReceipt) -> None:
        """Should create every record and return the count."""
        store = SqliteReceiptStore(tmp_path / "recibos.db")
        records = [replace(receipt, customer_name=name).to_record() for name in ("Ana", "Bruno")]

        assert import_receipts(store, envelope(*records)) == 2
        assert sorted(s.receipt.customer_name for s in store.list_all()) == ["Ana", "Bruno"]

    def test_export_then_import(self, tmp_path: Path, receipt: WarrantyReceipt) -> None:
        """Should restore an export into an empty store."""
        source = SqliteReceiptStore(tmp_path / "a.db")
        source.create(receipt)
        target = SqliteReceiptStore(tmp_path / "b.db")

        assert import_receipts(target, export_receipts(source)) == 1
        assert target.list_all()[0].receipt == receipt

    def test_skips_schema_rejects(self, tmp_path: Path, receipt: WarrantyReceipt) -> None:
        """Should skip records the schema rejects and import the rest."""
        store = SqliteReceiptStore(tmp_path / "recibos.db")
        broken = receipt.to_record()
        del broken["customerName"]
        extra = {**receipt.to_record(), "hacked": True}

        count = import_receipts(store, envelope(receipt.to_record(), broken, extra, "not a record"))

        assert count == 1
        assert len(store.list_all()) == 1

    def test_skips_store_failures(self, receipt: WarrantyReceipt, caplog: pytest.LogCaptureFixture) -> None:
        """Should keep going when the store rejects a record."""
        store = FlakyStore(reject_name="Bruno")
        records = [replace(receipt, customer_name=name).to_record() for name in ("Ana", "Bruno", "Carla")]

        with caplog.at_level(logging.WARNING, logger="recibos.backup"):
            count = import_receipts(store, envelope(*records))

        assert count == 2
        assert [r.customer_name for r in store.created] == ["Ana", "Carla"]
        assert "Skipping receipt #2" in caplog.text

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Should raise BackupFormatError for text that isn't JSON."""
        with pytest.raises(BackupFormatError):
            import_receipts(SqliteReceiptStore(tmp_path / "recibos.db"), "{not json")

    def test_missing_envelope_fields(self, tmp_path: Path) -> None:
        """Should raise BackupEnvelopeError without version or receipts."""
        store = SqliteReceiptStore(tmp_path / "recibos.db")

        for data in ('{"receipts": []}', '{"version": "1.0"}', '{"version": "1.0", "receipts": {}}', "[]"):
            with pytest.raises(BackupEnvelopeError):
                import_receipts(store, data)

    def test_other_version_imports(self, tmp_path: Path, receipt: WarrantyReceipt, caplog: pytest.LogCaptureFixture) -> None:
        """Should warn about a different version but still import."""
        store = SqliteReceiptStore(tmp_path / "recibos.db")
        data = json.dumps({"version": "2.0", "receipts": [receipt.to_record()]})

        with caplog.at_level(logging.WARNING, logger="recibos.backup"):
            assert import_receipts(store, data) == 1

        assert "differs" in caplog.text


class TestBackupFiles:
    """Tests for write_backup and read_backup_file."""

    def test_write_and_read(self, tmp_path: Path, receipt: WarrantyReceipt) -> None:
        """Should write UTF-8 JSON that reads back."""
        store = SqliteReceiptStore(tmp_path / "recibos.db")
        store.create(receipt)

        path = write_backup(store, tmp_path / "out" / "backup-recibos.json")

        assert json.loads(read_backup_file(path))["receipts"][0]["cpf"] == "529.982.247-25"

    def test_not_utf8(self, tmp_path: Path) -> None:
        """Should treat binary files as format errors."""
        path = tmp_path / "backup.json"
        path.write_bytes(b"\xff\xfe\x00\x81")

        with pytest.raises(BackupFormatError):
            read_backup_file(path)
