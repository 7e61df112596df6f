"""Warranty receipt schema.

A receipt is persisted as a flat record whose keys follow the document
shape used by the stores and backups (camelCase, e.g. "customerName").
`WarrantyReceipt.from_record` is the store boundary: unknown keys and
missing required keys are rejected instead of trusted.
"""

from dataclasses import dataclass, fields
from decimal import Decimal, InvalidOperation
from typing import Any

from recibos.domain.models import ReceiptId

BRAZILIAN_STATES = (
    "AC", "AL", "AP", "AM", "BA", "CE", "DF", "ES", "GO", "MA", "MT", "MS", "MG", "PA",
    "PB", "PR", "PE", "PI", "RJ", "RN", "RS", "RO", "RR", "SC", "SP", "SE", "TO",
)

# Metadata owned by the store, never part of the receipt itself
STORE_KEYS = ("id", "createdAt")

OPTIONAL_FIELDS = frozenset({"imei2", "observations"})

# Record keys that don't follow the plain snake_case -> camelCase rule
_KEY_OVERRIDES = {
    "company_cnpj": "companyCNPJ",
}


class ReceiptSchemaError(ValueError):
    """Raised when a record does not match the receipt schema."""


def _record_key(field_name: str) -> str:
    if field_name in _KEY_OVERRIDES:
        return _KEY_OVERRIDES[field_name]
    head, *rest = field_name.split("_")
    return head + "".join(part.capitalize() for part in rest)


@dataclass(frozen=True)
class CompanyProfile:
    """Issuing shop, printed in the receipt header and footer."""

    name: str
    legal_name: str
    cnpj: str
    state_registration: str
    address: str
    phone1: str
    phone2: str
    instagram: str = ""


@dataclass(frozen=True)
class WarrantyReceipt:
    """Immutable warranty receipt for one smartphone sale."""

    # Customer
    customer_name: str
    cpf: str
    phone: str
    city: str
    state: str

    # Device
    product_type: str
    brand: str
    model: str
    rom_memory: str
    ram_memory: str
    imei1: str

    # Sale
    sale_value: Decimal
    sale_value_in_words: str
    warranty_duration: str

    # Issuance
    issue_city: str
    issue_date: str
    signature_name: str

    # Company
    company_name: str
    company_legal_name: str
    company_cnpj: str
    company_state_registration: str
    company_address: str
    company_phone1: str
    company_phone2: str

    imei2: str | None = None
    observations: str | None = None

    def to_record(self) -> dict[str, Any]:
        """Convert to a store/backup record.

        Empty optional values are dropped. The sale value is written as a
        float, the number type document stores and JSON share.
        """
        record: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name in OPTIONAL_FIELDS and not value:
                continue
            if f.name == "sale_value":
                value = float(value)
            record[_record_key(f.name)] = value
        return record

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "WarrantyReceipt":
        """Build a receipt from a store/backup record.

        Args:
            record: Record dictionary. "id" and "createdAt" are ignored.

        Returns:
            WarrantyReceipt.

        Raises:
            ReceiptSchemaError: On unknown keys, missing required keys or a
                sale value that is not a number.
        """
        if not isinstance(record, dict):
            raise ReceiptSchemaError(f"Record must be an object, got {type(record).__name__}")

        by_key = {_record_key(f.name): f.name for f in fields(cls)}

        unknown = sorted(k for k in record if k not in by_key and k not in STORE_KEYS)
        if unknown:
            raise ReceiptSchemaError(f"Unknown fields: {', '.join(unknown)}")

        missing = sorted(
            key for key, name in by_key.items() if name not in OPTIONAL_FIELDS and record.get(key) in (None, "")
        )
        if missing:
            raise ReceiptSchemaError(f"Missing fields: {', '.join(missing)}")

        values: dict[str, Any] = {}
        for key, name in by_key.items():
            value = record.get(key)
            if name == "sale_value":
                if isinstance(value, bool):
                    raise ReceiptSchemaError("saleValue must be a number")
                try:
                    value = Decimal(str(value))
                except InvalidOperation as e:
                    raise ReceiptSchemaError(f"saleValue must be a number, got {value!r}") from e
                if not value.is_finite() or value < 0:
                    raise ReceiptSchemaError(f"saleValue must be a non-negative number, got {value}")
            elif value is not None:
                value = str(value)
            if name in OPTIONAL_FIELDS and not value:
                value = None
            values[name] = value

        return cls(**values)


@dataclass(frozen=True)
class StoredReceipt:
    """A receipt together with its store metadata."""

    id: ReceiptId
    created_at: str  # ISO-8601, UTC
    receipt: WarrantyReceipt
