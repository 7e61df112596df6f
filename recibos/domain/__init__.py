"""Domain models and pure transforms for recibos.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from recibos.domain.models import ReceiptId, WarrantyDuration
from recibos.domain.receipt import CompanyProfile, ReceiptSchemaError, StoredReceipt, WarrantyReceipt

__all__ = [
    "ReceiptId",
    "WarrantyDuration",
    "CompanyProfile",
    "ReceiptSchemaError",
    "StoredReceipt",
    "WarrantyReceipt",
]
