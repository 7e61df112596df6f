"""Domain type definitions for recibos.

These NewTypes provide semantic clarity and help with type checking:
- ReceiptId: Identifier assigned by the record store
- WarrantyDuration: Canonical "<months> meses (<days> dias)" string
"""

from typing import NewType

# Store-assigned identifiers are opaque strings (uuid hex for SQLite, document id for Firestore)
ReceiptId = NewType("ReceiptId", str)

# Always produced by recibos.domain.duration.to_canonical
WarrantyDuration = NewType("WarrantyDuration", str)
