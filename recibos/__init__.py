"""recibos - warranty receipts for smartphone sales."""

__version__ = "0.1.0"
