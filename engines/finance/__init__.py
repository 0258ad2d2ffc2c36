"""
Wegesa Finance Engine
"""

from engines.finance.models import (
    Invoice,
    InvoiceItem,
    InvoiceStatus,
    Transaction,
    TransactionType,
)
from engines.finance.services import InvoiceService, TransactionService

__all__ = [
    "Invoice",
    "InvoiceItem",
    "InvoiceStatus",
    "InvoiceService",
    "Transaction",
    "TransactionType",
    "TransactionService",
]
