"""
Wegesa Core Config — Public API
=================================
"""

from core.config.settings import (
    DEFAULT_CURRENCY,
    DEFAULT_INVOICE_PREFIX,
    DEFAULT_TAX_RATE,
    AppSettings,
)

__all__ = [
    "AppSettings",
    "DEFAULT_CURRENCY",
    "DEFAULT_INVOICE_PREFIX",
    "DEFAULT_TAX_RATE",
]
