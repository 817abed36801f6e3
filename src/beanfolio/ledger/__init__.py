"""Google Sheets ledger integration."""

from .client import GoogleLedgerClient
from .models import LedgerApiError, LedgerTarget, SaveRequest
from .payload import build_append_rows, to_cell_data

__all__ = [
    "GoogleLedgerClient",
    "LedgerApiError",
    "LedgerTarget",
    "SaveRequest",
    "build_append_rows",
    "to_cell_data",
]
