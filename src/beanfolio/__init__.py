"""Beanfolio - spreadsheet snapshot export and Google Sheets ledger."""

__version__ = "0.1.0"
