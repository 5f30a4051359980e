"""care_ledger - a personal ledger that makes invisible care labor visible."""

__version__ = "0.1.0"
