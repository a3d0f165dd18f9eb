# app/sheets/errors.py
class SheetFetchError(Exception):
    """Base fetch error (wrapped). Terminal for the current sync attempt."""

class SheetNotFoundError(SheetFetchError):
    """Document or tab does not exist."""

class SheetAccessError(SheetFetchError):
    """Sheet exists but is not readable with the credentials we have."""
