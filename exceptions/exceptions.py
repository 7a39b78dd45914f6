"""
Custom exceptions for the garden tracker stores.

These exceptions are intentionally simple and descriptive.
They are used across:

  - runtime/store/
  - runtime/api/

Placing them at the project root (exceptions/) avoids circular imports
and keeps exception types consistent across modules.
"""


class PersistedStateFormatException(Exception):
    """
    Raised when a persisted store blob cannot be decoded.

    Example:
        '{"plants": [...], "version": 0}'   ← expected
        '{"plants": [ {"plantedDate": "not a date"} ]'  ← raises this exception
    """

    def __init__(self, storage_key, details=None):
        self.storage_key = storage_key
        self.details = details or "Invalid persisted state."
        msg = f"Cannot decode persisted state for key: {storage_key}\nDetails: {self.details}"
        super().__init__(msg)
