from __future__ import annotations


class DataIntegrityError(ValueError):
    """Raised when a holder snapshot contains impossible values (negative amounts)."""
