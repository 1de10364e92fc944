from __future__ import annotations


class InvalidInputError(ValueError):
    """Raised when series data or configuration cannot produce honest geometry."""
