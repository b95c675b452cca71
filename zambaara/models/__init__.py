"""Database model exports."""

from .document import StoredDocument

__all__ = ["StoredDocument"]
