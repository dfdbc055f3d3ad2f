"""Domain entities."""

from doctrack.domain.entities.document import Document
from doctrack.domain.entities.history_entry import HistoryEntry

__all__ = [
    "Document",
    "HistoryEntry",
]
