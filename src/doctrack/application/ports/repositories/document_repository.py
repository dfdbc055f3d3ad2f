"""Document repository port."""

from typing import Protocol
from uuid import UUID

from doctrack.domain.entities import Document


class DocumentRepository(Protocol):
    """Port for document persistence.

    ``update`` must be a conditional write: it succeeds only when the stored
    version still equals ``document.version``, then bumps the version.
    Otherwise it raises ``Conflict`` and stores nothing.
    """

    async def get_by_id(self, document_id: UUID) -> Document | None: ...

    async def create(self, document: Document) -> Document: ...

    async def update(self, document: Document) -> Document: ...
