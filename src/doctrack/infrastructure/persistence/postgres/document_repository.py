"""PostgreSQL document repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from doctrack.domain.entities import Document, HistoryEntry
from doctrack.domain.exceptions import Conflict
from doctrack.domain.value_objects import DocumentStatus, SourceType

_COLUMNS = (
    "id, subject, organization, date, source_type, department, "
    "from_dept, sent_date, received_at_dept, received_date, to_dept, forwarded_date, "
    "route_note, stage, status, completed_at, history, created_at, updated_at, version"
)


def _row_to_document(r: tuple) -> Document:
    return Document(
        id=r[0],
        subject=r[1],
        organization=r[2] or "",
        date=r[3],
        source_type=SourceType(r[4]),
        department=r[5],
        from_dept=r[6],
        sent_date=r[7],
        received_at_dept=r[8],
        received_date=r[9],
        to_dept=r[10],
        forwarded_date=r[11],
        route_note=r[12],
        current_stage=r[13] or "",
        status=DocumentStatus(r[14]),
        completed_at=r[15],
        history=[HistoryEntry.from_record(rec) for rec in (r[16] or [])],
        created_at=r[17],
        updated_at=r[18],
        version=r[19],
    )


def _history_json(document: Document) -> Jsonb:
    return Jsonb([entry.to_record() for entry in document.history])


class PostgresDocumentRepository:
    """Document repository implementation.

    The ledger is stored as a JSONB array on the document row, so a save is
    one conditional UPDATE guarded by the row version.
    """

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, document_id: UUID) -> Document | None:
        """Get document by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM document WHERE id = %s",
            (document_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return _row_to_document(r)

    async def create(self, document: Document) -> Document:
        """Create document."""
        await self._conn.execute(
            f"INSERT INTO document ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                document.id,
                document.subject,
                document.organization,
                document.date,
                document.source_type.value,
                document.department,
                document.from_dept,
                document.sent_date,
                document.received_at_dept,
                document.received_date,
                document.to_dept,
                document.forwarded_date,
                document.route_note,
                document.current_stage,
                document.status.value,
                document.completed_at,
                _history_json(document),
                document.created_at,
                document.updated_at,
                document.version,
            ),
        )
        return document

    async def update(self, document: Document) -> Document:
        """Save routing state if nobody else saved since it was loaded."""
        cur = await self._conn.execute(
            "UPDATE document SET stage=%s, status=%s, completed_at=%s, history=%s, "
            "updated_at=%s, version = version + 1 "
            "WHERE id=%s AND version=%s",
            (
                document.current_stage,
                document.status.value,
                document.completed_at,
                _history_json(document),
                document.updated_at,
                document.id,
                document.version,
            ),
        )
        if cur.rowcount == 0:
            raise Conflict(f"Document {document.id} was modified concurrently")
        document.version += 1
        return document
