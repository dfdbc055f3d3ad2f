"""History ledger entry."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class HistoryEntry:
    """One recorded move of a document into ``stage``."""

    stage: str
    at: datetime
    note: str | None = None
    actor_role: str | None = None
    actor_dept: str | None = None

    def to_record(self) -> dict:
        """Serialized form stored with the document."""
        return {
            "stage": self.stage,
            "at": self.at.isoformat(),
            "note": self.note,
            "actorRole": self.actor_role,
            "actorDept": self.actor_dept,
        }

    @classmethod
    def from_record(cls, record: dict) -> "HistoryEntry":
        at = record["at"]
        if isinstance(at, str):
            at = datetime.fromisoformat(at)
        return cls(
            stage=record["stage"],
            at=at,
            note=record.get("note"),
            actor_role=record.get("actorRole"),
            actor_dept=record.get("actorDept"),
        )
