"""Pytest fixtures for DocTrack tests."""

from __future__ import annotations

import copy
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from doctrack.domain.entities import Document
from doctrack.domain.exceptions import Conflict
from doctrack.domain.value_objects import Principal, Role, SourceType

T0 = datetime(2026, 3, 2, 9, 15, 10, tzinfo=UTC)


# --- Fake repositories ---


class FakeDocumentRepository:
    """In-memory document repository.

    Stores deep copies so that a stale aggregate behaves like one loaded
    from a real database: saving it after someone else did raises Conflict.
    """

    def __init__(self) -> None:
        self._by_id: dict[UUID, Document] = {}

    async def get_by_id(self, document_id: UUID) -> Document | None:
        doc = self._by_id.get(document_id)
        return copy.deepcopy(doc) if doc else None

    async def create(self, document: Document) -> Document:
        self._by_id[document.id] = copy.deepcopy(document)
        return document

    async def update(self, document: Document) -> Document:
        stored = self._by_id.get(document.id)
        if stored is None or stored.version != document.version:
            raise Conflict(f"Document {document.id} was modified concurrently")
        document.version += 1
        self._by_id[document.id] = copy.deepcopy(document)
        return document

    def add(self, document: Document) -> None:
        """Helper to seed a document for tests."""
        self._by_id[document.id] = copy.deepcopy(document)

    def stored(self, document_id: UUID) -> Document:
        """Helper to inspect what was persisted."""
        return self._by_id[document_id]


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.documents = FakeDocumentRepository()
        self.commits = 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        pass


def make_uow_factory(uow: FakeUnitOfWork):
    """Factory yielding the same UoW on every call, committing on success."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        yield uow
        await uow.commit()

    return _factory


def make_document(**kwargs) -> Document:
    """Build a document with sensible defaults."""
    defaults = {
        "id": uuid4(),
        "subject": "Budget request",
        "source_type": SourceType.INCOMING,
        "created_at": T0,
        "updated_at": T0,
    }
    defaults.update(kwargs)
    return Document(**defaults)


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager with the test's FakeUnitOfWork."""
    return make_uow_factory(fake_uow)


@pytest.fixture
def admin() -> Principal:
    return Principal(role=Role.ADMIN)


@pytest.fixture
def deputy() -> Principal:
    return Principal(role=Role.DEPUTY)


@pytest.fixture
def director() -> Principal:
    return Principal(role=Role.DIRECTOR)


@pytest.fixture
def finance_user() -> Principal:
    return Principal(role=Role.DEPARTMENT, department="Finance")
