"""Unit tests for domain exceptions."""

import pytest

from doctrack.domain.exceptions import (
    Conflict,
    DocTrackError,
    Forbidden,
    NotFound,
    ValidationError,
)


@pytest.mark.parametrize("exc", [ValidationError, Forbidden, NotFound, Conflict])
def test_exceptions_inherit_doctrack_error(exc) -> None:
    """Every domain exception is a DocTrackError."""
    assert issubclass(exc, DocTrackError)


def test_raise_forbidden_catchable_as_doctrack_error() -> None:
    """Forbidden can be caught as DocTrackError."""
    with pytest.raises(DocTrackError):
        raise Forbidden("no route")


def test_raise_not_found_catchable_as_doctrack_error() -> None:
    """NotFound can be caught as DocTrackError."""
    with pytest.raises(DocTrackError):
        raise NotFound("Document", "123")


def test_exception_message_preserved() -> None:
    """Exception message is preserved when raised."""
    msg = "stage is required"
    with pytest.raises(ValidationError, match=msg):
        raise ValidationError(msg)


def test_not_found_message_names_entity_and_id() -> None:
    """NotFound carries the entity and id and renders a readable message."""
    error = NotFound("Document", "123")

    assert str(error) == "Document 123 not found"
    assert error.entity == "Document"
    assert error.entity_id == "123"
