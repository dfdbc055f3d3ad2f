"""Domain exceptions."""


class DocTrackError(Exception):
    """Base exception for DocTrack."""

    pass


class ValidationError(DocTrackError):
    """Validation failed for input data."""

    pass


class Forbidden(DocTrackError):
    """Principal is not allowed to perform the requested transition."""

    pass


class NotFound(DocTrackError):
    """Requested resource was not found."""

    def __init__(self, entity: str, entity_id: object) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class Conflict(DocTrackError):
    """Document was modified concurrently; reload and retry."""

    pass
