"""Principal roles in the office hierarchy."""

from enum import StrEnum


class Role(StrEnum):
    """Roles a principal may hold."""

    ADMIN = "admin"
    DEPARTMENT = "department"
    DEPUTY = "deputy"
    DIRECTOR = "director"
