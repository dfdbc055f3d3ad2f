"""Acting principal supplied by the identity layer."""

from dataclasses import dataclass

from doctrack.domain.value_objects.role import Role


@dataclass(frozen=True)
class Principal:
    """Role and department of whoever requests a transition.

    ``department`` is only meaningful for ``Role.DEPARTMENT``.
    """

    role: Role
    department: str = ""
