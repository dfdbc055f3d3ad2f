"""Stage vocabulary: fixed office stages and per-department stages.

Stages are persisted as plain strings. A department stage is the department
display name behind a fixed prefix, so ``"Department: Finance"`` is the stage
of a document sitting in the Finance department. ``parse_stage`` turns a
stored string back into a tagged value so callers compare variants instead
of re-parsing strings.
"""

import re
from dataclasses import dataclass

ADMIN_DEPARTMENT_NAME = "General Administration"

ADMIN_INTAKE = "Admin: Intake"
DEPUTY_REVIEW = "Deputy: Review"
DIRECTOR_APPROVAL = "Director: Approval"
CLOSED = "Closed"

WELL_KNOWN_STAGES: tuple[str, ...] = (
    ADMIN_INTAKE,
    DEPUTY_REVIEW,
    DIRECTOR_APPROVAL,
    CLOSED,
)

DEPARTMENT_STAGE_PREFIX = "Department:"

_DEPARTMENT_STAGE_RE = re.compile(r"^Department:\s*(.+)$")


@dataclass(frozen=True)
class LiteralStage:
    """Any stage that is not a department stage (including the empty stage)."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class DepartmentStage:
    """Stage of a document held by a specific department."""

    department: str

    def __str__(self) -> str:
        return stage_for_department(self.department)


Stage = LiteralStage | DepartmentStage


def stage_for_department(department: str) -> str:
    """Build the stage string for a department display name."""
    name = (department or "").strip()
    if not name:
        raise ValueError("Department name must not be empty")
    return f"{DEPARTMENT_STAGE_PREFIX} {name}"


def parse_department_stage(stage: str | None) -> str | None:
    """Return the department name of a department stage, else None."""
    match = _DEPARTMENT_STAGE_RE.match((stage or "").strip())
    if not match:
        return None
    return match.group(1).strip() or None


def parse_stage(raw: str | None) -> Stage:
    """Parse a stored stage string into its tagged form."""
    department = parse_department_stage(raw)
    if department is not None:
        return DepartmentStage(department)
    return LiteralStage((raw or "").strip())


def is_well_known(stage: str | None) -> bool:
    """Whether the stage is one of the fixed office stages."""
    return (stage or "").strip() in WELL_KNOWN_STAGES
