"""Domain value objects."""

from doctrack.domain.value_objects.document_status import DocumentStatus
from doctrack.domain.value_objects.principal import Principal
from doctrack.domain.value_objects.role import Role
from doctrack.domain.value_objects.source_type import SourceType
from doctrack.domain.value_objects.stage import (
    ADMIN_DEPARTMENT_NAME,
    ADMIN_INTAKE,
    CLOSED,
    DEPUTY_REVIEW,
    DIRECTOR_APPROVAL,
    DepartmentStage,
    LiteralStage,
    Stage,
    is_well_known,
    parse_department_stage,
    parse_stage,
    stage_for_department,
)
from doctrack.domain.value_objects.transition_action import TransitionAction

__all__ = [
    "ADMIN_DEPARTMENT_NAME",
    "ADMIN_INTAKE",
    "CLOSED",
    "DEPUTY_REVIEW",
    "DIRECTOR_APPROVAL",
    "DepartmentStage",
    "DocumentStatus",
    "LiteralStage",
    "Principal",
    "Role",
    "SourceType",
    "Stage",
    "TransitionAction",
    "is_well_known",
    "parse_department_stage",
    "parse_stage",
    "stage_for_department",
]
