"""Transition authorization - declarative rule table over office stages.

Stages are the states and ``TRANSITIONS`` is the edge set. A rule pattern is
either a concrete stage or a token: ``ANY_DEPARTMENT`` matches every
department stage, ``ANY_UNROUTED`` matches a stage that is neither a fixed
office stage nor a department stage (an empty stage or a raw department
name seeded at registration). Matching lives in ``rule_matches`` so that
the table stays plain data.

The engine only answers yes or no. It does not mutate anything; callers
check it before appending to the ledger.
"""

from dataclasses import dataclass
from enum import StrEnum

from doctrack.domain.value_objects import (
    ADMIN_INTAKE,
    CLOSED,
    DEPUTY_REVIEW,
    DIRECTOR_APPROVAL,
    DepartmentStage,
    LiteralStage,
    Principal,
    Role,
    Stage,
    TransitionAction,
    is_well_known,
    parse_stage,
)


class StageToken(StrEnum):
    """Wildcard patterns usable in place of a concrete stage."""

    ANY_DEPARTMENT = ":ANY_DEPT"
    ANY_UNROUTED = ":UNROUTED"


StagePattern = Stage | StageToken


@dataclass(frozen=True)
class TransitionRule:
    from_pattern: StagePattern
    to_pattern: StagePattern
    action: TransitionAction
    allowed_roles: frozenset[Role]
    own_dept_only: bool = False


def _rule(
    from_pattern: StagePattern | str,
    to_pattern: StagePattern | str,
    action: TransitionAction,
    *roles: Role,
    own_dept_only: bool = False,
) -> TransitionRule:
    if isinstance(from_pattern, str) and not isinstance(from_pattern, StageToken):
        from_pattern = parse_stage(from_pattern)
    if isinstance(to_pattern, str) and not isinstance(to_pattern, StageToken):
        to_pattern = parse_stage(to_pattern)
    return TransitionRule(
        from_pattern=from_pattern,
        to_pattern=to_pattern,
        action=action,
        allowed_roles=frozenset(roles),
        own_dept_only=own_dept_only,
    )


TRANSITIONS: tuple[TransitionRule, ...] = (
    # Admin takes a freshly registered document into intake
    _rule(StageToken.ANY_UNROUTED, ADMIN_INTAKE, TransitionAction.FORWARD, Role.ADMIN),
    # Admin sends work down to a department
    _rule(ADMIN_INTAKE, StageToken.ANY_DEPARTMENT, TransitionAction.FORWARD, Role.ADMIN),
    # Department sends its own document back up to admin
    _rule(
        StageToken.ANY_DEPARTMENT,
        ADMIN_INTAKE,
        TransitionAction.FORWARD,
        Role.DEPARTMENT,
        own_dept_only=True,
    ),
    _rule(ADMIN_INTAKE, DEPUTY_REVIEW, TransitionAction.FORWARD, Role.ADMIN),
    _rule(DEPUTY_REVIEW, DIRECTOR_APPROVAL, TransitionAction.FORWARD, Role.DEPUTY),
    _rule(DEPUTY_REVIEW, ADMIN_INTAKE, TransitionAction.RETURN, Role.DEPUTY),
    # Returned document goes back to the responsible department
    _rule(ADMIN_INTAKE, StageToken.ANY_DEPARTMENT, TransitionAction.RETURN, Role.ADMIN),
    _rule(DIRECTOR_APPROVAL, CLOSED, TransitionAction.APPROVE, Role.DIRECTOR),
    _rule(DIRECTOR_APPROVAL, ADMIN_INTAKE, TransitionAction.RETURN, Role.DIRECTOR),
)


def pattern_matches(pattern: StagePattern, stage: Stage) -> bool:
    """Whether a rule pattern covers a parsed stage."""
    if pattern is StageToken.ANY_DEPARTMENT:
        return isinstance(stage, DepartmentStage)
    if pattern is StageToken.ANY_UNROUTED:
        return isinstance(stage, LiteralStage) and not is_well_known(stage.name)
    return pattern == stage


def rule_accepts(rule: TransitionRule, source: Stage, principal: Principal) -> bool:
    """Role check plus the own-department constraint."""
    if principal.role not in rule.allowed_roles:
        return False
    if rule.own_dept_only:
        return (
            isinstance(source, DepartmentStage)
            and source.department == (principal.department or "").strip()
        )
    return True


def can_transition(
    from_stage: str,
    to_stage: str,
    action: TransitionAction | str,
    principal: Principal,
    rules: tuple[TransitionRule, ...] = TRANSITIONS,
) -> bool:
    """Decide whether ``principal`` may move a document from one stage to another.

    False covers both "no such route" and "route exists but not for you".
    """
    source = parse_stage(from_stage)
    target = parse_stage(to_stage)
    candidates = [
        rule
        for rule in rules
        if rule.action == action
        and pattern_matches(rule.from_pattern, source)
        and pattern_matches(rule.to_pattern, target)
    ]
    return any(rule_accepts(rule, source, principal) for rule in candidates)


def allowed_targets(
    from_stage: str,
    principal: Principal,
    rules: tuple[TransitionRule, ...] = TRANSITIONS,
) -> list[tuple[str, TransitionAction]]:
    """List (target, action) pairs open to ``principal`` from ``from_stage``.

    Wildcard targets are reported as their token value.
    """
    source = parse_stage(from_stage)
    targets: list[tuple[str, TransitionAction]] = []
    for rule in rules:
        if not pattern_matches(rule.from_pattern, source):
            continue
        if not rule_accepts(rule, source, principal):
            continue
        target = (str(rule.to_pattern), rule.action)
        if target not in targets:
            targets.append(target)
    return targets
