"""Event status state machine."""

from dataclasses import dataclass
from enum import Enum

from eventhub.domain.enums import EventStatus, Role
from eventhub.domain.errors import InvalidTransitionError


class Transition(Enum):
    SUBMIT = "submit"
    SAVE = "save"
    APPROVE = "approve"
    REJECT = "reject"
    COMPLETE = "complete"
    CANCEL = "cancel"


@dataclass(frozen=True)
class TransitionRule:
    sources: frozenset[EventStatus]
    target: EventStatus
    actors: frozenset[Role]


TERMINAL_STATES = frozenset({EventStatus.COMPLETED, EventStatus.CANCELLED})

RULES: dict[Transition, TransitionRule] = {
    Transition.SUBMIT: TransitionRule(
        sources=frozenset({EventStatus.DRAFT}),
        target=EventStatus.PENDING_APPROVAL,
        actors=frozenset({Role.ORGANIZER}),
    ),
    Transition.SAVE: TransitionRule(
        sources=frozenset({EventStatus.DRAFT}),
        target=EventStatus.DRAFT,
        actors=frozenset({Role.ORGANIZER}),
    ),
    Transition.APPROVE: TransitionRule(
        sources=frozenset({EventStatus.PENDING_APPROVAL}),
        target=EventStatus.LIVE,
        actors=frozenset({Role.ADMIN}),
    ),
    Transition.REJECT: TransitionRule(
        sources=frozenset({EventStatus.PENDING_APPROVAL}),
        target=EventStatus.DRAFT,
        actors=frozenset({Role.ADMIN}),
    ),
    Transition.COMPLETE: TransitionRule(
        sources=frozenset({EventStatus.LIVE}),
        target=EventStatus.COMPLETED,
        actors=frozenset({Role.ADMIN}),
    ),
    Transition.CANCEL: TransitionRule(
        sources=frozenset({EventStatus.DRAFT, EventStatus.PENDING_APPROVAL, EventStatus.LIVE}),
        target=EventStatus.CANCELLED,
        actors=frozenset({Role.ORGANIZER, Role.ADMIN}),
    ),
}


def resolve_transition(transition: Transition, current: EventStatus) -> EventStatus:
    """Return the target status, or raise if ``current`` is not a valid source."""
    rule = RULES[transition]
    if current not in rule.sources:
        raise InvalidTransitionError(transition.value, current.value)
    return rule.target
