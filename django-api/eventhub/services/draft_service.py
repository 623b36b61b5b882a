"""Turns a finished wizard draft into a persisted event.

Submission is lenient: optional fields fall back to defaults and only the
tagline (plus a complete fee setup when asking for approval) blocks it.
"""

import logging
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import TypeVar

from eventhub.domain.drafts import DEFAULT_EVENT_NAME, EventDraft, reset_draft
from eventhub.domain.enums import (
    EventLevel,
    EventMode,
    EventStatus,
    EventType,
    FeeStructure,
    FeeType,
    PrizePoolType,
    Role,
)
from eventhub.domain.errors import PermissionDeniedError, ValidationError
from eventhub.domain.fees import validate_fee_config
from eventhub.domain.models import Actor, Event, FeeConfig
from eventhub.domain.value_objects import EventId, Money, TeamSize
from eventhub.services.clock import Clock, utcnow
from eventhub.stores.interfaces import EventStore

logger = logging.getLogger(__name__)

SUBMITTABLE_STATUSES = frozenset({EventStatus.DRAFT, EventStatus.PENDING_APPROVAL})

E = TypeVar("E", bound=Enum)


def _enum(enum_cls: type[E], field: str, value: str) -> E:
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise ValidationError(f"Invalid {field}: {value!r}", fields=(field,)) from exc


def _money(field: str, value: str) -> Money:
    try:
        return Money.parse(value)
    except ValueError as exc:
        raise ValidationError(f"Invalid amount for {field}", fields=(field,)) from exc


def _int(field: str, value: str, default: int | None) -> int | None:
    if value is None or not str(value).strip():
        return default
    try:
        return int(str(value).strip())
    except ValueError as exc:
        raise ValidationError(f"{field} must be a whole number", fields=(field,)) from exc


def _datetime(field: str, value: str) -> datetime | None:
    value = str(value or "").strip()
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise ValidationError(f"{field} must be an ISO-8601 timestamp", fields=(field,)) from exc
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def _text(value: str) -> str | None:
    return str(value or "").strip() or None


def fee_config_from_draft(draft: EventDraft) -> FeeConfig:
    fee_type = _enum(FeeType, "fee_type", draft.fee_type)
    if fee_type is FeeType.FREE:
        return FeeConfig()
    return FeeConfig(
        fee_type=fee_type,
        fee_structure=_enum(FeeStructure, "fee_structure", draft.fee_structure),
        fee_per_person=_money("fee_per_person", draft.fee_per_person),
        team_flat_fee=_money("team_flat_fee", draft.team_flat_fee),
        team_fee_cap=_money("team_fee_cap", draft.team_fee_cap),
    )


def team_size_from_draft(draft: EventDraft) -> TeamSize:
    return TeamSize(
        min_size=_int("min_team_size", draft.min_team_size, 2),
        max_size=_int("max_team_size", draft.max_team_size, 5),
        max_size_custom=_int("max_team_size_custom", draft.max_team_size_custom, None),
    )


class DraftService:
    """Validates and persists wizard drafts."""

    def __init__(self, events: EventStore, clock: Clock = utcnow) -> None:
        self._events = events
        self._clock = clock

    def submit(
        self, draft: EventDraft, actor: Actor, target_status: EventStatus
    ) -> tuple[Event, EventDraft]:
        """Create an event from ``draft``; returns it with a fresh draft.

        Raises:
            PermissionDeniedError: If the actor is not an organizer.
            ValidationError: If a required field is missing or malformed.
        """
        if actor.role is not Role.ORGANIZER:
            raise PermissionDeniedError("Only organizers can create events")
        if target_status not in SUBMITTABLE_STATUSES:
            raise ValidationError(
                f"Drafts cannot be submitted as {target_status.value}", fields=("status",)
            )
        event = self.build_event(draft, actor, target_status)
        created = self._events.create_event(event)
        logger.info("Event %s created as %s by %s", created.id, created.status.value, actor.user_id)
        return created, reset_draft()

    def build_event(self, draft: EventDraft, actor: Actor, target_status: EventStatus) -> Event:
        tagline = str(draft.tagline or "").strip()
        if not tagline:
            raise ValidationError("Tagline is required", fields=("tagline",))

        event_type = _enum(EventType, "event_type", draft.event_type)
        fee = fee_config_from_draft(draft)
        team_size = team_size_from_draft(draft)

        if event_type is EventType.TEAM and not team_size.is_consistent():
            raise ValidationError(
                "Minimum team size cannot exceed the maximum",
                fields=("min_team_size", "max_team_size"),
            )
        if target_status is EventStatus.PENDING_APPROVAL:
            validate_fee_config(fee)

        now = self._clock()
        return Event(
            id=EventId(uuid.uuid4()),
            name=_text(draft.name) or DEFAULT_EVENT_NAME,
            tagline=tagline,
            description=str(draft.description or ""),
            event_type=event_type,
            event_level=_enum(EventLevel, "event_level", draft.event_level),
            event_mode=_enum(EventMode, "event_mode", draft.event_mode),
            created_by=actor.user_id,
            status=target_status,
            created_at=now,
            updated_at=now,
            fee=fee,
            team_size=team_size,
            team_name_required=bool(draft.team_name_required),
            registration_start=_datetime("registration_start", draft.registration_start),
            registration_end=_datetime("registration_end", draft.registration_end),
            event_start=_datetime("event_start", draft.event_start),
            event_end=_datetime("event_end", draft.event_end),
            result_date=_datetime("result_date", draft.result_date),
            venue_name=_text(draft.venue_name),
            venue_address=_text(draft.venue_address),
            platform_name=_text(draft.platform_name),
            meeting_link=_text(draft.meeting_link),
            contact_email=_text(draft.contact_email) or actor.email or None,
            contact_phone=_text(draft.contact_phone),
            prize_pool_amount=_money("prize_pool_amount", draft.prize_pool_amount),
            prize_pool_type=_enum(PrizePoolType, "prize_pool_type", draft.prize_pool_type),
            prize_breakdown=tuple((str(p), str(a)) for p, a in draft.prize_breakdown),
            certificate_types=tuple(draft.certificate_types),
            instagram_link=_text(draft.instagram_link),
            youtube_link=_text(draft.youtube_link),
            website_link=_text(draft.website_link),
            rules_and_regulations=_text(draft.rules_and_regulations),
        )
