"""In-progress event definitions built across the creation wizard.

A draft is a plain value: every operation returns a new draft and the
caller decides where to keep it (the HTTP layer keeps it in the session).
"""

from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Mapping

from eventhub.domain.errors import ValidationError

STEP_TITLES = (
    "Basic Details",
    "Dates & Times",
    "Venue / Platform",
    "Fees",
    "Prizes",
    "Social",
    "Review",
)
TOTAL_STEPS = len(STEP_TITLES)

DEFAULT_EVENT_NAME = "Untitled Event"


@dataclass(frozen=True)
class EventDraft:
    """Free-form editable event fields plus the wizard cursor."""

    # Basic details
    name: str = ""
    tagline: str = ""
    description: str = ""
    event_type: str = "individual"
    event_level: str = "college"
    event_mode: str = "offline"
    # Dates
    registration_start: str = ""
    registration_end: str = ""
    event_start: str = ""
    event_end: str = ""
    result_date: str = ""
    # Venue / platform
    venue_name: str = ""
    venue_address: str = ""
    platform_name: str = ""
    meeting_link: str = ""
    contact_email: str = ""
    contact_phone: str = ""
    # Team
    min_team_size: str = "2"
    max_team_size: str = "5"
    max_team_size_custom: str = ""
    team_name_required: bool = False
    # Fees
    fee_type: str = "free"
    fee_structure: str = "per_person"
    fee_per_person: str = ""
    team_flat_fee: str = ""
    team_fee_cap: str = ""
    # Prizes
    prize_pool_amount: str = ""
    prize_pool_type: str = "monetary"
    prize_breakdown: tuple[tuple[str, str], ...] = ()
    certificate_types: tuple[str, ...] = ()
    # Social
    instagram_link: str = ""
    youtube_link: str = ""
    website_link: str = ""
    rules_and_regulations: str = ""

    current_step: int = 0

    @property
    def step_title(self) -> str:
        return STEP_TITLES[self.current_step]


EDITABLE_FIELDS = frozenset(f.name for f in fields(EventDraft)) - {"current_step"}


def _freeze(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


def default_draft() -> EventDraft:
    return EventDraft()


def update_draft(draft: EventDraft, changes: Mapping[str, Any]) -> EventDraft:
    """Merge partial changes into ``draft``. Values are not validated."""
    unknown = sorted(set(changes) - EDITABLE_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown draft fields: {', '.join(unknown)}", fields=unknown)
    return replace(draft, **{name: _freeze(value) for name, value in changes.items()})


def set_step(draft: EventDraft, step: int) -> EventDraft:
    """Move the wizard cursor; out-of-range steps are clamped."""
    return replace(draft, current_step=max(0, min(step, TOTAL_STEPS - 1)))


def next_step(draft: EventDraft) -> EventDraft:
    return set_step(draft, draft.current_step + 1)


def previous_step(draft: EventDraft) -> EventDraft:
    return set_step(draft, draft.current_step - 1)


def reset_draft() -> EventDraft:
    return default_draft()


def draft_to_dict(draft: EventDraft) -> dict[str, Any]:
    return asdict(draft)


def draft_from_dict(data: Mapping[str, Any]) -> EventDraft:
    """Rebuild a draft from its stored form, ignoring stale keys."""
    known = EDITABLE_FIELDS | {"current_step"}
    values = {name: _freeze(value) for name, value in data.items() if name in known}
    return set_step(EventDraft(**values), int(values.get("current_step", 0)))
