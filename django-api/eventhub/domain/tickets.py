"""Ticket code generation."""

import secrets
import string
from random import Random

from eventhub.domain.errors import TicketNotFoundError
from eventhub.domain.value_objects import TICKET_PREFIX, TICKET_SUFFIX_LENGTH, TicketCode

TICKET_ALPHABET = string.ascii_uppercase + string.digits
TEAM_CODE_LENGTH = 6


def _random_suffix(length: int, rng: Random | None) -> str:
    if rng is None:
        return "".join(secrets.choice(TICKET_ALPHABET) for _ in range(length))
    return "".join(rng.choice(TICKET_ALPHABET) for _ in range(length))


def generate_ticket_code(rng: Random | None = None) -> TicketCode:
    """Mint a random code. Uniqueness is enforced by the store on insert."""
    return TicketCode(value=TICKET_PREFIX + _random_suffix(TICKET_SUFFIX_LENGTH, rng))


def generate_team_code(rng: Random | None = None) -> str:
    return _random_suffix(TEAM_CODE_LENGTH, rng)


def normalize_ticket_code(raw: str) -> TicketCode:
    """Trim and uppercase scanner or keyboard input.

    Raises:
        TicketNotFoundError: If the input is not a well-formed ticket code.
    """
    try:
        return TicketCode.from_string(raw)
    except ValueError as exc:
        raise TicketNotFoundError(str(raw).strip().upper()) from exc
