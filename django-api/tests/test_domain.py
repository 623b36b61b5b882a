"""Unit tests for domain primitives.

These test invariants that must hold at construction time.
Run with: pytest tests/test_domain.py -v
"""

import uuid
from decimal import Decimal

import pytest

from eventhub.domain import EventId, Money, TeamSize, TicketCode
from eventhub.domain.errors import ErrorCode, TicketNotFoundError
from eventhub.domain.tickets import generate_team_code, generate_ticket_code, normalize_ticket_code


class TestMoney:
    """Tests for Money value object."""

    def test_money_accepts_positive_amount(self):
        """Money can be created with positive amount."""
        assert Money(Decimal("12.50")).amount == Decimal("12.50")

    def test_money_accepts_zero(self):
        """Money can be created with zero."""
        assert Money.zero().is_zero

    def test_money_rejects_negative_amount(self):
        """Money raises ValueError for negative amount."""
        with pytest.raises(ValueError):
            Money(Decimal("-1"))

    def test_money_str_format(self):
        """Money string representation is formatted to 2 decimal places."""
        assert str(Money(Decimal("7"))) == "7.00"

    def test_parse_blank_is_zero(self):
        """Blank form input parses as zero."""
        assert Money.parse("  ").is_zero
        assert Money.parse(None).is_zero

    def test_parse_rejects_garbage(self):
        """Non-numeric and non-finite input raises ValueError."""
        with pytest.raises(ValueError):
            Money.parse("ten")
        with pytest.raises(ValueError):
            Money.parse("NaN")

    def test_arithmetic(self):
        """Money adds, subtracts and scales by whole numbers."""
        total = Money(Decimal("100")) * 3 - Money(Decimal("50")) + Money(Decimal("0.25"))
        assert total == Money(Decimal("250.25"))


class TestTeamSize:
    """Tests for TeamSize value object."""

    def test_custom_max_overrides_max(self):
        """A custom maximum replaces the preset maximum."""
        assert TeamSize(min_size=2, max_size=5, max_size_custom=8).effective_max == 8

    def test_allows_inclusive_bounds(self):
        """Both bounds are inclusive."""
        size = TeamSize(min_size=2, max_size=4)
        assert [size.allows(n) for n in (1, 2, 4, 5)] == [False, True, True, False]

    def test_inconsistent_when_min_exceeds_max(self):
        """A minimum above the maximum is inconsistent."""
        assert not TeamSize(min_size=6, max_size=5).is_consistent()


class TestEventId:
    """Tests for EventId value object."""

    def test_from_string_valid_uuid(self):
        """EventId.from_string parses valid UUID."""
        raw = uuid.uuid4()
        assert EventId.from_string(str(raw)).value == raw

    def test_from_string_invalid_uuid(self):
        """EventId.from_string raises ValueError for invalid UUID."""
        with pytest.raises(ValueError):
            EventId.from_string("not-a-uuid")


class TestTicketCode:
    """Tests for TicketCode and code generation."""

    def test_from_string_normalizes_input(self):
        """Whitespace is trimmed and letters uppercased."""
        assert TicketCode.from_string("  evn-tkt-a3f9x2 ").value == "EVN-TKT-A3F9X2"

    def test_rejects_malformed_code(self):
        """Codes must match the EVN-TKT- prefix and six characters."""
        with pytest.raises(ValueError):
            TicketCode("EVN-TKT-123")

    def test_normalize_malformed_is_not_found(self):
        """Malformed scanner input names no ticket."""
        with pytest.raises(TicketNotFoundError) as exc_info:
            normalize_ticket_code("hello")
        assert exc_info.value.code is ErrorCode.TICKET_NOT_FOUND

    def test_generated_codes_are_well_formed(self):
        """Generated codes always pass validation."""
        for _ in range(50):
            assert generate_ticket_code().value.startswith("EVN-TKT-")

    def test_team_code_length(self):
        """Team codes are six characters."""
        assert len(generate_team_code()) == 6
