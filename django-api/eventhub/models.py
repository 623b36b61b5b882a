"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/.
"""

import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone

from eventhub.domain.enums import (
    EventLevel,
    EventMode,
    EventStatus,
    EventType,
    FeeStructure,
    FeeType,
    PaymentStatus,
    PrizePoolType,
    RegistrationType,
    Role,
    TicketStatus,
    TransactionType,
    choices,
)


class UserAccount(models.Model):
    """Profile row for an authenticated user."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="account",
        null=True,
        blank=True,
    )
    name = models.CharField(max_length=255)
    email = models.EmailField()
    role = models.CharField(max_length=20, choices=choices(Role), default=Role.PARTICIPANT.value)
    wallet_balance = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "users"

    def __str__(self) -> str:
        return f"{self.name} ({self.role})"


class Event(models.Model):
    """Persistence model for events."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    tagline = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    event_type = models.CharField(max_length=20, choices=choices(EventType))
    event_level = models.CharField(max_length=20, choices=choices(EventLevel))
    event_mode = models.CharField(max_length=20, choices=choices(EventMode))

    registration_start = models.DateTimeField(null=True, blank=True)
    registration_end = models.DateTimeField(null=True, blank=True)
    event_start = models.DateTimeField(null=True, blank=True)
    event_end = models.DateTimeField(null=True, blank=True)
    result_date = models.DateTimeField(null=True, blank=True)

    venue_name = models.CharField(max_length=255, null=True, blank=True)
    venue_address = models.TextField(null=True, blank=True)
    platform_name = models.CharField(max_length=255, null=True, blank=True)
    meeting_link = models.URLField(max_length=500, null=True, blank=True)
    contact_email = models.EmailField(null=True, blank=True)
    contact_phone = models.CharField(max_length=30, null=True, blank=True)

    min_team_size = models.PositiveIntegerField(default=2)
    max_team_size = models.PositiveIntegerField(default=5)
    max_team_size_custom = models.PositiveIntegerField(null=True, blank=True)
    team_name_required = models.BooleanField(default=False)

    fee_type = models.CharField(max_length=10, choices=choices(FeeType), default=FeeType.FREE.value)
    fee_structure = models.CharField(
        max_length=30, choices=choices(FeeStructure), null=True, blank=True
    )
    fee_per_person = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    team_flat_fee = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    team_fee_cap = models.DecimalField(max_digits=10, decimal_places=2, default=0)

    prize_pool_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    prize_pool_type = models.CharField(
        max_length=20, choices=choices(PrizePoolType), default=PrizePoolType.MONETARY.value
    )
    prize_breakdown = models.JSONField(default=list, blank=True)
    certificate_types = models.JSONField(default=list, blank=True)

    instagram_link = models.URLField(max_length=500, null=True, blank=True)
    youtube_link = models.URLField(max_length=500, null=True, blank=True)
    website_link = models.URLField(max_length=500, null=True, blank=True)
    rules_and_regulations = models.TextField(null=True, blank=True)

    status = models.CharField(
        max_length=20, choices=choices(EventStatus), default=EventStatus.DRAFT.value
    )
    admin_notes = models.TextField(null=True, blank=True)
    created_by = models.ForeignKey(
        UserAccount, on_delete=models.PROTECT, related_name="events"
    )
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "events"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="event_created_idx"),
            models.Index(fields=["status", "-created_at"], name="event_status_created_idx"),
            models.Index(fields=["created_by", "-created_at"], name="event_owner_created_idx"),
        ]

    def __str__(self) -> str:
        return self.name


class Ticket(models.Model):
    """Persistence model for tickets. The human-readable code is the key."""

    code = models.CharField(primary_key=True, max_length=32)
    event = models.ForeignKey(Event, on_delete=models.PROTECT, related_name="tickets")
    registration_id = models.UUIDField(null=True, blank=True, db_index=True)
    member_name = models.CharField(max_length=255)
    member_email = models.EmailField()
    owner = models.ForeignKey(
        UserAccount,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="tickets",
    )
    status = models.CharField(
        max_length=20, choices=choices(TicketStatus), default=TicketStatus.ACTIVE.value
    )
    checked_in_at = models.DateTimeField(null=True, blank=True)
    checked_in_by = models.ForeignKey(
        UserAccount,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    issued_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "tickets"
        indexes = [
            models.Index(fields=["owner", "-issued_at"], name="ticket_owner_issued_idx"),
        ]

    def __str__(self) -> str:
        return self.code


class Registration(models.Model):
    """Persistence model for registrations."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.PROTECT, related_name="registrations")
    type = models.CharField(max_length=20, choices=choices(RegistrationType))
    team_code = models.CharField(max_length=16, null=True, blank=True)
    team_name = models.CharField(max_length=255, null=True, blank=True)
    team_leader = models.ForeignKey(
        UserAccount,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    members = models.JSONField(default=list)
    total_fee = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    fee_breakdown = models.JSONField(default=dict)
    payment_status = models.CharField(
        max_length=20, choices=choices(PaymentStatus), default=PaymentStatus.PENDING.value
    )
    registered_by = models.ForeignKey(
        UserAccount, on_delete=models.PROTECT, related_name="registrations"
    )
    registered_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "registrations"
        ordering = ["-registered_at"]
        indexes = [
            models.Index(fields=["event", "-registered_at"], name="reg_event_registered_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.event_id} - {self.type}"


class WalletTransaction(models.Model):
    """Append-only ledger entry."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(UserAccount, on_delete=models.CASCADE, related_name="transactions")
    type = models.CharField(max_length=10, choices=choices(TransactionType))
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    description = models.CharField(max_length=255)
    event = models.ForeignKey(
        Event, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "wallet_transactions"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "-created_at"], name="wallet_tx_user_created_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.type} {self.amount}"


class Notification(models.Model):
    """Persistence model for in-app notifications."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    recipient = models.ForeignKey(
        UserAccount, on_delete=models.CASCADE, related_name="notifications"
    )
    title = models.CharField(max_length=255)
    body = models.TextField()
    type = models.CharField(max_length=50)
    related_id = models.CharField(max_length=64, null=True, blank=True)
    read = models.BooleanField(default=False)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "notifications"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["recipient", "-created_at"], name="notif_recipient_created_idx"),
        ]

    def __str__(self) -> str:
        return self.title
