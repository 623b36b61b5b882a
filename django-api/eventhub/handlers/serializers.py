"""Serializers for transforming domain models to API responses and parsing input."""

from rest_framework import serializers

from eventhub.domain.enums import EventStatus, RegistrationType


class EnumField(serializers.Field):
    """Renders an Enum member as its value."""

    def __init__(self, **kwargs):
        kwargs.setdefault("read_only", True)
        super().__init__(**kwargs)

    def to_representation(self, value):
        return value.value


class MoneyField(serializers.Field):
    """Renders Money as a two-decimal string."""

    def __init__(self, **kwargs):
        kwargs.setdefault("read_only", True)
        super().__init__(**kwargs)

    def to_representation(self, value):
        return str(value)


class FeeConfigSerializer(serializers.Serializer):
    fee_type = EnumField()
    fee_structure = EnumField()
    fee_per_person = MoneyField()
    team_flat_fee = MoneyField()
    team_fee_cap = MoneyField()


class TeamSizeSerializer(serializers.Serializer):
    min_size = serializers.IntegerField()
    max_size = serializers.IntegerField()
    max_size_custom = serializers.IntegerField()
    effective_max = serializers.IntegerField()


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.CharField()
    name = serializers.CharField()
    tagline = serializers.CharField()
    description = serializers.CharField()
    event_type = EnumField()
    event_level = EnumField()
    event_mode = EnumField()
    status = EnumField()
    created_by = serializers.CharField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()
    fee = FeeConfigSerializer()
    team_size = TeamSizeSerializer()
    team_name_required = serializers.BooleanField()
    registration_start = serializers.DateTimeField()
    registration_end = serializers.DateTimeField()
    event_start = serializers.DateTimeField()
    event_end = serializers.DateTimeField()
    result_date = serializers.DateTimeField()
    venue_name = serializers.CharField()
    venue_address = serializers.CharField()
    platform_name = serializers.CharField()
    meeting_link = serializers.CharField()
    contact_email = serializers.CharField()
    contact_phone = serializers.CharField()
    prize_pool_amount = MoneyField()
    prize_pool_type = EnumField()
    prize_breakdown = serializers.SerializerMethodField()
    certificate_types = serializers.ListField(child=serializers.CharField())
    instagram_link = serializers.CharField()
    youtube_link = serializers.CharField()
    website_link = serializers.CharField()
    rules_and_regulations = serializers.CharField()
    admin_notes = serializers.CharField()

    def get_prize_breakdown(self, event):
        return [{"position": position, "amount": amount} for position, amount in event.prize_breakdown]


class TicketSerializer(serializers.Serializer):
    """Serializer for Ticket domain model."""

    code = serializers.CharField()
    event_id = serializers.CharField()
    registration_id = serializers.CharField()
    member_name = serializers.CharField()
    member_email = serializers.CharField()
    owner_id = serializers.CharField()
    status = EnumField()
    issued_at = serializers.DateTimeField()
    checked_in_at = serializers.DateTimeField()
    checked_in_by = serializers.CharField()


class CheckInResultSerializer(serializers.Serializer):
    outcome = EnumField()
    checked_in_at = serializers.DateTimeField()
    ticket = TicketSerializer()


class RegistrationMemberSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField()
    phone = serializers.CharField(max_length=30, required=False, allow_blank=True, default="")
    college = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    user_id = serializers.UUIDField(required=False, allow_null=True, default=None)
    ticket_code = serializers.CharField(read_only=True)


class RegistrationSerializer(serializers.Serializer):
    """Serializer for Registration domain model."""

    id = serializers.CharField()
    event_id = serializers.CharField()
    type = EnumField()
    team_code = serializers.CharField()
    team_name = serializers.CharField()
    team_leader_id = serializers.CharField()
    members = RegistrationMemberSerializer(many=True)
    total_fee = MoneyField()
    fee_breakdown = serializers.DictField(child=serializers.CharField())
    payment_status = EnumField()
    registered_by = serializers.CharField()
    registered_at = serializers.DateTimeField()


class WalletTransactionSerializer(serializers.Serializer):
    id = serializers.CharField()
    type = EnumField()
    amount = MoneyField()
    description = serializers.CharField()
    event_id = serializers.CharField()
    created_at = serializers.DateTimeField()


class NotificationSerializer(serializers.Serializer):
    id = serializers.CharField()
    title = serializers.CharField()
    body = serializers.CharField()
    type = serializers.CharField()
    related_id = serializers.CharField()
    read = serializers.BooleanField()
    created_at = serializers.DateTimeField()


# Input


class RegistrationInputSerializer(serializers.Serializer):
    type = serializers.ChoiceField(
        choices=[t.value for t in RegistrationType], default=RegistrationType.INDIVIDUAL.value
    )
    team_name = serializers.CharField(
        max_length=255, required=False, allow_blank=True, allow_null=True, default=None
    )
    members = RegistrationMemberSerializer(many=True)


class TransitionInputSerializer(serializers.Serializer):
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class DraftSubmitInputSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=[EventStatus.DRAFT.value, EventStatus.PENDING_APPROVAL.value],
        default=EventStatus.PENDING_APPROVAL.value,
    )


class TopUpInputSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    description = serializers.CharField(
        max_length=255, required=False, allow_blank=True, default="Wallet top-up"
    )
