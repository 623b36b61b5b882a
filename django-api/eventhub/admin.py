from django.contrib import admin

from eventhub.models import (
    Event,
    Notification,
    Registration,
    Ticket,
    UserAccount,
    WalletTransaction,
)


class TicketInline(admin.TabularInline):
    model = Ticket
    extra = 0
    fields = ["code", "member_name", "member_email", "status", "checked_in_at"]
    readonly_fields = ["code", "checked_in_at"]


@admin.register(UserAccount)
class UserAccountAdmin(admin.ModelAdmin):
    list_display = ["name", "email", "role", "wallet_balance"]
    list_filter = ["role"]
    search_fields = ["name", "email"]


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["name", "status", "event_type", "fee_type", "created_by", "created_at"]
    list_filter = ["status", "event_type", "event_mode"]
    search_fields = ["name", "tagline"]
    inlines = [TicketInline]


@admin.register(Ticket)
class TicketAdmin(admin.ModelAdmin):
    list_display = ["code", "event", "member_name", "status", "checked_in_at"]
    list_filter = ["status", "event"]
    search_fields = ["code", "member_email"]


@admin.register(Registration)
class RegistrationAdmin(admin.ModelAdmin):
    list_display = ["event", "type", "team_name", "total_fee", "payment_status", "registered_at"]
    list_filter = ["type", "payment_status"]


# Ledger rows are append-only; the admin shows them but never edits them.
@admin.register(WalletTransaction)
class WalletTransactionAdmin(admin.ModelAdmin):
    list_display = ["user", "type", "amount", "description", "created_at"]
    list_filter = ["type"]

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ["recipient", "title", "type", "read", "created_at"]
    list_filter = ["type", "read"]
