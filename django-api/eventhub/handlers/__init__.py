from eventhub.handlers.views import (
    AdminApprovalsView,
    DraftSubmitView,
    DraftView,
    EventDetailView,
    EventListView,
    EventRegistrationsView,
    EventTransitionView,
    NotificationListView,
    NotificationReadView,
    OrganizerEventListView,
    TicketCancelView,
    TicketCheckInView,
    TicketDetailView,
    TicketListView,
    WalletReconcileView,
    WalletTopUpView,
    WalletView,
)

__all__ = [
    "AdminApprovalsView",
    "DraftSubmitView",
    "DraftView",
    "EventDetailView",
    "EventListView",
    "EventRegistrationsView",
    "EventTransitionView",
    "NotificationListView",
    "NotificationReadView",
    "OrganizerEventListView",
    "TicketCancelView",
    "TicketCheckInView",
    "TicketDetailView",
    "TicketListView",
    "WalletReconcileView",
    "WalletTopUpView",
    "WalletView",
]
