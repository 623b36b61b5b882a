from django.urls import path

from eventhub.handlers import (
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

urlpatterns = [
    path("events", EventListView.as_view(), name="event-list"),
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path(
        "events/<str:event_id>/registrations",
        EventRegistrationsView.as_view(),
        name="event-registrations",
    ),
    path(
        "events/<str:event_id>/<str:transition>",
        EventTransitionView.as_view(),
        name="event-transition",
    ),
    path("organizer/events", OrganizerEventListView.as_view(), name="organizer-events"),
    path("admin/approvals", AdminApprovalsView.as_view(), name="admin-approvals"),
    path("drafts", DraftView.as_view(), name="draft"),
    path("drafts/submit", DraftSubmitView.as_view(), name="draft-submit"),
    path("tickets", TicketListView.as_view(), name="ticket-list"),
    path("tickets/<str:code>", TicketDetailView.as_view(), name="ticket-detail"),
    path("tickets/<str:code>/check-in", TicketCheckInView.as_view(), name="ticket-check-in"),
    path("tickets/<str:code>/cancel", TicketCancelView.as_view(), name="ticket-cancel"),
    path("wallet", WalletView.as_view(), name="wallet"),
    path("wallet/top-up", WalletTopUpView.as_view(), name="wallet-top-up"),
    path("wallet/reconcile", WalletReconcileView.as_view(), name="wallet-reconcile"),
    path("notifications", NotificationListView.as_view(), name="notification-list"),
    path(
        "notifications/<str:notification_id>/read",
        NotificationReadView.as_view(),
        name="notification-read",
    ),
]
