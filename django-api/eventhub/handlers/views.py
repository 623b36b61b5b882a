"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Leave domain errors to the exception handler in handlers/errors.py
- Never contain business logic
- Never expose internal error details
"""

from dataclasses import replace

from django.core.cache import cache
from rest_framework import status
from rest_framework.exceptions import NotFound
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from eventhub.cache import EVENT_LIST_KEY, event_detail_key
from eventhub.conf import get_setting
from eventhub.domain.drafts import (
    TOTAL_STEPS,
    EventDraft,
    default_draft,
    draft_from_dict,
    draft_to_dict,
    next_step,
    previous_step,
    reset_draft,
    set_step,
    update_draft,
)
from eventhub.domain.enums import EventStatus, RegistrationType
from eventhub.domain.errors import EventNotFoundError, PermissionDeniedError, ValidationError
from eventhub.domain.lifecycle import Transition
from eventhub.domain.models import RegistrationMember
from eventhub.domain.value_objects import UserId
from eventhub.handlers import dependencies
from eventhub.handlers.serializers import (
    CheckInResultSerializer,
    DraftSubmitInputSerializer,
    EventSerializer,
    NotificationSerializer,
    RegistrationInputSerializer,
    RegistrationSerializer,
    TicketSerializer,
    TopUpInputSerializer,
    TransitionInputSerializer,
    WalletTransactionSerializer,
)

SESSION_DRAFT_KEY = "event_draft"

# Statuses anyone may see; other events are visible to their organizer and admins.
PUBLIC_STATUSES = frozenset({EventStatus.LIVE.value, EventStatus.COMPLETED.value})


def _validated(serializer_class, data) -> dict:
    serializer = serializer_class(data=data)
    if not serializer.is_valid():
        raise ValidationError("Invalid request body", fields=sorted(serializer.errors))
    return serializer.validated_data


# Catalog


class EventListView(APIView):
    """Handler for GET /api/events"""

    def get(self, request: Request) -> Response:
        data = cache.get(EVENT_LIST_KEY)
        if data is None:
            events = dependencies.event_service().list_live_events()
            data = list(EventSerializer(events, many=True).data)
            cache.set(EVENT_LIST_KEY, data, get_setting("EVENT_CACHE_TTL_SECONDS"))
        return Response(data)


class EventDetailView(APIView):
    """Handler for GET/PATCH /api/events/{event_id}"""

    def get(self, request: Request, event_id: str) -> Response:
        key = event_detail_key(event_id)
        data = cache.get(key)
        if data is None:
            event = dependencies.event_service().get_event(event_id)
            data = dict(EventSerializer(event).data)
            cache.set(key, data, get_setting("EVENT_CACHE_TTL_SECONDS"))
        if data["status"] not in PUBLIC_STATUSES:
            actor = dependencies.optional_actor(request)
            if actor is None or not (actor.is_admin or str(actor.user_id) == data["created_by"]):
                raise EventNotFoundError(event_id)
        return Response(data)

    def patch(self, request: Request, event_id: str) -> Response:
        actor = dependencies.current_actor(request)
        event = dependencies.lifecycle_service().save(event_id, request.data, actor)
        return Response(EventSerializer(event).data)


class OrganizerEventListView(APIView):
    """Handler for GET /api/organizer/events"""

    def get(self, request: Request) -> Response:
        actor = dependencies.current_actor(request)
        events = dependencies.event_service().list_for_organizer(actor.user_id)
        return Response(EventSerializer(events, many=True).data)


class AdminApprovalsView(APIView):
    """Handler for GET /api/admin/approvals"""

    def get(self, request: Request) -> Response:
        actor = dependencies.current_actor(request)
        if not actor.is_admin:
            raise PermissionDeniedError("Only admins can review events")
        service = dependencies.event_service()
        return Response(
            {
                "pending": EventSerializer(service.list_pending_approval(), many=True).data,
                "counts": service.status_counts(),
            }
        )


# Lifecycle


class EventTransitionView(APIView):
    """Handler for POST /api/events/{event_id}/{transition}"""

    def post(self, request: Request, event_id: str, transition: str) -> Response:
        try:
            action = Transition(transition)
        except ValueError:
            raise NotFound(f"Unknown transition: {transition}") from None
        actor = dependencies.current_actor(request)
        notes = _validated(TransitionInputSerializer, request.data)["notes"]
        event = dependencies.lifecycle_service().apply(action, event_id, actor, notes)
        return Response(EventSerializer(event).data)


# Drafts


def _load_draft(request: Request) -> EventDraft:
    data = request.session.get(SESSION_DRAFT_KEY)
    return draft_from_dict(data) if data else default_draft()


def _store_draft(request: Request, draft: EventDraft) -> None:
    request.session[SESSION_DRAFT_KEY] = draft_to_dict(draft)


def _draft_payload(draft: EventDraft) -> dict:
    payload = draft_to_dict(draft)
    payload["step_title"] = draft.step_title
    payload["total_steps"] = TOTAL_STEPS
    return payload


class DraftView(APIView):
    """Handler for GET/PATCH/DELETE /api/drafts

    PATCH accepts draft fields plus either ``current_step`` or
    ``action`` ("next" / "previous") to move the wizard.
    """

    def get(self, request: Request) -> Response:
        dependencies.current_actor(request)
        return Response(_draft_payload(_load_draft(request)))

    def patch(self, request: Request) -> Response:
        dependencies.current_actor(request)
        changes = dict(request.data)
        step = changes.pop("current_step", None)
        action = changes.pop("action", None)

        draft = update_draft(_load_draft(request), changes)
        if step is not None:
            try:
                draft = set_step(draft, int(step))
            except (TypeError, ValueError) as exc:
                raise ValidationError("current_step must be a number", fields=("current_step",)) from exc
        if action == "next":
            draft = next_step(draft)
        elif action == "previous":
            draft = previous_step(draft)
        elif action is not None:
            raise ValidationError(f"Unknown action: {action}", fields=("action",))

        _store_draft(request, draft)
        return Response(_draft_payload(draft))

    def delete(self, request: Request) -> Response:
        dependencies.current_actor(request)
        draft = reset_draft()
        _store_draft(request, draft)
        return Response(_draft_payload(draft))


class DraftSubmitView(APIView):
    """Handler for POST /api/drafts/submit"""

    def post(self, request: Request) -> Response:
        actor = dependencies.current_actor(request)
        target = EventStatus(_validated(DraftSubmitInputSerializer, request.data)["status"])
        event, fresh = dependencies.draft_service().submit(_load_draft(request), actor, target)
        _store_draft(request, fresh)
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)


# Registrations and tickets


class EventRegistrationsView(APIView):
    """Handler for GET/POST /api/events/{event_id}/registrations"""

    def get(self, request: Request, event_id: str) -> Response:
        actor = dependencies.current_actor(request)
        registrations = dependencies.registration_service().list_for_event(
            event_id, actor, limit=get_setting("ORGANIZER_REGISTRATIONS_LIMIT")
        )
        return Response(RegistrationSerializer(registrations, many=True).data)

    def post(self, request: Request, event_id: str) -> Response:
        actor = dependencies.current_actor(request)
        data = _validated(RegistrationInputSerializer, request.data)
        members = [
            RegistrationMember(
                name=member["name"],
                email=member["email"],
                phone=member["phone"],
                college=member["college"],
                user_id=UserId(member["user_id"]) if member["user_id"] else None,
            )
            for member in data["members"]
        ]
        registration_type = RegistrationType(data["type"])
        # A lone registrant with no explicit account is the actor.
        if registration_type is RegistrationType.INDIVIDUAL and len(members) == 1 and not members[0].user_id:
            members[0] = replace(members[0], user_id=actor.user_id)
        registration = dependencies.registration_service().register(
            event_id,
            members,
            actor,
            registration_type=registration_type,
            team_name=data["team_name"],
        )
        return Response(RegistrationSerializer(registration).data, status=status.HTTP_201_CREATED)


class TicketListView(APIView):
    """Handler for GET /api/tickets"""

    def get(self, request: Request) -> Response:
        actor = dependencies.current_actor(request)
        tickets = dependencies.ticket_service().list_for_user(actor.user_id)
        return Response(TicketSerializer(tickets, many=True).data)


class TicketDetailView(APIView):
    """Handler for GET /api/tickets/{code}"""

    def get(self, request: Request, code: str) -> Response:
        actor = dependencies.current_actor(request)
        ticket = dependencies.ticket_service().lookup_for(code, actor)
        return Response(TicketSerializer(ticket).data)


class TicketCheckInView(APIView):
    """Handler for POST /api/tickets/{code}/check-in

    Both a first scan and a re-scan answer 200; ``outcome`` tells them apart.
    """

    def post(self, request: Request, code: str) -> Response:
        actor = dependencies.current_actor(request)
        result = dependencies.ticket_service().check_in(code, actor)
        return Response(CheckInResultSerializer(result).data)


class TicketCancelView(APIView):
    """Handler for POST /api/tickets/{code}/cancel"""

    def post(self, request: Request, code: str) -> Response:
        actor = dependencies.current_actor(request)
        ticket = dependencies.ticket_service().cancel(code, actor)
        return Response(TicketSerializer(ticket).data)


# Wallet


class WalletView(APIView):
    """Handler for GET /api/wallet"""

    def get(self, request: Request) -> Response:
        actor = dependencies.current_actor(request)
        wallet = dependencies.wallet_service()
        return Response(
            {
                "balance": str(wallet.balance(actor.user_id)),
                "transactions": WalletTransactionSerializer(
                    wallet.history(actor.user_id), many=True
                ).data,
            }
        )


class WalletTopUpView(APIView):
    """Handler for POST /api/wallet/top-up"""

    def post(self, request: Request) -> Response:
        actor = dependencies.current_actor(request)
        data = _validated(TopUpInputSerializer, request.data)
        wallet = dependencies.wallet_service()
        entry = wallet.credit(actor.user_id, data["amount"], data["description"] or "Wallet top-up")
        return Response(
            {
                "transaction": WalletTransactionSerializer(entry).data,
                "balance": str(wallet.balance(actor.user_id)),
            },
            status=status.HTTP_201_CREATED,
        )


class WalletReconcileView(APIView):
    """Handler for POST /api/wallet/reconcile"""

    def post(self, request: Request) -> Response:
        actor = dependencies.current_actor(request)
        wallet = dependencies.wallet_service()
        was_consistent = wallet.verify_balance(actor.user_id)
        account = wallet.recompute_balance(actor.user_id)
        return Response(
            {"balance": str(account.wallet_balance), "was_consistent": was_consistent}
        )


# Notifications


class NotificationListView(APIView):
    """Handler for GET /api/notifications"""

    def get(self, request: Request) -> Response:
        actor = dependencies.current_actor(request)
        notifications = dependencies.notification_service().list_for_user(actor.user_id)
        return Response(NotificationSerializer(notifications, many=True).data)


class NotificationReadView(APIView):
    """Handler for POST /api/notifications/{notification_id}/read"""

    def post(self, request: Request, notification_id: str) -> Response:
        actor = dependencies.current_actor(request)
        notification = dependencies.notification_service().mark_read(notification_id, actor.user_id)
        return Response(NotificationSerializer(notification).data)
