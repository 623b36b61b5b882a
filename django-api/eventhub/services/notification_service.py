"""In-app notification inbox."""

from eventhub.domain.errors import NotificationNotFoundError
from eventhub.domain.models import Notification
from eventhub.domain.value_objects import NotificationId, UserId
from eventhub.stores.interfaces import NotificationStore


class NotificationService:
    def __init__(self, store: NotificationStore) -> None:
        self._store = store

    def list_for_user(self, user_id: UserId) -> list[Notification]:
        return self._store.list_for_recipient(user_id)

    def mark_read(self, notification_id: str, user_id: UserId) -> Notification:
        """Only the recipient may mark a notification read.

        Raises:
            NotificationNotFoundError: If the id is malformed, unknown or not the user's.
        """
        try:
            parsed = NotificationId.from_string(notification_id)
        except ValueError as exc:
            raise NotificationNotFoundError(notification_id) from exc
        notification = self._store.get_notification(parsed)
        if notification is None or notification.recipient_id != user_id:
            raise NotificationNotFoundError(notification_id)
        if notification.read:
            return notification
        return self._store.mark_read(parsed)
