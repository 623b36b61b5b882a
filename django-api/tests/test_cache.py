"""Tests for cache behavior.

Run with: pytest tests/test_cache.py -v
"""

import pytest
from django.core.cache import cache

from eventhub.cache import EVENT_LIST_KEY, event_detail_key
from eventhub.domain import EventId
from eventhub.domain.enums import EventStatus, Role
from eventhub.stores.django_store import DjangoEventStore


@pytest.mark.django_db
class TestCacheInvalidation:
    """Tests for cache invalidation on model changes."""

    @pytest.fixture
    def event_row(self, make_account, make_db_event):
        _, owner = make_account(Role.ORGANIZER)
        return make_db_event(owner)

    def test_event_save_invalidates_list_cache(self, event_row):
        """Saving an event invalidates the events:list cache key."""
        cache.set(EVENT_LIST_KEY, ["stale"])
        event_row.name = "Renamed"
        event_row.save()
        assert cache.get(EVENT_LIST_KEY) is None

    def test_event_save_invalidates_detail_cache(self, event_row):
        """Saving an event invalidates the events:{id} cache key."""
        key = event_detail_key(str(event_row.pk))
        cache.set(key, {"stale": True})
        event_row.save()
        assert cache.get(key) is None

    def test_event_delete_invalidates_caches(self, event_row):
        """Deleting an event invalidates both keys."""
        key = event_detail_key(str(event_row.pk))
        cache.set(EVENT_LIST_KEY, ["stale"])
        cache.set(key, {"stale": True})
        event_row.delete()
        assert cache.get(EVENT_LIST_KEY) is None
        assert cache.get(key) is None

    def test_store_update_invalidates_caches(self, event_row):
        """Status changes through the store reach the signal handlers."""
        cache.set(EVENT_LIST_KEY, ["stale"])
        DjangoEventStore().update_event(EventId(event_row.pk), {"status": EventStatus.COMPLETED})
        assert cache.get(EVENT_LIST_KEY) is None

    def test_other_event_detail_untouched(self, event_row, make_db_event):
        """Only the saved event's detail key is dropped."""
        other = make_db_event(event_row.created_by, name="Other")
        key = event_detail_key(str(other.pk))
        cache.set(key, {"cached": True})
        event_row.save()
        assert cache.get(key) == {"cached": True}
