from __future__ import annotations

from datetime import timezone, tzinfo

from history.errors import EntryNotFound, InconsistentStoreError, StorageError
from history.models import EntryView
from history.repo import EntryStore

TIMESTAMP_FORMAT = "%b %d, %Y %H:%M:%S %Z"


class NavigationService:
    """
    Turns a requested position into a bounds-checked EntryView.

    Positions run from 1 to the store's latest id. Anything outside that
    range raises EntryNotFound.
    """

    def __init__(self, store: EntryStore, display_tz: tzinfo = timezone.utc):
        self.store = store
        self.display_tz = display_tz

    def resolve(self, requested_id: int) -> EntryView:
        latest = self.store.latest_id()
        if requested_id < 1 or requested_id > latest:
            raise EntryNotFound(requested_id)

        try:
            entry = self.store.get_by_id(requested_id)
        except (EntryNotFound, StorageError) as e:
            raise InconsistentStoreError(
                f"Entry {requested_id} is within 1..{latest} but could not be read: {e}"
            ) from e

        return EntryView(
            content=entry.content,
            timestamp=entry.created_at.astimezone(self.display_tz).strftime(TIMESTAMP_FORMAT),
            edit_target=requested_id,
            current_index=requested_id,
            total_count=latest,
            previous_position=requested_id - 1 if requested_id > 1 else None,
            next_position=requested_id + 1 if requested_id < latest else None,
        )

    def resolve_latest_redirect_target(self) -> int:
        # 0 on an empty store; /entry/0 then renders not-found
        return self.store.latest_id()
