# shelf/services/library_service.py
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, List, Optional

from sqlalchemy.orm import Session

from shelf.auth import AuthSession, require_auth
from shelf.exceptions import NotFoundError, PermissionDenied, ValidationError
from shelf.hardcover import HardcoverClient
from shelf.lifecycle import ReadingStatus, apply_status_transition, normalize_status
from shelf.merge import (
    DisplayBook, filter_counts, filter_records, merge_library,
    normalize_external_id, sort_by_activity
)
from shelf.sa.models import UserBook
from shelf.sa.repositories import LibraryRepository, ActivityRepository

logger = logging.getLogger(__name__)

# Feed event emitted when a record moves into a status
STATUS_ACTIVITY = {
    ReadingStatus.reading.value: "started_reading",
    ReadingStatus.finished.value: "finished_reading",
}


@dataclass
class LibraryView:
    books: List[DisplayBook] = field(default_factory=list)
    counts: Dict[str, int] = field(default_factory=dict)


def require_hardcover_id(value) -> str:
    hardcover_id = normalize_external_id(value)
    if hardcover_id is None:
        raise ValidationError(f"Invalid Hardcover book ID: {value!r}")
    return hardcover_id


def parse_page(value) -> int:
    """Non-negative page number from an int or a string of digits"""
    if isinstance(value, int) and not isinstance(value, bool):
        page = value
    elif isinstance(value, str) and value.strip().isdigit():
        page = int(value.strip())
    else:
        raise ValidationError("Current page must be a whole number")
    if page < 0:
        raise ValidationError("Current page cannot be negative")
    return page


class LibraryService:
    """Shelf operations for a signed-in reader.

    Write methods take an explicit AuthSession and raise AuthenticationError
    without one. Read methods accept None and return empty results.
    """

    def __init__(self, session: Session, hardcover: HardcoverClient, today: Callable[[], date] = date.today):
        self.session = session
        self.hardcover = hardcover
        self.today = today
        self.library = LibraryRepository(session)
        self.activity = ActivityRepository(session)

    def add_to_shelf(self, auth: Optional[AuthSession], hardcover_id, status) -> UserBook:
        """Put a book on the reader's shelf with the given status.

        A book already on the shelf is moved to the new status in place.
        """
        auth = require_auth(auth)
        hardcover_id = require_hardcover_id(hardcover_id)
        status = normalize_status(status)

        existing = self.library.get_entry(auth.user_id, hardcover_id)
        old_status = existing.status if existing else None
        updates = apply_status_transition(existing, status, self.today())
        record = self.library.upsert(auth.user_id, hardcover_id, **updates)
        logger.info("User %s shelved book %s as %s", auth.user_id, hardcover_id, record.status)

        if existing is None:
            self._record_activity(auth.user_id, "added_to_library", record, new_status=record.status)
        elif old_status != record.status:
            self._record_status_change(auth.user_id, record, old_status)
        return record

    def update_status(self, auth: Optional[AuthSession], record_id: int, status) -> UserBook:
        record = self._owned_record(auth, record_id)
        old_status = record.status
        updates = apply_status_transition(record, status, self.today())
        record = self.library.update(record, **updates)
        if old_status != record.status:
            self._record_status_change(record.user_id, record, old_status)
        return record

    def update_progress(self, auth: Optional[AuthSession], record_id: int, current_page) -> UserBook:
        """Set the page the reader is on.

        Raises:
            ValidationError: If current_page is not a non-negative integer
        """
        if current_page is not None:
            current_page = parse_page(current_page)
        record = self._owned_record(auth, record_id)
        return self.library.update(record, current_page=current_page)

    def update_notes(self, auth: Optional[AuthSession], record_id: int, notes: Optional[str]) -> UserBook:
        record = self._owned_record(auth, record_id)
        notes = notes.strip() if notes else None
        return self.library.update(record, notes=notes or None)

    def toggle_favorite(self, auth: Optional[AuthSession], record_id: int) -> UserBook:
        record = self._owned_record(auth, record_id)
        return self.library.update(record, is_favorite=not record.is_favorite)

    def set_privacy(self, auth: Optional[AuthSession], record_id: int, is_private: bool) -> UserBook:
        record = self._owned_record(auth, record_id)
        return self.library.update(record, is_private=bool(is_private))

    def remove_from_shelf(self, auth: Optional[AuthSession], hardcover_id) -> bool:
        auth = require_auth(auth)
        return self.library.delete_entry(auth.user_id, require_hardcover_id(hardcover_id))

    def get_shelf_entry(self, auth: Optional[AuthSession], hardcover_id) -> Optional[UserBook]:
        if auth is None:
            return None
        hardcover_id = normalize_external_id(hardcover_id)
        if hardcover_id is None:
            return None
        return self.library.get_entry(auth.user_id, hardcover_id)

    def get_library(self, auth: Optional[AuthSession], filter_name: str = "all") -> LibraryView:
        """The reader's whole library merged with book metadata.

        Books are ordered by most recent activity. Counts cover every tab
        regardless of the selected filter.
        """
        if auth is None:
            return LibraryView()
        records = sort_by_activity(self.library.get_user_books(auth.user_id))
        counts = filter_counts(records)
        selected = filter_records(records, filter_name)
        return LibraryView(books=self.merge(selected), counts=counts)

    def get_user_books(
        self,
        user_id: int,
        viewer: Optional[AuthSession] = None,
        limit: Optional[int] = None
    ) -> List[DisplayBook]:
        """Another reader's shelf as seen by viewer; private records are hidden
        unless the viewer is the owner."""
        is_owner = viewer is not None and viewer.user_id == user_id
        records = self.library.get_user_books(
            user_id,
            include_private=is_owner,
            order_by="created_at",
            limit=limit
        )
        return self.merge(records)

    def merge(self, records: List[UserBook]) -> List[DisplayBook]:
        if not records:
            return []
        metadata = self.hardcover.get_metadata_map(r.hardcover_id for r in records)
        return merge_library(records, metadata)

    def _owned_record(self, auth: Optional[AuthSession], record_id: int) -> UserBook:
        auth = require_auth(auth)
        record = self.library.get_by_id(record_id)
        if record is None:
            raise NotFoundError(f"Library record {record_id} not found")
        if record.user_id != auth.user_id:
            raise PermissionDenied("Library record belongs to another user")
        return record

    def _record_status_change(self, user_id: int, record: UserBook, old_status: Optional[str]) -> None:
        activity_type = STATUS_ACTIVITY.get(record.status, "book_status_change")
        self._record_activity(user_id, activity_type, record, old_status=old_status, new_status=record.status)

    def _record_activity(self, user_id: int, activity_type: str, record: UserBook, **metadata) -> None:
        # Private records never reach anyone else's feed
        if record.is_private:
            return
        book = self.hardcover.get_book_by_id(record.hardcover_id)
        self.activity.record(
            user_id=user_id,
            activity_type=activity_type,
            hardcover_id=record.hardcover_id,
            metadata=metadata,
            book_title=book.title if book else None,
            book_author=book.author if book else None,
            book_cover_url=book.cover_url if book else None
        )

