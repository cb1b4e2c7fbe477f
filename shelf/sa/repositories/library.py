# shelf/sa/repositories/library.py
from typing import Any, Dict, List, Optional
from sqlalchemy import desc
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from shelf.sa.models import UserBook

# Columns a caller may change after creation; user_id and hardcover_id are immutable
MUTABLE_FIELDS = (
    "status", "start_date", "finish_date", "current_page", "rating",
    "notes", "is_favorite", "is_private",
)


class LibraryRepository:
    """Repository for managing UserBook (library record) entities."""

    def __init__(self, session: Session):
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def get_by_id(self, record_id: int) -> Optional[UserBook]:
        return self.session.query(UserBook).filter(UserBook.id == record_id).first()

    def get_entry(self, user_id: int, hardcover_id: str) -> Optional[UserBook]:
        """Get a user's record for one book.

        Args:
            user_id: The ID of the user
            hardcover_id: The Hardcover book ID

        Returns:
            The UserBook object if found, None otherwise
        """
        return (
            self.session.query(UserBook)
            .filter(
                UserBook.user_id == user_id,
                UserBook.hardcover_id == hardcover_id
            )
            .first()
        )

    def get_user_books(
        self,
        user_id: int,
        include_private: bool = True,
        statuses: Optional[List[str]] = None,
        order_by: str = "updated_at",
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List[UserBook]:
        """Get a user's library records, newest first.

        Args:
            user_id: The ID of the user
            include_private: Whether records flagged private are returned
            statuses: Optional list of statuses to filter by
            order_by: Column to sort descending by ("updated_at" or "created_at")
            limit: Maximum number of records to return (default: all)
            offset: Number of records to skip

        Returns:
            List of UserBook objects
        """
        if order_by not in ("updated_at", "created_at"):
            raise ValueError(f"Invalid order field: {order_by}")

        query = self.session.query(UserBook).filter(UserBook.user_id == user_id)
        if not include_private:
            query = query.filter(UserBook.is_private.is_(False))
        if statuses:
            query = query.filter(UserBook.status.in_(statuses))
        query = query.order_by(desc(getattr(UserBook, order_by)), desc(UserBook.id)).offset(offset)
        if limit:
            query = query.limit(limit)
        return query.all()

    def count_user_books(self, user_id: int, status: Optional[str] = None) -> int:
        query = self.session.query(UserBook).filter(UserBook.user_id == user_id)
        if status:
            query = query.filter(UserBook.status == status)
        return query.count()

    def upsert(self, user_id: int, hardcover_id: str, **fields: Any) -> UserBook:
        """Create the record for (user, book) or update the existing one.

        There is never more than one record per user and book; adding a book
        that is already on the shelf updates it in place.

        Args:
            user_id: The ID of the user
            hardcover_id: The Hardcover book ID
            **fields: Column values to set (see MUTABLE_FIELDS)

        Returns:
            The created or updated UserBook object

        Raises:
            ValueError: If the row cannot be written
        """
        updates = self._clean(fields)
        record = self.get_entry(user_id, hardcover_id)
        if record:
            for name, value in updates.items():
                setattr(record, name, value)
        else:
            record = UserBook(user_id=user_id, hardcover_id=hardcover_id, **updates)
            self.session.add(record)

        try:
            self.session.commit()
            return record
        except IntegrityError as e:
            self.session.rollback()
            raise ValueError(f"Could not save library record for book {hardcover_id}: {e.orig}")

    def update(self, record: UserBook, **fields: Any) -> UserBook:
        """Apply field updates to an existing record and commit"""
        for name, value in self._clean(fields).items():
            setattr(record, name, value)
        try:
            self.session.commit()
            return record
        except Exception:
            self.session.rollback()
            raise

    def delete_entry(self, user_id: int, hardcover_id: str) -> bool:
        """Remove a book from a user's library.

        Returns:
            True if a record was deleted, False if not found
        """
        result = (
            self.session.query(UserBook)
            .filter(
                UserBook.user_id == user_id,
                UserBook.hardcover_id == hardcover_id
            )
            .delete()
        )
        self.session.commit()
        return result > 0

    @staticmethod
    def _clean(fields: Dict[str, Any]) -> Dict[str, Any]:
        unknown = set(fields) - set(MUTABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update library record fields: {', '.join(sorted(unknown))}")
        return fields
