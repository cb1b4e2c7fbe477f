# shelf/services/review_service.py
import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.orm import Session

from shelf.auth import AuthSession, require_auth
from shelf.hardcover import HardcoverClient
from shelf.lifecycle import ReadingStatus
from shelf.merge import ExternalBookMetadata, normalize_external_id
from shelf.ratings import RatingSummary, aggregate_ratings, validate_rating
from shelf.sa.models import Review
from shelf.sa.repositories import ReviewRepository, ActivityRepository
from shelf.services.library_service import LibraryService, require_hardcover_id

logger = logging.getLogger(__name__)


@dataclass
class ReviewedBook:
    review: Review
    book: Optional[ExternalBookMetadata] = None


class ReviewService:
    def __init__(self, session: Session, hardcover: HardcoverClient, library_service: Optional[LibraryService] = None):
        self.session = session
        self.hardcover = hardcover
        self.reviews = ReviewRepository(session)
        self.activity = ActivityRepository(session)
        self.library_service = library_service or LibraryService(session, hardcover)

    def submit_review(
        self,
        auth: Optional[AuthSession],
        hardcover_id,
        rating,
        review_text: Optional[str] = None,
        is_spoiler: bool = False
    ) -> Review:
        """Rate and optionally review a book.

        The rating is validated before anything is written. A book that is not
        on the reader's shelf is added as finished; one that is on the shelf
        with another status is moved to finished. A reader has one review per
        book, so resubmitting replaces the earlier rating and text.

        Raises:
            AuthenticationError: Without a session
            ValidationError: For an invalid rating or book ID
        """
        auth = require_auth(auth)
        rating = validate_rating(rating)
        hardcover_id = require_hardcover_id(hardcover_id)
        review_text = (review_text or "").strip() or None

        record = self.library_service.get_shelf_entry(auth, hardcover_id)
        if record is None or record.status != ReadingStatus.finished.value:
            record = self.library_service.add_to_shelf(auth, hardcover_id, ReadingStatus.finished)
        self.library_service.library.update(record, rating=rating)

        review = self.reviews.upsert_review(
            user_id=auth.user_id,
            hardcover_id=hardcover_id,
            rating=rating,
            review_text=review_text,
            is_spoiler=bool(is_spoiler)
        )
        logger.info("User %s reviewed book %s (%s)", auth.user_id, hardcover_id, rating)

        if record.is_private:
            return review

        book = self.hardcover.get_book_by_id(hardcover_id)
        self.activity.record(
            user_id=auth.user_id,
            activity_type="review_posted",
            hardcover_id=hardcover_id,
            metadata={"rating": rating, "has_text": review_text is not None},
            book_title=book.title if book else None,
            book_author=book.author if book else None,
            book_cover_url=book.cover_url if book else None
        )
        return review

    def get_review_stats(self, hardcover_id) -> RatingSummary:
        hardcover_id = normalize_external_id(hardcover_id)
        if hardcover_id is None:
            return RatingSummary(0, 0)
        return aggregate_ratings(self.reviews.get_book_ratings(hardcover_id))

    def fetch_reviews(self, hardcover_id, limit: Optional[int] = None) -> List[Review]:
        hardcover_id = normalize_external_id(hardcover_id)
        if hardcover_id is None:
            return []
        return self.reviews.get_book_reviews(hardcover_id, limit=limit)

    def get_user_reviews(self, user_id: int, limit: Optional[int] = None) -> List[ReviewedBook]:
        """A reader's reviews, newest first, with book metadata where available"""
        reviews = self.reviews.get_user_reviews(user_id, limit=limit)
        if not reviews:
            return []
        metadata = self.hardcover.get_metadata_map(r.hardcover_id for r in reviews)
        return [ReviewedBook(review=r, book=metadata.get(r.hardcover_id)) for r in reviews]
