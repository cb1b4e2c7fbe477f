# shelf/sa/repositories/review.py
from typing import List, Optional
from sqlalchemy import desc
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import IntegrityError
from shelf.sa.models import Review


class ReviewRepository:
    """Repository for managing Review entities."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, review_id: int) -> Optional[Review]:
        return self.session.query(Review).filter(Review.id == review_id).first()

    def get_user_review(self, user_id: int, hardcover_id: str) -> Optional[Review]:
        return (
            self.session.query(Review)
            .filter(Review.user_id == user_id, Review.hardcover_id == hardcover_id)
            .first()
        )

    def upsert_review(
        self,
        user_id: int,
        hardcover_id: str,
        rating: float,
        review_text: Optional[str] = None,
        is_spoiler: bool = False
    ) -> Review:
        """Create the user's review of a book, or replace its contents.

        Args:
            user_id: The ID of the reviewer
            hardcover_id: The Hardcover book ID
            rating: Already validated rating (0-10, one decimal)
            review_text: Optional review body
            is_spoiler: Whether the text reveals plot details

        Returns:
            The created or updated Review object
        """
        review = self.get_user_review(user_id, hardcover_id)
        if review:
            review.rating = rating
            review.review_text = review_text
            review.is_spoiler = is_spoiler
        else:
            review = Review(
                user_id=user_id,
                hardcover_id=hardcover_id,
                rating=rating,
                review_text=review_text,
                is_spoiler=is_spoiler
            )
            self.session.add(review)

        try:
            self.session.commit()
            return review
        except IntegrityError as e:
            self.session.rollback()
            raise ValueError(f"Could not save review for book {hardcover_id}: {e.orig}")

    def get_book_reviews(self, hardcover_id: str, limit: Optional[int] = None) -> List[Review]:
        """Reviews of a book, newest first, with reviewers loaded"""
        query = (
            self.session.query(Review)
            .options(joinedload(Review.user))
            .filter(Review.hardcover_id == hardcover_id)
            .order_by(desc(Review.created_at), desc(Review.id))
        )
        if limit:
            query = query.limit(limit)
        return query.all()

    def get_book_ratings(self, hardcover_id: str) -> List[float]:
        rows = self.session.query(Review.rating).filter(Review.hardcover_id == hardcover_id).all()
        return [row.rating for row in rows]

    def get_user_reviews(self, user_id: int, limit: Optional[int] = None) -> List[Review]:
        query = (
            self.session.query(Review)
            .filter(Review.user_id == user_id)
            .order_by(desc(Review.created_at), desc(Review.id))
        )
        if limit:
            query = query.limit(limit)
        return query.all()

    def delete_review(self, user_id: int, hardcover_id: str) -> bool:
        result = (
            self.session.query(Review)
            .filter(Review.user_id == user_id, Review.hardcover_id == hardcover_id)
            .delete()
        )
        self.session.commit()
        return result > 0
