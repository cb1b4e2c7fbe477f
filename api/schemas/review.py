# api/schemas/review.py
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field

from .book import BookMetadata, ReviewStats, ShelfEntry
from .user import UserSummary


class ReviewCreate(BaseModel):
    rating: float = Field(..., description="Rating from 0 to 10, one decimal")
    review_text: Optional[str] = None
    is_spoiler: bool = False


class ReviewSchema(BaseModel):
    id: int
    user_id: int
    hardcover_id: str
    rating: float
    review_text: Optional[str] = None
    is_spoiler: bool = False
    created_at: datetime
    updated_at: datetime
    user: Optional[UserSummary] = None

    model_config = ConfigDict(from_attributes=True)


class UserReview(BaseModel):
    review: ReviewSchema
    book: Optional[BookMetadata] = None

    model_config = ConfigDict(from_attributes=True)


class UserReviewList(BaseModel):
    items: List[UserReview]
    total: int


class BookDetail(BaseModel):
    book: BookMetadata
    stats: ReviewStats
    reviews: List[ReviewSchema] = []
    shelf_entry: Optional[ShelfEntry] = None
