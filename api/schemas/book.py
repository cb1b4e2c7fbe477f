# api/schemas/book.py
from datetime import date
from typing import Optional, List, Dict
from pydantic import BaseModel, ConfigDict


class BookMetadata(BaseModel):
    id: str
    title: str
    subtitle: Optional[str] = None
    authors: List[str] = []
    cover_url: Optional[str] = None
    page_count: Optional[int] = None
    description: Optional[str] = None
    release_date: Optional[str] = None
    publication_year: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class ReviewStats(BaseModel):
    average_rating: float
    total_reviews: int


class ShelfEntry(BaseModel):
    id: int
    status: str
    start_date: Optional[date] = None
    finish_date: Optional[date] = None
    current_page: Optional[int] = None
    rating: Optional[float] = None
    is_favorite: bool = False
    is_private: bool = False

    model_config = ConfigDict(from_attributes=True)


class ExploreBooks(BaseModel):
    popular: List[BookMetadata] = []
    categories: Dict[str, List[BookMetadata]]


class AuthorDetail(BaseModel):
    id: int
    name: str
    bio: Optional[str] = None
    image_url: Optional[str] = None
    location: Optional[str] = None
    books_count: Optional[int] = None
    books: List[BookMetadata] = []
