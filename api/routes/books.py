# api/routes/books.py

from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from api.dependencies import get_auth_session, get_hardcover
from api.schemas.book import AuthorDetail, BookMetadata, ExploreBooks, ReviewStats, ShelfEntry
from api.schemas.review import BookDetail, ReviewCreate, ReviewSchema
from shelf.auth import AuthSession
from shelf.hardcover import HardcoverClient
from shelf.sa.database import get_db
from shelf.services import LibraryService, ReviewService

router = APIRouter(tags=["books"])


@router.get("/books/{hardcover_id}", response_model=BookDetail)
def get_book(
    hardcover_id: str,
    auth: Optional[AuthSession] = Depends(get_auth_session),
    db: Session = Depends(get_db),
    hardcover: HardcoverClient = Depends(get_hardcover)
):
    """
    Book page: Hardcover metadata, review stats, reviews and the viewer's shelf entry.
    """
    book = hardcover.get_book_by_id(hardcover_id)
    if book is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Book not found")

    library_service = LibraryService(db, hardcover)
    review_service = ReviewService(db, hardcover, library_service)
    stats = review_service.get_review_stats(book.id)
    entry = library_service.get_shelf_entry(auth, book.id)

    return BookDetail(
        book=BookMetadata.model_validate(book),
        stats=ReviewStats(average_rating=stats.average_rating, total_reviews=stats.total_reviews),
        reviews=[ReviewSchema.model_validate(r) for r in review_service.fetch_reviews(book.id)],
        shelf_entry=ShelfEntry.model_validate(entry) if entry else None
    )


@router.get("/books/{hardcover_id}/reviews", response_model=list[ReviewSchema])
def get_book_reviews(
    hardcover_id: str,
    limit: Optional[int] = Query(None, ge=1, le=100, description="Maximum number of reviews"),
    db: Session = Depends(get_db),
    hardcover: HardcoverClient = Depends(get_hardcover)
):
    return ReviewService(db, hardcover).fetch_reviews(hardcover_id, limit=limit)


@router.get("/books/{hardcover_id}/stats", response_model=ReviewStats)
def get_book_stats(
    hardcover_id: str,
    db: Session = Depends(get_db),
    hardcover: HardcoverClient = Depends(get_hardcover)
):
    stats = ReviewService(db, hardcover).get_review_stats(hardcover_id)
    return ReviewStats(average_rating=stats.average_rating, total_reviews=stats.total_reviews)


@router.post("/books/{hardcover_id}/reviews", response_model=ReviewSchema, status_code=status.HTTP_201_CREATED)
def submit_review(
    hardcover_id: str,
    review: ReviewCreate,
    auth: Optional[AuthSession] = Depends(get_auth_session),
    db: Session = Depends(get_db),
    hardcover: HardcoverClient = Depends(get_hardcover)
):
    """
    Rate and review a book. Books not yet on the shelf are added as finished.
    """
    return ReviewService(db, hardcover).submit_review(
        auth,
        hardcover_id,
        rating=review.rating,
        review_text=review.review_text,
        is_spoiler=review.is_spoiler
    )


@router.get("/explore", response_model=ExploreBooks)
def explore(
    popular_limit: int = Query(12, ge=1, le=50, description="Number of popular books"),
    hardcover: HardcoverClient = Depends(get_hardcover)
):
    """Most-shelved books on Hardcover plus the curated categories."""
    popular = hardcover.get_popular_books(limit=popular_limit)
    categories = hardcover.get_explore_books()
    return ExploreBooks(popular=[BookMetadata.model_validate(b) for b in popular], categories={
        name: [BookMetadata.model_validate(b) for b in books]
        for name, books in categories.items()
    })


@router.get("/search")
def search_books(
    q: str = Query("", description="Title search"),
    limit: int = Query(5, ge=1, le=50),
    hardcover: HardcoverClient = Depends(get_hardcover)
):
    """Raw Hardcover search hits."""
    return {"query": q, "hits": hardcover.search_books(q, limit=limit)}


@router.get("/authors/{author_id}", response_model=AuthorDetail)
def get_author(author_id: int, hardcover: HardcoverClient = Depends(get_hardcover)):
    author = hardcover.get_author_by_id(author_id)
    if author is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Author not found")
    image_url = (author.get("image") or {}).get("url") or author.get("cached_image")
    return AuthorDetail(
        id=author["id"],
        name=author["name"],
        bio=author.get("bio"),
        image_url=image_url if isinstance(image_url, str) else None,
        location=author.get("location"),
        books_count=author.get("books_count"),
        books=[BookMetadata.model_validate(b) for b in hardcover.get_books_by_author(author_id)]
    )
