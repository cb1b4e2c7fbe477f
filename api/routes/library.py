# api/routes/library.py

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from api.dependencies import get_auth_session, get_hardcover
from api.schemas.library import (
    DisplayBookSchema, LibraryFilterEnum, LibraryRecordSchema, LibraryResponse,
    NotesUpdate, PrivacyUpdate, ProgressUpdate, StatusUpdate
)
from shelf.auth import AuthSession
from shelf.exceptions import NotFoundError
from shelf.hardcover import HardcoverClient
from shelf.lifecycle import status_label
from shelf.merge import DisplayBook
from shelf.sa.database import get_db
from shelf.services import LibraryService

router = APIRouter(prefix="/my-books", tags=["library"])


def to_display_schema(book: DisplayBook) -> DisplayBookSchema:
    return DisplayBookSchema(
        record_id=book.record_id,
        hardcover_id=book.hardcover_id,
        title=book.title,
        author=book.author,
        cover_url=book.cover_url,
        status=book.status,
        status_label=status_label(book.status),
        page_count=book.page_count,
        description=book.description,
        publication_year=book.publication_year,
        start_date=book.start_date,
        finish_date=book.finish_date,
        current_page=book.current_page,
        progress_percent=book.progress_percent,
        rating=book.rating,
        notes=book.notes,
        is_favorite=book.is_favorite,
        is_private=book.is_private,
        updated_at=book.updated_at,
        metadata_found=book.metadata_found
    )


def get_library_service(
    db: Session = Depends(get_db),
    hardcover: HardcoverClient = Depends(get_hardcover)
) -> LibraryService:
    return LibraryService(db, hardcover)


@router.get("", response_model=LibraryResponse)
def get_my_books(
    filter: LibraryFilterEnum = Query(LibraryFilterEnum.all, description="Library tab"),
    auth: Optional[AuthSession] = Depends(get_auth_session),
    service: LibraryService = Depends(get_library_service)
):
    """
    The caller's library, most recently updated first, merged with Hardcover metadata.

    Anonymous callers get an empty library.
    """
    view = service.get_library(auth, filter.value)
    return LibraryResponse(
        filter=filter,
        counts=view.counts,
        items=[to_display_schema(book) for book in view.books]
    )


@router.put("/{hardcover_id}", response_model=LibraryRecordSchema)
def add_to_shelf(
    hardcover_id: str,
    update: StatusUpdate,
    auth: Optional[AuthSession] = Depends(get_auth_session),
    service: LibraryService = Depends(get_library_service)
):
    """Add a book to the shelf, or move it to a new status if already there."""
    return service.add_to_shelf(auth, hardcover_id, update.status.value)


@router.delete("/{hardcover_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_from_shelf(
    hardcover_id: str,
    auth: Optional[AuthSession] = Depends(get_auth_session),
    service: LibraryService = Depends(get_library_service)
):
    if not service.remove_from_shelf(auth, hardcover_id):
        raise NotFoundError("Book is not on your shelf")
    return


@router.patch("/records/{record_id}/status", response_model=LibraryRecordSchema)
def update_status(
    record_id: int,
    update: StatusUpdate,
    auth: Optional[AuthSession] = Depends(get_auth_session),
    service: LibraryService = Depends(get_library_service)
):
    return service.update_status(auth, record_id, update.status.value)


@router.patch("/records/{record_id}/progress", response_model=LibraryRecordSchema)
def update_progress(
    record_id: int,
    update: ProgressUpdate,
    auth: Optional[AuthSession] = Depends(get_auth_session),
    service: LibraryService = Depends(get_library_service)
):
    return service.update_progress(auth, record_id, update.current_page)


@router.patch("/records/{record_id}/notes", response_model=LibraryRecordSchema)
def update_notes(
    record_id: int,
    update: NotesUpdate,
    auth: Optional[AuthSession] = Depends(get_auth_session),
    service: LibraryService = Depends(get_library_service)
):
    return service.update_notes(auth, record_id, update.notes)


@router.patch("/records/{record_id}/favorite", response_model=LibraryRecordSchema)
def toggle_favorite(
    record_id: int,
    auth: Optional[AuthSession] = Depends(get_auth_session),
    service: LibraryService = Depends(get_library_service)
):
    return service.toggle_favorite(auth, record_id)


@router.patch("/records/{record_id}/privacy", response_model=LibraryRecordSchema)
def set_privacy(
    record_id: int,
    update: PrivacyUpdate,
    auth: Optional[AuthSession] = Depends(get_auth_session),
    service: LibraryService = Depends(get_library_service)
):
    return service.set_privacy(auth, record_id, update.is_private)
