# api/schemas/library.py
from datetime import date, datetime
from enum import Enum
from typing import Optional, List, Dict
from pydantic import BaseModel, ConfigDict, Field


class ReadingStatusEnum(str, Enum):
    want_to_read = "want_to_read"
    reading = "reading"
    finished = "finished"
    dnf = "dnf"


class LibraryFilterEnum(str, Enum):
    all = "all"
    reading = "reading"
    want_to_read = "want_to_read"
    finished = "finished"
    dnf = "dnf"
    favorites = "favorites"


class StatusUpdate(BaseModel):
    status: ReadingStatusEnum


class ProgressUpdate(BaseModel):
    current_page: Optional[int] = Field(None, ge=0)


class NotesUpdate(BaseModel):
    notes: Optional[str] = None


class PrivacyUpdate(BaseModel):
    is_private: bool


class LibraryRecordSchema(BaseModel):
    id: int
    user_id: int
    hardcover_id: str
    status: str
    start_date: Optional[date] = None
    finish_date: Optional[date] = None
    current_page: Optional[int] = None
    rating: Optional[float] = None
    notes: Optional[str] = None
    is_favorite: bool = False
    is_private: bool = False
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DisplayBookSchema(BaseModel):
    record_id: int
    hardcover_id: Optional[str] = None
    title: str
    author: str
    cover_url: Optional[str] = None
    status: str
    status_label: str
    page_count: Optional[int] = None
    description: Optional[str] = None
    publication_year: Optional[int] = None
    start_date: Optional[date] = None
    finish_date: Optional[date] = None
    current_page: Optional[int] = None
    progress_percent: Optional[float] = None
    rating: Optional[float] = None
    notes: Optional[str] = None
    is_favorite: bool = False
    is_private: bool = False
    updated_at: Optional[datetime] = None
    metadata_found: bool = True

    model_config = ConfigDict(from_attributes=True)


class LibraryResponse(BaseModel):
    filter: LibraryFilterEnum
    counts: Dict[str, int]
    items: List[DisplayBookSchema]
