# shelf/merge.py
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

UNKNOWN_TITLE = "Unknown Book"
UNKNOWN_AUTHOR = "Unknown Author"

LIBRARY_FILTERS = ("all", "reading", "want_to_read", "finished", "dnf", "favorites")


def normalize_external_id(value: Any) -> Optional[str]:
    """Canonical string form of a Hardcover book ID.

    Integers and numeric strings (surrounding whitespace allowed) map to the
    decimal string of the integer. Anything else maps to None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    text = str(value).strip()
    if not text:
        return None
    try:
        return str(int(text))
    except ValueError:
        return None


def numeric_ids(ids: Iterable[Any]) -> List[int]:
    """Unique integer IDs in first-seen order, dropping unparseable values"""
    seen = set()
    result = []
    for value in ids:
        normalized = normalize_external_id(value)
        if normalized is None:
            continue
        number = int(normalized)
        if number not in seen:
            seen.add(number)
            result.append(number)
    return result


@dataclass
class ExternalBookMetadata:
    """Book data owned by Hardcover, fetched per request"""
    id: str
    title: str
    authors: List[str] = field(default_factory=list)
    subtitle: Optional[str] = None
    cover_url: Optional[str] = None
    page_count: Optional[int] = None
    description: Optional[str] = None
    release_date: Optional[str] = None
    publication_year: Optional[int] = None

    @property
    def author(self) -> str:
        return self.authors[0] if self.authors else UNKNOWN_AUTHOR


@dataclass
class DisplayBook:
    """A library record joined with its book metadata"""
    record_id: Any
    hardcover_id: Optional[str]
    title: str
    author: str
    cover_url: Optional[str]
    status: str
    page_count: Optional[int] = None
    description: Optional[str] = None
    publication_year: Optional[int] = None
    start_date: Optional[date] = None
    finish_date: Optional[date] = None
    current_page: Optional[int] = None
    rating: Optional[float] = None
    notes: Optional[str] = None
    is_favorite: bool = False
    is_private: bool = False
    updated_at: Optional[datetime] = None
    metadata_found: bool = True

    @property
    def progress_percent(self) -> Optional[float]:
        return progress_percent(self.current_page, self.page_count)


def _field(record: Any, name: str, default: Any = None) -> Any:
    if isinstance(record, Mapping):
        return record.get(name, default)
    return getattr(record, name, default)


def merge_library(
    records: Sequence[Any],
    metadata_by_id: Mapping[str, ExternalBookMetadata],
) -> List[DisplayBook]:
    """Combine library records with fetched metadata.

    One DisplayBook is produced per record, in input order. Records whose
    metadata is missing get the "Unknown Book" placeholder so tracking data is
    never dropped.
    """
    merged = []
    for record in records:
        hardcover_id = normalize_external_id(_field(record, "hardcover_id"))
        metadata = metadata_by_id.get(hardcover_id) if hardcover_id else None

        status = _field(record, "status")
        if hasattr(status, "value"):
            status = status.value

        tracking = dict(
            record_id=_field(record, "id"),
            hardcover_id=hardcover_id,
            status=status,
            start_date=_field(record, "start_date"),
            finish_date=_field(record, "finish_date"),
            current_page=_field(record, "current_page"),
            rating=_field(record, "rating"),
            notes=_field(record, "notes"),
            is_favorite=bool(_field(record, "is_favorite", False)),
            is_private=bool(_field(record, "is_private", False)),
            updated_at=_field(record, "updated_at"),
        )

        if metadata is not None:
            merged.append(DisplayBook(
                title=metadata.title,
                author=metadata.author,
                cover_url=metadata.cover_url or None,
                page_count=metadata.page_count,
                description=metadata.description,
                publication_year=metadata.publication_year,
                metadata_found=True,
                **tracking
            ))
        else:
            merged.append(DisplayBook(
                title=UNKNOWN_TITLE,
                author=UNKNOWN_AUTHOR,
                cover_url=None,
                metadata_found=False,
                **tracking
            ))
    return merged


def _naive_utc(value: datetime) -> datetime:
    # SQLite hands back naive UTC; freshly written rows still carry tzinfo
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def sort_by_activity(records: Iterable[Any]) -> List[Any]:
    """Most recently updated first; records without updated_at go last"""
    def key(record):
        updated_at = _field(record, "updated_at")
        if updated_at is None:
            return (False, datetime.min)
        return (True, _naive_utc(updated_at))
    return sorted(records, key=key, reverse=True)


def filter_records(records: Iterable[Any], filter_name: str = "all") -> List[Any]:
    """Select the records shown under one of the library tabs.

    Raises:
        ValueError: If filter_name is not a known tab
    """
    if filter_name not in LIBRARY_FILTERS:
        raise ValueError(f"Unknown library filter: {filter_name}")
    records = list(records)
    if filter_name == "all":
        return records
    if filter_name == "favorites":
        return [r for r in records if _field(r, "is_favorite")]
    return [r for r in records if _status_value(r) == filter_name]


def filter_counts(records: Iterable[Any]) -> Dict[str, int]:
    records = list(records)
    return {name: len(filter_records(records, name)) for name in LIBRARY_FILTERS}


def progress_percent(current_page: Optional[int], page_count: Optional[int]) -> Optional[float]:
    if not current_page or not page_count:
        return None
    return min(100.0, round(current_page / page_count * 100, 1))


def _status_value(record: Any) -> Optional[str]:
    status = _field(record, "status")
    return status.value if hasattr(status, "value") else status
