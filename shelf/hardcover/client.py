# shelf/hardcover/client.py
import logging
from typing import Any, Dict, Iterable, List, Optional

import requests
from dateutil import parser as date_parser

from shelf.config import settings
from shelf.exceptions import HardcoverError
from shelf.merge import ExternalBookMetadata, UNKNOWN_AUTHOR, normalize_external_id, numeric_ids
from shelf.hardcover import queries

logger = logging.getLogger(__name__)

USER_AGENT = "ReadThat-App/1.0"


def to_metadata(raw: Dict[str, Any]) -> ExternalBookMetadata:
    """Convert a Hardcover book object into ExternalBookMetadata"""
    authors = [
        c["author"]["name"]
        for c in raw.get("contributions") or []
        if c and c.get("author") and c["author"].get("name")
    ]
    release_date = raw.get("release_date")
    publication_year = None
    if release_date:
        try:
            publication_year = date_parser.parse(release_date).year
        except (ValueError, OverflowError, TypeError):
            publication_year = None

    return ExternalBookMetadata(
        id=normalize_external_id(raw.get("id")) or str(raw.get("id")),
        title=raw.get("title") or "Unknown Title",
        subtitle=raw.get("subtitle"),
        authors=authors or [UNKNOWN_AUTHOR],
        cover_url=(raw.get("image") or {}).get("url") or None,
        page_count=raw.get("pages"),
        description=raw.get("description"),
        release_date=release_date,
        publication_year=publication_year,
    )


class HardcoverClient:
    """Thin client for the Hardcover GraphQL API.

    Every call is a single POST with a bearer token. ``execute`` raises
    HardcoverError; the lookup helpers catch it, log it and return empty
    results so page renders degrade instead of failing.
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None
    ):
        self.api_url = api_url or settings.hardcover_api_url
        self.token = token if token is not None else settings.hardcover_api_token
        self.timeout = timeout or settings.hardcover_timeout
        self.session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.token}",
            "User-Agent": USER_AGENT,
        }

    def proxy(self, document: Dict[str, Any]) -> Any:
        """Forward a GraphQL document and return the decoded JSON body as-is.

        GraphQL-level errors are part of the body and are not raised.

        Raises:
            HardcoverError: On transport failure or an undecodable body
        """
        try:
            response = self.session.post(
                self.api_url,
                json=document,
                headers=self._headers(),
                timeout=self.timeout
            )
            return response.json()
        except (requests.RequestException, ValueError) as e:
            raise HardcoverError(f"Hardcover request failed: {e}") from e

    def execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Run a query and return its ``data`` object.

        Raises:
            HardcoverError: On timeout, transport failure, non-2xx status or GraphQL errors
        """
        try:
            response = self.session.post(
                self.api_url,
                json={"query": query, "variables": variables or {}},
                headers=self._headers(),
                timeout=self.timeout
            )
            response.raise_for_status()
            body = response.json()
        except requests.Timeout as e:
            raise HardcoverError("Hardcover API request timeout") from e
        except (requests.RequestException, ValueError) as e:
            raise HardcoverError(f"Hardcover API request failed: {e}") from e

        if body.get("errors"):
            logger.error("Hardcover API GraphQL errors: %s", body["errors"])
            raise HardcoverError("GraphQL query failed")
        return body.get("data") or {}

    def get_book_by_id(self, book_id: Any) -> Optional[ExternalBookMetadata]:
        """Fetch one book; None when it does not exist or the call fails"""
        ids = numeric_ids([book_id])
        if not ids:
            return None
        try:
            data = self.execute(queries.GET_BOOK_BY_ID_QUERY, {"id": ids[0]})
        except HardcoverError as e:
            logger.error("Failed to fetch book %s: %s", book_id, e)
            return None
        books = data.get("books") or []
        return to_metadata(books[0]) if books else None

    def get_books_by_ids(self, ids: Iterable[Any]) -> List[ExternalBookMetadata]:
        """Fetch many books in one round trip.

        If the bulk ``_in`` query fails the books are requested one by one and
        whatever resolves is returned. Unknown IDs are simply absent.
        """
        book_ids = numeric_ids(ids)
        if not book_ids:
            return []
        try:
            data = self.execute(queries.GET_BOOKS_BY_IDS_QUERY, {"ids": book_ids})
            return [to_metadata(raw) for raw in data.get("books") or []]
        except HardcoverError as e:
            logger.warning("Bulk query failed, falling back to individual requests: %s", e)

        books = []
        for book_id in book_ids:
            book = self.get_book_by_id(book_id)
            if book:
                books.append(book)
        return books

    def get_metadata_map(self, ids: Iterable[Any]) -> Dict[str, ExternalBookMetadata]:
        """Lookup table keyed by canonical Hardcover ID; never raises"""
        try:
            return {book.id: book for book in self.get_books_by_ids(ids)}
        except Exception:
            logger.exception("Error fetching book details from Hardcover")
            return {}

    def get_popular_books(self, limit: int = 12) -> List[ExternalBookMetadata]:
        try:
            data = self.execute(queries.GET_POPULAR_BOOKS_QUERY, {"limit": limit})
        except HardcoverError as e:
            logger.error("Failed to fetch popular books: %s", e)
            return []
        return [to_metadata(raw) for raw in data.get("books") or []]

    def get_explore_books(self) -> Dict[str, List[ExternalBookMetadata]]:
        """Curated categories for the explore page; failed categories are empty"""
        return {
            category: self.get_books_by_ids(ids)
            for category, ids in queries.EXPLORE_CATEGORIES.items()
        }

    def search_books(self, query: str, limit: int = 5) -> List[Dict[str, Any]]:
        """Raw search hits from Hardcover's search index"""
        if not query or not query.strip():
            return []
        try:
            data = self.execute(queries.SEARCH_BOOKS_QUERY, {"query": query.strip(), "per_page": limit})
        except HardcoverError as e:
            logger.error("Search failed: %s", e)
            return []
        results = (data.get("search") or {}).get("results")
        if isinstance(results, dict):
            return results.get("hits") or []
        return []

    def get_author_by_id(self, author_id: Any) -> Optional[Dict[str, Any]]:
        ids = numeric_ids([author_id])
        if not ids:
            return None
        try:
            data = self.execute(queries.GET_AUTHOR_BY_ID_QUERY, {"id": ids[0]})
        except HardcoverError as e:
            logger.error("Failed to fetch author %s: %s", author_id, e)
            return None
        authors = data.get("authors") or []
        return authors[0] if authors else None

    def get_books_by_author(self, author_id: Any) -> List[ExternalBookMetadata]:
        ids = numeric_ids([author_id])
        if not ids:
            return []
        try:
            data = self.execute(queries.GET_BOOKS_BY_AUTHOR_QUERY, {"authorId": ids[0]})
        except HardcoverError as e:
            logger.error("Failed to fetch books for author %s: %s", author_id, e)
            return []
        return [to_metadata(raw) for raw in data.get("books") or []]
