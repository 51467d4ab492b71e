import logging
import uuid
from collections.abc import Collection, Sequence
from typing import Any

import httpx

from nextpage_api.domain import BookId
from nextpage_api.schemas.book import Book

logger = logging.getLogger(__name__)

SEARCH_PAGE_SIZE = 40
UNKNOWN_AUTHOR = "Unknown Author"
VOLUME_ID_NAMESPACE = uuid.NAMESPACE_DNS


class CatalogError(Exception):
    """Raised when the external catalog cannot be queried."""


def book_id_for_volume(volume_id: str) -> BookId:
    """Map a Google Books volume id to a stable book identifier."""
    return BookId(str(uuid.uuid5(VOLUME_ID_NAMESPACE, volume_id)))


def _parse_year(published_date: Any) -> int | None:
    if not isinstance(published_date, str) or len(published_date) < 4:
        return None
    try:
        return int(published_date[:4])
    except ValueError:
        return None


def volume_to_book(item: dict[str, Any]) -> Book:
    info = item.get("volumeInfo") or {}
    authors = info.get("authors") or []
    identifiers = info.get("industryIdentifiers") or []
    return Book(
        id=book_id_for_volume(item["id"]),
        title=info.get("title") or "",
        author=authors[0] if authors else UNKNOWN_AUTHOR,
        cover_url=(info.get("imageLinks") or {}).get("thumbnail", ""),
        description=info.get("description") or "",
        isbn=identifiers[0].get("identifier", "") if identifiers else "",
        publication_year=_parse_year(info.get("publishedDate")),
        genres=list(info.get("categories") or []),
    )


def genre_query(genres: Sequence[str]) -> str:
    return " OR ".join(f'subject:"{genre}"' for genre in genres)


class GoogleBooksClient:
    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        api_key: str | None = None,
        timeout: float = 5.0,
    ) -> None:
        self.client = client
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

    async def _volumes(self, params: dict[str, Any]) -> list[dict[str, Any]]:
        if self.api_key:
            params = {**params, "key": self.api_key}
        try:
            response = await self.client.get(
                f"{self.base_url}/volumes", params=params, timeout=self.timeout
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise CatalogError(f"Google Books request failed: {exc}") from exc
        return payload.get("items") or []

    async def search_books(self, query: str, start_index: int = 0) -> list[Book]:
        items = await self._volumes(
            {
                "q": query,
                "startIndex": start_index,
                "maxResults": SEARCH_PAGE_SIZE,
                "fields": "items(id,volumeInfo),totalItems",
            }
        )
        return [volume_to_book(item) for item in items]

    async def search_by_genres(
        self, genres: Sequence[str], exclude_ids: Collection[str], limit: int
    ) -> list[Book]:
        if not genres:
            return []

        query = genre_query(genres)
        logger.debug("Searching catalog by genres", extra={"query": query})
        items = await self._volumes(
            {"q": query, "maxResults": limit * 2, "fields": "items(id,volumeInfo)"}
        )

        excluded = set(exclude_ids)
        books = [volume_to_book(item) for item in items]
        return [book for book in books if book.id not in excluded][:limit]
