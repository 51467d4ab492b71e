from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from httpx import Request, Response

from nextpage_api.clients.google_books import (
    CatalogError,
    GoogleBooksClient,
    book_id_for_volume,
    genre_query,
    volume_to_book,
)

BASE_URL = "https://books.example.test/v1"


def volume(volume_id: str, **info) -> dict:
    return {"id": volume_id, "volumeInfo": {"title": f"Title {volume_id}", **info}}


def make_client(response: Response | None = None, error: Exception | None = None):
    http = MagicMock(spec=httpx.AsyncClient)
    http.get = AsyncMock(return_value=response, side_effect=error)
    return GoogleBooksClient(client=http, base_url=BASE_URL + "/", timeout=2.0), http


def ok(payload: dict) -> Response:
    return Response(200, json=payload, request=Request("GET", f"{BASE_URL}/volumes"))


def test_book_id_for_volume_is_deterministic():
    assert book_id_for_volume("zyTCAlFPjgYC") == book_id_for_volume("zyTCAlFPjgYC")
    assert book_id_for_volume("zyTCAlFPjgYC") != book_id_for_volume("other")
    assert len(book_id_for_volume("zyTCAlFPjgYC")) == 36


def test_volume_to_book_maps_fields():
    book = volume_to_book(
        volume(
            "vol-1",
            authors=["Ursula K. Le Guin", "Someone Else"],
            imageLinks={"thumbnail": "http://img/1.jpg"},
            description="Wizards.",
            industryIdentifiers=[{"type": "ISBN_13", "identifier": "9780553383041"}],
            publishedDate="1968-09",
            categories=["Fiction", "Fantasy"],
        )
    )

    assert book.id == book_id_for_volume("vol-1")
    assert book.title == "Title vol-1"
    assert book.author == "Ursula K. Le Guin"
    assert book.cover_url == "http://img/1.jpg"
    assert book.isbn == "9780553383041"
    assert book.publication_year == 1968
    assert book.genres == ["Fiction", "Fantasy"]
    assert book.reading_level is None


def test_volume_to_book_defaults_missing_fields():
    book = volume_to_book(volume("vol-2", publishedDate="n.d."))

    assert book.author == "Unknown Author"
    assert book.cover_url == ""
    assert book.isbn == ""
    assert book.publication_year is None
    assert book.genres == []


def test_genre_query_joins_subjects():
    assert genre_query(["Fantasy", "Science Fiction"]) == (
        'subject:"Fantasy" OR subject:"Science Fiction"'
    )


@pytest.mark.asyncio
async def test_search_by_genres_requests_double_limit_and_filters_excluded():
    items = [volume(f"v{i}") for i in range(5)]
    client, http = make_client(ok({"items": items}))
    excluded = {book_id_for_volume("v1")}

    books = await client.search_by_genres(["Fantasy"], excluded, limit=3)

    assert [book.id for book in books] == [
        book_id_for_volume("v0"),
        book_id_for_volume("v2"),
        book_id_for_volume("v3"),
    ]
    http.get.assert_awaited_once_with(
        f"{BASE_URL}/volumes",
        params={"q": 'subject:"Fantasy"', "maxResults": 6, "fields": "items(id,volumeInfo)"},
        timeout=2.0,
    )


@pytest.mark.asyncio
async def test_search_by_genres_without_genres_skips_request():
    client, http = make_client()

    assert await client.search_by_genres([], set(), limit=10) == []
    http.get.assert_not_called()


@pytest.mark.asyncio
async def test_search_books_handles_missing_items():
    client, _ = make_client(ok({"totalItems": 0}))

    assert await client.search_books("nothing matches") == []


@pytest.mark.asyncio
async def test_search_books_passes_api_key_and_paging():
    client, http = make_client(ok({"items": [volume("v1")]}))
    client.api_key = "secret"

    books = await client.search_books("dune", start_index=40)

    assert len(books) == 1
    params = http.get.await_args.kwargs["params"]
    assert params["key"] == "secret"
    assert params["startIndex"] == 40
    assert params["maxResults"] == 40


@pytest.mark.asyncio
async def test_http_error_status_raises_catalog_error():
    client, _ = make_client(Response(503, request=Request("GET", f"{BASE_URL}/volumes")))

    with pytest.raises(CatalogError):
        await client.search_books("dune")


@pytest.mark.asyncio
async def test_transport_error_raises_catalog_error():
    client, _ = make_client(error=httpx.ConnectError("refused"))

    with pytest.raises(CatalogError):
        await client.search_by_genres(["Fantasy"], set(), limit=5)
