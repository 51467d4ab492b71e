import logging

from pydantic import validate_call

from nextpage_api.clients.google_books import GoogleBooksClient
from nextpage_api.domain import BookId
from nextpage_api.repositories.books_repository import BooksRepository
from nextpage_api.schemas.book import Book, BookSearchResults

logger = logging.getLogger(__name__)


class BookService:
    def __init__(self, repo: BooksRepository, catalog: GoogleBooksClient | None = None) -> None:
        self.repo = repo
        self.catalog = catalog

    @validate_call
    def get_book(self, book_id: BookId) -> Book | None:
        book = self.repo.get_by_id(book_id)
        if not book:
            return None
        return Book.model_validate(book)

    async def search(self, query: str, start_index: int = 0) -> BookSearchResults:
        if self.catalog is None:
            raise RuntimeError("BookService was created without a catalog client")
        items = await self.catalog.search_books(query, start_index=start_index)
        return BookSearchResults(items=items, query=query, start_index=start_index)

    def ensure_book_exists(self, book: Book) -> BookId:
        """
        Returns the stored id for the book, inserting it when it is new.
        A stored book with the same ISBN is reused instead of inserting a copy.
        """
        if self.repo.get_by_id(book.id) is not None:
            return book.id

        if book.isbn:
            existing = self.repo.get_by_isbn(book.isbn)
            if existing is not None:
                logger.info(
                    "Reusing stored book with matching ISBN",
                    extra={"book_id": book.id, "stored_book_id": existing.id},
                )
                return BookId(existing.id)

        stored = self.repo.add(book)
        return BookId(stored.id)
