from nextpage_api.domain import BookId, ReadingStatusValue
from nextpage_api.repositories.library_repository import LibraryRepository
from nextpage_api.schemas.book import Book
from nextpage_api.services.book_service import BookService


class LibraryService:
    def __init__(self, repo: LibraryRepository, books: BookService) -> None:
        self.repo = repo
        self.books = books

    def update_status(self, user_id: str, book: Book, status: ReadingStatusValue) -> BookId:
        book_id = self.books.ensure_book_exists(book)
        if status == "none":
            self.repo.remove_book(user_id, book_id)
        else:
            self.repo.upsert_status(user_id, book_id, status)
        return book_id

    def reading_list(self, user_id: str) -> list[Book]:
        return [
            Book.model_validate(row)
            for row in self.repo.list_books_with_status(user_id, "want_to_read")
        ]

    def reading_history(self, user_id: str) -> list[Book]:
        rows = self.repo.list_books_with_status(user_id, "read")
        return [Book.model_validate(row) for row in rows]

    def rate(self, user_id: str, book_id: BookId, rating: int) -> int:
        return self.repo.upsert_rating(user_id, book_id, rating).rating

    def get_rating(self, user_id: str, book_id: BookId) -> int | None:
        return self.repo.get_rating(user_id, book_id)

    def remove(self, user_id: str, book_id: BookId) -> None:
        self.repo.remove_book(user_id, book_id)

    def dismiss(self, user_id: str, book: Book) -> BookId:
        book_id = self.books.ensure_book_exists(book)
        self.repo.add_dismissed(user_id, book_id)
        return book_id

    def add_negative_feedback(self, user_id: str, book: Book) -> BookId:
        book_id = self.books.ensure_book_exists(book)
        self.repo.add_feedback(user_id, book_id, "negative")
        return book_id

    def excluded_book_ids(self, user_id: str) -> set[str]:
        return self.repo.get_excluded_book_ids(user_id)

    def recommendation_seeds(self, user_id: str) -> list[Book]:
        """Read and rated books, history first, without duplicates."""
        seeds: dict[str, Book] = {}
        rows = self.repo.list_books_with_status(user_id, "read")
        rows += self.repo.list_rated_books(user_id)
        for row in rows:
            seeds.setdefault(row.id, Book.model_validate(row))
        return list(seeds.values())
