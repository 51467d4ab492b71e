from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from nextpage_api.domain import BookId
from nextpage_api.models import Book, BookSimilarity
from nextpage_api.schemas.book import Book as BookSchema


class BooksRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, book_id: BookId) -> Book | None:
        return self.session.get(Book, book_id)

    def get_by_isbn(self, isbn: str) -> Book | None:
        stmt = select(Book).where(Book.isbn == isbn)
        return self.session.scalars(stmt).first()

    def get_by_ids(self, book_ids: Sequence[str]) -> list[Book]:
        """
        Returns the books for the given ids, in the order the ids were given.
        Unknown ids are skipped.
        """
        if not book_ids:
            return []
        stmt = select(Book).where(Book.id.in_(book_ids))
        by_id = {book.id: book for book in self.session.scalars(stmt).all()}
        return [by_id[book_id] for book_id in book_ids if book_id in by_id]

    def get_similarities(self, book_ids: Sequence[str]) -> list[BookSimilarity]:
        """
        Retrieves the pre-computed similarities for the given books.
        """
        if not book_ids:
            return []
        stmt = select(BookSimilarity).where(BookSimilarity.book_id.in_(book_ids))
        by_id = {row.book_id: row for row in self.session.scalars(stmt).all()}
        return [by_id[book_id] for book_id in book_ids if book_id in by_id]

    def add(self, book: BookSchema) -> Book:
        book_model = Book(**book.model_dump())
        self.session.add(book_model)
        self.session.commit()
        self.session.refresh(book_model)
        return book_model
