from sqlalchemy import select
from sqlalchemy.orm import Session

from nextpage_api.models import (
    Book,
    BookFeedback,
    BookRating,
    DismissedRecommendation,
    ReadingStatus,
)


class LibraryRepository:
    """Per-user reading status, ratings, dismissals and feedback."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def upsert_status(self, user_id: str, book_id: str, status: str) -> ReadingStatus:
        row = self.session.get(ReadingStatus, (user_id, book_id))
        if row is None:
            row = ReadingStatus(user_id=user_id, book_id=book_id, status=status)
            self.session.add(row)
        else:
            row.status = status
        self.session.commit()
        self.session.refresh(row)
        return row

    def list_books_with_status(self, user_id: str, status: str) -> list[Book]:
        stmt = (
            select(Book)
            .join(ReadingStatus, ReadingStatus.book_id == Book.id)
            .where(ReadingStatus.user_id == user_id, ReadingStatus.status == status)
            .order_by(ReadingStatus.updated_at.desc())
        )
        return list(self.session.scalars(stmt).all())

    def list_rated_books(self, user_id: str) -> list[Book]:
        stmt = (
            select(Book)
            .join(BookRating, BookRating.book_id == Book.id)
            .where(BookRating.user_id == user_id)
            .order_by(BookRating.updated_at.desc())
        )
        return list(self.session.scalars(stmt).all())

    def upsert_rating(self, user_id: str, book_id: str, rating: int) -> BookRating:
        row = self.session.get(BookRating, (user_id, book_id))
        if row is None:
            row = BookRating(user_id=user_id, book_id=book_id, rating=rating)
            self.session.add(row)
        else:
            row.rating = rating
        self.session.commit()
        self.session.refresh(row)
        return row

    def get_rating(self, user_id: str, book_id: str) -> int | None:
        row = self.session.get(BookRating, (user_id, book_id))
        return row.rating if row else None

    def remove_book(self, user_id: str, book_id: str) -> None:
        """Drops the book's reading status and rating for the user."""
        for model in (ReadingStatus, BookRating):
            row = self.session.get(model, (user_id, book_id))
            if row is not None:
                self.session.delete(row)
        self.session.commit()

    def add_dismissed(self, user_id: str, book_id: str) -> None:
        stmt = select(DismissedRecommendation).where(
            DismissedRecommendation.user_id == user_id,
            DismissedRecommendation.book_id == book_id,
        )
        if self.session.scalars(stmt).first() is None:
            self.session.add(DismissedRecommendation(user_id=user_id, book_id=book_id))
            self.session.commit()

    def add_feedback(self, user_id: str, book_id: str, feedback_type: str) -> None:
        self.session.add(
            BookFeedback(user_id=user_id, book_id=book_id, feedback_type=feedback_type)
        )
        self.session.commit()

    def get_excluded_book_ids(self, user_id: str) -> set[str]:
        """
        Returns every book id the user already tracks, dismissed or disliked.
        """
        status_ids = select(ReadingStatus.book_id).where(ReadingStatus.user_id == user_id)
        dismissed_ids = select(DismissedRecommendation.book_id).where(
            DismissedRecommendation.user_id == user_id
        )
        negative_ids = select(BookFeedback.book_id).where(
            BookFeedback.user_id == user_id, BookFeedback.feedback_type == "negative"
        )
        excluded: set[str] = set()
        for stmt in (status_ids, dismissed_ids, negative_ids):
            excluded.update(self.session.scalars(stmt).all())
        return excluded
