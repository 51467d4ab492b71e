from datetime import UTC, datetime

from sqlalchemy import (
    JSON,
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from nextpage_api.database import Base


def _utcnow() -> datetime:
    return datetime.now(UTC)


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    external_idp_id: Mapped[str] = mapped_column(String, unique=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    __table_args__ = (CheckConstraint("id LIKE 'usr_%'", name="ck_users_id_format"),)


class Book(Base):
    __tablename__ = "books"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    author: Mapped[str] = mapped_column(Text, nullable=False, default="Unknown Author")
    cover_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    isbn: Mapped[str] = mapped_column(Text, nullable=False, default="", index=True)
    publication_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    genres: Mapped[list[str]] = mapped_column(JSON, default=list)
    reading_level: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)


class BookSimilarity(Base):
    __tablename__ = "book_similarities"

    book_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("books.id", ondelete="CASCADE"), primary_key=True
    )
    neighbor_ids: Mapped[list[str]] = mapped_column(JSON, default=list)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)


class UserPreference(Base):
    __tablename__ = "user_preferences"

    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    favorite_genres: Mapped[list[str]] = mapped_column(JSON, default=list)
    favorite_authors: Mapped[list[str]] = mapped_column(JSON, default=list)
    reading_level: Mapped[str] = mapped_column(Text, nullable=False, default="intermediate")
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )


class UserReadingPattern(Base):
    __tablename__ = "user_reading_patterns"

    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    total_books_read: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    avg_reading_hours: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    preferred_genre: Mapped[str] = mapped_column(Text, nullable=False, default="")
    avg_pages_per_session: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    completed_sessions: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    abandoned_sessions: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class GenrePreference(Base):
    __tablename__ = "genre_preferences"

    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    genre: Mapped[str] = mapped_column(Text, primary_key=True)
    weight: Mapped[float] = mapped_column(Float, nullable=False, default=1.0)

    __table_args__ = (CheckConstraint("weight > 0", name="ck_genre_preferences_weight_positive"),)


class ReadingStatus(Base):
    __tablename__ = "reading_status"

    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    book_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("books.id", ondelete="CASCADE"), primary_key=True
    )
    status: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    __table_args__ = (
        CheckConstraint("status IN ('want_to_read', 'read')", name="ck_reading_status_status"),
    )


class BookRating(Base):
    __tablename__ = "book_ratings"

    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    book_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("books.id", ondelete="CASCADE"), primary_key=True
    )
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_book_ratings_rating_1_5"),
    )


class DismissedRecommendation(Base):
    __tablename__ = "dismissed_recommendations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    book_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("books.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    __table_args__ = (
        UniqueConstraint("user_id", "book_id", name="uq_dismissed_recommendations_user_book"),
    )


class BookFeedback(Base):
    __tablename__ = "book_feedback"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    book_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("books.id", ondelete="CASCADE"), nullable=False
    )
    feedback_type: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    __table_args__ = (
        CheckConstraint("feedback_type IN ('negative')", name="ck_book_feedback_type"),
    )
