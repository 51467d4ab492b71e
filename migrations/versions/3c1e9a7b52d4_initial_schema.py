"""initial_schema

Revision ID: 3c1e9a7b52d4
Revises:
Create Date: 2026-10-12 10:14:03.512871

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3c1e9a7b52d4"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _user_fk() -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE")


def _book_fk() -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint(["book_id"], ["books.id"], ondelete="CASCADE")


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("external_idp_id", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("id LIKE 'usr_%'", name="ck_users_id_format"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_external_idp_id"), "users", ["external_idp_id"], unique=True)

    op.create_table(
        "books",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("author", sa.Text(), nullable=False),
        sa.Column("cover_url", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("isbn", sa.Text(), nullable=False),
        sa.Column("publication_year", sa.Integer(), nullable=True),
        sa.Column("genres", sa.JSON(), nullable=False),
        sa.Column("reading_level", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_books_isbn"), "books", ["isbn"], unique=False)

    op.create_table(
        "book_similarities",
        sa.Column("book_id", sa.String(length=64), nullable=False),
        sa.Column("neighbor_ids", sa.JSON(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        _book_fk(),
        sa.PrimaryKeyConstraint("book_id"),
    )

    op.create_table(
        "user_preferences",
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("favorite_genres", sa.JSON(), nullable=False),
        sa.Column("favorite_authors", sa.JSON(), nullable=False),
        sa.Column("reading_level", sa.Text(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        _user_fk(),
        sa.PrimaryKeyConstraint("user_id"),
    )

    op.create_table(
        "user_reading_patterns",
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("total_books_read", sa.Integer(), nullable=False),
        sa.Column("avg_reading_hours", sa.Float(), nullable=False),
        sa.Column("preferred_genre", sa.Text(), nullable=False),
        sa.Column("avg_pages_per_session", sa.Float(), nullable=False),
        sa.Column("completed_sessions", sa.Integer(), nullable=False),
        sa.Column("abandoned_sessions", sa.Integer(), nullable=False),
        _user_fk(),
        sa.PrimaryKeyConstraint("user_id"),
    )

    op.create_table(
        "genre_preferences",
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("genre", sa.Text(), nullable=False),
        sa.Column("weight", sa.Float(), nullable=False),
        sa.CheckConstraint("weight > 0", name="ck_genre_preferences_weight_positive"),
        _user_fk(),
        sa.PrimaryKeyConstraint("user_id", "genre"),
    )

    op.create_table(
        "reading_status",
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("book_id", sa.String(length=64), nullable=False),
        sa.Column("status", sa.Text(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "status IN ('want_to_read', 'read')", name="ck_reading_status_status"
        ),
        _user_fk(),
        _book_fk(),
        sa.PrimaryKeyConstraint("user_id", "book_id"),
    )

    op.create_table(
        "book_ratings",
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("book_id", sa.String(length=64), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_book_ratings_rating_1_5"),
        _user_fk(),
        _book_fk(),
        sa.PrimaryKeyConstraint("user_id", "book_id"),
    )

    op.create_table(
        "dismissed_recommendations",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("book_id", sa.String(length=64), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        _user_fk(),
        _book_fk(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "user_id", "book_id", name="uq_dismissed_recommendations_user_book"
        ),
    )
    op.create_index(
        op.f("ix_dismissed_recommendations_user_id"),
        "dismissed_recommendations",
        ["user_id"],
        unique=False,
    )

    op.create_table(
        "book_feedback",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("book_id", sa.String(length=64), nullable=False),
        sa.Column("feedback_type", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("feedback_type IN ('negative')", name="ck_book_feedback_type"),
        _user_fk(),
        _book_fk(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_book_feedback_user_id"), "book_feedback", ["user_id"], unique=False
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f("ix_book_feedback_user_id"), table_name="book_feedback")
    op.drop_table("book_feedback")
    op.drop_index(
        op.f("ix_dismissed_recommendations_user_id"), table_name="dismissed_recommendations"
    )
    op.drop_table("dismissed_recommendations")
    op.drop_table("book_ratings")
    op.drop_table("reading_status")
    op.drop_table("genre_preferences")
    op.drop_table("user_reading_patterns")
    op.drop_table("user_preferences")
    op.drop_table("book_similarities")
    op.drop_index(op.f("ix_books_isbn"), table_name="books")
    op.drop_table("books")
    op.drop_index(op.f("ix_users_external_idp_id"), table_name="users")
    op.drop_table("users")
