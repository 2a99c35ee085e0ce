"""Create catalog tables.

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

BOOK_INSTANCE_STATUSES = ("AVAILABLE", "MAINTENANCE", "LOANED", "RESERVED")


def upgrade() -> None:
    op.create_table(
        "genre",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_genre"),
    )
    op.create_index("ix_genre_name", "genre", ["name"])

    op.create_table(
        "author",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("family_name", sa.String(length=100), nullable=False),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("date_of_death", sa.Date(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_author"),
    )
    op.create_index("ix_author_name", "author", ["family_name", "first_name"])

    op.create_table(
        "book",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("author_id", sa.Uuid(), nullable=False),
        sa.Column("summary", sa.Text(), nullable=False),
        sa.Column("isbn", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_book"),
    )
    op.create_index("ix_book_author_id", "book", ["author_id"])
    op.create_index("ix_book_isbn", "book", ["isbn"])

    op.create_table(
        "book_genre",
        sa.Column("book_id", sa.Uuid(), nullable=False),
        sa.Column("genre_id", sa.Uuid(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("book_id", "genre_id", name="pk_book_genre"),
    )
    op.create_index("ix_book_genre_genre_id", "book_genre", ["genre_id"])

    op.create_table(
        "book_instance",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("book_id", sa.Uuid(), nullable=False),
        sa.Column("imprint", sa.String(), nullable=False),
        sa.Column(
            "status",
            sa.Enum(*BOOK_INSTANCE_STATUSES, name="book_instance_status", native_enum=False),
            nullable=False,
        ),
        sa.Column("due_back", sa.Date(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_book_instance"),
    )
    op.create_index("ix_book_instance_book_id", "book_instance", ["book_id"])


def downgrade() -> None:
    op.drop_index("ix_book_instance_book_id", table_name="book_instance")
    op.drop_table("book_instance")
    op.drop_index("ix_book_genre_genre_id", table_name="book_genre")
    op.drop_table("book_genre")
    op.drop_index("ix_book_isbn", table_name="book")
    op.drop_index("ix_book_author_id", table_name="book")
    op.drop_table("book")
    op.drop_index("ix_author_name", table_name="author")
    op.drop_table("author")
    op.drop_index("ix_genre_name", table_name="genre")
    op.drop_table("genre")
