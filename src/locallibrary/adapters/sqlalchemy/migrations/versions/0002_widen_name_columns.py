"""Widen name columns to hold HTML-escaped names.

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-19 00:00:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0002"
down_revision = "0001"
branch_labels = None
depends_on = None

NAME_LENGTH = 100
ESCAPED_NAME_LENGTH = NAME_LENGTH * 6

NAME_COLUMNS = {
    "genre": ("name",),
    "author": ("first_name", "family_name"),
}


def _resize(old_length: int, new_length: int) -> None:
    for table_name, columns in NAME_COLUMNS.items():
        with op.batch_alter_table(table_name) as batch_op:
            for column in columns:
                batch_op.alter_column(
                    column,
                    existing_type=sa.String(length=old_length),
                    type_=sa.String(length=new_length),
                    existing_nullable=False,
                )


def upgrade() -> None:
    _resize(NAME_LENGTH, ESCAPED_NAME_LENGTH)


def downgrade() -> None:
    _resize(ESCAPED_NAME_LENGTH, NAME_LENGTH)
