"""Initial schema: users and the five reference-data tables.

Revision ID: 20261001000000
Revises:
Create Date: 2026-10-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20261001000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(length=125), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("fullname", sa.String(length=125), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False, server_default="user"),
        sa.Column("session_version", sa.Integer(), nullable=False, server_default="0"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=True)

    op.create_table(
        "bidlist",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("account", sa.String(length=30), nullable=False),
        sa.Column("type", sa.String(length=30), nullable=False),
        sa.Column("bid_quantity", sa.Float(), nullable=True),
        sa.Column("creation_date", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("revision_date", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "curvepoint",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("curve_id", sa.Integer(), nullable=False),
        sa.Column("as_of_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("term", sa.Float(), nullable=False),
        sa.Column("value", sa.Float(), nullable=False),
        sa.Column("creation_date", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_curvepoint_curve_id"), "curvepoint", ["curve_id"], unique=False)

    op.create_table(
        "rating",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("moodys_rating", sa.String(length=125), nullable=False),
        sa.Column("sand_p_rating", sa.String(length=125), nullable=False),
        sa.Column("fitch_rating", sa.String(length=125), nullable=False),
        sa.Column("order_number", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "rulename",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=125), nullable=False),
        sa.Column("description", sa.String(length=125), nullable=False),
        sa.Column("json", sa.Text(), nullable=True),
        sa.Column("template", sa.String(length=512), nullable=True),
        sa.Column("sql_str", sa.Text(), nullable=True),
        sa.Column("sql_part", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "trade",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("account", sa.String(length=30), nullable=False),
        sa.Column("type", sa.String(length=30), nullable=False),
        sa.Column("buy_quantity", sa.Float(), nullable=True),
        sa.Column("creation_date", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("revision_date", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("trade")
    op.drop_table("rulename")
    op.drop_table("rating")
    op.drop_index(op.f("ix_curvepoint_curve_id"), table_name="curvepoint")
    op.drop_table("curvepoint")
    op.drop_table("bidlist")
    op.drop_index(op.f("ix_users_username"), table_name="users")
    op.drop_table("users")
