"""SQLAlchemy metadata definitions for rental account tables."""

from __future__ import annotations

import sqlalchemy as sa

metadata = sa.MetaData()

users = sa.Table(
    "users",
    metadata,
    sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
    sa.Column("email", sa.Text(), nullable=False),
    sa.Column("name", sa.Text(), nullable=True),
    sa.Column("password_hash", sa.Text(), nullable=True),
    sa.Column("role", sa.Text(), nullable=False, server_default=sa.text("'TENANT'")),
    sa.Column("email_verified_at", sa.DateTime(timezone=True), nullable=True),
    sa.Column("image", sa.Text(), nullable=True),
    sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.text("CURRENT_TIMESTAMP"),
    ),
    sa.Column(
        "updated_at",
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.text("CURRENT_TIMESTAMP"),
    ),
    sa.UniqueConstraint("email", name="uq_users_email"),
    sa.CheckConstraint("role IN ('TENANT', 'LANDLORD', 'ADMIN')", name="ck_users_role"),
)
