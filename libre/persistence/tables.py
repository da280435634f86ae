"""SQLAlchemy table definitions for libre-user.

These table definitions match the schema defined in Alembic migrations.
"""

from sqlalchemy import Boolean, Column, Index, MetaData, Table, Text, text
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

from libre.domain.value import AuthProvider

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (one nullable subject column per provider)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("uuid_generate_v4()")),
    Column("name", Text, nullable=False),
    Column("login", Text, nullable=False),
    Column("avatar", Text, nullable=False, server_default=""),
    Column("email", Text, nullable=False, server_default=""),
    Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
    Column("admin", Boolean, nullable=False, server_default="false"),
    Column("github_id", Text, nullable=True, unique=True),
    Column("casdoor_id", Text, nullable=True, unique=True),
)

Index("idx_users_login", users_table.c.login)

PROVIDER_COLUMNS = {
    AuthProvider.GITHUB: users_table.c.github_id,
    AuthProvider.CASDOOR: users_table.c.casdoor_id,
}
