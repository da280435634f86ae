"""initial_schema

Create the users table. Each identity provider gets one nullable, unique
subject column so a remote identity links to at most one account.

Revision ID: 3c1f0a9d2b47
Revises:
Create Date: 2026-10-18 10:12:03.418220

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c1f0a9d2b47"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    op.create_table(
        "users",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("login", sa.Text(), nullable=False),
        sa.Column("avatar", sa.Text(), nullable=False, server_default=""),
        sa.Column("email", sa.Text(), nullable=False, server_default=""),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("admin", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("github_id", sa.Text(), nullable=True),  # GitHub numeric id
        sa.Column("casdoor_id", sa.Text(), nullable=True),  # OIDC sub
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("github_id", name="uq_users_github_id"),
        sa.UniqueConstraint("casdoor_id", name="uq_users_casdoor_id"),
    )
    op.create_index("idx_users_login", "users", ["login"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_users_login", table_name="users")
    op.drop_table("users")
