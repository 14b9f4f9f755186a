"""create usuario table

Revision ID: 3f2a9c1d7e04
Revises:
Create Date: 2026-10-19 10:12:31.408112

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f2a9c1d7e04"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "usuario",
        sa.Column("idUsuario", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("nomeUsuario", sa.String(length=255), nullable=False),
        sa.Column("userUsuario", sa.String(length=255), nullable=False),
        sa.Column("senhaUsuario", sa.String(length=255), nullable=False),
        sa.Column("cpfUsuario", sa.String(length=20), nullable=False),
        sa.Column("emailUsuario", sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint("idUsuario"),
        # Email uniqueness is enforced here, not only by the API's pre-check
        sa.UniqueConstraint("emailUsuario", name="uq_usuario_email"),
    )


def downgrade() -> None:
    op.drop_table("usuario")
