"""init review schema

Revision ID: 20261017_000001
Revises: 
Create Date: 2026-10-17 09:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261017_000001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "customer",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=32)),
        sa.UniqueConstraint("email", name="uq_customer_email"),
    )

    op.create_table(
        "review",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("type", sa.String(length=16), nullable=False),
        sa.Column("customer_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["customer_id"],
            ["customer.id"],
            name="fk_review_customer_id",
            ondelete="RESTRICT",
        ),
        sa.CheckConstraint("type IN ('POSITIVE', 'NEUTRAL', 'NEGATIVE')", name="ck_review_type"),
    )
    op.create_index("idx_review_type", "review", ["type"])
    op.create_index("idx_review_customer_id", "review", ["customer_id"])


def downgrade() -> None:
    op.drop_index("idx_review_customer_id", table_name="review")
    op.drop_index("idx_review_type", table_name="review")
    op.drop_table("review")
    op.drop_table("customer")
