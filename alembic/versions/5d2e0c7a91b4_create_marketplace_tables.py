"""create marketplace tables

Revision ID: 5d2e0c7a91b4
Revises:
Create Date: 2026-10-19 09:12:40.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel

# revision identifiers, used by Alembic.
revision: str = '5d2e0c7a91b4'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade():
    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sqlmodel.AutoString(), nullable=False),
        sa.Column("name", sqlmodel.AutoString(), nullable=True),
        sa.Column("photo_url", sqlmodel.AutoString(), nullable=True),
        sa.Column("role", sqlmodel.AutoString(), nullable=False),
        sa.Column("verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_user_email", "user", ["email"], unique=True)

    op.create_table(
        "category",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sqlmodel.AutoString(), nullable=False),
        sa.Column("description", sqlmodel.AutoString(), nullable=True),
        sa.Column("image_url", sqlmodel.AutoString(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_category_name", "category", ["name"], unique=True)

    op.create_table(
        "book",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sqlmodel.AutoString(), nullable=False),
        sa.Column("author", sqlmodel.AutoString(), nullable=True),
        sa.Column("description", sqlmodel.AutoString(), nullable=True),
        sa.Column("image_url", sqlmodel.AutoString(), nullable=True),
        sa.Column("seller_email", sqlmodel.AutoString(), nullable=False),
        sa.Column("category", sqlmodel.AutoString(), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("original_price", sa.Numeric(10, 2), nullable=True),
        sa.Column("condition", sqlmodel.AutoString(), nullable=True),
        sa.Column("years_of_use", sa.Integer(), nullable=True),
        sa.Column("location", sqlmodel.AutoString(), nullable=True),
        sa.Column("phone", sqlmodel.AutoString(), nullable=True),
        sa.Column("sold", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("advertise", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_book_seller_email", "book", ["seller_email"])
    op.create_index("ix_book_category", "book", ["category"])
    op.create_index("ix_book_sold", "book", ["sold"])
    op.create_index("ix_book_advertise", "book", ["advertise"])

    op.create_table(
        "booking",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("book_id", sa.Integer(), sa.ForeignKey("book.id"), nullable=False),
        sa.Column("user_email", sqlmodel.AutoString(), nullable=False),
        sa.Column("book_title", sqlmodel.AutoString(), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("meeting_location", sqlmodel.AutoString(), nullable=True),
        sa.Column("phone", sqlmodel.AutoString(), nullable=True),
        sa.Column("paid", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("transaction_id", sqlmodel.AutoString(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_booking_book_id", "booking", ["book_id"])
    op.create_index("ix_booking_user_email", "booking", ["user_email"])

    op.create_table(
        "paymentintent",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("booking_id", sa.Integer(), sa.ForeignKey("booking.id"), nullable=False),
        sa.Column("client_secret", sqlmodel.AutoString(), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("currency", sqlmodel.AutoString(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_paymentintent_booking_id", "paymentintent", ["booking_id"])
    op.create_index("ix_paymentintent_client_secret", "paymentintent", ["client_secret"])

    op.create_table(
        "payment",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("booking_id", sa.Integer(), sa.ForeignKey("booking.id"), nullable=False, unique=True),
        sa.Column("transaction_id", sqlmodel.AutoString(), nullable=False, unique=True),
        sa.Column("book_id", sa.Integer(), nullable=False),
        sa.Column("user_email", sqlmodel.AutoString(), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_payment_book_id", "payment", ["book_id"])
    op.create_index("ix_payment_user_email", "payment", ["user_email"])

    op.create_table(
        "bookreport",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("book_id", sa.Integer(), nullable=False),
        sa.Column("book_title", sqlmodel.AutoString(), nullable=True),
        sa.Column("reporter_email", sqlmodel.AutoString(), nullable=False),
        sa.Column("reason", sqlmodel.AutoString(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_bookreport_book_id", "bookreport", ["book_id"])


def downgrade():
    op.drop_table("bookreport")
    op.drop_table("payment")
    op.drop_table("paymentintent")
    op.drop_table("booking")
    op.drop_table("book")
    op.drop_table("category")
    op.drop_table("user")
