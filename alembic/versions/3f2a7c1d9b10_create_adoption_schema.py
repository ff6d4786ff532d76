"""Create users, taxonomy, animals and adoption_requests

Revision ID: 3f2a7c1d9b10
Revises:
Create Date: 2026-10-18
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3f2a7c1d9b10"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

GENDERS = ("MALE", "FEMALE", "UNKNOWN")
SIZES = ("SMALL", "MEDIUM", "LARGE", "EXTRA_LARGE")
STATUSES = ("PENDING", "APPROVED", "REJECTED")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("user_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("firebase_uid", sa.String(128), nullable=False, unique=True),
        sa.Column("full_name", sa.String(255)),
        sa.Column("email", sa.String(255), unique=True),
        sa.Column("phone", sa.String(20)),
        sa.Column("city", sa.String(100)),
        sa.Column("role", sa.Enum("USER", "ADMIN", name="userrole"), nullable=False, server_default="USER"),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
    )

    op.create_table(
        "categories",
        sa.Column("category_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
    )

    op.create_table(
        "breeds",
        sa.Column("breed_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("category_id", sa.Integer(), sa.ForeignKey("categories.category_id"), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.UniqueConstraint("category_id", "name", name="uq_breeds_category_name"),
    )

    op.create_table(
        "animals",
        sa.Column("animal_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("owner_id", sa.Integer(), sa.ForeignKey("users.user_id"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("category_id", sa.Integer(), sa.ForeignKey("categories.category_id"), nullable=False),
        sa.Column("breed_id", sa.Integer(), sa.ForeignKey("breeds.breed_id"), nullable=True),
        sa.Column("gender", sa.Enum(*GENDERS, name="gender"), nullable=False, server_default="UNKNOWN"),
        sa.Column("size", sa.Enum(*SIZES, name="size"), nullable=True),
        sa.Column("birthday", sa.Date(), nullable=True),
        sa.Column("short_description", sa.String(255)),
        sa.Column("long_description", sa.Text()),
        sa.Column("image", sa.String(255)),
        sa.Column("is_adopted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index("ix_animals_owner_id", "animals", ["owner_id"])
    op.create_index("ix_animals_birthday", "animals", ["birthday"])

    op.create_table(
        "adoption_requests",
        sa.Column("request_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "animal_id",
            sa.Integer(),
            sa.ForeignKey("animals.animal_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("requester_id", sa.Integer(), sa.ForeignKey("users.user_id"), nullable=False),
        sa.Column("note", sa.String(500), nullable=False),
        sa.Column("status", sa.Enum(*STATUSES, name="requeststatus"), nullable=False, server_default="PENDING"),
        # TRUE while PENDING/APPROVED, NULL once REJECTED
        sa.Column("open_slot", sa.Boolean(), nullable=True, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("decision_at", sa.DateTime(), nullable=True),
        sa.UniqueConstraint("animal_id", "requester_id", "open_slot", name="uq_adoption_requests_open"),
        sa.CheckConstraint(
            "(status = 'PENDING' AND decision_at IS NULL) "
            "OR (status <> 'PENDING' AND decision_at IS NOT NULL)",
            name="ck_adoption_requests_decision_at",
        ),
    )
    op.create_index(
        "ix_adoption_requests_animal_status",
        "adoption_requests",
        ["animal_id", "status"],
    )


def downgrade() -> None:
    op.drop_index("ix_adoption_requests_animal_status", table_name="adoption_requests")
    op.drop_table("adoption_requests")
    op.drop_index("ix_animals_birthday", table_name="animals")
    op.drop_index("ix_animals_owner_id", table_name="animals")
    op.drop_table("animals")
    op.drop_table("breeds")
    op.drop_table("categories")
    op.drop_table("users")
