"""Create ledger tables

Revision ID: 001
Revises: None
Create Date: 2026-10-16 00:00:00.000000+00:00

What:  Creates every table of the business ledger: users, shops, clients,
       orders (+ products / workers / transporters), editing projects,
       salaries, payments, products, transportation.
How:   Portable column types only (string ids, NUMERIC money, timezone-aware
       timestamps) so the same revision runs on PostgreSQL and SQLite.
       Reference columns carry indexes but no cross-table foreign keys.

Rollback: downgrade() drops every table (destructive — all data lost).
"""

from typing import List, Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _money(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(name, sa.Numeric(12, 2), nullable=nullable, server_default=None if nullable else "0")


def _ref(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(name, sa.String(36), nullable=nullable)


def _timestamps() -> List[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text("CURRENT_TIMESTAMP")),
    ]


def _id() -> sa.Column:
    return sa.Column("id", sa.String(36), primary_key=True, nullable=False)


def upgrade() -> None:
    # ── Users & shops ─────────────────────────────────────────────────────
    op.create_table(
        "users",
        _id(),
        sa.Column("first_name", sa.String(100), nullable=False, server_default=""),
        sa.Column("last_name", sa.String(100), nullable=False, server_default=""),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("password", sa.String(255), nullable=True),
        sa.Column("shop_name", sa.String(255), nullable=True),
        sa.Column("role", sa.String(50), nullable=False, server_default="worker"),
        sa.Column("phone", sa.String(50), nullable=False, server_default=""),
        sa.Column("is_from_worker", sa.Boolean(), nullable=False, server_default=sa.false()),
        _ref("original_worker_id", nullable=True),
        sa.Column("is_from_editor", sa.Boolean(), nullable=False, server_default=sa.false()),
        _ref("original_editor_id", nullable=True),
        sa.Column("profile_complete", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("accuracy_rating", sa.Float(), nullable=True),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        _money("total_earnings"),
        _money("paid_salary"),
        _money("remaining_salary"),
        *_timestamps(),
    )
    op.create_index("idx_users_shop_name", "users", ["shop_name"])

    op.create_table(
        "shops",
        _id(),
        sa.Column("name", sa.String(255), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("business_type", sa.String(50), nullable=False, server_default="mixed"),
        sa.Column("created_by", sa.String(255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )

    # ── Clients ───────────────────────────────────────────────────────────
    op.create_table(
        "clients",
        _id(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, server_default=""),
        sa.Column("phone", sa.String(50), nullable=False, server_default=""),
        sa.Column("address", sa.Text(), nullable=False, server_default=""),
        sa.Column("shop_name", sa.String(255), nullable=False),
        sa.Column("client_type", sa.String(50), nullable=False, server_default="individual"),
        sa.Column("business_category", sa.String(50), nullable=False, server_default="mixed"),
        sa.Column("priority_level", sa.String(50), nullable=False, server_default="normal"),
        sa.Column("notes", sa.Text(), nullable=False, server_default=""),
        _money("total_payments_due"),
        _money("received_payments"),
        _money("pending_payments"),
        sa.Column("lifetime_orders", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("lifetime_editing_projects", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )
    op.create_index("idx_clients_shop_name", "clients", ["shop_name"])

    # ── Orders ────────────────────────────────────────────────────────────
    op.create_table(
        "orders",
        _id(),
        _ref("client_id"),
        sa.Column("order_name", sa.String(255), nullable=False),
        sa.Column("venue_place", sa.String(255), nullable=False, server_default=""),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        _money("total_amount"),
        _money("received_payment"),
        _money("remaining_payment"),
        sa.Column("status", sa.String(50), nullable=False, server_default="pending"),
        sa.Column("order_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("completion_date", sa.DateTime(timezone=True), nullable=True),
        _ref("created_by"),
        sa.Column("shop_name", sa.String(255), nullable=False),
        *_timestamps(),
    )
    op.create_index("idx_orders_shop_name", "orders", ["shop_name"])
    op.create_index("idx_orders_client_id", "orders", ["client_id"])
    op.create_index("idx_orders_order_date", "orders", ["order_date"])

    op.create_table(
        "order_products",
        _id(),
        _ref("order_id"),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("quantity", sa.Float(), nullable=False, server_default="0"),
        _money("price"),
        sa.Column("size_info", sa.String(255), nullable=False, server_default=""),
    )
    op.create_index("ix_order_products_order_id", "order_products", ["order_id"])

    for table, person in (("order_workers", "worker_id"), ("order_transporters", "transporter_id")):
        op.create_table(
            table,
            _id(),
            _ref("order_id"),
            _ref(person),
            _money("payment"),
        )
        op.create_index(f"ix_{table}_order_id", table, ["order_id"])
        op.create_index(f"ix_{table}_{person}", table, [person])

    # ── Editing projects ──────────────────────────────────────────────────
    op.create_table(
        "editing_projects",
        _id(),
        _ref("client_id"),
        _ref("editor_id"),
        sa.Column("project_name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        _money("editing_value"),
        sa.Column("pendrive_included", sa.Boolean(), nullable=False, server_default=sa.false()),
        _money("pendrive_value"),
        _money("total_amount"),
        _money("received_payment"),
        _money("remaining_payment"),
        sa.Column("commission_percentage", sa.Float(), nullable=False, server_default="0"),
        _money("commission_amount"),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("completion_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", sa.String(50), nullable=False, server_default="in_progress"),
        _ref("created_by"),
        sa.Column("shop_name", sa.String(255), nullable=False),
        *_timestamps(),
    )
    op.create_index("idx_editing_projects_shop_name", "editing_projects", ["shop_name"])
    op.create_index("idx_editing_projects_editor_id", "editing_projects", ["editor_id"])
    op.create_index("idx_editing_projects_end_date", "editing_projects", ["end_date"])

    # ── Salaries ──────────────────────────────────────────────────────────
    op.create_table(
        "salaries",
        _id(),
        _ref("employee_id"),
        _money("amount"),
        sa.Column("salary_type", sa.String(50), nullable=False),
        _ref("related_order_id", nullable=True),
        _ref("related_project_id", nullable=True),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("work_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_paid", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("paid_date", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("idx_salaries_employee_unpaid", "salaries", ["employee_id", "is_paid", "created_at"])
    op.create_index("idx_salaries_related_order_id", "salaries", ["related_order_id"])
    op.create_index("idx_salaries_related_project_id", "salaries", ["related_project_id"])

    # ── Payments ──────────────────────────────────────────────────────────
    op.create_table(
        "payments",
        _id(),
        _ref("order_id"),
        _ref("client_id"),
        _money("amount"),
        sa.Column("payment_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("payment_method", sa.String(50), nullable=False, server_default="cash"),
        _ref("received_by"),
        sa.Column("notes", sa.Text(), nullable=False, server_default=""),
        sa.Column("shop_name", sa.String(255), nullable=False),
        *_timestamps(),
    )
    op.create_index("idx_payments_order_id", "payments", ["order_id"])
    op.create_index("idx_payments_client_id", "payments", ["client_id"])

    # ── Catalog & logistics ───────────────────────────────────────────────
    op.create_table(
        "products",
        _id(),
        sa.Column("name", sa.String(255), nullable=False, unique=True),
        sa.Column("type", sa.String(50), nullable=False, server_default="quantity"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )

    op.create_table(
        "transportation",
        _id(),
        _ref("related_order_id", nullable=True),
        _ref("related_project_id", nullable=True),
        _ref("client_id", nullable=True),
        _ref("transporter_id", nullable=True),
        sa.Column("pickup_location", sa.String(255), nullable=False),
        sa.Column("delivery_location", sa.String(255), nullable=False),
        sa.Column("distance", sa.Float(), nullable=False, server_default="0"),
        _money("transport_fee"),
        sa.Column("equipment_list", sa.Text(), nullable=False, server_default=""),
        sa.Column("transport_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("instructions", sa.Text(), nullable=False, server_default=""),
        sa.Column("status", sa.String(50), nullable=False, server_default="pending"),
        sa.Column("completed_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("shop_name", sa.String(255), nullable=False),
        _ref("created_by"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("idx_transportation_shop_name", "transportation", ["shop_name"])
    op.create_index("idx_transportation_transporter_id", "transportation", ["transporter_id"])


def downgrade() -> None:
    for table in (
        "transportation",
        "products",
        "payments",
        "salaries",
        "editing_projects",
        "order_transporters",
        "order_workers",
        "order_products",
        "orders",
        "clients",
        "shops",
        "users",
    ):
        op.drop_table(table)
