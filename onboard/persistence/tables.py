"""SQLAlchemy table definitions.

They match the schema defined in the Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    Enum,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
)
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

metadata = MetaData()

USER_ROLES = ("site_admin", "company_admin", "trainee")
INVITATION_STATUSES = ("pending", "accepted", "cancelled", "expired")

# Name of the partial unique index guarding one pending invitation per email
PENDING_EMAIL_INDEX = "idx_invitations_unique_pending_email"

# ============================================================================
# COMPANIES TABLE
# ============================================================================
companies_table = Table(
    "companies",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("name", String(255), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("user_id", String(255), nullable=False, unique=True),  # Identity-provider sub
    Column("email", String(255), nullable=False, unique=True),
    Column("first_name", String(255), nullable=True),
    Column("last_name", String(255), nullable=True),
    Column("phone", String(50), nullable=True),
    Column("job_title", String(255), nullable=True),
    Column("department", String(255), nullable=True),
    Column("location", String(255), nullable=True),
    Column("date_of_birth", Date, nullable=True),
    Column(
        "role",
        Enum(*USER_ROLES, name="user_role", create_type=False),
        nullable=False,
    ),
    Column(
        "company_id",
        UUID,
        ForeignKey("companies.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column("profile_completed", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_users_company_id", users_table.c.company_id)

# ============================================================================
# INVITATIONS TABLE
# ============================================================================
invitations_table = Table(
    "invitations",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("email", String(255), nullable=False),  # Normalized (lower-case)
    Column(
        "role",
        Enum(*USER_ROLES, name="user_role", create_type=False),
        nullable=False,
    ),
    Column(
        "company_id",
        UUID,
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=True,
    ),
    Column(
        "invited_by", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("token", String(255), nullable=False, unique=True),
    Column("user_data", JSONB, nullable=False),
    Column(
        "status",
        Enum(*INVITATION_STATUSES, name="invitation_status", create_type=False),
        nullable=False,
        server_default="pending",
    ),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column("accepted_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "role = 'site_admin' OR company_id IS NOT NULL",
        name="ck_invitations_company_required",
    ),
)

Index("idx_invitations_email", invitations_table.c.email)
Index("idx_invitations_status", invitations_table.c.status)

# Only one pending invitation per email
Index(
    PENDING_EMAIL_INDEX,
    invitations_table.c.email,
    unique=True,
    postgresql_where=invitations_table.c.status == "pending",
)

# ============================================================================
# AUDIT LOGS TABLE
# ============================================================================
audit_logs_table = Table(
    "audit_logs",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "actor_id", UUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    ),
    Column("action", String(100), nullable=False),
    Column("resource_type", String(50), nullable=False),
    Column("resource_id", String(255), nullable=True),
    Column("category", String(50), nullable=False),
    Column("severity", String(20), nullable=False),
    Column("old_values", JSONB, nullable=True),
    Column("new_values", JSONB, nullable=True),
    Column("metadata", JSONB, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_audit_logs_category", audit_logs_table.c.category)
Index("idx_audit_logs_created_at", audit_logs_table.c.created_at)
