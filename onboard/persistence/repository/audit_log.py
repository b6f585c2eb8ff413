"""PostgreSQL implementation of AuditLog repository."""

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from onboard.domain.model import AuditLogEntry
from onboard.domain.repository import AuditLogRepository
from onboard.domain.value import AuditCategory
from onboard.persistence.mappers import audit_log_entry_to_dict, row_to_audit_log_entry
from onboard.persistence.tables import audit_logs_table


class PostgresAuditLogRepository(AuditLogRepository):
    """PostgreSQL implementation of AuditLogRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(self, entry: AuditLogEntry) -> AuditLogEntry:
        await self.session.execute(
            insert(audit_logs_table).values(**audit_log_entry_to_dict(entry))
        )
        return entry

    async def list(
        self,
        category: AuditCategory | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[AuditLogEntry]:
        stmt = select(audit_logs_table)
        if category is not None:
            stmt = stmt.where(audit_logs_table.c.category == category.value)
        stmt = (
            stmt.order_by(audit_logs_table.c.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_audit_log_entry(dict(row)) for row in result.mappings()]
