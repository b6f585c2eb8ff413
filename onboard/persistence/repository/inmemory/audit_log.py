"""In-memory audit log repository for testing."""

from onboard.domain.model import AuditLogEntry
from onboard.domain.repository import AuditLogRepository
from onboard.domain.value import AuditCategory


class InMemoryAuditLogRepository(AuditLogRepository):
    def __init__(self) -> None:
        self.entries: list[AuditLogEntry] = []

    async def save(self, entry: AuditLogEntry) -> AuditLogEntry:
        self.entries.append(entry)
        return entry

    async def list(
        self,
        category: AuditCategory | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[AuditLogEntry]:
        matching = [
            e for e in reversed(self.entries) if category is None or e.category == category
        ]
        return matching[offset : offset + limit]
