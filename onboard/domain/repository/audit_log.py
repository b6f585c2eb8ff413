"""Audit log repository interface."""

from abc import ABC, abstractmethod

from onboard.domain.model.audit_log import AuditLogEntry
from onboard.domain.value import AuditCategory


class AuditLogRepository(ABC):
    """Append-only store of audit entries."""

    @abstractmethod
    async def save(self, entry: AuditLogEntry) -> AuditLogEntry:
        pass

    @abstractmethod
    async def list(
        self,
        category: AuditCategory | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[AuditLogEntry]:
        """List entries, newest first, optionally filtered by category."""
        pass
