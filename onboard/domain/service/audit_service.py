"""Audit domain service."""

from typing import Any, Optional
from uuid import uuid4

import logfire

from onboard.domain.model import AuditLogEntry
from onboard.domain.repository import AuditLogRepository
from onboard.domain.value import (
    AuditAction,
    AuditCategory,
    AuditLogId,
    AuditResourceType,
    UserId,
)
from onboard.util.clock import Clock

from .base import Service


class AuditService(Service):
    """Records audit entries.

    Category and severity are looked up from ``AuditAction``; callers only
    say what happened.
    """

    def __init__(self, audit_log_repository: AuditLogRepository, clock: Clock) -> None:
        self.audit_log_repository = audit_log_repository
        self.clock = clock

    async def record(
        self,
        action: AuditAction,
        resource_type: AuditResourceType,
        resource_id: Optional[str] = None,
        actor_id: Optional[UserId] = None,
        old_values: Optional[dict[str, Any]] = None,
        new_values: Optional[dict[str, Any]] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> AuditLogEntry:
        """Append an audit entry.

        Args:
            action: What happened
            resource_type: Kind of record affected
            resource_id: ID of the record affected
            actor_id: User who performed the action, if known
            old_values: State before the action
            new_values: State after the action
            metadata: Free-form context

        Returns:
            The stored entry
        """
        entry = AuditLogEntry(
            id=AuditLogId(uuid4()),
            actor_id=actor_id,
            action=action,
            resource_type=resource_type,
            resource_id=resource_id,
            category=action.category,
            severity=action.severity,
            old_values=old_values,
            new_values=new_values,
            metadata=metadata,
            created_at=self.clock.now(),
        )
        saved = await self.audit_log_repository.save(entry)
        logfire.info(
            "Audit entry recorded",
            action=action.value,
            category=entry.category.value,
            severity=entry.severity.value,
            resource_id=resource_id,
        )
        return saved

    async def list_entries(
        self,
        category: AuditCategory | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[AuditLogEntry]:
        with logfire.span(
            "audit_service.list_entries",
            category=category.value if category else None,
        ):
            return await self.audit_log_repository.list(category, limit, offset)
