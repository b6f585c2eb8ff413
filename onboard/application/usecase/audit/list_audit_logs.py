"""List audit logs use case."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from onboard.application.usecase.base import BaseUseCase
from onboard.domain.service import AuditService, UserService
from onboard.domain.value import (
    AuditAction,
    AuditCategory,
    AuditResourceType,
    AuditSeverity,
    IdentityId,
    UserRole,
)


class ListAuditLogsRequest(BaseModel):
    caller_identity_id: str
    category: AuditCategory | None = None
    limit: int = Field(default=50, ge=1, le=200)
    offset: int = Field(default=0, ge=0)


class AuditLogItem(BaseModel):
    id: str
    actor_id: str | None
    action: AuditAction
    resource_type: AuditResourceType
    resource_id: str | None
    category: AuditCategory
    severity: AuditSeverity
    old_values: dict[str, Any] | None
    new_values: dict[str, Any] | None
    metadata: dict[str, Any] | None
    created_at: datetime


class ListAuditLogsResponse(BaseModel):
    entries: list[AuditLogItem]


class ListAuditLogsUseCase(BaseUseCase):
    """Audit trail for site admins, newest first."""

    def __init__(self, audit_service: AuditService, user_service: UserService) -> None:
        self.audit_service = audit_service
        self.user_service = user_service

    async def execute(self, request: ListAuditLogsRequest) -> ListAuditLogsResponse:
        await self.user_service.require_role(
            IdentityId(request.caller_identity_id),
            UserRole.SITE_ADMIN,
            "view audit logs",
        )
        entries = await self.audit_service.list_entries(
            request.category, request.limit, request.offset
        )
        return ListAuditLogsResponse(
            entries=[
                AuditLogItem(
                    **entry.model_dump(exclude={"id", "actor_id"}),
                    id=str(entry.id),
                    actor_id=str(entry.actor_id) if entry.actor_id else None,
                )
                for entry in entries
            ]
        )
