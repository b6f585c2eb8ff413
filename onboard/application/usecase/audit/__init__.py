"""Audit use cases."""

from onboard.application.usecase.audit.list_audit_logs import (
    AuditLogItem,
    ListAuditLogsRequest,
    ListAuditLogsResponse,
    ListAuditLogsUseCase,
)

__all__ = [
    "AuditLogItem",
    "ListAuditLogsRequest",
    "ListAuditLogsResponse",
    "ListAuditLogsUseCase",
]
