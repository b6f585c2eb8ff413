"""Audit log entry.

Append-only record of administrative and security-relevant actions.
"""

from datetime import datetime
from typing import Any, Optional

from onboard.domain.model.common import DomainModel
from onboard.domain.value import (
    AuditAction,
    AuditCategory,
    AuditLogId,
    AuditResourceType,
    AuditSeverity,
    UserId,
)


class AuditLogEntry(DomainModel):
    id: AuditLogId
    actor_id: Optional[UserId] = None
    action: AuditAction
    resource_type: AuditResourceType
    resource_id: Optional[str] = None
    category: AuditCategory
    severity: AuditSeverity
    old_values: Optional[dict[str, Any]] = None
    new_values: Optional[dict[str, Any]] = None
    metadata: Optional[dict[str, Any]] = None
    created_at: datetime
