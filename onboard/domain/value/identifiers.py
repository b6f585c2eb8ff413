"""Strongly typed identifiers for domain entities.

NewType keeps internal ids from being mixed up; ``IdentityId`` is the
identity provider's subject id (an opaque string such as ``user_2abc...``).
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
CompanyId = NewType("CompanyId", UUID)
InvitationId = NewType("InvitationId", UUID)
AuditLogId = NewType("AuditLogId", UUID)

IdentityId = NewType("IdentityId", str)
