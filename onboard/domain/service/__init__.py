"""Domain services."""

from .audit_service import AuditService
from .base import Service
from .directory_service import DirectoryService
from .identity_service import IdentityProviderClient, IdentitySyncService
from .invitation_service import InvitationService
from .notification_service import (
    EmailMessage,
    EmailSender,
    NotificationService,
    render_invitation_email,
)
from .token_service import TokenService
from .user_service import UserService

__all__ = [
    "AuditService",
    "DirectoryService",
    "EmailMessage",
    "EmailSender",
    "IdentityProviderClient",
    "IdentitySyncService",
    "InvitationService",
    "NotificationService",
    "Service",
    "TokenService",
    "UserService",
    "render_invitation_email",
]
