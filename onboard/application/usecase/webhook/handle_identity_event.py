"""Identity provider webhook use case.

Reconciles newly created identity-provider accounts with pending
invitations. The provider metadata is published before anything is written,
so a failed provider call leaves nothing behind and the redelivery starts
over. Once the identity has a user record a redelivered event writes nothing
and only publishes that user's role and company again.
"""

from enum import Enum
from typing import Any, Mapping

import logfire
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from onboard.adapter.error import WebhookVerificationError
from onboard.adapter.identity.webhook import ID_HEADER, WebhookVerifier
from onboard.application.usecase.base import BaseUseCase
from onboard.domain.error import ValidationError
from onboard.domain.service import (
    AuditService,
    IdentitySyncService,
    InvitationService,
    UserService,
)
from onboard.domain.value import (
    AuditAction,
    AuditResourceType,
    EmailAddress,
    IdentityId,
    UserRole,
)

USER_CREATED_EVENT = "user.created"


class WebhookOutcome(str, Enum):
    VERIFICATION_FAILED = "verification_failed"
    IGNORED = "ignored"
    ALREADY_PROVISIONED = "already_provisioned"
    INVITATION_ACCEPTED = "invitation_accepted"
    DEFAULT_PROVISIONED = "default_provisioned"


class HandleIdentityEventRequest(BaseModel):
    body: bytes
    headers: dict[str, str]


class HandleIdentityEventResponse(BaseModel):
    success: bool
    outcome: WebhookOutcome
    user_id: str | None = None
    error: str | None = None


def _primary_email(data: Mapping[str, Any]) -> str | None:
    addresses = data.get("email_addresses") or []
    primary_id = data.get("primary_email_address_id")
    for address in addresses:
        if primary_id and address.get("id") == primary_id:
            return address.get("email_address")
    return addresses[0].get("email_address") if addresses else None


class HandleIdentityEventUseCase(BaseUseCase):
    """Processes a signed webhook delivery from the identity provider."""

    def __init__(
        self,
        webhook_verifier: WebhookVerifier,
        invitation_service: InvitationService,
        user_service: UserService,
        identity_sync_service: IdentitySyncService,
        audit_service: AuditService,
    ) -> None:
        self.webhook_verifier = webhook_verifier
        self.invitation_service = invitation_service
        self.user_service = user_service
        self.identity_sync_service = identity_sync_service
        self.audit_service = audit_service

    async def execute(
        self, request: HandleIdentityEventRequest
    ) -> HandleIdentityEventResponse:
        """Verify and process one delivery.

        A failed verification is returned rather than raised so the security
        audit entry for it is kept.

        Raises:
            ValidationError: If a user.created event carries no usable email
            ConflictError: If the user cannot be created
            ProviderError: If the identity provider could not be updated
        """
        msg_id = request.headers.get(ID_HEADER)
        with logfire.span("handle_identity_event.execute", msg_id=msg_id):
            try:
                event = self.webhook_verifier.verify(request.body, request.headers)
            except WebhookVerificationError as e:
                logfire.warn("Webhook verification failed", msg_id=msg_id, error=str(e))
                await self.audit_service.record(
                    AuditAction.WEBHOOK_VERIFICATION_FAILED,
                    AuditResourceType.SECURITY_EVENT,
                    resource_id=msg_id,
                    metadata={"reason": str(e)},
                )
                return HandleIdentityEventResponse(
                    success=False,
                    outcome=WebhookOutcome.VERIFICATION_FAILED,
                    error=str(e),
                )

            event_type = event.get("type")
            if event_type != USER_CREATED_EVENT:
                logfire.info("Webhook event ignored", event_type=event_type)
                return HandleIdentityEventResponse(
                    success=True, outcome=WebhookOutcome.IGNORED
                )

            return await self._handle_user_created(event.get("data") or {})

    async def _handle_user_created(
        self, data: Mapping[str, Any]
    ) -> HandleIdentityEventResponse:
        raw_email = _primary_email(data)
        if not raw_email or not data.get("id"):
            raise ValidationError("No email found")
        try:
            email = EmailAddress(raw_email)
        except PydanticValidationError as e:
            raise ValidationError("No email found") from e

        identity_id = IdentityId(data["id"])
        first_name = data.get("first_name") or None
        last_name = data.get("last_name") or None

        existing = await self.user_service.find_by_identity(identity_id)
        if existing is not None:
            logfire.info(
                "Identity already provisioned",
                identity_id=identity_id,
                user_id=str(existing.id),
            )
            await self.identity_sync_service.sync_user(existing)
            return HandleIdentityEventResponse(
                success=True,
                outcome=WebhookOutcome.ALREADY_PROVISIONED,
                user_id=str(existing.id),
            )

        lapsed = await self.invitation_service.release_lapsed(email)
        if lapsed is not None:
            await self.audit_service.record(
                AuditAction.INVITATION_EXPIRED,
                AuditResourceType.INVITATION,
                resource_id=str(lapsed.id),
                old_values={"status": "pending"},
                new_values={"status": lapsed.status.value},
            )

        invitation = await self.invitation_service.find_live_by_email(email)
        if invitation is None:
            await self.identity_sync_service.publish(identity_id, UserRole.TRAINEE)
            user = await self.user_service.create_default(
                identity_id, email, first_name, last_name
            )
            await self._record_user_created(user, invitation_id=None)
            return HandleIdentityEventResponse(
                success=True,
                outcome=WebhookOutcome.DEFAULT_PROVISIONED,
                user_id=str(user.id),
            )

        await self.identity_sync_service.sync_invitation(identity_id, invitation)
        accepted = await self.invitation_service.accept(invitation)
        user = await self.user_service.create_from_invitation(
            identity_id,
            accepted,
            fallback_first_name=first_name,
            fallback_last_name=last_name,
        )

        await self.audit_service.record(
            AuditAction.INVITATION_ACCEPTED,
            AuditResourceType.INVITATION,
            resource_id=str(accepted.id),
            actor_id=user.id,
            old_values={"status": invitation.status.value},
            new_values={"status": accepted.status.value},
            metadata={"path": "webhook"},
        )
        await self._record_user_created(user, invitation_id=str(accepted.id))

        return HandleIdentityEventResponse(
            success=True,
            outcome=WebhookOutcome.INVITATION_ACCEPTED,
            user_id=str(user.id),
        )

    async def _record_user_created(self, user, invitation_id: str | None) -> None:
        await self.audit_service.record(
            AuditAction.USER_CREATED,
            AuditResourceType.USER,
            resource_id=str(user.id),
            actor_id=user.id,
            new_values={
                "role": user.role.value,
                "company_id": str(user.company_id) if user.company_id else None,
            },
            metadata={"invitation_id": invitation_id, "path": "webhook"},
        )
