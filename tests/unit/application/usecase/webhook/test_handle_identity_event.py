"""Unit tests for HandleIdentityEventUseCase."""

from datetime import timedelta

import pytest

from onboard.adapter.error import IdentityProviderError
from onboard.adapter.identity.webhook import SIGNATURE_HEADER, WebhookVerifier
from onboard.application.usecase.invitation import (
    AcceptInvitationRequest,
    AcceptInvitationUseCase,
)
from onboard.application.usecase.webhook import (
    HandleIdentityEventRequest,
    HandleIdentityEventUseCase,
    WebhookOutcome,
)
from onboard.domain.error import ValidationError
from onboard.domain.repository import (
    AuditLogRepository,
    InvitationRepository,
    UserRepository,
)
from onboard.domain.service import IdentityProviderClient
from onboard.domain.value import (
    AuditAction,
    AuditCategory,
    AuditSeverity,
    IdentityId,
    InvitationStatus,
    UserRole,
)
from onboard.util.clock import Clock
from tests.factories import (
    invite,
    seed_company,
    seed_user,
    signed_delivery,
    user_created_event,
)
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _deliver(env, event, **kwargs):
    verifier = await env.get(WebhookVerifier)
    use_case = await env.get(HandleIdentityEventUseCase)
    body, headers = signed_delivery(verifier, event, **kwargs)
    return await use_case.execute(HandleIdentityEventRequest(body=body, headers=headers))


class TestInvitedSignUp:
    @pytest.mark.asyncio
    async def test_sign_up_accepts_pending_invitation(self, unit_env):
        """A sign-up with an invited email becomes that invitation's user."""
        invitations = await unit_env.get(InvitationRepository)
        users = await unit_env.get(UserRepository)
        identity = await unit_env.get(IdentityProviderClient)
        audit = await unit_env.get(AuditLogRepository)
        company = await seed_company(unit_env)
        invitation = await invite(
            unit_env, "ada@example.com", UserRole.COMPANY_ADMIN, company
        )

        result = await _deliver(
            unit_env,
            user_created_event("user_ada", "Ada@Example.com", "Augusta", "King"),
        )

        assert result.success is True
        assert result.outcome == WebhookOutcome.INVITATION_ACCEPTED
        user = await users.find_by_identity(IdentityId("user_ada"))
        assert str(user.id) == result.user_id
        assert user.role == UserRole.COMPANY_ADMIN
        assert user.company_id == company.id
        # Invitation details win over the provider profile
        assert (user.first_name, user.last_name) == ("Ada", "Lovelace")

        stored = await invitations.find_by_id(invitation.id)
        assert stored.status == InvitationStatus.ACCEPTED
        assert identity.metadata["user_ada"]["invitation_id"] == str(invitation.id)
        assert [e.action for e in audit.entries][-2:] == [
            AuditAction.INVITATION_ACCEPTED,
            AuditAction.USER_CREATED,
        ]

    @pytest.mark.asyncio
    async def test_primary_email_is_used(self, unit_env):
        """Only the primary address is matched against invitations."""
        await invite(unit_env, "other@example.com")

        result = await _deliver(
            unit_env, user_created_event("user_ada", "ada@example.com")
        )

        assert result.outcome == WebhookOutcome.DEFAULT_PROVISIONED


class TestUninvitedSignUp:
    @pytest.mark.asyncio
    async def test_default_trainee_without_company(self, unit_env):
        users = await unit_env.get(UserRepository)
        identity = await unit_env.get(IdentityProviderClient)
        audit = await unit_env.get(AuditLogRepository)

        result = await _deliver(
            unit_env, user_created_event("user_walkin", "walkin@example.com")
        )

        assert result.outcome == WebhookOutcome.DEFAULT_PROVISIONED
        user = await users.find_by_identity(IdentityId("user_walkin"))
        assert user.role == UserRole.TRAINEE
        assert user.company_id is None
        assert user.first_name == "Ada"
        assert identity.metadata["user_walkin"] == {
            "role": "trainee",
            "company_id": None,
        }
        assert [e.action for e in audit.entries] == [AuditAction.USER_CREATED]

    @pytest.mark.asyncio
    async def test_expired_invitation_falls_back_to_default(self, unit_env):
        """A lapsed invitation is expired and the sign-up is provisioned by default."""
        invitations = await unit_env.get(InvitationRepository)
        users = await unit_env.get(UserRepository)
        audit = await unit_env.get(AuditLogRepository)
        clock = await unit_env.get(Clock)
        invitation = await invite(unit_env, "ada@example.com", UserRole.COMPANY_ADMIN)
        clock.advance(days=8)

        result = await _deliver(
            unit_env, user_created_event("user_ada", "ada@example.com")
        )

        assert result.outcome == WebhookOutcome.DEFAULT_PROVISIONED
        user = await users.find_by_identity(IdentityId("user_ada"))
        assert user.role == UserRole.TRAINEE
        assert user.company_id is None
        stored = await invitations.find_by_id(invitation.id)
        assert stored.status == InvitationStatus.EXPIRED
        assert [e.action for e in audit.entries][-2:] == [
            AuditAction.INVITATION_EXPIRED,
            AuditAction.USER_CREATED,
        ]


class TestRedelivery:
    @pytest.mark.asyncio
    async def test_redelivery_is_a_no_op(self, unit_env):
        audit = await unit_env.get(AuditLogRepository)
        event = user_created_event("user_ada", "ada@example.com")
        first = await _deliver(unit_env, event)
        entries_after_first = len(audit.entries)

        second = await _deliver(unit_env, event)

        assert second.success is True
        assert second.outcome == WebhookOutcome.ALREADY_PROVISIONED
        assert second.user_id == first.user_id
        assert len(audit.entries) == entries_after_first

    @pytest.mark.asyncio
    async def test_redelivered_invited_sign_up_accepts_once(self, unit_env):
        invitations = await unit_env.get(InvitationRepository)
        audit = await unit_env.get(AuditLogRepository)
        clock = await unit_env.get(Clock)
        company = await seed_company(unit_env)
        invitation = await invite(
            unit_env, "ada@example.com", UserRole.COMPANY_ADMIN, company
        )
        event = user_created_event("user_ada", "ada@example.com")
        first = await _deliver(unit_env, event)
        accepted_at = (await invitations.find_by_id(invitation.id)).accepted_at
        entries_after_first = len(audit.entries)
        clock.advance(minutes=1)

        second = await _deliver(unit_env, event, msg_id="msg_2abd")

        assert second.outcome == WebhookOutcome.ALREADY_PROVISIONED
        assert second.user_id == first.user_id
        stored = await invitations.find_by_id(invitation.id)
        assert stored.status == InvitationStatus.ACCEPTED
        assert stored.accepted_at == accepted_at
        assert len(audit.entries) == entries_after_first

    @pytest.mark.asyncio
    async def test_redelivery_republishes_metadata(self, unit_env):
        """A user whose provider update was lost gets it on the next delivery."""
        identity = await unit_env.get(IdentityProviderClient)
        company = await seed_company(unit_env)
        await seed_user(
            unit_env,
            identity_id="user_ada",
            email="ada@example.com",
            role=UserRole.COMPANY_ADMIN,
            company_id=company.id,
        )

        result = await _deliver(
            unit_env, user_created_event("user_ada", "ada@example.com")
        )

        assert result.outcome == WebhookOutcome.ALREADY_PROVISIONED
        assert identity.metadata["user_ada"] == {
            "role": "company_admin",
            "company_id": str(company.id),
        }

    @pytest.mark.asyncio
    async def test_webhook_after_direct_accept(self, unit_env):
        """Direct acceptance first; the later sign-up event changes nothing."""
        accept = await unit_env.get(AcceptInvitationUseCase)
        invitation = await invite(unit_env)
        accepted = await accept.execute(
            AcceptInvitationRequest(
                caller_identity_id="user_ada",
                caller_email="ada@example.com",
                token=invitation.token.root,
            )
        )

        result = await _deliver(
            unit_env, user_created_event("user_ada", "ada@example.com")
        )

        assert result.outcome == WebhookOutcome.ALREADY_PROVISIONED
        assert result.user_id == accepted.user.id


class TestIdentityProviderFailure:
    @pytest.mark.asyncio
    async def test_failed_update_writes_nothing_and_redelivery_completes(
        self, unit_env
    ):
        invitations = await unit_env.get(InvitationRepository)
        users = await unit_env.get(UserRepository)
        identity = await unit_env.get(IdentityProviderClient)
        company = await seed_company(unit_env)
        invitation = await invite(
            unit_env, "ada@example.com", UserRole.COMPANY_ADMIN, company
        )
        event = user_created_event("user_ada", "ada@example.com")
        identity.fail = True

        with pytest.raises(IdentityProviderError):
            await _deliver(unit_env, event)

        assert await users.find_by_identity(IdentityId("user_ada")) is None
        pending = await invitations.find_by_id(invitation.id)
        assert pending.status == InvitationStatus.PENDING

        identity.fail = False
        result = await _deliver(unit_env, event, msg_id="msg_2abd")

        assert result.outcome == WebhookOutcome.INVITATION_ACCEPTED
        assert identity.metadata["user_ada"] == {
            "role": "company_admin",
            "company_id": str(company.id),
            "invitation_id": str(invitation.id),
        }

    @pytest.mark.asyncio
    async def test_failed_update_for_uninvited_sign_up_writes_nothing(
        self, unit_env
    ):
        users = await unit_env.get(UserRepository)
        identity = await unit_env.get(IdentityProviderClient)
        identity.fail = True

        with pytest.raises(IdentityProviderError):
            await _deliver(
                unit_env, user_created_event("user_walkin", "walkin@example.com")
            )

        assert await users.find_by_identity(IdentityId("user_walkin")) is None


class TestVerification:
    @pytest.mark.asyncio
    async def test_bad_signature_is_rejected_and_audited(self, unit_env):
        verifier = await unit_env.get(WebhookVerifier)
        use_case = await unit_env.get(HandleIdentityEventUseCase)
        users = await unit_env.get(UserRepository)
        audit = await unit_env.get(AuditLogRepository)
        body, headers = signed_delivery(
            verifier, user_created_event("user_evil", "evil@example.com")
        )
        headers[SIGNATURE_HEADER] = "v1,Zm9yZ2Vk"

        result = await use_case.execute(
            HandleIdentityEventRequest(body=body, headers=headers)
        )

        assert result.success is False
        assert result.outcome == WebhookOutcome.VERIFICATION_FAILED
        assert await users.find_by_identity(IdentityId("user_evil")) is None
        entry = audit.entries[-1]
        assert entry.action == AuditAction.WEBHOOK_VERIFICATION_FAILED
        assert entry.category == AuditCategory.SECURITY_EVENT
        assert entry.severity == AuditSeverity.ERROR

    @pytest.mark.asyncio
    async def test_stale_delivery_rejected(self, unit_env):
        clock = await unit_env.get(Clock)

        result = await _deliver(
            unit_env,
            user_created_event("user_ada", "ada@example.com"),
            sent_at=clock.now() - timedelta(minutes=10),
        )

        assert result.outcome == WebhookOutcome.VERIFICATION_FAILED


class TestOtherEvents:
    @pytest.mark.asyncio
    async def test_other_event_types_ignored(self, unit_env):
        audit = await unit_env.get(AuditLogRepository)

        result = await _deliver(
            unit_env, {"type": "user.updated", "data": {"id": "user_ada"}}
        )

        assert result.success is True
        assert result.outcome == WebhookOutcome.IGNORED
        assert audit.entries == []

    @pytest.mark.asyncio
    async def test_user_created_without_email(self, unit_env):
        event = user_created_event("user_ada", "ada@example.com")
        event["data"]["email_addresses"] = []

        with pytest.raises(ValidationError, match="No email found"):
            await _deliver(unit_env, event)
