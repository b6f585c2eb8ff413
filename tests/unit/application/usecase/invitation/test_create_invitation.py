"""Unit tests for CreateInvitationUseCase."""

from uuid import UUID, uuid4

import pytest

from onboard.adapter.error import EmailDeliveryError
from onboard.application.usecase.invitation import (
    CreateInvitationRequest,
    CreateInvitationUseCase,
)
from onboard.domain.error import (
    NotAuthorizedError,
    NotFoundError,
    PendingInvitationExistsError,
    UserAlreadyExistsError,
    ValidationError,
)
from onboard.domain.repository import AuditLogRepository, InvitationRepository
from onboard.domain.service import EmailSender
from onboard.domain.value import AuditAction, InvitationStatus, UserRole
from onboard.util.clock import Clock
from tests.factories import (
    ADMIN_IDENTITY,
    BIRTHDAY,
    seed_company,
    seed_site_admin,
    seed_user,
)
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def _request(**overrides) -> CreateInvitationRequest:
    fields = {
        "caller_identity_id": ADMIN_IDENTITY,
        "email": "Ada@Example.com",
        "role": UserRole.SITE_ADMIN,
        "first_name": "Ada",
        "last_name": "Lovelace",
    }
    fields.update(overrides)
    return CreateInvitationRequest(**fields)


class TestCreateInvitation:
    @pytest.mark.asyncio
    async def test_create_sends_email_and_audits(self, unit_env):
        """Creation stores the invitation, emails the link and audits it."""
        use_case = await unit_env.get(CreateInvitationUseCase)
        sender = await unit_env.get(EmailSender)
        audit = await unit_env.get(AuditLogRepository)
        admin = await seed_site_admin(unit_env)
        company = await seed_company(unit_env)

        response = await use_case.execute(
            _request(
                role=UserRole.TRAINEE,
                company_id=company.id,
                job_title="Analyst",
                date_of_birth=BIRTHDAY,
            )
        )

        invitation = response.invitation
        assert response.message == "Invitation sent successfully"
        assert invitation.email == "ada@example.com"
        assert invitation.role == UserRole.TRAINEE
        assert invitation.company_id == str(company.id)
        assert invitation.status == InvitationStatus.PENDING
        assert invitation.user_data.job_title == "Analyst"
        assert invitation.user_data.date_of_birth == BIRTHDAY
        assert "token" not in response.model_dump()["invitation"]

        assert len(sender.sent) == 1
        assert sender.sent[0].to == "ada@example.com"

        entries = audit.entries
        assert [e.action for e in entries] == [AuditAction.INVITATION_SENT]
        assert entries[0].actor_id == admin.id
        assert entries[0].resource_id == invitation.id

    @pytest.mark.asyncio
    async def test_only_site_admins_may_invite(self, unit_env):
        use_case = await unit_env.get(CreateInvitationUseCase)
        trainee = await seed_user(unit_env, role=UserRole.TRAINEE)

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(_request(caller_identity_id=trainee.user_id))

    @pytest.mark.asyncio
    async def test_unknown_caller(self, unit_env):
        use_case = await unit_env.get(CreateInvitationUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(_request())

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"email": "not-an-email"}, "Invalid email format"),
            ({"first_name": "A"}, "First name must be at least 2 characters"),
            ({"last_name": ""}, "Last name must be at least 2 characters"),
            ({"role": None}, "Role is required"),
            (
                {"role": UserRole.COMPANY_ADMIN},
                "Company is required for Company Administrator users",
            ),
        ],
    )
    async def test_invalid_input(self, unit_env, overrides, message):
        use_case = await unit_env.get(CreateInvitationUseCase)
        await seed_site_admin(unit_env)

        with pytest.raises(ValidationError, match=message):
            await use_case.execute(_request(**overrides))

    @pytest.mark.asyncio
    async def test_unknown_company(self, unit_env):
        use_case = await unit_env.get(CreateInvitationUseCase)
        await seed_site_admin(unit_env)

        with pytest.raises(NotFoundError, match="Company not found"):
            await use_case.execute(
                _request(role=UserRole.TRAINEE, company_id=uuid4())
            )

    @pytest.mark.asyncio
    async def test_existing_user_email_rejected(self, unit_env):
        use_case = await unit_env.get(CreateInvitationUseCase)
        await seed_site_admin(unit_env)
        await seed_user(unit_env, email="ada@example.com")

        with pytest.raises(
            UserAlreadyExistsError, match="A user with this email already exists"
        ):
            await use_case.execute(_request())

    @pytest.mark.asyncio
    async def test_duplicate_live_invitation_rejected(self, unit_env):
        use_case = await unit_env.get(CreateInvitationUseCase)
        await seed_site_admin(unit_env)
        await use_case.execute(_request())

        with pytest.raises(
            PendingInvitationExistsError,
            match="An invitation has already been sent to this email",
        ):
            await use_case.execute(_request(email="ADA@example.com"))

    @pytest.mark.asyncio
    async def test_lapsed_invitation_is_expired_and_replaced(self, unit_env):
        use_case = await unit_env.get(CreateInvitationUseCase)
        clock = await unit_env.get(Clock)
        repo = await unit_env.get(InvitationRepository)
        audit = await unit_env.get(AuditLogRepository)
        await seed_site_admin(unit_env)
        first = await use_case.execute(_request())

        clock.advance(days=8)
        second = await use_case.execute(_request())

        assert second.invitation.id != first.invitation.id
        old = await repo.find_by_id(UUID(first.invitation.id))
        assert old.status == InvitationStatus.EXPIRED
        assert [e.action for e in audit.entries] == [
            AuditAction.INVITATION_SENT,
            AuditAction.INVITATION_EXPIRED,
            AuditAction.INVITATION_SENT,
        ]

    @pytest.mark.asyncio
    async def test_email_failure_leaves_no_invitation(self, unit_env):
        """If the email cannot be sent the invitation is removed again."""
        use_case = await unit_env.get(CreateInvitationUseCase)
        sender = await unit_env.get(EmailSender)
        repo = await unit_env.get(InvitationRepository)
        audit = await unit_env.get(AuditLogRepository)
        await seed_site_admin(unit_env)
        sender.fail = True

        with pytest.raises(EmailDeliveryError):
            await use_case.execute(_request())

        assert await repo.list() == []
        assert audit.entries == []

        # The email is free for a new attempt
        sender.fail = False
        response = await use_case.execute(_request())
        assert response.invitation.status == InvitationStatus.PENDING

