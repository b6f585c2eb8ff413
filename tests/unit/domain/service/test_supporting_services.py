"""Unit tests for the token, audit, directory and identity sync services."""

from uuid import uuid4

import pytest

from onboard.domain.error import NotFoundError, TokenCollisionError
from onboard.domain.service import (
    AuditService,
    DirectoryService,
    IdentityProviderClient,
    IdentitySyncService,
    TokenService,
)
from onboard.domain.value import (
    AuditAction,
    AuditCategory,
    AuditResourceType,
    AuditSeverity,
    CompanyId,
    IdentityId,
    InvitationId,
    UserRole,
)
from onboard.persistence.repository.inmemory import InMemoryInvitationRepository
from onboard.util.clock import Clock
from tests.factories import seed_company, seed_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestTokenService:
    def test_generate_is_hex_of_configured_length(self):
        service = TokenService(InMemoryInvitationRepository(), token_bytes=16)

        token = service.generate()

        assert len(token.root) == 32
        int(token.root, 16)

    @pytest.mark.asyncio
    async def test_collision_is_not_retried(self, monkeypatch):
        repo = InMemoryInvitationRepository()
        service = TokenService(repo)

        async def always_exists(token):
            return True

        monkeypatch.setattr(repo, "token_exists", always_exists)

        with pytest.raises(TokenCollisionError):
            await service.generate_unique()


class TestAuditService:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "action, category, severity",
        [
            (AuditAction.USER_CREATED, AuditCategory.USER_MANAGEMENT, AuditSeverity.INFO),
            (
                AuditAction.INVITATION_SENT,
                AuditCategory.INVITATION_MANAGEMENT,
                AuditSeverity.INFO,
            ),
            (
                AuditAction.INVITATION_CANCELLED,
                AuditCategory.INVITATION_MANAGEMENT,
                AuditSeverity.WARNING,
            ),
            (
                AuditAction.WEBHOOK_VERIFICATION_FAILED,
                AuditCategory.SECURITY_EVENT,
                AuditSeverity.ERROR,
            ),
        ],
    )
    async def test_category_and_severity_follow_action(
        self, unit_env, action, category, severity
    ):
        service = await unit_env.get(AuditService)

        entry = await service.record(action, AuditResourceType.INVITATION, "res-1")

        assert entry.category == category
        assert entry.severity == severity

    @pytest.mark.asyncio
    async def test_list_filters_by_category_newest_first(self, unit_env):
        service = await unit_env.get(AuditService)
        clock = await unit_env.get(Clock)

        sent = await service.record(
            AuditAction.INVITATION_SENT, AuditResourceType.INVITATION, "a"
        )
        clock.advance(seconds=5)
        await service.record(AuditAction.USER_CREATED, AuditResourceType.USER, "u")
        clock.advance(seconds=5)
        resent = await service.record(
            AuditAction.INVITATION_RESENT, AuditResourceType.INVITATION, "a"
        )

        entries = await service.list_entries(AuditCategory.INVITATION_MANAGEMENT)

        assert [e.id for e in entries] == [resent.id, sent.id]


class TestDirectoryService:
    @pytest.mark.asyncio
    async def test_get_company_unknown(self, unit_env):
        service = await unit_env.get(DirectoryService)

        with pytest.raises(NotFoundError, match="Company not found"):
            await service.get_company(CompanyId(uuid4()))

    @pytest.mark.asyncio
    async def test_names_are_cached_until_ttl(self, unit_env):
        """Lookups are served from cache until the entry lapses."""
        service = await unit_env.get(DirectoryService)
        clock = await unit_env.get(Clock)
        company = await seed_company(unit_env, "Acme Training")

        assert await service.company_name(company.id) == "Acme Training"

        renamed = company.evolve(name="Acme Learning")
        service.company_repository.add(renamed)
        assert await service.company_name(company.id) == "Acme Training"

        clock.advance(seconds=301)
        assert await service.company_name(company.id) == "Acme Learning"

    @pytest.mark.asyncio
    async def test_user_name_falls_back_to_email(self, unit_env):
        service = await unit_env.get(DirectoryService)
        named = await seed_user(unit_env, first_name="Ada", last_name="Lovelace")
        anonymous = await seed_user(
            unit_env, email="anon@example.com", first_name=None, last_name=None
        )

        assert await service.user_name(named.id) == "Ada Lovelace"
        assert await service.user_name(anonymous.id) == "anon@example.com"


class TestIdentitySyncService:
    @pytest.mark.asyncio
    async def test_sync_pushes_role_company_and_invitation(self, unit_env):
        service = await unit_env.get(IdentitySyncService)
        client = await unit_env.get(IdentityProviderClient)
        company_id = CompanyId(uuid4())
        user = await seed_user(
            unit_env, role=UserRole.COMPANY_ADMIN, company_id=company_id
        )
        invitation_id = InvitationId(uuid4())

        metadata = await service.sync_user(user, invitation_id)

        assert metadata == {
            "role": "company_admin",
            "company_id": str(company_id),
            "invitation_id": str(invitation_id),
        }
        assert client.metadata[user.user_id] == metadata

    @pytest.mark.asyncio
    async def test_sync_without_company(self, unit_env):
        service = await unit_env.get(IdentitySyncService)

        user = await seed_user(unit_env)
        metadata = await service.sync_user(user)

        assert metadata == {"role": "trainee", "company_id": None}

    @pytest.mark.asyncio
    async def test_publish_before_user_exists(self, unit_env):
        service = await unit_env.get(IdentitySyncService)
        client = await unit_env.get(IdentityProviderClient)

        metadata = await service.publish(IdentityId("user_new"), UserRole.TRAINEE)

        assert metadata == {"role": "trainee", "company_id": None}
        assert client.metadata["user_new"] == metadata

    def test_client_port_is_abstract(self):
        with pytest.raises(TypeError):
            IdentityProviderClient()
