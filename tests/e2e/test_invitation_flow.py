"""End-to-end tests for invitation management and acceptance."""

import pytest

from onboard.domain.service import EmailSender
from onboard.domain.value import UserRole
from onboard.util.clock import Clock
from tests.e2e.conftest import token_from_email
from tests.factories import ADMIN_IDENTITY, seed_company, seed_site_admin, seed_user


async def _create(client, headers, company, email="ada@example.com", **fields):
    payload = {
        "email": email,
        "first_name": "Ada",
        "last_name": "Lovelace",
        "role": "trainee",
        "company_id": str(company.id),
        **fields,
    }
    return await client.post("/admin/invitations", json=payload, headers=headers)


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestInvitationLifecycle:
    @pytest.mark.asyncio
    async def test_invite_validate_accept(self, client, container, auth_headers):
        """Admin invites, invitee opens the link and accepts it."""
        await seed_site_admin(container)
        company = await seed_company(container, "Acme Training")
        sender = await container.get(EmailSender)
        admin = auth_headers(ADMIN_IDENTITY)

        created = await _create(client, admin, company, job_title="Analyst")
        assert created.status_code == 201
        body = created.json()
        assert body["message"] == "Invitation sent successfully"
        assert body["invitation"]["status"] == "pending"
        assert "token" not in body["invitation"]

        token = token_from_email(sender.sent[0].text)

        validated = await client.get("/invitations/validate", params={"token": token})
        assert validated.status_code == 200
        assert validated.json()["company_name"] == "Acme Training"
        assert validated.json()["invitation"]["user_data"]["job_title"] == "Analyst"

        accepted = await client.post(
            "/invitations/accept",
            json={"token": token},
            headers=auth_headers("user_ada", "ada@example.com"),
        )
        assert accepted.status_code == 200
        user = accepted.json()["user"]
        assert user["role"] == "trainee"
        assert user["company_id"] == str(company.id)
        assert user["job_title"] == "Analyst"

        again = await client.get("/invitations/validate", params={"token": token})
        assert again.status_code == 404

        listed = await client.get("/admin/invitations", headers=admin)
        assert [i["status"] for i in listed.json()["invitations"]] == ["accepted"]

        audit = await client.get(
            "/admin/audit-logs",
            params={"category": "invitation_management"},
            headers=admin,
        )
        assert [e["action"] for e in audit.json()["entries"]] == [
            "invitation_accepted",
            "invitation_sent",
        ]

    @pytest.mark.asyncio
    async def test_cancel_then_resend_rejected(self, client, container, auth_headers):
        await seed_site_admin(container)
        company = await seed_company(container)
        admin = auth_headers(ADMIN_IDENTITY)
        invitation_id = (await _create(client, admin, company)).json()["invitation"]["id"]

        cancelled = await client.post(
            f"/admin/invitations/{invitation_id}/cancel", headers=admin
        )
        resent = await client.post(
            f"/admin/invitations/{invitation_id}/resend", headers=admin
        )

        assert cancelled.status_code == 200
        assert cancelled.json()["invitation"]["status"] == "cancelled"
        assert resent.status_code == 400
        assert resent.json()["detail"] == "Only pending invitations can be resent"

    @pytest.mark.asyncio
    async def test_resend_replaces_link(self, client, container, auth_headers):
        await seed_site_admin(container)
        company = await seed_company(container)
        sender = await container.get(EmailSender)
        admin = auth_headers(ADMIN_IDENTITY)
        invitation_id = (await _create(client, admin, company)).json()["invitation"]["id"]
        old_token = token_from_email(sender.sent[0].text)

        resent = await client.post(
            f"/admin/invitations/{invitation_id}/resend", headers=admin
        )

        assert resent.status_code == 200
        new_token = token_from_email(sender.sent[1].text)
        assert new_token != old_token
        old = await client.get("/invitations/validate", params={"token": old_token})
        new = await client.get("/invitations/validate", params={"token": new_token})
        assert old.status_code == 404
        assert new.status_code == 200

    @pytest.mark.asyncio
    async def test_failed_resend_keeps_previous_link(
        self, client, container, auth_headers
    ):
        await seed_site_admin(container)
        company = await seed_company(container)
        sender = await container.get(EmailSender)
        admin = auth_headers(ADMIN_IDENTITY)
        invitation_id = (await _create(client, admin, company)).json()["invitation"]["id"]
        old_token = token_from_email(sender.sent[0].text)
        sender.fail = True

        resent = await client.post(
            f"/admin/invitations/{invitation_id}/resend", headers=admin
        )

        assert resent.status_code == 500
        assert len(sender.sent) == 1
        validated = await client.get(
            "/invitations/validate", params={"token": old_token}
        )
        assert validated.status_code == 200

    @pytest.mark.asyncio
    async def test_site_admin_invitation_has_no_company(
        self, client, container, auth_headers
    ):
        await seed_site_admin(container)
        company = await seed_company(container)
        sender = await container.get(EmailSender)
        admin = auth_headers(ADMIN_IDENTITY)

        created = await _create(
            client, admin, company, role="site_admin", company_id=None
        )
        assert created.status_code == 201
        token = token_from_email(sender.sent[0].text)

        validated = await client.get("/invitations/validate", params={"token": token})
        assert validated.status_code == 200

        accepted = await client.post(
            "/invitations/accept",
            json={"token": token},
            headers=auth_headers("user_ada", "ada@example.com"),
        )
        assert accepted.status_code == 200
        user = accepted.json()["user"]
        assert user["role"] == "site_admin"
        assert user["company_id"] is None

    @pytest.mark.asyncio
    async def test_unknown_invitation_id(self, client, container, auth_headers):
        await seed_site_admin(container)

        response = await client.post(
            "/admin/invitations/6d1c3b52-6f9e-4c55-9a39-0f7c2bb0c8a1/cancel",
            headers=auth_headers(ADMIN_IDENTITY),
        )

        assert response.status_code == 404


class TestCreateInvitationErrors:
    @pytest.mark.asyncio
    async def test_requires_authentication(self, client):
        response = await client.post("/admin/invitations", json={})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_requires_site_admin(self, client, container, auth_headers):
        company = await seed_company(container)
        trainee = await seed_user(
            container, role=UserRole.TRAINEE, company_id=company.id
        )

        response = await _create(client, auth_headers(trainee.user_id), company)

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_invalid_email(self, client, container, auth_headers):
        await seed_site_admin(container)
        company = await seed_company(container)

        response = await _create(
            client, auth_headers(ADMIN_IDENTITY), company, email="nope"
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid email format"

    @pytest.mark.asyncio
    async def test_duplicate_invitation(self, client, container, auth_headers):
        await seed_site_admin(container)
        company = await seed_company(container)
        admin = auth_headers(ADMIN_IDENTITY)
        await _create(client, admin, company)

        response = await _create(client, admin, company, email="ADA@example.com")

        assert response.status_code == 400
        assert (
            response.json()["detail"]
            == "An invitation has already been sent to this email"
        )

    @pytest.mark.asyncio
    async def test_email_failure(self, client, container, auth_headers):
        await seed_site_admin(container)
        company = await seed_company(container)
        sender = await container.get(EmailSender)
        sender.fail = True
        admin = auth_headers(ADMIN_IDENTITY)

        response = await _create(client, admin, company)

        assert response.status_code == 500
        listed = await client.get("/admin/invitations", headers=admin)
        assert listed.json()["invitations"] == []


class TestValidateAndAcceptErrors:
    @pytest.mark.asyncio
    async def test_validate_requires_token(self, client):
        response = await client.get("/invitations/validate")

        assert response.status_code == 400
        assert response.json()["detail"] == "Token is required"

    @pytest.mark.asyncio
    async def test_validate_unknown_token(self, client):
        response = await client.get("/invitations/validate", params={"token": "abc"})

        assert response.status_code == 404
        assert response.json()["detail"] == "Invalid or expired invitation"

    @pytest.mark.asyncio
    async def test_validate_expired(self, client, container, auth_headers):
        await seed_site_admin(container)
        company = await seed_company(container)
        sender = await container.get(EmailSender)
        clock = await container.get(Clock)
        await _create(client, auth_headers(ADMIN_IDENTITY), company)
        token = token_from_email(sender.sent[0].text)
        clock.advance(days=8)

        response = await client.get("/invitations/validate", params={"token": token})

        assert response.status_code == 400
        assert response.json()["detail"] == "Invitation has expired"

    @pytest.mark.asyncio
    async def test_accept_requires_authentication(self, client):
        response = await client.post("/invitations/accept", json={"token": "abc"})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_accept_with_other_email(self, client, container, auth_headers):
        await seed_site_admin(container)
        company = await seed_company(container)
        sender = await container.get(EmailSender)
        await _create(client, auth_headers(ADMIN_IDENTITY), company)
        token = token_from_email(sender.sent[0].text)

        response = await client.post(
            "/invitations/accept",
            json={"token": token},
            headers=auth_headers("user_mallory", "mallory@example.com"),
        )

        assert response.status_code == 400
        assert (
            response.json()["detail"]
            == "This invitation was issued to a different email address"
        )

    @pytest.mark.asyncio
    async def test_accept_with_session_cookie(self, client, container, auth_headers):
        await seed_site_admin(container)
        company = await seed_company(container)
        sender = await container.get(EmailSender)
        await _create(client, auth_headers(ADMIN_IDENTITY), company)
        token = token_from_email(sender.sent[0].text)
        session = auth_headers("user_ada", "ada@example.com")["Authorization"][7:]

        client.cookies.set("__session", session)

        response = await client.post("/invitations/accept", json={"token": token})

        assert response.status_code == 200
