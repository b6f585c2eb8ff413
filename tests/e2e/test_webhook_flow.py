"""End-to-end tests for the identity provider webhook."""

import json

import pytest

from onboard.adapter.identity.webhook import SIGNATURE_HEADER, WebhookVerifier
from onboard.domain.service import EmailSender, IdentityProviderClient
from tests.e2e.conftest import token_from_email
from tests.factories import (
    ADMIN_IDENTITY,
    seed_company,
    seed_site_admin,
    signed_delivery,
    user_created_event,
)


async def _post_event(client, container, event, **kwargs):
    verifier = await container.get(WebhookVerifier)
    body, headers = signed_delivery(verifier, event, **kwargs)
    headers["Content-Type"] = "application/json"
    return await client.post("/webhooks/identity", content=body, headers=headers)


class TestIdentityWebhook:
    @pytest.mark.asyncio
    async def test_invited_sign_up(self, client, container, auth_headers):
        """Signing up with an invited address consumes the invitation."""
        await seed_site_admin(container)
        company = await seed_company(container)
        sender = await container.get(EmailSender)
        identity = await container.get(IdentityProviderClient)
        admin = auth_headers(ADMIN_IDENTITY)
        await client.post(
            "/admin/invitations",
            json={
                "email": "ada@example.com",
                "first_name": "Ada",
                "last_name": "Lovelace",
                "role": "company_admin",
                "company_id": str(company.id),
            },
            headers=admin,
        )
        token = token_from_email(sender.sent[0].text)

        response = await _post_event(
            client, container, user_created_event("user_ada", "Ada@Example.com")
        )

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert identity.metadata["user_ada"]["role"] == "company_admin"
        listed = await client.get("/admin/invitations", headers=admin)
        assert listed.json()["invitations"][0]["status"] == "accepted"
        validated = await client.get("/invitations/validate", params={"token": token})
        assert validated.status_code == 404

    @pytest.mark.asyncio
    async def test_redelivery_is_acknowledged(self, client, container):
        event = user_created_event("user_bob", "bob@example.com")

        first = await _post_event(client, container, event)
        second = await _post_event(client, container, event, msg_id="msg_2abd")

        assert first.status_code == 200
        assert second.status_code == 200

    @pytest.mark.asyncio
    async def test_redelivery_after_provider_failure(
        self, client, container, auth_headers
    ):
        await seed_site_admin(container)
        company = await seed_company(container)
        identity = await container.get(IdentityProviderClient)
        admin = auth_headers(ADMIN_IDENTITY)
        await client.post(
            "/admin/invitations",
            json={
                "email": "ada@example.com",
                "first_name": "Ada",
                "last_name": "Lovelace",
                "role": "company_admin",
                "company_id": str(company.id),
            },
            headers=admin,
        )
        event = user_created_event("user_ada", "ada@example.com")
        identity.fail = True

        failed = await _post_event(client, container, event)

        assert failed.status_code == 500
        listed = await client.get("/admin/invitations", headers=admin)
        assert listed.json()["invitations"][0]["status"] == "pending"

        identity.fail = False
        retried = await _post_event(client, container, event, msg_id="msg_2abd")

        assert retried.status_code == 200
        assert identity.metadata["user_ada"]["role"] == "company_admin"
        listed = await client.get("/admin/invitations", headers=admin)
        assert listed.json()["invitations"][0]["status"] == "accepted"

    @pytest.mark.asyncio
    async def test_bad_signature_is_rejected_and_audited(
        self, client, container, auth_headers
    ):
        await seed_site_admin(container)
        verifier = await container.get(WebhookVerifier)
        body, headers = signed_delivery(
            verifier, user_created_event("user_eve", "eve@example.com")
        )
        headers[SIGNATURE_HEADER] = "v1,Zm9yZ2Vk"

        response = await client.post("/webhooks/identity", content=body, headers=headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "No matching webhook signature"
        audit = await client.get(
            "/admin/audit-logs",
            params={"category": "security_event"},
            headers=auth_headers(ADMIN_IDENTITY),
        )
        entries = audit.json()["entries"]
        assert [e["action"] for e in entries] == ["webhook_verification_failed"]
        assert entries[0]["severity"] == "error"

    @pytest.mark.asyncio
    async def test_missing_email_is_rejected(self, client, container):
        event = user_created_event("user_anon", "anon@example.com")
        event["data"]["email_addresses"] = []

        response = await _post_event(client, container, event)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_other_events_are_acknowledged(self, client, container):
        event = {"type": "session.created", "object": "event", "data": {"id": "sess_1"}}

        response = await _post_event(client, container, event)

        assert response.status_code == 200
        assert json.loads(response.content) == {"success": True}
