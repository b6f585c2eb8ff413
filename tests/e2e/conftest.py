"""Fixtures for end-to-end API tests.

The app runs in-process against the mocked container, so tests can seed
repositories and inspect outgoing mail alongside HTTP calls.
"""

import re

import httpx
import pytest_asyncio

from onboard.config import AuthSettings
from onboard.interface.api.app import create_app
from tests.di import build_test_container
from tests.factories import create_token

_TOKEN_IN_LINK = re.compile(r"accept-invitation\?token=([0-9a-f]+)")


@pytest_asyncio.fixture
async def container():
    container = build_test_container()
    yield container
    await container.close()


@pytest_asyncio.fixture
async def client(container):
    app = create_app(container)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def auth_headers(container):
    """Returns a builder for ``Authorization`` headers of a given identity."""
    settings = await container.get(AuthSettings)

    def _headers(identity_id: str, email: str = "someone@example.com") -> dict[str, str]:
        return {"Authorization": f"Bearer {create_token(identity_id, email, settings)}"}

    return _headers


def token_from_email(text: str) -> str:
    match = _TOKEN_IN_LINK.search(text)
    assert match, "invitation link not found in email"
    return match.group(1)
