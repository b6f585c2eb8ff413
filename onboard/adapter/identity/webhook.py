"""Webhook signature verification.

Deliveries are signed by svix with the shared ``whsec_`` secret:

    svix-id:        message id
    svix-timestamp: unix seconds when the message was signed
    svix-signature: space separated "v1,<base64 HMAC-SHA256>" entries

Secret decoding and the signature itself come from the ``svix`` library. The
timestamp window is checked here against the injected clock. Any one
matching entry is accepted, so secrets can be rotated.
"""

import hmac
import json
from datetime import datetime, timezone
from typing import Any, Mapping

from svix.webhooks import Webhook

from onboard.adapter.error import WebhookVerificationError
from onboard.util.clock import Clock

SIGNATURE_VERSION = "v1"

ID_HEADER = "svix-id"
TIMESTAMP_HEADER = "svix-timestamp"
SIGNATURE_HEADER = "svix-signature"


class WebhookVerifier:
    """Verifies signed webhook deliveries from the identity provider."""

    def __init__(self, secret: str, clock: Clock, tolerance_seconds: int = 300) -> None:
        self._webhook = Webhook(secret)
        self.clock = clock
        self.tolerance_seconds = tolerance_seconds

    def sign(self, msg_id: str, timestamp: datetime, body: bytes) -> str:
        """Compute the signature header value for a delivery."""
        return self._webhook.sign(msg_id, timestamp, body.decode("utf-8"))

    def verify(self, body: bytes, headers: Mapping[str, str]) -> dict[str, Any]:
        """Check headers against ``body`` and return the decoded event.

        Raises:
            WebhookVerificationError: On missing headers, a timestamp outside
                the tolerance, no matching signature, or a non-JSON body
        """
        headers = {k.lower(): v for k, v in headers.items()}
        msg_id = headers.get(ID_HEADER)
        msg_timestamp = headers.get(TIMESTAMP_HEADER)
        msg_signature = headers.get(SIGNATURE_HEADER)
        if not msg_id or not msg_timestamp or not msg_signature:
            raise WebhookVerificationError("Missing webhook signature headers")

        try:
            sent_at = datetime.fromtimestamp(int(msg_timestamp), tz=timezone.utc)
        except (ValueError, OverflowError, OSError):
            raise WebhookVerificationError("Invalid webhook timestamp")

        skew = abs((self.clock.now() - sent_at).total_seconds())
        if skew > self.tolerance_seconds:
            raise WebhookVerificationError("Webhook timestamp outside tolerance")

        try:
            payload = body.decode("utf-8")
        except UnicodeDecodeError:
            raise WebhookVerificationError("Webhook body is not valid UTF-8")

        _, _, expected = self._webhook.sign(msg_id, sent_at, payload).partition(",")
        for entry in msg_signature.split(" "):
            version, _, signature = entry.partition(",")
            if version != SIGNATURE_VERSION:
                continue
            if hmac.compare_digest(signature.encode(), expected.encode()):
                break
        else:
            raise WebhookVerificationError("No matching webhook signature")

        try:
            return json.loads(payload)
        except ValueError:
            raise WebhookVerificationError("Webhook body is not valid JSON")
