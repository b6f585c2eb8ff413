"""Invitation email rendering and dispatch."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from html import escape
from typing import Optional

import logfire

from onboard.config import Settings
from onboard.domain.model import Invitation

from .base import Service
from .directory_service import DirectoryService

PLATFORM_NAME = "Expert Ease"


@dataclass(frozen=True)
class EmailMessage:
    """A rendered transactional email."""

    to: str
    subject: str
    html: str
    text: str


class EmailSender(ABC):
    """Port to the transactional email provider."""

    @abstractmethod
    async def send(self, message: EmailMessage) -> None:
        """Deliver a message.

        Raises:
            EmailDeliveryError: If the provider did not accept the message
        """
        pass


class NotificationService(Service):
    """Sends invitation emails.

    Delivery failures propagate; the caller decides whether the invitation
    survives them.
    """

    def __init__(
        self,
        email_sender: EmailSender,
        directory_service: DirectoryService,
        settings: Settings,
    ) -> None:
        self.email_sender = email_sender
        self.directory_service = directory_service
        self.settings = settings

    async def send_invitation(self, invitation: Invitation) -> EmailMessage:
        """Render and send the invitation email for ``invitation``.

        Returns:
            The message handed to the provider
        """
        with logfire.span(
            "notification_service.send_invitation",
            invitation_id=str(invitation.id),
            token=invitation.token.masked,
        ):
            company_name = (
                await self.directory_service.company_name(invitation.company_id)
                if invitation.company_id
                else None
            )
            inviter_name = await self.directory_service.user_name(invitation.invited_by)

            message = render_invitation_email(
                invitation,
                invitation_url=self.settings.invitation_url(invitation.token.root),
                expires_in=_expires_in(self.settings.invitations.expiry_days),
                company_name=company_name,
                inviter_name=inviter_name,
            )
            await self.email_sender.send(message)
            logfire.info(
                "Invitation email sent",
                invitation_id=str(invitation.id),
                to=message.to,
            )
            return message


def _expires_in(days: int) -> str:
    return "1 day" if days == 1 else f"{days} days"


def render_invitation_email(
    invitation: Invitation,
    *,
    invitation_url: str,
    expires_in: str,
    company_name: Optional[str] = None,
    inviter_name: Optional[str] = None,
) -> EmailMessage:
    """Build subject, HTML and plain-text bodies for an invitation."""
    first_name = invitation.user_data.first_name
    role = invitation.role.display_name

    subject = f"You're invited to join {PLATFORM_NAME}"

    company_html = (
        f'<p class="detail">Company: {escape(company_name)}</p>' if company_name else ""
    )
    inviter_html = (
        f'<p class="muted">Invited by: {escape(inviter_name)}</p>' if inviter_name else ""
    )
    html_content = f"""
<!DOCTYPE html>
<html lang="en">
<head>
    <style>
        body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #1f2937; }}
        .container {{ max-width: 600px; margin: 0 auto; padding: 20px; text-align: center; }}
        .detail {{ font-size: 16px; color: #4b5563; }}
        .muted {{ font-size: 14px; color: #6b7280; }}
        .button {{ background: #3b82f6; color: #ffffff; padding: 14px 28px; border-radius: 8px;
                   text-decoration: none; font-weight: bold; display: inline-block; }}
    </style>
</head>
<body>
    <div class="container">
        <h1>Welcome to {PLATFORM_NAME}, {escape(first_name)}!</h1>
        <p class="detail">You've been invited to join {PLATFORM_NAME} as a {role}.</p>
        {company_html}
        {inviter_html}
        <p class="detail">Click the button below to accept your invitation and set up your account:</p>
        <p><a class="button" href="{escape(invitation_url)}">Accept Invitation</a></p>
        <p class="muted">This invitation expires in {expires_in}.</p>
        <p class="muted">If you didn't expect this invitation, you can safely ignore this email.</p>
    </div>
</body>
</html>
"""

    lines = [
        f"Welcome to {PLATFORM_NAME}, {first_name}!",
        "",
        f"You've been invited to join {PLATFORM_NAME} as a {role}.",
    ]
    if company_name:
        lines.append(f"Company: {company_name}")
    if inviter_name:
        lines.append(f"Invited by: {inviter_name}")
    lines += [
        "",
        f"Accept your invitation: {invitation_url}",
        "",
        f"This invitation expires in {expires_in}.",
        "If you didn't expect this invitation, you can safely ignore this email.",
    ]

    return EmailMessage(
        to=str(invitation.email),
        subject=subject,
        html=html_content,
        text="\n".join(lines),
    )
