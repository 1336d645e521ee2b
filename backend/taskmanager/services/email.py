"""
Transactional email via the SendGrid v3 HTTP API.

Sending is fire-and-forget: failures are logged and never surface to the
request that triggered them.
"""
import logging

import httpx

from taskmanager.config import Settings

logger = logging.getLogger("uvicorn.error")

TEMPLATES = {
    "welcome": {
        "subject": "Welcome to the Task Manager",
        "text": "Welcome to the app, {name}. Let me know how you get along with the app!",
    },
    "cancelation": {
        "subject": "Sorry you are leaving the Task Manager",
        "text": "Sorry to see you go {name}. We hope to see you back sometime soon.",
    },
}


class EmailService:
    """Send plain-text emails through SendGrid."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.settings = settings
        self._transport = transport  # Injected in tests (httpx.MockTransport)

    @property
    def is_configured(self) -> bool:
        return bool(self.settings.sendgrid_api_key and self.settings.email_from)

    async def send(self, to: str, subject: str, text: str) -> bool:
        """
        Send one email.

        Returns:
            True if the provider accepted the message, False otherwise
        """
        if not self.is_configured:
            logger.warning("[email] SENDGRID_API_KEY not set -> skip '%s' to %s", subject, to)
            return False

        headers = {"Authorization": f"Bearer {self.settings.sendgrid_api_key}"}
        payload = {
            "personalizations": [{"to": [{"email": to}]}],
            "from": {"email": self.settings.email_from},
            "subject": subject,
            "content": [{"type": "text/plain", "value": text}],
        }
        try:
            async with httpx.AsyncClient(timeout=10, transport=self._transport) as client:
                resp = await client.post(self.settings.sendgrid_api_url, headers=headers, json=payload)
                resp.raise_for_status()
        except httpx.HTTPError:
            logger.exception("[email] send failed: subject='%s' to=%s", subject, to)
            return False
        logger.info("[email] sent '%s' to %s", subject, to)
        return True

    async def send_template(self, to: str, template: str, name: str) -> bool:
        tpl = TEMPLATES[template]
        return await self.send(to, tpl["subject"], tpl["text"].format(name=name))


async def send_welcome_email(settings: Settings, email: str, name: str) -> None:
    await EmailService(settings).send_template(email, "welcome", name)


async def send_cancelation_email(settings: Settings, email: str, name: str) -> None:
    await EmailService(settings).send_template(email, "cancelation", name)
