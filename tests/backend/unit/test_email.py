"""
Unit tests for services.email (SendGrid delivery, best-effort semantics).
"""
import json

import httpx
import pytest

from taskmanager.config import Settings
from taskmanager.services.email import EmailService


pytestmark = pytest.mark.asyncio


def _settings(**overrides) -> Settings:
    base = {
        "sendgrid_api_key": "SG.test",
        "sendgrid_api_url": "https://sendgrid.test/v3/mail/send",
        "email_from": "tasks@example.com",
    }
    base.update(overrides)
    return Settings(**base)


async def test_send_posts_to_sendgrid():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["auth"] = request.headers["Authorization"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(202)

    service = EmailService(_settings(), transport=httpx.MockTransport(handler))
    ok = await service.send_template("jonathan@example.com", "welcome", "Jonathan")

    assert ok is True
    assert captured["url"] == "https://sendgrid.test/v3/mail/send"
    assert captured["auth"] == "Bearer SG.test"
    body = captured["body"]
    assert body["personalizations"] == [{"to": [{"email": "jonathan@example.com"}]}]
    assert body["from"] == {"email": "tasks@example.com"}
    assert body["subject"] == "Welcome to the Task Manager"
    assert "Jonathan" in body["content"][0]["value"]


async def test_send_skipped_when_not_configured():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    service = EmailService(_settings(sendgrid_api_key=None), transport=httpx.MockTransport(handler))
    assert service.is_configured is False
    assert await service.send("a@example.com", "Hi", "Body") is False


async def test_provider_error_is_swallowed():
    service = EmailService(_settings(), transport=httpx.MockTransport(lambda request: httpx.Response(500)))
    assert await service.send_template("a@example.com", "cancelation", "Mike") is False


async def test_network_error_is_swallowed():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("boom", request=request)

    service = EmailService(_settings(), transport=httpx.MockTransport(handler))
    assert await service.send("a@example.com", "Hi", "Body") is False
