"""Tests for email notifications."""

from __future__ import annotations

import smtplib
from datetime import datetime, timezone
from decimal import Decimal

from projector_core.config.schema import EmailConfig
from projector_core.models import SignalEvent
from projector_core.notify import EmailNotifier, build_message, build_notifier

EVENT = SignalEvent(
    symbol="AAPL",
    signal="buy",
    price=Decimal("189.5"),
    reasons=["RSI indicates oversold condition", "Price <near> support level"],
    ts=datetime(2024, 3, 1, tzinfo=timezone.utc),
)

CONFIGURED = EmailConfig(user="me@example.com", password="secret", notification_email="alerts@example.com")


class TestBuildMessage:
    def test_headers(self):
        msg = build_message(EVENT, "me@example.com", "alerts@example.com")
        assert msg["Subject"] == "AAPL - BUY Signal"
        assert msg["From"] == "me@example.com"
        assert msg["To"] == "alerts@example.com"

    def test_text_and_html_parts(self):
        msg = build_message(EVENT, "me@example.com", "alerts@example.com")
        text = msg.get_body(preferencelist=("plain",)).get_content()
        html = msg.get_body(preferencelist=("html",)).get_content()
        assert "Current Price: $189.50" in text
        assert "- RSI indicates oversold condition" in text
        assert "<li>Price &lt;near&gt; support level</li>" in html


class TestBuildNotifier:
    def test_missing_credentials(self):
        assert build_notifier(EmailConfig()) is None
        assert build_notifier(EmailConfig(user="me@example.com", password="secret")) is None

    def test_configured(self):
        assert isinstance(build_notifier(CONFIGURED), EmailNotifier)


class _FakeSMTP:
    sent: list = []

    def __init__(self, host, port, context=None):
        self.host = host
        self.port = port

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def login(self, user, password):
        if password != "secret":
            raise smtplib.SMTPAuthenticationError(535, b"bad credentials")

    def send_message(self, msg):
        _FakeSMTP.sent.append(msg)


class TestEmailNotifier:
    def test_sends(self, monkeypatch):
        _FakeSMTP.sent = []
        monkeypatch.setattr(smtplib, "SMTP_SSL", _FakeSMTP)
        assert EmailNotifier(CONFIGURED).notify(EVENT) is True
        assert _FakeSMTP.sent[0]["Subject"] == "AAPL - BUY Signal"

    def test_failure_returns_false(self, monkeypatch):
        monkeypatch.setattr(smtplib, "SMTP_SSL", _FakeSMTP)
        config = CONFIGURED.model_copy(update={"password": "wrong"})
        assert EmailNotifier(config).notify(EVENT) is False
