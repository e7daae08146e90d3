"""Email notifications for buy/sell signals."""

from __future__ import annotations

import html
import smtplib
import ssl
from email.message import EmailMessage
from typing import Protocol

import structlog

from projector_core.config.schema import EmailConfig
from projector_core.models import SignalEvent

log = structlog.get_logger("notifier")

FOOTER = "This is an automated notification from your Stock Projector."


class Notifier(Protocol):
    def notify(self, event: SignalEvent) -> bool: ...


def build_message(event: SignalEvent, sender: str, recipient: str) -> EmailMessage:
    """Plain-text and HTML email describing *event*."""
    title = f"{event.symbol} - {event.signal.upper()} Signal"
    price = f"${event.price:.2f}"

    msg = EmailMessage()
    msg["Subject"] = title
    msg["From"] = sender
    msg["To"] = recipient

    text_reasons = "\n".join(f"- {r}" for r in event.reasons)
    msg.set_content(f"{title}\nCurrent Price: {price}\n\nReasons:\n{text_reasons}\n\n{FOOTER}\n")

    html_reasons = "".join(f"<li>{html.escape(r)}</li>" for r in event.reasons)
    msg.add_alternative(
        f"<h2>{html.escape(title)}</h2>"
        f"<p>Current Price: {price}</p>"
        f"<h3>Reasons:</h3><ul>{html_reasons}</ul>"
        f"<p>{FOOTER}</p>",
        subtype="html",
    )
    return msg


class EmailNotifier:
    """Sends one email per signal event over SMTP with implicit TLS."""

    def __init__(self, config: EmailConfig) -> None:
        self.config = config

    def notify(self, event: SignalEvent) -> bool:
        """Send the email; returns False (and logs) when delivery fails."""
        cfg = self.config
        msg = build_message(event, cfg.user or "", cfg.notification_email or "")
        try:
            with smtplib.SMTP_SSL(cfg.smtp_host, cfg.smtp_port, context=ssl.create_default_context()) as smtp:
                smtp.login(cfg.user or "", cfg.password or "")
                smtp.send_message(msg)
        except (smtplib.SMTPException, OSError) as exc:
            log.error("email_failed", symbol=event.symbol, error=str(exc))
            return False
        log.info("email_sent", symbol=event.symbol, signal=event.signal)
        return True


def build_notifier(config: EmailConfig) -> EmailNotifier | None:
    """An EmailNotifier, or None when credentials are not configured."""
    if not (config.user and config.password and config.notification_email):
        log.warning("email_not_configured")
        return None
    return EmailNotifier(config)
