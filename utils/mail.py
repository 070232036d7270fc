"""Outbound email delivery over SMTP."""

from __future__ import annotations

import smtplib
from dataclasses import dataclass, field
from email.message import EmailMessage
from typing import Any, Mapping

from flask import current_app


@dataclass(frozen=True)
class MailSettings:
    """SMTP connection settings, read once from the application config."""

    server: str = "localhost"
    port: int = 25
    username: str | None = None
    password: str | None = None
    use_tls: bool = False
    default_sender: str = "no-reply@localhost"
    suppress_send: bool = False

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "MailSettings":
        return cls(
            server=config.get("MAIL_SERVER", "localhost"),
            port=int(config.get("MAIL_PORT", 25)),
            username=config.get("MAIL_USERNAME"),
            password=config.get("MAIL_PASSWORD"),
            use_tls=bool(config.get("MAIL_USE_TLS", False)),
            default_sender=config.get("MAIL_DEFAULT_SENDER", "no-reply@localhost"),
            suppress_send=bool(config.get("MAIL_SUPPRESS_SEND", False)),
        )


@dataclass
class MailSender:
    """Sends HTML messages; records them in ``outbox`` when sending is suppressed."""

    settings: MailSettings
    outbox: list[EmailMessage] = field(default_factory=list)

    def init_app(self, app) -> None:
        app.extensions["mail_sender"] = self

    def build_message(self, to: str, subject: str, html: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.settings.default_sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content(html, subtype="html")
        return message

    def send(self, to: str, subject: str, html: str) -> None:
        """Deliver a message. SMTP errors propagate to the caller."""

        message = self.build_message(to, subject, html)
        if self.settings.suppress_send:
            self.outbox.append(message)
            return

        with smtplib.SMTP(host=self.settings.server, port=self.settings.port) as conn:
            if self.settings.use_tls:
                conn.starttls()
            if self.settings.username:
                conn.login(self.settings.username, self.settings.password or "")
            conn.send_message(message)


def get_mail_sender() -> MailSender:
    return current_app.extensions["mail_sender"]
