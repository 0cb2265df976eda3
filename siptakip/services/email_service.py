"""Marketing e-mail rendering and delivery over SMTP."""

from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage
from email.utils import formataddr
from pathlib import Path
from typing import Protocol

from jinja2 import Environment, FileSystemLoader, select_autoescape

from siptakip.core.config import settings
from siptakip.schemas.email import EmailResult

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
DEFAULT_SUBJECT: str = "🍽️ SipTakip | Restoranınızı Dijital Çağa Taşıyın"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
)


class MailerNotConfiguredError(Exception):
    """Raised when no SMTP relay is configured."""


class Mailer(Protocol):
    def send(self, to: str, subject: str, html: str) -> None: ...


class SmtpMailer:
    """Send one message per connection through the configured relay."""

    def __init__(
        self,
        host: str,
        port: int,
        user: str,
        password: str,
        use_tls: bool,
        sender_email: str,
        sender_name: str,
        timeout: float = 10.0,
    ) -> None:
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.use_tls = use_tls
        self.sender = formataddr((sender_name, sender_email))
        self.timeout = timeout

    def send(self, to: str, subject: str, html: str) -> None:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content("Bu e-postayı görüntülemek için HTML destekli bir istemci kullanın.")
        message.add_alternative(html, subtype="html")

        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
            if self.use_tls:
                smtp.starttls()
            if self.user:
                smtp.login(self.user, self.password)
            smtp.send_message(message)


def get_mailer() -> Mailer:
    if not settings.smtp_host:
        raise MailerNotConfiguredError("SMTP_HOST is not configured")
    return SmtpMailer(
        host=settings.smtp_host,
        port=settings.smtp_port,
        user=settings.smtp_user,
        password=settings.smtp_password,
        use_tls=settings.smtp_use_tls,
        sender_email=settings.sender_email,
        sender_name=settings.sender_name,
    )


def render_default_template() -> str:
    return _env.get_template("email/marketing.html").render(
        product_name="SipTakip",
        sender_name=settings.sender_name,
        frontend_url=settings.cors_origins[0] if settings.cors_origins else "",
    )


def send_bulk(mailer: Mailer, emails: list[str], subject: str, html: str) -> list[EmailResult]:
    """Send to each address once; failures are recorded, not retried."""
    results: list[EmailResult] = []
    for address in emails:
        try:
            mailer.send(address, subject, html)
        except (smtplib.SMTPException, OSError) as exc:
            logger.warning("[EMAIL] failed to send to %s: %s", address, exc)
            results.append(EmailResult(email=address, success=False, error=str(exc)))
            continue
        logger.info("[EMAIL] sent to %s", address)
        results.append(EmailResult(email=address, success=True))
    return results
