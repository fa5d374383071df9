from __future__ import annotations

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Protocol

from ..config import Settings

logger = logging.getLogger(__name__)

SMTP_TIMEOUT_SECONDS = 10


class Mailer(Protocol):
    @property
    def enabled(self) -> bool: ...

    def send(self, to_email: str, subject: str, html_body: str) -> None: ...


class SmtpMailer:
    """Blocking SMTP client (STARTTLS + login). Call from a background task."""

    def __init__(
        self,
        *,
        host: str,
        port: int,
        user: str | None,
        password: str | None,
        timeout: float = SMTP_TIMEOUT_SECONDS,
    ) -> None:
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "SmtpMailer":
        return cls(
            host=settings.smtp_host,
            port=settings.smtp_port,
            user=settings.email_user,
            password=settings.email_pass,
        )

    @property
    def enabled(self) -> bool:
        return bool(self.user and self.password)

    def _connect(self) -> smtplib.SMTP:
        server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        try:
            server.starttls()
            server.login(self.user or "", self.password or "")
        except Exception:
            server.close()
            raise
        return server

    def verify(self) -> bool:
        """Open and authenticate a connection once. Returns False (and logs) on failure."""
        if not self.enabled:
            return False
        try:
            with self._connect():
                pass
        except (smtplib.SMTPException, OSError):
            logger.exception("Email configuration error for %s:%s", self.host, self.port)
            return False
        logger.info("Email server is ready to send messages")
        return True

    def send(self, to_email: str, subject: str, html_body: str) -> None:
        """Send one HTML message. Raises on SMTP/network failure."""
        if not self.enabled:
            logger.debug("Email disabled (EMAIL_USER/EMAIL_PASS not set), skipping send")
            return
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self.user or ""
        msg["To"] = to_email
        msg.attach(MIMEText(html_body, "html", "utf-8"))
        with self._connect() as server:
            server.sendmail(self.user or "", [to_email], msg.as_string())
        logger.info("Email sent to %s", to_email)
