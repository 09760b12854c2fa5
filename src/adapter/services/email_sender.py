import asyncio
import logging
import smtplib
from email.message import EmailMessage as MimeMessage
from typing import Optional

from src.app.services.email_sender import EmailDeliveryError, EmailMessage, IEmailSender

logger = logging.getLogger(__name__)


class SmtpEmailSender(IEmailSender):
    """SMTP implementation of IEmailSender, runs smtplib in a worker thread"""

    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        timeout: float = 10,
    ):
        self.host = host
        self.port = port
        self.sender = sender
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def _build(self, message: EmailMessage) -> MimeMessage:
        mime = MimeMessage()
        mime["From"] = self.sender
        mime["To"] = message.to
        mime["Subject"] = message.subject
        mime.set_content(message.text)
        mime.add_alternative(message.html, subtype="html")
        return mime

    def _send_blocking(self, mime: MimeMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
            if self.use_tls:
                smtp.starttls()
            if self.username:
                smtp.login(self.username, self.password or "")
            smtp.send_message(mime)

    async def send(self, message: EmailMessage) -> None:
        mime = self._build(message)
        try:
            # smtplib's socket timeout bounds each operation, wait_for bounds the whole exchange
            await asyncio.wait_for(
                asyncio.to_thread(self._send_blocking, mime), timeout=self.timeout * 3
            )
        except (smtplib.SMTPException, OSError, asyncio.TimeoutError) as exc:
            raise EmailDeliveryError(f"SMTP delivery to {self.host}:{self.port} failed: {exc}") from exc


class LoggingEmailSender(IEmailSender):
    """Development sender that logs the envelope instead of delivering mail"""

    async def send(self, message: EmailMessage) -> None:
        logger.info(
            "Email not delivered (console backend): to=%s subject=%s",
            message.to,
            message.subject,
        )


def build_email_sender(config) -> IEmailSender:
    """Pick the email backend named by config.EMAIL_BACKEND"""
    backend = str(config.EMAIL_BACKEND).lower()
    if backend == "smtp":
        return SmtpEmailSender(
            host=config.SMTP_HOST,
            port=config.SMTP_PORT,
            sender=config.EMAIL_FROM,
            username=config.SMTP_USER or None,
            password=config.SMTP_PASSWORD or None,
            use_tls=config.SMTP_USE_TLS,
            timeout=config.EMAIL_TIMEOUT_SECONDS,
        )
    if backend == "console":
        return LoggingEmailSender()
    raise ValueError(f"Unknown EMAIL_BACKEND: {config.EMAIL_BACKEND}")
