from __future__ import annotations

from email.message import EmailMessage
import html
from typing import Optional
import logging
import smtplib

from fastapi import Request

from apan import config


class MailServiceError(Exception):
    pass


class MailService:
    """
    Sends transactional mail through an SMTP relay.
    With the ``console`` provider nothing leaves the process; the delivery is
    only logged, which is what development and tests use.
    """

    def __init__(
        self,
        provider: str = "console",
        host: Optional[str] = None,
        port: int = 587,
        username: Optional[str] = None,
        password: Optional[str] = None,
        sender: str = "APAN <no-reply@apan.local>",
        use_tls: bool = True,
        frontend_base_url: str = "http://localhost:5173",
        timeout: int = 10,
    ):
        self.provider = provider
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender
        self.use_tls = use_tls
        self.frontend_base_url = frontend_base_url.rstrip("/")
        self.timeout = timeout
        self.logger = logging.getLogger("apan.mail")

    def reset_link(self, token: str) -> str:
        return f"{self.frontend_base_url}/reset-password/{token}"

    def send_password_reset(self, to_email: str, name: str, token: str) -> None:
        message = self.build_password_reset_message(to_email, name, token)

        if self.provider == "smtp":
            self._send_smtp(message)
        else:
            self._send_console(message)

        self.logger.info(
            "password_reset_mail_sent",
            extra={"provider": self.provider, "to": to_email},
        )

    # -------------------------
    # Templates
    # -------------------------

    def build_password_reset_message(
        self, to_email: str, name: str, token: str
    ) -> EmailMessage:
        link = self.reset_link(token)
        safe_name = html.escape(name)
        safe_link = html.escape(link, quote=True)

        message = EmailMessage()
        message["Subject"] = "APAN - Password reset"
        message["From"] = self.sender
        message["To"] = to_email

        message.set_content(
            f"Hello {name},\n\n"
            "We received a request to reset the password of your APAN account.\n"
            f"Open the link below to choose a new password:\n\n{link}\n\n"
            "The link expires in 1 hour. If you did not ask for this, ignore this email.\n"
        )
        message.add_alternative(
            f"""\
<html>
  <body>
    <p>Hello {safe_name},</p>
    <p>We received a request to reset the password of your APAN account.</p>
    <p><a href="{safe_link}">Reset my password</a></p>
    <p>The link expires in 1 hour. If you did not ask for this, ignore this email.</p>
  </body>
</html>
""",
            subtype="html",
        )
        return message

    # -------------------------
    # Providers
    # -------------------------

    def _send_smtp(self, message: EmailMessage) -> None:
        if not self.host:
            raise MailServiceError("MAIL_HOST is not configured")

        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                if self.use_tls:
                    smtp.starttls()
                if self.username:
                    smtp.login(self.username, self.password or "")
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            raise MailServiceError("SMTP delivery failed") from exc

    def _send_console(self, message: EmailMessage) -> None:
        self.logger.info(
            "mail_console_delivery",
            extra={"to": message["To"], "subject": message["Subject"]},
        )


def build_mail_service() -> MailService:
    return MailService(
        provider=config.MAIL_PROVIDER,
        host=config.MAIL_HOST,
        port=config.MAIL_PORT,
        username=config.MAIL_USERNAME,
        password=config.MAIL_PASSWORD,
        sender=config.MAIL_FROM,
        use_tls=config.MAIL_USE_TLS,
        frontend_base_url=config.FRONTEND_BASE_URL,
        timeout=config.MAIL_TIMEOUT,
    )


def get_mail_service(request: Request) -> MailService:
    # constructed once in apan.main and kept on app.state
    return request.app.state.mail_service
