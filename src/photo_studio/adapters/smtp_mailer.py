"""SMTP mail delivery."""

import asyncio
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage

from photo_studio.services.auth import Mailer


@dataclass
class SmtpMailer(Mailer):
    """Mailer sending through an authenticated SMTP-over-SSL server."""

    host: str
    port: int
    username: str
    password: str
    timeout: float = 15

    async def send(self, to: str, subject: str, text: str) -> bool:
        """Send a plain-text message without blocking the event loop."""
        message = EmailMessage()
        message["From"] = self.username
        message["To"] = to
        message["Subject"] = subject
        message.set_content(text)
        await asyncio.to_thread(self._deliver, message)
        return True

    def _deliver(self, message: EmailMessage) -> None:
        with smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout) as smtp:
            smtp.login(self.username, self.password)
            smtp.send_message(message)
