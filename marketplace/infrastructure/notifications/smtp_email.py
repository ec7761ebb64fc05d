"""Transactional email through SMTP, run off the event loop."""

import asyncio
import logging

from marketplace.domain.ports import EmailSender
from marketplace.utils.send_email import send_email

logger = logging.getLogger(__name__)


class SmtpEmailSender(EmailSender):
    def __init__(self, smtp_user: str, smtp_password: str):
        self._configured = bool(smtp_user and smtp_password)

    @property
    def enabled(self) -> bool:
        return self._configured

    async def send(self, to: str, subject: str, body: str) -> None:
        if not self._configured:
            return
        result = await asyncio.to_thread(send_email, [to], subject, body)
        if result["status"] != "sent":
            raise RuntimeError(result.get("error", "email delivery failed"))
