"""Mail notifier for newly created monitors.

Sending goes through :mod:`smtplib` on a worker thread so the event loop
is never blocked on SMTP I/O. With ``[mail] enabled = false`` (the
default) messages are only logged.
"""

from __future__ import annotations

import asyncio
import html
import smtplib
from email.message import EmailMessage
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from monitorsvc.config.models import MailConfig
    from monitorsvc.domain.monitor import Monitor


class MailNotifier:
    """Sends a short HTML message per created monitor."""

    def __init__(self, config: MailConfig, *, logger: Any | None = None) -> None:
        self._config = config
        self._log = logger or structlog.get_logger(__name__)

    @property
    def enabled(self) -> bool:
        return self._config.enabled

    def build_message(self, record: Monitor) -> EmailMessage:
        """Compose the notification for *record*."""
        msg = EmailMessage()
        msg["Subject"] = f"New monitor {record.id}"
        msg["From"] = self._config.sender
        msg["To"] = self._config.recipient
        msg.set_content(f"The monitor named {record.name} has been created.")
        name = html.escape(str(record.name))
        msg.add_alternative(
            f"The monitor named <strong>{name}</strong> has been created.",
            subtype="html",
        )
        return msg

    async def notify_created(self, record: Monitor) -> None:
        """Send (or log) the creation notice. SMTP errors propagate."""
        msg = self.build_message(record)
        if not self.enabled:
            self._log.info("mail.skipped", subject=msg["Subject"])
            return
        await asyncio.to_thread(self._send, msg)
        self._log.debug("mail.sent", subject=msg["Subject"], to=self._config.recipient)

    def _send(self, msg: EmailMessage) -> None:
        with smtplib.SMTP(
            self._config.host, self._config.port, timeout=self._config.timeout
        ) as smtp:
            smtp.send_message(msg)
