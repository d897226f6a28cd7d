"""SMTP implementation of the RecipeNotifier port."""

import asyncio
import html
import logging
import smtplib
from email.message import EmailMessage

from recipe_api.application.interfaces import RecipeNotifier
from recipe_api.domain.entities import Recipe

logger = logging.getLogger(__name__)


class SmtpRecipeNotifier(RecipeNotifier):
    """Sends an HTML mail for every created recipe.

    ``smtplib`` is blocking, so each mail is delivered from a worker thread.
    When ``enabled`` is False nothing is sent.
    """

    def __init__(
        self,
        *,
        host: str,
        port: int,
        sender: str,
        recipient: str,
        timeout: float = 10,
        enabled: bool = True,
    ):
        super().__init__()
        self._host = host
        self._port = port
        self._sender = sender
        self._recipient = recipient
        self._timeout = timeout
        self._enabled = enabled

    @property
    def enabled(self) -> bool:
        return self._enabled

    def build_message(self, recipe: Recipe) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self._sender
        message["To"] = self._recipient
        message["Subject"] = f"New recipe {recipe.id}"
        message.set_content(f"The recipe named {recipe.name} has been created.")
        message.add_alternative(
            f"The recipe named <strong>{html.escape(recipe.name)}</strong> has been created.",
            subtype="html",
        )
        return message

    async def send_created(self, recipe: Recipe) -> None:
        if not self._enabled:
            logger.debug("Mail disabled, not announcing recipe %s", recipe.id)
            return

        message = self.build_message(recipe)
        await asyncio.to_thread(self._send, message)
        logger.info("Announced recipe %s to %s", recipe.id, self._recipient)

    def _send(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as smtp:
            smtp.send_message(message)
