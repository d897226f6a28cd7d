"""Abstract port for announcing newly created recipes."""

import asyncio
import logging
from abc import ABC, abstractmethod

from recipe_api.domain.entities import Recipe

logger = logging.getLogger(__name__)


class RecipeNotifier(ABC):
    """Port for creation notifications: implemented in the infrastructure layer.

    Delivery is fire-and-forget: ``dispatch_created`` returns immediately and
    a failing delivery is logged, never reported to the caller.
    """

    def __init__(self) -> None:
        self._pending: set[asyncio.Task[None]] = set()

    @abstractmethod
    async def send_created(self, recipe: Recipe) -> None:
        """Deliver the notification for ``recipe``. May raise."""
        ...

    def dispatch_created(self, recipe: Recipe) -> None:
        """Schedule ``send_created`` as a detached task, exactly once."""
        task = asyncio.create_task(self._deliver(recipe), name=f"notify-{recipe.id}")
        # The event loop only keeps weak references to tasks
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def drain(self) -> None:
        """Wait for every notification still in flight."""
        if self._pending:
            await asyncio.gather(*list(self._pending))

    async def _deliver(self, recipe: Recipe) -> None:
        try:
            await self.send_created(recipe)
        except Exception:
            logger.exception("Notification for recipe %s failed", recipe.id)
