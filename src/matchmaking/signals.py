"""
Event Signals

Small callback registries used by the room handle, and a single-resolution
result channel used to race the room's join and error events.
"""

import asyncio
import logging
from typing import Any, Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)


class EventSignal:
    """
    Ordered list of handlers invoked with the same arguments.

    Handlers registered with once() are removed before they are called,
    so they fire at most one time even if invoke() is re-entered.
    """

    def __init__(self, name: str = ""):
        self.name = name
        self._handlers: List[Tuple[Callable[..., Any], bool]] = []

    def add(self, handler: Callable[..., Any]) -> Callable[..., Any]:
        """Register a persistent handler. Returns the handler."""
        self._handlers.append((handler, False))
        return handler

    def once(self, handler: Callable[..., Any]) -> Callable[..., Any]:
        """Register a handler removed after its first invocation."""
        self._handlers.append((handler, True))
        return handler

    def remove(self, handler: Callable[..., Any]) -> bool:
        """
        Deregister a handler.

        Returns:
            True if the handler was registered, False otherwise
        """
        for index, (registered, _) in enumerate(self._handlers):
            if registered is handler:
                del self._handlers[index]
                return True
        return False

    def clear(self) -> None:
        self._handlers.clear()

    def invoke(self, *args: Any) -> None:
        """Call every registered handler in registration order."""
        for entry in list(self._handlers):
            handler, one_shot = entry
            if one_shot:
                try:
                    self._handlers.remove(entry)
                except ValueError:
                    # Removed by an earlier handler in this same pass
                    continue
            elif entry not in self._handlers:
                continue
            handler(*args)

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        return f"EventSignal({self.name!r}, handlers={len(self._handlers)})"


class ResultChannel:
    """
    Accepts exactly one outcome: a value or an exception.

    The first call to resolve() or reject() wins and later calls are
    ignored. Cleanup callbacks registered with add_cleanup() run once, at
    settlement, which is where event handlers get deregistered.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop or asyncio.get_running_loop()
        self._future: asyncio.Future = self._loop.create_future()
        self._cleanups: List[Callable[[], Any]] = []

    @property
    def settled(self) -> bool:
        return self._future.done()

    def add_cleanup(self, callback: Callable[[], Any]) -> None:
        """Run callback when the channel settles (immediately if it has)."""
        if self.settled:
            callback()
        else:
            self._cleanups.append(callback)

    def resolve(self, value: Any) -> bool:
        """Settle with a value. Returns False if already settled."""
        if self.settled:
            logger.debug("Ignoring late resolve on settled channel")
            return False
        self._future.set_result(value)
        self._run_cleanups()
        return True

    def reject(self, error: BaseException) -> bool:
        """Settle with an exception. Returns False if already settled."""
        if self.settled:
            logger.debug(f"Ignoring late reject on settled channel: {error!r}")
            return False
        self._future.set_exception(error)
        self._run_cleanups()
        return True

    async def wait(self) -> Any:
        """Wait for the outcome; raises the exception if rejected."""
        return await self._future

    def _run_cleanups(self) -> None:
        cleanups, self._cleanups = self._cleanups, []
        for callback in cleanups:
            callback()
