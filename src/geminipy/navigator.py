import asyncio
import logging
from dataclasses import dataclass

from .redirects import RedirectResolver, Resolution
from .request import with_input

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InputPrompt:
    url: str
    prompt: str
    sensitive: bool = False


class Navigator:
    """
    The single active view of a browser tab.

    Starting a navigation cancels the one in flight and waits until it has
    finished, so its socket is closed before the new request connects. Only
    the navigation that is still current when it completes updates
    `current_url` and `pending_input`.
    """

    def __init__(self, resolver: RedirectResolver):
        self._resolver = resolver
        self._task: asyncio.Task | None = None
        self.current_url: str | None = None
        self.pending_input: InputPrompt | None = None

    @property
    def is_loading(self) -> bool:
        return self._task is not None and not self._task.done()

    async def navigate(self, url: str) -> Resolution:
        # Another navigation may have started while we waited for the previous one.
        while self.is_loading:
            await self.cancel()

        task = asyncio.create_task(self._resolver.resolve(url))
        self._task = task
        try:
            resolution = await task
        finally:
            superseded = self._task is not task
            if not superseded:
                self._task = None

        if superseded:
            logger.info("Discarding result for %s, a newer navigation started", url)
            raise asyncio.CancelledError()

        self.current_url = resolution.final_url
        response = resolution.response
        if response.is_input:
            self.pending_input = InputPrompt(
                url=resolution.final_url,
                prompt=response.meta,
                sensitive=response.is_sensitive_input,
            )
        else:
            self.pending_input = None
        return resolution

    async def submit_input(self, value: str) -> Resolution | None:
        """Answer the pending input prompt. Does nothing without a prompt or with an empty value."""
        if self.pending_input is None or not value:
            return None
        return await self.navigate(with_input(self.pending_input.url, value))

    async def cancel(self) -> None:
        task = self._task
        if task is None or task.done():
            return

        logger.info("Cancelling in-flight navigation")
        task.cancel()
        await asyncio.wait([task])
