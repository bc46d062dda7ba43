import logging
from typing import NamedTuple

from .client import GeminiClient
from .request import GeminiRequest, resolve_redirect_target
from .response import GeminiResponse
from .session import raise_if_cancelling

logger = logging.getLogger(__name__)


class Resolution(NamedTuple):
    response: GeminiResponse
    final_url: str


class RedirectResolver:
    """
    Follows redirect replies until a non-redirect reply arrives.

    At most `max_redirects` redirects are followed. When the reply at that
    depth is still a redirect it is returned as is, paired with the URL that
    produced it, and the caller decides what "too many redirects" means.
    Hops run strictly one after another.
    """

    def __init__(self, client: GeminiClient, max_redirects: int | None = None):
        self._client = client
        self._max_redirects = client.config.max_redirects if max_redirects is None else max_redirects

    @property
    def max_redirects(self) -> int:
        return self._max_redirects

    async def resolve(self, start_url: str) -> Resolution:
        config = self._client.config
        current = start_url
        depth = 0

        while True:
            raise_if_cancelling()

            request = GeminiRequest.from_url(
                current,
                default_port=config.default_port,
                max_length=config.max_request_length,
            )
            response = await self._client.fetch(request.host, request.port, request.request_line)

            raise_if_cancelling()

            if not response.is_redirect:
                return Resolution(response, current)

            if depth >= self._max_redirects:
                logger.info("Giving up on %s after %d redirects", start_url, depth)
                return Resolution(response, current)

            target = resolve_redirect_target(current, response.meta)
            logger.info("Redirect %d: %s -> %s", depth + 1, current, target)
            current = target
            depth += 1
