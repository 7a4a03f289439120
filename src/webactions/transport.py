"""HTTP transport over httpx.

One ``httpx.AsyncClient`` per ``HttpTransport``; every call is a plain GET
returning the decoded JSON body. Timeouts are the client's, not ours.
"""

import logging
from typing import Any, Protocol

import httpx

from webactions.config import WebActionsConfig
from webactions.errors import TransportError

logger = logging.getLogger("webactions.transport")


class Transport(Protocol):
    """Anything that can GET a URL and return its decoded JSON body."""

    async def get_json(self, url: str) -> Any: ...

    async def aclose(self) -> None: ...


class HttpTransport:
    """``Transport`` backed by ``httpx.AsyncClient``.

    Pass ``transport=httpx.MockTransport(handler)`` to serve responses
    in-process (tests, offline tooling).
    """

    __slots__ = ("_client",)

    def __init__(
        self,
        config: WebActionsConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        config = config or WebActionsConfig()
        self._client = httpx.AsyncClient(
            timeout=config.timeout,
            headers=dict(config.headers),
            transport=transport,
        )

    async def get_json(self, url: str) -> Any:
        logger.debug("GET %s", url)
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as exc:
            raise TransportError(url, str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            raise TransportError(url, response.reason_phrase, status=response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            msg = f"invalid JSON body: {exc}"
            raise TransportError(url, msg, status=response.status_code) from exc

    async def aclose(self) -> None:
        await self._client.aclose()
