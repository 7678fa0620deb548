"""HTTP transport adapter backed by aiohttp."""

import logging
from types import TracebackType

import aiohttp

from pushgateway_client.ports.gateway import GatewayRequestDto, GatewayResponse

__all__ = ["HttpClient"]

logger = logging.getLogger(__name__)


class HttpClient:
    """Perform gateway requests with an aiohttp session.

    Features:
    - Context manager keeping one session open across calls.
    - One-shot session per request when used outside the context.
    - Transport errors (aiohttp.ClientError) propagate unchanged.
    """

    def __init__(self) -> None:
        """Initialize HTTP client without an open session."""
        self.session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "HttpClient":
        """Enter async context manager (start session).

        Returns:
            Self for use in async with statement.
        """
        self.session = aiohttp.ClientSession()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Exit async context manager (close session).

        Args:
            exc_type: Exception type if raised in context.
            exc: Exception instance if raised in context.
            tb: Traceback if raised in context.
        """
        if self.session:
            await self.session.close()
            self.session = None

    async def request(self, req: GatewayRequestDto) -> GatewayResponse:
        """Send one HTTP request.

        The registry snapshot, when present, is sent as the request body
        and takes the place of any ``data``/``json`` option.

        Args:
            req: Request with method, target URL, options and body.

        Returns:
            Raw response and its body content.

        Raises:
            aiohttp.ClientError: Connection, DNS or TLS failure.
            asyncio.TimeoutError: The ``timeout`` option expired.
        """
        if self.session is None:
            async with aiohttp.ClientSession() as session:
                return await self._send(session, req)
        return await self._send(self.session, req)

    @staticmethod
    async def _send(session: aiohttp.ClientSession, req: GatewayRequestDto) -> GatewayResponse:
        """Issue the request on the given session and read the body."""
        options = dict(req.options)
        if req.body is not None:
            options.pop("json", None)
            options["data"] = req.body

        async with session.request(req.method, req.url, **options) as resp:
            body = await resp.read()

        logger.debug(f"{req.method} returned status {resp.status}")
        return GatewayResponse(resp=resp, body=body)
