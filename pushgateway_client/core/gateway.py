"""Push-gateway client: push, push-add and delete of metric groups."""

import logging
from collections.abc import Awaitable, Mapping
from types import TracebackType
from typing import Any

from pushgateway_client.adapters.driven.http.client import HttpClient
from pushgateway_client.adapters.driven.registry.prometheus import default_registry
from pushgateway_client.core.grouping import build_target_url, redact_url
from pushgateway_client.ports.errors import ValidationError
from pushgateway_client.ports.gateway import (
    GatewayRequestDto,
    GatewayResponse,
    HttpTransportPort,
    PushParams,
)
from pushgateway_client.ports.registry import RegistryPort

__all__ = ["GatewayClient"]

logger = logging.getLogger(__name__)

# Body-carrying transport options never sent with a DELETE
BODY_OPTIONS = ("data", "json")


class GatewayClient:
    """Client for a metrics push gateway.

    Every call targets ``{base path}/metrics/job/{job}[/{key}/{value}]*``
    on the configured gateway:

    - ``push_add`` (POST) merges the registry snapshot into the group.
    - ``push`` (PUT) replaces the whole group with the snapshot.
    - ``delete`` (DELETE) removes the group.

    Push requests carry the registry's content type unless the caller's
    headers already set ``Content-Type``. Gateway responses are returned
    as-is; 4xx/5xx are not raised.
    """

    def __init__(
        self,
        gateway_url: str,
        options: Mapping[str, Any] | None = None,
        registry: RegistryPort | None = None,
        *,
        override_path: str | None = None,
        transport: HttpTransportPort | None = None,
    ) -> None:
        """Initialize gateway client.

        No validation or network work happens here; a malformed URL only
        fails when a call uses it.

        Args:
            gateway_url: Gateway base URL, may embed ``user:password@``.
            options: Transport options (headers, timeout, ssl, ...), copied.
            registry: Metrics source; defaults to the process-wide registry.
            override_path: Path used verbatim instead of the computed one.
            transport: HTTP transport; defaults to an aiohttp client.
        """
        self.gateway_url = gateway_url
        self.request_options: dict[str, Any] = dict(options or {})
        self.registry = registry if registry is not None else default_registry()
        self.override_path = override_path
        self.transport = transport if transport is not None else HttpClient()

    async def __aenter__(self) -> "GatewayClient":
        """Enter async context manager (open transport session if supported).

        Returns:
            Self for use in async with statement.
        """
        enter = getattr(self.transport, "__aenter__", None)
        if enter is not None:
            await enter()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Exit async context manager (close transport session if supported)."""
        exit_ = getattr(self.transport, "__aexit__", None)
        if exit_ is not None:
            await exit_(exc_type, exc, tb)

    def push_add(self, params: PushParams | None) -> Awaitable[GatewayResponse]:
        """Merge the registry snapshot into the group (POST).

        Same-named series in the group are replaced, others are kept.

        Args:
            params: Job name and groupings.

        Returns:
            Awaitable resolving to the gateway response.

        Raises:
            ValidationError: If params or job name is missing.
        """
        _validate(params)
        return self._use_gateway("POST", params)

    def push(self, params: PushParams | None) -> Awaitable[GatewayResponse]:
        """Replace the whole group with the registry snapshot (PUT).

        Args:
            params: Job name and groupings.

        Returns:
            Awaitable resolving to the gateway response.

        Raises:
            ValidationError: If params or job name is missing.
        """
        _validate(params)
        return self._use_gateway("PUT", params)

    def delete(self, params: PushParams | None) -> Awaitable[GatewayResponse]:
        """Remove the group from the gateway (DELETE).

        Args:
            params: Job name and groupings.

        Returns:
            Awaitable resolving to the gateway response.

        Raises:
            ValidationError: If params or job name is missing.
        """
        _validate(params)
        return self._use_gateway("DELETE", params)

    async def _use_gateway(self, method: str, params: PushParams) -> GatewayResponse:
        """Build and send one request for the given verb."""
        target = build_target_url(
            self.gateway_url,
            params.job_name,
            params.groupings,
            self.override_path,
        )
        options = {k: v for k, v in self.request_options.items() if k != "method"}

        body: str | None = None
        if method == "DELETE":
            for key in BODY_OPTIONS:
                options.pop(key, None)
            headers = options.get("headers")
            if headers:
                options["headers"] = {
                    k: v for k, v in headers.items() if k.lower() != "content-encoding"
                }
        else:
            body = await self.registry.metrics()
            headers = dict(options.get("headers") or {})
            if not any(k.lower() == "content-type" for k in headers):
                headers["Content-Type"] = self.registry.content_type
            options["headers"] = headers

        logger.debug(f"{method} {redact_url(target)}")
        return await self.transport.request(
            GatewayRequestDto(method=method, url=target, options=options, body=body)
        )


def _validate(params: PushParams | None) -> None:
    """Reject calls without a job name."""
    if params is None or not params.job_name:
        raise ValidationError("Missing job_name parameter")
