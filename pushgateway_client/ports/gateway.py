"""Gateway port definitions (interface and DTOs)."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from aiohttp import ClientResponse

__all__ = ["PushParams", "GatewayRequestDto", "GatewayResponse", "HttpTransportPort"]


@dataclass(frozen=True)
class PushParams:
    """Per-call input identifying the group on the gateway.

    Attributes:
        job_name: Job identifier, first segment of the grouping key.
        groupings: Extra label key/value pairs, applied in iteration order.
    """

    job_name: str
    groupings: Mapping[str, Any] | None = None


@dataclass
class GatewayRequestDto:
    """One HTTP request to be performed against the gateway.

    Attributes:
        method: HTTP verb, forced by the gateway operation.
        url: Fully resolved target URL (or relative path for relative bases).
        options: Keyword options for the transport, built fresh per call.
        body: Serialized registry snapshot; None for bodyless requests.
    """

    method: str
    url: str
    options: dict[str, Any] = field(default_factory=dict)
    body: bytes | str | None = None


@dataclass(frozen=True)
class GatewayResponse:
    """Raw outcome of a gateway call.

    Attributes:
        resp: Transport response object, status left uninterpreted.
        body: Response content, typically empty for the gateway.
    """

    resp: ClientResponse
    body: bytes


class HttpTransportPort(Protocol):
    """Interface for performing a single HTTP request."""

    async def request(self, req: GatewayRequestDto, /) -> GatewayResponse:
        """Send one request and return the raw response.

        Args:
            req: Request to perform.

        Returns:
            Response together with its body.
        """
        ...
