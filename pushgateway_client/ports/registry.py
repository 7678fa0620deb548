"""Registry port definition (interface)."""

from typing import Protocol

__all__ = ["RegistryPort"]


class RegistryPort(Protocol):
    """Source of the metrics snapshot pushed to the gateway.

    The payload is opaque to the client: it is sent as-is in the body
    of push requests.
    """

    content_type: str

    async def metrics(self) -> str:
        """Serialize the current state of the registry.

        Returns:
            Exposition text matching ``content_type``.
        """
        ...
