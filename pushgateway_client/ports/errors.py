"""Error taxonomy for gateway calls."""

import asyncio

import aiohttp

__all__ = ["ValidationError", "SerializationError", "TransportError"]

# Transport failures surface unchanged: aiohttp errors, or a timeout raised by ClientTimeout
TransportError = (aiohttp.ClientError, asyncio.TimeoutError)


class ValidationError(ValueError):
    """Per-call input is missing or empty; raised before any I/O."""


class SerializationError(RuntimeError):
    """The registry failed to produce its snapshot."""
