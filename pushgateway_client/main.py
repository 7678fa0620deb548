"""One-shot push job entrypoint."""

import asyncio
import logging
from typing import Any

from aiohttp import ClientTimeout

from pushgateway_client.adapters.driven.config.settings import Settings, load_settings
from pushgateway_client.adapters.driven.logging.logging_config import configure_logs
from pushgateway_client.core.gateway import GatewayClient
from pushgateway_client.ports.errors import SerializationError, TransportError
from pushgateway_client.ports.gateway import PushParams

__all__ = ["main", "run_push"]

logger = logging.getLogger(__name__)

FIRST_FAILING_HTTP_CODE = 300


async def run_push(settings: Settings) -> int:
    """Push the default registry once with the configured operation.

    Args:
        settings: Validated push job settings.

    Returns:
        HTTP status returned by the gateway.
    """
    options: dict[str, Any] = {}
    if settings.timeout_sec is not None:
        options["timeout"] = ClientTimeout(total=settings.timeout_sec)

    params = PushParams(job_name=settings.job_name, groupings=settings.groupings)

    async with GatewayClient(
        settings.gateway_url, options, override_path=settings.override_path
    ) as client:
        operation = getattr(client, settings.method)
        result = await operation(params)

    return result.resp.status


async def main() -> int:
    """Run the push job.

    Startup sequence:
    1. Configure logging.
    2. Load and validate configuration.
    3. Push (or delete) the group on the gateway.

    Returns:
        0 when the gateway answered 2xx, 1 otherwise.
    """
    configure_logs()
    logger.info("Starting push job...")

    try:
        settings = load_settings()
    except (RuntimeError, ValueError) as exc:
        logger.error(
            "Configuration error: %s\n"
            "Hint: check PUSHGATEWAY_URL, PUSHGATEWAY_JOB, PUSHGATEWAY_GROUPINGS "
            "and PUSHGATEWAY_METHOD.",
            exc,
        )
        return 1

    try:
        status = await run_push(settings)
    except TransportError as e:
        logger.error(f"Push to gateway failed: {e!r}", exc_info=True)
        return 1
    except SerializationError as e:
        logger.error(f"Registry snapshot failed: {e}", exc_info=True)
        return 1

    if not 200 <= status < FIRST_FAILING_HTTP_CODE:
        logger.error(f"Gateway rejected {settings.method} with status {status}")
        return 1

    logger.info(f"Gateway accepted {settings.method} with status {status}")
    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Push job interrupted by user (Ctrl+C).")
