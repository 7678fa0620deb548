"""Console logging for the one-shot push job."""

import logging

__all__ = ["configure_logs"]

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%d/%m/%y %H:%M:%S"


def configure_logs(level: int = logging.INFO) -> None:
    """Send push job logs to the console.

    The job runs once and exits, so everything goes to stderr where the
    scheduler (cron, CI runner, Kubernetes Job) collects it. Gateway
    dispatch lines are logged at DEBUG by the client and shown; aiohttp
    and asyncio chatter is kept to warnings.

    Args:
        level: Level of the root logger.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)

    for name in ("aiohttp", "asyncio"):
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger("pushgateway_client").setLevel(logging.DEBUG)
