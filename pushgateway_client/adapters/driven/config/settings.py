"""Configuration loading from environment variables."""

import logging
import os
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, HttpUrl, TypeAdapter, field_validator

__all__ = ["Settings", "load_settings", "parse_groupings"]

load_dotenv()

logger = logging.getLogger(__name__)
_http_url_adapter = TypeAdapter(HttpUrl)

PushMethod = Literal["push", "push_add", "delete"]


class Settings(BaseModel):
    """Runtime configuration for a one-shot push job.

    Attributes:
        gateway_url: Push gateway base URL (may embed basic-auth credentials).
        job_name: Job label of the pushed group.
        groupings: Extra grouping labels, in declaration order.
        method: Gateway operation to run.
        timeout_sec: Optional total request timeout in seconds.
        override_path: Optional path replacing the computed grouping path.
    """

    gateway_url: str = Field(..., description="Push gateway base URL.")
    job_name: str = Field(..., min_length=1, description="Job label of the pushed group.")
    groupings: dict[str, str] = Field(
        default_factory=dict,
        description="Grouping labels appended to the job in the request path.",
    )
    method: PushMethod = Field(default="push_add", description="Gateway operation to run.")
    timeout_sec: float | None = Field(
        default=None, gt=0, description="Total request timeout in seconds."
    )
    override_path: str | None = Field(
        default=None,
        description="Path used verbatim instead of the computed grouping path.",
    )

    @field_validator("gateway_url")
    @classmethod
    def validate_gateway_url(cls, v: str) -> str:
        """Validate that the gateway is a valid HTTP(S) URL.

        Args:
            v: Gateway URL to validate.

        Returns:
            The URL, unchanged.

        Raises:
            ValueError: If URL is invalid or not http(s).
        """
        try:
            url = _http_url_adapter.validate_python(v)
            if url.scheme not in ("http", "https"):
                raise ValueError("Only http:// and https:// gateways allowed")
        except Exception as e:
            raise ValueError(f"Invalid gateway URL: {e}") from e
        return v


def parse_groupings(raw: str | None) -> dict[str, str]:
    """Parse ``key=value,key2=value2`` into an ordered mapping.

    Args:
        raw: Comma-separated pairs; empty or None yields no groupings.

    Returns:
        Groupings in declaration order.

    Raises:
        ValueError: If a pair has no ``=`` or an empty key.
    """
    groupings: dict[str, str] = {}
    if not raw:
        return groupings
    for pair in raw.split(","):
        if not pair.strip():
            continue
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Invalid grouping {pair!r}, expected key=value")
        groupings[key] = value.strip()
    return groupings


def load_settings() -> Settings:
    """Load and validate settings from the environment.

    Required environment variables:
    - PUSHGATEWAY_URL: Gateway base URL.
    - PUSHGATEWAY_JOB: Job name.

    Optional:
    - PUSHGATEWAY_GROUPINGS: ``key=value`` pairs separated by commas.
    - PUSHGATEWAY_METHOD: push, push_add (default) or delete.
    - PUSHGATEWAY_TIMEOUT_SECONDS: Positive number of seconds.
    - PUSHGATEWAY_OVERRIDE_PATH: Path replacing the computed one.

    Returns:
        Validated Settings object.

    Raises:
        RuntimeError: If required env vars are missing or malformed.
        ValueError: If configuration is invalid.
    """
    try:
        gateway_url = os.environ["PUSHGATEWAY_URL"]
        job_name = os.environ["PUSHGATEWAY_JOB"]
    except KeyError as e:
        raise RuntimeError(f"Missing required environment variable: {e.args[0]}") from e

    timeout_raw = os.getenv("PUSHGATEWAY_TIMEOUT_SECONDS")
    try:
        timeout_sec = float(timeout_raw) if timeout_raw else None
    except ValueError as e:
        raise RuntimeError(
            f"PUSHGATEWAY_TIMEOUT_SECONDS must be a number (got: {timeout_raw})"
        ) from e

    settings = Settings(
        gateway_url=gateway_url,
        job_name=job_name,
        groupings=parse_groupings(os.getenv("PUSHGATEWAY_GROUPINGS")),
        method=os.getenv("PUSHGATEWAY_METHOD", "push_add"),
        timeout_sec=timeout_sec,
        override_path=os.getenv("PUSHGATEWAY_OVERRIDE_PATH") or None,
    )

    logger.info(
        f"Push job configured: method={settings.method}, "
        f"job={settings.job_name}, "
        f"groupings={settings.groupings or '<none>'}, "
        f"timeout={settings.timeout_sec or '<transport default>'}"
    )

    return settings
