"""Grouping-key path construction and target URL resolution."""

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote, urljoin, urlsplit, urlunsplit

__all__ = ["encode_component", "grouping_path", "build_target_url", "redact_url"]

# Characters left as-is by URI component encoding (besides alphanumerics and -_.)
_COMPONENT_SAFE = "!~*'()"


def encode_component(value: Any) -> str:
    """Percent-encode one path segment.

    Everything outside the unreserved set is escaped, including ``/``,
    ``&``, space and non-ASCII characters (as UTF-8 bytes).

    Args:
        value: Job name, label key or label value. Non-strings are
            converted with ``str()``.

    Returns:
        Encoded segment.
    """
    return quote(str(value), safe=_COMPONENT_SAFE)


def grouping_path(job_name: str, groupings: Mapping[str, Any] | None = None) -> str:
    """Build the ``/metrics/job/...`` part of the path.

    Args:
        job_name: Job identifier.
        groupings: Label pairs appended in iteration order.

    Returns:
        Path starting with ``/metrics/job/``.
    """
    path = f"/metrics/job/{encode_component(job_name)}"
    for key, value in (groupings or {}).items():
        path += f"/{encode_component(key)}/{encode_component(value)}"
    return path


def build_target_url(
    gateway_url: str,
    job_name: str,
    groupings: Mapping[str, Any] | None = None,
    override_path: str | None = None,
) -> str:
    """Resolve the request target for a gateway call.

    The base URL's own path is kept as a prefix, so gateways served under
    a sub-path work. A trailing slash on that path is dropped, so
    ``http://h/pg/`` yields ``/pg/metrics/...`` rather than ``/pg//metrics/...``.
    Scheme, userinfo, host and port come from the base.
    A relative base yields a relative target.

    Args:
        gateway_url: Configured gateway base URL.
        job_name: Job identifier.
        groupings: Label pairs for the grouping key.
        override_path: When set, used verbatim instead of the computed path.

    Returns:
        Target URL.
    """
    if override_path:
        path = override_path
    else:
        base_path = urlsplit(gateway_url).path.rstrip("/")
        path = base_path + grouping_path(job_name, groupings)
    return urljoin(gateway_url, path)


def redact_url(url: str) -> str:
    """Mask the password of a URL so it can be logged.

    Args:
        url: URL possibly carrying ``user:password@``.

    Returns:
        URL with the password replaced by ``***``.
    """
    parts = urlsplit(url)
    if parts.password is None:
        return url
    netloc = parts.netloc.rsplit("@", 1)[1]
    return urlunsplit(parts._replace(netloc=f"{parts.username}:***@{netloc}"))
