"""Tests for the push job entrypoint."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, Mock, patch

import aiohttp
import pytest

from pushgateway_client.adapters.driven.config.settings import Settings
from pushgateway_client.main import main, run_push
from pushgateway_client.ports.errors import SerializationError
from pushgateway_client.ports.gateway import PushParams

__all__ = []


def make_settings(**overrides) -> Settings:
    """Build valid settings, overriding selected fields."""
    values = {
        "gateway_url": "http://localhost:9091",
        "job_name": "batch",
        "groupings": {"instance": "a"},
    }
    values.update(overrides)
    return Settings(**values)


def make_client_class(status: int = 200) -> MagicMock:
    """Create a GatewayClient class mock whose operations answer ``status``."""
    client = MagicMock()
    client.__aenter__.return_value = client
    result = Mock()
    result.resp.status = status
    for name in ("push", "push_add", "delete"):
        setattr(client, name, AsyncMock(return_value=result))

    client_class = MagicMock(return_value=client)
    return client_class


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["push", "push_add", "delete"])
async def test_run_push_calls_configured_operation(method: str) -> None:
    """run_push should dispatch to the configured gateway operation."""
    client_class = make_client_class(status=202)

    with patch("pushgateway_client.main.GatewayClient", client_class):
        status = await run_push(make_settings(method=method))

    assert status == 202
    client = client_class.return_value
    getattr(client, method).assert_awaited_once_with(
        PushParams(job_name="batch", groupings={"instance": "a"})
    )


@pytest.mark.asyncio
async def test_run_push_passes_timeout_and_override() -> None:
    """Timeout and override path should reach the client."""
    client_class = make_client_class()

    with patch("pushgateway_client.main.GatewayClient", client_class):
        await run_push(make_settings(timeout_sec=3, override_path="/custom"))

    args, kwargs = client_class.call_args
    assert args[0] == "http://localhost:9091"
    assert args[1]["timeout"] == aiohttp.ClientTimeout(total=3)
    assert kwargs == {"override_path": "/custom"}


@pytest.mark.asyncio
async def test_main_returns_zero_on_success() -> None:
    """main should return 0 when the gateway answers 2xx."""
    with (
        patch("pushgateway_client.main.configure_logs"),
        patch("pushgateway_client.main.load_settings", return_value=make_settings()),
        patch("pushgateway_client.main.run_push", new_callable=AsyncMock) as mock_run,
    ):
        mock_run.return_value = 200
        assert await main() == 0


@pytest.mark.asyncio
async def test_main_returns_one_on_rejected_push() -> None:
    """main should return 1 when the gateway answers an error status."""
    with (
        patch("pushgateway_client.main.configure_logs"),
        patch("pushgateway_client.main.load_settings", return_value=make_settings()),
        patch("pushgateway_client.main.run_push", new_callable=AsyncMock) as mock_run,
        patch("pushgateway_client.main.logger") as mock_logger,
    ):
        mock_run.return_value = 400
        assert await main() == 1

    mock_logger.error.assert_called()


@pytest.mark.asyncio
async def test_main_aborts_on_config_error() -> None:
    """main should not push when configuration is invalid."""
    with (
        patch("pushgateway_client.main.configure_logs"),
        patch("pushgateway_client.main.load_settings") as mock_load_settings,
        patch("pushgateway_client.main.run_push", new_callable=AsyncMock) as mock_run,
    ):
        mock_load_settings.side_effect = RuntimeError("Missing required environment variable")
        assert await main() == 1

    mock_run.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        aiohttp.ClientConnectionError("refused"),
        asyncio.TimeoutError(),
        SerializationError("collector failed"),
    ],
)
async def test_main_logs_push_failures(error: Exception) -> None:
    """Transport errors, timeouts and registry failures should give exit code 1."""
    with (
        patch("pushgateway_client.main.configure_logs"),
        patch("pushgateway_client.main.load_settings", return_value=make_settings()),
        patch("pushgateway_client.main.run_push", new_callable=AsyncMock) as mock_run,
        patch("pushgateway_client.main.logger") as mock_logger,
    ):
        mock_run.side_effect = error
        assert await main() == 1

    mock_logger.error.assert_called()
