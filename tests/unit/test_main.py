"""Unit tests for __main__.py entry point."""

from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from mcp_portainer.__main__ import app, print_check_report, run_check, run_stdio
from mcp_portainer.utils.errors import PortainerConnectionError
from mcp_portainer.version import __version__

runner = CliRunner()

REPORT = {
    "endpoints": [{"Id": 1, "Name": "local", "Type": 1}],
    "endpoint_id": 1,
    "docker_info": {"ServerVersion": "24.0.7", "Containers": 4, "Images": 9},
}


@pytest.fixture
def cli_env(monkeypatch: pytest.MonkeyPatch):
    """Environment for CLI runs, with logging setup stubbed out."""
    monkeypatch.setenv("PORTAINER_URL", "http://portainer.test:9000")
    monkeypatch.setenv("PORTAINER_TOKEN", "ptr_test_token")
    monkeypatch.delenv("MCP_PORTAINER_LOG_PATH", raising=False)
    with patch("mcp_portainer.__main__.setup_logger") as mock_setup:
        yield mock_setup


class TestCli:
    """Test the typer application."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"mcp-portainer {__version__}" in result.output

    def test_check_success(self, cli_env) -> None:
        with patch("mcp_portainer.__main__.run_check", AsyncMock(return_value=REPORT)):
            result = runner.invoke(app, ["--check"])

        assert result.exit_code == 0
        assert "Testing Portainer connection at http://portainer.test:9000" in result.output
        assert "Token: ✓ Set" in result.output
        assert "✅ Connected successfully!" in result.output
        assert "Docker version: 24.0.7" in result.output

    def test_check_failure(self, cli_env) -> None:
        failing = AsyncMock(side_effect=PortainerConnectionError("Portainer request failed: boom"))
        with patch("mcp_portainer.__main__.run_check", failing):
            result = runner.invoke(app, ["--check"])

        assert result.exit_code == 1
        assert "Connection test failed" in result.output

    def test_serves_stdio_by_default(self, cli_env) -> None:
        with patch("mcp_portainer.__main__.run_stdio", AsyncMock()) as mock_run:
            result = runner.invoke(app, [])

        assert result.exit_code == 0
        mock_run.assert_awaited_once()

    def test_log_file_from_environment(self, cli_env, monkeypatch, tmp_path) -> None:
        log_path = tmp_path / "bridge.log"
        monkeypatch.setenv("MCP_PORTAINER_LOG_PATH", str(log_path))
        with patch("mcp_portainer.__main__.run_stdio", AsyncMock()):
            runner.invoke(app, [])

        assert cli_env.call_args.args[1] == log_path

    def test_log_file_option_wins(self, cli_env, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv("MCP_PORTAINER_LOG_PATH", str(tmp_path / "env.log"))
        with patch("mcp_portainer.__main__.run_stdio", AsyncMock()):
            runner.invoke(app, ["--log-file", str(tmp_path / "cli.log")])

        assert cli_env.call_args.args[1] == tmp_path / "cli.log"


class TestRunners:
    @pytest.mark.asyncio
    async def test_run_check_closes_client(self) -> None:
        server = AsyncMock()
        server.check_connection.return_value = REPORT

        assert await run_check(server) == REPORT
        server.stop.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_run_check_closes_client_on_error(self) -> None:
        server = AsyncMock()
        server.check_connection.side_effect = PortainerConnectionError("down")

        with pytest.raises(PortainerConnectionError):
            await run_check(server)
        server.stop.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_run_stdio_stops_on_error(self, server) -> None:
        server.start = AsyncMock()
        server.stop = AsyncMock()
        with patch("mcp_portainer.__main__.stdio_server", side_effect=RuntimeError("no stdio")):
            with pytest.raises(RuntimeError, match="no stdio"):
                await run_stdio(server)

        server.start.assert_awaited_once()
        server.stop.assert_awaited_once()


def test_check_report_mentions_fallback_endpoint(config, capsys) -> None:
    print_check_report(config, {**REPORT, "endpoint_id": 2})

    out = capsys.readouterr().out
    assert "Docker API on endpoint 2" in out
    assert "PORTAINER_ENDPOINT_ID=1 was not found" in out
