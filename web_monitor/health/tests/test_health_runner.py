"""
Tests for health runner module.
"""

import json
from unittest.mock import MagicMock, patch

import pytest  # type: ignore

from web_monitor.core.entities import Healthy, Unhealthy
from web_monitor.core.exceptions import ConfigurationError
from web_monitor.health import runner

SITES = {
    "up_site": {
        "url": "https://up.example.com",
        "user_agent": None,
        "timeout": 10.0,
        "verify_ssl": True,
    },
    "down_site": {
        "url": "https://down.example.com",
        "user_agent": None,
        "timeout": 10.0,
        "verify_ssl": True,
    },
}


def _probe_for(site_config):
    probe = MagicMock()
    probe.__enter__.return_value = probe
    if site_config["url"].startswith("https://up."):
        probe.check.return_value = Healthy()
    else:
        probe.check.return_value = Unhealthy(
            f"Failed to get {site_config['url']} - 503 Service Unavailable"
        )
    return probe


class TestHealthRunner:
    """Tests for run_health_check and run_health_checks functions."""

    @pytest.fixture
    def mock_config(self):
        """Patch config loading and probe building."""
        with patch(
            "web_monitor.health.runner.config.load_config", return_value=SITES
        ) as load, patch(
            "web_monitor.health.runner.config.build_probe", side_effect=_probe_for
        ) as build:
            yield load, build

    def test_run_health_check_healthy(self, mock_config):
        """Test healthy site returns 0."""
        exit_code = runner.run_health_check("up_site", quiet=True)
        assert exit_code == runner.EXIT_HEALTHY

    def test_run_health_check_unhealthy(self, mock_config):
        """Test unhealthy site returns 3."""
        exit_code = runner.run_health_check("down_site", quiet=True)
        assert exit_code == runner.EXIT_UNHEALTHY

    def test_run_health_check_site_not_found(self, mock_config):
        """Test health check for non-existent site returns 3."""
        _, build = mock_config
        exit_code = runner.run_health_check("nonexistent", quiet=True)
        assert exit_code == 3
        build.assert_not_called()

    def test_run_health_check_passes_config_path(self, mock_config):
        """Test the config path reaches load_config."""
        load, _ = mock_config
        runner.run_health_check("up_site", config_path="custom.json", quiet=True)
        load.assert_called_once_with("custom.json")

    def test_run_health_check_closes_probe(self, mock_config):
        """Test the probe is used as a context manager."""
        _, build = mock_config
        probe = _probe_for(SITES["up_site"])
        build.side_effect = None
        build.return_value = probe
        runner.run_health_check("up_site", quiet=True)
        probe.check.assert_called_once()
        probe.__exit__.assert_called_once()

    def test_run_health_checks_all_sites(self, mock_config):
        """Test empty site list checks every configured site."""
        _, build = mock_config
        exit_code = runner.run_health_checks([], quiet=True)
        assert exit_code == 3
        assert build.call_count == 2

    def test_run_health_checks_all_healthy(self, mock_config):
        """Test only healthy sites yields 0."""
        assert runner.run_health_checks(["up_site", "up_site"], quiet=True) == 0

    @patch("web_monitor.health.runner.config.load_config")
    def test_run_health_checks_config_missing(self, mock_load):
        """Test missing config file returns 3."""
        mock_load.side_effect = FileNotFoundError("no config")
        assert runner.run_health_checks(["up_site"]) == 3

    @patch("web_monitor.health.runner.config.load_config")
    def test_run_health_checks_invalid_config(self, mock_load):
        """Test invalid config file returns 3."""
        mock_load.side_effect = ValueError("Invalid JSON")
        assert runner.run_health_checks(["up_site"]) == 3

    @patch("web_monitor.health.runner.config.load_config")
    def test_run_health_checks_nothing_configured(self, mock_load):
        """Test empty config with no site ids returns 3."""
        mock_load.return_value = {}
        assert runner.run_health_checks([]) == 3

    @patch("web_monitor.health.runner.config.build_probe")
    @patch("web_monitor.health.runner.config.load_config")
    def test_run_health_check_probe_misconfigured(
        self, mock_load, mock_build, capsys
    ):
        """Test a probe configuration error returns 3 and is reported."""
        mock_load.return_value = SITES
        mock_build.side_effect = ConfigurationError("Invalid user agent")
        assert runner.run_health_check("up_site") == 3
        assert "ERROR" in capsys.readouterr().out

    @patch("web_monitor.health.runner.config.build_probe")
    @patch("web_monitor.health.runner.config.load_config")
    def test_run_health_checks_check_raises(self, mock_load, mock_build, capsys):
        """Test an exception escaping check() returns 3 instead of crashing."""
        mock_load.return_value = SITES
        failing = MagicMock()
        failing.__enter__.return_value = failing
        failing.__exit__.return_value = False
        failing.check.side_effect = RuntimeError("boom")
        mock_build.side_effect = lambda site_config: (
            failing
            if site_config["url"] == SITES["down_site"]["url"]
            else _probe_for(site_config)
        )
        assert runner.run_health_checks(["up_site", "down_site"]) == 3
        out = capsys.readouterr().out
        assert "Health Check: up_site - UP" in out
        assert "Health Check: down_site - ERROR" in out

    def test_run_health_checks_malformed_host(self, tmp_path):
        """Test a host label over 63 characters ends as exit code 3."""
        path = tmp_path / "watch.json"
        path.write_text(
            json.dumps({"s": {"url": "http://" + "a" * 64 + ".com", "timeout": 2}}),
            encoding="utf-8",
        )
        assert runner.run_health_checks(["s"], config_path=str(path), quiet=True) == 3


class TestPrintReport:
    """Tests for _print_report function."""

    def test_print_report_up(self, capsys):
        """Test healthy report names site and URL."""
        runner._print_report("site", "https://example.com", Healthy())
        out = capsys.readouterr().out
        assert "Health Check: site - UP" in out
        assert "URL: https://example.com" in out

    def test_print_report_down(self, capsys):
        """Test unhealthy report includes the diagnostic."""
        runner._print_report(
            "site",
            "https://example.com",
            Unhealthy("Failed to get https://example.com - 500"),
        )
        out = capsys.readouterr().out
        assert "Health Check: site - DOWN" in out
        assert "Failed to get https://example.com - 500" in out
