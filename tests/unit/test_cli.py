"""Unit tests for the command line entry point."""

import pytest
import yaml

from fire_alert.cli import main as cli_main
from fire_alert.cli.main import (
    EXIT_OK,
    EXIT_USAGE,
    configure_logging,
    create_parser,
    main,
    resolve_configuration,
    run_headless
)
from fire_alert.lib.config import ConfigurationError
from fire_alert.lib.snapshot_source import SimulatedSnapshotSource
from fire_alert.models import AppConfiguration


class TestParser:
    """Argument parsing."""

    def test_defaults(self):
        args = create_parser().parse_args([])

        assert args.config is None
        assert args.demo is False
        assert args.no_display is False

    def test_all_options(self):
        args = create_parser().parse_args([
            "--config", "config.yaml",
            "--database-url", "https://demo.firebaseio.com",
            "--path", "lab",
            "--debug", "--demo", "--no-display",
            "--log-file", "out.log",
        ])

        assert args.database_url == "https://demo.firebaseio.com"
        assert args.path == "lab"
        assert args.debug and args.demo and args.no_display
        assert args.log_file == "out.log"


class TestResolveConfiguration:
    """Command line overrides on top of file and environment settings."""

    def test_database_url_override(self, clean_env):
        args = create_parser().parse_args(["--database-url", "https://demo.firebaseio.com/", "--path", "lab"])

        configuration = resolve_configuration(args)

        assert configuration.source.stream_url == "https://demo.firebaseio.com/lab.json"

    def test_override_beats_config_file(self, tmp_path, clean_env):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.safe_dump({
            "source": {"database_url": "https://file.firebaseio.com", "path": "file"}
        }), encoding="utf-8")
        args = create_parser().parse_args(["--config", str(config_file), "--path", "cli"])

        configuration = resolve_configuration(args)

        assert configuration.source.database_url == "https://file.firebaseio.com"
        assert configuration.source.path == "cli"

    def test_invalid_override(self, clean_env):
        args = create_parser().parse_args(["--database-url", "ftp://demo"])

        with pytest.raises(ConfigurationError):
            resolve_configuration(args)

    def test_missing_config_file(self, tmp_path, clean_env):
        args = create_parser().parse_args(["--config", str(tmp_path / "missing.yaml")])

        with pytest.raises(ConfigurationError):
            resolve_configuration(args)


class TestMain:
    """Exit codes of the entry point."""

    def test_export_config(self, tmp_path, clean_env):
        """--export-config writes a loadable file and exits cleanly."""
        output = tmp_path / "exported.yaml"

        assert main(["--export-config", str(output)]) == EXIT_OK
        assert yaml.safe_load(output.read_text(encoding="utf-8")) == AppConfiguration().export_dict()

    def test_missing_database_url(self, clean_env):
        """Live mode without a URL is a usage error."""
        assert main(["--no-display"]) == EXIT_USAGE

    def test_configuration_error(self, tmp_path, clean_env):
        assert main(["--config", str(tmp_path / "missing.yaml"), "--no-display"]) == EXIT_USAGE

    def test_log_file_receives_output(self, tmp_path, clean_env):
        log_file = tmp_path / "fire-alert.log"

        main(["--no-display", "--log-file", str(log_file)])

        assert "No database URL configured" in log_file.read_text(encoding="utf-8")
        configure_logging()


class TestConfigureLogging:
    """Log destination handling."""

    def test_reconfiguring_closes_previous_log_file(self, tmp_path):
        """Only the most recent log file stays open."""
        configure_logging(log_file=str(tmp_path / "first.log"))
        first = cli_main._log_stream

        configure_logging(debug=True, log_file=str(tmp_path / "second.log"))
        second = cli_main._log_stream

        assert first.closed
        assert not second.closed

        configure_logging()

        assert second.closed
        assert cli_main._log_stream is None

    def test_stderr_is_never_closed(self):
        configure_logging()
        configure_logging()

        assert cli_main._log_stream is None


class TestRunHeadless:
    """Headless monitoring loop."""

    @pytest.mark.asyncio
    async def test_runs_until_source_ends(self):
        source = SimulatedSnapshotSource(
            datasets=[
                {"FireSensor": 1, "SmokeSensor": 100, "Temperature": 20},
                {"FireSensor": 0, "SmokeSensor": 1500, "Temperature": 60},
            ],
            interval_seconds=0
        )

        assert await run_headless(source, AppConfiguration()) == EXIT_OK
        assert source._closed is True
