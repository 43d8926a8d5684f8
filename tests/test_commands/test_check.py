from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Generator, List
from unittest.mock import patch

import pytest
from click.testing import CliRunner, Result

from bumpwise.__version__ import __version__
from bumpwise.cli import cli, main
from bumpwise.exceptions import ConfigError
from bumpwise.utils.console import reconfigure_console


@pytest.fixture(autouse=True)
def reset_cli_state(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Undo the global logging/console/env changes the CLI makes."""
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("BUMPWISE_CONFIG", raising=False)
    yield
    logging.getLogger("bumpwise").handlers.clear()
    reconfigure_console()


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def run_check(
    runner: CliRunner,
    manifest: Path,
    registry: Path,
    *args: str,
) -> Result:
    argv: List[str] = ["check", str(manifest), "--registry", str(registry), *args]
    return runner.invoke(cli, argv)


@pytest.mark.integration
class TestCheckCommand:
    """Tests for the check command."""

    def test_json_output_minor(
        self, runner: CliRunner, isolated_cwd: Path, manifest_file: Path, registry_file: Path
    ) -> None:
        """Test JSON output lists accepted upgrades and exit code is 1."""
        result = run_check(
            runner, manifest_file, registry_file, "--target", "minor", "--format", "json"
        )

        assert result.exit_code == 1
        assert json.loads(result.stdout) == {
            "chalk": "^2.4.2",
            "mocha": "^8.4.0",
            "eslint-plugin-jsdoc": "~36.1.1",
        }

    def test_reject_and_patch(
        self, runner: CliRunner, isolated_cwd: Path, manifest_file: Path, registry_file: Path
    ) -> None:
        """Test --reject drops matching packages before targeting."""
        result = run_check(
            runner,
            manifest_file,
            registry_file,
            "--target",
            "patch",
            "--reject",
            "eslint-*",
            "--format",
            "json",
        )

        assert json.loads(result.stdout) == {"chalk": "^2.3.2"}

    def test_filter_keeps_only_matching(
        self, runner: CliRunner, isolated_cwd: Path, manifest_file: Path, registry_file: Path
    ) -> None:
        """Test --filter keeps only matching packages."""
        result = run_check(
            runner, manifest_file, registry_file, "--filter", "mocha", "--format", "json"
        )

        assert json.loads(result.stdout) == {"mocha": "^9.1.3"}

    def test_nothing_to_upgrade_exits_zero(
        self, runner: CliRunner, isolated_cwd: Path, registry_file: Path
    ) -> None:
        """Test exit code 0 and a success message when nothing can be upgraded."""
        manifest = isolated_cwd / "package.json"
        manifest.write_text(json.dumps({"dependencies": {"chalk": "3.0.0"}}), encoding="utf-8")

        result = run_check(runner, manifest, registry_file, "--target", "minor")

        assert result.exit_code == 0
        assert "All dependencies match the target" in result.output

    def test_simple_format(
        self, runner: CliRunner, isolated_cwd: Path, manifest_file: Path, registry_file: Path
    ) -> None:
        """Test the simple format prints one line per dependency."""
        result = run_check(
            runner, manifest_file, registry_file, "-t", "minor", "--format", "simple"
        )

        assert "chalk: ^2.3.0 -> ^2.4.2" in result.output
        assert "3 package(s) can be upgraded" in result.output

    def test_table_format(
        self, runner: CliRunner, isolated_cwd: Path, manifest_file: Path, registry_file: Path
    ) -> None:
        """Test the default table format renders a titled table."""
        result = run_check(runner, manifest_file, registry_file, "--target", "@next")

        assert "Dependency Upgrades" in result.output
        assert "@next" in result.output

    def test_outdated_only_hides_unchanged(
        self, runner: CliRunner, isolated_cwd: Path, registry_file: Path
    ) -> None:
        """Test --outdated-only omits dependencies without an upgrade."""
        manifest = isolated_cwd / "package.json"
        manifest.write_text(
            json.dumps({"dependencies": {"chalk": "3.0.0", "jsonlines": "0.1.0"}}),
            encoding="utf-8",
        )

        result = run_check(
            runner, manifest, registry_file, "--format", "simple", "--outdated-only"
        )

        assert "jsonlines: 0.1.0 -> 0.1.1" in result.output
        assert "chalk" not in result.output

    def test_invalid_target_reports_error(
        self, runner: CliRunner, isolated_cwd: Path, manifest_file: Path, registry_file: Path
    ) -> None:
        """Test an unknown target is reported with exit code 1."""
        result = run_check(runner, manifest_file, registry_file, "--target", "major")

        assert result.exit_code == 1
        assert "Unknown target" in result.output

    def test_registry_is_required(
        self, runner: CliRunner, isolated_cwd: Path, manifest_file: Path
    ) -> None:
        """Test omitting --registry is a usage error."""
        result = runner.invoke(cli, ["check", str(manifest_file)])

        assert result.exit_code == 2

    def test_config_file_supplies_target(
        self, runner: CliRunner, isolated_cwd: Path, manifest_file: Path, registry_file: Path
    ) -> None:
        """Test the target is read from bumpwise.toml when no flag is given."""
        (isolated_cwd / "bumpwise.toml").write_text(
            "[bumpwise]\ntarget = 'patch'\nreject = 'eslint-*'\n", encoding="utf-8"
        )

        result = run_check(runner, manifest_file, registry_file, "--format", "json")

        assert json.loads(result.stdout) == {"chalk": "^2.3.2"}

    def test_cli_flag_overrides_config(
        self, runner: CliRunner, isolated_cwd: Path, manifest_file: Path, registry_file: Path
    ) -> None:
        """Test CLI flags take precedence over the configuration file."""
        (isolated_cwd / "bumpwise.toml").write_text(
            "[bumpwise]\ntarget = 'patch'\n", encoding="utf-8"
        )

        result = run_check(
            runner,
            manifest_file,
            registry_file,
            "--target",
            "minor",
            "--filter",
            "chalk",
            "--format",
            "json",
        )

        assert json.loads(result.stdout) == {"chalk": "^2.4.2"}

    def test_invalid_config_file(
        self, runner: CliRunner, isolated_cwd: Path, manifest_file: Path, registry_file: Path
    ) -> None:
        """Test a broken configuration file aborts with exit code 1."""
        (isolated_cwd / "bumpwise.toml").write_text("[bumpwise\n", encoding="utf-8")

        result = run_check(runner, manifest_file, registry_file)

        assert result.exit_code == 1
        assert "Invalid TOML" in result.output


@pytest.mark.integration
class TestCliGroup:
    """Tests for the top-level group and main()."""

    def test_version_option(self, runner: CliRunner) -> None:
        """Test --version prints the package version."""
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert f"bumpwise {__version__}" in result.output

    def test_help_lists_check(self, runner: CliRunner) -> None:
        """Test -h shows the check command."""
        result = runner.invoke(cli, ["-h"])

        assert result.exit_code == 0
        assert "check" in result.output

    def test_main_returns_zero_for_version(self) -> None:
        """Test main() returns 0 when the command completes."""
        with patch("sys.argv", ["bumpwise", "--version"]):
            assert main() == 0

    def test_main_returns_command_exit_code(
        self, isolated_cwd: Path, manifest_file: Path, registry_file: Path
    ) -> None:
        """Test main() returns the exit code a command requested."""
        argv = ["bumpwise", "check", str(manifest_file), "-r", str(registry_file)]

        with patch("sys.argv", argv):
            assert main() == 1

    def test_main_usage_error(self) -> None:
        """Test main() returns 2 for usage errors."""
        with patch("sys.argv", ["bumpwise", "no-such-command"]):
            assert main() == 2

    def test_main_keyboard_interrupt(self) -> None:
        """Test main() returns 130 when interrupted."""
        with patch("bumpwise.cli.cli", side_effect=KeyboardInterrupt):
            assert main() == 130

    def test_main_bumpwise_error(self) -> None:
        """Test main() returns 1 for application errors."""
        with patch("bumpwise.cli.cli", side_effect=ConfigError("bad")):
            assert main() == 1

    def test_main_unexpected_error(self) -> None:
        """Test main() returns 1 for unexpected exceptions."""
        with patch("bumpwise.cli.cli", side_effect=RuntimeError("boom")):
            assert main() == 1
