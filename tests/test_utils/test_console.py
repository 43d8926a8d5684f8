from __future__ import annotations

import sys
from typing import Generator
from unittest.mock import MagicMock, patch

import pytest
from rich.console import Console
from rich.table import Table

from bumpwise.utils.console import (
    BUMPWISE_THEME,
    _get_console,
    _should_use_color,
    colorize_update_type,
    print_error,
    print_json,
    print_success,
    print_table,
    print_warning,
    reconfigure_console,
)


@pytest.fixture(autouse=True)
def reset_console() -> Generator[None, None, None]:
    """Reset the console singleton before and after each test."""
    reconfigure_console()
    yield
    reconfigure_console()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove environment variables that affect color detection."""
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("CI", raising=False)


@pytest.fixture
def mock_console() -> Generator[MagicMock, None, None]:
    """Replace the shared console with a mock."""
    console = MagicMock(spec=Console)
    with patch("bumpwise.utils.console._get_console", return_value=console):
        yield console


@pytest.mark.unit
class TestThemeConfiguration:
    """Tests for BUMPWISE_THEME configuration."""

    @pytest.mark.parametrize(
        "style_name", ["success", "error", "warning"]
    )
    def test_theme_has_style(self, style_name: str) -> None:
        """Test every style the output helpers use is defined."""
        assert style_name in BUMPWISE_THEME.styles


@pytest.mark.unit
class TestShouldUseColor:
    """Tests for _should_use_color environment detection."""

    def test_no_color_env_disables_color(
        self, clean_env: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test NO_COLOR disables colored output."""
        monkeypatch.setenv("NO_COLOR", "1")

        assert _should_use_color() is False

    def test_ci_env_disables_color(
        self, clean_env: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test CI disables colored output."""
        monkeypatch.setenv("CI", "true")

        assert _should_use_color() is False

    def test_tty_enables_color(self, clean_env: None) -> None:
        """Test a TTY stdout enables color."""
        with patch.object(sys.stdout, "isatty", return_value=True):
            assert _should_use_color() is True

    def test_non_tty_disables_color(self, clean_env: None) -> None:
        """Test a redirected stdout disables color."""
        with patch.object(sys.stdout, "isatty", return_value=False):
            assert _should_use_color() is False


@pytest.mark.unit
class TestConsoleLifecycle:
    """Tests for the shared console singleton."""

    def test_console_is_reused(self) -> None:
        """Test repeated calls return the same console."""
        assert _get_console() is _get_console()

    def test_reconfigure_creates_new_console(self) -> None:
        """Test reconfigure_console drops the cached instance."""
        first = _get_console()

        reconfigure_console()

        assert _get_console() is not first


@pytest.mark.unit
class TestStatusMessages:
    """Tests for print_success, print_error and print_warning."""

    def test_print_success(self, mock_console: MagicMock) -> None:
        """Test success messages use the success style and prefix."""
        print_success("done")

        mock_console.print.assert_called_once_with("[OK] done", style="success")

    def test_print_error(self, mock_console: MagicMock) -> None:
        """Test error messages use the error style and prefix."""
        print_error("failed")

        mock_console.print.assert_called_once_with("[ERROR] failed", style="error")

    def test_print_warning_custom_prefix(self, mock_console: MagicMock) -> None:
        """Test the prefix can be overridden."""
        print_warning("careful", prefix="!")

        mock_console.print.assert_called_once_with("! careful", style="warning")


@pytest.mark.unit
class TestStructuredOutput:
    """Tests for print_table and print_json."""

    def test_print_table_renders_rows(self, mock_console: MagicMock) -> None:
        """Test a Rich table is built with one row per entry."""
        print_table(
            [{"Package": "chalk", "Upgrade": "^2.4.2"}, {"Package": "mocha", "Upgrade": "-"}],
            title="Dependency Upgrades",
            column_styles={"Package": {"style": "bold cyan", "no_wrap": True}},
        )

        table = mock_console.print.call_args[0][0]
        assert isinstance(table, Table)
        assert table.row_count == 2
        assert [c.header for c in table.columns] == ["Package", "Upgrade"]
        assert table.title == "Dependency Upgrades"

    def test_print_table_respects_headers(self, mock_console: MagicMock) -> None:
        """Test explicit headers select and order columns."""
        print_table([{"a": 1, "b": 2}], headers=["b"])

        table = mock_console.print.call_args[0][0]
        assert [c.header for c in table.columns] == ["b"]

    def test_print_table_empty_data(self, mock_console: MagicMock) -> None:
        """Test nothing is printed for empty data."""
        print_table([])

        mock_console.print.assert_not_called()

    def test_print_json(self, mock_console: MagicMock) -> None:
        """Test JSON output is delegated to Rich."""
        print_json({"chalk": "^2.4.2"})

        mock_console.print_json.assert_called_once_with(data={"chalk": "^2.4.2"})


@pytest.mark.unit
class TestColorizeUpdateType:
    """Tests for colorize_update_type."""

    @pytest.mark.parametrize(
        "update_type,color",
        [
            ("major", "red"),
            ("minor", "yellow"),
            ("patch", "green"),
            ("prerelease", "magenta"),
            ("new", "cyan"),
            ("downgrade", "red"),
        ],
    )
    def test_known_types(self, update_type: str, color: str) -> None:
        """Test known update types are wrapped in markup."""
        assert colorize_update_type(update_type) == f"[{color}]{update_type}[/{color}]"

    def test_unknown_type_unchanged(self) -> None:
        """Test unknown types are returned unchanged."""
        assert colorize_update_type("same") == "same"
