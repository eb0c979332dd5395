"""Integration tests for the `variant-map admin` and `variant-map db` CLI commands."""

from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from variant_map.cli.app import app
from variant_map.core.config import Settings
from variant_map.services.admin_service import verify_credential

runner = CliRunner()

JWT_SECRET = "cli-test-secret-key-at-least-32-characters"


@pytest.fixture(autouse=True)
def cli_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    monkeypatch.setenv("ADMIN_SECRET", "open-sesame")
    monkeypatch.setenv("JWT_SECRET_KEY", JWT_SECRET)
    monkeypatch.setenv("LOG_LEVEL", "WARNING")


class TestIssueToken:
    """Tests for `admin issue-token`."""

    def test_prints_valid_token(self) -> None:
        result = runner.invoke(app, ["admin", "issue-token", "--secret", "open-sesame"])

        assert result.exit_code == 0, result.output
        token = result.stdout.strip().splitlines()[-1]
        payload = verify_credential(token, Settings(_env_file=None))  # type: ignore[call-arg]
        assert payload["type"] == "admin"

    def test_prompts_for_secret(self) -> None:
        result = runner.invoke(app, ["admin", "issue-token"], input="open-sesame\n")
        assert result.exit_code == 0, result.output

    def test_wrong_secret_exits_nonzero(self) -> None:
        result = runner.invoke(app, ["admin", "issue-token", "--secret", "nope"])
        assert result.exit_code == 1
        assert "Invalid admin secret" in result.output


class TestVerifyToken:
    """Tests for `admin verify-token`."""

    def test_valid_token(self) -> None:
        issued = runner.invoke(app, ["admin", "issue-token", "--secret", "open-sesame"])
        token = issued.stdout.strip().splitlines()[-1]

        result = runner.invoke(app, ["admin", "verify-token", token])

        assert result.exit_code == 0
        assert "Valid until" in result.output

    def test_garbage_token(self) -> None:
        result = runner.invoke(app, ["admin", "verify-token", "garbage"])
        assert result.exit_code == 1
        assert "Invalid admin token" in result.output


class TestDbCommands:
    """Tests for `db` commands delegating to Alembic."""

    @pytest.fixture
    def ini(self, tmp_path: Path) -> Path:
        path = tmp_path / "alembic.ini"
        path.write_text("[alembic]\nscript_location = alembic\n")
        return path

    def test_upgrade_defaults_to_head(self, ini: Path) -> None:
        with patch("alembic.command.upgrade") as mock_upgrade:
            result = runner.invoke(app, ["db", "upgrade", "--config", str(ini)])
        assert result.exit_code == 0, result.output
        assert mock_upgrade.call_args.args[1] == "head"
        assert mock_upgrade.call_args.args[0].config_file_name == str(ini)

    def test_downgrade_defaults_to_previous(self, ini: Path) -> None:
        with patch("alembic.command.downgrade") as mock_downgrade:
            result = runner.invoke(app, ["db", "downgrade", "-c", str(ini)])
        assert result.exit_code == 0, result.output
        assert mock_downgrade.call_args.args[1] == "-1"

    def test_missing_config_exits_nonzero(self, tmp_path: Path) -> None:
        with patch("alembic.command.current") as mock_current:
            result = runner.invoke(app, ["db", "current", "--config", str(tmp_path / "nope.ini")])
        assert result.exit_code == 1
        assert "Alembic config not found" in result.output
        mock_current.assert_not_called()
