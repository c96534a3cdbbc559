"""Tests for the CLI."""

import json
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from prompts_mcp import __version__
from prompts_mcp.cli import main
from prompts_mcp.config import ServerConfig
from prompts_mcp.config.loader import ENV_VARS


@pytest.fixture(autouse=True)
def no_logging_setup() -> Iterator[MagicMock]:
    """Keep the CLI from replacing pytest's log handlers."""
    with patch("prompts_mcp.cli.setup_logging") as mock_setup:
        yield mock_setup


@pytest.fixture
def clean_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run from an empty directory with no config files or env settings."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(
        "prompts_mcp.config.loader.get_home_config_path",
        lambda: tmp_path / "home" / "config.yaml",
    )
    return tmp_path


@pytest.fixture
def templates_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "templates"
    directory.mkdir()
    (directory / "code-review.md").write_text(
        "<!-- description: Review code -->\nReview {{language}}:\n{{code}}",
        encoding="utf-8",
    )
    return directory


@pytest.fixture
def skills_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "skills"
    directory.mkdir()
    (directory / "docx.md").write_text(
        "---\ndescription: Word docs\ntriggers: word, docx\n---\nUse python-docx.",
        encoding="utf-8",
    )
    return directory


def test_cli_help() -> None:
    """Test that --help exits cleanly."""
    runner = CliRunner()
    result = runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "prompts-mcp" in result.output


def test_cli_version() -> None:
    """Test that --version shows the version."""
    runner = CliRunner()
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_command() -> None:
    """Test that running without a command prints a hint."""
    runner = CliRunner()
    result = runner.invoke(main, [])
    assert result.exit_code == 0
    assert "--help" in result.output


# ── templates ─────────────────────────────────────────────────────────


def test_templates_list(templates_dir: Path) -> None:
    """Test listing templates from an explicit directory."""
    runner = CliRunner()
    result = runner.invoke(main, ["templates", "--dir", str(templates_dir), "list"])
    assert result.exit_code == 0
    assert "Available Templates (1):" in result.output
    assert "code-review" in result.output
    assert "Variables: language, code" in result.output


def test_templates_list_empty(tmp_path: Path) -> None:
    """Test that a missing directory lists nothing."""
    runner = CliRunner()
    result = runner.invoke(main, ["templates", "--dir", str(tmp_path / "x"), "list"])
    assert result.exit_code == 0
    assert "No templates found." in result.output


def test_templates_show(templates_dir: Path) -> None:
    """Test showing raw template content."""
    runner = CliRunner()
    result = runner.invoke(
        main, ["templates", "--dir", str(templates_dir), "show", "code-review"]
    )
    assert result.exit_code == 0
    assert "Review {{language}}:" in result.output
    assert "<!--" not in result.output


def test_templates_show_missing(templates_dir: Path) -> None:
    """Test that an unknown name fails and lists what exists."""
    runner = CliRunner()
    result = runner.invoke(
        main, ["templates", "--dir", str(templates_dir), "show", "nope"]
    )
    assert result.exit_code == 1
    assert 'Template "nope" not found' in result.output
    assert "code-review" in result.output


def test_templates_render(templates_dir: Path) -> None:
    """Test rendering with a partial set of values."""
    runner = CliRunner()
    result = runner.invoke(
        main,
        [
            "templates",
            "--dir",
            str(templates_dir),
            "render",
            "code-review",
            "-v",
            "language=Go",
        ],
    )
    assert result.exit_code == 0
    assert "Review Go:" in result.output
    assert "Unresolved: code" in result.output


def test_templates_render_json(templates_dir: Path) -> None:
    """Test that --json prints the render result."""
    runner = CliRunner()
    result = runner.invoke(
        main,
        [
            "templates",
            "--dir",
            str(templates_dir),
            "render",
            "code-review",
            "--var",
            "language=Go",
            "--var",
            "code=x := 1",
            "--json",
        ],
    )
    assert result.exit_code == 0
    assert json.loads(result.stdout) == {
        "name": "code-review",
        "rendered": "Review Go:\nx := 1",
        "unresolved": [],
    }


def test_templates_render_bad_assignment(templates_dir: Path) -> None:
    """Test that a value without '=' is a usage error."""
    runner = CliRunner()
    result = runner.invoke(
        main,
        ["templates", "--dir", str(templates_dir), "render", "code-review", "-v", "x"],
    )
    assert result.exit_code == 2
    assert "key=value" in result.output


# ── skills ────────────────────────────────────────────────────────────


def test_skills_list(skills_dir: Path) -> None:
    """Test listing skills with their triggers."""
    runner = CliRunner()
    result = runner.invoke(main, ["skills", "--dir", str(skills_dir), "list"])
    assert result.exit_code == 0
    assert "Available Skills (1):" in result.output
    assert "Triggers: word, docx" in result.output


def test_skills_show(skills_dir: Path) -> None:
    """Test showing a skill."""
    runner = CliRunner()
    result = runner.invoke(main, ["skills", "--dir", str(skills_dir), "show", "docx"])
    assert result.exit_code == 0
    assert "Word docs" in result.output
    assert "Use python-docx." in result.output


def test_skills_show_missing(tmp_path: Path) -> None:
    """Test that an empty directory reports no skills available."""
    runner = CliRunner()
    result = runner.invoke(main, ["skills", "--dir", str(tmp_path), "show", "docx"])
    assert result.exit_code == 1
    assert "Available skills: none" in result.output


# ── config / serve ────────────────────────────────────────────────────


def test_config_command(clean_env: Path) -> None:
    """Test that config shows the resolved defaults."""
    runner = CliRunner()
    result = runner.invoke(main, ["config"])
    assert result.exit_code == 0
    assert "port:" in result.output
    assert "3000" in result.output
    assert "not found" in result.output


def test_serve_applies_options(clean_env: Path, no_logging_setup: MagicMock) -> None:
    """Test that serve merges CLI options over the environment."""
    with patch("prompts_mcp.cli.PromptsMCPServer") as mock_server:
        runner = CliRunner()
        result = runner.invoke(
            main,
            ["serve", "--port", "8123", "--templates-dir", "prompts"],
            env={"SKILLS_DIR": "/srv/skills", "PORT": "9000"},
        )

    assert result.exit_code == 0
    config = mock_server.call_args.args[0]
    assert isinstance(config, ServerConfig)
    assert config.port == 8123
    assert config.templates_dir == "prompts"
    assert config.skills_dir == "/srv/skills"
    assert config.host == "127.0.0.1"
    mock_server.return_value.serve.assert_called_once()
    no_logging_setup.assert_called_once_with("INFO")


def test_serve_bad_port_env(clean_env: Path) -> None:
    """Test that a non-numeric PORT is reported as a usage error."""
    with patch("prompts_mcp.cli.PromptsMCPServer") as mock_server:
        runner = CliRunner()
        result = runner.invoke(main, ["serve"], env={"PORT": "abc"})

    assert result.exit_code == 2
    assert "PORT" in result.output
    mock_server.assert_not_called()


def test_serve_keyboard_interrupt(clean_env: Path) -> None:
    """Test that Ctrl-C exits cleanly."""
    with patch("prompts_mcp.cli.PromptsMCPServer") as mock_server:
        mock_server.return_value.serve.side_effect = KeyboardInterrupt
        runner = CliRunner()
        result = runner.invoke(main, ["serve"])

    assert result.exit_code == 0


def test_templates_list_escapes_markup_in_names(tmp_path: Path) -> None:
    """Test that bracketed file names are printed literally."""
    (tmp_path / "[red]x.md").write_text("Body", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(main, ["templates", "--dir", str(tmp_path), "list"])
    assert result.exit_code == 0
    assert "[red]x" in result.output


def test_skills_show_escapes_markup_in_names(tmp_path: Path) -> None:
    """Test that a bracketed skill name survives rich markup."""
    (tmp_path / "[bold]s.md").write_text("Body", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(
        main, ["skills", "--dir", str(tmp_path), "show", "[bold]s"]
    )
    assert result.exit_code == 0
    assert "[bold]s" in result.output
