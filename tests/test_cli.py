"""Tests for the command-line interface - collection is patched out."""

import json
from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from profilecard import __version__
from profilecard.cli import app
from profilecard.exceptions import ProfileNotFoundError
from profilecard.models.stats import StatsRecord

runner = CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.delenv("PROFILECARD_GITHUB_TOKEN", raising=False)
    monkeypatch.delenv("GITHUB_USERNAME", raising=False)
    monkeypatch.delenv("PROFILECARD_HANDLE", raising=False)


@pytest.fixture
def stats() -> StatsRecord:
    return StatsRecord(
        name="The Octocat",
        handle="octocat",
        location="San Francisco",
        bio="Undergraduate Student",
        organization="@github",
        link="https://github.blog",
        repository_count=2,
        followers=1234,
        following=9,
        commit_estimate=1247,
        pull_request_count=89,
        issue_count=156,
        star_total=10,
        streak_days=47,
        estimated_line_count=3210,
    )


class TestVersion:

    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestGenerate:
    """Test the generate command."""

    def test_requires_token(self, tmp_path):
        result = runner.invoke(app, ["generate", "-o", str(tmp_path)])

        assert result.exit_code == 1
        assert "GITHUB_TOKEN" in result.output

    def test_writes_outputs(self, stats, tmp_path):
        with patch("profilecard.cli.collect", new_callable=AsyncMock) as mock_collect:
            mock_collect.return_value = stats
            result = runner.invoke(
                app,
                ["generate", "--token", "t", "-u", "octocat", "-o", str(tmp_path)],
            )

        assert result.exit_code == 0, result.output
        assert (tmp_path / "profile.svg").exists()
        assert (tmp_path / "README.md").exists()
        assert "Repositories: 2" in result.output
        assert "Commits (est.): 1,247" in result.output

        credential, handle, _config = mock_collect.call_args.args
        assert credential == "t"
        assert handle == "octocat"

    def test_token_from_env(self, stats, tmp_path, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "env-token")

        with patch("profilecard.cli.collect", new_callable=AsyncMock) as mock_collect:
            mock_collect.return_value = stats
            result = runner.invoke(app, ["generate", "-o", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert mock_collect.call_args.args[0] == "env-token"
        assert mock_collect.call_args.args[1] == "Dineshs737"

    def test_json_export(self, stats, tmp_path):
        json_path = tmp_path / "stats.json"

        with patch("profilecard.cli.collect", new_callable=AsyncMock) as mock_collect:
            mock_collect.return_value = stats
            result = runner.invoke(
                app,
                ["generate", "--token", "t", "-o", str(tmp_path), "--json", str(json_path)],
            )

        assert result.exit_code == 0, result.output
        assert json.loads(json_path.read_text(encoding="utf-8"))["star_total"] == 10

    def test_quiet_prints_nothing(self, stats, tmp_path):
        with patch("profilecard.cli.collect", new_callable=AsyncMock) as mock_collect:
            mock_collect.return_value = stats
            result = runner.invoke(
                app, ["generate", "--token", "t", "-o", str(tmp_path), "-q"]
            )

        assert result.exit_code == 0
        assert "Stats Summary" not in result.output

    def test_fetch_failure_exits(self, tmp_path):
        with patch("profilecard.cli.collect", new_callable=AsyncMock) as mock_collect:
            mock_collect.side_effect = ProfileNotFoundError("Not found: /users/nobody")
            result = runner.invoke(
                app, ["generate", "--token", "t", "-u", "nobody", "-o", str(tmp_path)]
            )

        assert result.exit_code == 1
        assert "Not found" in result.output
        assert not (tmp_path / "profile.svg").exists()


class TestShow:
    """Test the show command."""

    def test_prints_table(self, stats):
        with patch("profilecard.cli.collect", new_callable=AsyncMock) as mock_collect:
            mock_collect.return_value = stats
            result = runner.invoke(app, ["show", "octocat", "--token", "t"])

        assert result.exit_code == 0, result.output
        assert "@octocat" in result.output
        assert "47 days" in result.output

    def test_requires_token(self):
        result = runner.invoke(app, ["show", "octocat"])
        assert result.exit_code == 1
