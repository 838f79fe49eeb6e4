"""Tests for application configuration."""

from __future__ import annotations

import pytest

from docfetch.config import AppConfig


class TestAppConfig:
    """Test AppConfig dataclass."""

    def test_default_config(self) -> None:
        """Should create config with default values."""
        config = AppConfig()

        assert config.branch == "main"
        assert config.content_extension == ".mdx"
        assert config.api_base_url == "https://api.github.com"
        assert config.raw_base_url == "https://raw.githubusercontent.com"
        assert config.token is None
        assert config.timeout_seconds == 30.0

    def test_token_hidden_from_repr(self) -> None:
        """Should not leak the credential in repr."""
        config = AppConfig(token="hunter2")

        assert "hunter2" not in repr(config)

    def test_tree_url(self, config: AppConfig) -> None:
        """Should point at the recursive git tree of the branch."""
        assert config.tree_url() == "https://api.example.test/repos/octo/blog/git/trees/main"

    def test_tree_url_quotes_branch(self) -> None:
        """Should escape slashes in branch names."""
        config = AppConfig(owner="o", repo="r", branch="release/v1")

        assert config.tree_url().endswith("/git/trees/release%2Fv1")

    def test_raw_url(self, config: AppConfig) -> None:
        """Should build raw content URLs under owner/repo/branch."""
        assert (
            config.raw_url("posts/hello world.mdx")
            == "https://raw.example.test/octo/blog/main/posts/hello%20world.mdx"
        )

    def test_raw_url_strips_leading_slash(self, config: AppConfig) -> None:
        assert config.raw_url("/a.mdx") == "https://raw.example.test/octo/blog/main/a.mdx"

    def test_auth_headers_with_token(self, config: AppConfig) -> None:
        assert config.auth_headers() == {"Authorization": "Bearer secret-token"}

    def test_auth_headers_without_token(self) -> None:
        assert AppConfig().auth_headers() == {}


class TestFromEnv:
    """Test environment loading."""

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should read repository identity and secret from the environment."""
        monkeypatch.setenv("DOCFETCH_OWNER", "someone")
        monkeypatch.setenv("DOCFETCH_REPO", "notes")
        monkeypatch.setenv("DOCFETCH_BRANCH", "drafts")
        monkeypatch.setenv("DOCFETCH_EXTENSION", ".md")
        monkeypatch.setenv("DOCFETCH_TIMEOUT", "12.5")
        monkeypatch.setenv("GITHUB_TOKEN", "  tok  ")

        config = AppConfig.from_env()

        assert config.owner == "someone"
        assert config.repo == "notes"
        assert config.branch == "drafts"
        assert config.content_extension == ".md"
        assert config.timeout_seconds == 12.5
        assert config.token == "tok"

    def test_blank_token_is_none(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GITHUB_TOKEN", "   ")

        assert AppConfig.from_env().token is None

    def test_overrides_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should prefer explicit overrides and ignore None overrides."""
        monkeypatch.setenv("DOCFETCH_OWNER", "env-owner")
        monkeypatch.setenv("DOCFETCH_REPO", "env-repo")

        config = AppConfig.from_env(owner="cli-owner", repo=None)

        assert config.owner == "cli-owner"
        assert config.repo == "env-repo"
