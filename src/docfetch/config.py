"""Application configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from urllib.parse import quote

DEFAULT_OWNER = "docfetch"
DEFAULT_REPO = "posts"
DEFAULT_BRANCH = "main"
CONTENT_EXTENSION = ".mdx"
GITHUB_API_URL = "https://api.github.com"
GITHUB_RAW_URL = "https://raw.githubusercontent.com"
GITHUB_API_VERSION = "2022-11-28"


def _get_token() -> str | None:
    """Read the store credential from the environment, ignoring blank values."""
    token = os.getenv("GITHUB_TOKEN", "").strip()
    return token or None


@dataclass(slots=True)
class AppConfig:
    owner: str = DEFAULT_OWNER
    repo: str = DEFAULT_REPO
    branch: str = DEFAULT_BRANCH
    content_extension: str = CONTENT_EXTENSION
    api_base_url: str = GITHUB_API_URL
    raw_base_url: str = GITHUB_RAW_URL
    token: str | None = field(default=None, repr=False)
    timeout_seconds: float = 30.0

    @classmethod
    def from_env(cls, **overrides: object) -> "AppConfig":
        """Build a config from ``DOCFETCH_*`` variables and ``GITHUB_TOKEN``.

        Keyword overrides that are not ``None`` win over the environment.
        """
        values: dict[str, object] = {
            "owner": os.getenv("DOCFETCH_OWNER", DEFAULT_OWNER),
            "repo": os.getenv("DOCFETCH_REPO", DEFAULT_REPO),
            "branch": os.getenv("DOCFETCH_BRANCH", DEFAULT_BRANCH),
            "content_extension": os.getenv("DOCFETCH_EXTENSION", CONTENT_EXTENSION),
            "api_base_url": os.getenv("DOCFETCH_API_URL", GITHUB_API_URL),
            "raw_base_url": os.getenv("DOCFETCH_RAW_URL", GITHUB_RAW_URL),
            "token": _get_token(),
            "timeout_seconds": float(os.getenv("DOCFETCH_TIMEOUT", "30")),
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)  # type: ignore[arg-type]

    def tree_url(self) -> str:
        base = self.api_base_url.rstrip("/")
        return f"{base}/repos/{self.owner}/{self.repo}/git/trees/{quote(self.branch, safe='')}"

    def raw_url(self, path: str) -> str:
        base = self.raw_base_url.rstrip("/")
        return f"{base}/{self.owner}/{self.repo}/{self.branch}/{quote(path.lstrip('/'))}"

    def auth_headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}
