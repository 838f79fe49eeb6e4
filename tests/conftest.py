"""Shared fixtures for docfetch tests."""

from __future__ import annotations

from typing import Dict, List

import pytest

from docfetch.config import AppConfig
from docfetch.models import RemoteFileEntry


def make_post(title: str, date: str, tags: List[str] | None = None, description: str = "") -> str:
    tag_list = ", ".join(tags or [])
    return (
        "---\n"
        f"title: {title}\n"
        f'date: "{date}"\n'
        f"tags: [{tag_list}]\n"
        f"description: {description or title}\n"
        "---\n"
        "\n"
        f"# {title}\n"
        "\n"
        "Body text.\n"
    )


class FakeStore:
    """In-memory remote store recording every read."""

    def __init__(
        self,
        files: Dict[str, str | None],
        *,
        tree: List[str] | None = None,
        listing_fails: bool = False,
    ) -> None:
        self.files = files
        self.tree = list(files) if tree is None else tree
        self.listing_fails = listing_fails
        self.reads: List[str] = []

    async def __aenter__(self) -> "FakeStore":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        return None

    async def list_tree(self) -> List[RemoteFileEntry] | None:
        if self.listing_fails:
            return None
        return [RemoteFileEntry(path=path) for path in self.tree]

    async def read_text(self, path: str) -> str | None:
        self.reads.append(path)
        return self.files.get(path)


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(
        owner="octo",
        repo="blog",
        branch="main",
        api_base_url="https://api.example.test",
        raw_base_url="https://raw.example.test",
        token="secret-token",
        timeout_seconds=5.0,
    )
