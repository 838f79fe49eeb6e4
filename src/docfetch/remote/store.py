"""Async client for the remote file store (GitHub trees and raw content)."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Protocol

import httpx

from docfetch.config import GITHUB_API_VERSION, AppConfig
from docfetch.models import RemoteFileEntry

LOGGER = logging.getLogger(__name__)

NOT_FOUND_SENTINEL = "404: Not Found"


class RemoteStore(Protocol):
    async def list_tree(self) -> list[RemoteFileEntry] | None: ...

    async def read_text(self, path: str) -> str | None: ...


class GitHubStore:
    """Reads the tree and file contents of one repository branch.

    Every failure (transport error, non-2xx status, the raw endpoint's
    ``404: Not Found`` body) is reported as ``None`` instead of raising.
    """

    def __init__(self, config: AppConfig, *, client: httpx.AsyncClient | None = None) -> None:
        self.config = config
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=config.timeout_seconds)

    async def __aenter__(self) -> "GitHubStore":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def list_tree(self) -> list[RemoteFileEntry] | None:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
            **self.config.auth_headers(),
        }
        url = self.config.tree_url()
        try:
            response = await self._client.get(url, params={"recursive": "1"}, headers=headers)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            LOGGER.warning("Tree listing failed for %s: %s", url, exc)
            return None
        except ValueError as exc:
            LOGGER.warning("Tree listing returned invalid JSON for %s: %s", url, exc)
            return None

        tree = payload.get("tree") if isinstance(payload, dict) else None
        if not isinstance(tree, list):
            LOGGER.warning("Tree listing for %s has no tree array", url)
            return None

        if payload.get("truncated"):
            LOGGER.warning("Tree listing for %s was truncated by the remote store", url)

        entries: list[RemoteFileEntry] = []
        for item in tree:
            path = item.get("path") if isinstance(item, dict) else None
            if not isinstance(path, str):
                continue
            entries.append(
                RemoteFileEntry(path=path, type=item.get("type", "blob"), sha=item.get("sha"))
            )
        LOGGER.debug("Listed %d entries from %s", len(entries), url)
        return entries

    async def read_text(self, path: str) -> str | None:
        url = self.config.raw_url(path)
        try:
            response = await self._client.get(url, headers=self.config.auth_headers())
            response.raise_for_status()
        except httpx.HTTPError as exc:
            LOGGER.warning("Fetching %s failed: %s", path, exc)
            return None

        text = response.text
        if text == NOT_FOUND_SENTINEL:
            LOGGER.warning("Remote store has no file at %s", path)
            return None
        return text
