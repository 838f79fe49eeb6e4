"""Utility helpers for working with remote file paths."""

from __future__ import annotations

from typing import Iterable, Iterator

from docfetch.models import RemoteFileEntry


def iter_content_paths(entries: Iterable[RemoteFileEntry], extension: str) -> Iterator[str]:
    """Yield entry paths ending in ``extension``, keeping listing order."""
    for entry in entries:
        if entry.path.endswith(extension):
            yield entry.path


def derive_document_id(path: str, extension: str) -> str:
    """Strip the content-file extension from ``path``; nothing else is altered."""
    return path.removesuffix(extension)
