"""Core docfetch data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List

if TYPE_CHECKING:
    from docfetch.compiler.mdx import RenderedBody


@dataclass(slots=True, frozen=True)
class RemoteFileEntry:
    """One entry of the remote store's tree listing."""

    path: str
    type: str = "blob"
    sha: str | None = None


@dataclass(slots=True)
class DocumentMetadata:
    """Summary of a document as declared by its front matter."""

    id: str
    title: str | None = None
    date: str | None = None
    tags: List[str] = field(default_factory=list)
    description: str | None = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date,
            "tags": list(self.tags),
            "description": self.description,
        }


@dataclass(slots=True)
class CompiledDocument:
    """Metadata paired with the compiled, renderable body."""

    meta: DocumentMetadata
    body: "RenderedBody"


@dataclass(slots=True)
class ListingStats:
    candidates: int = 0
    compiled: int = 0
    skipped: int = 0
    skipped_paths: list[str] = field(default_factory=list)

    def increment(self, status: str, path: str) -> None:
        if status == "compiled":
            self.compiled += 1
        else:
            self.skipped += 1
            self.skipped_paths.append(path)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "candidates": self.candidates,
            "compiled": self.compiled,
            "skipped": self.skipped,
            "skipped_paths": list(self.skipped_paths),
        }


@dataclass(slots=True)
class ListingResult:
    documents: list[DocumentMetadata]
    stats: ListingStats
