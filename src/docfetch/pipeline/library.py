"""Document listing and fetching pipeline."""

from __future__ import annotations

import asyncio
import logging
from typing import Mapping, Sequence

from docfetch.compiler.components import DEFAULT_COMPONENTS, Component
from docfetch.compiler.mdx import CompileError, DocumentCompiler, MdxCompiler
from docfetch.compiler.transforms import DEFAULT_TRANSFORMS, Transform
from docfetch.config import AppConfig
from docfetch.models import CompiledDocument, DocumentMetadata, ListingResult, ListingStats
from docfetch.remote.store import GitHubStore, RemoteStore
from docfetch.utils.files import derive_document_id, iter_content_paths
from docfetch.utils.text import coerce_tags, coerce_text

LOGGER = logging.getLogger(__name__)


def sort_by_date(documents: Sequence[DocumentMetadata]) -> list[DocumentMetadata]:
    """Newest first, comparing ``date`` as a plain string; ties keep their order."""
    return sorted(documents, key=lambda meta: meta.date or "", reverse=True)


class DocumentLibrary:
    """Lists and compiles the content files of a remote store."""

    def __init__(
        self,
        store: RemoteStore,
        compiler: DocumentCompiler | None = None,
        *,
        content_extension: str = ".mdx",
        components: Mapping[str, Component] = DEFAULT_COMPONENTS,
        transforms: Sequence[Transform] = DEFAULT_TRANSFORMS,
    ) -> None:
        self.store = store
        self.compiler = compiler or MdxCompiler()
        self.content_extension = content_extension
        self.components = components
        self.transforms = transforms

    async def fetch_document(self, path: str) -> CompiledDocument | None:
        """Fetch and compile one document, or ``None`` if it is unavailable."""
        source = await self.store.read_text(path)
        if source is None:
            return None

        try:
            result = self.compiler.compile(
                source, components=self.components, transforms=self.transforms
            )
        except CompileError as exc:
            LOGGER.warning("Failed to compile %s: %s", path, exc)
            return None

        frontmatter = result.frontmatter
        meta = DocumentMetadata(
            id=derive_document_id(path, self.content_extension),
            title=coerce_text(frontmatter.get("title")),
            date=coerce_text(frontmatter.get("date")),
            tags=coerce_tags(frontmatter.get("tags")),
            description=coerce_text(frontmatter.get("description")),
        )
        return CompiledDocument(meta=meta, body=result.body)

    async def collect_documents(
        self, limit: int | None = None, *, concurrency: int = 1
    ) -> ListingResult | None:
        if limit is not None and limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")
        if concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {concurrency}")

        entries = await self.store.list_tree()
        if entries is None:
            return None

        paths = list(iter_content_paths(entries, self.content_extension))
        if limit:
            paths = paths[:limit]

        stats = ListingStats(candidates=len(paths))
        if concurrency == 1:
            compiled = [await self.fetch_document(path) for path in paths]
        else:
            compiled = await self._fetch_concurrently(paths, concurrency)

        documents: list[DocumentMetadata] = []
        for path, document in zip(paths, compiled):
            if document is None:
                LOGGER.debug("Skipping %s", path)
                stats.increment("skipped", path)
                continue
            stats.increment("compiled", path)
            documents.append(document.meta)

        LOGGER.info(
            "Compiled %d of %d documents (%d skipped)",
            stats.compiled,
            stats.candidates,
            stats.skipped,
        )
        return ListingResult(documents=sort_by_date(documents), stats=stats)

    async def list_documents(
        self, limit: int | None = None, *, concurrency: int = 1
    ) -> list[DocumentMetadata] | None:
        """Return metadata of every content file, newest first, or ``None`` if the listing fails.

        ``limit`` caps how many candidate files are fetched; ``None`` or ``0``
        fetches all of them. Documents that fail to fetch or compile are left out.
        """
        result = await self.collect_documents(limit, concurrency=concurrency)
        if result is None:
            return None
        return result.documents

    async def _fetch_concurrently(
        self, paths: Sequence[str], concurrency: int
    ) -> list[CompiledDocument | None]:
        semaphore = asyncio.Semaphore(concurrency)

        async def _fetch(path: str) -> CompiledDocument | None:
            async with semaphore:
                return await self.fetch_document(path)

        return list(await asyncio.gather(*(_fetch(path) for path in paths)))


async def fetch_document(path: str, *, config: AppConfig | None = None) -> CompiledDocument | None:
    config = config or AppConfig.from_env()
    async with GitHubStore(config) as store:
        library = DocumentLibrary(store, content_extension=config.content_extension)
        return await library.fetch_document(path)


async def collect_documents(
    limit: int | None = None, *, config: AppConfig | None = None, concurrency: int = 1
) -> ListingResult | None:
    config = config or AppConfig.from_env()
    async with GitHubStore(config) as store:
        library = DocumentLibrary(store, content_extension=config.content_extension)
        return await library.collect_documents(limit, concurrency=concurrency)


async def list_documents(
    limit: int | None = None, *, config: AppConfig | None = None, concurrency: int = 1
) -> list[DocumentMetadata] | None:
    result = await collect_documents(limit, config=config, concurrency=concurrency)
    if result is None:
        return None
    return result.documents
