"""FastAPI application exposing the document metadata list."""

from __future__ import annotations

import logging
from typing import List

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from docfetch.config import AppConfig
from docfetch.pipeline.library import collect_documents, fetch_document

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="docfetch", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)


class MetadataPayload(BaseModel):
    id: str
    title: str | None = None
    date: str | None = None
    tags: List[str] = []
    description: str | None = None


class StatsPayload(BaseModel):
    candidates: int
    compiled: int
    skipped: int
    skipped_paths: List[str] = []


class ListingPayload(BaseModel):
    documents: List[MetadataPayload]
    stats: StatsPayload


class DocumentPayload(BaseModel):
    meta: MetadataPayload
    html: str


def _load_config() -> AppConfig:
    return AppConfig.from_env()


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@app.get("/documents", response_model=ListingPayload)
async def list_documents(
    limit: int = Query(0, ge=0),
    concurrency: int = Query(1, ge=1, le=16),
) -> ListingPayload:
    """List document metadata, newest first."""
    config = _load_config()
    result = await collect_documents(limit, config=config, concurrency=concurrency)
    if result is None:
        LOGGER.warning("Listing %s/%s failed", config.owner, config.repo)
        raise HTTPException(
            status_code=502,
            detail=f"Could not list documents in {config.owner}/{config.repo}@{config.branch}",
        )
    return ListingPayload(
        documents=[MetadataPayload(**meta.to_dict()) for meta in result.documents],
        stats=StatsPayload(**result.stats.to_dict()),
    )


@app.get("/documents/{path:path}", response_model=DocumentPayload)
async def get_document(path: str) -> DocumentPayload:
    """Fetch and compile one document by its repository path."""
    document = await fetch_document(path, config=_load_config())
    if document is None:
        raise HTTPException(status_code=404, detail=f"Document not available: {path}")
    return DocumentPayload(meta=MetadataPayload(**document.meta.to_dict()), html=document.body.html)
