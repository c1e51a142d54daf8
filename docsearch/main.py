"""
docsearch - FastAPI service for TF-IDF document search

Serves ranked queries over an in-memory index snapshot:
- Corpus: directory of XHTML / HTML / text documents (CORPUS_DIR)
- Index: {doc_id: {term: count}}, optionally persisted as JSON (INDEX_FILE)
- Reindex builds a new snapshot and swaps it in; queries never see a partial index
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from .config import Settings, load_environment

env_used = load_environment()

settings = Settings()

from .logging_config import setup_logging

setup_logging(
    log_file=settings.log_file,
    console_level=getattr(logging, settings.log_level, logging.INFO),
    file_level=logging.DEBUG  # Always DEBUG in file for troubleshooting
)

logger = logging.getLogger(__name__)

if env_used:
    logger.info(f"Loaded environment from: {env_used}")
else:
    logger.info("No .env.local or .env file found - using system environment variables only")


from fastapi import FastAPI, HTTPException, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .corpus import CorpusNotFoundError
from .engine import SearchEngine
from .search import tokenize
from .storage import IndexFormatError, IndexStorage

APP_VERSION = "0.1.0"
APP_START_TIME = datetime.utcnow().isoformat() + "Z"

engine = SearchEngine(
    storage=IndexStorage(settings.index_file) if settings.index_file else None,
    max_workers=settings.index_workers,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load or build the initial index"""
    try:
        if engine.load():
            logger.info(f"Index loaded from {settings.index_file}")
        else:
            result = engine.reindex(settings.corpus_dir)
            logger.info(f"Initial index built: {result.document_count} documents")
    except CorpusNotFoundError:
        logger.warning(f"Corpus directory {settings.corpus_dir} not found - starting with an empty index")
    except IndexFormatError as e:
        logger.error(f"Stored index unusable ({e}) - starting with an empty index")

    yield

    logger.info("Shutting down...")


app = FastAPI(
    title="docsearch API",
    description="TF-IDF ranked search over a directory of documents",
    version=APP_VERSION,
    lifespan=lifespan,
)


# Request/Response models
class HealthResponse(BaseModel):
    status: str
    version: str
    document_count: int
    indexed_at: Optional[str]
    started_at: str
    uptime_seconds: float


class QueryRequest(BaseModel):
    query: str = Field(..., description="Free-text query", min_length=1)
    top_k: Optional[int] = Field(
        default=None,
        ge=1,
        description="Number of results (default: every indexed document)"
    )


class QueryResultItem(BaseModel):
    doc_id: str
    score: float


class QueryResponse(BaseModel):
    query: str
    tokens: List[str]
    total: int
    results: List[QueryResultItem]


class IndexRequest(BaseModel):
    corpus_dir: Optional[str] = Field(
        default=None,
        description="Subdirectory of CORPUS_DIR to index (default: CORPUS_DIR itself)"
    )


class IndexResponse(BaseModel):
    corpus_dir: str
    document_count: int
    skipped: List[str]
    indexed_at: str


class DocumentInfo(BaseModel):
    doc_id: str
    unique_terms: int
    total_terms: int


class DocumentListResponse(BaseModel):
    total: int
    documents: List[DocumentInfo]


class DocumentTermsResponse(BaseModel):
    doc_id: str
    term_frequencies: dict[str, int]


# Routes
@app.get("/", response_model=dict)
async def root():
    """Root endpoint"""
    return {
        "service": "docsearch API",
        "version": APP_VERSION,
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check endpoint"""
    start_time = datetime.fromisoformat(APP_START_TIME.rstrip('Z'))
    uptime = (datetime.utcnow() - start_time).total_seconds()

    return HealthResponse(
        status="healthy",
        version=APP_VERSION,
        document_count=engine.document_count,
        indexed_at=engine.indexed_at,
        started_at=APP_START_TIME,
        uptime_seconds=round(uptime, 2),
    )


# Sync handlers: ranking and indexing are CPU-bound, FastAPI runs them in its threadpool
@app.post("/v1/query", response_model=QueryResponse)
def query_documents(request: QueryRequest):
    """
    Rank indexed documents against a query

    Every indexed document is scored (zero scores included) unless top_k
    limits the list. Ties are ordered by doc_id.

    **Example:**
    ```json
    {"query": "bind buffer target", "top_k": 10}
    ```
    """
    results = engine.search(request.query, request.top_k)
    logger.info(f"Query '{request.query}': {len(results)} results")

    return QueryResponse(
        query=request.query,
        tokens=tokenize(request.query),
        total=len(results),
        results=[QueryResultItem(doc_id=doc_id, score=score) for doc_id, score in results],
    )


def resolve_corpus_dir(requested: Optional[str]) -> Path:
    """
    Resolve a requested corpus directory inside CORPUS_DIR

    Relative paths are taken from CORPUS_DIR. Anything that resolves
    outside CORPUS_DIR is refused with 403.
    """
    base = Path(settings.corpus_dir).resolve()
    if not requested:
        return base

    target = (base / requested).resolve()
    if not target.is_relative_to(base):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Corpus directory must be inside {settings.corpus_dir}",
        )
    return target


@app.post("/v1/index", response_model=IndexResponse)
def reindex(request: Optional[IndexRequest] = None):
    """
    Rebuild the whole index from a corpus directory

    The directory must be CORPUS_DIR or one of its subdirectories.
    Documents that fail to load are skipped and listed in the response.
    """
    corpus_dir = resolve_corpus_dir(request.corpus_dir if request else None)

    try:
        result = engine.reindex(corpus_dir)
    except CorpusNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )

    return IndexResponse(
        corpus_dir=str(corpus_dir),
        document_count=result.document_count,
        skipped=result.skipped,
        indexed_at=engine.indexed_at,
    )


@app.get("/v1/documents", response_model=DocumentListResponse)
async def list_documents():
    """List indexed documents with their term counts"""
    snapshot = engine.index
    documents = [
        DocumentInfo(
            doc_id=doc_id,
            unique_terms=len(table),
            total_terms=sum(table.values()),
        )
        for doc_id, table in sorted(snapshot.items())
    ]
    return DocumentListResponse(total=len(documents), documents=documents)


@app.get("/v1/documents/{doc_id:path}", response_model=DocumentTermsResponse)
async def get_document(doc_id: str):
    """Term frequency table of one indexed document"""
    table = engine.index.get(doc_id)
    if table is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Document {doc_id} is not indexed",
        )
    return DocumentTermsResponse(doc_id=doc_id, term_frequencies=table)


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler"""
    logger.exception(f"Unhandled error on {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "detail": str(exc),
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "docsearch.main:app",
        host="0.0.0.0",
        port=settings.port,
    )
