"""
pagespy - FastAPI Application
Main entry point with REST API endpoints.
"""
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional
from urllib.parse import urlsplit

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, field_validator

from pagespy import __version__
from pagespy.config import config
from pagespy.exceptions import BodyReadError, FetchError
from pagespy.layers.assembler import EntryAssembler
from pagespy.models.entry import Entry
from pagespy.models.tag import Tag
from pagespy.utils.logger import get_logger, set_trace_id


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Close the shared HTTP client on shutdown."""
    try:
        yield
    finally:
        assembler.close()


# Initialize FastAPI app
app = FastAPI(
    title="pagespy",
    description="Extracts normalized bibliographic metadata from web pages",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize layers
assembler = EntryAssembler()

logger = get_logger("main")


# Request/Response models
class ExtractRequest(BaseModel):
    """Request model for metadata extraction."""
    url: str
    title: Optional[str] = None  # overrides every title strategy
    tags: List[str] = []

    @field_validator("url")
    @classmethod
    def url_must_be_absolute_http(cls, value: str) -> str:
        value = value.strip()
        parts = urlsplit(value)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError("url must be an absolute http(s) URL")
        return value

    @field_validator("tags")
    @classmethod
    def tags_must_be_valid(cls, value: List[str]) -> List[str]:
        parsed = []
        for raw in value:
            tag = Tag.parse(raw)
            if tag is None:
                raise ValueError(f"invalid tag: {raw!r}")
            if tag.value not in parsed:
                parsed.append(tag.value)
        return parsed


class ExtractResponse(BaseModel):
    """Response model for metadata extraction."""
    entry: Dict[str, Any]
    tags: List[str]
    trace_id: str


class ContextResponse(BaseModel):
    """Response model for the template context of an entry."""
    context: Dict[str, Any]
    trace_id: str


def _extract(request: ExtractRequest) -> Entry:
    """Run the assembler, mapping fatal extraction errors to HTTP 502."""
    try:
        return assembler.assemble(request.url, title=request.title)
    except FetchError as e:
        logger.error("extraction_fetch_error", error=str(e), url=request.url, status_code=e.status_code)
        raise HTTPException(status_code=502, detail=str(e))
    except BodyReadError as e:
        logger.error("extraction_read_error", error=str(e), url=request.url)
        raise HTTPException(status_code=502, detail=str(e))


# API Routes
@app.get("/api/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


@app.post("/api/extract", response_model=ExtractResponse)
def extract(request: ExtractRequest):
    """
    Extract metadata for a URL.

    Returns the serialized entry (title, site, authors, description,
    thumbnail, full text) along with the validated tags.
    """
    trace_id = set_trace_id()

    logger.info(
        "extraction_request",
        url=request.url,
        title_override=request.title is not None,
        tags=request.tags,
        trace_id=trace_id,
    )

    entry = _extract(request)
    return ExtractResponse(entry=entry.to_view(), tags=request.tags, trace_id=trace_id)


@app.post("/api/extract/context", response_model=ContextResponse)
def extract_context(request: ExtractRequest):
    """Extract metadata for a URL and return it as a template context."""
    trace_id = set_trace_id()

    logger.info("context_request", url=request.url, trace_id=trace_id)

    entry = _extract(request)
    context = entry.template_context()
    context["tags"] = request.tags
    return ContextResponse(context=context, trace_id=trace_id)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.HOST, port=config.PORT)
