"""
Site Editor API - FastAPI backend for the site editor.

Provides REST endpoints for:
- Listing, reading, creating and saving pages
- Submitting feedback and applying suggested improvements
- Browsing the feedback log and the suggestion rules
"""

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field
from contextlib import asynccontextmanager
from typing import Optional
import logging

from src.config import API_HOST, API_PORT, DEBUG, FEEDBACK_FILE, LOG_FORMAT, LOG_LEVEL, PAGES_DIR
from src.feedback.orchestrator import FeedbackOrchestrator, SubmissionResult
from src.feedback.storage import FeedbackStorage
from src.pages.storage import FilePageStorage, page_title, sanitize_page_name
from src.suggestions.engine import SuggestionEngine


logger = logging.getLogger(__name__)


# =============================================================================
# Pydantic Models for Request/Response
# =============================================================================

class FeedbackRequest(BaseModel):
    """Request body for feedback submissions."""
    text: str = Field(..., description="Free-text feedback about the page", max_length=5000)
    target_page: Optional[str] = Field(default=None, description="Slug of the page to improve")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "text": "The page is slow and there is no contact button",
            "target_page": "home",
        }
    })


class ReportInfo(BaseModel):
    """Outcome of a single suggestion."""
    type: str
    title: str
    message: str
    status: str
    error: Optional[str] = None


class FeedbackEntryInfo(BaseModel):
    """A logged feedback entry."""
    text: str
    created_at: str
    target_page: Optional[str] = None


class FeedbackResponse(BaseModel):
    """Response from a feedback submission."""
    persisted: bool
    reports: list[ReportInfo]
    entry: Optional[FeedbackEntryInfo] = None


class PageSummary(BaseModel):
    """Page listing item."""
    slug: str
    title: Optional[str] = None


class PageResponse(BaseModel):
    """A page with its markup."""
    slug: str
    title: Optional[str] = None
    content: str


class CreatePageRequest(BaseModel):
    """Request body for creating a page."""
    name: str = Field(..., description="Page name (letters, digits, - and _)", min_length=1, max_length=100)


class SavePageRequest(BaseModel):
    """Request body for saving a page."""
    content: str = Field(..., description="Full HTML markup of the page")


class RuleInfo(BaseModel):
    """A suggestion rule."""
    type: str
    title: str
    description: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    page_count: int
    feedback_count: int
    rule_count: int


# =============================================================================
# Startup/Shutdown
# =============================================================================

# Global service instances (initialized on startup)
page_storage: Optional[FilePageStorage] = None
feedback_storage: Optional[FeedbackStorage] = None
orchestrator: Optional[FeedbackOrchestrator] = None
engine = SuggestionEngine()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize storage and the feedback pipeline on startup."""
    global page_storage, feedback_storage, orchestrator

    page_storage = FilePageStorage(PAGES_DIR)
    feedback_storage = FeedbackStorage(FEEDBACK_FILE)
    orchestrator = FeedbackOrchestrator(feedback_storage, page_storage, engine=engine)

    logger.info(f"Pages: {page_storage.pages_dir} ({len(page_storage.list_pages())} pages)")
    logger.info(f"Feedback log: {feedback_storage.feedback_file}")

    yield

    page_storage = None
    feedback_storage = None
    orchestrator = None
    logger.info("Site Editor API shutdown complete")


# =============================================================================
# Application Setup
# =============================================================================

app = FastAPI(
    title="Site Editor API",
    description="""
    Edit a small set of HTML pages and improve them from user feedback.

    Feedback is matched against a fixed set of improvement rules:
    - Call-to-action buttons
    - Page load speed
    - Readability
    - Mobile layout

    When feedback names a page, matching improvements are inserted into
    the page once; repeating the same feedback does not duplicate them.
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS middleware for frontend access
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# =============================================================================
# Helper Functions
# =============================================================================

def get_pages() -> FilePageStorage:
    """Get the page storage or raise an error."""
    if page_storage is None:
        raise HTTPException(status_code=503, detail="Page storage not initialized.")
    return page_storage


def get_orchestrator() -> FeedbackOrchestrator:
    """Get the feedback pipeline or raise an error."""
    if orchestrator is None:
        raise HTTPException(status_code=503, detail="Feedback pipeline not initialized.")
    return orchestrator


def require_slug(name: str) -> str:
    """Sanitize a page name or reject the request."""
    slug = sanitize_page_name(name)
    if slug is None:
        raise HTTPException(
            status_code=400,
            detail="Page names may only contain letters, digits, hyphens and underscores.",
        )
    return slug


def submission_to_response(result: SubmissionResult) -> FeedbackResponse:
    """Convert a SubmissionResult to a FeedbackResponse model."""
    return FeedbackResponse(**result.to_dict())


# =============================================================================
# API Endpoints
# =============================================================================

# Endpoints that touch the filesystem are plain functions so FastAPI runs
# them in its threadpool instead of on the event loop.

@app.get("/", tags=["Info"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Site Editor API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health",
    }


@app.get("/health", response_model=HealthResponse, tags=["Info"])
def health_check():
    """Check the health of the API and its storage."""
    pages = get_pages()
    o = get_orchestrator()

    return HealthResponse(
        status="healthy",
        page_count=len(pages.list_pages()),
        feedback_count=o.feedback_storage.count(),
        rule_count=len(o.engine.rules),
    )


@app.get("/pages", response_model=list[PageSummary], tags=["Pages"])
def list_pages():
    """List all pages with their titles."""
    return [PageSummary(**p) for p in get_pages().summaries()]


@app.post("/pages", response_model=PageResponse, status_code=201, tags=["Pages"])
def create_page(request: CreatePageRequest):
    """Create a new page from the blank template."""
    pages = get_pages()
    slug = require_slug(request.name)

    try:
        created = pages.create(slug)
    except FileExistsError:
        raise HTTPException(status_code=409, detail=f"Page already exists: {slug}")

    if not created:
        raise HTTPException(status_code=500, detail="Failed to create the page.")

    content = pages.read(slug) or ""
    return PageResponse(slug=slug, title=page_title(content), content=content)


@app.get("/pages/{name}", response_model=PageResponse, tags=["Pages"])
def get_page(name: str):
    """Get a page's markup."""
    slug = require_slug(name)

    try:
        content = get_pages().read(slug)
    except UnicodeDecodeError:
        raise HTTPException(status_code=422, detail=f"Page is not valid UTF-8: {slug}")

    if content is None:
        raise HTTPException(status_code=404, detail=f"Page not found: {slug}")

    return PageResponse(slug=slug, title=page_title(content), content=content)


@app.put("/pages/{name}", response_model=PageResponse, tags=["Pages"])
def save_page(name: str, request: SavePageRequest):
    """Save a page's markup, creating the page if it does not exist."""
    slug = require_slug(name)

    if not get_pages().write(slug, request.content):
        raise HTTPException(status_code=500, detail="Failed to save the page. Check permissions.")

    return PageResponse(slug=slug, title=page_title(request.content), content=request.content)


@app.post("/feedback", response_model=FeedbackResponse, tags=["Feedback"])
def submit_feedback(request: FeedbackRequest):
    """
    Submit feedback, optionally about a page.

    This endpoint:
    1. Logs the feedback
    2. Matches it against the suggestion rules
    3. Applies each matching suggestion to the target page (if given)

    Returns one report per suggestion with status applied, skipped,
    error or note.
    """
    o = get_orchestrator()
    target = require_slug(request.target_page) if request.target_page else None

    result = o.submit(request.text, target_page=target)
    return submission_to_response(result)


@app.get("/feedback", response_model=list[FeedbackEntryInfo], tags=["Feedback"])
def list_feedback(
    limit: int = Query(default=20, description="Number of entries", ge=1, le=200),
    page: Optional[str] = Query(default=None, description="Only feedback about this page"),
):
    """Get recent feedback, newest first."""
    o = get_orchestrator()

    if page:
        slug = require_slug(page)
        entries = list(reversed(o.feedback_storage.for_page(slug)))[:limit]
    else:
        entries = o.feedback_storage.recent(limit)

    return [FeedbackEntryInfo(**e.to_dict()) for e in entries]


@app.get("/suggestions/rules", response_model=list[RuleInfo], tags=["Suggestions"])
async def list_rules():
    """List the suggestion rules in evaluation order."""
    return [RuleInfo(**rule.to_dict()) for rule in engine.rules]


@app.get("/suggestions", response_model=list[RuleInfo], tags=["Suggestions"])
async def preview_suggestions(
    q: str = Query(..., description="Feedback text to classify", min_length=1, max_length=5000),
):
    """
    Preview which suggestions a feedback text would trigger.

    Nothing is logged and no page is changed.
    Example: /suggestions?q=the+page+is+slow
    """
    return [RuleInfo(**rule.to_dict()) for rule in engine.classify(q)]


# =============================================================================
# Run with Uvicorn
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)

    print(f"Starting Site Editor API on {API_HOST}:{API_PORT}")
    print(f"Documentation: http://localhost:{API_PORT}/docs")

    uvicorn.run(
        "src.api.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=DEBUG,
    )
