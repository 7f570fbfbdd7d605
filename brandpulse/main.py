"""Main FastAPI application for the brand feedback dashboard."""
import logging
from contextlib import asynccontextmanager
from typing import List
from fastapi import FastAPI, Depends, HTTPException, Header, Query, status
from fastapi.responses import JSONResponse

from .config import config
from .aggregation import build_dashboard_stats
from .ai_analyzer import AIAnalyzer
from .demo_data import seed_store
from .ingestion import ingest
from .live_poller import LivePoller
from .schemas import (
    CompanyProfile,
    DashboardStats,
    ExecutiveSummary,
    FeedbackItem,
    FeedbackRequest,
    FeedbackSource,
    LiveStatus,
)
from .store import DashboardState
from .summary import summarize

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Initialize services
ai_analyzer = AIAnalyzer()
dashboard_state = DashboardState()
live_poller = LivePoller(dashboard_state, ai_analyzer.generate_feedback, ai_analyzer.classify)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    # Startup
    if config.SEED_DEMO_DATA and len(dashboard_state.store) == 0:
        count = seed_store(dashboard_state.store)
        logger.info(f"Seeded {count} demo feedback items")
    if not ai_analyzer.available:
        logger.warning("OPENAI_API_KEY not set - every analysis will return a sentinel result")
    logger.info("Application started successfully")
    yield
    # Shutdown
    live_poller.stop()
    logger.info("Application shutting down")


app = FastAPI(
    title="BrandPulse Feedback Dashboard API",
    description="AI-powered brand sentiment, topic and executive summary dashboard",
    version="1.0.0",
    lifespan=lifespan
)


def get_state() -> DashboardState:
    return dashboard_state


def get_analyzer() -> AIAnalyzer:
    return ai_analyzer


def get_poller() -> LivePoller:
    return live_poller


async def verify_api_key(x_api_key: str = Header(...)) -> None:
    """Verify API key authentication.

    A single shared key, enough for a single-tenant dashboard.
    """
    if x_api_key != config.API_KEY:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key"
        )


@app.post("/feedback", response_model=FeedbackItem, status_code=status.HTTP_201_CREATED)
async def submit_feedback(
    request: FeedbackRequest,
    state: DashboardState = Depends(get_state),
    analyzer: AIAnalyzer = Depends(get_analyzer),
    _: None = Depends(verify_api_key)
):
    """Analyze manually entered feedback and add it to the dashboard.

    Blank text is rejected by request validation, so the classifier is never
    called for it. A failed classification still returns 201 with the
    sentinel record (processingMethod "sentinel").

    Args:
        request: Feedback request with text
        state: Dashboard state
        analyzer: AI client used for classification
        _: API key verification

    Returns:
        The stored FeedbackItem
    """
    item = await ingest(request.text, state.profile, analyzer.classify, source=FeedbackSource.DIRECT_INPUT)
    state.store.append(item)
    logger.info(f"Stored feedback {item.id} ({item.processing_method})")
    return item


@app.get("/feedback", response_model=List[FeedbackItem])
async def recent_activity(
    limit: int = Query(config.FEED_DEFAULT_LIMIT, ge=1, le=1000),
    state: DashboardState = Depends(get_state),
    _: None = Depends(verify_api_key)
):
    """Recent activity feed, most recent first."""
    return state.store.recent(limit)


@app.get("/dashboard", response_model=DashboardStats)
async def dashboard(
    state: DashboardState = Depends(get_state),
    _: None = Depends(verify_api_key)
):
    """Overview statistics, recomputed from the full store on every call."""
    return build_dashboard_stats(state.store.all())


@app.get("/profile", response_model=CompanyProfile)
async def get_profile(
    state: DashboardState = Depends(get_state),
    _: None = Depends(verify_api_key)
):
    return state.profile


@app.put("/profile", response_model=CompanyProfile)
async def update_profile(
    profile: CompanyProfile,
    state: DashboardState = Depends(get_state),
    _: None = Depends(verify_api_key)
):
    """Replace the company profile used as prompt context."""
    state.set_profile(profile)
    return state.profile


@app.get("/live", response_model=LiveStatus)
async def live_status(
    poller: LivePoller = Depends(get_poller),
    _: None = Depends(verify_api_key)
):
    return poller.status()


@app.post("/live/start", response_model=LiveStatus)
async def start_live_feed(
    poller: LivePoller = Depends(get_poller),
    _: None = Depends(verify_api_key)
):
    """Turn the simulated live feed on (no-op if already live)."""
    poller.start()
    return poller.status()


@app.post("/live/stop", response_model=LiveStatus)
async def stop_live_feed(
    poller: LivePoller = Depends(get_poller),
    _: None = Depends(verify_api_key)
):
    """Turn the simulated live feed off. Cycles in flight still complete."""
    poller.stop()
    return poller.status()


@app.post("/reports/summary", response_model=ExecutiveSummary)
async def generate_report(
    state: DashboardState = Depends(get_state),
    analyzer: AIAnalyzer = Depends(get_analyzer),
    _: None = Depends(verify_api_key)
):
    """Generate a fresh executive summary over all collected feedback.

    A summarizer failure returns 200 with the sentinel summary.
    """
    items = state.store.all()
    if not items:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="No feedback collected yet"
        )

    state.latest_summary = await summarize(items, state.profile, analyzer.summarize)
    return state.latest_summary


@app.get("/reports/summary", response_model=ExecutiveSummary)
async def latest_report(
    state: DashboardState = Depends(get_state),
    _: None = Depends(verify_api_key)
):
    if state.latest_summary is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No report generated yet"
        )
    return state.latest_summary


@app.get("/health")
async def health_check(
    state: DashboardState = Depends(get_state),
    analyzer: AIAnalyzer = Depends(get_analyzer),
    poller: LivePoller = Depends(get_poller)
):
    """Health check endpoint.

    Returns system status including AI availability and live feed state.
    """
    ai_status = "healthy" if analyzer.available else "degraded"

    return {
        "status": "healthy",
        "ai_provider": ai_status,
        "feedback_count": len(state.store),
        "live_feed": poller.is_live
    }


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "service": "BrandPulse Feedback Dashboard API",
        "version": "1.0.0",
        "endpoints": {
            "submit": "POST /feedback",
            "activity": "GET /feedback",
            "dashboard": "GET /dashboard",
            "profile": "GET|PUT /profile",
            "live": "GET /live, POST /live/start, POST /live/stop",
            "report": "GET|POST /reports/summary",
            "health": "GET /health"
        }
    }


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler for unexpected errors."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"}
    )
