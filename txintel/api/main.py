"""FastAPI application for the Texas environmental intelligence feed."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from txintel.aggregator import FeedAggregator
from txintel.api.response import (
    NO_STORE,
    CachePolicy,
    build_error_payload,
    build_updates_payload,
    cache_control,
    to_json,
)
from txintel.config import get_settings
from txintel.contact import ContactNotifier, validate_submission
from txintel.models.schemas import ContactSubmission, SourceKind
from txintel.sources import get_sources

settings = get_settings()

# Configure logging
logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
logger = logging.getLogger(__name__)

UPDATES = "updates"
REGULATORY = "regulatory"

# One aggregator per endpoint variant; they hold HTTP clients, never items.
aggregators: Dict[str, FeedAggregator] = {}
notifier: Optional[ContactNotifier] = None


def get_aggregator(variant: str) -> FeedAggregator:
    """Return the aggregator for an endpoint variant, creating it on first use."""
    if variant not in aggregators:
        kind = SourceKind.API if variant == REGULATORY else None
        aggregators[variant] = FeedAggregator(sources=get_sources(kind), settings=settings)
    return aggregators[variant]


def get_notifier() -> ContactNotifier:
    global notifier
    if notifier is None:
        notifier = ContactNotifier(settings=settings)
    return notifier


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management."""
    logger.info("Starting Texas environmental intelligence API...")
    get_aggregator(UPDATES)
    get_aggregator(REGULATORY)
    yield
    logger.info("Shutting down Texas environmental intelligence API...")
    for aggregator in list(aggregators.values()):
        await aggregator.close()
    aggregators.clear()


app = FastAPI(
    title="Texas Environmental Intelligence API",
    description=(
        "Aggregates land development, permit, wildlife and regulatory updates "
        "from Texas agencies, news outlets and the Federal Register."
    ),
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for frontend access
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


async def _updates_response(variant: str, policy: CachePolicy) -> JSONResponse:
    """Run one aggregation pass and shape the response for it."""
    generated_at = datetime.now(timezone.utc)

    try:
        aggregator = get_aggregator(variant)
        result = await aggregator.run()
        payload = build_updates_payload(result, generated_at)
    except Exception:
        logger.exception(f"Fatal error while aggregating {variant}")
        return JSONResponse(
            status_code=500,
            content=to_json(build_error_payload(generated_at)),
            headers={"Cache-Control": NO_STORE},
        )

    if not payload.items:
        logger.warning(f"No items fetched from any {variant} source")
    else:
        logger.info(f"Returning {payload.count} {variant} items")

    return JSONResponse(
        content=to_json(payload),
        headers={"Cache-Control": cache_control(policy, settings, empty=not payload.items)},
    )


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}


@app.get("/api/texas-updates")
async def texas_updates():
    """
    Merged, ranked updates from every configured source.

    Degrades to an empty list with an explanatory ``error`` when no source
    returns anything; only internal merge failures produce a 500.
    """
    return await _updates_response(UPDATES, CachePolicy.STANDARD)


@app.get("/api/regulatory-updates")
async def regulatory_updates():
    """Federal Register documents only, never cached."""
    return await _updates_response(REGULATORY, CachePolicy.REALTIME)


@app.get("/api/sources")
async def list_sources():
    """Configured sources in merge order."""
    return [
        source.model_dump(mode="json", by_alias=True, exclude_none=True)
        for source in get_sources()
    ]


@app.post("/api/contacts")
async def submit_contact(submission: ContactSubmission):
    """
    Accept a contact form submission.

    Delivery failures are logged but do not fail the submission.
    """
    error = validate_submission(submission, settings.contact_max_attachment_bytes)
    if error:
        return JSONResponse(status_code=400, content={"error": error})

    logger.info(
        f"New contact submission: project_type={submission.project_type or 'General Inquiry'} "
        f"company={submission.company or '-'} "
        f"attachment={'yes' if submission.attachment else 'no'}"
    )

    try:
        await get_notifier().send(submission)
    except Exception as e:
        logger.error(f"Contact email send failed: {e}")

    return {"success": True, "message": "Contact form submitted successfully"}


# Error handlers
@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler."""
    # Let FastAPI handle HTTPException normally
    if isinstance(exc, HTTPException):
        raise exc
    logger.exception("Unhandled exception")
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
        headers={"Cache-Control": NO_STORE},
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "txintel.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )
