# lunchbot/main.py

import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from lunchbot.api.endpoints import router as api_router
from lunchbot.core.config import get_settings
from lunchbot.core.errors import LunchError, StoreFailure
from lunchbot.core.logging import configure_logging

configure_logging(get_settings().log_level)
logger = logging.getLogger(__name__)

# Create the FastAPI application instance
app = FastAPI(
    title="Lunch Bot",
    description="Slack slash command for collecting lunch restaurant suggestions.",
    version="1.0.0"
)

# Include the API router
app.include_router(api_router)


@app.exception_handler(LunchError)
async def lunch_error_handler(request: Request, exc: LunchError) -> PlainTextResponse:
    """Logs the failure and returns its message as the plain-text body Slack shows the user."""
    if isinstance(exc, StoreFailure):
        tag = "DatastorePutError" if exc.operation == "put" else "DatastoreGetAllError"
    else:
        tag = type(exc).__name__
    logger.error("%s on %s %s: %s", tag, request.method, request.url.path, exc)
    return PlainTextResponse(str(exc), status_code=exc.status_code)


@app.get("/health", tags=["Monitoring"])
async def health_check():
    """Simple health check endpoint to confirm the service is running."""
    return {"status": "ok"}
