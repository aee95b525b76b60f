import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from crawler_api.api.routes import router
from crawler_api.core.config import settings
from crawler_api.core.logging import configure_logging
from crawler_api.schemas import FetchResponse

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Set up logging on startup.
    """
    configure_logging()
    logger.info("Crawler API starting (proxy=%s)", settings.CRAWLER_PROXY or "none")

    yield

    logger.info("Crawler API shutting down")

app = FastAPI(
    title="Crawler API",
    description="Fetch a batch of pages concurrently and return their plain text",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(GZipMiddleware)

# Include API routes
app.include_router(router)

@app.exception_handler(RequestValidationError)
async def invalid_request_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies get the usual envelope with a 400 instead of FastAPI's 422."""
    msg = format_validation_error(exc)
    logger.info("Rejected %s %s: %s", request.method, request.url.path, msg)
    body = FetchResponse(code=status.HTTP_400_BAD_REQUEST, msg=msg)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())

def format_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        loc = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {error.get('msg')}" if loc else str(error.get("msg")))
    return "; ".join(parts) or "invalid request"

@app.get("/")
async def root():
    """Root endpoint with basic info"""
    return {
        "service": "Crawler API",
        "version": "1.0.0",
        "endpoints": {
            "fetch": "POST /fetch",
            "health": "GET /health"
        }
    }

def run():
    configure_logging()
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
