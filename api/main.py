"""
Main FastAPI Application
FastAPI app creation, CORS handling, and startup/shutdown events
"""
from fastapi import FastAPI, Request, Response
import logging

from vibesana.logging_setup import setup_logging
from . import dependencies
from .dependencies import initialize_services, get_cors_headers
from .routes import api_router

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Vibesana AI Task Breakdown",
    description="Breaks free-text project descriptions into structured, prioritized task lists using a hosted LLM.",
    version="1.0.0",
    license_info={
        "name": "MIT License",
        "url": "https://opensource.org/licenses/MIT"
    },
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)


@app.middleware("http")
async def cors_middleware(request: Request, call_next):
    """Answer preflight requests directly and attach CORS headers to every response"""
    headers = get_cors_headers()
    if request.method == "OPTIONS":
        origin = request.headers.get("origin", "unknown")
        logger.debug(f"CORS OPTIONS request from origin: {origin}, path: {request.url.path}")
        return Response(status_code=200, headers=headers)

    response = await call_next(request)
    response.headers.update(headers)
    return response


# Include all routers
app.include_router(api_router)


# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize all clients and services on startup"""
    setup_logging()
    initialize_services()
    setup_logging(level=dependencies.get_config().get_log_level())


# Shutdown event
@app.on_event("shutdown")
async def shutdown_event():
    """Flush any pending traces on shutdown"""
    logger.info("Application shutting down")
    recorder = dependencies.get_trace_recorder()
    if recorder is not None:
        recorder.flush()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
