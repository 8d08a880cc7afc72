"""
Health Routes
Health check endpoints
"""
from fastapi import APIRouter
from fastapi.responses import JSONResponse
from datetime import datetime
from ..dependencies import get_config, get_trace_recorder

router = APIRouter()


@router.get("/", tags=["Health"])
async def root():
    """Basic health check endpoint"""
    return {
        "message": "Vibesana AI Task Breakdown API",
        "status": "healthy",
        "version": "1.0.0",
        "docs_url": "/docs",
        "redoc_url": "/redoc"
    }


@router.get("/health", tags=["Health"])
async def health_check():
    """Report whether the LLM and tracing integrations are configured"""
    try:
        config = get_config()
        recorder = get_trace_recorder()
        llm_config = config.get_llm_config()

        health_status = {
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
            "services": {
                "llm": "configured" if llm_config.get('api_key') else "missing api key",
                "tracing": "enabled" if recorder is not None and recorder.enabled else "disabled"
            },
            "model": llm_config.get('model')
        }
        if not llm_config.get('api_key'):
            health_status["status"] = "degraded"

        return health_status
    except Exception as e:
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "error": str(e),
                "timestamp": datetime.now().isoformat()
            }
        )
