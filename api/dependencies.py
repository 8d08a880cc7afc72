"""
Shared Dependencies
Global clients and configuration shared across all routes
"""
from typing import Optional, Dict
from vibesana.config import Config, DEFAULT_CORS_HEADERS
from vibesana.llm_client import OpenAICompletionClient
from vibesana.tracing import TraceRecorder
from vibesana.breakdown_service import TaskBreakdownService
import logging

logger = logging.getLogger(__name__)

# Global variables for clients (initialized on startup)
config: Optional[Config] = None
completion_client: Optional[OpenAICompletionClient] = None
trace_recorder: Optional[TraceRecorder] = None
breakdown_service: Optional[TaskBreakdownService] = None

# CORS headers attached to every response (overridden from config on startup)
cors_headers: Dict[str, str] = dict(DEFAULT_CORS_HEADERS)


def get_config() -> Config:
    """Get Config instance"""
    if config is None:
        raise RuntimeError("Config not initialized - ensure startup event completed")
    return config


def get_completion_client() -> OpenAICompletionClient:
    """Get OpenAICompletionClient instance"""
    if completion_client is None:
        raise RuntimeError("Completion client not initialized - ensure startup event completed")
    return completion_client


def get_trace_recorder() -> Optional[TraceRecorder]:
    """Get TraceRecorder instance"""
    return trace_recorder


def get_breakdown_service() -> TaskBreakdownService:
    """Get TaskBreakdownService instance"""
    if breakdown_service is None:
        raise RuntimeError("Breakdown service not initialized - ensure startup event completed")
    return breakdown_service


def get_cors_headers() -> Dict[str, str]:
    return cors_headers


def initialize_services(config_path: Optional[str] = None):
    """Initialize all clients and services"""
    global config, completion_client, trace_recorder, breakdown_service

    try:
        config = Config(config_path)

        cors_headers.clear()
        cors_headers.update(config.get_cors_headers())

        # Validate config before initializing clients
        if not config.validate():
            raise ValueError("Configuration validation failed")

        breakdown_service = TaskBreakdownService.from_config(config)
        completion_client = breakdown_service.completion_client
        trace_recorder = breakdown_service.trace_recorder

        if trace_recorder.enabled:
            logger.info("Tracing is ENABLED (Opik)")
        else:
            logger.info("Opik API key not found - tracing is DISABLED")

        logger.info("All services initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize services: {e}")
        raise
