"""
Trace Recorder
Best-effort Opik tracing of task breakdown requests. Nothing in this module ever
raises into the caller: every failure is logged and swallowed.
"""
import logging
from typing import Optional, List, Dict, Any, Callable

import opik

from .config import DEFAULT_MODEL, DEFAULT_OPIK_HOST, DEFAULT_OPIK_PROJECT
from .models import Task, TokenUsage, ParseStatus

logger = logging.getLogger(__name__)

TRACE_NAME = "ai-task-breakdown"
TRACE_TAGS = ["ai-task-breakdown", "openai"]
SUCCESS_TAGS = ["success", "task-generation"]
ERROR_TAGS = ["error", "function-error"]


class TraceRecorder:
    """
    Records one Opik trace per breakdown request.

    The Opik client is created on first use, and only if an API key is configured.
    Once created it is reused for the life of the process. Concurrent first calls
    may each build a client; the last one assigned wins.
    """

    def __init__(self, api_key: Optional[str] = None, host: str = DEFAULT_OPIK_HOST,
                 project_name: str = DEFAULT_OPIK_PROJECT, workspace: Optional[str] = None,
                 model: str = DEFAULT_MODEL, client_factory: Optional[Callable[..., Any]] = None):
        self.api_key = api_key
        self.host = host
        self.project_name = project_name
        self.workspace = workspace
        self.model = model
        self._client_factory = client_factory or opik.Opik
        self._client = None

    @classmethod
    def from_config(cls, tracing_config: Dict[str, Any], model: str = DEFAULT_MODEL) -> "TraceRecorder":
        """Create a recorder from Config.get_tracing_config()"""
        return cls(
            api_key=tracing_config.get('api_key'),
            host=tracing_config.get('host', DEFAULT_OPIK_HOST),
            project_name=tracing_config.get('project_name', DEFAULT_OPIK_PROJECT),
            workspace=tracing_config.get('workspace'),
            model=model
        )

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    def get_client(self):
        """Return the shared Opik client, or None when tracing is unavailable"""
        if not self.enabled:
            return None
        if self._client is not None:
            return self._client

        try:
            client = self._client_factory(
                api_key=self.api_key,
                host=self.host,
                project_name=self.project_name,
                workspace=self.workspace
            )
        except Exception as e:
            logger.error(f"Failed to initialize Opik client: {e}")
            return None

        self._client = client
        logger.info(f"Opik client initialized for project {self.project_name}")
        return client

    def start_trace(self, description: str, request_id: Optional[str] = None):
        """
        Open a trace for one breakdown request

        Returns:
            The trace handle, or None if tracing is disabled or failed to start
        """
        client = self.get_client()
        if client is None:
            return None

        try:
            trace = client.trace(
                name=TRACE_NAME,
                input={"description": description},
                tags=list(TRACE_TAGS),
                metadata={"request_id": request_id}
            )
            logger.debug(f"Opik trace started for request {request_id}")
            return trace
        except Exception as e:
            logger.error(f"Failed to start Opik trace: {e}")
            return None

    def record_success(self, trace, tasks: List[Task], duration_ms: int,
                       usage: Optional[TokenUsage] = None,
                       parse_status: ParseStatus = ParseStatus.PARSED,
                       model: Optional[str] = None) -> None:
        """
        Attach the generated tasks and timing/usage metadata, then flush

        `model` is the id the provider reported; the configured model is used when it is missing.
        """
        if trace is None:
            return

        try:
            tags = list(SUCCESS_TAGS)
            if parse_status == ParseStatus.FALLBACK:
                tags.append("fallback")
            trace.update(
                output={"tasks": [task.dict() for task in tasks], "task_count": len(tasks)},
                metadata={
                    "duration_ms": duration_ms,
                    "model": model or self.model,
                    "prompt_tokens": usage.prompt_tokens if usage else None,
                    "completion_tokens": usage.completion_tokens if usage else None,
                    "parse_status": ParseStatus(parse_status).value,
                },
                tags=tags
            )
            trace.end()
            self._flush()
            logger.debug("Opik trace updated successfully")
        except Exception as e:
            logger.error(f"Failed to update trace: {e}")

    def record_error(self, trace, error_message: str) -> None:
        """Attach the error message and error tags, then flush"""
        if trace is None:
            return

        try:
            trace.update(
                output={"error": error_message},
                tags=list(ERROR_TAGS)
            )
            trace.end()
            self._flush()
        except Exception as e:
            logger.error(f"Failed to update trace with error: {e}")

    def flush(self) -> None:
        """Flush pending traces, if a client was ever created"""
        try:
            self._flush()
        except Exception as e:
            logger.error(f"Failed to flush Opik client: {e}")

    def _flush(self) -> None:
        if self._client is not None:
            self._client.flush()
