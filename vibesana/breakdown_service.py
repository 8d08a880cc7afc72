"""
Task Breakdown Service
Orchestrates prompt building, the completion call, parsing and tracing for one
breakdown request.
"""
import asyncio
import logging
import time
import uuid
from typing import Optional, Callable, Any

from .exceptions import ValidationError, ProviderError
from .config import Config
from .llm_client import CompletionClient, OpenAICompletionClient
from .models import BreakdownResult
from .prompts import Prompts
from .response_parser import parse_tasks
from .tracing import TraceRecorder

logger = logging.getLogger(__name__)

DESCRIPTION_REQUIRED_MESSAGE = "Task description is required"


class TaskBreakdownService:
    """Breaks a free-text project description down into tasks"""

    def __init__(self, completion_client: CompletionClient, trace_recorder: Optional[TraceRecorder] = None):
        self.completion_client = completion_client
        # A recorder without an API key never opens a trace
        self.trace_recorder = trace_recorder or TraceRecorder(api_key=None)

    @classmethod
    def from_config(cls, config: Config) -> "TaskBreakdownService":
        """Build the service and its clients from configuration"""
        llm_config = config.get_llm_config()
        completion_client = OpenAICompletionClient.from_config(llm_config)
        trace_recorder = TraceRecorder.from_config(config.get_tracing_config(), model=llm_config["model"])
        return cls(completion_client, trace_recorder)

    @staticmethod
    def validate_description(description) -> str:
        if not isinstance(description, str) or not description.strip():
            raise ValidationError(DESCRIPTION_REQUIRED_MESSAGE)
        return description

    async def breakdown(self, description) -> BreakdownResult:
        """
        Run the full breakdown pipeline

        Args:
            description: Free-text project description

        Returns:
            BreakdownResult with a non-empty task list

        Raises:
            ValidationError: description missing or blank
            ProviderError: the completion request failed
        """
        description = self.validate_description(description)

        request_id = str(uuid.uuid4())
        started = time.monotonic()
        logger.info(f"Processing task breakdown {request_id} for: {description[:200]}")

        trace = await self._trace(self.trace_recorder.start_trace, description, request_id)

        try:
            messages = Prompts.build_breakdown_messages(description)
            completion = await self.completion_client.complete(messages)
            parsed = parse_tasks(completion.text)
        except ProviderError as e:
            logger.error(f"Task breakdown {request_id} failed at the provider: {e}")
            await self._trace(self.trace_recorder.record_error, trace, str(e))
            raise
        except Exception as e:
            logger.error(f"Error in task breakdown {request_id}: {e}")
            await self._trace(self.trace_recorder.record_error, trace, str(e))
            raise

        duration_ms = int((time.monotonic() - started) * 1000)
        await self._trace(
            self.trace_recorder.record_success,
            trace, parsed.tasks, duration_ms, completion.usage, parsed.status, completion.model
        )

        logger.info(f"Task breakdown {request_id} produced {len(parsed.tasks)} tasks "
                    f"({parsed.status.value}) in {duration_ms}ms")

        return BreakdownResult(
            request_id=request_id,
            tasks=parsed.tasks,
            parse_status=parsed.status,
            duration_ms=duration_ms,
            model=completion.model,
            usage=completion.usage
        )

    @staticmethod
    async def _trace(operation: Callable[..., Any], *args) -> Any:
        """Run a trace recorder call off the event loop; its failures never reach the caller"""
        try:
            return await asyncio.to_thread(operation, *args)
        except Exception as e:
            logger.error(f"Tracing call {getattr(operation, '__name__', operation)} failed: {e}")
            return None
