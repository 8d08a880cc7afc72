from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Any
import logging

import openai
from openai import AsyncOpenAI

from .config import DEFAULT_MODEL, DEFAULT_TEMPERATURE, DEFAULT_MAX_TOKENS, DEFAULT_TIMEOUT_SECONDS
from .exceptions import ProviderError
from .models import CompletionResult, TokenUsage

logger = logging.getLogger(__name__)


class CompletionClient(ABC):
    """Abstract base class for chat-completion clients"""

    def __init__(self, model: str, temperature: float = DEFAULT_TEMPERATURE, max_tokens: int = DEFAULT_MAX_TOKENS):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    @abstractmethod
    async def complete(self, messages: List[Dict[str, str]]) -> CompletionResult:
        """
        Run one chat completion and return the raw assistant text

        Raises:
            ProviderError: the provider did not return a successful completion
        """
        pass


class OpenAICompletionClient(CompletionClient):
    """OpenAI chat-completion client. Makes exactly one attempt per call."""

    def __init__(self, api_key: Optional[str], model: str = DEFAULT_MODEL,
                 temperature: float = DEFAULT_TEMPERATURE, max_tokens: int = DEFAULT_MAX_TOKENS,
                 timeout: float = DEFAULT_TIMEOUT_SECONDS, base_url: Optional[str] = None,
                 client: Optional[Any] = None):
        super().__init__(model, temperature, max_tokens)
        self.timeout = timeout
        if client is not None:
            self.client = client
        else:
            self.client = AsyncOpenAI(
                api_key=api_key,
                base_url=base_url,
                timeout=timeout,
                max_retries=0
            )
        logger.info(f"OpenAICompletionClient initialized: model={model}, temperature={temperature}, "
                    f"max_tokens={max_tokens}, timeout={timeout}s")

    @classmethod
    def from_config(cls, llm_config: Dict[str, Any]) -> "OpenAICompletionClient":
        """Create a client from Config.get_llm_config()"""
        return cls(
            api_key=llm_config.get('api_key'),
            model=llm_config.get('model', DEFAULT_MODEL),
            temperature=llm_config.get('temperature', DEFAULT_TEMPERATURE),
            max_tokens=llm_config.get('max_tokens', DEFAULT_MAX_TOKENS),
            timeout=llm_config.get('timeout', DEFAULT_TIMEOUT_SECONDS),
            base_url=llm_config.get('base_url')
        )

    async def complete(self, messages: List[Dict[str, str]]) -> CompletionResult:
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=self.temperature,
                max_tokens=self.max_tokens
            )
        except openai.APIStatusError as e:
            body = self._response_body(e)
            logger.error(f"OpenAI API error: status={e.status_code} body={body}")
            raise ProviderError(status_code=e.status_code, body=body) from e
        except openai.APITimeoutError as e:
            logger.error(f"OpenAI API request timed out after {self.timeout}s")
            raise ProviderError(message="OpenAI API request timed out") from e
        except openai.APIConnectionError as e:
            logger.error(f"OpenAI API connection error: {e}")
            raise ProviderError(body=str(e)) from e

        if not response.choices:
            logger.error("OpenAI returned no choices")
            raise ProviderError(message="OpenAI API error: empty response")

        choice = response.choices[0]
        result = choice.message.content or ""
        finish_reason = choice.finish_reason

        if finish_reason == 'length':
            logger.warning(f"OpenAI response was truncated (finish_reason=length, max_tokens={self.max_tokens})")

        logger.info(f"OpenAI response length: {len(result)} characters, finish_reason: {finish_reason}")
        logger.debug(f"AI Response: {result}")

        return CompletionResult(
            text=result,
            model=getattr(response, 'model', None) or self.model,
            finish_reason=finish_reason,
            usage=self._usage(response)
        )

    @staticmethod
    def _response_body(error: "openai.APIStatusError") -> str:
        try:
            return error.response.text
        except Exception:
            return str(error.body) if error.body is not None else str(error)

    @staticmethod
    def _usage(response) -> Optional[TokenUsage]:
        usage = getattr(response, 'usage', None)
        if usage is None:
            return None
        return TokenUsage(
            prompt_tokens=getattr(usage, 'prompt_tokens', None),
            completion_tokens=getattr(usage, 'completion_tokens', None),
            total_tokens=getattr(usage, 'total_tokens', None)
        )
