"""
OpenAI Reasoning Service - ReasoningProvider using any OpenAI-compatible API.

Makes a single structured-output chat completion per request, with one
bounded retry for transient failures and typed error normalization.
"""
from typing import Dict, Any, Optional, Tuple
import copy
import logging

import openai
from openai import AsyncOpenAI
from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_fixed,
)
from tenacity import RetryCallState

from core.errors import APIError, QuotaExceededError
from core.llm.interfaces import ReasoningProvider, ReasoningResponse

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Retry helpers
# ---------------------------------------------------------------------------

def _is_transient(exc: BaseException) -> bool:
    """Return True for timeouts, connection failures and 5xx responses."""
    return isinstance(exc, (
        openai.APITimeoutError,
        openai.APIConnectionError,
        openai.InternalServerError,
    ))


def _log_retry(retry_state: RetryCallState) -> None:
    """Log a warning before the retry sleep."""
    exc = retry_state.outcome.exception()
    wait = retry_state.next_action.sleep if retry_state.next_action else 0
    logger.warning(
        "Transient reasoning API error (attempt %s). Retrying in %.1fs. Details: %s",
        retry_state.attempt_number, wait, exc,
    )


def _normalize_error(exc: openai.OpenAIError) -> Exception:
    """Map SDK exceptions onto the scoring error taxonomy."""
    if isinstance(exc, openai.RateLimitError):
        return QuotaExceededError(
            "The reasoning service rate limit or quota was exceeded. Please try again later."
        )
    if isinstance(exc, openai.AuthenticationError):
        return APIError("The reasoning service rejected the configured credentials.", 401)
    if isinstance(exc, openai.APIStatusError):
        return APIError(f"The reasoning service returned an error ({exc.status_code}).", exc.status_code)
    if isinstance(exc, openai.APITimeoutError):
        return APIError("The reasoning service timed out.")
    if isinstance(exc, openai.APIConnectionError):
        return APIError("Could not reach the reasoning service.")
    return APIError(f"Reasoning service call failed: {exc}")


def _unwrap_schema_spec(spec: Dict[str, Any]) -> Tuple[str, bool, Dict[str, Any]]:
    """Unwrap a schema spec to extract name, strict flag, and raw JSON schema.

    Args:
        spec: Either a wrapped spec {'name': str, 'strict': bool, 'schema': {...}}
              or a raw JSON schema dict

    Returns:
        Tuple of (name, strict, raw_schema)
    """
    if isinstance(spec, dict) and "schema" in spec and "name" in spec:
        return spec.get("name", "reasoning_response"), bool(spec.get("strict", False)), spec["schema"]
    return "reasoning_response", False, spec


class OpenAIReasoningService(ReasoningProvider):
    """
    OpenAI-compatible reasoning service.

    The SDK's own retries are disabled so that the only retry is the single
    bounded one configured here. Every request carries an explicit timeout.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model_config: Optional[Dict[str, Any]] = None,
        request_timeout_seconds: float = 20.0,
        max_transient_retries: int = 1,
        retry_wait_seconds: float = 1.0
    ):
        client_kwargs = {
            'timeout': request_timeout_seconds,
            'max_retries': 0,
        }
        if api_key:
            client_kwargs['api_key'] = api_key
        if base_url:
            client_kwargs['base_url'] = base_url

        self.client = AsyncOpenAI(**client_kwargs)

        self.model_config = model_config or {}
        self.model = self.model_config.get('model', 'gpt-4o-mini')
        self.temperature = self.model_config.get('temperature', 0.0)
        self.max_tokens = self.model_config.get('max_tokens', 1500)
        self.max_attempts = 1 + max_transient_retries
        self.retry_wait_seconds = retry_wait_seconds

    async def _create_completion(self, messages, response_format):
        async for attempt in AsyncRetrying(
            retry=retry_if_exception(_is_transient),
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_fixed(self.retry_wait_seconds),
            before_sleep=_log_retry,
            reraise=True,
        ):
            with attempt:
                return await self.client.chat.completions.create(
                    model=self.model,
                    messages=messages,
                    temperature=self.temperature,
                    max_tokens=self.max_tokens,
                    response_format=response_format,
                )

    async def complete_json(
        self,
        system_prompt: str,
        user_message: str,
        schema_spec: Dict[str, Any]
    ) -> ReasoningResponse:
        """Request a JSON document adhering to a schema.

        Raises:
            QuotaExceededError: provider answered 429
            APIError: transport failure, other non-2xx status, or empty response
            ValueError: schema_spec is not a JSON Schema object
        """
        name, strict, raw_schema = _unwrap_schema_spec(schema_spec)
        runtime_schema = copy.deepcopy(raw_schema)

        if runtime_schema.get("type") != "object" or "properties" not in runtime_schema:
            raise ValueError(f"Not a valid JSON Schema object. Top-level keys: {list(runtime_schema.keys())}")

        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_message},
        ]
        response_format = {
            "type": "json_schema",
            "json_schema": {
                "name": name,
                "schema": runtime_schema,
                "strict": strict,
            },
        }

        try:
            response = await self._create_completion(messages, response_format)
        except openai.OpenAIError as e:
            logger.error(f"Reasoning call failed: {e}")
            raise _normalize_error(e) from e

        try:
            content = response.choices[0].message.content
        except (IndexError, AttributeError) as e:
            raise APIError("The reasoning service returned a malformed response.") from e
        if not content:
            raise APIError("The reasoning service returned an empty response.")

        usage = getattr(response, "usage", None)
        tokens_used = getattr(usage, "total_tokens", None) if usage else None

        logger.debug(f"Reasoning response ({self.model}, {tokens_used} tokens): {content}")

        return ReasoningResponse(
            content=content,
            tokens_used=tokens_used,
            model=getattr(response, "model", None) or self.model,
        )
