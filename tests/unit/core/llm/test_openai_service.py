"""
Unit tests for the OpenAI reasoning service.

Tests verify:
- Schema unwrapping helper works correctly
- complete_json sends the proper JSON schema to the API
- Exactly one retry for transient failures, none for other errors
- SDK errors are normalized onto the scoring error taxonomy
"""
import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import httpx
import openai
import pytest

from core.errors import APIError, QuotaExceededError
from core.llm.openai_service import OpenAIReasoningService, _unwrap_schema_spec
from core.llm.schema_models import MATCH_ADJUSTMENT_SCHEMA

_REQUEST = httpx.Request("POST", "https://reasoning.test/v1/chat/completions")


def _status_error(cls, status_code):
    response = httpx.Response(status_code, request=_REQUEST)
    return cls(f"status {status_code}", response=response, body=None)


def _completion(content, total_tokens=321, model="gpt-test"):
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    response = MagicMock()
    response.choices = [choice]
    response.usage.total_tokens = total_tokens
    response.model = model
    return response


class TestUnwrapSchemaSpec:
    """Tests for the schema unwrapping helper."""

    def test_wrapper_schema_returns_name_strict_and_inner_schema(self):
        name, strict, raw_schema = _unwrap_schema_spec(MATCH_ADJUSTMENT_SCHEMA)

        assert name == "match_adjustment_schema"
        assert strict is False
        assert raw_schema.get("type") == "object"
        assert "adjustment" in raw_schema["properties"]

    def test_raw_schema_passes_through_unchanged(self):
        raw = {"type": "object", "properties": {"foo": {"type": "string"}}}
        name, strict, result = _unwrap_schema_spec(raw)

        assert name == "reasoning_response"
        assert strict is False
        assert result == raw


class TestCompleteJson:

    @pytest.fixture
    def service(self):
        svc = OpenAIReasoningService(
            api_key="test",
            model_config={"model": "gpt-test", "temperature": 0.0, "max_tokens": 500},
            retry_wait_seconds=0,
        )
        svc.client = MagicMock()
        svc.client.chat.completions.create = AsyncMock(
            return_value=_completion(json.dumps({"adjustment": 3, "reasoning": "ok"}))
        )
        return svc

    def _call(self, service):
        return asyncio.run(service.complete_json("system", "user", MATCH_ADJUSTMENT_SCHEMA))

    def test_returns_content_tokens_and_model(self, service):
        response = self._call(service)

        assert json.loads(response.content)["adjustment"] == 3
        assert response.tokens_used == 321
        assert response.model == "gpt-test"

    def test_sends_unwrapped_json_schema(self, service):
        self._call(service)

        call_kwargs = service.client.chat.completions.create.call_args[1]
        json_schema = call_kwargs["response_format"]["json_schema"]
        assert json_schema["name"] == "match_adjustment_schema"
        assert json_schema["schema"]["type"] == "object"
        assert "name" not in json_schema["schema"]
        assert call_kwargs["model"] == "gpt-test"
        assert call_kwargs["messages"][0] == {"role": "system", "content": "system"}

    def test_raises_on_invalid_schema(self, service):
        with pytest.raises(ValueError, match="Not a valid JSON Schema object"):
            asyncio.run(service.complete_json("system", "user", {"not": "a schema"}))

    def test_retries_once_on_server_error(self, service):
        service.client.chat.completions.create.side_effect = [
            _status_error(openai.InternalServerError, 503),
            _completion('{"adjustment": 1, "reasoning": "ok"}'),
        ]

        response = self._call(service)

        assert service.client.chat.completions.create.call_count == 2
        assert json.loads(response.content)["adjustment"] == 1

    def test_gives_up_after_second_transient_failure(self, service):
        service.client.chat.completions.create.side_effect = openai.APITimeoutError(request=_REQUEST)

        with pytest.raises(APIError, match="timed out"):
            self._call(service)
        assert service.client.chat.completions.create.call_count == 2

    def test_rate_limit_maps_to_quota_exceeded_without_retry(self, service):
        service.client.chat.completions.create.side_effect = _status_error(openai.RateLimitError, 429)

        with pytest.raises(QuotaExceededError):
            self._call(service)
        assert service.client.chat.completions.create.call_count == 1

    def test_client_error_is_not_retried(self, service):
        service.client.chat.completions.create.side_effect = _status_error(openai.BadRequestError, 400)

        with pytest.raises(APIError) as exc_info:
            self._call(service)
        assert exc_info.value.status_code == 400
        assert service.client.chat.completions.create.call_count == 1

    def test_authentication_error(self, service):
        service.client.chat.completions.create.side_effect = _status_error(openai.AuthenticationError, 401)

        with pytest.raises(APIError) as exc_info:
            self._call(service)
        assert exc_info.value.status_code == 401

    def test_empty_content_is_api_error(self, service):
        service.client.chat.completions.create.return_value = _completion("")

        with pytest.raises(APIError, match="empty"):
            self._call(service)

    def test_no_retry_when_disabled(self):
        svc = OpenAIReasoningService(api_key="test", max_transient_retries=0, retry_wait_seconds=0)
        svc.client = MagicMock()
        svc.client.chat.completions.create = AsyncMock(
            side_effect=_status_error(openai.InternalServerError, 500)
        )

        with pytest.raises(APIError):
            asyncio.run(svc.complete_json("system", "user", MATCH_ADJUSTMENT_SCHEMA))
        assert svc.client.chat.completions.create.call_count == 1
