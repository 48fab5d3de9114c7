from types import SimpleNamespace

import pytest
from google.genai import errors

from services.errors import (
    AnalysisError,
    InvalidUpstreamRequest,
    ServiceUnavailable,
    UpstreamAuthError,
    UpstreamRateLimited,
)
from services.gemini_client import GeminiClient, classify_api_error


def _api_error(cls, code: int) -> errors.APIError:
    return cls(code, {"error": {"code": code, "message": "boom", "status": "ERR"}})


@pytest.mark.parametrize(
    "cls,code,expected",
    [
        (errors.ClientError, 401, UpstreamAuthError),
        (errors.ClientError, 403, UpstreamAuthError),
        (errors.ClientError, 429, UpstreamRateLimited),
        (errors.ClientError, 400, InvalidUpstreamRequest),
        (errors.ServerError, 503, ServiceUnavailable),
    ],
)
def test_classify_api_error(cls, code, expected):
    assert type(classify_api_error(_api_error(cls, code))) is expected


def test_classify_unknown_code_is_terminal():
    result = classify_api_error(_api_error(errors.ClientError, 404))
    assert type(result) is AnalysisError
    assert not result.retryable


def test_rate_limited_is_retryable_auth_is_not():
    assert classify_api_error(_api_error(errors.ClientError, 429)).retryable
    assert not classify_api_error(_api_error(errors.ClientError, 401)).retryable


class _FakeModels:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.kwargs = None

    async def generate_content(self, **kwargs):
        self.kwargs = kwargs
        if self.error:
            raise self.error
        return self.result


def _client_with(models: _FakeModels) -> GeminiClient:
    client = GeminiClient(api_key="test-key", model_name="gemini-test")
    client._client = SimpleNamespace(aio=SimpleNamespace(models=models))
    return client


def test_not_configured_without_key():
    assert not GeminiClient(api_key="").configured
    assert GeminiClient(api_key="k").configured


@pytest.mark.asyncio
async def test_generate_without_key_raises_auth_error():
    with pytest.raises(UpstreamAuthError):
        await GeminiClient(api_key="").generate("prompt")


@pytest.mark.asyncio
async def test_generate_returns_text():
    models = _FakeModels(result=SimpleNamespace(text='{"score": 1}'))
    text = await _client_with(models).generate("hello")
    assert text == '{"score": 1}'
    assert models.kwargs["model"] == "gemini-test"
    assert models.kwargs["contents"] == "hello"


@pytest.mark.asyncio
async def test_generate_none_text_becomes_empty():
    models = _FakeModels(result=SimpleNamespace(text=None))
    assert await _client_with(models).generate("hello") == ""


@pytest.mark.asyncio
async def test_generate_classifies_api_errors():
    models = _FakeModels(error=_api_error(errors.ServerError, 500))
    with pytest.raises(ServiceUnavailable):
        await _client_with(models).generate("hello")
