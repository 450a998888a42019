"""
Unit tests for the model invoker and the OpenAI provider's error mapping.
No network calls: the SDK client is replaced by a fake.
"""
from types import SimpleNamespace

import httpx
import openai
import pytest

from conftest import StubProvider
from app.llm.invoker import ModelInvoker
from app.llm.openai_provider import OpenAIProvider
from app.llm.provider import ServiceError, ServiceErrorKind
from app.llm.router import DEFAULT_MODEL, get_model_for_feature

REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


def _fake_client(create):
    return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))


def _raising(error):
    def create(**kwargs):
        raise error
    return create


def _completion(content):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content), finish_reason="stop")],
        usage=SimpleNamespace(prompt_tokens=1000, completion_tokens=500),
    )


@pytest.fixture
def openai_provider():
    return OpenAIProvider(api_key="sk-test", timeout_s=5)


def test_invoke_returns_raw_text_and_requests_json():
    provider = StubProvider(responses=['{"score": 1}'])
    invoker = ModelInvoker(provider=provider, timeout_s=5, temperature=0.2)

    assert invoker.invoke("prompt text") == '{"score": 1}'

    call = provider.calls[0]
    assert call["messages"] == [{"role": "user", "content": "prompt text"}]
    assert call["model"] == get_model_for_feature("resume_analysis")
    assert call["temperature"] == 0.2
    assert call["response_format"] == {"type": "json_object"}


def test_plain_text_invoke_has_no_response_format():
    provider = StubProvider(responses=["Rewritten resume"])
    ModelInvoker(provider=provider, timeout_s=5).invoke("prompt", feature="resume_optimize", json_response=False)
    assert "response_format" not in provider.calls[0]


def test_slow_provider_times_out():
    invoker = ModelInvoker(provider=StubProvider(delay=1.0), timeout_s=0.05)

    with pytest.raises(ServiceError) as exc_info:
        invoker.invoke("prompt")
    assert exc_info.value.kind == ServiceErrorKind.TIMEOUT


def test_service_errors_pass_through():
    invoker = ModelInvoker(provider=StubProvider(error=ServiceError(ServiceErrorKind.QUOTA, "over quota")), timeout_s=5)

    with pytest.raises(ServiceError) as exc_info:
        invoker.invoke("prompt")
    assert exc_info.value.kind == ServiceErrorKind.QUOTA


def test_unexpected_provider_error_is_unavailable():
    invoker = ModelInvoker(provider=StubProvider(error=RuntimeError("socket closed")), timeout_s=5)

    with pytest.raises(ServiceError) as exc_info:
        invoker.invoke("prompt")
    assert exc_info.value.kind == ServiceErrorKind.UNAVAILABLE


def test_missing_api_key_leaves_invoker_unconfigured():
    invoker = ModelInvoker(timeout_s=5)

    assert invoker.is_configured is False
    with pytest.raises(ServiceError) as exc_info:
        invoker.invoke("prompt")
    assert exc_info.value.kind == ServiceErrorKind.NOT_CONFIGURED


def test_model_routing_defaults():
    assert get_model_for_feature("resume_analysis") == "gpt-4o"
    assert get_model_for_feature("something_else") == DEFAULT_MODEL


def test_openai_provider_success(openai_provider):
    openai_provider.client = _fake_client(lambda **kwargs: _completion('{"score": 90}'))

    response = openai_provider.chat([{"role": "user", "content": "hi"}], model="gpt-4o-mini")

    assert response.content == '{"score": 90}'
    assert response.tokens_in == 1000
    assert response.tokens_out == 500
    assert response.cost_estimate == pytest.approx(0.00045)
    assert response.metadata["finish_reason"] == "stop"


@pytest.mark.parametrize("error, kind", [
    (openai.APITimeoutError(request=REQUEST), ServiceErrorKind.TIMEOUT),
    (openai.APIConnectionError(request=REQUEST), ServiceErrorKind.UNAVAILABLE),
    (
        openai.RateLimitError("quota", response=httpx.Response(429, request=REQUEST), body=None),
        ServiceErrorKind.QUOTA,
    ),
    (
        openai.InternalServerError("boom", response=httpx.Response(500, request=REQUEST), body=None),
        ServiceErrorKind.UNAVAILABLE,
    ),
    (
        openai.BadRequestError("bad", response=httpx.Response(400, request=REQUEST), body=None),
        ServiceErrorKind.REJECTED,
    ),
])
def test_openai_errors_map_to_service_errors(openai_provider, error, kind):
    openai_provider.client = _fake_client(_raising(error))

    with pytest.raises(ServiceError) as exc_info:
        openai_provider.chat([{"role": "user", "content": "hi"}], model="gpt-4o")
    assert exc_info.value.kind == kind


def test_openai_provider_requires_api_key():
    with pytest.raises(ServiceError) as exc_info:
        OpenAIProvider(api_key=None)
    assert exc_info.value.kind == ServiceErrorKind.NOT_CONFIGURED
