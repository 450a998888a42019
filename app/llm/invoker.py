"""
Model invoker: sends a finished prompt to the model service and returns raw text.

This is the only latency-bound step of the analysis pipeline. Every call is
bounded by a timeout; retries are left to the caller.
"""
import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from typing import Optional

from app.core.config import OPENAI_TIMEOUT_S, OPENAI_TEMPERATURE
from app.llm.provider import LLMProvider, ServiceError, ServiceErrorKind
from app.llm.router import get_model_for_feature

logger = logging.getLogger(__name__)

JSON_RESPONSE_FORMAT = {"type": "json_object"}

# Shared by all invokers; a timed-out call keeps its worker until the provider returns
_executor = ThreadPoolExecutor(max_workers=8, thread_name_prefix="model-invoker")


class ModelInvoker:
    """Bounded-wait wrapper around an LLMProvider."""

    def __init__(
        self,
        provider: Optional[LLMProvider] = None,
        timeout_s: Optional[float] = None,
        temperature: Optional[float] = None,
    ):
        self.provider = provider
        if self.provider is None:
            try:
                from app.llm.openai_provider import OpenAIProvider
                self.provider = OpenAIProvider(timeout_s=timeout_s)
            except ServiceError as e:
                logger.warning(f"Model provider not available - analysis requests will fail: {e}")
                self.provider = None
        self.timeout_s = timeout_s if timeout_s is not None else OPENAI_TIMEOUT_S
        self.temperature = temperature if temperature is not None else OPENAI_TEMPERATURE

    @property
    def is_configured(self) -> bool:
        return self.provider is not None

    def invoke(self, prompt: str, feature: str = "resume_analysis", json_response: bool = True) -> str:
        """
        Send a prompt and return the raw completion text.

        Args:
            prompt: Fully built prompt
            feature: Routing key used to pick the model
            json_response: Ask the service for a JSON object response

        Returns:
            Raw model output (may be malformed; validation is the caller's job)

        Raises:
            ServiceError: Provider missing, unreachable, over quota, rejecting
                the request, or not answering within ``timeout_s``
        """
        if self.provider is None:
            raise ServiceError(ServiceErrorKind.NOT_CONFIGURED, "No model provider configured")

        model = get_model_for_feature(feature)
        kwargs = {}
        if json_response:
            kwargs["response_format"] = JSON_RESPONSE_FORMAT

        future = _executor.submit(
            self.provider.chat,
            messages=[{"role": "user", "content": prompt}],
            model=model,
            temperature=self.temperature,
            **kwargs
        )
        try:
            response = future.result(timeout=self.timeout_s)
        except FutureTimeoutError:
            future.cancel()
            logger.error(f"Model call timed out: feature={feature}, model={model}, timeout={self.timeout_s}s")
            raise ServiceError(ServiceErrorKind.TIMEOUT, f"No response within {self.timeout_s}s")
        except ServiceError:
            raise
        except Exception as e:
            logger.error(f"Unexpected model provider error: {type(e).__name__}: {e}", exc_info=True)
            raise ServiceError(ServiceErrorKind.UNAVAILABLE, str(e)) from e

        logger.info(
            f"Model call completed: feature={feature}, model={model}, "
            f"tokens={response.tokens_in + response.tokens_out}, cost=${response.cost_estimate:.5f}"
        )
        return response.content or ""
