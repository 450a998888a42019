"""
OpenAI provider implementation.
"""
import logging
from typing import Optional, Dict
from openai import (
    OpenAI,
    APIError,
    APITimeoutError,
    APIConnectionError,
    RateLimitError,
    APIStatusError,
)

from app.core.config import OPENAI_API_KEY, OPENAI_TIMEOUT_S
from app.llm.provider import LLMProvider, LLMResponse, ServiceError, ServiceErrorKind

logger = logging.getLogger(__name__)

# Model pricing per 1M tokens (input/output)
MODEL_PRICING = {
    "gpt-4o-mini": {"input": 0.15, "output": 0.60},  # $0.15/$0.60 per 1M tokens
    "gpt-4o": {"input": 2.50, "output": 10.00},  # $2.50/$10.00 per 1M tokens
    "gpt-4": {"input": 30.00, "output": 60.00},  # $30/$60 per 1M tokens
}


class OpenAIProvider(LLMProvider):
    """OpenAI provider using official OpenAI SDK."""

    def __init__(self, api_key: Optional[str] = None, timeout_s: Optional[float] = None):
        """Initialize OpenAI client. Retries are disabled; callers own retry policy."""
        self.api_key = api_key or OPENAI_API_KEY
        if not self.api_key:
            raise ServiceError(ServiceErrorKind.NOT_CONFIGURED, "OPENAI_API_KEY not configured")
        self.timeout_s = timeout_s or OPENAI_TIMEOUT_S
        self.client = OpenAI(api_key=self.api_key, timeout=self.timeout_s, max_retries=0)
        logger.info("OpenAI provider initialized")

    def chat(
        self,
        messages: list[Dict[str, str]],
        model: str = "gpt-4o",
        temperature: float = 0.3,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> LLMResponse:
        """Generate a chat completion."""
        try:
            response = self.client.chat.completions.create(
                model=model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens or 2000,
                **kwargs
            )
        except APITimeoutError as e:
            logger.error(f"OpenAI request timed out after {self.timeout_s}s: {e}")
            raise ServiceError(ServiceErrorKind.TIMEOUT, str(e)) from e
        except APIConnectionError as e:
            logger.error(f"OpenAI connection error: {e}")
            raise ServiceError(ServiceErrorKind.UNAVAILABLE, str(e)) from e
        except RateLimitError as e:
            logger.error(f"OpenAI rate limit / quota error: {e}")
            raise ServiceError(ServiceErrorKind.QUOTA, str(e)) from e
        except APIStatusError as e:
            logger.error(f"OpenAI API error (status={e.status_code}): {e}", exc_info=True)
            kind = ServiceErrorKind.UNAVAILABLE if e.status_code >= 500 else ServiceErrorKind.REJECTED
            raise ServiceError(kind, str(e)) from e
        except APIError as e:
            logger.error(f"OpenAI API error: {e}", exc_info=True)
            raise ServiceError(ServiceErrorKind.UNAVAILABLE, str(e)) from e

        content = response.choices[0].message.content or ""
        usage = response.usage
        tokens_in = usage.prompt_tokens if usage else 0
        tokens_out = usage.completion_tokens if usage else 0
        cost = self.estimate_cost(tokens_in, tokens_out, model)

        return LLMResponse(
            content=content,
            tokens_in=tokens_in,
            tokens_out=tokens_out,
            model=model,
            cost_estimate=cost,
            metadata={
                "finish_reason": response.choices[0].finish_reason,
            }
        )

    def estimate_cost(self, tokens_in: int, tokens_out: int, model: str) -> float:
        """Estimate cost in USD."""
        pricing = MODEL_PRICING.get(model, MODEL_PRICING["gpt-4o"])
        cost_input = (tokens_in / 1_000_000) * pricing["input"]
        cost_output = (tokens_out / 1_000_000) * pricing["output"]
        return cost_input + cost_output
