"""
LLM Provider interface for abstracting LLM implementations.
"""
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Dict, Any
from dataclasses import dataclass


class ServiceErrorKind(str, Enum):
    """Why a call to the model service failed."""
    TIMEOUT = "timeout"
    UNAVAILABLE = "unavailable"
    QUOTA = "quota"
    REJECTED = "rejected"
    NOT_CONFIGURED = "not_configured"


class ServiceError(Exception):
    """The model service could not produce a completion."""

    def __init__(self, kind: ServiceErrorKind, message: str = ""):
        self.kind = ServiceErrorKind(kind)
        self.message = message or self.kind.value
        super().__init__(f"{self.kind.value}: {self.message}")


@dataclass
class LLMResponse:
    """Standardized LLM response."""
    content: str
    tokens_in: int = 0
    tokens_out: int = 0
    model: str = ""
    cost_estimate: float = 0.0
    metadata: Dict[str, Any] = None

    def __post_init__(self):
        if self.metadata is None:
            self.metadata = {}


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    @abstractmethod
    def chat(
        self,
        messages: list[Dict[str, str]],
        model: str,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> LLMResponse:
        """
        Generate a chat completion.

        Args:
            messages: List of message dicts with 'role' and 'content'
            model: Model identifier
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            **kwargs: Additional provider-specific parameters
                (e.g. response_format, timeout)

        Returns:
            LLMResponse with content and metadata

        Raises:
            ServiceError: When the service is unreachable, times out,
                or rejects the request
        """
        pass

    def estimate_cost(self, tokens_in: int, tokens_out: int, model: str) -> float:
        """
        Estimate cost for a request.

        Args:
            tokens_in: Input tokens
            tokens_out: Output tokens
            model: Model identifier

        Returns:
            Estimated cost in USD
        """
        # Providers should override with actual pricing
        return 0.0
