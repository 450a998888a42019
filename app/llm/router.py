"""
Model router for selecting the model used by each pipeline feature.
"""
import logging
from app.core.config import OPENAI_API_KEY, OPENAI_MODEL

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o"

# Feature -> model mapping
MODEL_ROUTING = {
    "resume_analysis": "gpt-4o",  # Scoring needs the stronger model
    "resume_optimize": "gpt-4o",
}


def get_model_for_feature(feature: str) -> str:
    """
    Get appropriate model for a feature.

    OPENAI_MODEL, when set, overrides the routing table.

    Args:
        feature: Feature name (e.g., "resume_analysis", "resume_optimize")

    Returns:
        Model identifier string
    """
    if OPENAI_MODEL:
        return OPENAI_MODEL
    return MODEL_ROUTING.get(feature, DEFAULT_MODEL)


def is_model_available() -> bool:
    """Check if the model service is configured."""
    return bool(OPENAI_API_KEY)
