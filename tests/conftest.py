"""
Shared fixtures: environment, in-memory database, stub model provider and API client.
"""
import os

# Must be set before any app module reads its configuration
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_DIR"] = ""
os.environ.pop("OPENAI_API_KEY", None)

import time
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.base import Base
from app.core.auth_dependency import get_db
from app.llm.invoker import ModelInvoker
from app.llm.provider import LLMProvider, LLMResponse
from app.services.analysis_service import AnalysisOrchestrator, get_orchestrator


# Setup in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

STRONG_RESPONSE = (
    '{"score": 85, "analysis": {"summary": "Strong"}, '
    '"suggestions": ["Add metrics"], "skillsGap": []}'
)


class StubProvider(LLMProvider):
    """Returns canned completions (or raises) and records every call."""

    def __init__(self, responses: Optional[List[str]] = None, error: Optional[Exception] = None, delay: float = 0.0):
        self.responses = list(responses or [STRONG_RESPONSE])
        self.error = error
        self.delay = delay
        self.calls: List[Dict] = []

    def chat(self, messages, model, temperature=0.7, max_tokens=None, **kwargs):
        self.calls.append({"messages": messages, "model": model, "temperature": temperature, **kwargs})
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        content = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        return LLMResponse(content=content, tokens_in=100, tokens_out=50, model=model)


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=test_engine)
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def provider():
    return StubProvider()


@pytest.fixture
def orchestrator(provider):
    return AnalysisOrchestrator(invoker=ModelInvoker(provider=provider, timeout_s=5))


@pytest.fixture
def client(db, orchestrator):
    """API client bound to the test database and the stub model provider."""
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def register(client: TestClient, email: str = "jane@example.com", username: str = "jane") -> Dict:
    response = client.post(
        "/auth/register",
        json={"username": username, "email": email, "password": "testpass123"},
    )
    assert response.status_code == 201, response.text
    return response.json()


def auth_headers(token_response: Dict) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token_response['access_token']}"}
