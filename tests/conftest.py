"""
Pytest Configuration and Fixtures

Shared fixtures for assessment engine, service and API tests.
"""
import pytest
from datetime import datetime, timezone
from pathlib import Path
import sys
from typing import Any, Dict, Optional

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from mindcare.core.recommendation import (  # noqa: E402
    QuestionKind,
    Questionnaire,
    get_questionnaire,
)
from mindcare.services import (  # noqa: E402
    AssessmentService,
    InMemoryEventSink,
    InMemorySessionStore,
)

DEFAULT_TEXT = "Things have been hard lately"


def build_responses(
    questionnaire: Questionnaire,
    rating: Any = 5,
    binary: Optional[str] = "No",
    text: str = DEFAULT_TEXT,
    overrides: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Answer every question of a questionnaire with one value per kind."""
    responses: Dict[str, Any] = {}
    for q in questionnaire:
        if q.kind == QuestionKind.RATING:
            responses[q.id] = rating
        elif q.kind == QuestionKind.BINARY:
            responses[q.id] = binary
        else:
            responses[q.id] = text
    responses.update(overrides or {})
    return responses


@pytest.fixture
def make_responses():
    """Factory fixture wrapping build_responses."""
    return build_responses


@pytest.fixture
def stress_questionnaire() -> Questionnaire:
    return get_questionnaire("stress")


@pytest.fixture
def other_questionnaire() -> Questionnaire:
    return get_questionnaire("other")


@pytest.fixture
def now() -> datetime:
    """Fixed clock for service tests."""
    return datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def event_sink() -> InMemoryEventSink:
    return InMemoryEventSink()


@pytest.fixture
def service(event_sink) -> AssessmentService:
    """Service backed by fresh in-memory collaborators."""
    return AssessmentService(store=InMemorySessionStore(), events=event_sink)


@pytest.fixture
def temp_user_id() -> str:
    """Generate a unique user id."""
    import uuid
    return f"user-{uuid.uuid4().hex[:8]}"
