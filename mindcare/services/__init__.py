"""
Service layer: assessment orchestration and its collaborators.
"""
from .assessment_service import AnswerResult, AssessmentService, format_question
from .stores import (
    AnalyticsEvent,
    ChatMessage,
    ChatSession,
    EventSink,
    InMemoryEventSink,
    InMemorySessionStore,
    SessionStore,
)

__all__ = [
    "AnswerResult",
    "AssessmentService",
    "format_question",
    "AnalyticsEvent",
    "ChatMessage",
    "ChatSession",
    "EventSink",
    "InMemoryEventSink",
    "InMemorySessionStore",
    "SessionStore",
]
