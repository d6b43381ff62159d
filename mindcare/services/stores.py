"""
Session and event collaborators.

The assessment service persists chat sessions through a `SessionStore`
and reports usage through an `EventSink`. Both are protocols so a real
backend can be injected; the in-memory versions back the API process and
the tests.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol

from mindcare.core.recommendation import AssessmentState, TherapyPlan


@dataclass
class ChatMessage:
    """One line of the chat transcript."""
    role: str                    # "user" | "bot"
    content: str
    timestamp: datetime

    def to_dict(self) -> dict:
        return {"role": self.role, "content": self.content, "timestamp": self.timestamp.isoformat()}


@dataclass
class ChatSession:
    """Everything kept for one user between requests."""
    session_id: str
    user_id: str
    last_updated: datetime
    respondent_name: Optional[str] = None
    state: AssessmentState = field(default_factory=AssessmentState)
    messages: List[ChatMessage] = field(default_factory=list)
    accepted_plan: Optional[TherapyPlan] = None

    def add_message(self, role: str, content: str, now: datetime) -> None:
        self.messages.append(ChatMessage(role=role, content=content, timestamp=now))
        self.last_updated = now

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "user_id": self.user_id,
            "respondent_name": self.respondent_name,
            "assessment": self.state.to_dict(),
            "messages": [m.to_dict() for m in self.messages],
            "accepted_plan": self.accepted_plan.to_dict() if self.accepted_plan else None,
            "last_updated": self.last_updated.isoformat(),
        }


class SessionStore(Protocol):
    def get(self, user_id: str) -> Optional[ChatSession]: ...

    def save(self, session: ChatSession) -> None: ...

    def delete(self, user_id: str) -> None: ...


class EventSink(Protocol):
    def emit(self, event_type: str, user_id: str, data: Optional[Dict[str, Any]] = None) -> None: ...


class InMemorySessionStore:
    """One session per user id, held in a dict."""

    def __init__(self):
        self._sessions: Dict[str, ChatSession] = {}

    def get(self, user_id: str) -> Optional[ChatSession]:
        return self._sessions.get(user_id)

    def save(self, session: ChatSession) -> None:
        self._sessions[session.user_id] = session

    def delete(self, user_id: str) -> None:
        self._sessions.pop(user_id, None)

    def __len__(self) -> int:
        return len(self._sessions)


@dataclass
class AnalyticsEvent:
    event_type: str
    user_id: str
    timestamp: datetime
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "type": self.event_type,
            "user_id": self.user_id,
            "timestamp": self.timestamp.isoformat(),
            "data": self.data,
        }


class InMemoryEventSink:
    """Append-only event log with per-type counts."""

    def __init__(self, clock=None):
        self._clock = clock or datetime.now
        self.events: List[AnalyticsEvent] = []

    def emit(self, event_type: str, user_id: str, data: Optional[Dict[str, Any]] = None) -> None:
        self.events.append(AnalyticsEvent(
            event_type=event_type,
            user_id=user_id,
            timestamp=self._clock(),
            data=dict(data or {}),
        ))

    def counts(self) -> Dict[str, int]:
        return dict(Counter(e.event_type for e in self.events))

    def for_user(self, user_id: str) -> List[AnalyticsEvent]:
        return [e for e in self.events if e.user_id == user_id]
