"""
Assessment Service

Drives one respondent's chat session: starting an assessment, feeding
answers through the state machine, generating and accepting the plan,
and gating new sessions while an accepted plan is still running.

The engine stays pure; this layer owns the clock, ids, the transcript,
session persistence and analytics events.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from mindcare.core.recommendation import (
    AssessmentPhase,
    Question,
    QuestionKind,
    RecommendationEngine,
    assessment,
    days_remaining,
    get_issue,
    get_questionnaire,
    is_plan_completed,
)
from mindcare.core.safety import detect_crisis
from mindcare.utils import get_logger
from mindcare.utils.exceptions import (
    AssessmentStateError,
    MindCareError,
    PlanInProgressError,
    SessionNotFoundError,
)
from .stores import ChatSession, EventSink, InMemoryEventSink, InMemorySessionStore, SessionStore

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_question(question: Question, index: int, total: int) -> str:
    """Chat rendering of a question: number, category badge, prompt, hint."""
    category = question.category.replace("-", " ") if question.category else "question"
    text = f"Question {index + 1} of {total} - {category}\n\n{question.text}"
    if question.kind == QuestionKind.RATING:
        text += f"\n\n(Please respond with a number from {question.scale_min} to {question.scale_max})"
    elif question.kind == QuestionKind.BINARY:
        text += f"\n\n({' / '.join(question.options)})"
    return text


def greeting(respondent_name: Optional[str]) -> str:
    name = respondent_name or "there"
    return (
        f"Hello {name}! I'm your AI mental health assistant. I'm here to provide "
        f"personalized support and create a therapy plan tailored just for you.\n\n"
        f"Would you like me to help you identify the best therapy approach for your current needs?"
    )


@dataclass
class AnswerResult:
    """Outcome of submitting one answer."""
    session: ChatSession
    error: Optional[MindCareError] = None
    crisis_phrases: List[str] = field(default_factory=list)

    @property
    def accepted(self) -> bool:
        return self.error is None

    @property
    def crisis_detected(self) -> bool:
        return bool(self.crisis_phrases)


class AssessmentService:
    """
    Stateless orchestration over injected collaborators.

    Args:
        store: Where chat sessions live between calls.
        events: Fire-and-forget analytics sink.
        engine: Recommendation engine used for plan summaries.
    """

    def __init__(
        self,
        store: Optional[SessionStore] = None,
        events: Optional[EventSink] = None,
        engine: Optional[RecommendationEngine] = None,
    ):
        self.store = store if store is not None else InMemorySessionStore()
        self.events = events if events is not None else InMemoryEventSink()
        self.engine = engine or RecommendationEngine()

    # ── Collaborator helpers ─────────────────────────────────────────────

    def _emit(self, event_type: str, user_id: str, data: Optional[Dict[str, Any]] = None) -> None:
        try:
            self.events.emit(event_type, user_id, data)
        except Exception as exc:
            # Analytics must never affect the assessment flow
            logger.error(f"AssessmentService: event sink failed for {event_type}: {exc}", exc_info=True)

    def _new_session(self, user_id: str, respondent_name: Optional[str], now: datetime) -> ChatSession:
        session = ChatSession(
            session_id=uuid.uuid4().hex,
            user_id=user_id,
            respondent_name=respondent_name,
            last_updated=now,
        )
        session.add_message("bot", greeting(respondent_name), now)
        return session

    def _ask_current(self, session: ChatSession, now: datetime) -> None:
        state = session.state
        question = state.current_question
        if question is not None:
            session.add_message("bot", format_question(question, state.index, state.total_questions), now)

    # ── Operations ───────────────────────────────────────────────────────

    def get_session(self, user_id: str) -> ChatSession:
        session = self.store.get(user_id)
        if session is None:
            raise SessionNotFoundError(f"No chat session for user {user_id}", user_id=user_id)
        return session

    def new_session(
        self,
        user_id: str,
        respondent_name: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> ChatSession:
        """
        Discard the current session and start a fresh one.

        Raises:
            PlanInProgressError: if an accepted plan has not yet run its course.
        """
        now = now or _utcnow()
        existing = self.store.get(user_id)
        if existing is not None and not is_plan_completed(existing.accepted_plan, now):
            remaining = days_remaining(existing.accepted_plan, now)
            logger.warning(f"New session refused for {user_id}: plan in progress ({remaining} day(s) left)")
            raise PlanInProgressError(
                "Please complete your current therapy plan before starting a new assessment.",
                days_remaining=remaining,
            )

        if existing is not None:
            respondent_name = respondent_name or existing.respondent_name
            self.store.delete(user_id)

        session = self._new_session(user_id, respondent_name, now)
        self.store.save(session)
        logger.info(f"New chat session {session.session_id} for {user_id}")
        return session

    def start_assessment(
        self,
        user_id: str,
        issue_key: str,
        respondent_name: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> ChatSession:
        """
        Begin the questionnaire for an issue, replacing any assessment in progress.

        Raises:
            UnknownIssueError: if the issue does not exist.
        """
        now = now or _utcnow()
        issue = get_issue(issue_key)
        questionnaire = get_questionnaire(issue.issue_id)

        session = self.store.get(user_id)
        if session is None:
            session = self._new_session(user_id, respondent_name, now)
        elif respondent_name:
            session.respondent_name = respondent_name

        session.add_message(
            "user",
            f"I'd like to start an assessment for {issue.name}. "
            f"This will help me understand your specific situation better.",
            now,
        )
        if questionnaire.is_free_form:
            intro = (
                "I understand you're dealing with something that's not on the list. That's okay - "
                "everyone's mental health journey is unique. I'll ask you some questions to better "
                "understand your situation and create a personalized therapy plan for you. Let's begin:"
            )
        else:
            intro = (
                f"Great! I'll ask you some questions about {issue.name.lower()} "
                f"to create the best therapy plan for you. Let's begin:"
            )
        session.add_message("bot", intro, now)

        session.state = assessment.start(questionnaire)
        self._ask_current(session, now)
        self.store.save(session)

        self._emit("assessment_started", user_id, {"issue_id": issue.issue_id})
        logger.info(f"Assessment started for {user_id}: {issue.issue_id} ({len(questionnaire)} questions)")
        return session

    def submit_answer(
        self,
        user_id: str,
        answer: Any,
        now: Optional[datetime] = None,
    ) -> AnswerResult:
        """
        Answer the current question.

        Invalid answers come back in ``AnswerResult.error`` with the state
        untouched and a re-prompt added to the transcript.

        Raises:
            SessionNotFoundError: no session for the user.
            AssessmentStateError: no question is being asked.
        """
        now = now or _utcnow()
        session = self.get_session(user_id)
        if session.state.phase != AssessmentPhase.ASKING:
            raise AssessmentStateError(
                "No question is awaiting an answer. Start an assessment first.",
                state=session.state.phase.value,
            )

        text = "" if answer is None else str(answer)
        crisis = detect_crisis(text)
        if crisis:
            logger.warning(f"Crisis phrases detected for {user_id}: {crisis}")
            self._emit("crisis_detected", user_id, {"phrases": crisis})

        session.add_message("user", text, now)
        new_state, error = assessment.advance(
            session.state,
            answer,
            plan_id=uuid.uuid4().hex,
            respondent_name=session.respondent_name,
        )

        if error is not None:
            logger.info(f"Answer rejected for {user_id} [{error.code}]: {error.message}")
            session.add_message("bot", error.message, now)
            self.store.save(session)
            return AnswerResult(session=session, error=error, crisis_phrases=crisis)

        session.state = new_state
        if new_state.phase == AssessmentPhase.PLAN_READY:
            plan = new_state.plan
            session.add_message("bot", self.engine.summarise(plan)["headline"], now)
            self._emit("plan_generated", user_id, {
                "plan_id": plan.plan_id,
                "issue": plan.issue,
                "severity": plan.severity.value,
                "modules": plan.module_ids,
            })
            logger.info(
                f"Plan generated for {user_id}: {plan.severity.value}, "
                f"{plan.plan_duration_days} days, modules={plan.module_ids}"
            )
        else:
            self._ask_current(session, now)

        self.store.save(session)
        return AnswerResult(session=session, crisis_phrases=crisis)

    def previous_question(self, user_id: str, now: Optional[datetime] = None) -> ChatSession:
        """
        Step back one question; the earlier answer is kept until overwritten.

        Raises:
            AssessmentStateError: at the first question or when not asking.
        """
        now = now or _utcnow()
        session = self.get_session(user_id)
        new_state, error = assessment.previous(session.state)
        if error is not None:
            raise error
        session.state = new_state
        session.last_updated = now
        self.store.save(session)
        return session

    def accept_plan(self, user_id: str, now: Optional[datetime] = None) -> ChatSession:
        """
        Accept the generated plan; it starts now.

        Raises:
            AssessmentStateError: if no plan is ready, or it was already accepted.
        """
        now = now or _utcnow()
        session = self.get_session(user_id)
        if session.state.phase != AssessmentPhase.PLAN_READY or session.state.plan is None:
            raise AssessmentStateError(
                "There is no generated plan to accept.",
                state=session.state.phase.value,
            )

        plan = session.state.plan
        # Re-accepting would restart the clock the new-session gate runs on
        if plan.start_date is not None:
            raise AssessmentStateError(
                "Plan already accepted",
                state=session.state.phase.value,
                details={"plan_id": plan.plan_id, "start_date": plan.start_date.isoformat()},
            )

        plan.start_date = now
        session.accepted_plan = plan
        session.add_message(
            "bot",
            "Therapy plan accepted! You can now start your personalized journey.",
            now,
        )
        self.store.save(session)

        self._emit("plan_accepted", user_id, {
            "plan_id": plan.plan_id,
            "plan_duration_days": plan.plan_duration_days,
        })
        logger.info(f"Plan {plan.plan_id} accepted by {user_id}")
        return session
