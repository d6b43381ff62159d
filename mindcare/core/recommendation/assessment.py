"""
Assessment State Machine

Synchronous, question-by-question flow:

    NOT_STARTED --start--> ASKING(0) --answer--> ASKING(1) ... ASKING(n-1)
        --answer--> SCORING --generate_plan--> PLAN_READY

    ASKING(i) --previous--> ASKING(i-1)   (i > 0 only)

States are immutable values. `advance` and `previous` return
``(new_state, error)``; on error the returned state is the input state,
so an invalid answer never moves the index or touches the responses.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from mindcare.utils.exceptions import (
    AssessmentStateError,
    CatalogError,
    MindCareError,
    ValidationError,
)
from .base import Question, QuestionKind, Questionnaire, TherapyPlan
from .engine import generate_plan

_STRICT_INT = re.compile(r"^[+-]?\d+$")


class AssessmentPhase(str, Enum):
    NOT_STARTED = "not_started"
    ASKING      = "asking"
    SCORING     = "scoring"
    PLAN_READY  = "plan_ready"


def _frozen(responses: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(responses))


@dataclass(frozen=True)
class AssessmentState:
    """Snapshot of one respondent's progress through one questionnaire."""
    questionnaire: Optional[Questionnaire] = None
    phase: AssessmentPhase = AssessmentPhase.NOT_STARTED
    index: int = 0
    responses: Mapping[str, Any] = field(default_factory=lambda: _frozen({}))
    plan: Optional[TherapyPlan] = None

    @property
    def current_question(self) -> Optional[Question]:
        if self.phase != AssessmentPhase.ASKING or self.questionnaire is None:
            return None
        return self.questionnaire[self.index]

    @property
    def total_questions(self) -> int:
        return len(self.questionnaire) if self.questionnaire is not None else 0

    def to_dict(self) -> Dict[str, Any]:
        question = self.current_question
        return {
            "issue_id": self.questionnaire.issue_id if self.questionnaire else None,
            "phase": self.phase.value,
            "index": self.index,
            "total_questions": self.total_questions,
            "current_question": question.to_dict() if question else None,
            "responses": dict(self.responses),
            "plan": self.plan.to_dict() if self.plan else None,
        }


# ── Validation ───────────────────────────────────────────────────────────────

def _validate_rating(question: Question, answer: Any) -> int:
    value: Optional[int] = None
    if isinstance(answer, bool):
        value = None
    elif isinstance(answer, int):
        value = answer
    elif isinstance(answer, float) and answer.is_integer():
        value = int(answer)
    elif isinstance(answer, str) and _STRICT_INT.match(answer.strip()):
        value = int(answer.strip())

    if value is None:
        raise ValidationError(
            f"Please provide a number between {question.scale_min} and {question.scale_max}.",
            question_id=question.id,
            details={"answer": repr(answer), "reason": "not_a_number"},
        )
    if not question.scale_min <= value <= question.scale_max:
        raise ValidationError(
            f"Please provide a number between {question.scale_min} and {question.scale_max}.",
            question_id=question.id,
            details={"answer": value, "reason": "out_of_range",
                     "scale": [question.scale_min, question.scale_max]},
        )
    return value


def _validate_binary(question: Question, answer: Any) -> str:
    if isinstance(answer, str):
        wanted = answer.strip().casefold()
        for option in question.options:
            if option.casefold() == wanted:
                return option
    raise ValidationError(
        f"Please answer with one of: {', '.join(question.options)}.",
        question_id=question.id,
        details={"answer": repr(answer), "reason": "not_an_option",
                 "options": list(question.options)},
    )


def _validate_free_text(question: Question, answer: Any) -> str:
    if answer is None:
        answer = ""
    # Numeric input (a year, a count) is stored as its text
    if isinstance(answer, (int, float)) and not isinstance(answer, bool):
        answer = str(answer)
    if not isinstance(answer, str):
        raise ValidationError(
            "Please answer in words.",
            question_id=question.id,
            details={"answer": repr(answer), "reason": "not_text"},
        )
    if question.required and not answer.strip():
        raise ValidationError(
            "Please provide an answer before continuing.",
            question_id=question.id,
            details={"reason": "empty"},
        )
    return answer


def validate_answer(question: Question, answer: Any) -> Any:
    """
    Check an answer against its question and return the value to store.

    Ratings are stored as int, binary answers as the canonical option string,
    free text as a string (numbers included).

    Raises:
        ValidationError: if the answer breaks the question's constraints.
    """
    if question.kind == QuestionKind.RATING:
        return _validate_rating(question, answer)
    if question.kind == QuestionKind.BINARY:
        return _validate_binary(question, answer)
    return _validate_free_text(question, answer)


# ── Transitions ──────────────────────────────────────────────────────────────

def start(questionnaire: Questionnaire) -> AssessmentState:
    """NOT_STARTED --issue selected--> ASKING(0)."""
    if len(questionnaire) == 0:
        raise CatalogError(
            f"Questionnaire {questionnaire.issue_id!r} has no questions",
            details={"issue_id": questionnaire.issue_id},
        )
    return AssessmentState(
        questionnaire=questionnaire,
        phase=AssessmentPhase.ASKING,
        index=0,
    )


def advance(
    state: AssessmentState,
    answer: Any,
    plan_id: Optional[str] = None,
    respondent_name: Optional[str] = None,
) -> Tuple[AssessmentState, Optional[MindCareError]]:
    """
    Record an answer to the current question and move on.

    After the last question the assessment is scored and the returned
    state is PLAN_READY with its plan attached.

    Args:
        state: Current state; must be ASKING.
        answer: Raw answer for the current question.
        plan_id: Id given to the generated plan (defaults to "plan-<issue>").
        respondent_name: Framing only; not used in scoring.
    """
    question = state.current_question
    if question is None:
        return state, AssessmentStateError(
            f"Cannot answer while assessment is {state.phase.value}",
            state=state.phase.value,
        )

    try:
        value = validate_answer(question, answer)
    except ValidationError as exc:
        return state, exc

    responses = dict(state.responses)
    responses[question.id] = value

    next_index = state.index + 1
    if next_index < len(state.questionnaire):
        return replace(state, index=next_index, responses=_frozen(responses)), None

    scoring = replace(state, phase=AssessmentPhase.SCORING, responses=_frozen(responses))
    try:
        plan = generate_plan(
            scoring.questionnaire,
            scoring.responses,
            plan_id=plan_id or f"plan-{scoring.questionnaire.issue_id}",
            respondent_name=respondent_name,
        )
    except MindCareError as exc:
        return state, exc

    return replace(scoring, phase=AssessmentPhase.PLAN_READY, plan=plan), None


def previous(state: AssessmentState) -> Tuple[AssessmentState, Optional[MindCareError]]:
    """ASKING(i) --previous--> ASKING(i-1) for i > 0. Responses are kept."""
    if state.phase != AssessmentPhase.ASKING:
        return state, AssessmentStateError(
            f"Cannot go back while assessment is {state.phase.value}",
            state=state.phase.value,
        )
    if state.index == 0:
        return state, AssessmentStateError(
            "Already at the first question",
            state=state.phase.value,
            details={"index": 0},
        )
    return replace(state, index=state.index - 1), None
