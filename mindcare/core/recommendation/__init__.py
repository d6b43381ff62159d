"""
Assessment & Recommendation Layer

Turns questionnaire answers into a severity tier and an ordered therapy plan.

Usage:
    from mindcare.core.recommendation import assessment, get_questionnaire

    state = assessment.start(get_questionnaire("stress"))
    state, error = assessment.advance(state, "My deadlines pile up")
    ...
    state.plan.severity, state.plan.module_ids
"""
from . import assessment
from .assessment import AssessmentPhase, AssessmentState, validate_answer
from .base import (
    OTHER_ISSUE_ID,
    Issue,
    Question,
    QuestionKind,
    Questionnaire,
    SeverityTier,
    TherapyModule,
    TherapyPlan,
    TherapyRecommendation,
)
from .catalog import (
    ISSUE_RECOMMENDATIONS,
    QUESTIONNAIRES,
    THERAPY_MODULES,
    get_issue,
    get_module,
    get_questionnaire,
    list_issues,
    list_modules,
    resolve_issue_id,
)
from .engine import RecommendationEngine, generate_plan, select_recommendations
from .progress import days_remaining, is_plan_completed
from .rules_keywords import KEYWORD_GROUPS, FALLBACK_MODULES, KeywordGroup
from .scoring import plan_duration_days, score_severity

__all__ = [
    "assessment",
    "AssessmentPhase",
    "AssessmentState",
    "validate_answer",
    "OTHER_ISSUE_ID",
    "Issue",
    "Question",
    "QuestionKind",
    "Questionnaire",
    "SeverityTier",
    "TherapyModule",
    "TherapyPlan",
    "TherapyRecommendation",
    "ISSUE_RECOMMENDATIONS",
    "QUESTIONNAIRES",
    "THERAPY_MODULES",
    "get_issue",
    "get_module",
    "get_questionnaire",
    "list_issues",
    "list_modules",
    "resolve_issue_id",
    "RecommendationEngine",
    "generate_plan",
    "select_recommendations",
    "days_remaining",
    "is_plan_completed",
    "KEYWORD_GROUPS",
    "FALLBACK_MODULES",
    "KeywordGroup",
    "plan_duration_days",
    "score_severity",
]
