"""
Recommendation Engine

Turns a finished questionnaire into a TherapyPlan: severity from
`scoring.py`, module selection from the fixed-issue table or, for the
free-form "Other" intake, from `rules_keywords.py`.

Usage:
    from mindcare.core.recommendation import RecommendationEngine, get_questionnaire

    engine = RecommendationEngine()
    plan = engine.generate_plan(get_questionnaire("stress"), responses, plan_id="p-1")
    print(plan.severity, plan.plan_duration_days, plan.module_ids)

Adding a new issue:
    1. Add the Issue and its Questionnaire in catalog.py
    2. Add its four-module row to ISSUE_RECOMMENDATIONS.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .base import (
    OTHER_ISSUE_ID,
    Questionnaire,
    ResponseSet,
    SeverityTier,
    TherapyPlan,
    TherapyRecommendation,
)
from .catalog import ISSUE_RECOMMENDATIONS, ISSUES, get_module, resolve_issue_id
from .rules_keywords import (
    DESCRIPTION_QUESTION_ID,
    FALLBACK_MODULES,
    select_free_text_modules,
)
from .scoring import plan_duration_days, score_severity

logger = logging.getLogger(__name__)

ESTIMATED_DURATION = "15-30 min"
BENEFITS = ["Addresses your concerns", "Improves coping skills", "Builds resilience"]

# Free-text plans are framed around the respondent rather than an issue name
FREE_FORM_ISSUE_DISPLAY = "your needs"

# Words of the initial description kept as the display name for "Other"
ISSUE_NAME_WORDS = 3


def _module_ids_for(issue_id: str, responses: Optional[ResponseSet]) -> List[str]:
    if issue_id == OTHER_ISSUE_ID:
        if responses is None:
            return list(FALLBACK_MODULES)
        return select_free_text_modules(responses)
    return list(ISSUE_RECOMMENDATIONS[issue_id])


def select_recommendations(
    issue_key: str,
    severity: SeverityTier,
    responses: Optional[ResponseSet] = None,
) -> List[TherapyRecommendation]:
    """
    Select the ordered module recommendations for an issue.

    Args:
        issue_key: Issue id or display name. "other" selects free-text mode.
        severity: Tier from score_severity. Accepted for plan framing; it
                  never changes which modules are chosen.
        responses: Answers used by free-text mode; ignored otherwise.

    Returns:
        At most four recommendations with contiguous priorities from 1.

    Raises:
        UnknownIssueError: if issue_key matches no issue.
    """
    issue_id = resolve_issue_id(issue_key)
    module_ids = _module_ids_for(issue_id, responses)

    if issue_id == OTHER_ISSUE_ID:
        issue_display = FREE_FORM_ISSUE_DISPLAY
    else:
        issue_display = ISSUES[issue_id].name.lower()

    logger.debug(
        f"select_recommendations [{issue_id}/{severity.value}]: {', '.join(module_ids)}"
    )

    recommendations = []
    for index, module_id in enumerate(module_ids):
        module = get_module(module_id)
        recommendations.append(TherapyRecommendation(
            module_id=module_id,
            title=module.title,
            description=f"Evidence-based {module.title.lower()} for {issue_display}",
            priority=index + 1,
            estimated_duration=ESTIMATED_DURATION,
            benefits=list(BENEFITS),
        ))
    return recommendations


def display_issue_name(questionnaire: Questionnaire, responses: ResponseSet) -> str:
    """
    Issue name shown on the plan.

    For the free-form intake, the first few words of the respondent's own
    description, capitalised ("i feel anxious lately" -> "I Feel Anxious").
    """
    if not questionnaire.is_free_form:
        return questionnaire.issue_name
    description = str(responses.get(DESCRIPTION_QUESTION_ID) or "").strip()
    if not description:
        return questionnaire.issue_name
    words = description.split()[:ISSUE_NAME_WORDS]
    return " ".join(w[:1].upper() + w[1:].lower() for w in words)


def generate_plan(
    questionnaire: Questionnaire,
    responses: ResponseSet,
    plan_id: str,
    respondent_name: Optional[str] = None,
) -> TherapyPlan:
    """
    Score a completed assessment and assemble its therapy plan.

    Raises:
        IncompleteAssessmentError: if a required question is unanswered.
    """
    severity, combined = score_severity(questionnaire, responses)
    duration = plan_duration_days(severity)
    recommendations = select_recommendations(
        questionnaire.issue_id,
        severity,
        responses if questionnaire.is_free_form else None,
    )
    issue = display_issue_name(questionnaire, responses)

    return TherapyPlan(
        plan_id=plan_id,
        issue=issue,
        severity=severity,
        plan_duration_days=duration,
        recommendations=recommendations,
        description=f"A {duration}-day personalized therapy plan for {issue.lower()}",
        combined_score=combined,
        respondent_name=respondent_name,
    )


class RecommendationEngine:
    """
    Transforms completed questionnaires into TherapyPlans.

    Stateless: safe to share across sessions.
    """

    def generate_plan(
        self,
        questionnaire: Questionnaire,
        responses: ResponseSet,
        plan_id: str,
        respondent_name: Optional[str] = None,
    ) -> TherapyPlan:
        plan = generate_plan(questionnaire, responses, plan_id, respondent_name)
        logger.debug(
            f"RecommendationEngine [{questionnaire.issue_id}]: "
            f"score={plan.combined_score:.2f} severity={plan.severity.value} "
            f"modules={plan.module_ids}"
        )
        return plan

    def select_recommendations(
        self,
        issue_key: str,
        severity: SeverityTier,
        responses: Optional[ResponseSet] = None,
    ) -> List[TherapyRecommendation]:
        return select_recommendations(issue_key, severity, responses)

    @staticmethod
    def registered_issues() -> List[str]:
        """Issue ids with a recommendation source (fixed table or free text)."""
        return list(ISSUE_RECOMMENDATIONS.keys()) + [OTHER_ISSUE_ID]

    @staticmethod
    def summarise(plan: TherapyPlan) -> Dict:
        """
        Compact chat-style summary of a plan.

        Example output:
        {
            "headline": "Based on your comprehensive assessment, ...",
            "severity": "mild",
            "plan_duration_days": 10,
            "modules": ["Stress Management", "Mindfulness & Breathing", ...],
        }
        """
        headline = (
            f"Based on your comprehensive assessment, I've created a personalized "
            f"{plan.plan_duration_days}-day therapy plan for {plan.issue.lower()}. "
            f"Your responses indicate {plan.severity.value} severity, and this plan "
            f"includes {len(plan.recommendations)} evidence-based therapies tailored "
            f"to your specific needs and goals."
        )
        return {
            "headline": headline,
            "severity": plan.severity.value,
            "plan_duration_days": plan.plan_duration_days,
            "modules": [r.title for r in plan.recommendations],
        }
