"""
Severity Scoring

Linear heuristic combining the mean rating answer with the share of
affirmative binary answers. This is not a validated clinical instrument;
thresholds and defaults reproduce the chatbot's behaviour exactly.

    combined = (avg_rating + binary_score) / 2

    combined <= 4      -> mild      (10-day plan)
    4 < combined < 7   -> moderate  (14-day plan)
    combined >= 7      -> severe    (21-day plan)
"""
from __future__ import annotations

import math
import re
from typing import Any, List, Optional, Tuple

import numpy as np

from mindcare.utils.exceptions import IncompleteAssessmentError
from .base import Questionnaire, QuestionKind, ResponseSet, SeverityTier

# ── Constants ────────────────────────────────────────────────────────────────
# Substituted for absent or unparseable rating answers, and used as the
# rating/binary component when a questionnaire has no such questions.
DEFAULT_RATING       = 5
DEFAULT_BINARY_SCORE = 5.0

MILD_MAX     = 4.0     # inclusive upper bound for mild
SEVERE_MIN   = 7.0     # inclusive lower bound for severe

SCORE_FLOOR   = 1.0
SCORE_CEILING = 10.0

PLAN_DURATION_DAYS = {
    SeverityTier.MILD:     10,
    SeverityTier.MODERATE: 14,
    SeverityTier.SEVERE:   21,
}

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def coerce_rating(value: Any) -> Optional[int]:
    """
    Best-effort integer parse of a rating answer.

    Strings are read up to the first non-digit ("7 out of 10" -> 7),
    floats are truncated. Returns None when nothing numeric is found.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return int(value)
    match = _LEADING_INT.match(str(value))
    if match is None:
        return None
    return int(match.group(1))


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def missing_required(questionnaire: Questionnaire, responses: ResponseSet) -> List[str]:
    """Ids of required questions with no non-blank answer, in asking order."""
    return [
        q.id for q in questionnaire
        if q.required and is_blank(responses.get(q.id))
    ]


def require_complete(questionnaire: Questionnaire, responses: ResponseSet) -> None:
    """
    Raises:
        IncompleteAssessmentError: if any required question is unanswered.
    """
    missing = missing_required(questionnaire, responses)
    if missing:
        raise IncompleteAssessmentError(
            f"{len(missing)} required question(s) unanswered for "
            f"{questionnaire.issue_id!r}: {', '.join(missing)}",
            missing=missing,
        )


def severity_for_score(combined_score: float) -> SeverityTier:
    if combined_score <= MILD_MAX:
        return SeverityTier.MILD
    if combined_score >= SEVERE_MIN:
        return SeverityTier.SEVERE
    return SeverityTier.MODERATE


def plan_duration_days(severity: SeverityTier) -> int:
    """Plan length depends on severity alone."""
    return PLAN_DURATION_DAYS[severity]


def average_rating(questionnaire: Questionnaire, responses: ResponseSet) -> float:
    ratings = []
    for q in questionnaire.of_kind(QuestionKind.RATING):
        value = coerce_rating(responses.get(q.id))
        ratings.append(DEFAULT_RATING if value is None else value)
    if not ratings:
        return float(DEFAULT_RATING)
    return float(np.mean(ratings))


def binary_score(questionnaire: Questionnaire, responses: ResponseSet) -> float:
    binaries = questionnaire.of_kind(QuestionKind.BINARY)
    if not binaries:
        return DEFAULT_BINARY_SCORE
    yes_count = sum(1 for q in binaries if responses.get(q.id) == q.affirmative_option)
    return yes_count / len(binaries) * 10


def score_severity(
    questionnaire: Questionnaire,
    responses: ResponseSet,
) -> Tuple[SeverityTier, float]:
    """
    Compute the severity tier and combined score for a finished assessment.

    Args:
        questionnaire: The questionnaire that was asked.
        responses: Answers keyed by question id. Not mutated.

    Returns:
        (severity, combined_score) with combined_score in [1, 10].

    Raises:
        IncompleteAssessmentError: if a required question is unanswered.
    """
    require_complete(questionnaire, responses)

    avg = average_rating(questionnaire, responses)
    binary = binary_score(questionnaire, responses)

    # Wider scales (e.g. hours of sleep, 1-12) can push the raw mean past 10
    combined = float(np.clip((avg + binary) / 2, SCORE_FLOOR, SCORE_CEILING))
    return severity_for_score(combined), combined
