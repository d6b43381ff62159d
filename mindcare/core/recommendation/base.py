"""
Assessment & Recommendation Layer - Base Types

Defines the data contracts shared by the catalogs, the scoring heuristic,
the recommender and the assessment state machine. All catalog types are
frozen: questionnaires and module tables are never mutated at runtime.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from mindcare.utils.exceptions import CatalogError

# Sentinel issue used for free-form intake
OTHER_ISSUE_ID = "other"

# Answers are keyed by Question.id
ResponseSet = Mapping[str, Any]


class QuestionKind(str, Enum):
    """
    How a question is answered.

    RATING    - integer on [scale_min, scale_max]
    BINARY    - one of exactly two option strings
    FREE_TEXT - raw string
    """
    RATING    = "rating"
    BINARY    = "binary"
    FREE_TEXT = "free-text"


class SeverityTier(str, Enum):
    """Coarse assessment intensity. Totally ordered mild < moderate < severe."""
    MILD     = "mild"
    MODERATE = "moderate"
    SEVERE   = "severe"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    def __lt__(self, other):
        if not isinstance(other, SeverityTier):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, SeverityTier):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, SeverityTier):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, SeverityTier):
            return NotImplemented
        return self.rank >= other.rank


_SEVERITY_RANK = {
    SeverityTier.MILD:     0,
    SeverityTier.MODERATE: 1,
    SeverityTier.SEVERE:   2,
}


@dataclass(frozen=True)
class Question:
    """One prompt in a questionnaire."""
    id: str
    text: str
    kind: QuestionKind
    category: str = ""                       # display grouping only
    scale_min: Optional[int] = None          # rating only
    scale_max: Optional[int] = None          # rating only
    options: Optional[Tuple[str, str]] = None  # binary only, affirmative first
    required: bool = True

    def __post_init__(self):
        if not self.id:
            raise CatalogError("Question id must be non-empty")

        if self.kind == QuestionKind.RATING:
            if self.scale_min is None or self.scale_max is None:
                raise CatalogError(
                    f"Rating question {self.id} needs scale_min and scale_max",
                    details={"question_id": self.id},
                )
            if self.scale_min >= self.scale_max:
                raise CatalogError(
                    f"Rating question {self.id}: scale_min must be below scale_max",
                    details={"question_id": self.id,
                             "scale": [self.scale_min, self.scale_max]},
                )
        elif self.scale_min is not None or self.scale_max is not None:
            raise CatalogError(
                f"Only rating questions carry a scale ({self.id})",
                details={"question_id": self.id},
            )

        if self.kind == QuestionKind.BINARY:
            if self.options is None or len(self.options) != 2:
                raise CatalogError(
                    f"Binary question {self.id} needs exactly two options",
                    details={"question_id": self.id},
                )
            # Lists from JSON-ish literals are normalised to a tuple
            object.__setattr__(self, "options", tuple(self.options))
        elif self.options is not None:
            raise CatalogError(
                f"Only binary questions carry options ({self.id})",
                details={"question_id": self.id},
            )

    @property
    def affirmative_option(self) -> Optional[str]:
        return self.options[0] if self.options else None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "text": self.text,
            "kind": self.kind.value,
            "category": self.category,
            "required": self.required,
        }
        if self.kind == QuestionKind.RATING:
            data["scale_min"] = self.scale_min
            data["scale_max"] = self.scale_max
        if self.kind == QuestionKind.BINARY:
            data["options"] = list(self.options)
        return data


@dataclass(frozen=True)
class Questionnaire:
    """
    Ordered, immutable sequence of questions for one issue.

    Question order is the asking order; ids are unique within the
    questionnaire.
    """
    issue_id: str
    issue_name: str
    questions: Tuple[Question, ...]

    def __post_init__(self):
        object.__setattr__(self, "questions", tuple(self.questions))
        seen = set()
        for q in self.questions:
            if q.id in seen:
                raise CatalogError(
                    f"Duplicate question id {q.id!r} in questionnaire {self.issue_id!r}",
                    details={"issue_id": self.issue_id, "question_id": q.id},
                )
            seen.add(q.id)

    def __len__(self) -> int:
        return len(self.questions)

    def __iter__(self) -> Iterator[Question]:
        return iter(self.questions)

    def __getitem__(self, index: int) -> Question:
        return self.questions[index]

    def get(self, question_id: str) -> Optional[Question]:
        for q in self.questions:
            if q.id == question_id:
                return q
        return None

    def of_kind(self, kind: QuestionKind) -> List[Question]:
        return [q for q in self.questions if q.kind == kind]

    @property
    def is_free_form(self) -> bool:
        return self.issue_id == OTHER_ISSUE_ID

    def to_dict(self) -> dict:
        return {
            "issue_id": self.issue_id,
            "issue_name": self.issue_name,
            "questions": [q.to_dict() for q in self.questions],
        }


@dataclass(frozen=True)
class Issue:
    """A named presenting concern that selects a questionnaire."""
    issue_id: str
    name: str
    description: str

    def to_dict(self) -> dict:
        return {"issue_id": self.issue_id, "name": self.name, "description": self.description}


@dataclass(frozen=True)
class TherapyModule:
    """Catalog entry for one treatment activity."""
    module_id: str
    title: str
    category: str

    def to_dict(self) -> dict:
        return {"module_id": self.module_id, "title": self.title, "category": self.category}


@dataclass
class TherapyRecommendation:
    """One recommended module within a plan."""
    module_id: str
    title: str
    description: str
    priority: int                      # 1-based, ascending = higher priority
    estimated_duration: str = "15-30 min"
    benefits: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "module_id": self.module_id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "estimated_duration": self.estimated_duration,
            "benefits": list(self.benefits),
        }


@dataclass
class TherapyPlan:
    """
    Engine output for one completed assessment.

    ``start_date`` stays ``None`` until the respondent accepts the plan.
    """
    plan_id: str
    issue: str                              # display name
    severity: SeverityTier
    plan_duration_days: int
    recommendations: List[TherapyRecommendation]
    description: str
    combined_score: float
    respondent_name: Optional[str] = None
    start_date: Optional[datetime] = None

    @property
    def module_ids(self) -> List[str]:
        return [r.module_id for r in self.recommendations]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "plan_id": self.plan_id,
            "issue": self.issue,
            "severity": self.severity.value,
            "plan_duration_days": self.plan_duration_days,
            "recommendations": [r.to_dict() for r in self.recommendations],
            "description": self.description,
            "combined_score": round(self.combined_score, 4),
            "respondent_name": self.respondent_name,
            "start_date": self.start_date.isoformat() if self.start_date else None,
        }
