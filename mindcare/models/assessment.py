"""
API request/response schemas.
"""
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, StrictFloat, StrictInt, StrictStr


class HealthResponse(BaseModel):
    """Service liveness payload."""
    status: str
    version: str
    timestamp: str
    uptime_seconds: float


class IssueResponse(BaseModel):
    issue_id: str
    name: str
    description: str


class ModuleResponse(BaseModel):
    module_id: str
    title: str
    category: str


class QuestionResponse(BaseModel):
    id: str
    text: str
    kind: str
    category: str = ""
    required: bool = True
    scale_min: Optional[int] = None
    scale_max: Optional[int] = None
    options: Optional[List[str]] = None


class QuestionnaireResponse(BaseModel):
    issue_id: str
    issue_name: str
    questions: List[QuestionResponse]


class RecommendationResponse(BaseModel):
    module_id: str
    title: str
    description: str
    priority: int
    estimated_duration: str
    benefits: List[str] = Field(default_factory=list)


class PlanResponse(BaseModel):
    plan_id: str
    issue: str
    severity: str
    plan_duration_days: int
    recommendations: List[RecommendationResponse]
    description: str
    combined_score: float
    respondent_name: Optional[str] = None
    start_date: Optional[str] = None


class StartAssessmentRequest(BaseModel):
    """Begin a questionnaire for one user."""
    user_id: str = Field(..., min_length=1)
    issue_id: str = Field(..., description="Issue id (e.g. 'stress') or display name")
    respondent_name: Optional[str] = None


class AnswerRequest(BaseModel):
    """Answer to the current question: number for ratings, option or text otherwise."""
    answer: Union[StrictInt, StrictFloat, StrictStr]


class NewSessionRequest(BaseModel):
    respondent_name: Optional[str] = None


class HelplineResponse(BaseModel):
    name: str
    phone: str
    availability: str


class AssessmentResponse(BaseModel):
    """Snapshot of a user's session after an operation."""
    session_id: str
    user_id: str
    issue_id: Optional[str] = None
    phase: str
    index: int
    total_questions: int
    current_question: Optional[QuestionResponse] = None
    responses: Dict[str, Any] = Field(default_factory=dict)
    plan: Optional[PlanResponse] = None
    accepted_plan: Optional[PlanResponse] = None
    last_message: Optional[str] = None
    crisis_detected: bool = False
    helplines: List[HelplineResponse] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    error: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)
