"""
Pydantic schemas for the HTTP API.
"""
from .assessment import (
    AnswerRequest,
    AssessmentResponse,
    ErrorResponse,
    HealthResponse,
    HelplineResponse,
    IssueResponse,
    ModuleResponse,
    NewSessionRequest,
    PlanResponse,
    QuestionnaireResponse,
    QuestionResponse,
    RecommendationResponse,
    StartAssessmentRequest,
)

__all__ = [
    "AnswerRequest",
    "AssessmentResponse",
    "ErrorResponse",
    "HealthResponse",
    "HelplineResponse",
    "IssueResponse",
    "ModuleResponse",
    "NewSessionRequest",
    "PlanResponse",
    "QuestionnaireResponse",
    "QuestionResponse",
    "RecommendationResponse",
    "StartAssessmentRequest",
]
