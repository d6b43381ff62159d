"""
Utilities Package - Logging and Exception Handling
"""
from .logging import get_logger, setup_logging
from .exceptions import (
    MindCareError,
    ValidationError,
    IncompleteAssessmentError,
    AssessmentStateError,
    CatalogError,
    UnknownIssueError,
    SessionNotFoundError,
    PlanInProgressError,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "MindCareError",
    "ValidationError",
    "IncompleteAssessmentError",
    "AssessmentStateError",
    "CatalogError",
    "UnknownIssueError",
    "SessionNotFoundError",
    "PlanInProgressError",
]
