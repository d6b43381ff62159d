"""
Custom Exception Hierarchy

Specific exception types for the assessment engine and service layer,
each carrying a stable error code and structured details.
"""
from typing import Optional, Dict, Any, List


class MindCareError(Exception):
    """Base exception for all assessment errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details
        }


class ValidationError(MindCareError):
    """An answer failed its question's type, range or option constraints."""

    def __init__(
        self,
        message: str,
        question_id: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            details={"question_id": question_id, **(details or {})}
        )
        self.question_id = question_id


class IncompleteAssessmentError(MindCareError):
    """Scoring was attempted before every required question was answered."""

    def __init__(
        self,
        message: str,
        missing: Optional[List[str]] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        missing = list(missing or [])
        super().__init__(
            message=message,
            code="INCOMPLETE_ASSESSMENT",
            details={"missing_question_ids": missing, **(details or {})}
        )
        self.missing = missing


class AssessmentStateError(MindCareError):
    """An operation is not allowed in the assessment's current state."""

    def __init__(
        self,
        message: str,
        state: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="ASSESSMENT_STATE_ERROR",
            details={"state": state, **(details or {})}
        )
        self.state = state


class CatalogError(MindCareError):
    """Static catalog data breaks a shape invariant."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="CATALOG_ERROR",
            details=details
        )


class UnknownIssueError(MindCareError):
    """No questionnaire or recommendation table exists for the issue."""

    def __init__(
        self,
        message: str,
        issue: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="UNKNOWN_ISSUE",
            details={"issue": issue, **(details or {})}
        )
        self.issue = issue


class SessionNotFoundError(MindCareError):
    """No chat session exists for the user."""

    def __init__(
        self,
        message: str,
        user_id: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="SESSION_NOT_FOUND",
            details={"user_id": user_id, **(details or {})}
        )
        self.user_id = user_id


class PlanInProgressError(MindCareError):
    """A new assessment was requested while an accepted plan is still running."""

    def __init__(
        self,
        message: str,
        days_remaining: int = 0,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="PLAN_IN_PROGRESS",
            details={"days_remaining": days_remaining, **(details or {})}
        )
        self.days_remaining = days_remaining
