"""
MindCare Assessment API - FastAPI Application

Endpoints for:
- Issue, questionnaire and therapy module reference data
- Question-by-question assessment flow with plan generation
- Plan acceptance and new-session gating
- Analytics event counts
"""
from contextlib import asynccontextmanager
from datetime import datetime
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mindcare.config import settings
from mindcare.core.recommendation import get_questionnaire, list_issues, list_modules
from mindcare.core.safety import HELPLINES
from mindcare.models import (
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
    StartAssessmentRequest,
)
from mindcare.services import AssessmentService, ChatSession, InMemoryEventSink
from mindcare.utils import get_logger
from mindcare.utils.exceptions import (
    AssessmentStateError,
    IncompleteAssessmentError,
    MindCareError,
    PlanInProgressError,
    SessionNotFoundError,
    UnknownIssueError,
    ValidationError,
)

logger = get_logger(__name__)

START_TIME = datetime.now()

# ---- Unified Services ----
_event_sink = InMemoryEventSink()
_assessment_service = AssessmentService(events=_event_sink)

# Domain error -> HTTP status
_STATUS_CODES = {
    ValidationError: 422,
    IncompleteAssessmentError: 422,
    AssessmentStateError: 409,
    PlanInProgressError: 409,
    SessionNotFoundError: 404,
    UnknownIssueError: 404,
}


def _errors(*status_codes: int) -> dict:
    """OpenAPI `responses=` entry documenting MindCareError bodies."""
    return {code: {"model": ErrorResponse} for code in status_codes}


# ---- Application Lifespan ----

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Attach the shared service on startup."""
    app.state.assessment_service = _assessment_service
    logger.info(f"{settings.app_name} v{settings.app_version} ready to accept requests")
    yield
    logger.info(f"{settings.app_name} shut down.")


# ---- FastAPI Application ----

app = FastAPI(
    title=settings.app_name,
    description="Scripted mental-health intake with severity scoring and therapy-plan recommendation",
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(MindCareError)
async def mindcare_error_handler(request: Request, exc: MindCareError):
    status_code = _STATUS_CODES.get(type(exc), 400)
    logger.info(f"{request.method} {request.url.path} -> {status_code} [{exc.code}] {exc.message}")
    return JSONResponse(status_code=status_code, content=exc.to_dict())


# ---- Utility Functions ----

def _session_response(session: ChatSession, crisis_phrases: Optional[List[str]] = None) -> AssessmentResponse:
    """Convert a chat session into the API snapshot."""
    state = session.state.to_dict()
    question = state["current_question"]
    return AssessmentResponse(
        session_id=session.session_id,
        user_id=session.user_id,
        issue_id=state["issue_id"],
        phase=state["phase"],
        index=state["index"],
        total_questions=state["total_questions"],
        current_question=QuestionResponse(**question) if question else None,
        responses=state["responses"],
        plan=PlanResponse(**state["plan"]) if state["plan"] else None,
        accepted_plan=PlanResponse(**session.accepted_plan.to_dict()) if session.accepted_plan else None,
        last_message=session.messages[-1].content if session.messages else None,
        crisis_detected=bool(crisis_phrases),
        helplines=[HelplineResponse(**h.to_dict()) for h in HELPLINES] if crisis_phrases else [],
    )


def _health() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        timestamp=datetime.now().isoformat(),
        uptime_seconds=(datetime.now() - START_TIME).total_seconds(),
    )


# ---- API Endpoints ----

@app.get("/", response_model=HealthResponse, tags=["Health"])
async def root():
    """API root - health check."""
    return _health()


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return _health()


@app.get("/api/v1/issues", response_model=List[IssueResponse], tags=["Reference"])
async def get_issues():
    """List the presenting issues an assessment can start from."""
    return [IssueResponse(**issue.to_dict()) for issue in list_issues()]


@app.get("/api/v1/issues/{issue_id}/questionnaire", response_model=QuestionnaireResponse, responses=_errors(404), tags=["Reference"])
async def get_issue_questionnaire(issue_id: str):
    """Full ordered questionnaire for one issue."""
    return QuestionnaireResponse(**get_questionnaire(issue_id).to_dict())


@app.get("/api/v1/modules", response_model=List[ModuleResponse], tags=["Reference"])
async def get_modules():
    """Therapy module catalog."""
    return [ModuleResponse(**module.to_dict()) for module in list_modules()]


@app.post("/api/v1/assessments", response_model=AssessmentResponse, responses=_errors(404), tags=["Assessment"])
async def start_assessment(request: StartAssessmentRequest):
    """Start (or restart) an assessment; returns the first question."""
    session = _assessment_service.start_assessment(
        user_id=request.user_id,
        issue_key=request.issue_id,
        respondent_name=request.respondent_name,
    )
    return _session_response(session)


@app.get("/api/v1/assessments/{user_id}", response_model=AssessmentResponse, responses=_errors(404), tags=["Assessment"])
async def get_assessment(user_id: str):
    """Current assessment state for a user."""
    return _session_response(_assessment_service.get_session(user_id))


@app.post("/api/v1/assessments/{user_id}/answer", response_model=AssessmentResponse, responses=_errors(404, 409, 422), tags=["Assessment"])
async def submit_answer(user_id: str, request: AnswerRequest):
    """
    Answer the current question.

    Returns the next question, or the generated plan after the last one.
    Invalid answers return 422 and leave the assessment where it was.
    """
    result = _assessment_service.submit_answer(user_id, request.answer)
    snapshot = _session_response(result.session, result.crisis_phrases)
    if result.error is not None:
        content = result.error.to_dict()
        content["assessment"] = snapshot.model_dump()
        return JSONResponse(status_code=422, content=content)
    return snapshot


@app.post("/api/v1/assessments/{user_id}/previous", response_model=AssessmentResponse, responses=_errors(404, 409), tags=["Assessment"])
async def previous_question(user_id: str):
    """Go back one question."""
    return _session_response(_assessment_service.previous_question(user_id))


@app.post("/api/v1/assessments/{user_id}/accept", response_model=AssessmentResponse, responses=_errors(404, 409), tags=["Assessment"])
async def accept_plan(user_id: str):
    """Accept the generated plan; it starts today."""
    return _session_response(_assessment_service.accept_plan(user_id))


@app.post("/api/v1/sessions/{user_id}/reset", response_model=AssessmentResponse, responses=_errors(409), tags=["Assessment"])
async def reset_session(user_id: str, request: Optional[NewSessionRequest] = None):
    """Start a fresh chat session. Refused (409) while an accepted plan is running."""
    respondent_name = request.respondent_name if request else None
    return _session_response(_assessment_service.new_session(user_id, respondent_name))


@app.get("/api/v1/analytics/events", tags=["Analytics"])
async def analytics_events(user_id: Optional[str] = None):
    """Event counts by type; with `user_id`, also that user's event log."""
    payload = {"counts": _event_sink.counts(), "total": len(_event_sink.events)}
    if user_id is not None:
        payload["events"] = [event.to_dict() for event in _event_sink.for_user(user_id)]
    return payload


# ---- Run with uvicorn ----
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
