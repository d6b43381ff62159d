"""
Unit Tests for the Assessment Service

Session lifecycle, transcript, analytics events and the new-session gate.
"""
from datetime import timedelta

import pytest

from mindcare.core.recommendation import AssessmentPhase, SeverityTier, get_questionnaire
from mindcare.services import AssessmentService, InMemorySessionStore, format_question
from mindcare.utils.exceptions import (
    AssessmentStateError,
    PlanInProgressError,
    SessionNotFoundError,
    UnknownIssueError,
)


def _complete(service, user_id, questionnaire, responses, now):
    result = None
    for question in questionnaire:
        result = service.submit_answer(user_id, responses[question.id], now=now)
        assert result.accepted, result.error
    return result


class FailingSink:
    def emit(self, event_type, user_id, data=None):
        raise RuntimeError("analytics backend down")


class TestStartAssessment:
    def test_first_question_asked(self, service, temp_user_id, now, event_sink):
        session = service.start_assessment(temp_user_id, "stress", respondent_name="Sam", now=now)

        assert session.state.phase == AssessmentPhase.ASKING
        assert session.state.index == 0
        assert session.respondent_name == "Sam"
        assert session.messages[0].content.startswith("Hello Sam!")
        assert session.messages[-1].content.startswith("Question 1 of 10 - open ended")
        assert event_sink.counts() == {"assessment_started": 1}
        assert event_sink.events[0].data == {"issue_id": "stress"}

    def test_unknown_issue(self, service, temp_user_id, now):
        with pytest.raises(UnknownIssueError):
            service.start_assessment(temp_user_id, "loneliness", now=now)

    def test_restart_replaces_assessment(self, service, temp_user_id, now):
        service.start_assessment(temp_user_id, "stress", now=now)
        service.submit_answer(temp_user_id, "Deadlines", now=now)

        session = service.start_assessment(temp_user_id, "insomnia", now=now)

        assert session.state.questionnaire.issue_id == "insomnia"
        assert session.state.index == 0
        assert dict(session.state.responses) == {}


class TestSubmitAnswer:
    def test_no_session(self, service, temp_user_id):
        with pytest.raises(SessionNotFoundError):
            service.submit_answer(temp_user_id, "hello")

    def test_not_asking(self, service, temp_user_id, now):
        service.new_session(temp_user_id, now=now)
        with pytest.raises(AssessmentStateError):
            service.submit_answer(temp_user_id, "hello", now=now)

    def test_invalid_answer_reprompts(self, service, temp_user_id, now, stress_questionnaire, make_responses):
        answers = make_responses(stress_questionnaire)
        service.start_assessment(temp_user_id, "stress", now=now)
        for qid in ("1", "2", "3", "4"):
            service.submit_answer(temp_user_id, answers[qid], now=now)

        result = service.submit_answer(temp_user_id, 11, now=now)

        assert not result.accepted
        assert result.error.code == "VALIDATION_ERROR"
        assert result.session.state.index == 4
        assert result.session.messages[-1].role == "bot"
        assert "between 1 and 10" in result.session.messages[-1].content

    def test_full_flow_generates_plan(self, service, temp_user_id, now, event_sink,
                                      stress_questionnaire, make_responses):
        service.start_assessment(temp_user_id, "stress", now=now)
        answers = make_responses(stress_questionnaire, rating=9, binary="Yes")

        result = _complete(service, temp_user_id, stress_questionnaire, answers, now)
        plan = result.session.state.plan

        assert result.session.state.phase == AssessmentPhase.PLAN_READY
        assert plan.severity == SeverityTier.SEVERE
        assert plan.plan_duration_days == 21
        assert plan.module_ids == ["stress", "mindfulness", "music", "art"]
        assert "21-day therapy plan" in result.session.messages[-1].content
        assert event_sink.counts() == {"assessment_started": 1, "plan_generated": 1}
        assert event_sink.events[-1].data["severity"] == "severe"

    def test_crisis_flagged_without_blocking(self, service, temp_user_id, now, event_sink):
        service.start_assessment(temp_user_id, "depression", now=now)

        result = service.submit_answer(temp_user_id, "Some days I feel like I want to die", now=now)

        assert result.accepted
        assert result.crisis_detected
        assert "want to die" in result.crisis_phrases
        assert result.session.state.index == 1
        assert event_sink.counts()["crisis_detected"] == 1

    def test_previous_question(self, service, temp_user_id, now):
        service.start_assessment(temp_user_id, "stress", now=now)
        service.submit_answer(temp_user_id, "Deadlines", now=now)

        session = service.previous_question(temp_user_id, now=now)
        assert session.state.index == 0
        assert session.state.responses["1"] == "Deadlines"

        with pytest.raises(AssessmentStateError):
            service.previous_question(temp_user_id, now=now)


class TestPlanAcceptance:
    @pytest.fixture
    def planned_user(self, service, temp_user_id, now, stress_questionnaire, make_responses):
        service.start_assessment(temp_user_id, "stress", now=now)
        answers = make_responses(stress_questionnaire, rating=2, binary="No")
        _complete(service, temp_user_id, stress_questionnaire, answers, now)
        return temp_user_id

    def test_accept_sets_start_date(self, service, planned_user, now, event_sink):
        session = service.accept_plan(planned_user, now=now)

        assert session.accepted_plan is not None
        assert session.accepted_plan.start_date == now
        assert event_sink.counts()["plan_accepted"] == 1

    def test_accept_twice_keeps_original_start(self, service, planned_user, now, event_sink):
        service.accept_plan(planned_user, now=now)

        with pytest.raises(AssessmentStateError, match="already accepted"):
            service.accept_plan(planned_user, now=now + timedelta(days=9))

        session = service.get_session(planned_user)
        assert session.accepted_plan.start_date == now
        assert event_sink.counts()["plan_accepted"] == 1
        # the gate still opens on the original schedule
        assert service.new_session(planned_user, now=now + timedelta(days=10)).accepted_plan is None

    def test_accept_without_plan(self, service, temp_user_id, now):
        service.start_assessment(temp_user_id, "stress", now=now)
        with pytest.raises(AssessmentStateError):
            service.accept_plan(temp_user_id, now=now)

    def test_new_session_blocked_while_plan_runs(self, service, planned_user, now):
        service.accept_plan(planned_user, now=now)

        with pytest.raises(PlanInProgressError) as exc_info:
            service.new_session(planned_user, now=now + timedelta(days=4))
        assert exc_info.value.days_remaining == 6

    def test_new_session_allowed_after_duration(self, service, planned_user, now):
        service.accept_plan(planned_user, now=now)

        session = service.new_session(planned_user, now=now + timedelta(days=10))

        assert session.state.phase == AssessmentPhase.NOT_STARTED
        assert session.accepted_plan is None

    def test_new_session_without_accepting(self, service, planned_user, now):
        session = service.new_session(planned_user, now=now)
        assert session.state.phase == AssessmentPhase.NOT_STARTED


class TestCollaborators:
    def test_failing_sink_does_not_break_flow(self, temp_user_id, now):
        service = AssessmentService(store=InMemorySessionStore(), events=FailingSink())
        session = service.start_assessment(temp_user_id, "stress", now=now)
        assert session.state.phase == AssessmentPhase.ASKING

    def test_events_filtered_by_user(self, service, event_sink, now):
        service.start_assessment("alice", "stress", now=now)
        service.start_assessment("bob", "trauma", now=now)
        service.submit_answer("bob", "I want to die some days", now=now)

        bob_events = [e.event_type for e in event_sink.for_user("bob")]
        assert bob_events == ["assessment_started", "crisis_detected"]
        assert [e.data for e in event_sink.for_user("alice")] == [{"issue_id": "stress"}]
        assert event_sink.for_user("carol") == []

    def test_sessions_persisted_per_user(self, now):
        store = InMemorySessionStore()
        service = AssessmentService(store=store)
        service.start_assessment("alice", "stress", now=now)
        service.start_assessment("bob", "trauma", now=now)

        assert len(store) == 2
        assert service.get_session("bob").state.questionnaire.issue_id == "trauma"

    def test_format_question_hints(self):
        insomnia = get_questionnaire("insomnia")
        rating_text = format_question(insomnia.get("5"), 4, 10)
        binary_text = format_question(insomnia.get("3"), 2, 10)

        assert rating_text.startswith("Question 5 of 10 - scaling")
        assert rating_text.endswith("(Please respond with a number from 1 to 12)")
        assert binary_text.endswith("(Yes / No)")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
