"""
Unit Tests for Crisis Screening and Plan Progress
"""
from datetime import timedelta

import pytest

from mindcare.core.recommendation import days_remaining, generate_plan, is_plan_completed
from mindcare.core.safety import CRISIS_PHRASES, HELPLINES, detect_crisis, is_crisis


class TestCrisisScreen:
    def test_phrase_detected(self):
        assert detect_crisis("Sometimes I want to die") == ["want to die", "die"]

    def test_case_insensitive(self):
        assert is_crisis("I've been thinking about SUICIDE")

    def test_plain_text_passes(self):
        assert detect_crisis("Work has been stressful lately") == []
        assert not is_crisis("")
        assert not is_crisis(None)

    def test_table_order(self):
        found = detect_crisis("I might overdose or hurt myself")
        assert found == ["hurt myself", "overdose"]

    def test_every_phrase_matches_itself(self):
        for phrase in CRISIS_PHRASES:
            assert phrase in detect_crisis(f"... {phrase} ...")

    def test_helplines(self):
        assert len(HELPLINES) == 4
        for helpline in HELPLINES:
            data = helpline.to_dict()
            assert data["name"] and data["phone"] and data["availability"]


class TestPlanProgress:
    """New assessments unlock once an accepted plan has run its duration."""

    @pytest.fixture
    def mild_plan(self, stress_questionnaire, make_responses):
        responses = make_responses(stress_questionnaire, rating=2, binary="No")
        return generate_plan(stress_questionnaire, responses, plan_id="p-progress")

    def test_no_plan_is_complete(self, now):
        assert is_plan_completed(None, now)
        assert days_remaining(None, now) == 0

    def test_unaccepted_plan_is_complete(self, mild_plan, now):
        assert mild_plan.start_date is None
        assert is_plan_completed(mild_plan, now)

    def test_running_plan(self, mild_plan, now):
        mild_plan.start_date = now
        assert not is_plan_completed(mild_plan, now + timedelta(days=3))
        assert days_remaining(mild_plan, now + timedelta(days=3)) == 7

    def test_boundary(self, mild_plan, now):
        mild_plan.start_date = now
        assert mild_plan.plan_duration_days == 10

        assert not is_plan_completed(mild_plan, now + timedelta(days=9, hours=23))
        assert is_plan_completed(mild_plan, now + timedelta(days=10))
        assert days_remaining(mild_plan, now + timedelta(days=10)) == 0

    def test_long_after(self, mild_plan, now):
        mild_plan.start_date = now
        assert is_plan_completed(mild_plan, now + timedelta(days=90))
        assert days_remaining(mild_plan, now + timedelta(days=90)) == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
