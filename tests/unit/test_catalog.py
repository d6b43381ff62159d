"""
Unit Tests for the Static Catalogs
"""
import pytest

from mindcare.core.recommendation import (
    ISSUE_RECOMMENDATIONS,
    OTHER_ISSUE_ID,
    QUESTIONNAIRES,
    THERAPY_MODULES,
    Question,
    QuestionKind,
    Questionnaire,
    get_issue,
    get_module,
    get_questionnaire,
    list_issues,
    list_modules,
    resolve_issue_id,
)
from mindcare.utils.exceptions import CatalogError, UnknownIssueError


class TestIssues:
    def test_eleven_issues_with_other_last(self):
        issues = list_issues()
        assert len(issues) == 11
        assert issues[-1].issue_id == OTHER_ISSUE_ID

    def test_every_issue_has_questionnaire(self):
        for issue in list_issues():
            assert issue.issue_id in QUESTIONNAIRES

    def test_every_fixed_issue_has_table_row(self):
        fixed = {i.issue_id for i in list_issues()} - {OTHER_ISSUE_ID}
        assert fixed == set(ISSUE_RECOMMENDATIONS)

    @pytest.mark.parametrize("key", ["stress", "STRESS", " Stress & Burnout ", "stress & burnout"])
    def test_resolve_issue_id(self, key):
        assert resolve_issue_id(key) == "stress"

    @pytest.mark.parametrize("key", ["", "burnout", None])
    def test_unknown_issue(self, key):
        with pytest.raises(UnknownIssueError) as exc_info:
            get_issue(key)
        assert exc_info.value.code == "UNKNOWN_ISSUE"


class TestQuestionnaires:
    @pytest.mark.parametrize("issue_id", sorted(ISSUE_RECOMMENDATIONS))
    def test_standard_layout(self, issue_id):
        questionnaire = get_questionnaire(issue_id)
        kinds = [q.kind for q in questionnaire]

        assert len(questionnaire) == 10
        assert [q.id for q in questionnaire] == [str(i) for i in range(1, 11)]
        assert kinds[2:4] == [QuestionKind.BINARY, QuestionKind.BINARY]
        assert kinds[4:6] == [QuestionKind.RATING, QuestionKind.RATING]
        assert kinds.count(QuestionKind.FREE_TEXT) == 6

    def test_binary_options_affirmative_first(self):
        for questionnaire in QUESTIONNAIRES.values():
            for question in questionnaire.of_kind(QuestionKind.BINARY):
                assert question.options == ("Yes", "No")
                assert question.affirmative_option == "Yes"

    def test_insomnia_hours_scale(self):
        hours = get_questionnaire("insomnia").get("5")
        assert (hours.scale_min, hours.scale_max) == (1, 12)

    def test_other_questionnaire(self, other_questionnaire):
        assert other_questionnaire.is_free_form
        assert other_questionnaire.of_kind(QuestionKind.BINARY) == []
        assert [q.id for q in other_questionnaire.of_kind(QuestionKind.RATING)] == ["4", "5"]
        for qid in ("1", "7", "8"):
            assert other_questionnaire.get(qid).kind == QuestionKind.FREE_TEXT

    def test_lookup_by_display_name(self):
        assert get_questionnaire("Trauma & PTSD").issue_id == "trauma"

    def test_to_dict(self, stress_questionnaire):
        data = stress_questionnaire.to_dict()
        assert data["issue_name"] == "Stress & Burnout"
        assert data["questions"][2]["options"] == ["Yes", "No"]
        assert data["questions"][4]["scale_max"] == 10
        assert "options" not in data["questions"][0]


class TestModules:
    def test_catalog(self):
        assert len(list_modules()) == 10
        assert get_module("act").title == "Acceptance & Commitment Therapy"

    def test_table_references_known_modules(self):
        for module_ids in ISSUE_RECOMMENDATIONS.values():
            assert len(module_ids) == 4
            assert len(set(module_ids)) == 4
            for module_id in module_ids:
                assert module_id in THERAPY_MODULES

    def test_unknown_module(self):
        with pytest.raises(CatalogError) as exc_info:
            get_module("hypnosis")
        assert exc_info.value.details["module_id"] == "hypnosis"


class TestShapeInvariants:
    """Malformed catalog entries are refused at construction."""

    def test_rating_needs_scale(self):
        with pytest.raises(CatalogError):
            Question(id="q", text="Rate", kind=QuestionKind.RATING)

    def test_rating_scale_order(self):
        with pytest.raises(CatalogError):
            Question(id="q", text="Rate", kind=QuestionKind.RATING, scale_min=10, scale_max=1)

    def test_binary_needs_two_options(self):
        with pytest.raises(CatalogError):
            Question(id="q", text="?", kind=QuestionKind.BINARY, options=("Yes",))

    def test_options_only_on_binary(self):
        with pytest.raises(CatalogError):
            Question(id="q", text="?", kind=QuestionKind.FREE_TEXT, options=("Yes", "No"))

    def test_scale_only_on_rating(self):
        with pytest.raises(CatalogError):
            Question(id="q", text="?", kind=QuestionKind.BINARY, options=("Yes", "No"), scale_min=1, scale_max=5)

    def test_options_normalised_to_tuple(self):
        question = Question(id="q", text="?", kind=QuestionKind.BINARY, options=["Yes", "No"])
        assert question.options == ("Yes", "No")

    def test_duplicate_ids(self):
        q = Question(id="1", text="?", kind=QuestionKind.FREE_TEXT)
        with pytest.raises(CatalogError):
            Questionnaire(issue_id="dup", issue_name="Dup", questions=(q, q))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
