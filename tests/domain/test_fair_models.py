"""Unit tests for FAIR check domain and wire models."""

import pytest

from domain.fair_models import CheckResult, FairCheck, KeywordCandidate
from domain.vocabulary_models import TopicSearchResponse, VocabularyResponse


class TestCheckResult:
    """Test result to exit code mapping."""

    def test_exit_codes(self):
        assert CheckResult.PASS.exit_code == 0
        assert CheckResult.FAIL.exit_code == 1
        assert CheckResult.INDETERMINATE.exit_code == 1


class TestFairCheck:
    """Test CLI name lookup."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("access-rights", FairCheck.ACCESS_RIGHTS),
            ("pid", FairCheck.PID),
            ("elsst-keywords", FairCheck.ELSST_KEYWORDS),
            ("ddi-vocabs", FairCheck.DDI_VOCABS),
            ("ddi-sampleproc", FairCheck.DDI_SAMPLEPROC),
            ("topic-class", FairCheck.TOPIC_CLASS),
        ],
    )
    def test_known_names(self, name, expected):
        assert FairCheck.from_name(name) is expected

    def test_unknown_name(self):
        assert FairCheck.from_name("ACCESS_RIGHTS") is None


class TestKeywordCandidate:
    """Test the two-condition eligibility gate."""

    def test_eligible_only_with_both_flags(self):
        assert KeywordCandidate("Employment", True, True).is_eligible
        assert not KeywordCandidate("Employment", True, False).is_eligible
        assert not KeywordCandidate("Employment", False, True).is_eligible
        assert not KeywordCandidate("", True, True).is_eligible


class TestVocabularyResponse:
    """Test vocabulary title collection."""

    def test_titles_from_first_version(self):
        response = VocabularyResponse.model_validate(
            {
                "versions": [
                    {"concepts": [{"title": " Open "}, {"title": "   "}, {"title": None}, {}]},
                    {"concepts": [{"title": "Closed"}]},
                ]
            }
        )
        assert response.titles() == {"Open"}

    def test_no_versions(self):
        assert VocabularyResponse.model_validate({}).titles() == set()


class TestTopicSearchResponse:
    """Test label aggregation."""

    def test_language_labels(self):
        response = TopicSearchResponse.model_validate(
            {
                "results": [
                    {"labels": {"en": "Employment", "fi": "Työllisyys"}},
                    {"labels": {}},
                    {"other": 1},
                ]
            }
        )
        assert response.language_labels() == {"en:Employment", "fi:Työllisyys"}
