"""FAIR Check Domain Models.

Value types shared by the checks:
- CheckResult: the three-valued outcome of a check
- VocabularyCategory: controlled vocabularies a field can be checked against
- FairCheck: the named checks exposed on the command line
- KeywordCandidate / ConfirmedKeyword: the two keyword validation phases
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CheckResult(str, Enum):
    """Outcome of a single compliance check."""
    PASS = "PASS"
    FAIL = "FAIL"
    INDETERMINATE = "INDETERMINATE"  # An error prevented a decision

    @property
    def exit_code(self) -> int:
        return 0 if self is CheckResult.PASS else 1


class VocabularyCategory(str, Enum):
    """Controlled vocabularies hosted by the CESSDA vocabulary service."""
    ACCESS_RIGHTS = "AccessRights"
    PID_SCHEMES = "PID"
    TOPIC_CLASSIFICATION = "TopicClassification"
    ANALYSIS_UNIT = "AnalysisUnit"
    TIME_METHOD = "TimeMethod"
    SAMPLING_PROCEDURE = "SamplingProcedure"
    COLLECTION_MODE = "ModeOfCollection"


class FairCheck(str, Enum):
    """Checks selectable from the command line, by CLI name."""
    ACCESS_RIGHTS = "access-rights"
    PID = "pid"
    ELSST_KEYWORDS = "elsst-keywords"
    DDI_VOCABS = "ddi-vocabs"
    DDI_SAMPLEPROC = "ddi-sampleproc"
    TOPIC_CLASS = "topic-class"

    @classmethod
    def from_name(cls, name: str) -> Optional["FairCheck"]:
        """Look up a check by its CLI name, returning None if unknown."""
        for check in cls:
            if check.value == name:
                return check
        return None


@dataclass(frozen=True)
class KeywordCandidate:
    """A keyword that passed the local vocab/vocabURI filter.

    Only candidates where both flags hold are sent to the keyword API.
    """
    text: str
    has_vocab: bool
    has_vocab_uri: bool

    @property
    def is_eligible(self) -> bool:
        return self.has_vocab and self.has_vocab_uri and bool(self.text)


@dataclass(frozen=True)
class ConfirmedKeyword:
    """A candidate confirmed against a label returned by the keyword API."""
    candidate: KeywordCandidate
    language: str
    label: str
