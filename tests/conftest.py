"""Shared fixtures for the FAIR checks test suite."""

import json
from typing import Dict, Iterable, List, Optional, Set

import pytest

from domain.errors import TransportError
from domain.fair_models import VocabularyCategory
from infrastructure.oai_pmh_client import extract_codebook


OAI_ENVELOPE = """<?xml version="1.0" encoding="UTF-8"?>
<OAI-PMH xmlns="http://www.openarchives.org/OAI/2.0/">
  <GetRecord>
    <record>
      <header><identifier>{record_id}</identifier></header>
      <metadata>
        <codeBook xmlns="ddi:codebook:2_5">
          <stdyDscr>{study}</stdyDscr>
        </codeBook>
      </metadata>
    </record>
  </GetRecord>
</OAI-PMH>"""


def ddi_record(study: str = "", record_id: str = "S1") -> str:
    """OAI-PMH GetRecord envelope around a DDI codebook study description."""
    return OAI_ENVELOPE.format(study=study, record_id=record_id)


def vocabulary_json(*titles: Optional[str]) -> str:
    """Vocabulary service response with one version holding the given titles."""
    return json.dumps({"versions": [{"concepts": [{"title": t} for t in titles]}]})


class FakeTermSource:
    """Term source returning canned terms and counting fetches."""

    def __init__(self, terms: Optional[Dict[VocabularyCategory, Set[str]]] = None, error: bool = False):
        self.terms = terms or {}
        self.error = error
        self.calls: List[VocabularyCategory] = []

    async def fetch_terms(self, category: VocabularyCategory) -> Set[str]:
        self.calls.append(category)
        if self.error:
            raise TransportError(f"{category.value} vocabulary unreachable")
        return set(self.terms.get(category, set()))


class FakeLabelSource:
    """Label source keyed by keyword; keywords in ``failing`` raise."""

    def __init__(self, labels: Optional[Dict[str, Iterable[str]]] = None, failing: Iterable[str] = ()):
        self.labels = labels or {}
        self.failing = set(failing)
        self.calls: List[tuple] = []

    async def fetch_labels(self, keyword: str, language: str) -> Set[str]:
        self.calls.append((keyword, language))
        if keyword in self.failing:
            raise TransportError(f"ELSST API returned 500 for: {keyword}")
        return set(self.labels.get(keyword, ()))


class FakeCodebookSource:
    """Codebook source serving one DDI study description for any record."""

    def __init__(self, study: str = "", error: Optional[Exception] = None):
        self.study = study
        self.error = error
        self.requested: List[str] = []

    async def fetch_codebook(self, record_id: str):
        self.requested.append(record_id)
        if self.error is not None:
            raise self.error
        return extract_codebook(ddi_record(self.study, record_id).encode("utf-8"))


@pytest.fixture
def codebook_of():
    """Build a detached codebook element from a study description."""
    def _build(study: str):
        return extract_codebook(ddi_record(study).encode("utf-8"))
    return _build
