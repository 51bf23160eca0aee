"""ELSST Keyword Validation.

Validates that a record carries at least one ELSST keyword, in two phases:

1. Local filter: keyword elements become KeywordCandidates only when their
   ``vocab`` is "ELSST", their ``vocabURI`` points at elsst.cessda.eu and
   their text is non-empty.
2. Remote confirmation: each distinct candidate text is looked up in the
   ELSST topics API for the record's language. A candidate is confirmed when
   a returned label in that language matches its text case-insensitively.

Label lookups are cached for one validation only.
"""

import asyncio
import logging
import xml.etree.ElementTree as ET
from typing import Dict, Iterable, List, Optional, Protocol, Set

from application.services.field_extractor import extract_nodes, node_attribute, node_text
from domain import ddi
from domain.errors import FairCheckError
from domain.fair_models import CheckResult, ConfirmedKeyword, KeywordCandidate

logger = logging.getLogger(__name__)


class LabelSource(Protocol):
    """Anything that can return ``"<lang>:<label>"`` entries for a keyword."""

    async def fetch_labels(self, keyword: str, language: str) -> Set[str]:
        ...


def to_candidate(node: ET.Element) -> Optional[KeywordCandidate]:
    """Build a KeywordCandidate from a keyword element, None if its text is blank."""
    text = node_text(node)
    if not text:
        return None
    return KeywordCandidate(
        text=text,
        has_vocab=node_attribute(node, ddi.VOCAB_ATTRIBUTE) == ddi.ELSST_VOCAB_NAME,
        has_vocab_uri=ddi.ELSST_URI_SUBSTRING in (node_attribute(node, ddi.VOCAB_URI_ATTRIBUTE) or ""),
    )


def select_candidates(codebook: ET.Element) -> List[KeywordCandidate]:
    """Phase 1: keywords eligible for remote confirmation, in document order."""
    candidates = []
    for node in extract_nodes(codebook, ddi.KEYWORD_PATH):
        candidate = to_candidate(node)
        if candidate is None:
            continue
        logger.debug(
            f"Keyword '{candidate.text}': vocab={candidate.has_vocab}, vocabURI={candidate.has_vocab_uri}"
        )
        if candidate.is_eligible:
            candidates.append(candidate)
    return candidates


def normalize_label(label: str) -> str:
    return label.replace('"', "").strip().upper()


def labels_for_language(labels: Iterable[str], language: str) -> Dict[str, str]:
    """Map normalized label text to its original form for one language."""
    prefix = f"{language}:"
    return {
        normalize_label(entry[len(prefix):]): entry[len(prefix):]
        for entry in labels
        if entry.startswith(prefix)
    }


def confirm_candidates(
    candidates: Iterable[KeywordCandidate], labels: Iterable[str], language: str
) -> List[ConfirmedKeyword]:
    """Phase 2 matching: candidates whose text equals a label in ``language``."""
    known = labels_for_language(labels, language)
    confirmed = []
    for candidate in candidates:
        label = known.get(candidate.text.upper())
        if label is not None:
            confirmed.append(ConfirmedKeyword(candidate=candidate, language=language, label=label))
    return confirmed


class AllLookupsFailedError(FairCheckError):
    """Every keyword lookup failed, so no labels could be obtained."""
    pass


class KeywordValidator:
    """Two-phase ELSST keyword validation for a single record."""

    def __init__(self, label_source: LabelSource):
        self.label_source = label_source
        self._labels: Dict[tuple, Set[str]] = {}

    async def validate(self, codebook: ET.Element, language: Optional[str]) -> CheckResult:
        """Validate the keywords of a codebook.

        Raises:
            FieldExtractionError: If the keyword path cannot be evaluated.
        """
        candidates = select_candidates(codebook)
        if not candidates:
            logger.info("No keywords found with vocab='ELSST' and a vocabURI containing 'elsst.cessda.eu'")
            return CheckResult.FAIL

        logger.info(f"Checking {len(candidates)} candidate keyword(s) via ELSST API")
        if language is None:
            logger.info("No language code available for ELSST API validation")
            return CheckResult.INDETERMINATE

        try:
            labels = await self.fetch_labels([c.text for c in candidates], language)
        except AllLookupsFailedError as e:
            logger.error(f"Failed to fetch ELSST keywords: {e}")
            return CheckResult.INDETERMINATE

        confirmed = confirm_candidates(candidates, labels, language)
        if confirmed:
            logger.info(
                f"Keyword '{confirmed[0].candidate.text}' meets all conditions (vocab, vocabURI and API match)"
            )
            return CheckResult.PASS

        logger.info("No keywords meet all conditions")
        return CheckResult.FAIL

    async def fetch_labels(self, keywords: Iterable[str], language: str) -> Set[str]:
        """Look up each distinct keyword concurrently and merge the labels.

        A failed lookup contributes no labels.

        Raises:
            AllLookupsFailedError: If every lookup failed.
        """
        pending = [k for k in dict.fromkeys(keywords) if (k, language) not in self._labels]
        results = await asyncio.gather(
            *(self.label_source.fetch_labels(k, language) for k in pending),
            return_exceptions=True,
        )

        failures = 0
        for keyword, result in zip(pending, results):
            if isinstance(result, Exception):
                logger.warning(f"ELSST lookup failed for '{keyword}': {result}")
                failures += 1
            elif isinstance(result, BaseException):
                raise result
            else:
                self._labels[(keyword, language)] = set(result)

        if pending and failures == len(pending):
            raise AllLookupsFailedError(f"All {failures} ELSST lookup(s) failed")

        merged: Set[str] = set()
        for (_, lang), labels in self._labels.items():
            if lang == language:
                merged.update(labels)
        logger.info(f"Number of ELSST labels retrieved: {len(merged)}")
        return merged
