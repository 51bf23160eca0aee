"""FAIR Check Service.

Runs the compliance checks for a catalogue record reference. Every check
follows the same flow:

    record reference -> record identifier -> codebook -> matcher -> result

Any error raised along the way (malformed reference, transport, parse or
structural failure) ends the check as INDETERMINATE; nothing propagates
to the caller. A check that completes without finding an approved value
is a FAIL.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Awaitable, Callable, Dict, Optional, Protocol

from application.services import vocabulary_matcher as checks
from application.services.keyword_validator import KeywordValidator, LabelSource
from application.services.vocabulary_matcher import MembershipCheck, VocabularyMatcher
from domain.errors import FairCheckError
from domain.fair_models import CheckResult, FairCheck
from domain.record_reference import extract_language_code, extract_record_identifier

logger = logging.getLogger(__name__)


class CodebookSource(Protocol):
    """Anything that can fetch the DDI codebook of a record."""

    async def fetch_codebook(self, record_id: str) -> ET.Element:
        ...


CodebookCheck = Callable[[ET.Element, str, Optional[str]], Awaitable[CheckResult]]


class FairCheckService:
    """Entry point for the FAIR compliance checks."""

    def __init__(
        self,
        codebook_source: CodebookSource,
        matcher: VocabularyMatcher,
        label_source: LabelSource,
        on_close: Optional[Callable[[], Awaitable[None]]] = None,
    ):
        """
        Initialize the service.

        Args:
            codebook_source: Fetches codebooks by record identifier
            matcher: Vocabulary matcher backed by the shared term cache
            label_source: ELSST label lookup used by the keyword check
            on_close: Optional coroutine releasing shared resources
        """
        self.codebook_source = codebook_source
        self.matcher = matcher
        self.label_source = label_source
        self._on_close = on_close

        self._checks: Dict[FairCheck, Callable[[str], Awaitable[CheckResult]]] = {
            FairCheck.ACCESS_RIGHTS: self.check_access_rights,
            FairCheck.PID: self.check_pid,
            FairCheck.ELSST_KEYWORDS: self.check_elsst_keywords,
            FairCheck.DDI_VOCABS: self.check_recommended_vocabularies,
            FairCheck.DDI_SAMPLEPROC: self.check_sampling_procedure,
            FairCheck.TOPIC_CLASS: self.check_topic_classification,
        }

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self):
        if self._on_close is not None:
            await self._on_close()
            self._on_close = None

    async def run_check(self, check: FairCheck, url: str) -> CheckResult:
        """Run a check selected by its CLI name."""
        return await self._checks[check](url)

    # ========================================
    # Checks
    # ========================================

    async def check_access_rights(self, url: str) -> CheckResult:
        """Does the record declare an approved access rights term?"""
        return await self._run("access rights", url, self._membership(checks.ACCESS_RIGHTS))

    async def check_pid(self, url: str) -> CheckResult:
        """Does the record carry an identifier from an approved PID scheme?"""
        return await self._run("approved PIDs", url, self._membership(checks.PID_SCHEMES))

    async def check_topic_classification(self, url: str) -> CheckResult:
        """Does the record use a CESSDA Topic Classification term?"""
        return await self._run("Topic Classification", url, self._membership(checks.TOPIC_CLASSIFICATION))

    async def check_sampling_procedure(self, url: str) -> CheckResult:
        """Does the record use a DDI Sampling Procedure term?"""
        return await self._run("Sampling Procedure", url, self._membership(checks.SAMPLING_PROCEDURE))

    async def check_recommended_vocabularies(self, url: str) -> CheckResult:
        """Does the record use any of the recommended DDI vocabularies?

        Analysis Unit, Time Method and Mode of Collection are tried in turn.
        Errors in one of them count as not found.
        """

        async def recommended(codebook: ET.Element, record_id: str, language: Optional[str]) -> CheckResult:
            found = await self.matcher.contains_any_approved(
                codebook, record_id, checks.ANALYSIS_UNIT, checks.TIME_METHOD, checks.COLLECTION_MODE
            )
            if found:
                logger.info("Record contains at least one recommended DDI controlled vocabulary")
                return CheckResult.PASS
            logger.info(f"No recommended DDI vocabularies found in record: {record_id}")
            return CheckResult.FAIL

        return await self._run("recommended DDI vocabularies", url, recommended)

    async def check_elsst_keywords(self, url: str) -> CheckResult:
        """Does the record carry at least one ELSST keyword confirmed by the API?"""

        async def elsst(codebook: ET.Element, record_id: str, language: Optional[str]) -> CheckResult:
            return await KeywordValidator(self.label_source).validate(codebook, language)

        return await self._run("ELSST keywords", url, elsst)

    # ========================================
    # Pipeline
    # ========================================

    def _membership(self, check: MembershipCheck) -> CodebookCheck:
        async def membership(codebook: ET.Element, record_id: str, language: Optional[str]) -> CheckResult:
            found = await self.matcher.contains_approved(codebook, check, record_id)
            return CheckResult.PASS if found else CheckResult.FAIL

        return membership

    async def _run(self, description: str, url: str, check: CodebookCheck) -> CheckResult:
        try:
            record_id = extract_record_identifier(url)
            language = extract_language_code(url)
            logger.info(f"Checking {description} for record: {record_id} (language: {language})")

            codebook = await self.codebook_source.fetch_codebook(record_id)
            result = await check(codebook, record_id, language)
        except FairCheckError as e:
            logger.error(f"Couldn't check {description}: {e}")
            return CheckResult.INDETERMINATE
        except Exception as e:
            logger.exception(f"Unexpected error checking {description}: {e}")
            return CheckResult.INDETERMINATE

        logger.info(f"{description} check for record {record_id}: {result.value}")
        return result
