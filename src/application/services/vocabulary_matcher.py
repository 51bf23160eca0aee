"""Vocabulary membership matching.

Every simple check reads the nodes at one field path, keeps those a
qualifier accepts, and passes as soon as one node's value is an approved
term of the check's vocabulary. The checks differ only in their
MembershipCheck descriptor.
"""

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from application.services.field_extractor import extract_nodes, node_attribute, node_text
from application.services.term_cache import TermCache, TermSource
from domain import ddi
from domain.errors import FairCheckError
from domain.fair_models import VocabularyCategory

logger = logging.getLogger(__name__)


ValueReader = Callable[[ET.Element], Optional[str]]


def read_text(node: ET.Element) -> Optional[str]:
    """Trimmed node text; None when blank so the node does not qualify."""
    return node_text(node) or None


def read_agency(node: ET.Element) -> Optional[str]:
    return node_attribute(node, ddi.AGENCY_ATTRIBUTE)


def read_topic_class(node: ET.Element) -> Optional[str]:
    """Text of topic classifications drawn from the CESSDA vocabulary only."""
    if node_attribute(node, ddi.VOCAB_ATTRIBUTE) != ddi.TOPIC_CLASS_VOCAB_NAME:
        return None
    return read_text(node)


@dataclass(frozen=True)
class MembershipCheck:
    """Describes one vocabulary membership check.

    ``read_value`` returns the value compared against the vocabulary, or None
    if the node does not qualify and must be skipped.
    """
    name: str
    path: str
    category: VocabularyCategory
    read_value: ValueReader = read_text


ACCESS_RIGHTS = MembershipCheck("Access Rights", ddi.ACCESS_RIGHTS_PATH, VocabularyCategory.ACCESS_RIGHTS)
PID_SCHEMES = MembershipCheck("PID schema", ddi.PID_PATH, VocabularyCategory.PID_SCHEMES, read_agency)
TOPIC_CLASSIFICATION = MembershipCheck(
    "Topic Classification", ddi.TOPIC_CLASS_PATH, VocabularyCategory.TOPIC_CLASSIFICATION, read_topic_class
)
ANALYSIS_UNIT = MembershipCheck("Analysis Unit", ddi.ANALYSIS_UNIT_PATH, VocabularyCategory.ANALYSIS_UNIT)
TIME_METHOD = MembershipCheck("Time Method", ddi.TIME_METHOD_PATH, VocabularyCategory.TIME_METHOD)
SAMPLING_PROCEDURE = MembershipCheck(
    "Sampling Procedure", ddi.SAMPLING_PROCEDURE_PATH, VocabularyCategory.SAMPLING_PROCEDURE
)
COLLECTION_MODE = MembershipCheck(
    "Mode of Collection", ddi.COLLECTION_MODE_PATH, VocabularyCategory.COLLECTION_MODE
)

MEMBERSHIP_CHECKS: Dict[VocabularyCategory, MembershipCheck] = {
    check.category: check
    for check in (
        ACCESS_RIGHTS,
        PID_SCHEMES,
        TOPIC_CLASSIFICATION,
        ANALYSIS_UNIT,
        TIME_METHOD,
        SAMPLING_PROCEDURE,
        COLLECTION_MODE,
    )
}


class VocabularyMatcher:
    """Matches codebook fields against cached vocabulary term sets."""

    def __init__(self, term_cache: TermCache, term_source: Optional[TermSource] = None):
        """
        Initialize the matcher.

        Args:
            term_cache: Process-wide cache of approved terms
            term_source: Source used to populate the cache from this matcher,
                overriding the cache's own source
        """
        self.term_cache = term_cache
        self.term_source = term_source

    async def find_match(
        self, codebook: ET.Element, check: MembershipCheck, record_id: str = ""
    ) -> Optional[str]:
        """Return the first approved value found, or None.

        Raises:
            FieldExtractionError: If the check's path cannot be evaluated.
        """
        nodes = extract_nodes(codebook, check.path)
        if not nodes:
            logger.info(f"No {check.name} elements found in record: {record_id}")
            return None

        approved = await self.term_cache.get_terms(check.category, self.term_source)
        for node in nodes:
            value = check.read_value(node)
            if value is not None and value in approved:
                logger.info(f"Found approved {check.name} '{value}' in record: {record_id}")
                return value

        logger.info(f"No approved {check.name} found in record: {record_id}")
        return None

    async def contains_approved(
        self, codebook: ET.Element, check: MembershipCheck, record_id: str = ""
    ) -> bool:
        return await self.find_match(codebook, check, record_id) is not None

    async def contains_any_approved(
        self, codebook: ET.Element, record_id: str, *checks: MembershipCheck
    ) -> bool:
        """True if any of the checks finds an approved value.

        A check that errors counts as not found and does not stop the rest.
        """
        for check in checks:
            try:
                if await self.contains_approved(codebook, check, record_id):
                    return True
            except FairCheckError as e:
                logger.error(f"Error checking {check.name} in record: {record_id}: {e}")
        return False
