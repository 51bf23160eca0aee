"""OAI-PMH metadata fetcher.

Retrieves a catalogue record in the ``oai_ddi25`` metadata format and hands
back only its DDI ``codeBook`` element, detached from the OAI-PMH envelope.
Everything downstream runs its path queries against that element.
"""

import copy
import logging
import xml.etree.ElementTree as ET

import httpx

from config.fair_config import FairChecksConfig
from domain.ddi import CODEBOOK_PATH, CODEBOOK_TAG, NAMESPACES
from domain.errors import CodebookNotFoundError, MetadataParseError
from infrastructure.http_utils import build_timeout, get_ok

logger = logging.getLogger(__name__)

XML_ACCEPT = "application/xml, text/xml, */*"


class OaiPmhClient:
    """Fetches DDI codebooks from an OAI-PMH endpoint."""

    def __init__(self, client: httpx.AsyncClient, config: FairChecksConfig):
        self.client = client
        self.base_url = config.oai_pmh_base
        self.timeout = build_timeout(config.request_timeout, config.connect_timeout)

    def record_params(self, record_id: str) -> dict:
        return {
            "verb": "GetRecord",
            "metadataPrefix": "oai_ddi25",
            "identifier": record_id,
        }

    async def fetch_codebook(self, record_id: str) -> ET.Element:
        """Fetch a record and return a deep copy of its codeBook element.

        A single attempt is made; callers decide what a failure means.

        Raises:
            TransportError: If the request fails or the response is unusable.
            MetadataParseError: If the body is not well-formed XML.
            CodebookNotFoundError: If the envelope has no codeBook.
        """
        response = await get_ok(
            self.client,
            "OAI-PMH",
            self.base_url,
            accept=XML_ACCEPT,
            timeout=self.timeout,
            params=self.record_params(record_id),
        )

        logger.info(f"Parsing XML response from OAI-PMH endpoint for record: {record_id}")
        return extract_codebook(response.content)


def extract_codebook(content: bytes) -> ET.Element:
    """Parse an OAI-PMH document and detach its DDI codeBook element."""
    try:
        root = ET.fromstring(content)
    except (ET.ParseError, LookupError, ValueError) as e:
        raise MetadataParseError(f"Failed to parse XML response: {e}") from e

    codebook = root if root.tag == CODEBOOK_TAG else root.find(CODEBOOK_PATH, NAMESPACES)
    if codebook is None:
        raise CodebookNotFoundError("No DDI codeBook found")

    return copy.deepcopy(codebook)
