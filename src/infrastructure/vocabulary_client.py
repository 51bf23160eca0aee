"""Clients for the CESSDA vocabulary service and the keyword topics API."""

import logging
from typing import Set

import httpx
from pydantic import ValidationError

from config.fair_config import FairChecksConfig
from domain.errors import MetadataParseError
from domain.fair_models import VocabularyCategory
from domain.vocabulary_models import TopicSearchResponse, VocabularyResponse
from infrastructure.http_utils import build_timeout, get_ok

logger = logging.getLogger(__name__)

JSON_ACCEPT = "application/json"


class VocabularyClient:
    """Downloads controlled vocabulary term lists."""

    def __init__(self, client: httpx.AsyncClient, config: FairChecksConfig):
        self.client = client
        self.urls = dict(config.vocabulary_urls)
        self.timeout = build_timeout(config.vocabulary_timeout, config.connect_timeout)

    async def fetch_terms(self, category: VocabularyCategory) -> Set[str]:
        """Fetch the concept titles of a category's vocabulary.

        Returns:
            The trimmed, non-blank titles of the first published version.
            Empty if the vocabulary has none.

        Raises:
            TransportError: If the service is unreachable or answers non-200.
            MetadataParseError: If the body does not have the expected shape.
        """
        url = self.urls[category]
        response = await get_ok(
            self.client,
            f"{category.value} vocabulary",
            url,
            accept=JSON_ACCEPT,
            timeout=self.timeout,
        )

        try:
            vocabulary = VocabularyResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise MetadataParseError(f"Invalid {category.value} vocabulary response: {e}") from e

        terms = vocabulary.titles()
        if terms:
            logger.debug(f"Found {category.value} entries: {sorted(terms)}")
        else:
            logger.error(f"No {category.value} terms found in vocabulary response")
        return terms


class ElsstTopicClient:
    """Looks up keyword labels in the ELSST topics API."""

    def __init__(self, client: httpx.AsyncClient, config: FairChecksConfig):
        self.client = client
        self.base_url = config.elsst_api_base
        self.timeout = build_timeout(config.keyword_timeout, config.connect_timeout)

    async def fetch_labels(self, keyword: str, language: str) -> Set[str]:
        """Return every label of topics matching a keyword in one language.

        Labels are keyed as ``"<lang>:<label>"`` across all languages the
        API returns for the matching topics.
        """
        response = await get_ok(
            self.client,
            "ELSST API",
            self.base_url,
            accept=JSON_ACCEPT,
            timeout=self.timeout,
            params={"filter": f"cf.search.labels:{keyword},cf.search.language:{language}"},
        )

        try:
            topics = TopicSearchResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise MetadataParseError(f"Invalid ELSST API response for '{keyword}': {e}") from e

        labels = topics.language_labels()
        logger.debug(f"ELSST API returned {len(labels)} label(s) for '{keyword}'")
        return labels
