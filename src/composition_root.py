# src/composition_root.py

from typing import Optional

import httpx

from application.services.fair_check_service import FairCheckService
from application.services.term_cache import TermCache
from application.services.vocabulary_matcher import VocabularyMatcher
from config.fair_config import FairChecksConfig
from infrastructure.oai_pmh_client import OaiPmhClient
from infrastructure.vocabulary_client import ElsstTopicClient, VocabularyClient

USER_AGENT = "cessda-fair-checks"


def create_http_client(
    config: FairChecksConfig, transport: Optional[httpx.AsyncBaseTransport] = None
) -> httpx.AsyncClient:
    """Creates the HTTP client shared by all outbound services."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(config.request_timeout, connect=config.connect_timeout),
        headers={"User-Agent": USER_AGENT},
        follow_redirects=True,
        transport=transport,
    )


def bootstrap_fair_checks(
    config: Optional[FairChecksConfig] = None,
    term_cache: Optional[TermCache] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FairCheckService:
    """Wires the FAIR check service and its collaborators.

    The term cache is meant to live for the whole process; pass one in to
    share it between services. The cache is never bound to the HTTP client
    created here: the matcher hands it this service's vocabulary client on
    each lookup. Close the returned service to release the HTTP client.
    """
    config = config or FairChecksConfig.from_env()
    client = create_http_client(config, transport)

    vocabulary_client = VocabularyClient(client, config)
    if term_cache is None:
        term_cache = TermCache()

    return FairCheckService(
        codebook_source=OaiPmhClient(client, config),
        matcher=VocabularyMatcher(term_cache, vocabulary_client),
        label_source=ElsstTopicClient(client, config),
        on_close=client.aclose,
    )
