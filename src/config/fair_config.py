"""FAIR checks configuration.

Endpoints and timeouts default to the public CESSDA services. Each can be
overridden through environment variables (or a ``.env`` file loaded by the
CLI) without changing how checks decide their results:

- FAIR_OAI_PMH_BASE: OAI-PMH endpoint serving DDI 2.5 records
- FAIR_VOCABULARY_BASE: root of the CESSDA vocabulary service
- FAIR_ELSST_API_BASE: keyword topics search endpoint
- FAIR_CONNECT_TIMEOUT: connect timeout in seconds (default: 10)
- FAIR_REQUEST_TIMEOUT: metadata request timeout in seconds (default: 30)
- FAIR_VOCABULARY_TIMEOUT: vocabulary request timeout in seconds (default: 20)
- FAIR_KEYWORD_TIMEOUT: keyword API request timeout in seconds (default: 30)
- FAIR_LOG_LEVEL: logging level for the CLI (default: INFO)
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Dict

from domain.fair_models import VocabularyCategory

logger = logging.getLogger(__name__)

DEFAULT_OAI_PMH_BASE = "https://datacatalogue.cessda.eu/oai-pmh/v0/oai"
DEFAULT_VOCABULARY_BASE = "https://vocabularies.cessda.eu/v2/vocabularies"
DEFAULT_ELSST_API_BASE = "https://skg-if-openapi.cessda.eu/api/topics"

# Vocabulary name and version published for each category
VOCABULARY_VERSIONS: Dict[VocabularyCategory, tuple] = {
    VocabularyCategory.ACCESS_RIGHTS: ("CessdaAccessRights", "1.0.0"),
    VocabularyCategory.PID_SCHEMES: ("CessdaPersistentIdentifierTypes", "1.0.0"),
    VocabularyCategory.TOPIC_CLASSIFICATION: ("TopicClassification", "4.0.0"),
    VocabularyCategory.ANALYSIS_UNIT: ("AnalysisUnit", "1.2.0"),
    VocabularyCategory.TIME_METHOD: ("TimeMethod", "1.2.1"),
    VocabularyCategory.SAMPLING_PROCEDURE: ("SamplingProcedure", "2.0.0"),
    VocabularyCategory.COLLECTION_MODE: ("ModeOfCollection", "4.0.0"),
}


def env_seconds(name: str, default: float) -> float:
    """Read a timeout in seconds, keeping the default for malformed values."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        seconds = float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default
    if not seconds > 0:
        logger.warning(f"Ignoring non-positive {name}={raw!r}, using {default}")
        return default
    return seconds


def build_vocabulary_url(base: str, category: VocabularyCategory) -> str:
    """Build the English JSON export URL of a category's vocabulary."""
    name, version = VOCABULARY_VERSIONS[category]
    return f"{base.rstrip('/')}/{name}/{version}?languageVersion=en-{version}&format=json"


@dataclass
class FairChecksConfig:
    """Endpoints and timeouts used by the FAIR checks."""

    oai_pmh_base: str = DEFAULT_OAI_PMH_BASE
    vocabulary_base: str = DEFAULT_VOCABULARY_BASE
    elsst_api_base: str = DEFAULT_ELSST_API_BASE

    # Timeouts in seconds
    connect_timeout: float = 10.0
    request_timeout: float = 30.0
    vocabulary_timeout: float = 20.0
    keyword_timeout: float = 30.0

    log_level: str = "INFO"

    vocabulary_urls: Dict[VocabularyCategory, str] = field(default_factory=dict)

    def __post_init__(self):
        for category in VocabularyCategory:
            self.vocabulary_urls.setdefault(
                category, build_vocabulary_url(self.vocabulary_base, category)
            )

    @classmethod
    def from_env(cls) -> "FairChecksConfig":
        """Create configuration from environment variables."""
        return cls(
            oai_pmh_base=os.getenv("FAIR_OAI_PMH_BASE", DEFAULT_OAI_PMH_BASE),
            vocabulary_base=os.getenv("FAIR_VOCABULARY_BASE", DEFAULT_VOCABULARY_BASE),
            elsst_api_base=os.getenv("FAIR_ELSST_API_BASE", DEFAULT_ELSST_API_BASE),
            connect_timeout=env_seconds("FAIR_CONNECT_TIMEOUT", 10.0),
            request_timeout=env_seconds("FAIR_REQUEST_TIMEOUT", 30.0),
            vocabulary_timeout=env_seconds("FAIR_VOCABULARY_TIMEOUT", 20.0),
            keyword_timeout=env_seconds("FAIR_KEYWORD_TIMEOUT", 30.0),
            log_level=os.getenv("FAIR_LOG_LEVEL", "INFO").upper(),
        )
