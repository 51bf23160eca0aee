"""Configuration package for FAIR metadata checks."""

from .fair_config import FairChecksConfig, build_vocabulary_url

__all__ = ["FairChecksConfig", "build_vocabulary_url"]
