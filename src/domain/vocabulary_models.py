"""Wire models for the JSON services the checks consume.

The vocabulary service returns ``{versions: [{concepts: [{title}]}]}`` and
the keyword topics API returns ``{results: [{labels: {lang: label}}]}``.
Unknown fields are ignored; missing ones default to empty.
"""

from typing import Any, Dict, List, Optional, Set

from pydantic import BaseModel, ConfigDict, Field, field_validator


class VocabularyConcept(BaseModel):
    """A single concept of a vocabulary version."""
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None


class VocabularyVersion(BaseModel):
    """One published version of a controlled vocabulary."""
    model_config = ConfigDict(extra="ignore")

    concepts: List[VocabularyConcept] = Field(default_factory=list)


class VocabularyResponse(BaseModel):
    """Top-level vocabulary service response."""
    model_config = ConfigDict(extra="ignore")

    versions: List[VocabularyVersion] = Field(default_factory=list)

    def titles(self) -> Set[str]:
        """Trimmed, non-blank concept titles of the first version."""
        if not self.versions:
            return set()
        return {
            concept.title.strip()
            for concept in self.versions[0].concepts
            if concept.title and concept.title.strip()
        }


class TopicResult(BaseModel):
    """A topic returned by the keyword topics API."""
    model_config = ConfigDict(extra="ignore")

    labels: Dict[str, Optional[str]] = Field(default_factory=dict)

    @field_validator("labels", mode="before")
    @classmethod
    def scalar_labels(cls, value: Any) -> Any:
        """Render numeric labels as text; nested values carry no label."""
        if not isinstance(value, dict):
            return value
        labels = {}
        for lang, label in value.items():
            if isinstance(label, (dict, list)):
                label = None
            elif label is not None and not isinstance(label, str):
                label = str(label)
            labels[lang] = label
        return labels


class TopicSearchResponse(BaseModel):
    """Top-level keyword topics API response."""
    model_config = ConfigDict(extra="ignore")

    results: List[TopicResult] = Field(default_factory=list)

    def language_labels(self) -> Set[str]:
        """Labels keyed as ``"<lang>:<label>"``."""
        return {
            f"{lang}:{label}"
            for result in self.results
            for lang, label in result.labels.items()
            if label is not None
        }
