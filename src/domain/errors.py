"""Error taxonomy for FAIR metadata checks.

Every failure raised below the check boundary derives from FairCheckError so
that the orchestrator can map it to an INDETERMINATE result in one place.
"""


class FairCheckError(Exception):
    """Base error for anything that prevents a definitive PASS/FAIL."""
    pass


class InvalidRecordReferenceError(FairCheckError):
    """The record reference URL is missing the detail segment or identifier."""
    pass


class TransportError(FairCheckError):
    """Network failure, timeout, non-200 status or empty body."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class MetadataParseError(FairCheckError):
    """A response body could not be parsed as XML or JSON."""
    pass


class CodebookNotFoundError(FairCheckError):
    """The OAI-PMH envelope carries no DDI codeBook element."""
    pass


class FieldExtractionError(FairCheckError):
    """A structural path query could not be evaluated."""
    pass
