class DocumentUpdateError(Exception):
    """Raised when a document could not be updated, fallback included."""


class GenerationTimeoutError(Exception):
    """Raised when a generation call exceeds the configured AI timeout."""


class NoChangesAppliedError(Exception):
    """Raised when a fallback update method leaves the document untouched."""
