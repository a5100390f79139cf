"""
Custom exceptions for the language-version synchronization core.

Gateway failures are recovered per block by the orchestrator; structural
failures are raised to the caller before any page is committed.
"""


class StoryglotError(Exception):
    """Base exception for all StoryGlot errors."""
    pass


class StructuralError(StoryglotError):
    """Raised when a document, page or block cannot be resolved.

    Attributes:
        message: Error description
        page_index: Offending page index, if known
        block_index: Offending block index, if known
    """
    def __init__(self, message: str, page_index: int = None, block_index: int = None):
        super().__init__(message)
        self.page_index = page_index
        self.block_index = block_index


class UnknownLanguageError(StoryglotError):
    """Raised when a language version does not exist in the store."""

    def __init__(self, language: str):
        super().__init__(f"No version for language: {language}")
        self.language = language


class TranslationGatewayError(StoryglotError):
    """Raised by a translation gateway when a request fails.

    Attributes:
        status_code: HTTP status code when the failure was a non-2xx response
    """
    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class TranslationInProgressError(StoryglotError):
    """Raised when translate-all is invoked while a previous run is still busy."""
    pass


class TranslationInterrupted(StoryglotError):
    """Raised inside a run when cancellation was requested at a checkpoint."""
    pass
