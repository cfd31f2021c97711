"""Exception types raised by the analysis pipeline."""


class SigsentryError(Exception):
    """Base class for all sigsentry errors."""


class MissingInputError(SigsentryError):
    """Required upload fields (name, content, content type) are absent."""


class EmptyContentError(SigsentryError):
    """Payload is empty once the data URI header has been stripped."""


class SummarizerError(SigsentryError):
    """The external summarizer failed to produce a summary."""


class LibraryError(SigsentryError):
    """A signature library file could not be loaded."""
