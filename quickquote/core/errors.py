"""Exception types raised across the quickquote package."""


class QuickQuoteError(Exception):
    """Base class for every error raised by this package."""


class NotFoundError(QuickQuoteError, LookupError):
    """A referenced quote or invitation is absent where it was expected."""


class QuoteNotFoundError(NotFoundError):
    def __init__(self, quote_id: str, stage: str, reason: str = "not found") -> None:
        self.quote_id = quote_id
        self.stage = stage
        super().__init__(f"Quote {quote_id} {reason} in {stage}")


class InvitationNotFoundError(NotFoundError):
    """No invitation matched the given email or id."""


class ValidationError(QuickQuoteError, ValueError):
    """User input failed a check before any state was changed."""


class IOFailure(QuickQuoteError):
    """A storage, network, or rendering collaborator failed."""


class StorageError(IOFailure):
    """The key-value store could not be read or written."""


class BackendError(IOFailure):
    """The hosted backend rejected a request or could not be reached."""


class RenderError(IOFailure):
    """The document renderer failed to produce output."""
