"""Custom exceptions for wiki2term."""


class Wiki2termError(Exception):
    """Base exception for wiki2term operations."""


class FetchError(Wiki2termError):
    """Error during article retrieval."""


class ArticleNotFoundError(FetchError):
    """The requested article does not exist."""


class RateLimitError(FetchError):
    """Rate limited by the wiki API."""


class ParseError(Wiki2termError):
    """Error during article parsing."""


class EmptyDocumentError(ParseError):
    """The raw markup was empty."""

    def __init__(self, message: str = "Cannot parse an empty document") -> None:
        super().__init__(message)


class MalformedDocumentError(ParseError):
    """The raw markup could not be tokenized at all."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Malformed document: {reason}")
        self.reason = reason
