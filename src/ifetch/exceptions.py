"""Exception classes for ifetch."""

from __future__ import annotations


class IFetchError(Exception):
    """
    Base exception for all ifetch errors.

    Attributes:
        message: Human-readable error message.
        original_exception: The lower-level error this one wraps, if any.
    """

    def __init__(
        self,
        message: str,
        original_exception: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.original_exception = original_exception

    def __str__(self) -> str:
        if self.original_exception:
            return f"{self.message}: {self.original_exception}"
        return self.message


class InvalidURL(IFetchError, ValueError):
    """Raised when a URL cannot be parsed or does not resolve to an absolute URL."""

    def __init__(
        self,
        message: str,
        url: object = None,
        original_exception: Exception | None = None,
    ) -> None:
        super().__init__(message, original_exception)
        self.url = url


class SerializationError(IFetchError, ValueError):
    """
    Raised when a request body or query cannot be encoded.

    Covers JSON encoding failures (unsupported types, circular references),
    query encoding failures and body values that are neither str nor bytes.
    """


class InvalidOptionError(IFetchError, ValueError):
    """Raised when an option holds a value the transport cannot express."""

    def __init__(self, option: str, value: object) -> None:
        super().__init__(f"Unsupported value for '{option}': {value!r}")
        self.option = option
        self.value = value


class ParseError(IFetchError, ValueError):
    """
    Raised when a response body is not valid JSON.

    Attributes:
        text: The body text that failed to parse, after prefix stripping.
    """

    def __init__(
        self,
        message: str,
        text: str,
        original_exception: Exception | None = None,
    ) -> None:
        super().__init__(message, original_exception)
        self.text = text


class TransportError(IFetchError):
    """
    Raised when the underlying transport call fails.

    This includes network errors, connection errors and rejected redirects.
    A non-2xx status code is not a transport error: the response is returned
    as-is.
    """


class TransportTimeoutError(TransportError):
    """
    Raised when the transport gives up waiting.

    Wraps httpx.TimeoutException. Named TransportTimeoutError to avoid
    shadowing built-in TimeoutError.
    """
