"""Exception hierarchy for restbase.

All exceptions inherit from :class:`RestBaseError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`restbase.exit_codes`.
The CLI entry point in :func:`restbase.app.main` catches ``RestBaseError``
and exits with the appropriate code.

HTTP failures raised by the dispatcher are :class:`ApiError` subclasses and
carry the request that was sent and the response that came back, so callers
can inspect headers or the raw body after catching them.

Subclass hierarchy::

    RestBaseError (exit 1)
    +-- InvalidUsageError       (exit 2)
    +-- ConfigError             (exit 1)
    +-- ConnectionError_        (exit 6)
    +-- ResponseFormatError     (exit 1)   body does not match the expected shape
    +-- ApiError                (exit 1)
        +-- UserError           (exit 4)   HTTP 4xx
        +-- ServerError         (exit 5)   HTTP 5xx
        +-- UnknownStatusError  (exit 5)   status outside [200, 600)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from restbase.exit_codes import (
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SERVER_ERROR,
    EXIT_USER_ERROR,
)

if TYPE_CHECKING:
    import httpx


class RestBaseError(Exception):
    """Base exception for all restbase errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`restbase.exit_codes`.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        self.message = message
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(RestBaseError):
    """Raised for invalid CLI arguments or malformed option values."""

    exit_code = EXIT_INVALID_USAGE


class ConfigError(RestBaseError):
    """Raised for configuration problems (unreadable or invalid config file)."""

    exit_code = EXIT_GENERIC_FAILURE


class ConnectionError_(RestBaseError):
    """Raised by the CLI on network-level failures (timeout, DNS, refused connection).

    The client core lets transport errors propagate untouched; only the
    command-line layer translates them into this type. Named with a trailing
    underscore to avoid shadowing the built-in ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class ResponseFormatError(RestBaseError):
    """A successful response whose body does not have the shape a client expects."""

    exit_code = EXIT_GENERIC_FAILURE


class ApiError(RestBaseError):
    """An HTTP response whose status code classifies as a failure.

    Args:
        message: Description of the failure, usually the raw response body.
        request: The request that was sent.
        response: The response that was received.
    """

    def __init__(
        self,
        message: str,
        request: httpx.Request,
        response: httpx.Response,
    ) -> None:
        super().__init__(message)
        self.request = request
        self.response = response

    @property
    def status_code(self) -> int:
        """The HTTP status code of :attr:`response`."""
        return self.response.status_code


class UserError(ApiError):
    """The API answered with a 4xx status: the request itself was at fault."""

    exit_code = EXIT_USER_ERROR


class ServerError(ApiError):
    """The API answered with a 5xx status: the remote service failed."""

    exit_code = EXIT_SERVER_ERROR


class UnknownStatusError(ApiError):
    """The API answered with a status code outside the ``[200, 600)`` range."""

    exit_code = EXIT_SERVER_ERROR
