"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~restbase.exceptions.RestBaseError` subclass.
Shell scripts wrapping the ``restbase`` CLI can inspect the exit code to
tell a bad endpoint from a broken server without parsing stderr.

Example::

    $ restbase get https://swapi.dev/api/ does-not-exist
    $ echo $?
    4   # EXIT_USER_ERROR -- the API answered with a 4xx status
"""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_USER_ERROR = 4
"""The remote API rejected the request with an HTTP 4xx status."""

EXIT_SERVER_ERROR = 5
"""The remote API returned an HTTP 5xx status, or a status outside the HTTP range."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""
