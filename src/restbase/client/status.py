"""Classification of HTTP status codes.

The dispatcher only needs to know which of four buckets a status code
falls into; :func:`classify_status` decides that and
:func:`error_class_for` picks the exception raised for each failing bucket.

==================  ===============================================
Range               Class
==================  ===============================================
``[200, 400)``      :attr:`StatusClass.SUCCESS`
``[400, 500)``      :attr:`StatusClass.USER_ERROR`
``[500, 600)``      :attr:`StatusClass.SERVER_ERROR`
anything else       :attr:`StatusClass.UNKNOWN`
==================  ===============================================
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from restbase.exceptions import ApiError, ServerError, UnknownStatusError, UserError


class StatusClass(str, Enum):
    """Outcome bucket of an HTTP status code."""

    SUCCESS = "success"
    USER_ERROR = "user_error"
    SERVER_ERROR = "server_error"
    UNKNOWN = "unknown"


_ERROR_CLASSES: dict[StatusClass, type[ApiError]] = {
    StatusClass.USER_ERROR: UserError,
    StatusClass.SERVER_ERROR: ServerError,
    StatusClass.UNKNOWN: UnknownStatusError,
}


def classify_status(status_code: int) -> StatusClass:
    """Return the bucket *status_code* belongs to."""
    if 200 <= status_code < 400:
        return StatusClass.SUCCESS
    if 400 <= status_code < 500:
        return StatusClass.USER_ERROR
    if 500 <= status_code < 600:
        return StatusClass.SERVER_ERROR
    return StatusClass.UNKNOWN


def is_success(status_code: int) -> bool:
    return classify_status(status_code) is StatusClass.SUCCESS


def error_class_for(status_class: StatusClass) -> Optional[type[ApiError]]:
    """Return the exception type raised for *status_class*, or ``None`` on success."""
    return _ERROR_CLASSES.get(status_class)
