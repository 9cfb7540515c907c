from __future__ import annotations

import json
from typing import Any


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class DialogStateError(DomainError):
    """Raised when a dialog transition is not allowed from the current state."""


class NotFoundError(DomainError):
    """Raised when a settings resource or record does not exist."""


class ApiError(DomainError):
    """Raised by the REST client for non-2xx responses and transport failures.

    The message is the JSON-encoded response body when there is one, so callers
    that only see ``str(error)`` can still recover field errors from it.
    """

    def __init__(self, status_code: int, payload: Any = None, message: str | None = None):
        self.status_code = status_code
        self.payload = payload
        if message is None:
            if payload is None:
                message = f"Request failed with status {status_code}"
            elif isinstance(payload, str):
                message = payload
            else:
                message = json.dumps(payload, ensure_ascii=False)
        super().__init__(message)
