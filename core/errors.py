"""Error taxonomy shared by the intake service, the access gate and the API.

Every error knows the HTTP status it maps to and the message a caller is
allowed to see.  Validation and authorization errors expose their reason;
storage and internal errors only ever expose a generic message.
"""

from __future__ import annotations

from typing import Optional


GENERIC_SERVER_ERROR = "Server error"


class PortfolioError(Exception):
    """Base class for errors raised by the contact backend."""

    status_code = 500

    def __init__(self, message: str, *, detail: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail

    @property
    def public_message(self) -> str:
        return self.message


class ValidationError(PortfolioError):
    """Submitted form data is missing or malformed."""

    status_code = 400


class Unauthorized(PortfolioError):
    """The caller did not present the configured admin secret."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized", *, detail: Optional[str] = None) -> None:
        super().__init__(message, detail=detail)


class StorageError(PortfolioError):
    """The persisted submission list could not be read or written."""

    status_code = 500

    @property
    def public_message(self) -> str:
        return GENERIC_SERVER_ERROR


class InternalError(PortfolioError):
    """Anything unanticipated."""

    status_code = 500

    def __init__(self, message: str = GENERIC_SERVER_ERROR, *, detail: Optional[str] = None) -> None:
        super().__init__(message, detail=detail)

    @property
    def public_message(self) -> str:
        return GENERIC_SERVER_ERROR
