"""
Error Definitions

Pipeline stages report failures as Rejection values rather than raising.
Every rejection is answered with the same canned 404; the reason is only
ever written to the server-side log.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class RejectionReason(str, Enum):
    """Why a request was not proxied"""

    MISSING_PARAMETERS = "missing_parameters"
    INVALID_DIGEST = "invalid_digest"
    BAD_STATUS = "bad_status"
    BAD_MIME_TYPE = "bad_mime_type"
    SIZE_LIMIT_EXCEEDED = "size_limit_exceeded"
    TOO_MANY_REDIRECTS = "too_many_redirects"
    TIMEOUT = "timeout"
    UPSTREAM_ERROR = "upstream_error"
    FORBIDDEN_DESTINATION = "forbidden_destination"


@dataclass(frozen=True)
class Rejection:
    """
    Pipeline Rejection

    Returned by a stage instead of its normal result.
    """

    # Rejection reason
    reason: RejectionReason
    # Extra information for the log line
    detail: Optional[str] = None

    def describe(self) -> str:
        """
        Format for the rejection log

        Returns:
            str: e.g. "bad_status: upstream returned 500"
        """
        if self.detail:
            return f"{self.reason.value}: {self.detail}"
        return self.reason.value


class ConfigurationError(Exception):
    """
    Configuration Error

    Raised at startup when the settings cannot produce a usable proxy
    configuration (e.g. unreadable MIME types file).
    """

    def __init__(self, message: str, setting: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.setting = setting
