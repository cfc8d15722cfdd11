"""Error taxonomy for the reconstruction forwarder.

Every error carries the HTTP status the route should answer with, so the
route can turn any of them into a JSON body without inspecting the kind.
"""
from typing import Any


class ReconstructionError(Exception):
    status_code: int = 500

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: str | None = None,
        debug: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details
        self.debug = debug

    def to_response(self, include_debug: bool = True) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        if include_debug and self.debug:
            body["debug"] = self.debug
        return body


class InvalidRequestError(ReconstructionError):
    """A required input field is missing; the caller can fix and resend."""

    status_code = 400


class ConfigurationError(ReconstructionError):
    """Deployment is missing the credential or a usable upstream endpoint."""

    status_code = 500


class UpstreamError(ReconstructionError):
    """The provider answered with a non-success status (or timed out)."""

    def __init__(
        self,
        message: str,
        status_code: int,
        details: str | None = None,
        debug: dict[str, Any] | None = None,
    ):
        super().__init__(message, status_code=status_code, details=details, debug=debug)


class UnexpectedError(ReconstructionError):
    status_code = 500
