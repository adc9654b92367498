"""Exception hierarchy for seal-preview."""

from __future__ import annotations


class SealError(Exception):
    """Base exception for all seal-preview errors."""


class TransportError(SealError):
    """A request to the Seal API failed (network error, non-2xx status, bad body)."""

    def __init__(self, message: str, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class AuthenticationError(TransportError):
    """The API rejected the session token or the login credentials (401/403)."""


class StructuralError(SealError):
    """A metadata payload is missing expected fields or has the wrong shape."""


class AnnotationCollisionError(StructuralError):
    """Two annotations derived the same id under the ``raise`` collision policy."""

    def __init__(self, annotation_id: str) -> None:
        super().__init__(f"Duplicate annotation id: {annotation_id}")
        self.annotation_id = annotation_id


class ConfigurationError(SealError):
    """Invalid settings or pagination parameters."""


class JoinFailure(SealError):
    """One or more operations of a parallel join failed.

    ``errors`` maps each failed operation key to its exception; keys that
    succeeded are not included.
    """

    def __init__(self, errors: dict[str, BaseException]) -> None:
        keys = ", ".join(sorted(errors))
        super().__init__(f"{len(errors)} operation(s) failed: {keys}")
        self.errors = errors
