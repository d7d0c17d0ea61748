"""Domain error taxonomy.

Every error carries the wire ``code`` and HTTP status it is rendered with;
``review_api.main`` turns them into ``{"code": ..., "message": ...}`` bodies.
"""

from __future__ import annotations


class ReviewApiError(Exception):
    code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class EntityNotFoundError(ReviewApiError):
    code = "ENTITY_NOT_FOUND"
    status_code = 404


class ConflictError(ReviewApiError):
    code = "CONFLICT_WITH_EXISTING_DATA"
    status_code = 409


class ArgumentInvalidError(ReviewApiError):
    code = "ARGUMENTS_INVALID"
    status_code = 400


class ExternalApiError(ReviewApiError):
    """The remote sentiment endpoint failed (non-2xx, network, timeout, garbage body)."""

    code = "EXTERNAL_API_ERROR"
    status_code = 502

    def __init__(self, external_status_code: int, external_error_message: str) -> None:
        super().__init__(f"External service call failed: {external_error_message}")
        self.external_status_code = external_status_code
        self.external_error_message = external_error_message
