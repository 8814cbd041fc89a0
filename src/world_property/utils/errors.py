"""
Domain exceptions mapped to HTTP responses by the error handling layer
"""

from typing import Dict, List, Optional


class ApiError(Exception):
    """Error carrying the HTTP status it should be reported with"""
    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class BadRequestError(ApiError):
    status_code = 400


class UnauthorizedError(ApiError):
    status_code = 401


class NotFoundError(ApiError):
    status_code = 404


class ConflictError(ApiError):
    status_code = 409


class ConcurrencyConflictError(ConflictError):
    """A save carried an expected version that no longer matches the store"""

    def __init__(self, case_id: str, expected_version: int, actual_version: int):
        super().__init__(
            f"Case {case_id} is at version {actual_version}, expected {expected_version}"
        )
        self.case_id = case_id
        self.expected_version = expected_version
        self.actual_version = actual_version


class ValidationFailedError(BadRequestError):

    def __init__(self, message: str, issues: List[Dict[str, str]]):
        super().__init__(message)
        self.issues = issues
