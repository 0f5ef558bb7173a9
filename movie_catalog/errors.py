from typing import Dict, List, Optional


class ApiError(Exception):
    """Base class for errors that map onto an HTTP status"""

    status = 500

    def __init__(self, message, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


class InvalidParameter(ApiError):
    status = 400


class NotFound(ApiError):
    status = 404


class ValidationFailure(ApiError):
    """One or more columns failed their validation rules.

    ``errors`` is a list of ``{"path": column, "message": text}`` dicts,
    one per failing rule.
    """

    def __init__(self, errors: List[Dict[str, str]]):
        super().__init__(errors)
        self.errors = errors

    def __str__(self):
        return "; ".join(f"{e['path']}: {e['message']}" for e in self.errors)
