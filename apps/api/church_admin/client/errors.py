from __future__ import annotations

from typing import Any


class ApiError(Exception):
    def __init__(self, status: int, message: str) -> None:
        super().__init__(f"{status}: {message}")
        self.status = status
        self.message = message


class SessionExpiredError(ApiError):
    """Raised after a 401 on an authenticated call; the session has already been torn down."""

    def __init__(self, message: str = "session expired") -> None:
        super().__init__(401, message)


class BatchOperationError(Exception):
    """
    One or more calls in a parallel batch failed.

    The batch is not atomic: `succeeded` lists ids whose call went through and
    stays applied, `failed` maps each failed id to its error.
    """

    def __init__(self, message: str, succeeded: list[Any], failed: dict[Any, Exception]) -> None:
        super().__init__(message)
        self.succeeded = succeeded
        self.failed = failed
