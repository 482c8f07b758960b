from typing import Optional


class FitbookError(Exception):
    status_code = 500

    def __init__(self, message: str, error: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error = error


class ValidationError(FitbookError):
    status_code = 400


class NotFound(FitbookError):
    status_code = 404


class Conflict(FitbookError):
    # duplicate bookings are reported to clients as bad requests
    status_code = 400


class StorageError(FitbookError):
    status_code = 500
