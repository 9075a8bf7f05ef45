class ExamError(Exception):
    """Base error answered as ``{"error": message}`` with ``status_code``."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ExamError):
    status_code = 400


class NotFoundError(ExamError):
    status_code = 404


class ForbiddenError(ExamError):
    status_code = 403


class StorageError(ExamError):
    """A collection file could not be read, parsed or written."""

    status_code = 500
