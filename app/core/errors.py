class GradebookError(Exception):
    """Base class for failures raised by the grades core."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EntryValidationError(GradebookError):
    status_code = 400

    def __init__(self, errors: list[str]):
        super().__init__("Validation failed")
        self.errors = errors


class MalformedInputError(GradebookError):
    status_code = 400


class RowNotFoundError(GradebookError):
    """A data row position no longer exists in the table."""


class StorageUnavailableError(GradebookError):
    status_code = 503


class SchemaMismatchError(StorageUnavailableError):
    """The stored header row does not match the configured schema."""


def failure_envelope(exc: Exception) -> dict:
    body = {"success": False, "error": getattr(exc, "message", None) or str(exc)}
    if isinstance(exc, EntryValidationError):
        body["validationErrors"] = exc.errors
    return body
