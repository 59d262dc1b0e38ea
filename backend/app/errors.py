"""Typed failures raised by the services and mapped to HTTP responses in app.main."""


class NotesError(Exception):
    status_code: int = 500
    detail: str = "Internal error"

    def __init__(self, detail: str | None = None) -> None:
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class NotFoundError(NotesError):
    status_code = 404
    detail = "Not found"


class BlobMissingError(NotFoundError):
    """The attachment row exists but its file is gone from disk."""

    detail = "File not found on disk"


class ConflictError(NotesError):
    status_code = 409
    detail = "Conflict"


class ValidationFailedError(NotesError):
    status_code = 400
    detail = "Invalid request"


class StorageError(NotesError):
    detail = "Database operation failed"


class FileStorageError(NotesError):
    detail = "Failed to save file"


class SyncError(NotesError):
    detail = "Sync failed"
