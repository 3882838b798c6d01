# SPDX-License-Identifier: GPL-3.0-or-later

"""Application-specific exceptions."""


class DesnoteError(Exception):
    """Base exception for all desnote errors."""

    def __init__(self, message: str, code: str = 'INTERNAL_ERROR') -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class ImportValidationError(DesnoteError):
    """Raised when an import payload is rejected."""

    def __init__(self, message: str = 'Invalid import payload', details: list | dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message, code='IMPORT_INVALID')


class StorageError(DesnoteError):
    """Raised when a value cannot be written to the store."""

    def __init__(self, message: str = 'Storage write failed') -> None:
        super().__init__(message, code='STORAGE_WRITE_FAILED')
