"""
Custom Exceptions
=================
Storage error taxonomy. One error per operation, each carrying the
status code the service actually returned.
"""

from typing import Optional


class StorageError(Exception):
    """Base storage exception"""

    action = "accessing"

    def __init__(
        self,
        file_path: str,
        status_code: Optional[int] = None,
        cause: Optional[Exception] = None,
    ):
        self.file_path = file_path
        self.status_code = status_code
        self.cause = cause
        super().__init__(
            f"Error {self.action} file '{file_path}'. Status code: {status_code}"
        )


class StorageWriteError(StorageError):
    """Upload did not return the expected status code"""
    action = "uploading"


class StorageReadError(StorageError):
    """Download did not return the expected status code or the body stream failed"""
    action = "downloading"


class StorageDeleteError(StorageError):
    """Delete did not return the expected status code"""
    action = "deleting"
