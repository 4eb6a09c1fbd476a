"""
blobstore
=========
Async upload / download / delete / exists against an S3-compatible bucket.
"""

from loguru import logger

from blobstore.core.exceptions import (
    StorageError,
    StorageWriteError,
    StorageReadError,
    StorageDeleteError,
)
from blobstore.models.storage import S3ClientConfig
from blobstore.services.storage import ObjectStoreClient, get_object_store, normalize_file_path

# Silent until the host application calls setup_logging()
logger.disable("blobstore")

__version__ = "1.0.0"

__all__ = [
    "ObjectStoreClient",
    "S3ClientConfig",
    "StorageError",
    "StorageWriteError",
    "StorageReadError",
    "StorageDeleteError",
    "get_object_store",
    "normalize_file_path",
]
