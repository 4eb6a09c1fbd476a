"""
Storage Services
================
S3-compatible object storage client.
"""

from blobstore.services.storage.paths import normalize_file_path
from blobstore.services.storage.s3_client import ObjectStoreClient, get_object_store

__all__ = ["ObjectStoreClient", "get_object_store", "normalize_file_path"]
