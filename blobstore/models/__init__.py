"""
Data Models
===========
Pydantic models for data validation and serialization.
"""

from blobstore.models.storage import S3ClientConfig


__all__ = [
    "S3ClientConfig",
]
