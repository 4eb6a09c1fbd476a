"""
S3 Object Store Client
======================
Upload, download, delete and existence checks against a single
S3-compatible bucket (AWS S3, MinIO, Cloudflare R2).
"""

from functools import lru_cache
from typing import Any, Mapping, Optional, Union

import aioboto3
import aiohttp
from botocore.exceptions import BotoCoreError, ClientError

from blobstore.core.config import Settings, settings as default_settings, validate_configuration
from blobstore.core.exceptions import (
    StorageDeleteError,
    StorageReadError,
    StorageWriteError,
)
from blobstore.core.logging_config import get_logger
from blobstore.models.storage import S3ClientConfig
from blobstore.services.storage.paths import normalize_file_path


logger = get_logger(__name__)


# Expected status code per operation; S3 answers DeleteObject with 204
UPLOAD_SUCCESS_STATUS = 200
DOWNLOAD_SUCCESS_STATUS = 200
DELETE_SUCCESS_STATUS = 204
EXISTS_SUCCESS_STATUS = 200

# HeadObject reports "404"; GetObject reports "NoSuchKey"
NOT_FOUND_ERROR_CODES = frozenset({"404", "NotFound", "NoSuchKey"})


def _status_code(response: Mapping[str, Any]) -> Optional[int]:
    return response.get("ResponseMetadata", {}).get("HTTPStatusCode")


def _is_not_found(exc: ClientError) -> bool:
    return exc.response.get("Error", {}).get("Code") in NOT_FOUND_ERROR_CODES


class ObjectStoreClient:
    """
    Object Store Client

    Thin async wrapper over a single S3 bucket. Every call opens its own
    client context from a shared aioboto3 session, so one instance can be
    used by many concurrent tasks. Nothing touches the network until the
    first operation.
    """

    def __init__(
        self,
        s3_config: Union[S3ClientConfig, Mapping[str, Any], None],
        bucket_name: str,
        base_url: str = "",
        session: Optional[aioboto3.Session] = None,
    ):
        """
        Args:
            s3_config: Connection parameters, passed through to the S3 client
            bucket_name: Bucket every operation targets
            base_url: Public base URL of the bucket (optional). Used to build
                the locator returned by `upload` and stripped from input paths.
            session: aioboto3 session to open clients from (optional)
        """
        if not bucket_name:
            raise ValueError("bucket_name is required")

        if not isinstance(s3_config, S3ClientConfig):
            s3_config = S3ClientConfig(**(s3_config or {}))

        self._s3_config = s3_config
        self._bucket_name = bucket_name
        self._base_url = base_url or ""
        self._session = session or aioboto3.Session()

    @classmethod
    def from_settings(cls, current: Optional[Settings] = None) -> "ObjectStoreClient":
        """
        Build a client from application settings

        Raises:
            ValueError: If BLOB_BUCKET_NAME is not configured, or required
                production settings are missing
        """
        current = current or default_settings
        if not current.BLOB_BUCKET_NAME:
            raise ValueError("BLOB_BUCKET_NAME is not configured")
        validate_configuration(current)

        return cls(
            s3_config=current.get_s3_config(),
            bucket_name=current.BLOB_BUCKET_NAME,
            base_url=current.BLOB_BASE_URL,
        )

    @property
    def bucket_name(self) -> str:
        return self._bucket_name

    @property
    def base_url(self) -> str:
        return self._base_url

    def normalize_key(self, file_path: str) -> str:
        """Strip this client's base URL and one slash from each end."""
        return normalize_file_path(file_path, self._base_url)

    def _client(self):
        return self._session.client("s3", **self._s3_config.to_client_kwargs())

    # ========================================================================
    # OPERATIONS
    # ========================================================================

    async def upload(
        self,
        *,
        file_path: str,
        body: bytes,
        content_type: Optional[str] = None,
        content_encoding: Optional[str] = None,
    ) -> str:
        """
        Upload a file to the bucket

        Args:
            file_path: Where to store the file, e.g. "images/my-image.jpg"
            body: File content
            content_type: MIME type (optional), e.g. "image/webp"
            content_encoding: Content encoding (optional), e.g. "gzip"

        Returns:
            str: base_url + "/" + file_path. The caller's file_path is used
            as given, not the normalized key, so a path passed with a leading
            slash or the base URL prefix yields a locator that does not match
            the stored key.

        Raises:
            StorageWriteError: If the service does not answer 200
        """
        key = self.normalize_key(file_path)
        params = {
            "Bucket": self._bucket_name,
            "Key": key,
            "Body": body,
        }
        if content_type is not None:
            params["ContentType"] = content_type
        if content_encoding is not None:
            params["ContentEncoding"] = content_encoding

        try:
            async with self._client() as s3:
                response = await s3.put_object(**params)
        except ClientError as e:
            logger.warning(f"Upload failed for s3://{self._bucket_name}/{key}: {e}")
            raise StorageWriteError(
                file_path, _status_code(e.response), cause=e
            ) from e

        status_code = _status_code(response)
        if status_code != UPLOAD_SUCCESS_STATUS:
            logger.warning(f"Upload of s3://{self._bucket_name}/{key} returned {status_code}")
            raise StorageWriteError(file_path, status_code)

        logger.bind(bucket=self._bucket_name, key=key).debug(
            f"Uploaded s3://{self._bucket_name}/{key} ({len(body)} bytes)"
        )
        return f"{self._base_url}/{file_path}"

    async def download(self, *, file_path: str) -> bytes:
        """
        Download a file from the bucket

        The whole body is read into memory before returning.

        Args:
            file_path: Path of the file to download

        Returns:
            bytes: File content

        Raises:
            StorageReadError: If the service does not answer 200 or the
                body stream breaks mid-transfer
        """
        key = self.normalize_key(file_path)

        try:
            async with self._client() as s3:
                response = await s3.get_object(Bucket=self._bucket_name, Key=key)

                status_code = _status_code(response)
                if status_code != DOWNLOAD_SUCCESS_STATUS:
                    logger.warning(f"Download of s3://{self._bucket_name}/{key} returned {status_code}")
                    raise StorageReadError(file_path, status_code)

                try:
                    async with response["Body"] as stream:
                        content = await stream.read()
                except (BotoCoreError, aiohttp.ClientPayloadError) as e:
                    logger.warning(f"Body stream for s3://{self._bucket_name}/{key} failed: {e}")
                    raise StorageReadError(file_path, status_code, cause=e) from e
        except ClientError as e:
            logger.warning(f"Download failed for s3://{self._bucket_name}/{key}: {e}")
            raise StorageReadError(
                file_path, _status_code(e.response), cause=e
            ) from e

        logger.debug(f"Downloaded s3://{self._bucket_name}/{key} ({len(content)} bytes)")
        return content

    async def delete(self, *, file_path: str) -> None:
        """
        Delete a file from the bucket

        Args:
            file_path: Path of the file to delete

        Raises:
            StorageDeleteError: If the service does not answer 204
        """
        key = self.normalize_key(file_path)

        try:
            async with self._client() as s3:
                response = await s3.delete_object(Bucket=self._bucket_name, Key=key)
        except ClientError as e:
            logger.warning(f"Delete failed for s3://{self._bucket_name}/{key}: {e}")
            raise StorageDeleteError(
                file_path, _status_code(e.response), cause=e
            ) from e

        status_code = _status_code(response)
        if status_code != DELETE_SUCCESS_STATUS:
            logger.warning(f"Delete of s3://{self._bucket_name}/{key} returned {status_code}")
            raise StorageDeleteError(file_path, status_code)

        logger.debug(f"Deleted s3://{self._bucket_name}/{key}")

    async def exists(self, *, file_path: str) -> bool:
        """
        Check whether a file exists in the bucket

        Only a not-found answer maps to False. Permission errors, network
        failures and anything else propagate unchanged.

        Args:
            file_path: Path of the file to check

        Returns:
            bool: True if the object exists
        """
        key = self.normalize_key(file_path)

        try:
            async with self._client() as s3:
                response = await s3.head_object(Bucket=self._bucket_name, Key=key)
        except ClientError as e:
            if _is_not_found(e):
                return False
            raise

        return _status_code(response) == EXISTS_SUCCESS_STATUS


@lru_cache()
def get_object_store() -> ObjectStoreClient:
    """
    Get cached client built from the global settings

    Raises:
        ValueError: If BLOB_BUCKET_NAME is not configured
    """
    return ObjectStoreClient.from_settings()
