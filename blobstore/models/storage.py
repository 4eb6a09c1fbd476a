"""
Storage Models
==============
Pydantic models for S3 connection configuration.
"""

from typing import Any, Dict, Optional

from botocore.config import Config
from pydantic import BaseModel, Field


class S3ClientConfig(BaseModel):
    """
    S3 connection configuration

    Passed through to `aioboto3.Session().client("s3", ...)`. Only the
    fields that are set end up in the client kwargs, so anything left
    unset falls back to botocore's own resolution chain (env vars,
    shared config files, instance profiles). Any other botocore client
    kwarg is accepted and forwarded unchanged.
    """
    region_name: Optional[str] = Field(default=None, description="AWS region, e.g. eu-central-1")
    endpoint_url: Optional[str] = Field(default=None, description="Custom endpoint for MinIO, R2, etc.")
    aws_access_key_id: Optional[str] = Field(default=None)
    aws_secret_access_key: Optional[str] = Field(default=None)
    aws_session_token: Optional[str] = Field(default=None)
    force_path_style: bool = Field(default=False, description="Use path-style addressing (MinIO)")

    model_config = {
        "frozen": True,
        "extra": "allow",
    }

    def to_client_kwargs(self) -> Dict[str, Any]:
        """
        Render keyword arguments for the S3 client

        Extra keys (`config`, `verify`, `use_ssl`, ...) are passed through
        as given. With `force_path_style`, path-style addressing is merged
        into any `config` the caller supplied.

        Returns:
            Dict[str, Any]: kwargs for `session.client("s3", **kwargs)`
        """
        declared = set(type(self).model_fields) - {"force_path_style"}
        kwargs: Dict[str, Any] = self.model_dump(include=declared, exclude_none=True)
        kwargs.update(self.model_extra or {})

        if self.force_path_style:
            base = kwargs.get("config") or Config()
            path_style = Config(
                signature_version=base.signature_version or "s3v4",
                s3={**(base.s3 or {}), "addressing_style": "path"},
            )
            kwargs["config"] = base.merge(path_style)

        return kwargs
