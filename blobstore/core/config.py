"""
Configuration Management
========================
Loads and validates environment variables using Pydantic Settings.
Provides type-safe access to object storage configuration.

Features:
- S3 connection config builder
- Secret masking
- Production checks
- Safe export for debugging
"""

from functools import lru_cache
from typing import List, Optional, Dict, Any

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from blobstore.models.storage import S3ClientConfig


class Settings(BaseSettings):
    """
    Application Settings

    All settings are loaded from environment variables or .env file.
    Every field has a default so importing the package never fails;
    use `blob_configured` to check whether a bucket is available.
    """

    # ========================================================================
    # APPLICATION
    # ========================================================================
    APP_NAME: str = "blobstore"
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: str = Field(default="INFO")

    # ========================================================================
    # BLOB STORAGE
    # ========================================================================
    BLOB_BUCKET_NAME: Optional[str] = Field(default=None)
    BLOB_BASE_URL: str = Field(default="")

    # ========================================================================
    # S3 CONNECTION
    # ========================================================================
    S3_REGION: Optional[str] = Field(default=None)
    S3_ENDPOINT_URL: Optional[str] = Field(default=None)
    S3_FORCE_PATH_STYLE: bool = Field(default=False)
    AWS_ACCESS_KEY_ID: Optional[str] = Field(default=None)
    AWS_SECRET_ACCESS_KEY: Optional[str] = Field(default=None)
    AWS_SESSION_TOKEN: Optional[str] = Field(default=None)

    # ========================================================================
    # PYDANTIC CONFIGURATION
    # ========================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"  # Ignore extra fields in .env
    )

    # ========================================================================
    # COMPUTED PROPERTIES
    # ========================================================================

    @property
    def is_development(self) -> bool:
        """Check if running in development mode"""
        return self.ENVIRONMENT.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode"""
        return self.ENVIRONMENT.lower() == "production"

    @computed_field
    @property
    def blob_configured(self) -> bool:
        """Check if a bucket and credentials are configured"""
        return all([
            self.BLOB_BUCKET_NAME,
            self.AWS_ACCESS_KEY_ID,
            self.AWS_SECRET_ACCESS_KEY,
        ])

    def get_s3_config(self) -> S3ClientConfig:
        """
        Build the S3 connection config from settings

        Returns:
            S3ClientConfig: Connection parameters for the S3 client
        """
        return S3ClientConfig(
            region_name=self.S3_REGION,
            endpoint_url=self.S3_ENDPOINT_URL,
            aws_access_key_id=self.AWS_ACCESS_KEY_ID,
            aws_secret_access_key=self.AWS_SECRET_ACCESS_KEY,
            aws_session_token=self.AWS_SESSION_TOKEN,
            force_path_style=self.S3_FORCE_PATH_STYLE,
        )

    # ========================================================================
    # VALIDATION METHODS
    # ========================================================================

    def validate_required_for_production(self) -> List[str]:
        """
        Validate that all required settings for production are configured

        Returns:
            List[str]: List of missing required settings
        """
        if not self.is_production:
            return []

        missing = []

        if not self.BLOB_BUCKET_NAME:
            missing.append("BLOB_BUCKET_NAME must be set in production")
        if not (self.AWS_ACCESS_KEY_ID and self.AWS_SECRET_ACCESS_KEY):
            missing.append("AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY must be set in production")
        if self.S3_ENDPOINT_URL and "localhost" in self.S3_ENDPOINT_URL:
            missing.append("Production should not use a localhost S3 endpoint")

        return missing

    def mask_secret(self, secret: Optional[str], show_chars: int = 4) -> str:
        """
        Mask a secret for safe logging

        Args:
            secret: The secret to mask
            show_chars: Number of characters to show at the start

        Returns:
            str: Masked secret
        """
        if not secret:
            return "NOT_SET"

        if len(secret) <= show_chars:
            return "*" * len(secret)

        return secret[:show_chars] + "*" * (len(secret) - show_chars)

    def to_safe_dict(self) -> Dict[str, Any]:
        """
        Export configuration as dictionary with secrets masked

        Returns:
            Dict[str, Any]: Safe configuration dictionary
        """
        config = self.model_dump()

        sensitive_fields = [
            "AWS_ACCESS_KEY_ID",
            "AWS_SECRET_ACCESS_KEY",
            "AWS_SESSION_TOKEN",
        ]

        for field in sensitive_fields:
            if field in config:
                config[field] = self.mask_secret(config[field])

        return config


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance

    Uses lru_cache to ensure settings are loaded only once.

    Returns:
        Settings: Validated settings instance
    """
    return Settings()


# Convenience: Create a global settings instance
settings = get_settings()


def validate_configuration(current: Optional[Settings] = None) -> None:
    """
    Validate configuration for the current environment

    Raises:
        ValueError: If production configuration is invalid
    """
    current = current or settings
    missing = current.validate_required_for_production()
    if missing:
        error_msg = "Production configuration validation failed:\n" + "\n".join(f"  - {m}" for m in missing)
        raise ValueError(error_msg)
