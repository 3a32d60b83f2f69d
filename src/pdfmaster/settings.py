"""Runtime settings loaded from `.env` and environment variables."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from pdfmaster.exceptions import SettingsError

logger = logging.getLogger(__name__)

_BYTES_PER_MB = 1024 * 1024


class Settings(BaseSettings):
    """Package settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    project_name: str = "pdfmaster"
    app_env: str = Field(
        default="development",
        validation_alias="APP_ENV",
        description="Application environment, e.g. 'development', 'production'.",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level, e.g. 'INFO', 'DEBUG'.",
    )
    log_json: bool = Field(
        default=True,
        validation_alias="LOG_JSON",
        description="Enable JSON formatted logs.",
    )
    log_file: str | None = Field(
        default=None,
        validation_alias="LOG_FILE",
        description="File path for log output.",
    )

    host: str = Field(default="0.0.0.0", validation_alias="HOST", description="HTTP bind address.")  # noqa: S104
    port: int = Field(default=5001, validation_alias="PORT", description="HTTP port.")
    allowed_origins: str = Field(
        default="http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173",
        validation_alias="ALLOWED_ORIGINS",
        description="Comma-separated list of CORS origins.",
    )

    temp_dir: str = Field(
        default="temp",
        validation_alias="TEMP_DIR",
        description="Directory holding uploads and produced outputs.",
    )
    max_upload_mb: int = Field(
        default=50,
        ge=1,
        validation_alias="MAX_UPLOAD_MB",
        description="Per-file upload size limit in megabytes.",
    )
    max_files: int = Field(
        default=20,
        ge=2,
        validation_alias="MAX_FILES",
        description="Maximum number of files accepted by multi-file uploads.",
    )
    cleanup_delay_seconds: float = Field(
        default=3600.0,
        ge=0.0,
        validation_alias="CLEANUP_DELAY_SECONDS",
        description="Delay before produced outputs are deleted.",
    )

    zip_compress_level: int = Field(
        default=9,
        ge=0,
        le=9,
        validation_alias="ZIP_COMPRESS_LEVEL",
        description="Deflate level for output archives.",
    )
    image_quality: int = Field(
        default=80,
        ge=1,
        le=100,
        validation_alias="IMAGE_QUALITY",
        description="JPEG quality used when converting images to PDF.",
    )

    soffice_path: str | None = Field(
        default=None,
        validation_alias="SOFFICE_PATH",
        description="LibreOffice binary used for Word/PowerPoint conversion.",
    )
    conversion_timeout: float = Field(
        default=300.0,
        gt=0.0,
        validation_alias="CONVERSION_TIMEOUT",
        description="Timeout in seconds for the office converter binary.",
    )

    @property
    def max_upload_bytes(self) -> int:
        """Return per-file upload limit in bytes."""
        return self.max_upload_mb * _BYTES_PER_MB

    @property
    def allowed_origin_list(self) -> list[str]:
        """Return parsed CORS origins."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    @property
    def temp_path(self) -> Path:
        """Return the temp directory, creating it when missing."""
        path = Path(self.temp_dir)
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def is_production(self) -> bool:
        """Return whether the service runs in production."""
        return self.app_env.lower() in {"prod", "production"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance.

    Raises:
        SettingsError: If settings cannot be loaded or validated.

    Returns:
        Settings: The loaded settings instance.
    """
    try:
        return Settings()
    except Exception as exc:
        if _is_missing_settings_error(exc):
            try:
                ensure_env_file_exists()
                return Settings()
            except Exception as retry_exc:
                raise SettingsError(exc=retry_exc) from retry_exc
        raise SettingsError(exc=exc) from exc


def ensure_env_file_exists(
    *,
    env_path: Path = Path(".env"),
    template_path: Path = Path(".env.template"),
) -> None:
    """Create `.env` from template when missing.

    Args:
        env_path (Path): Target environment file path.
        template_path (Path): Template file path.
    """
    if env_path.exists() or not template_path.exists():
        return
    env_path.write_text(template_path.read_text(encoding="utf-8"), encoding="utf-8")
    logger.info(
        "Created environment file from template",
        extra={"env_path": str(env_path), "template_path": str(template_path)},
    )


def _is_missing_settings_error(exc: Exception) -> bool:
    """Return whether the settings failure is due to missing values.

    Args:
        exc (Exception): Caught settings initialization error.

    Returns:
        bool: True when the error represents missing settings values.
    """
    if not isinstance(exc, ValidationError):
        return False
    return any(error.get("type") == "missing" for error in exc.errors())
