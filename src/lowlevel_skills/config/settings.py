"""Configuration settings models using Pydantic."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from lowlevel_skills.store.resolver import DEFAULT_INSTALLER, DEFAULT_SOURCE


class UISettings(BaseModel):
    """Terminal browser settings."""
    color: Literal["auto", "always", "never"] = "auto"
    copied_reset_seconds: float = Field(default=2.0, ge=0)  # How long "COPIED!" stays up


class LoggingSettings(BaseModel):
    """Logging settings."""
    debug: bool = False
    log_file: Optional[str] = None  # None = stderr only
    max_bytes: int = 1_000_000
    backup_count: int = 3


class Settings(BaseModel):
    """Root configuration model."""
    model_config = ConfigDict(extra="ignore")  # Ignore unknown fields in config file

    source: str = DEFAULT_SOURCE
    installer: str = DEFAULT_INSTALLER
    branch: str = "main"
    catalog_path: Optional[str] = None  # None = packaged catalog
    ui: UISettings = Field(default_factory=UISettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
