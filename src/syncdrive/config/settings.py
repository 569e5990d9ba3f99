"""Application configuration settings."""

from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


MiB = 1024 * 1024


class LoggingSettings(BaseSettings):
    """Logging configuration."""
    
    level: str = Field(default="INFO")
    format: str = Field(default="console")
    file_path: Optional[str] = Field(default=None)
    
    model_config = SettingsConfigDict(env_prefix="LOG_")
    
    @field_validator('level')
    @classmethod
    def validate_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()
    
    @field_validator('format')
    @classmethod
    def validate_format(cls, v):
        if v.lower() not in ('json', 'console'):
            raise ValueError("Log format must be 'json' or 'console'")
        return v.lower()


class SyncSettings(BaseSettings):
    """Shared runtime parameters handed to every sync task."""
    
    config_folder_path: str = Field(default="./sync_drive", description="Folder holding sync_drive_config.json and task state")
    
    file_download_parallel: int = Field(default=2, description="Concurrent downloads per task")
    file_upload_parallel: int = Field(default=2, description="Concurrent uploads per task")
    file_download_block_size: int = Field(default=10 * MiB, description="Download block size in bytes")
    file_upload_block_size: int = Field(default=10 * MiB, description="Upload block size in bytes")
    use_internal_url: bool = Field(default=False, description="Prefer the internal network endpoint")
    
    # 0 means unlimited
    max_download_rate: int = Field(default=0, description="Max download bytes per second")
    max_upload_rate: int = Field(default=0, description="Max upload bytes per second")
    
    task_start_interval: float = Field(default=0.2, description="Pause in seconds after each started task")
    
    model_config = SettingsConfigDict(env_prefix="SYNC_")
    
    @field_validator('file_download_parallel', 'file_upload_parallel')
    @classmethod
    def validate_parallel(cls, v):
        if v < 1:
            raise ValueError("Parallelism must be at least 1")
        return v
    
    @field_validator('file_download_block_size', 'file_upload_block_size')
    @classmethod
    def validate_block_size(cls, v):
        if v < 1:
            raise ValueError("Block size must be positive")
        return v
    
    @field_validator('max_download_rate', 'max_upload_rate', 'task_start_interval')
    @classmethod
    def validate_non_negative(cls, v):
        if v < 0:
            raise ValueError("Value must not be negative")
        return v


class AppSettings(BaseSettings):
    """Main application settings."""
    
    name: str = Field(default="Sync Drive")
    version: str = Field(default="1.0.0")
    environment: str = Field(default="development")
    
    # Sub-settings
    sync: SyncSettings = Field(default_factory=SyncSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = AppSettings()


def get_settings() -> AppSettings:
    """Get application settings."""
    return settings
