"""
Configuration Management for Navvi
Settings are read from the environment and an optional .env file.
"""

from pathlib import Path
from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from navvi.tools.code_analyzer.scanner import ScanConfig

DEFAULT_EXTENSIONS = [".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx"]
DEFAULT_IGNORE_PATTERNS = ["node_modules", ".git", "dist", "build"]


class AnalysisSettings(BaseSettings):
    """Static analysis thresholds and file filters"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )
    extensions: List[str] = Field(
        default_factory=lambda: list(DEFAULT_EXTENSIONS),
        validation_alias="NAVVI_EXTENSIONS",
    )
    ignore_patterns: List[str] = Field(
        default_factory=lambda: list(DEFAULT_IGNORE_PATTERNS),
        validation_alias="NAVVI_IGNORE_PATTERNS",
    )
    max_file_size: int = Field(
        default=1024 * 1024, validation_alias="NAVVI_MAX_FILE_SIZE"
    )
    complexity_threshold: int = Field(
        default=10, validation_alias="NAVVI_COMPLEXITY_THRESHOLD"
    )
    max_workers: int = Field(default=1, validation_alias="NAVVI_MAX_WORKERS")

    def to_scan_config(self) -> ScanConfig:
        return ScanConfig(
            extensions=tuple(ext.lower() for ext in self.extensions),
            ignore_patterns=tuple(self.ignore_patterns),
            max_file_size=self.max_file_size,
        )


class GitConfig(BaseSettings):
    """Git operations configuration"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )
    clone_depth: Optional[int] = Field(default=None, validation_alias="CLONE_DEPTH")
    github_token: Optional[str] = Field(default=None, validation_alias="GITHUB_TOKEN")
    temp_dir: Optional[str] = Field(default=None, validation_alias="NAVVI_TEMP_DIR")
    enable_history: bool = Field(default=True, validation_alias="NAVVI_ENABLE_HISTORY")


class CacheConfig(BaseSettings):
    """Result cache configuration"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )
    max_entries: int = Field(default=128, validation_alias="NAVVI_CACHE_MAX_ENTRIES")
    ttl_seconds: Optional[float] = Field(
        default=3600.0, validation_alias="NAVVI_CACHE_TTL_SECONDS"
    )


class LoggingConfig(BaseSettings):
    """Logging configuration"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: Optional[str] = Field(default=None, validation_alias="LOG_FILE")


class NavviConfig(BaseSettings):
    """Main configuration class"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    analysis: AnalysisSettings = Field(default_factory=AnalysisSettings)
    git: GitConfig = Field(default_factory=GitConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def temp_root(self) -> Optional[Path]:
        if self.git.temp_dir:
            return Path(self.git.temp_dir).expanduser()
        return None


# Global config instance
_config: Optional[NavviConfig] = None


def get_config() -> NavviConfig:
    """Get or create global configuration instance"""
    global _config
    if _config is None:
        _config = NavviConfig()
    return _config


def reload_config() -> NavviConfig:
    """Reload configuration from environment"""
    global _config
    _config = None
    return get_config()
