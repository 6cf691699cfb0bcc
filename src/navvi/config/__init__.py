from .config import (
    AnalysisSettings,
    CacheConfig,
    GitConfig,
    LoggingConfig,
    NavviConfig,
    get_config,
    reload_config,
)

__all__ = [
    "AnalysisSettings",
    "CacheConfig",
    "GitConfig",
    "LoggingConfig",
    "NavviConfig",
    "get_config",
    "reload_config",
]
