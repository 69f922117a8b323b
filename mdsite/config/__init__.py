from .loader import ConfigError, load_config
from .models import (
    HighlighterConfig,
    MarkdownConfig,
    OutputConfig,
    ScanConfig,
    ServerConfig,
    SiteConfig,
    SiteSettings,
)

__all__ = [
    "ConfigError",
    "HighlighterConfig",
    "MarkdownConfig",
    "OutputConfig",
    "ScanConfig",
    "ServerConfig",
    "SiteConfig",
    "SiteSettings",
    "load_config",
]
