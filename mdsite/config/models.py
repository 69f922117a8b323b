from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from typing import Literal


class SiteSettings(BaseModel):
    title: str = "Documentation"
    footer: str = "Generated with love"
    home_label: str = "← Back to Index"


class OutputConfig(BaseModel):
    dir_name: str = "html_output"
    static_dir: str = "static"
    index_name: str = "index.html"

    @field_validator("dir_name", "static_dir", "index_name")
    @classmethod
    def _single_path_segment(cls, v: str) -> str:
        if not v or v in (".", "..") or "/" in v or "\\" in v:
            raise ValueError(f"must be a single path segment, got {v!r}")
        return v


class ScanConfig(BaseModel):
    ignore_patterns: list[str] = Field(default_factory=lambda: [
        ".git", "node_modules", "__pycache__", ".venv"
    ])


class MarkdownConfig(BaseModel):
    alert_buffer_limit: int = Field(default=10, ge=1)
    default_language: str = Field(default="none", pattern=r"^[\w+#.-]+$")
    rewrite_links: bool = True


class HighlighterConfig(BaseModel):
    script_url: str = "https://cdn.jsdelivr.net/npm/prismjs@1.29.0/components/prism-core.min.js"
    autoloader_url: str = "https://cdn.jsdelivr.net/npm/prismjs@1.29.0/plugins/autoloader/prism-autoloader.min.js"
    # A Prism bundle on disk, copied into the static dir for offline use.
    local_script: Path | None = None


class ServerConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = Field(default=8080, ge=0, le=65535)


class SiteConfig(BaseModel):
    site: SiteSettings = Field(default_factory=SiteSettings)
    output: OutputConfig = Field(default_factory=OutputConfig)
    scan: ScanConfig = Field(default_factory=ScanConfig)
    markdown: MarkdownConfig = Field(default_factory=MarkdownConfig)
    highlighter: HighlighterConfig = Field(default_factory=HighlighterConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
