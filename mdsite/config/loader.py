"""YAML config loading with env var expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import SiteConfig


class ConfigError(ValueError):
    """Raised when a config file exists but cannot be used."""


def load_config(cli_path: str | None = None) -> SiteConfig:
    """Load config with resolution order: CLI > project-local > user-global > defaults."""
    config_paths = [
        Path(cli_path) if cli_path else None,
        Path("./mdsite.yaml"),
        Path.home() / ".mdsite" / "config.yaml",
    ]

    if cli_path and not Path(cli_path).exists():
        raise ConfigError(f"Config file not found: {cli_path}")

    for path in config_paths:
        if path and path.exists():
            try:
                with open(path, encoding="utf-8") as f:
                    raw = yaml.safe_load(f)
                if raw is None:
                    continue
                if not isinstance(raw, dict):
                    raise ConfigError(f"Invalid config in {path}: expected a mapping")
                raw = _expand_env_vars(raw)
                return SiteConfig(**raw)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {path}: {e}") from e
            except ValidationError as e:
                raise ConfigError(f"Invalid config in {path}: {e}") from e

    return SiteConfig()


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `mdsite config init`
DEFAULT_CONFIG_TEMPLATE = """\
# mdsite.yaml

# Page chrome
site:
  title: "Documentation"
  footer: "Generated with love"
  home_label: "← Back to Index"

# Output layout (relative to the source directory)
output:
  dir_name: "html_output"
  static_dir: "static"
  index_name: "index.html"

# Scanning
scan:
  ignore_patterns: [".git", "node_modules", "__pycache__", ".venv"]

# Markdown transforms
markdown:
  alert_buffer_limit: 10       # chars buffered while looking for a [!TYPE] marker
  default_language: "none"    # code class used when a fence has no language
  rewrite_links: true          # foo.md -> foo.html

# Client-side syntax highlighting
highlighter:
  script_url: "https://cdn.jsdelivr.net/npm/prismjs@1.29.0/components/prism-core.min.js"
  autoloader_url: "https://cdn.jsdelivr.net/npm/prismjs@1.29.0/plugins/autoloader/prism-autoloader.min.js"
  # local_script: "vendor/prism.js"   # bundle Prism into static/ instead of using the CDN

# Dev server
server:
  host: "127.0.0.1"
  port: 8080

# Logging
log_level: "info"              # debug | info | warn | error
"""
