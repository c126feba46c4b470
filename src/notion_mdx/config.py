# ABOUTME: Configuration loading and validation for notion-mdx.
# ABOUTME: Parses an optional config.yaml into validated dataclasses.

from dataclasses import dataclass, field, fields
from pathlib import Path
import os
import yaml


class ConfigError(Exception):
    """Raised when configuration is invalid."""
    pass


# Each command sets these itself (nextra: .mdx with _meta.ts, hextra: .md without)
COMMAND_OPTIONS = frozenset({"extension", "skip_meta"})


@dataclass
class ExportOptions:
    """Options recognised by the document converter and exporter."""
    base_path: str = ""
    include_json: bool = False
    no_frontmatter: bool = False
    extension: str = ".mdx"
    skip_meta: bool = False

    def __post_init__(self):
        if not self.extension or not self.extension.startswith("."):
            raise ConfigError(f"extension must start with '.', got '{self.extension}'")


@dataclass
class Config:
    """Main configuration for notion-mdx."""
    token_env: str = "NOTION_TOKEN"
    calls_per_second: float = 2.5
    options: ExportOptions = field(default_factory=ExportOptions)

    def __post_init__(self):
        if self.calls_per_second <= 0:
            raise ConfigError(f"calls_per_second must be positive, got {self.calls_per_second}")

    def get_token(self) -> str:
        """Retrieve the Notion token from environment variable."""
        token = os.environ.get(self.token_env)
        if not token:
            raise ConfigError(f"Environment variable '{self.token_env}' is required")
        return token


def load_config(path: Path | None) -> Config:
    """Load and validate configuration from a YAML file.

    A missing path means "use defaults"; a path that does not exist is an error.
    """
    if path is None:
        return Config()

    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    with open(path) as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config file: {e}")

    if raw is None:
        return Config()
    if not isinstance(raw, dict):
        raise ConfigError("Config file must contain a YAML mapping")

    options_raw = raw.get("options") or {}
    if not isinstance(options_raw, dict):
        raise ConfigError("'options' must be a mapping")

    known = {f.name for f in fields(ExportOptions)}
    unknown = sorted(set(options_raw) - known)
    if unknown:
        raise ConfigError(f"Unknown export option(s): {', '.join(unknown)}")

    fixed = sorted(set(options_raw) & COMMAND_OPTIONS)
    if fixed:
        raise ConfigError(f"Export option(s) chosen by the command, not the config file: {', '.join(fixed)}")

    return Config(
        token_env=raw.get("token_env", "NOTION_TOKEN"),
        calls_per_second=raw.get("calls_per_second", 2.5),
        options=ExportOptions(**options_raw),
    )
