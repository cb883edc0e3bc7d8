"""Global configuration — XDG paths, config file, env vars, defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from cpaudit.errors import LoadError


def _default_config_dir() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "cpaudit"
    return Path.home() / ".config" / "cpaudit"


@dataclass
class AuditConfig:
    """Application-wide configuration."""

    config_dir: Path = field(default_factory=_default_config_dir)
    # Name of the action object that marks a rule as permitting traffic
    accept_action: str = "Accept"
    # Object type of the export's universal "Any" placeholder
    any_type: str = "CpmiAnyObject"
    # Substring of a rule record's type that marks it as an access rule
    rule_marker: str = "access-rule"

    @classmethod
    def load(cls, path: str | Path | None = None) -> AuditConfig:
        """Load config from a YAML file and environment variables.

        Without an explicit *path*, ``config.yaml`` in the config directory is
        read when it exists. Environment variables win over the file.
        """
        config = cls()

        config_file = Path(path) if path else config.config_dir / "config.yaml"
        if path or config_file.is_file():
            config._apply_file(config_file)

        env_accept = os.environ.get("CPAUDIT_ACCEPT_ACTION")
        if env_accept:
            config.accept_action = env_accept

        env_any = os.environ.get("CPAUDIT_ANY_TYPE")
        if env_any:
            config.any_type = env_any

        env_marker = os.environ.get("CPAUDIT_RULE_MARKER")
        if env_marker:
            config.rule_marker = env_marker

        return config

    def _apply_file(self, path: Path) -> None:
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as exc:
            raise LoadError(f"Cannot read config file {path}: {exc}") from exc

        if data is None:
            return
        if not isinstance(data, dict):
            raise LoadError(f"Config file {path} must be a mapping")

        for key in ("accept_action", "any_type", "rule_marker"):
            if key in data:
                setattr(self, key, str(data[key]))
