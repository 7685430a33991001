"""Configuration loading and validation (``unai.toml``)."""

import fnmatch
import os
import tomllib
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .errors import ConfigError, InputError

MAX_CONFIG_BYTES = 1024 * 1024
DEFAULT_CONFIG_PATH = "unai.toml"
SUPPORTED_VERSION = 1
VALID_SEVERITIES = ("critical", "high", "medium", "low")


@dataclass(frozen=True)
class UserRule:
    pattern: str
    replacement: Optional[str] = None
    severity: Optional[str] = None
    message: Optional[str] = None
    enabled: bool = True


@dataclass
class Config:
    """Validated configuration snapshot; never mutated during a run."""

    raw: Dict[str, Any] = field(default_factory=dict)
    rules: List[UserRule] = field(default_factory=list)
    ignore_words: List[str] = field(default_factory=list)
    ignore_files: List[str] = field(default_factory=list)

    def get(self, *keys: str, default=None):
        """Get nested raw config value by key path."""
        cur = self.raw
        for k in keys:
            if not isinstance(cur, dict) or k not in cur:
                return default
            cur = cur[k]
        return cur

    def is_ignored_file(self, filename: Optional[str]) -> bool:
        if not filename or not self.ignore_files:
            return False
        base = os.path.basename(filename)
        return any(
            fnmatch.fnmatch(filename, pat) or fnmatch.fnmatch(base, pat)
            for pat in self.ignore_files
        )

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Config":
        validate(data)
        cfg = Config(raw=data)
        cfg.rules = [
            UserRule(
                pattern=r["pattern"],
                replacement=r.get("replacement"),
                severity=r.get("severity"),
                message=r.get("message"),
                enabled=r.get("enabled", True),
            )
            for r in cfg.get("rules", default=[])
        ]
        cfg.ignore_words = [w.lower() for w in cfg.get("ignore", "words", default=[])]
        cfg.ignore_files = list(cfg.get("ignore", "files", default=[]))
        return cfg

    @staticmethod
    def load(path: str) -> "Config":
        try:
            size = os.path.getsize(path)
        except OSError as e:
            raise InputError(f"Cannot read config '{path}': {e.strerror or e}") from e
        if size > MAX_CONFIG_BYTES:
            raise ConfigError("config file exceeds 1 MiB size limit")
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except OSError as e:
            raise InputError(f"Cannot read config '{path}': {e.strerror or e}") from e
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
            raise ConfigError(f"Cannot parse config '{path}': {e}") from e
        return Config.from_dict(data)

    @staticmethod
    def load_from_cwd() -> Optional["Config"]:
        """``./unai.toml`` if present, else ``None``."""
        if not os.path.exists(DEFAULT_CONFIG_PATH):
            return None
        return Config.load(DEFAULT_CONFIG_PATH)


def _check_optional_str(rule: Dict[str, Any], key: str, idx: int) -> None:
    value = rule.get(key)
    if value is not None and not isinstance(value, str):
        raise ConfigError(f"rules[{idx}].{key} must be a string")


def _check_str_list(section: Dict[str, Any], key: str) -> None:
    value = section.get(key, [])
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"ignore.{key} must be a list of strings")


def validate(data: Dict[str, Any]) -> None:
    if "version" not in data:
        raise ConfigError("missing field 'version'")
    version = data["version"]
    if isinstance(version, bool) or version != SUPPORTED_VERSION:
        raise ConfigError(f"unsupported version {version}")

    rules = data.get("rules", [])
    if not isinstance(rules, list):
        raise ConfigError("'rules' must be an array of tables")
    for idx, rule in enumerate(rules):
        if not isinstance(rule, dict):
            raise ConfigError(f"rules[{idx}] must be a table")
        pattern = rule.get("pattern")
        if not isinstance(pattern, str):
            raise ConfigError(f"rules[{idx}] missing string field 'pattern'")
        if not pattern.strip():
            raise ConfigError("rule pattern cannot be empty")
        for key in ("replacement", "severity", "message"):
            _check_optional_str(rule, key, idx)
        replacement = rule.get("replacement")
        if replacement is not None and "\n" in replacement:
            raise ConfigError(f"rules[{idx}].replacement must be a single line")
        severity = rule.get("severity")
        if severity is not None and severity not in VALID_SEVERITIES:
            raise ConfigError(
                f"unknown severity '{severity}'; valid: {', '.join(VALID_SEVERITIES)}"
            )
        if not isinstance(rule.get("enabled", True), bool):
            raise ConfigError(f"rules[{idx}].enabled must be a boolean")

    ignore = data.get("ignore", {})
    if not isinstance(ignore, dict):
        raise ConfigError("'ignore' must be a table")
    _check_str_list(ignore, "words")
    _check_str_list(ignore, "files")
