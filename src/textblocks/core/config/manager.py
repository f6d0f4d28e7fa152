"""
textblocks configuration management (YAML layers + environment overrides).
"""
from __future__ import annotations

import copy
import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import yaml
from jsonschema import Draft202012Validator

from textblocks.core.exceptions import ConfigurationError
from textblocks.core.utils.io import iter_yaml_files, read_yaml
from textblocks.core.utils.merge import deep_merge
from textblocks.core.utils.paths import get_project_config_dir, resolve_project_root
from textblocks.data import get_data_path
from textblocks.data import read_yaml as read_bundled_yaml

logger = logging.getLogger(__name__)

ENV_PREFIX = "TEXTBLOCKS_"
# Not a config path: selects the project root itself.
_RESERVED_ENV_KEYS = {"PROJECT_ROOT"}


class ConfigManager:
    """Load, merge, and validate textblocks configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: TEXTBLOCKS_<section>__<key>
    2. Project config: <repo_root>/.textblocks/config/*.yaml (alphabetical order)
    3. Bundled defaults: textblocks.data/config/defaults.yaml
    """

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self.repo_root = Path(repo_root) if repo_root else resolve_project_root()
        self.project_config_dir = get_project_config_dir(self.repo_root) / "config"
        self.schema_path = get_data_path("schemas", "config.schema.yaml")

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        # Fail closed: configuration must never silently ignore invalid YAML.
        try:
            data = read_yaml(path, default={}, raise_on_error=True)
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigurationError(
                f"Invalid configuration file {path}: {exc}",
                context={"path": str(path)},
            ) from exc
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file {path} must contain a mapping",
                context={"path": str(path)},
            )
        return data

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Return the merged configuration, validated unless ``validate`` is False."""
        config: Dict[str, Any] = copy.deepcopy(read_bundled_yaml("config", "defaults.yaml"))

        for path in iter_yaml_files(self.project_config_dir):
            logger.debug("Loading project config %s", path)
            config = deep_merge(config, self.load_yaml(path))

        for path_parts, value, raw in self._iter_env_overrides():
            logger.debug("Applying environment override %s%s", ENV_PREFIX, raw)
            self._set_nested(config, path_parts, value)

        if validate:
            self.validate(config)
        return config

    def validate(self, config: Dict[str, Any]) -> None:
        """Validate against the bundled JSON Schema, then the grammar rules.

        Raises:
            ConfigurationError: Listing every problem found
        """
        schema = self.load_yaml(self.schema_path)
        validator = Draft202012Validator(schema)
        problems: List[str] = []
        for error in sorted(validator.iter_errors(config), key=lambda e: list(e.path)):
            location = ".".join(str(p) for p in error.path) or "<root>"
            problems.append(f"{location}: {error.message}")

        if not problems:
            from textblocks.core.config.domains.grammar import grammar_problems

            problems.extend(grammar_problems(config.get("grammar") or {}))

        if problems:
            raise ConfigurationError(
                "Invalid configuration:\n  " + "\n  ".join(problems),
                context={"problems": problems},
            )

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-separated path, e.g. ``grammar.start_word``."""
        current: Any = self.load_config(validate=False)
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current

    def get_all(self) -> Dict[str, Any]:
        return self.load_config(validate=False)

    # ------------------------------------------------------------------
    # Environment overrides
    # ------------------------------------------------------------------
    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any, str]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX):]
            if not raw or raw.upper() in _RESERVED_ENV_KEYS:
                continue
            parts = [seg.lower() for seg in raw.split("__")]
            if any(not seg for seg in parts):
                raise ConfigurationError(
                    f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'.",
                    context={"key": key},
                )
            yield parts, self._coerce_type(os.environ[key]), raw

    def _coerce_type(self, value: str) -> Any:
        s = value.strip()
        low = s.lower()
        if low in {"true", "false"}:
            return low == "true"
        if low in {"null", "none"}:
            return None
        if re.fullmatch(r"[-+]?\d+", s):
            return int(s)
        if re.fullmatch(r"[-+]?\d*\.\d+", s):
            return float(s)
        if (s.startswith("[") and s.endswith("]")) or (s.startswith("{") and s.endswith("}")):
            try:
                return json.loads(s)
            except json.JSONDecodeError:
                return s
        return s

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        current = root
        for part in path[:-1]:
            nxt = current.get(part)
            if not isinstance(nxt, dict):
                nxt = {}
                current[part] = nxt
            current = nxt
        current[path[-1]] = value


__all__ = ["ConfigManager", "ENV_PREFIX"]
