"""Simple YAML configuration loader for Claudio."""

import copy
import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)

DEFAULT_LOG_DIRECTORY = "~/Library/Application Support/brabble"

DEFAULT_CONFIG: Dict[str, Any] = {
    "logs": {
        "directory": DEFAULT_LOG_DIRECTORY,
        "transcripts": "transcripts.log",
        "hook": "claude-hook.log",
        "daemon": "brabble.log",
    },
    "wake_word": "claude",
    "limits": {
        "max_recent_transcriptions": 10,
        "max_recent_turns": 50,
    },
    "sessions": {
        "gap_threshold_seconds": 300,
    },
    "host": {
        "poll_interval_seconds": 0.5,
    },
    "logging": {
        "level": "INFO",
        "file_path": "~/.claudio/claudio.log",
        "console_output": True,
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ClaudioConfig:
    """Claudio configuration loader."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration loader.

        Args:
            config_path: Path to YAML config file. If None, built-in defaults
                        are used and relative paths resolve against the
                        current directory.
        """
        if config_path is None:
            self.config_file = None
            logger.info("No configuration file given, using defaults")
            self.config = copy.deepcopy(DEFAULT_CONFIG)
            self._resolve_paths(self.config, Path.cwd())
            return

        self.config_file = Path(config_path)

        if not self.config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_file}")

        logger.info(f"Loading configuration from: {self.config_file}")
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load and parse YAML configuration file."""
        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}")

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ValueError("Configuration file must contain a mapping")

        config = _merge(DEFAULT_CONFIG, loaded)

        # Resolve relative paths
        self._resolve_paths(config, self.config_file.parent)

        logger.info("Configuration loaded successfully")
        return config

    def _resolve_paths(self, config: Dict[str, Any], base_dir: Path) -> None:
        """Expand ``~`` and resolve relative paths against ``base_dir``."""
        logs = config['logs']
        log_dir = Path(os.path.expanduser(logs['directory']))
        if not log_dir.is_absolute():
            log_dir = base_dir / log_dir
        logs['directory'] = str(log_dir)

        # Individual log files are relative to the log directory
        for key in ('transcripts', 'hook', 'daemon'):
            log_path = Path(os.path.expanduser(logs[key]))
            if not log_path.is_absolute():
                log_path = log_dir / log_path
            logs[key] = str(log_path)

        if 'logging' in config and 'file_path' in config['logging']:
            file_path = Path(os.path.expanduser(config['logging']['file_path']))
            if not file_path.is_absolute():
                file_path = base_dir / file_path
            config['logging']['file_path'] = str(file_path)

    def get(self, key_path: str, default: Any = None) -> Any:
        """Look up a dotted key such as 'limits.max_recent_turns', or return ``default``."""
        node = self.config
        for key in key_path.split('.'):
            if not isinstance(node, dict) or key not in node:
                return default
            node = node[key]
        return node

    def set(self, key_path: str, value: Any) -> None:
        """Override a dotted key, creating missing sections on the way."""
        *sections, leaf = key_path.split('.')
        node = self.config
        for key in sections:
            node = node.setdefault(key, {})
        node[leaf] = value
        logger.debug(f"Config override {key_path}={value!r}")

    def get_transcripts_log_path(self) -> Path:
        return Path(self.get('logs.transcripts'))

    def get_hook_log_path(self) -> Path:
        return Path(self.get('logs.hook'))

    def get_daemon_log_path(self) -> Path:
        return Path(self.get('logs.daemon'))

    def get_wake_word(self) -> str:
        wake_word = self.get('wake_word') or 'claude'
        return str(wake_word)
