"""Configuration management for commitional."""
from pathlib import Path
from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, ValidationError
import copy
import tomli
import tomli_w
import os
import re

from .models import CommitType

DEFAULT_CONFIG_FILENAME = ".commitional.toml"
CONFIG_SECTION = "commitional"

# rules run in this order: subject-full-stop must come before subject-case
DEFAULT_RULES: Dict[str, List[Any]] = {
    "subject-empty": [2, "never"],
    "subject-full-stop": [2, "never", "."],
    "subject-case": [2, "always", "sentence-case"],
    "subject-min-length": [2, "always", 5],
    "subject-max-length": [2, "always", 60],
    "body-max-line-length": [2, "always", 72],
    "type-enum": [2, "always", [commit_type.value for commit_type in CommitType]],
    "type-empty": [2, "never"],
}


def default_rules() -> Dict[str, List[Any]]:
    return copy.deepcopy(DEFAULT_RULES)


def _should_expand(pattern: str) -> bool:
    return pattern.endswith("/") or pattern.endswith("/*")


def _expand_pattern(pattern: str, root: Path) -> List[str]:
    """List the subdirectories a ``dir/`` or ``dir/*`` pattern stands for."""
    base = re.sub(r"/\*?$", "", pattern)
    directory = root / base
    if not directory.is_dir():
        # the directory may not exist yet, e.g. in a fresh checkout
        return []
    return sorted(f"{base}/{entry.name}/" for entry in directory.iterdir() if entry.is_dir())


def _namespace_name(path: str) -> str:
    return path.rstrip("/").rsplit("/", 1)[-1]


def preprocess_namespace_config(rules: Dict[str, Any], root: Path) -> Dict[str, Any]:
    """Expand directory patterns in ``namespace-enum`` into namespace names.

    ``namespace-enum`` may list ``apps/*`` or ``apps/`` to mean "every
    directory in apps". The patterns are expanded against ``root``; the enum
    is rewritten to the resulting names and a ``namespace-alignment`` rule
    over the same directories is added. Rules are updated in place and
    returned.
    """
    entry = rules.get("namespace-enum")
    if not isinstance(entry, (list, tuple)) or len(entry) < 3 or not isinstance(entry[2], (list, tuple)):
        return rules

    severity, applicability, patterns = entry[0], entry[1], [str(p) for p in entry[2]]
    expanded = [path for pattern in patterns if _should_expand(pattern) for path in _expand_pattern(pattern, root)]
    all_paths = expanded + [pattern for pattern in patterns if not _should_expand(pattern)]
    names = [name for name in (_namespace_name(path) for path in all_paths) if name]

    if names:
        rules["namespace-enum"] = [severity, applicability, names]
        rules["namespace-alignment"] = [2, "always", all_paths]
    return rules


class Config(BaseModel):
    """Configuration settings for commitional.

    This class defines all configurable options that can be set either
    via the config file, environment variables or command line arguments.
    """

    rules: Dict[str, Any] = Field(
        default_factory=default_rules,
        description="Lint rules keyed by '<part>-<rule type>': [severity, 'always'|'never', value]"
    )

    enable_multiple_scopes: bool = Field(
        default=False,
        description="Whether a header may list more than one scope"
    )

    scope_delimiter: str = Field(
        default=",",
        description="Delimiter between scopes in the header"
    )

    breaking_emoji: str = Field(
        default="⚠️",
        description="Emoji appended to the subject of breaking changes"
    )

    always_log: bool = Field(
        default=False,
        description="Whether to always generate log files"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Path to log file (if not using automatic log file generation)"
    )

    @staticmethod
    def _sanitize_string(value: str) -> str:
        """Strip control characters and cap the length of string settings."""
        if not value:
            return value

        value = re.sub(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]', '', value)

        if len(value) > 1000:
            value = value[:1000]

        return value.strip()

    @staticmethod
    def _is_safe_path(path: str) -> bool:
        """Check if a path is safe (no path traversal)."""
        if not path:
            return False

        if '..' in path or path.startswith('/') or '\\' in path:
            return False

        if os.path.isabs(path):
            return False

        dangerous_patterns = [
            r'/etc/', r'/var/', r'/usr/', r'/bin/', r'/sbin/',
            r'C:\\Windows', r'C:\\System', r'C:\\Program'
        ]

        for pattern in dangerous_patterns:
            if re.search(pattern, path, re.IGNORECASE):
                return False

        return True

    @classmethod
    def load(cls, repo_path: Path) -> 'Config':
        """Load configuration from the config file.

        Args:
            repo_path: Path to the git repository

        Returns:
            Config: Configuration object with values from file or defaults
        """
        config_path = Path(repo_path) / DEFAULT_CONFIG_FILENAME

        if not config_path.exists():
            return cls()

        try:
            with config_path.open('rb') as f:
                config_data = tomli.load(f)

            config_section = dict(config_data.get(CONFIG_SECTION, {}))

            for key in ['scope_delimiter', 'breaking_emoji', 'log_file']:
                if key in config_section and isinstance(config_section[key], str):
                    config_section[key] = cls._sanitize_string(config_section[key])

            if config_section.get('log_file') and not cls._is_safe_path(config_section['log_file']):
                print(f"Warning: Unsafe log file path '{config_section['log_file']}', using default")
                config_section['log_file'] = None

            # an empty rules table means "use the defaults"
            if not config_section.get('rules'):
                config_section.pop('rules', None)

            return cls(**config_section)
        except (OSError, tomli.TOMLDecodeError, ValidationError) as e:
            print(f"Warning: Error reading config file: {e}")
            return cls()

    def save(self, repo_path: Path) -> None:
        """Save configuration to the config file.

        Args:
            repo_path: Path to the git repository
        """
        config_path = Path(repo_path) / DEFAULT_CONFIG_FILENAME

        try:
            config_dict = {k: v for k, v in self.model_dump().items() if v is not None}

            if 'log_file' in config_dict and not self._is_safe_path(config_dict['log_file']):
                print(f"Warning: Unsafe log file path '{config_dict['log_file']}', not saving")
                del config_dict['log_file']

            with config_path.open('wb') as f:
                tomli_w.dump({CONFIG_SECTION: config_dict}, f)
        except (OSError, TypeError, ValueError) as e:
            print(f"Error saving config file: {e}")

    def resolved_rules(self, repo_path: Path) -> Dict[str, Any]:
        """Rules ready for the engine.

        Adds ``scope-allow-multiple`` from the scope settings unless it is
        configured explicitly, and expands namespace directory patterns
        relative to ``repo_path``.
        """
        rules = copy.deepcopy(self.rules)
        rules.setdefault(
            "scope-allow-multiple",
            [2, "always" if self.enable_multiple_scopes else "never", self.scope_delimiter],
        )
        return preprocess_namespace_config(rules, Path(repo_path))

    def get_log_file(self) -> Optional[Path]:
        """Get the path to the log file.

        If always_log is True, generates a timestamped log file name.
        Otherwise, returns the configured log_file path if set.

        Returns:
            Optional[Path]: Path to the log file, or None if logging is disabled
        """
        if self.always_log:
            timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
            return Path(f"commitional_log-{timestamp}.log")
        elif self.log_file:
            if self._is_safe_path(self.log_file):
                return Path(self.log_file)
            else:
                print(f"Warning: Unsafe log file path '{self.log_file}', using default")
                return None
        return None

    def __init__(self, **data):
        """Initialize config with environment variable support and sanitization."""
        env_data = {}

        env_mapping = {
            'COMMITIONAL_ENABLE_MULTIPLE_SCOPES': 'enable_multiple_scopes',
            'COMMITIONAL_SCOPE_DELIMITER': 'scope_delimiter',
            'COMMITIONAL_BREAKING_EMOJI': 'breaking_emoji',
            'COMMITIONAL_ALWAYS_LOG': 'always_log',
            'COMMITIONAL_LOG_FILE': 'log_file',
        }

        for env_var, field_name in env_mapping.items():
            if env_var in os.environ:
                value = os.environ[env_var]

                if field_name in ['scope_delimiter', 'breaking_emoji', 'log_file']:
                    value = self._sanitize_string(value)

                if field_name in ['enable_multiple_scopes', 'always_log']:
                    value = value.lower() in ['true', '1', 'yes', 'on']

                env_data[field_name] = value

        merged_data = {**env_data, **data}

        super().__init__(**merged_data)
