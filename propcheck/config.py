"""
Configuration management for propcheck.
Supports YAML configuration loading with environment variable substitution.
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .models import TestParameters, ValidationError
from .random_source import StdRandom


class ConfigError(Exception):
    """Configuration related errors"""
    pass


@dataclass
class CheckConfig:
    """Test loop configuration"""
    parameters: TestParameters = field(default_factory=TestParameters)
    seed: int | None = None


@dataclass
class LoggingConfig:
    """JSONL run logging configuration"""
    enabled: bool = False
    log_dir: str = "logs"


@dataclass
class Config:
    """Complete propcheck configuration"""
    check: CheckConfig = field(default_factory=CheckConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigManager:
    """
    Configuration manager for propcheck.

    Supports:
    - Loading configuration from YAML files
    - Environment variable substitution (${VAR_NAME} syntax)
    - Default test parameters when a section is omitted
    """

    ENV_VAR_PATTERN = re.compile(r'\$\{([^}]+)\}')

    def __init__(self, config_path: str | Path | None = None):
        """
        Initialize ConfigManager.

        Args:
            config_path: Path to YAML configuration file. If None, uses propcheck.yaml
        """
        self._config: Config | None = None
        self._config_path = Path(config_path) if config_path else Path("propcheck.yaml")

    @property
    def config(self) -> Config:
        """Get the loaded configuration, loading it if necessary."""
        if self._config is None:
            self._config = self.load()
        return self._config

    def load(self, config_path: str | Path | None = None) -> Config:
        """
        Load configuration from YAML file.

        Args:
            config_path: Optional path to override the default config path

        Returns:
            Loaded Config object

        Raises:
            ConfigError: If configuration file is invalid or cannot be loaded
        """
        path = Path(config_path) if config_path else self._config_path

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML format: {e}")
        except OSError as e:
            raise ConfigError(f"Failed to read configuration file: {e}")

        if raw_config is None:
            raise ConfigError("Configuration file is empty")

        if not isinstance(raw_config, dict):
            raise ConfigError("Configuration must be a YAML mapping")

        raw_config = self._substitute_env_vars(raw_config)

        self._config = self._parse_config(raw_config)
        return self._config

    def get_env_vars_used(self, config_path: str | Path | None = None) -> set[str]:
        """
        Scan the config file and return all referenced environment variables.

        Args:
            config_path: Optional path to override the default config path

        Returns:
            Set of environment variable names referenced via ${VAR_NAME}
        """
        path = Path(config_path) if config_path else self._config_path
        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")
        raw_text = path.read_text(encoding="utf-8")
        return {match.group(1) for match in self.ENV_VAR_PATTERN.finditer(raw_text)}

    def _substitute_env_vars(self, obj: Any) -> Any:
        """
        Recursively substitute environment variables in configuration.

        An unset variable raises ConfigError, except when it is the whole
        value of a 'seed' key, which then becomes None.
        """
        if isinstance(obj, str):
            def replace_env_var(match: re.Match) -> str:
                var_name = match.group(1)
                value = os.environ.get(var_name)
                if value is None:
                    raise ConfigError(f"Environment variable not set: {var_name}")
                return value

            return self.ENV_VAR_PATTERN.sub(replace_env_var, obj)
        elif isinstance(obj, dict):
            result = {}
            for k, v in obj.items():
                if k == 'seed' and isinstance(v, str) and self._is_unset_reference(v):
                    result[k] = None
                else:
                    result[k] = self._substitute_env_vars(v)
            return result
        elif isinstance(obj, list):
            return [self._substitute_env_vars(item) for item in obj]
        return obj

    def _is_unset_reference(self, text: str) -> bool:
        match = self.ENV_VAR_PATTERN.fullmatch(text.strip())
        return match is not None and not os.environ.get(match.group(1))

    def _parse_int(self, section: str, raw: dict, key: str, default: int) -> int:
        value = raw.get(key, default)
        if isinstance(value, bool):
            raise ConfigError(f"'{section}.{key}' must be an integer")
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ConfigError(f"'{section}.{key}' must be an integer")

    def _parse_config(self, raw: dict) -> Config:
        """Parse raw configuration dictionary into Config object."""
        config = Config()
        defaults = TestParameters()

        if 'check' in raw:
            check_raw = raw['check']
            if not isinstance(check_raw, dict):
                raise ConfigError("'check' section must be a mapping")

            try:
                parameters = TestParameters(
                    min_successful_tests=self._parse_int(
                        'check', check_raw, 'min_successful_tests', defaults.min_successful_tests
                    ),
                    max_discarded_tests=self._parse_int(
                        'check', check_raw, 'max_discarded_tests', defaults.max_discarded_tests
                    ),
                    max_size=self._parse_int('check', check_raw, 'max_size', defaults.max_size),
                )
            except ValidationError as e:
                raise ConfigError(f"Invalid test parameters: {'; '.join(e.errors)}")

            seed = check_raw.get('seed')
            if seed is not None and seed != '':
                seed = self._parse_int('check', check_raw, 'seed', 0)
            else:
                seed = None

            config.check = CheckConfig(parameters=parameters, seed=seed)

        if 'logging' in raw:
            logging_raw = raw['logging']
            if not isinstance(logging_raw, dict):
                raise ConfigError("'logging' section must be a mapping")
            enabled = logging_raw.get('enabled', False)
            if isinstance(enabled, str):
                enabled = enabled.lower() in ("true", "1", "yes", "on")
            config.logging = LoggingConfig(
                enabled=bool(enabled),
                log_dir=str(logging_raw.get('log_dir', 'logs')),
            )

        return config

    def get_test_parameters(self) -> TestParameters:
        """Get the configured test parameters."""
        return self.config.check.parameters

    def get_seed(self) -> int | None:
        """Get the configured seed, or None for an unseeded run."""
        return self.config.check.seed

    def create_random_source(self) -> StdRandom:
        """Create a random source seeded from configuration."""
        return StdRandom(self.get_seed())
