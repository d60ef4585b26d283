"""
Configuration management for the billing importer.

This module handles environment variables, API credentials and import settings.
Values are read from defaults, an optional JSON config file, a ``.env`` file and
the process environment, in increasing order of precedence.
"""

import os
import logging
from typing import Optional, Dict, Any
from dataclasses import dataclass, field
from pathlib import Path
import json

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Raised when required settings are missing or invalid."""
    pass


def _parse_timeout(value: Any, source: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{source} must be an integer, got {value!r}")


@dataclass
class SonarConfig:
    """Configuration for the billing platform API."""
    # API Configuration
    uri: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    api_prefix: str = "/api/v1"

    # Request Configuration
    timeout: int = 30

    @property
    def api_base_url(self) -> str:
        return f"{(self.uri or '').rstrip('/')}{self.api_prefix}"


@dataclass
class ImportConfig:
    """Configuration for file imports."""
    log_directory: str = "log_output"
    delimiter: str = ","

    # Address handling
    validate_addresses: bool = True
    requires_county: bool = True
    county_country: str = "US"


@dataclass
class SystemConfig:
    """Main system configuration."""
    sonar: SonarConfig = field(default_factory=SonarConfig)
    imports: ImportConfig = field(default_factory=ImportConfig)

    log_level: str = "INFO"


class ConfigManager:
    """Configuration manager for handling environment variables and settings."""

    def __init__(self, config_file: Optional[Path] = None, env_file: Optional[Path] = None):
        self.config_file = Path(config_file) if config_file else Path("config.json")
        self.env_file = Path(env_file) if env_file else Path(".env")
        self.config = SystemConfig()
        self._load_config()

    def _load_config(self):
        """Load configuration from config file, .env and environment variables."""
        if self.config_file.exists():
            try:
                with open(self.config_file, 'r') as f:
                    config_data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                raise ConfigurationError(f"Failed to load config file {self.config_file}: {e}")
            self._update_config_from_dict(config_data)
            logger.info(f"Loaded configuration from {self.config_file}")

        # .env never overrides variables already set in the process environment
        load_dotenv(dotenv_path=self.env_file, override=False)
        self._load_from_environment()

        self._validate_config()

    def _update_config_from_dict(self, config_data: Dict[str, Any]):
        """Update configuration from dictionary."""
        if 'sonar' in config_data:
            sonar_data = config_data['sonar']
            self.config.sonar.uri = sonar_data.get('uri', self.config.sonar.uri)
            self.config.sonar.username = sonar_data.get('username', self.config.sonar.username)
            self.config.sonar.password = sonar_data.get('password', self.config.sonar.password)
            if 'timeout' in sonar_data:
                self.config.sonar.timeout = _parse_timeout(sonar_data['timeout'], 'sonar.timeout')

        if 'imports' in config_data:
            import_data = config_data['imports']
            self.config.imports.log_directory = import_data.get('log_directory', self.config.imports.log_directory)
            self.config.imports.delimiter = import_data.get('delimiter', self.config.imports.delimiter)
            self.config.imports.validate_addresses = import_data.get('validate_addresses', self.config.imports.validate_addresses)
            self.config.imports.requires_county = import_data.get('requires_county', self.config.imports.requires_county)
            self.config.imports.county_country = import_data.get('county_country', self.config.imports.county_country)

        if 'system' in config_data:
            sys_data = config_data['system']
            self.config.log_level = sys_data.get('log_level', self.config.log_level)

    def _load_from_environment(self):
        """Load configuration from environment variables."""
        self.config.sonar.uri = os.getenv('URI', self.config.sonar.uri)
        self.config.sonar.username = os.getenv('USERNAME', self.config.sonar.username)
        self.config.sonar.password = os.getenv('PASSWORD', self.config.sonar.password)

        timeout = os.getenv('SONAR_TIMEOUT')
        if timeout is not None:
            self.config.sonar.timeout = _parse_timeout(timeout, "SONAR_TIMEOUT")

        self.config.imports.log_directory = os.getenv('LOG_OUTPUT_DIR', self.config.imports.log_directory)
        self.config.imports.county_country = os.getenv('COUNTY_COUNTRY', self.config.imports.county_country)

        self.config.log_level = os.getenv('LOG_LEVEL', self.config.log_level)

    def _validate_config(self):
        """Validate configuration settings."""
        errors = []

        if not self.config.sonar.uri:
            errors.append("URI is required")

        if not self.config.sonar.username:
            errors.append("USERNAME is required")

        if not self.config.sonar.password:
            errors.append("PASSWORD is required")

        if self.config.sonar.timeout <= 0:
            errors.append("Request timeout must be positive")

        if not self.config.imports.county_country:
            errors.append("COUNTY_COUNTRY must not be empty")

        if errors:
            raise ConfigurationError(f"Configuration validation failed: {'; '.join(errors)}")

        logger.debug("Configuration validation passed")

    def get_sonar_config(self) -> SonarConfig:
        """Get billing platform API configuration."""
        return self.config.sonar

    def get_import_config(self) -> ImportConfig:
        """Get import configuration."""
        return self.config.imports

    def get_system_config(self) -> SystemConfig:
        """Get system configuration."""
        return self.config


def get_config(config_file: Optional[Path] = None) -> SystemConfig:
    """Get global configuration instance."""
    if not hasattr(get_config, '_instance'):
        get_config._instance = ConfigManager(config_file)
    return get_config._instance.get_system_config()


def get_sonar_config() -> SonarConfig:
    """Get billing platform API configuration."""
    return get_config().sonar


def get_import_config() -> ImportConfig:
    """Get import configuration."""
    return get_config().imports
