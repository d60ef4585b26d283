"""Tests for configuration loading."""

import json
import os

import pytest

from billing_importer.config import ConfigManager, ConfigurationError

pytestmark = pytest.mark.unit

ENV_VARS = ("URI", "USERNAME", "PASSWORD", "SONAR_TIMEOUT", "LOG_OUTPUT_DIR", "COUNTY_COUNTRY", "LOG_LEVEL")


@pytest.fixture(autouse=True)
def clean_environment():
    # load_dotenv writes straight into os.environ, so restore by hand
    saved = {name: os.environ.pop(name, None) for name in ENV_VARS}
    yield
    for name, value in saved.items():
        os.environ.pop(name, None)
        if value is not None:
            os.environ[name] = value


@pytest.fixture
def paths(tmp_path):
    return tmp_path / "config.json", tmp_path / ".env"


def test_environment_variables(monkeypatch, paths):
    monkeypatch.setenv("URI", "https://billing.example.com/")
    monkeypatch.setenv("USERNAME", "importer")
    monkeypatch.setenv("PASSWORD", "secret")
    monkeypatch.setenv("SONAR_TIMEOUT", "10")

    config = ConfigManager(*paths).get_system_config()

    assert config.sonar.api_base_url == "https://billing.example.com/api/v1"
    assert config.sonar.username == "importer"
    assert config.sonar.timeout == 10
    assert config.imports.county_country == "US"
    assert config.imports.log_directory == "log_output"


def test_dotenv_file(paths):
    config_file, env_file = paths
    env_file.write_text("URI=https://billing.example.com\nUSERNAME=importer\nPASSWORD=secret\n")

    config = ConfigManager(config_file, env_file).get_system_config()

    assert config.sonar.uri == "https://billing.example.com"
    assert config.sonar.password == "secret"


def test_environment_wins_over_config_file(monkeypatch, paths):
    config_file, env_file = paths
    config_file.write_text(json.dumps({
        "sonar": {"uri": "https://from-file.example.com", "username": "file", "password": "file"},
        "imports": {"county_country": "CA", "requires_county": False},
    }))
    monkeypatch.setenv("USERNAME", "env")

    config = ConfigManager(config_file, env_file).get_system_config()

    assert config.sonar.uri == "https://from-file.example.com"
    assert config.sonar.username == "env"
    assert config.imports.county_country == "CA"
    assert config.imports.requires_county is False


def test_missing_credentials_reported_together(paths):
    with pytest.raises(ConfigurationError) as excinfo:
        ConfigManager(*paths)

    message = str(excinfo.value)
    assert "URI is required" in message
    assert "USERNAME is required" in message
    assert "PASSWORD is required" in message


def test_invalid_timeout(monkeypatch, paths):
    monkeypatch.setenv("URI", "https://billing.example.com")
    monkeypatch.setenv("USERNAME", "importer")
    monkeypatch.setenv("PASSWORD", "secret")
    monkeypatch.setenv("SONAR_TIMEOUT", "soon")

    with pytest.raises(ConfigurationError):
        ConfigManager(*paths)


def test_broken_config_file(paths):
    config_file, env_file = paths
    config_file.write_text("{not json")

    with pytest.raises(ConfigurationError):
        ConfigManager(config_file, env_file)


def test_config_file_timeout_is_coerced(paths):
    config_file, env_file = paths
    config_file.write_text(json.dumps({
        "sonar": {"uri": "https://billing.example.com", "username": "importer", "password": "secret",
                  "timeout": "45"},
    }))

    config = ConfigManager(config_file, env_file).get_system_config()

    assert config.sonar.timeout == 45


def test_config_file_timeout_not_a_number(paths):
    config_file, env_file = paths
    config_file.write_text(json.dumps({
        "sonar": {"uri": "https://billing.example.com", "username": "importer", "password": "secret",
                  "timeout": "soon"},
    }))

    with pytest.raises(ConfigurationError) as excinfo:
        ConfigManager(config_file, env_file)

    assert "sonar.timeout must be an integer" in str(excinfo.value)
