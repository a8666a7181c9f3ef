"""
Unit tests for configuration management.

Tests hierarchical YAML loading, environment overrides, validation and
caching.
"""

import os

import pytest
import yaml

from tripit.core.config_manager import AuthConfig, ClientConfig, ConfigManager
from tripit.core.error_handler import ConfigurationError
from tests.fixtures.sample_data import SAMPLE_CONFIGURATIONS


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove TRIPIT_* variables from the test environment"""
    for key in list(os.environ):
        if key.startswith("TRIPIT_"):
            monkeypatch.delenv(key)


@pytest.fixture
def config_dir(tmp_path):
    """Temporary directory holding a default OAuth configuration"""
    with open(tmp_path / "default_config.yaml", "w") as f:
        yaml.dump(SAMPLE_CONFIGURATIONS["oauth"], f)
    return tmp_path


class TestConfigManager:
    """Test suite for ConfigManager"""

    @pytest.mark.unit
    def test_load_default_config(self, config_dir):
        """Test loading and validating the default file"""
        config = ConfigManager(config_path=config_dir).load_config()

        assert isinstance(config, ClientConfig)
        assert config.api.timeout == 15
        assert config.authentication.consumer_secret.get_secret_value() == "consumer-secret"
        assert config.logging.level == "DEBUG"

    @pytest.mark.unit
    def test_environment_file_overrides_default(self, config_dir):
        """Test that <environment>.yaml is merged over the default"""
        with open(config_dir / "production.yaml", "w") as f:
            yaml.dump({"api": {"timeout": 60}}, f)

        config = ConfigManager(config_path=config_dir, environment="production").load_config()

        assert config.api.timeout == 60
        assert config.api.api_version == "v1"

    @pytest.mark.unit
    def test_local_file_overrides_environment(self, config_dir):
        """Test that local.yaml wins over the environment file"""
        with open(config_dir / "development.yaml", "w") as f:
            yaml.dump({"api": {"api_version": "v2"}}, f)
        with open(config_dir / "local.yaml", "w") as f:
            yaml.dump({"api": {"api_version": "v3"}}, f)

        config = ConfigManager(config_path=config_dir, environment="development").load_config()

        assert config.api.api_version == "v3"

    @pytest.mark.unit
    def test_env_var_overrides(self, config_dir, monkeypatch):
        """Test TRIPIT_<SECTION>_<KEY> overrides"""
        monkeypatch.setenv("TRIPIT_API_TIMEOUT", "45")
        monkeypatch.setenv("TRIPIT_API_VERIFY_SSL", "false")
        monkeypatch.setenv("TRIPIT_AUTHENTICATION_CONSUMER_KEY", "env-key")

        config = ConfigManager(config_path=config_dir).load_config()

        assert config.api.timeout == 45
        assert config.api.verify_ssl is False
        assert config.authentication.consumer_key == "env-key"

    @pytest.mark.unit
    def test_env_only_configuration(self, tmp_path, monkeypatch):
        """Test a configuration built entirely from the environment"""
        monkeypatch.setenv("TRIPIT_AUTHENTICATION_TYPE", "basic")
        monkeypatch.setenv("TRIPIT_AUTHENTICATION_USERNAME", "traveler@example.com")
        monkeypatch.setenv("TRIPIT_AUTHENTICATION_PASSWORD", "hunter2")

        config = ConfigManager(config_path=tmp_path).load_config()

        assert config.authentication.type == "basic"
        assert config.api.api_url == "https://api.tripit.com"

    @pytest.mark.unit
    def test_invalid_yaml(self, tmp_path):
        """Test that malformed YAML raises ConfigurationError"""
        (tmp_path / "default_config.yaml").write_text("api: [unclosed\n")

        with pytest.raises(ConfigurationError):
            ConfigManager(config_path=tmp_path).load_config()

    @pytest.mark.unit
    def test_non_mapping_yaml(self, tmp_path):
        """Test that a YAML list at top level is rejected"""
        (tmp_path / "default_config.yaml").write_text("- one\n- two\n")

        with pytest.raises(ConfigurationError):
            ConfigManager(config_path=tmp_path).load_config()

    @pytest.mark.unit
    def test_missing_authentication(self, tmp_path):
        """Test that a configuration without credentials is invalid"""
        with pytest.raises(ConfigurationError):
            ConfigManager(config_path=tmp_path).load_config()

    @pytest.mark.unit
    def test_config_is_cached_until_reload(self, config_dir):
        """Test caching and reload_config"""
        manager = ConfigManager(config_path=config_dir)
        first = manager.load_config()
        assert manager.load_config() is first

        with open(config_dir / "local.yaml", "w") as f:
            yaml.dump({"api": {"timeout": 99}}, f)

        assert manager.reload_config().api.timeout == 99


class TestConfigModels:
    """Test suite for the pydantic configuration models"""

    @pytest.mark.unit
    def test_oauth_requires_consumer_pair(self):
        """Test OAuth validation"""
        with pytest.raises(ValueError):
            AuthConfig(type="oauth", consumer_key="ck")

    @pytest.mark.unit
    def test_unknown_auth_type(self):
        """Test the auth type pattern"""
        with pytest.raises(ValueError):
            AuthConfig(type="jwt", username="u")

    @pytest.mark.unit
    def test_api_url_normalized(self):
        """Test trailing slash removal and scheme validation"""
        config = ClientConfig(
            api={"api_url": "https://api.tripit.com/"},
            **SAMPLE_CONFIGURATIONS["basic"]
        )
        assert config.api.api_url == "https://api.tripit.com"

        with pytest.raises(ValueError):
            ClientConfig(api={"api_url": "ftp://api.tripit.com"}, **SAMPLE_CONFIGURATIONS["basic"])

    @pytest.mark.unit
    def test_secrets_hidden_in_repr(self):
        """Test that secrets are masked"""
        config = ClientConfig(**SAMPLE_CONFIGURATIONS["basic"])
        assert "hunter2" not in repr(config)
