"""Configuration Management for the TripIt Client

Handles loading, validation, and management of client configuration.
Supports hierarchical YAML files with environment variable overrides.
"""

import os
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, SecretStr, ValidationError, field_validator, model_validator

from .error_handler import ConfigurationError


class AuthConfig(BaseModel):
    """Configuration for API authentication."""
    type: str = Field(default="oauth", pattern="^(oauth|basic)$")
    consumer_key: Optional[str] = None
    consumer_secret: Optional[SecretStr] = None
    token: Optional[str] = None
    token_secret: Optional[SecretStr] = None
    requestor_id: Optional[str] = None
    username: Optional[str] = None
    password: Optional[SecretStr] = None
    
    @model_validator(mode='after')
    def check_required_fields(self):
        """Validate that the selected auth type has its credentials"""
        if self.type == 'oauth' and not (self.consumer_key and self.consumer_secret):
            raise ValueError("OAuth authentication requires consumer_key and consumer_secret")
        if self.type == 'basic' and not self.username:
            raise ValueError("Basic authentication requires a username")
        return self


class APIConfig(BaseModel):
    """Configuration for the TripIt API endpoint and transport."""
    api_url: str = Field(default="https://api.tripit.com")
    api_version: str = Field(default="v1")
    timeout: int = Field(default=30, ge=1, le=300)
    verify_ssl: bool = Field(default=True)
    user_agent: str = Field(default="tripit-client/1.0.0")
    proxy_url: Optional[str] = None
    
    @field_validator('api_url')
    def validate_api_url(cls, v):
        """Validate and normalize the API root URL"""
        if not v.startswith(('http://', 'https://')):
            raise ValueError("API URL must start with http:// or https://")
        return v.rstrip('/')


class LoggingConfig(BaseModel):
    """Configuration for logging."""
    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    log_to_console: bool = Field(default=True)
    file_path: Optional[str] = None
    backup_count: int = Field(default=5, ge=1, le=20)


class ClientConfig(BaseModel):
    """Main client configuration."""
    api: APIConfig = Field(default_factory=APIConfig)
    authentication: AuthConfig
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class ConfigManager:
    """Manages client configuration loading and validation."""
    
    ENV_PREFIX = "TRIPIT_"
    
    def __init__(self, config_path: Optional[Path] = None, environment: Optional[str] = None):
        """Initialize configuration manager.
        
        Args:
            config_path: Optional directory holding the configuration files
            environment: Environment name (development, staging, production)
        """
        self.config_base_path = Path(config_path) if config_path else self._get_default_config_path()
        self.environment = environment or os.getenv('TRIPIT_ENV', 'development')
        self._config: Optional[ClientConfig] = None
        self._lock = threading.Lock()
        self.logger = logging.getLogger(__name__)
        
        self.config_files = self._get_config_files()
    
    def _get_default_config_path(self) -> Path:
        """Get the default configuration directory."""
        config_locations = [
            Path("config"),
            Path.home() / ".tripit",
        ]
        
        for location in config_locations:
            if location.exists() and location.is_dir():
                return location
        
        return Path("config")
    
    def _get_config_files(self) -> Dict[str, Path]:
        """Get configuration file paths for hierarchical loading."""
        base_dir = self.config_base_path
        
        return {
            'default': base_dir / 'default_config.yaml',
            'environment': base_dir / f'{self.environment}.yaml',
            'local': base_dir / 'local.yaml'
        }
    
    def load_config(self) -> ClientConfig:
        """Load and validate configuration with hierarchical overrides.
        
        Returns:
            Validated client configuration
            
        Raises:
            ConfigurationError: If a file is not valid YAML or validation fails
        """
        with self._lock:
            if self._config:
                return self._config
            
            config_data: Dict[str, Any] = {}
            
            for config_type, config_file in self.config_files.items():
                if config_file.exists():
                    self.logger.info(f"Loading {config_type} config from {config_file}")
                    self._deep_merge(config_data, self._load_yaml_file(config_file))
            
            env_overrides = self._get_env_overrides()
            if env_overrides:
                self.logger.info(f"Applying environment overrides: {list(env_overrides.keys())}")
                self._deep_merge(config_data, env_overrides)
            
            try:
                self._config = ClientConfig(**config_data)
            except ValidationError as e:
                self.logger.error(f"Configuration validation failed: {e}")
                raise ConfigurationError(f"Invalid configuration: {e}")
            
            return self._config
    
    def reload_config(self) -> ClientConfig:
        """Drop the cached configuration and load it again."""
        with self._lock:
            self._config = None
        return self.load_config()
    
    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Load YAML configuration file."""
        try:
            with open(file_path, 'r') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            self.logger.error(f"Failed to parse YAML file {file_path}: {e}")
            raise ConfigurationError(f"Invalid YAML in {file_path}: {e}")
        
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {file_path} must contain a mapping")
        return data
    
    def _get_env_overrides(self) -> Dict[str, Any]:
        """Get configuration overrides from environment variables.
        
        Environment variables follow pattern: TRIPIT_<SECTION>_<KEY>
        Example: TRIPIT_AUTHENTICATION_CONSUMER_KEY -> authentication.consumer_key
        """
        overrides: Dict[str, Any] = {}
        
        for key, value in os.environ.items():
            if not key.startswith(self.ENV_PREFIX) or key == 'TRIPIT_ENV':
                continue
            
            section, _, field = key[len(self.ENV_PREFIX):].lower().partition('_')
            if not field:
                continue
            
            # pydantic coerces the raw strings into the declared field types
            overrides.setdefault(section, {})[field] = value
        
        return overrides
    
    def _deep_merge(self, base_dict: Dict[str, Any], update_dict: Dict[str, Any]):
        """Recursively merge nested dictionaries."""
        for key, value in update_dict.items():
            if isinstance(value, dict) and key in base_dict and isinstance(base_dict[key], dict):
                self._deep_merge(base_dict[key], value)
            else:
                base_dict[key] = value
