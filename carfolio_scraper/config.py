"""
Configuration file handling for the scraper.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional, List, Any

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://carfolio.com"
DEFAULT_CONFIG_PATH = "carfolio_config.json"


class ScraperConfig:
    """Configuration for the scraper."""

    def __init__(self, config_dict: Dict[str, Any] = None):
        """
        Initialize configuration from a dictionary.

        Args:
            config_dict: Configuration dictionary
        """
        config = config_dict or {}

        # Site
        self.base_url: str = config.get('base_url', DEFAULT_BASE_URL).rstrip('/')

        # Crawl scope
        self.makes: Optional[List[str]] = config.get('makes')  # None = all makes
        self.max_makes: Optional[int] = config.get('max_makes')  # None = no limit
        self.max_models: Optional[int] = config.get('max_models')  # per make, None = no limit

        # HTTP options
        self.timeout: float = config.get('timeout', 30)
        self.use_cache: bool = config.get('use_cache', True)
        self.cache_expire_hours: float = config.get('cache_expire_hours', 24)

        # Output options
        self.output_path: str = config.get('output_path', 'vehicles.json')
        self.output_format: str = config.get('output_format', 'auto')  # 'json', 'jsonl', 'auto'

        # Logging options
        self.log_level: str = config.get('log_level', 'INFO')
        self.log_file: Optional[str] = config.get('log_file')

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'base_url': self.base_url,
            'makes': self.makes,
            'max_makes': self.max_makes,
            'max_models': self.max_models,
            'timeout': self.timeout,
            'use_cache': self.use_cache,
            'cache_expire_hours': self.cache_expire_hours,
            'output_path': self.output_path,
            'output_format': self.output_format,
            'log_level': self.log_level,
            'log_file': self.log_file,
        }

    def wants_make(self, name: str) -> bool:
        """Check a make name against the configured make filter (case-insensitive)."""
        if not self.makes:
            return True
        return name.strip().lower() in {make.strip().lower() for make in self.makes}

    @classmethod
    def from_file(cls, config_path: str) -> 'ScraperConfig':
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to configuration file

        Returns:
            ScraperConfig object

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config file is invalid
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                config_dict = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file: {e}")
        except OSError as e:
            raise ValueError(f"Error reading config file: {e}")

        if not isinstance(config_dict, dict):
            raise ValueError(f"Config file must contain a JSON object: {config_path}")

        logger.info(f"Loaded configuration from {config_path}")
        return cls(config_dict)

    def save_to_file(self, config_path: str) -> None:
        """
        Save configuration to a JSON file.

        Args:
            config_path: Path to save configuration file
        """
        with open(config_path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

        logger.info(f"Saved configuration to {config_path}")

    @classmethod
    def create_default(cls, config_path: str = DEFAULT_CONFIG_PATH) -> 'ScraperConfig':
        """
        Create a default configuration file.

        Args:
            config_path: Path to save default configuration

        Returns:
            ScraperConfig object with default values
        """
        config = cls()
        config.save_to_file(config_path)
        return config
