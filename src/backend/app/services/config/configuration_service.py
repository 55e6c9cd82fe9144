"""
Configuration Service
Centralized configuration management with caching and validation
"""

import json
from functools import lru_cache
from typing import Dict, Any, Optional
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


# Defaults applied when search_config.json omits a section or key
DEFAULT_ORCHESTRATION = {
    "timeout_seconds": 10,
    "min_query_length": 2,
    "default_limit": 50,
    "max_limit": 100
}

DEFAULT_LIMITS = {
    "headroom_multiplier": 2,
    "headroom_cap": 30
}


class ConfigurationService:
    """
    Centralized service for loading and caching application configurations

    Loads configurations from JSON files in the config directory with:
    - LRU caching for performance
    - Defaults for missing search settings
    - Error handling
    - Hot-reload capability
    """

    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize ConfigurationService

        Args:
            config_dir: Path to configuration directory. If None, uses default app/config
        """
        if config_dir is None:
            # Default to app/config directory
            self.config_dir = Path(__file__).parent.parent.parent / "config"
        else:
            self.config_dir = Path(config_dir)

        logger.info(f"ConfigurationService initialized with config_dir: {self.config_dir}")

    @lru_cache(maxsize=32)
    def load_config(self, config_name: str) -> Dict[str, Any]:
        """
        Load configuration from JSON file with caching

        Args:
            config_name: Name of config file (without .json extension)

        Returns:
            Dict containing configuration data

        Raises:
            FileNotFoundError: If config file not found
            json.JSONDecodeError: If config file is invalid JSON
        """
        try:
            config_path = self.config_dir / f"{config_name}.json"

            if not config_path.exists():
                raise FileNotFoundError(f"Config file not found: {config_path}")

            with open(config_path, "r", encoding="utf-8") as f:
                config = json.load(f)

            logger.info(f"Loaded config: {config_name} (version: {config.get('version', 'N/A')})")
            return config

        except FileNotFoundError:
            logger.error(f"Config file not found: {config_name}.json")
            raise
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in {config_name}.json: {e}")
            raise

    def reload_config(self, config_name: str) -> Dict[str, Any]:
        """
        Force reload of configuration (clears cache)

        Args:
            config_name: Name of config file to reload

        Returns:
            Freshly loaded configuration
        """
        self.load_config.cache_clear()
        logger.info(f"Cache cleared, reloading config: {config_name}")
        return self.load_config(config_name)

    def get_search_config(self) -> Dict[str, Any]:
        """Get search configuration"""
        return self.load_config("search_config")

    def get_orchestration_config(self) -> Dict[str, Any]:
        """Orchestrator settings merged over defaults"""
        config = self.get_search_config()
        return {**DEFAULT_ORCHESTRATION, **config.get("orchestration", {})}

    def get_limits_config(self) -> Dict[str, Any]:
        """Per-strategy headroom settings merged over defaults"""
        config = self.get_search_config()
        return {**DEFAULT_LIMITS, **config.get("limits", {})}

    def get_query_analysis_config(self) -> Dict[str, Any]:
        """Keyword vocabularies for QueryAnalyzer"""
        return self.get_search_config().get("query_analysis", {})

    def validate_config(self, config_name: str) -> bool:
        """
        Validate configuration file

        Args:
            config_name: Name of config to validate

        Returns:
            True if valid, False otherwise
        """
        try:
            config = self.load_config(config_name)

            # Basic validation - check if version exists
            if "version" not in config:
                logger.warning(f"Config {config_name} missing version field")

            logger.info(f"Config {config_name} validated successfully")
            return True

        except (OSError, ValueError) as e:
            logger.error(f"Config validation failed for {config_name}: {e}")
            return False


# Global singleton instance
_config_service: Optional[ConfigurationService] = None


def get_config_service() -> ConfigurationService:
    """
    Get global ConfigurationService singleton instance

    Returns:
        ConfigurationService instance
    """
    global _config_service
    if _config_service is None:
        _config_service = ConfigurationService()
    return _config_service


def init_config_service(config_dir: Optional[str] = None) -> ConfigurationService:
    """
    Initialize global ConfigurationService with custom config directory

    Args:
        config_dir: Path to configuration directory

    Returns:
        ConfigurationService instance
    """
    global _config_service
    _config_service = ConfigurationService(config_dir)
    logger.info("Global ConfigurationService initialized")
    return _config_service
