"""
Configuration Services
Provides centralized configuration management for the application
"""

from .configuration_service import ConfigurationService, get_config_service

__all__ = [
    "ConfigurationService",
    "get_config_service"
]
