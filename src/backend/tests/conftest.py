"""
Pytest configuration and shared fixtures
Provides common test fixtures for all test modules
"""

import json
import sys
import tempfile
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add backend directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.services.config.configuration_service import ConfigurationService


TEST_SEARCH_CONFIG = {
    "version": "1.0",
    "description": "Test search configuration",
    "orchestration": {
        "timeout_seconds": 2,
        "min_query_length": 2,
        "default_limit": 50,
        "max_limit": 100
    },
    "limits": {
        "headroom_multiplier": 2,
        "headroom_cap": 30
    },
    "strategies": {
        "card_number_player": {
            "enabled": True,
            "score": 95,
            "combined_share": 0.7,
            "fallback_enabled": True,
            "fallback_min_results": 5,
            "fallback_card_share": 0.4,
            "fallback_card_score": 75,
            "fallback_player_share": 0.3,
            "fallback_player_score": 80
        },
        "card_number": {"enabled": True, "exact_score": 100, "partial_score": 80},
        "card_type": {"enabled": True, "score": 85},
        "player": {"enabled": True},
        "team": {"enabled": True},
        "series": {"enabled": True}
    },
    "query_analysis": {
        "card_type_keywords": {
            "rookie": ["rookie", "rc"],
            "autograph": ["autograph", "auto"],
            "relic": ["relic", "jersey", "patch"],
            "parallel": ["parallel", "/"]
        },
        "team_abbreviations": ["bos", "nyy", "laa", "sea"]
    }
}


@pytest.fixture(scope="session")
def test_config_dir():
    """
    Create temporary config directory with the test search configuration
    Session-scoped fixture used across all tests
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        config_dir = Path(tmpdir)
        (config_dir / "search_config.json").write_text(
            json.dumps(TEST_SEARCH_CONFIG, indent=2),
            encoding="utf-8"
        )
        yield config_dir


@pytest.fixture
def config_service(test_config_dir):
    """
    Create ConfigurationService with test config directory
    Function-scoped fixture, new instance per test
    """
    service = ConfigurationService(str(test_config_dir))
    service.load_config.cache_clear()
    return service


@pytest.fixture
def search_config():
    """Deep copy of the test search configuration"""
    return json.loads(json.dumps(TEST_SEARCH_CONFIG))


@pytest.fixture
def mock_config_service():
    """
    Create mock ConfigurationService for testing
    Useful for unit tests that don't need actual config files
    """
    mock = MagicMock(spec=ConfigurationService)
    mock.get_search_config.return_value = TEST_SEARCH_CONFIG
    mock.get_orchestration_config.return_value = TEST_SEARCH_CONFIG["orchestration"]
    mock.get_limits_config.return_value = TEST_SEARCH_CONFIG["limits"]
    mock.get_query_analysis_config.return_value = TEST_SEARCH_CONFIG["query_analysis"]
    mock.validate_config.return_value = True
    return mock


# Pytest markers
def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "api: HTTP API tests")
    config.addinivalue_line("markers", "slow: Slow running tests")
    config.addinivalue_line("markers", "config: Configuration system tests")
    config.addinivalue_line("markers", "services: Service layer tests")


# Auto-use fixtures
@pytest.fixture(autouse=True)
def reset_singletons():
    """
    Reset singleton instances before each test
    Ensures test isolation
    """
    import app.services.config.configuration_service as config_module
    config_module._config_service = None

    yield

    config_module._config_service = None
