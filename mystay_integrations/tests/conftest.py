"""
Pytest configuration for integration layer tests
"""

# Import shared fixtures
from .fixtures import *  # noqa: F401, F403


# Markers for different test types
def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line(
        "markers", "integration: mark test as requiring external services"
    )
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line(
        "markers", "golden: mark test as part of golden contract suite"
    )
