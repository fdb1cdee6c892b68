"""Pytest configuration and fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from trparser.config import get_settings
from trparser.logging import configure_logging

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run integration tests (require network access)",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless explicitly enabled."""
    if config.getoption("--run-integration"):
        return
    skip_integration = pytest.mark.skip(reason="need --run-integration option to run")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make every test read settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_logging():
    """Point logging back at the current stderr after tests that reconfigure it."""
    yield
    configure_logging()


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding the sample reports."""
    return FIXTURES_DIR


@pytest.fixture
def junit_multiple_suites() -> Path:
    """JUnit report with a <testsuites> root."""
    return FIXTURES_DIR / "junit" / "multiple_suites.xml"


@pytest.fixture
def junit_single_suite() -> Path:
    """WebdriverIO-style JUnit report with a lone <testsuite> root."""
    return FIXTURES_DIR / "junit" / "single_suite.xml"


@pytest.fixture
def cucumber_features() -> Path:
    """Cucumber JSON report with two features."""
    return FIXTURES_DIR / "cucumber" / "features.json"


@pytest.fixture
def nunit_v2() -> Path:
    """NUnit 2 <test-results> report."""
    return FIXTURES_DIR / "nunit" / "nunit_v2.xml"


@pytest.fixture
def nunit_v3() -> Path:
    """NUnit 3 <test-run> report."""
    return FIXTURES_DIR / "nunit" / "nunit_v3.xml"
