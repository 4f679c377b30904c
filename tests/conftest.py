"""Pytest configuration and fixtures."""

import os
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

test_data_dir = project_root / "test_data"

# Set test environment before the package reads its settings
os.environ.setdefault("LOGS_DIR", str(test_data_dir / "logs"))
os.environ.setdefault("SCREENSHOTS_DIR", str(test_data_dir / "screenshots"))
os.environ.setdefault("TEST_FILES_DIR", str(test_data_dir / "files"))
os.environ.setdefault("HEADLESS", "true")

from herokuapp_e2e.automation.browser import BrowserSession  # noqa: E402
from herokuapp_e2e.core.config import TimeoutProfile, get_settings  # noqa: E402
from herokuapp_e2e.monitoring.logger import setup_logging  # noqa: E402


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "e2e: runs against a real browser and the live site")
    config.addinivalue_line("markers", "slow: large file transfers")


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Setup test environment."""
    test_data_dir.mkdir(exist_ok=True)
    setup_logging()

    yield

    # Cleanup
    import shutil
    if test_data_dir.exists():
        shutil.rmtree(test_data_dir, ignore_errors=True)


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def fast_timeouts():
    return TimeoutProfile(page_load=5, implicit_wait=2, script=5)


@pytest.fixture
def fake_driver():
    """Mocked WebDriver with a plausible session."""
    driver = MagicMock(name="WebDriver")
    driver.session_id = "fake-session"
    driver.current_url = "about:blank"
    driver.title = ""
    driver.find_elements.return_value = []
    driver.save_screenshot.return_value = True
    return driver


@pytest.fixture
def fake_session(fake_driver, fast_timeouts):
    """BrowserSession already holding the mocked driver."""
    session = BrowserSession("chrome", headless=True, timeouts=fast_timeouts)
    session._driver = fake_driver
    return session
