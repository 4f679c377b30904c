"""Best-effort screenshot capture."""

from datetime import datetime
from pathlib import Path

from selenium.webdriver.remote.webdriver import WebDriver

from herokuapp_e2e.core.config import settings
from herokuapp_e2e.monitoring.logger import get_logger

logger = get_logger(__name__)


def screenshot_path(file_name: str, directory: Path | None = None) -> Path:
    """Build a timestamped screenshot path.

    Args:
        file_name: Base file name (".png" appended when missing)
        directory: Target directory (defaults to settings.screenshots_dir)

    Returns:
        Path for the screenshot file
    """
    directory = Path(directory or settings.screenshots_dir)
    stem = Path(file_name).stem or "screenshot"
    suffix = Path(file_name).suffix or ".png"
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    return directory / f"{stem}_{timestamp}{suffix}"


def capture_screenshot(
    driver: WebDriver | None, file_name: str, directory: Path | None = None
) -> Path | None:
    """Save a screenshot of the current browser state.

    Failures are logged, never raised.

    Args:
        driver: WebDriver instance (None is tolerated)
        file_name: Screenshot file name
        directory: Target directory

    Returns:
        Saved path, or None if nothing was written
    """
    if driver is None:
        logger.warning(f"No driver available for screenshot: {file_name}")
        return None

    try:
        path = screenshot_path(file_name, directory)
        path.parent.mkdir(parents=True, exist_ok=True)
        if not driver.save_screenshot(str(path)):
            logger.warning(f"Driver did not write screenshot: {path}")
            return None
        logger.info(f"Screenshot saved: {path}")
        return path
    except Exception as e:
        logger.error(f"Failed to capture screenshot: {e}")
        return None
