"""Selenium browser factory and session lifecycle."""

from contextlib import contextmanager
from typing import Generator

from selenium import webdriver
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.chrome.service import Service as ChromeService
from selenium.webdriver.edge.options import Options as EdgeOptions
from selenium.webdriver.edge.service import Service as EdgeService
from selenium.webdriver.firefox.options import Options as FirefoxOptions
from selenium.webdriver.firefox.service import Service as FirefoxService
from selenium.webdriver.remote.webdriver import WebDriver
from webdriver_manager.chrome import ChromeDriverManager
from webdriver_manager.firefox import GeckoDriverManager
from webdriver_manager.microsoft import EdgeChromiumDriverManager

from herokuapp_e2e.core.config import BrowserType, TimeoutProfile, settings
from herokuapp_e2e.core.exceptions import (
    SessionNotStartedError,
    SessionRestartError,
    UnsupportedBrowserError,
)
from herokuapp_e2e.monitoring.logger import get_logger

logger = get_logger(__name__)


def resolve_browser_type(kind: BrowserType | str | None) -> BrowserType:
    """Normalize a browser kind given as enum member or string.

    Args:
        kind: Browser kind (None means the configured default)

    Returns:
        BrowserType member

    Raises:
        UnsupportedBrowserError: If kind is not a supported browser
    """
    if kind is None:
        return settings.browser_type
    if isinstance(kind, BrowserType):
        return kind
    if isinstance(kind, str):
        try:
            return BrowserType(kind.strip().lower())
        except ValueError:
            pass
    raise UnsupportedBrowserError(kind)


class BrowserFactory:
    """Factory for creating Selenium WebDriver instances."""

    @staticmethod
    def _get_chrome_options(headless: bool = True) -> ChromeOptions:
        """Configure Chrome options.

        Args:
            headless: Run in headless mode

        Returns:
            Configured ChromeOptions
        """
        options = ChromeOptions()

        if headless:
            options.add_argument("--headless=new")

        # Performance and stability
        options.add_argument("--no-sandbox")
        options.add_argument("--disable-dev-shm-usage")
        options.add_argument("--disable-gpu")
        options.add_argument("--disable-notifications")

        # Window size
        options.add_argument("--window-size=1920,1080")
        options.add_argument("--start-maximized")

        options.add_argument("--log-level=3")
        options.add_experimental_option(
            "prefs",
            {
                "credentials_enable_service": False,
                "profile.password_manager_enabled": False,
            },
        )

        return options

    @staticmethod
    def _get_firefox_options(headless: bool = True) -> FirefoxOptions:
        """Configure Firefox options.

        Args:
            headless: Run in headless mode

        Returns:
            Configured FirefoxOptions
        """
        options = FirefoxOptions()

        if headless:
            options.add_argument("--headless")

        # Window size
        options.add_argument("--width=1920")
        options.add_argument("--height=1080")

        options.set_preference("dom.webnotifications.enabled", False)
        options.set_preference("dom.push.enabled", False)

        return options

    @staticmethod
    def _get_edge_options(headless: bool = True) -> EdgeOptions:
        """Configure Edge options.

        Args:
            headless: Run in headless mode

        Returns:
            Configured EdgeOptions
        """
        options = EdgeOptions()

        if headless:
            options.add_argument("--headless=new")

        options.add_argument("--no-sandbox")
        options.add_argument("--disable-dev-shm-usage")
        options.add_argument("--disable-gpu")
        options.add_argument("--window-size=1920,1080")
        options.add_argument("--start-maximized")

        return options

    @staticmethod
    def apply_timeouts(driver: WebDriver, timeouts: TimeoutProfile) -> None:
        """Apply page-load, implicit-wait and script timeouts to a driver.

        Args:
            driver: WebDriver instance
            timeouts: Timeout profile to apply
        """
        driver.set_page_load_timeout(timeouts.page_load)
        driver.implicitly_wait(timeouts.implicit_wait)
        driver.set_script_timeout(timeouts.script)

    @classmethod
    def create(
        cls,
        browser_type: BrowserType | str | None = None,
        headless: bool | None = None,
        timeouts: TimeoutProfile | None = None,
    ) -> WebDriver:
        """Create a new WebDriver instance.

        Args:
            browser_type: Type of browser to use
            headless: Run in headless mode (uses settings if None)
            timeouts: Timeout profile (standard profile if None)

        Returns:
            Configured WebDriver instance

        Raises:
            UnsupportedBrowserError: If browser_type is not supported
        """
        browser_type = resolve_browser_type(browser_type)
        headless = headless if headless is not None else settings.headless
        timeouts = timeouts or TimeoutProfile.standard()

        logger.info(f"Creating browser | type={browser_type.value} | headless={headless}")

        if browser_type == BrowserType.CHROME:
            options = cls._get_chrome_options(headless)
            service = ChromeService(ChromeDriverManager().install())
            driver = webdriver.Chrome(service=service, options=options)

        elif browser_type == BrowserType.FIREFOX:
            options = cls._get_firefox_options(headless)
            service = FirefoxService(GeckoDriverManager().install())
            driver = webdriver.Firefox(service=service, options=options)

        elif browser_type == BrowserType.EDGE:
            options = cls._get_edge_options(headless)
            service = EdgeService(EdgeChromiumDriverManager().install())
            driver = webdriver.Edge(service=service, options=options)

        else:
            raise UnsupportedBrowserError(browser_type)

        try:
            cls.apply_timeouts(driver, timeouts)
        except Exception:
            # Never hand out a half-configured driver
            driver.quit()
            raise

        logger.info(
            f"Browser created successfully | session_id={driver.session_id} | "
            f"page_load={timeouts.page_load}s | implicit={timeouts.implicit_wait}s | "
            f"script={timeouts.script}s"
        )
        return driver


class BrowserSession:
    """Owns a single browser driver and its lifecycle."""

    def __init__(
        self,
        browser_type: BrowserType | str | None = None,
        headless: bool | None = None,
        timeouts: TimeoutProfile | None = None,
    ) -> None:
        """Initialize browser session.

        Args:
            browser_type: Type of browser to use
            headless: Run in headless mode
            timeouts: Timeout profile applied to every driver this session creates
        """
        self.browser_type = resolve_browser_type(browser_type)
        self.headless = headless if headless is not None else settings.headless
        self.timeouts = timeouts or TimeoutProfile.standard()
        self._driver: WebDriver | None = None

    @property
    def driver(self) -> WebDriver:
        """Get the live WebDriver instance.

        Returns:
            WebDriver instance

        Raises:
            SessionNotStartedError: If the session has no driver
        """
        if self._driver is None:
            raise SessionNotStartedError("Browser not initialized. Call start() first.")
        return self._driver

    @property
    def has_driver(self) -> bool:
        return self._driver is not None

    @property
    def is_active(self) -> bool:
        """Check if browser is active.

        Returns:
            True if the driver answers a trivial command
        """
        if self._driver is None:
            return False
        try:
            _ = self._driver.current_url
            return True
        except Exception:
            return False

    def start(self, browser_type: BrowserType | str | None = None) -> WebDriver:
        """Start browser session.

        A running driver of the same kind is returned as is; a running
        driver of another kind is stopped and replaced.

        Args:
            browser_type: Browser kind (defaults to the session's kind)

        Returns:
            WebDriver instance

        Raises:
            UnsupportedBrowserError: If browser_type is not supported
        """
        if browser_type is not None:
            browser_type = resolve_browser_type(browser_type)

        if self._driver is not None:
            if browser_type is None or browser_type == self.browser_type:
                logger.warning("Browser already started, returning existing instance")
                return self._driver
            logger.warning(
                f"Switching browser | from={self.browser_type.value} | to={browser_type.value}"
            )
            self.stop()

        if browser_type is not None:
            self.browser_type = browser_type

        self._driver = BrowserFactory.create(
            browser_type=self.browser_type,
            headless=self.headless,
            timeouts=self.timeouts,
        )
        return self._driver

    def stop(self) -> None:
        """Stop browser session. Safe to call when nothing is running."""
        if self._driver is not None:
            try:
                session_id = self._driver.session_id
                self._driver.quit()
                logger.info(f"Browser closed | session_id={session_id}")
            except Exception as e:
                logger.error(f"Error closing browser: {e}")
            finally:
                self._driver = None

    def restart(self) -> WebDriver:
        """Replace the current driver with a fresh one of the same kind.

        Returns:
            New WebDriver instance

        Raises:
            SessionRestartError: If the new driver could not be created
        """
        logger.warning(f"Restarting browser | type={self.browser_type.value}")
        self.stop()
        try:
            driver = self.start()
        except Exception as e:
            logger.error(f"Browser restart failed: {e}")
            raise SessionRestartError(f"Could not restart {self.browser_type.value}: {e}") from e
        logger.info("Browser restarted and ready")
        return driver

    def use_timeouts(self, timeouts: TimeoutProfile) -> None:
        """Switch timeout profile for the live driver and any future one.

        Args:
            timeouts: Timeout profile
        """
        self.timeouts = timeouts
        if self._driver is not None:
            BrowserFactory.apply_timeouts(self._driver, timeouts)
            logger.debug(
                f"Timeouts updated | page_load={timeouts.page_load}s | "
                f"implicit={timeouts.implicit_wait}s | script={timeouts.script}s"
            )

    def navigate(self, url: str) -> None:
        """Navigate to URL.

        Args:
            url: Target URL
        """
        logger.debug(f"Navigating to: {url}")
        self.driver.get(url)

    @property
    def current_url(self) -> str:
        return self.driver.current_url

    @property
    def title(self) -> str:
        return self.driver.title

    def refresh(self) -> None:
        self.driver.refresh()

    def delete_cookies(self) -> None:
        self.driver.delete_all_cookies()

    def __enter__(self) -> "BrowserSession":
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.stop()


@contextmanager
def browser_session(
    browser_type: BrowserType | str | None = None,
    headless: bool | None = None,
    timeouts: TimeoutProfile | None = None,
) -> Generator[BrowserSession, None, None]:
    """Context manager for browser sessions.

    Args:
        browser_type: Type of browser to use
        headless: Run in headless mode
        timeouts: Timeout profile

    Yields:
        Started BrowserSession
    """
    session = BrowserSession(browser_type, headless, timeouts)
    try:
        session.start()
        yield session
    finally:
        session.stop()
