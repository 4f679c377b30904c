"""Shared page object behaviour."""

from contextlib import contextmanager
from typing import Generator

from selenium.common.exceptions import NoSuchElementException, TimeoutException
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from herokuapp_e2e.automation.browser import BrowserSession
from herokuapp_e2e.automation.locators import Locator
from herokuapp_e2e.core.config import settings
from herokuapp_e2e.core.exceptions import NavigationTimeoutError
from herokuapp_e2e.monitoring.logger import get_logger

logger = get_logger(__name__)

APPLICATION_ERROR_FRAME = Locator.css(
    "iframe[src='https://www.herokucdn.com/error-pages/application-error.html']",
    description="Heroku application error frame",
)
APPLICATION_ERROR_BODY = Locator.xpath(
    "//body[contains(text(), 'Application error')]",
    description="Application error body text",
)


class BasePage:
    """Base class for page objects bound to a shared BrowserSession."""

    URL_PATH = "/"

    def __init__(self, session: BrowserSession, base_url: str | None = None) -> None:
        """Initialize page object.

        Args:
            session: Browser session (referenced, not owned)
            base_url: Application root URL (defaults to settings.base_url)
        """
        if session is None:
            raise ValueError("Browser session cannot be None.")
        self.session = session
        self.base_url = (base_url or settings.base_url).rstrip("/")

    @property
    def driver(self) -> WebDriver:
        # Resolved on every call so a restarted session is picked up
        return self.session.driver

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.URL_PATH}"

    @property
    def current_url(self) -> str:
        return self.session.current_url

    def navigate_to(self) -> None:
        """Navigate to this page's URL."""
        logger.info(f"Navigating to {type(self).__name__}: {self.url}")
        self.session.navigate(self.url)

    def refresh(self) -> None:
        logger.debug(f"Refreshing {type(self).__name__}")
        self.session.refresh()

    def find(self, locator: Locator) -> WebElement:
        """Find a single element.

        Raises:
            NoSuchElementException: If the element is absent
        """
        return self.driver.find_element(*locator.as_tuple())

    def find_all(self, locator: Locator) -> list[WebElement]:
        return self.driver.find_elements(*locator.as_tuple())

    @contextmanager
    def no_implicit_wait(self) -> Generator[None, None, None]:
        """Temporarily disable the implicit wait so absent elements fail fast."""
        self.driver.implicitly_wait(0)
        try:
            yield
        finally:
            self.driver.implicitly_wait(self.session.timeouts.implicit_wait)

    def wait_visible(self, locator: Locator, timeout: float | None = None) -> WebElement:
        """Wait for element to become visible.

        Args:
            locator: Element locator
            timeout: Wait timeout in seconds

        Returns:
            Visible WebElement

        Raises:
            TimeoutException: If element is not visible within timeout
        """
        timeout = timeout if timeout is not None else settings.upload_wait_timeout
        logger.debug(f"Waiting for element to be visible: {locator}")
        element = WebDriverWait(self.driver, timeout).until(
            EC.visibility_of_element_located(locator.as_tuple())
        )
        logger.debug(f"Element found and visible: {locator}")
        return element

    def wait_for_url_fragment(self, fragment: str, timeout: float | None = None) -> None:
        """Block until the current URL contains fragment.

        Raises:
            NavigationTimeoutError: If the URL does not match within timeout
        """
        timeout = timeout if timeout is not None else settings.upload_wait_timeout
        try:
            WebDriverWait(self.driver, timeout).until(EC.url_contains(fragment))
        except TimeoutException as e:
            raise NavigationTimeoutError(
                f"URL did not contain '{fragment}' within {timeout}s",
                url=self.url,
                timeout=timeout,
            ) from e

    def is_displayed(self, locator: Locator) -> bool:
        """Check if element is present and displayed.

        Args:
            locator: Element locator

        Returns:
            True if displayed, False if absent or hidden
        """
        with self.no_implicit_wait():
            try:
                return self.find(locator).is_displayed()
            except NoSuchElementException:
                return False

    def has_application_error(self) -> bool:
        """Check for the Heroku application error indicator.

        Returns:
            True if the embedded error frame or error body is displayed
        """
        if self.is_displayed(APPLICATION_ERROR_FRAME):
            logger.warning("Application error frame detected")
            return True
        if self.is_displayed(APPLICATION_ERROR_BODY):
            logger.warning("Application error body detected")
            return True
        return False
