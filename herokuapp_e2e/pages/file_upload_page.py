"""File upload page object (/upload)."""

from enum import Enum
from pathlib import Path

from selenium.common.exceptions import NoSuchElementException, TimeoutException
from selenium.webdriver.support.ui import WebDriverWait

from herokuapp_e2e.automation.browser import BrowserSession
from herokuapp_e2e.automation.locators import Locator
from herokuapp_e2e.automation.screenshots import capture_screenshot
from herokuapp_e2e.core.config import TimeoutProfile, settings
from herokuapp_e2e.core.exceptions import NavigationTimeoutError, UpstreamApplicationError
from herokuapp_e2e.monitoring.logger import get_logger
from herokuapp_e2e.pages.base import BasePage

logger = get_logger(__name__)


class UploadOutcome(str, Enum):
    """Terminal state of the page after submitting a file."""

    UPLOADED = "uploaded"
    SIZE_LIMIT_ERROR = "size_limit_error"
    APPLICATION_ERROR = "application_error"


class FileUploadPage(BasePage):
    """File input plus submit button; slow and flaky under large payloads."""

    URL_PATH = "/upload"
    URL_FRAGMENT = "upload"

    FILE_INPUT = Locator.id("file-upload", description="File input")
    UPLOAD_BUTTON = Locator.id("file-submit", description="Upload button")
    UPLOADED_FILES = Locator.id("uploaded-files", description="Uploaded file name")
    SIZE_LIMIT_ERROR = Locator.id("error-message", description="Size limit error")

    def __init__(
        self,
        session: BrowserSession,
        base_url: str | None = None,
        timeout: float | None = None,
        extended_timeouts: TimeoutProfile | None = None,
    ) -> None:
        """Initialize upload page.

        Args:
            session: Browser session (referenced, not owned)
            base_url: Application root URL
            timeout: Explicit wait bound in seconds (defaults to settings.upload_wait_timeout)
            extended_timeouts: Driver timeouts used while on this page
                (defaults to TimeoutProfile.extended())
        """
        super().__init__(session, base_url)
        self.timeout = timeout if timeout is not None else settings.upload_wait_timeout
        self.extended_timeouts = extended_timeouts or TimeoutProfile.extended()

    def navigate_to(self) -> None:
        """Open the upload page from a clean state and wait until it is usable.

        Raises:
            NavigationTimeoutError: If the URL or file input does not appear in time
            UpstreamApplicationError: If the Heroku error page is shown instead
        """
        logger.info("Starting with a clean browser state...")
        self.session.delete_cookies()
        self.session.refresh()

        # Large payloads need the longer page-load budget
        self.session.use_timeouts(self.extended_timeouts)

        super().navigate_to()
        self.wait_for_url_fragment(self.URL_FRAGMENT, self.timeout)

        if self.has_application_error():
            capture_screenshot(self.driver, "application_error_on_navigation.png")
            raise UpstreamApplicationError(
                "Navigation to upload page failed due to an application error", url=self.url
            )

        self.wait_for_upload_input()

    def wait_for_upload_input(self) -> None:
        """Block until the file input is visible.

        Raises:
            NavigationTimeoutError: If the input is not visible within the timeout
        """
        try:
            self.wait_visible(self.FILE_INPUT, self.timeout)
        except TimeoutException as e:
            logger.error(f"Timeout while waiting for file upload input: {e}")
            capture_screenshot(self.driver, "upload_input_timeout.png")
            raise NavigationTimeoutError(
                f"File upload input not visible within {self.timeout}s",
                url=self.url,
                timeout=self.timeout,
            ) from e

    def upload_file(self, file_path: str | Path) -> None:
        """Send a file path to the input and submit the form.

        Args:
            file_path: Path of the file to upload
        """
        absolute = str(Path(file_path).resolve())
        logger.info(f"Uploading file: {absolute}")

        self.find(self.FILE_INPUT).send_keys(absolute)
        self.find(self.UPLOAD_BUTTON).click()

        logger.info("File upload initiated")

    def get_uploaded_file_name(self) -> str:
        """Wait for the upload result and return the displayed file name.

        Raises:
            TimeoutException: If the result does not appear in time
        """
        logger.debug("Waiting for uploaded file name...")
        element = self.wait_visible(self.UPLOADED_FILES, self.timeout)
        name = element.text.strip()
        logger.info(f"Uploaded file name located: {name}")
        return name

    def get_size_limit_error(self) -> str | None:
        """Text of the size-limit error, or None if it is not shown."""
        with self.no_implicit_wait():
            try:
                element = self.find(self.SIZE_LIMIT_ERROR)
            except NoSuchElementException:
                return None
            return element.text.strip() if element.is_displayed() else None

    def detect_outcome(self) -> UploadOutcome | None:
        """Current terminal state of the page, if one has been reached."""
        if self.has_application_error():
            return UploadOutcome.APPLICATION_ERROR
        if self.get_size_limit_error() is not None:
            return UploadOutcome.SIZE_LIMIT_ERROR
        if self.is_displayed(self.UPLOADED_FILES):
            return UploadOutcome.UPLOADED
        return None

    def wait_for_upload_outcome(self, timeout: float | None = None) -> UploadOutcome:
        """Block until exactly one terminal state is visible.

        Args:
            timeout: Wait bound in seconds

        Returns:
            The observed UploadOutcome

        Raises:
            NavigationTimeoutError: If no terminal state appears within timeout
        """
        timeout = timeout if timeout is not None else self.timeout
        try:
            outcome = WebDriverWait(self.driver, timeout).until(lambda _: self.detect_outcome())
        except TimeoutException as e:
            raise NavigationTimeoutError(
                f"No upload result within {timeout}s", url=self.url, timeout=timeout
            ) from e

        logger.info(f"Upload outcome: {outcome.value}")
        return outcome
