"""Scenario orchestration - wires one browser session into page objects."""

from pathlib import Path

from herokuapp_e2e.automation.browser import BrowserSession, resolve_browser_type
from herokuapp_e2e.automation.screenshots import capture_screenshot
from herokuapp_e2e.core.config import BrowserType, Settings, TimeoutProfile, get_settings
from herokuapp_e2e.monitoring.logger import get_logger, log_step
from herokuapp_e2e.pages.add_remove_elements_page import AddRemoveElementsPage
from herokuapp_e2e.pages.file_upload_page import FileUploadPage, UploadOutcome
from herokuapp_e2e.pages.home_page import HomePage
from herokuapp_e2e.pages.login_page import LoginPage
from herokuapp_e2e.workers.retry import RetryableAction, RetryPolicy

logger = get_logger(__name__)


class ScenarioContext:
    """State shared by the steps of one test scenario."""

    def __init__(
        self,
        browser_type: BrowserType | str | None = None,
        settings: Settings | None = None,
        session: BrowserSession | None = None,
        name: str = "scenario",
    ) -> None:
        """Initialize scenario context.

        Args:
            browser_type: Browser kind for this scenario
            settings: Suite settings
            session: Pre-started session to reuse when it matches browser_type
            name: Scenario name used in logs and screenshot names
        """
        self.settings = settings or get_settings()
        self.browser_type = resolve_browser_type(browser_type or self.settings.browser_type)
        self.name = name
        self._session: BrowserSession | None = None
        self._owns_session = False

        if session is not None and session.browser_type == self.browser_type:
            self._session = session
        elif session is not None:
            logger.info(
                f"Shared session is {session.browser_type.value}, "
                f"scenario needs {self.browser_type.value}; starting a dedicated one"
            )

    @property
    def session(self) -> BrowserSession:
        return self.ensure_session()

    def ensure_session(self) -> BrowserSession:
        """Return a started session, starting one lazily if needed."""
        if self._session is None:
            self._session = BrowserSession(
                browser_type=self.browser_type,
                headless=self.settings.headless,
                timeouts=TimeoutProfile.standard(self.settings),
            )
            self._owns_session = True

        if not self._session.has_driver:
            self._session.start()
        return self._session

    def step(self, description: str) -> None:
        log_step(self.name, description, browser=self.browser_type.value)

    def login_page(self) -> LoginPage:
        return LoginPage(self.session, self.settings.base_url)

    def add_remove_page(self) -> AddRemoveElementsPage:
        return AddRemoveElementsPage(self.session, self.settings.base_url)

    def file_upload_page(self) -> FileUploadPage:
        return FileUploadPage(
            self.session,
            self.settings.base_url,
            timeout=self.settings.upload_wait_timeout,
            extended_timeouts=TimeoutProfile.extended(self.settings),
        )

    def home_page(self) -> HomePage:
        return HomePage(self.session, self.settings.base_url)

    def login(self, username: str | None = None, password: str | None = None) -> LoginPage:
        """Open the login page and submit credentials (valid account by default).

        Returns:
            LoginPage after submitting the form
        """
        page = self.login_page()
        page.navigate_to()
        page.login(
            username if username is not None else self.settings.valid_username,
            password if password is not None else self.settings.valid_password,
        )
        return page

    def upload_with_retry(
        self,
        page: FileUploadPage,
        file_path: str | Path,
        policy: RetryPolicy | None = None,
    ) -> UploadOutcome:
        """Upload a file and wait for its outcome, recovering from transient failures.

        Args:
            page: Upload page bound to this scenario's session
            file_path: File to upload
            policy: Retry policy (built from this scenario's settings if None)

        Returns:
            Observed UploadOutcome
        """

        def attempt() -> UploadOutcome:
            if not page.is_displayed(page.FILE_INPUT):
                page.navigate_to()
            page.upload_file(file_path)
            return page.wait_for_upload_outcome()

        if policy is None:
            policy = RetryPolicy(
                max_attempts=self.settings.retry_max_attempts,
                initial_delay=self.settings.retry_delay,
            )
        action = RetryableAction(self.session, page, policy=policy, name="file_upload")
        return action.run(attempt, file_path=file_path)

    def report_failure(self, label: str, error: BaseException) -> Path | None:
        """Log a failure with a screenshot of the current browser state.

        Returns:
            Screenshot path if one was saved
        """
        logger.error(f"[{self.name}] {label}: {type(error).__name__}: {error}")
        driver = self._session.driver if self._session and self._session.has_driver else None
        return capture_screenshot(driver, f"{self.name}_{label}.png", self.settings.screenshots_dir)

    def close(self) -> None:
        """Stop the session this scenario started. Shared sessions are left to their owner."""
        if self._session is not None and self._owns_session:
            self._session.stop()
