"""Tests for scenario orchestration."""

from unittest.mock import MagicMock, patch

import pytest
from selenium.common.exceptions import TimeoutException

from herokuapp_e2e.core.config import BrowserType, Settings, TimeoutProfile
from herokuapp_e2e.core.exceptions import ActionExhaustedError, UnsupportedBrowserError
from herokuapp_e2e.pages import FileUploadPage, LoginPage, UploadOutcome
from herokuapp_e2e.scenarios import ScenarioContext
from herokuapp_e2e.workers.retry import RetryPolicy

FACTORY = "herokuapp_e2e.automation.browser.BrowserFactory.create"


@pytest.fixture
def driver():
    driver = MagicMock(name="driver")
    driver.session_id = "scenario"
    return driver


class TestScenarioSession:
    """Tests for lazy session handling."""

    def test_session_started_lazily(self, driver):
        ctx = ScenarioContext("firefox")

        with patch(FACTORY, return_value=driver) as create:
            assert create.call_count == 0
            session = ctx.ensure_session()

        assert session.driver is driver
        assert session.browser_type == BrowserType.FIREFOX
        create.assert_called_once()

    def test_reuses_matching_shared_session(self, fake_session):
        ctx = ScenarioContext("chrome", session=fake_session)

        with patch(FACTORY) as create:
            assert ctx.session is fake_session

        create.assert_not_called()

    def test_other_kind_gets_dedicated_session(self, fake_session, driver):
        ctx = ScenarioContext("edge", session=fake_session)

        with patch(FACTORY, return_value=driver):
            session = ctx.session

        assert session is not fake_session
        assert session.browser_type == BrowserType.EDGE

    def test_close_stops_owned_session(self, driver):
        ctx = ScenarioContext("chrome")
        with patch(FACTORY, return_value=driver):
            ctx.ensure_session()

        ctx.close()
        ctx.close()

        driver.quit.assert_called_once()

    def test_close_leaves_shared_session(self, fake_session, fake_driver):
        ctx = ScenarioContext("chrome", session=fake_session)

        ctx.close()

        fake_driver.quit.assert_not_called()
        assert fake_session.has_driver

    def test_close_without_session(self):
        ScenarioContext("chrome").close()

    def test_unsupported_kind(self):
        with pytest.raises(UnsupportedBrowserError):
            ScenarioContext("netscape")


class TestScenarioPages:
    """Tests for page wiring and flows."""

    def test_pages_share_session(self, fake_session):
        ctx = ScenarioContext("chrome", session=fake_session)

        pages = [ctx.login_page(), ctx.add_remove_page(), ctx.file_upload_page(), ctx.home_page()]

        assert all(p.session is fake_session for p in pages)
        assert ctx.file_upload_page().timeout == ctx.settings.upload_wait_timeout

    def test_login_uses_configured_account(self, fake_session, settings):
        ctx = ScenarioContext("chrome", session=fake_session)

        with patch.object(LoginPage, "navigate_to") as navigate, \
                patch.object(LoginPage, "login") as login:
            page = ctx.login()

        assert isinstance(page, LoginPage)
        navigate.assert_called_once()
        login.assert_called_once_with(settings.valid_username, settings.valid_password)

    def test_login_with_explicit_credentials(self, fake_session):
        ctx = ScenarioContext("chrome", session=fake_session)

        with patch.object(LoginPage, "navigate_to"), patch.object(LoginPage, "login") as login:
            ctx.login("TomSmith", "SuperSecretPassword!")

        login.assert_called_once_with("TomSmith", "SuperSecretPassword!")

    def test_upload_with_retry(self, fake_session):
        """Test upload runs through RetryableAction and returns the outcome."""
        ctx = ScenarioContext("chrome", session=fake_session)
        page = MagicMock(spec=FileUploadPage)
        page.FILE_INPUT = FileUploadPage.FILE_INPUT
        page.url = "https://the-internet.herokuapp.com/upload"
        page.is_displayed.return_value = True
        page.has_application_error.return_value = False
        page.wait_for_upload_outcome.return_value = UploadOutcome.UPLOADED

        outcome = ctx.upload_with_retry(page, "/tmp/2mb.txt", policy=RetryPolicy(max_attempts=2, initial_delay=0))

        assert outcome == UploadOutcome.UPLOADED
        page.navigate_to.assert_not_called()
        page.upload_file.assert_called_once_with("/tmp/2mb.txt")

    def test_upload_renavigates_when_input_missing(self, fake_session):
        ctx = ScenarioContext("chrome", session=fake_session)
        page = MagicMock(spec=FileUploadPage)
        page.FILE_INPUT = FileUploadPage.FILE_INPUT
        page.url = "https://the-internet.herokuapp.com/upload"
        page.is_displayed.return_value = False
        page.has_application_error.return_value = False
        page.wait_for_upload_outcome.return_value = UploadOutcome.SIZE_LIMIT_ERROR

        outcome = ctx.upload_with_retry(page, "/tmp/big.zip", policy=RetryPolicy(max_attempts=1))

        assert outcome == UploadOutcome.SIZE_LIMIT_ERROR
        page.navigate_to.assert_called_once()

    def test_report_failure_takes_screenshot(self, fake_session, fake_driver, tmp_path, settings):
        ctx = ScenarioContext("chrome", session=fake_session, name="login_success")

        path = ctx.report_failure("assertion", AssertionError("wrong url"))

        assert path is not None
        assert path.name.startswith("login_success_assertion_")
        fake_driver.save_screenshot.assert_called_once()


@pytest.fixture
def custom_settings():
    return Settings(
        _env_file=None,
        retry_max_attempts=5,
        retry_delay=0,
        page_load_timeout=20,
        implicit_wait=1,
        script_timeout=5,
        extended_page_load_timeout=40,
        extended_implicit_wait=2,
        extended_script_timeout=10,
    )


class TestScenarioSettings:
    """Tests that a scenario runs with the settings it was given."""

    def test_session_uses_standard_profile_from_settings(self, custom_settings, driver):
        ctx = ScenarioContext("chrome", settings=custom_settings)

        with patch(FACTORY, return_value=driver) as create:
            session = ctx.ensure_session()

        expected = TimeoutProfile(page_load=20, implicit_wait=1, script=5)
        assert session.timeouts == expected
        assert create.call_args.kwargs["timeouts"] == expected

    def test_upload_page_uses_extended_profile_from_settings(self, custom_settings, fake_session):
        ctx = ScenarioContext("chrome", settings=custom_settings, session=fake_session)

        page = ctx.file_upload_page()

        assert page.extended_timeouts == TimeoutProfile(page_load=40, implicit_wait=2, script=10)

    def test_retry_budget_from_settings(self, custom_settings, fake_session):
        """Test the default retry policy follows the scenario's settings."""
        ctx = ScenarioContext("chrome", settings=custom_settings, session=fake_session)
        page = MagicMock(spec=FileUploadPage)
        page.FILE_INPUT = FileUploadPage.FILE_INPUT
        page.url = "https://the-internet.herokuapp.com/upload"
        page.is_displayed.return_value = True
        page.has_application_error.return_value = False
        page.wait_for_upload_outcome.side_effect = TimeoutException("no result")

        with patch("herokuapp_e2e.workers.retry.capture_screenshot"):
            with pytest.raises(ActionExhaustedError) as exc_info:
                ctx.upload_with_retry(page, "/tmp/2mb.txt")

        assert exc_info.value.attempts == 5
        assert page.upload_file.call_count == 5
