"""Login page object (/login)."""

from selenium.common.exceptions import NoSuchElementException

from herokuapp_e2e.automation.locators import Locator
from herokuapp_e2e.monitoring.logger import get_logger
from herokuapp_e2e.pages.base import BasePage

logger = get_logger(__name__)


class LoginPage(BasePage):
    """Username/password form with a flash message region."""

    URL_PATH = "/login"
    SECURE_PATH = "/secure"

    USERNAME_INPUT = Locator.id("username", description="Username field")
    PASSWORD_INPUT = Locator.id("password", description="Password field")
    LOGIN_BUTTON = Locator.xpath("//button[@type='submit']", description="Login button")
    ERROR_MESSAGE = Locator.css("div#flash.flash.error", description="Error flash")
    SUCCESS_MESSAGE = Locator.css("div#flash.flash.success", description="Success flash")

    @property
    def secure_url(self) -> str:
        return f"{self.base_url}{self.SECURE_PATH}"

    def login(self, username: str, password: str) -> None:
        """Fill in the form and submit it.

        Args:
            username: Account name
            password: Account password
        """
        logger.info(f"Logging in | username={username}")

        username_field = self.find(self.USERNAME_INPUT)
        username_field.clear()
        username_field.send_keys(username)

        password_field = self.find(self.PASSWORD_INPUT)
        password_field.clear()
        password_field.send_keys(password)

        self.find(self.LOGIN_BUTTON).click()

    def is_error_message_displayed(self, expected_message: str) -> bool:
        """Check whether the error flash shows expected_message.

        A missing flash element means no error, so this returns False
        instead of raising.

        Args:
            expected_message: Substring the flash must contain

        Returns:
            True if the flash is displayed and contains the text
        """
        with self.no_implicit_wait():
            try:
                error_element = self.find(self.ERROR_MESSAGE)
            except NoSuchElementException:
                logger.debug("No error flash present")
                return False
            return error_element.is_displayed() and expected_message in error_element.text

    def is_success_message_displayed(self) -> bool:
        return self.is_displayed(self.SUCCESS_MESSAGE)

    def is_logged_in(self) -> bool:
        """True when the browser is on the secure area."""
        return self.current_url == self.secure_url

    def open_secure_area(self) -> None:
        """Go straight to the secure area, relying on the session cookie."""
        logger.info(f"Opening secure area: {self.secure_url}")
        self.session.navigate(self.secure_url)
