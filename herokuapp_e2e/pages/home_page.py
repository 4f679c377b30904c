"""Home page object (/)."""

from herokuapp_e2e.pages.base import BasePage


class HomePage(BasePage):
    """Landing page listing the available examples."""

    URL_PATH = "/"
    EXPECTED_TITLE = "The Internet"

    def get_title(self) -> str:
        return self.session.title
