"""Add/Remove Elements page object (/add_remove_elements/)."""

from herokuapp_e2e.automation.locators import Locator
from herokuapp_e2e.monitoring.logger import get_logger
from herokuapp_e2e.pages.base import BasePage

logger = get_logger(__name__)


class AddRemoveElementsPage(BasePage):
    """An "Add Element" button that appends Delete buttons."""

    URL_PATH = "/add_remove_elements/"

    ADD_BUTTON = Locator.xpath("//button[text()='Add Element']", description="Add Element button")
    DELETE_BUTTONS = Locator.xpath("//button[text()='Delete']", description="Delete buttons")

    def add_element(self) -> None:
        self.find(self.ADD_BUTTON).click()

    def add_elements(self, count: int) -> None:
        """Click "Add Element" count times."""
        for _ in range(count):
            self.add_element()
        logger.debug(f"Added {count} element(s)")

    def get_delete_button_count(self) -> int:
        with self.no_implicit_wait():
            return len(self.find_all(self.DELETE_BUTTONS))

    def remove_element(self, index: int = -1) -> None:
        """Click one Delete button.

        Does nothing when there are no Delete buttons.

        Args:
            index: Position of the button; -1 removes the most recently added
        """
        with self.no_implicit_wait():
            buttons = self.find_all(self.DELETE_BUTTONS)

        if not buttons:
            logger.debug("No Delete buttons to remove")
            return

        if not -len(buttons) <= index < len(buttons):
            logger.warning(f"Delete button index {index} out of range (count={len(buttons)})")
            return

        buttons[index].click()
