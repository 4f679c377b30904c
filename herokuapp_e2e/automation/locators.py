"""Immutable element locators."""

from dataclasses import dataclass

from selenium.webdriver.common.by import By


@dataclass(frozen=True)
class Locator:
    """Selector strategy plus selector string identifying zero or more elements."""

    by: str
    value: str
    description: str = ""

    def as_tuple(self) -> tuple[str, str]:
        """Get the (By, value) pair Selenium expects.

        Returns:
            Locator tuple
        """
        return (self.by, self.value)

    @classmethod
    def id(cls, element_id: str, description: str = "") -> "Locator":
        """Create ID locator.

        Args:
            element_id: Element ID
            description: Locator description

        Returns:
            Locator instance
        """
        return cls(by=By.ID, value=element_id, description=description)

    @classmethod
    def css(cls, selector: str, description: str = "") -> "Locator":
        """Create CSS locator.

        Args:
            selector: CSS selector
            description: Locator description

        Returns:
            Locator instance
        """
        return cls(by=By.CSS_SELECTOR, value=selector, description=description)

    @classmethod
    def xpath(cls, selector: str, description: str = "") -> "Locator":
        """Create XPath locator.

        Args:
            selector: XPath expression
            description: Locator description

        Returns:
            Locator instance
        """
        return cls(by=By.XPATH, value=selector, description=description)

    def __str__(self) -> str:
        label = f" ({self.description})" if self.description else ""
        return f"{self.by}={self.value}{label}"
