"""Automation module - Selenium browser session, locators, screenshots."""

from .browser import BrowserFactory, BrowserSession, browser_session
from .locators import Locator
from .screenshots import capture_screenshot

__all__ = ["BrowserFactory", "BrowserSession", "browser_session", "Locator", "capture_screenshot"]
