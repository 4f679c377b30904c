"""Page objects for the-internet.herokuapp.com."""

from .add_remove_elements_page import AddRemoveElementsPage
from .base import BasePage
from .file_upload_page import FileUploadPage, UploadOutcome
from .home_page import HomePage
from .login_page import LoginPage

__all__ = [
    "BasePage",
    "HomePage",
    "LoginPage",
    "AddRemoveElementsPage",
    "FileUploadPage",
    "UploadOutcome",
]
