"""Cross-page flows and cross-browser smoke checks."""

import pytest

from herokuapp_e2e.pages import HomePage, UploadOutcome

pytestmark = pytest.mark.e2e


def test_home_page_title(scenario):
    page = scenario.home_page()
    page.navigate_to()

    assert page.get_title() == HomePage.EXPECTED_TITLE


def test_login_then_add_remove(scenario, settings):
    """Test login survives a detour through the add/remove page."""
    scenario.step("Log in")
    scenario.login()
    assert scenario.session.current_url == settings.secure_url

    scenario.step("Add and remove elements")
    page = scenario.add_remove_page()
    page.navigate_to()
    page.add_elements(5)
    assert page.get_delete_button_count() == 5

    for remaining in range(4, -1, -1):
        page.remove_element()
        assert page.get_delete_button_count() == remaining

    scenario.step("Return to the secure area")
    scenario.session.navigate(settings.secure_url)
    assert scenario.session.current_url == settings.secure_url


@pytest.mark.slow
def test_login_then_upload(scenario, settings, upload_files):
    valid = upload_files["valid"]

    scenario.login()
    assert scenario.session.current_url == settings.secure_url

    page = scenario.file_upload_page()
    page.navigate_to()
    outcome = scenario.upload_with_retry(page, valid.path)

    assert outcome == UploadOutcome.UPLOADED
    assert page.get_uploaded_file_name() == valid.name
