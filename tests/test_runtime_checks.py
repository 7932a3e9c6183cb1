from locatortool.runtime_checks import BROWSER_INSTALL_HINT, describe_launch_error, is_missing_browser_error


def test_missing_browser_error_detection() -> None:
    exc = RuntimeError("BrowserType.launch: Executable doesn't exist at /ms-playwright/chromium/chrome")
    assert is_missing_browser_error(exc) is True
    assert describe_launch_error(exc) == BROWSER_INSTALL_HINT


def test_other_launch_errors_are_passed_through() -> None:
    exc = RuntimeError("net::ERR_NAME_NOT_RESOLVED")
    assert is_missing_browser_error(exc) is False
    assert describe_launch_error(exc) == "Could not open browser page: net::ERR_NAME_NOT_RESOLVED"
