from __future__ import annotations

_MISSING_BROWSER_ERROR_HINTS = (
    "executable doesn't exist",
    "executable does not exist",
    "download new browsers",
    "playwright install",
    "could not find browser",
    "failed to launch chromium because executable",
)

BROWSER_INSTALL_HINT = "Chromium for Playwright is missing. Run `python -m playwright install chromium`."


def is_missing_browser_error(exc: Exception) -> bool:
    message = str(exc).lower()
    return any(hint in message for hint in _MISSING_BROWSER_ERROR_HINTS)


def describe_launch_error(exc: Exception) -> str:
    if is_missing_browser_error(exc):
        return BROWSER_INSTALL_HINT
    return f"Could not open browser page: {exc}"
