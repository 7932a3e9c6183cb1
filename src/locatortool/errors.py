from __future__ import annotations


class LocatorToolError(Exception):
    """Base class for errors raised by locatortool."""


class ResolutionError(LocatorToolError):
    """A locator could not be resolved for an element."""


class DetachedElementError(ResolutionError):
    """The element is no longer part of the document it was resolved against."""


class ConfigurationError(LocatorToolError):
    """Invalid generator settings or command line parameters."""
