"""Exceptions raised by pageflow."""


class PageflowError(Exception):
    """Base class for errors raised by pageflow."""


class BuilderNotInitializedError(PageflowError, RuntimeError):
    """Exception raised when a builder is used before its first page exists."""


class FontLoadError(PageflowError):
    """Exception raised when a font cannot be loaded."""
