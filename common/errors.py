"""
Error types shared by the pipelines
Library code raises these; only the CLI entry points catch them
"""

from typing import Optional


class MenuHistoryError(Exception):
    """Base class for every failure that aborts a pipeline run"""


class ExtractionError(MenuHistoryError):
    """The embedded menu payload could not be located or decoded"""


class SchemaError(ExtractionError):
    """
    The menu payload was decoded but has the wrong shape

    Attributes:
        path: Dotted path to the offending value (e.g. "g1.denMap.2026-02-09")
    """

    def __init__(self, message: str, path: str = ''):
        self.path = path
        if path:
            message = f"{message} (at {path})"
        super().__init__(message)


class FetchError(MenuHistoryError):
    """The source page could not be retrieved"""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(f"{message}: {url}")


class StorageError(MenuHistoryError):
    """The persisted dataset could not be read or written"""
