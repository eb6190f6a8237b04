"""
Error types raised by the translation tool.

Every error the CLI reports derives from JsonTranslateError so that main.py
can turn it into a one-line message and a non-zero exit status.
"""

from __future__ import annotations


class JsonTranslateError(Exception):
    """Base class for all expected, reportable failures."""


class ConfigurationError(JsonTranslateError):
    """A required setting is missing or invalid."""


class InputError(JsonTranslateError):
    """The input file is missing, unreadable or not valid JSON."""


class CacheLoadError(JsonTranslateError):
    """The cache file exists but cannot be used. Recovered by starting empty."""


class OutputWriteError(JsonTranslateError):
    """The translated document could not be written."""


class TranslationError(JsonTranslateError):
    """
    The translation backend failed for a given text.

    Attributes:
        text:   the source string that could not be translated, when known.
        status: the HTTP status returned by the backend, when there was one.
    """

    def __init__(self, message: str, text: str | None = None, status: int | None = None):
        super().__init__(message)
        self.message = message
        self.text = text
        self.status = status

    def __str__(self) -> str:
        if self.text is None:
            return self.message
        return f"{self.message} (text: {_preview(self.text)!r})"


def _preview(text: str, limit: int = 80) -> str:
    return text if len(text) <= limit else text[: limit - 1] + "…"
