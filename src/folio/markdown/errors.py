"""Markdown layer error hierarchy."""

from folio.errors import BuildError


class MarkdownError(BuildError):
    """Base for all folio.markdown errors."""


class MarkdownNotInstalledError(MarkdownError):
    """Raised when patitas is not installed."""
