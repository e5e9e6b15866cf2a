"""Exceptions raised by the redaction pass.

``Redactor.redact_document`` converts all of these into a failed
``RedactionResult``; they only escape from the lower-level ``plan`` /
``apply`` calls.
"""

from __future__ import annotations


class RedactionError(Exception):
    """Base class for doc-redactor errors."""


class DocumentUnavailableError(RedactionError):
    """The document text snapshot could not be read."""


class ReplacementError(RedactionError):
    """A search/replace step failed part-way through a plan.

    Replacements applied before the failure stay in the document.
    """

    def __init__(self, index: int, total: int, cause: BaseException) -> None:
        self.index = index          # entries before this one were applied
        self.total = total
        self.cause = cause
        super().__init__(f"Replacement {index + 1} of {total} failed: {cause}")


class ConfigError(RedactionError, ValueError):
    """Invalid configuration value."""
