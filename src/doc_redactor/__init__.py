"""doc-redactor — find and redact emails, phone numbers and SSNs in documents."""

from .redactor import Redactor, RedactorConfig, REDACTION_MARKER
from .editor import DocumentEditor, TextDocument
from .config import create_redactor, load_config, load_from_yaml
from .patterns import is_valid_ssn, find_partial_ssns
from .errors import RedactionError, DocumentUnavailableError, ReplacementError, ConfigError
from .types import (
    RedactionCategory, MatchKind, CandidateMatch, HeaderStyle,
    RedactionPlan, RedactionResult,
)

__all__ = [
    "Redactor", "RedactorConfig", "REDACTION_MARKER",
    "DocumentEditor", "TextDocument",
    "create_redactor", "load_config", "load_from_yaml",
    "is_valid_ssn", "find_partial_ssns",
    "RedactionError", "DocumentUnavailableError", "ReplacementError", "ConfigError",
    "RedactionCategory", "MatchKind", "CandidateMatch", "HeaderStyle",
    "RedactionPlan", "RedactionResult",
]
__version__ = "0.1.0"
