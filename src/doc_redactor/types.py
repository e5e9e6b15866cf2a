"""Core types."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class RedactionCategory(str, Enum):
    """Counter a match increments."""
    EMAIL = "EMAIL"
    PHONE = "PHONE"
    SSN = "SSN"


class MatchKind(str, Enum):
    """Which pattern produced a candidate.  Several kinds share the SSN counter."""
    EMAIL = "EMAIL"
    PHONE = "PHONE"
    SSN_FULL = "SSN_FULL"
    SSN_MASKED = "SSN_MASKED"
    SSN_PARTIAL = "SSN_PARTIAL"

    @property
    def category(self) -> RedactionCategory:
        if self is MatchKind.EMAIL:
            return RedactionCategory.EMAIL
        if self is MatchKind.PHONE:
            return RedactionCategory.PHONE
        return RedactionCategory.SSN


@dataclass(frozen=True, slots=True)
class CandidateMatch:
    """A unique literal to search for and replace in the document."""
    kind: MatchKind
    text: str
    match_case: bool = False
    whole_word: bool = False

    @property
    def category(self) -> RedactionCategory:
        return self.kind.category


@dataclass(frozen=True, slots=True)
class HeaderStyle:
    """Formatting for the confidentiality header paragraph."""
    bold: bool = True
    size: int = 14
    color: str = "#C00000"
    alignment: str = "centered"


@dataclass(slots=True)
class RedactionPlan:
    """Ordered search/replace entries plus the per-category tallies."""
    entries: list[CandidateMatch] = field(default_factory=list)
    emails: int = 0
    phones: int = 0
    ssns: int = 0                               # full + masked + partial
    partial_ssns: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.emails + self.phones + self.ssns

    def to_dict(self) -> dict[str, Any]:
        return {
            "entries": [
                {
                    "category": e.category.value,
                    "kind": e.kind.value,
                    "text": e.text,
                    "matchCase": e.match_case,
                    "matchWholeWord": e.whole_word,
                }
                for e in self.entries
            ],
            "emails": self.emails,
            "phones": self.phones,
            "ssns": self.ssns,
            "partialSsns": list(self.partial_ssns),
            "total": self.total,
        }


@dataclass(slots=True)
class RedactionResult:
    """Outcome of one redaction pass against a document."""
    success: bool = False
    emails_redacted: int = 0
    phones_redacted: int = 0
    ssns_redacted: int = 0
    total_redacted: int = 0
    tracking_enabled: bool = False
    header_added: bool = False
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """camelCase output contract, as consumed by host UIs."""
        out: dict[str, Any] = {
            "success": self.success,
            "emailsRedacted": self.emails_redacted,
            "phonesRedacted": self.phones_redacted,
            "ssnsRedacted": self.ssns_redacted,
            "totalRedacted": self.total_redacted,
            "trackingEnabled": self.tracking_enabled,
            "headerAdded": self.header_added,
        }
        if self.error is not None:
            out["error"] = self.error
        return out
