"""Redactor — the main API.  Plan against a snapshot, then apply to an editor.

Usage:
    from doc_redactor import Redactor, TextDocument

    doc = TextDocument("Reach me at jane@acme.com, SSN 123-45-6789")
    redactor = Redactor()            # reusable, holds no per-document state

    result = redactor.redact_document(doc)
    print(doc.text)                  # "Reach me at [REDACTED], SSN [REDACTED]"
    print(result.total_redacted)     # 2

The plan is built by replaying the scan steps in order against a scratch
copy of the text, so every step sees what the earlier steps left behind.
Emails win over phones, phones over full SSNs, and so on down the table.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field

from .editor import DocumentEditor, TextDocument
from .errors import DocumentUnavailableError, ReplacementError
from .patterns import SCAN_STEPS, unique
from .types import (
    CandidateMatch,
    HeaderStyle,
    MatchKind,
    RedactionCategory,
    RedactionPlan,
    RedactionResult,
)

logger = logging.getLogger(__name__)

REDACTION_MARKER = "[REDACTED]"
CONFIDENTIAL_HEADER = "CONFIDENTIAL DOCUMENT"


@dataclass
class RedactorConfig:
    """Configuration for the Redactor."""
    marker: str = REDACTION_MARKER
    header_text: str | None = CONFIDENTIAL_HEADER   # None = no header
    header_style: HeaderStyle = field(default_factory=HeaderStyle)
    # Turn tracking off while redacting and back on afterwards
    track_changes: bool = True
    # Categories to leave alone, e.g. {"PHONE"}
    skip_types: set[str] = field(default_factory=set)
    # Allow-list: literals that should NEVER be redacted
    allow_list: set[str] = field(default_factory=set)


class Redactor:
    """Email, phone and SSN redactor.

    ``plan`` is pure.  ``apply`` and ``redact_document`` drive an editor.
    """

    def __init__(self, config: RedactorConfig | None = None) -> None:
        self.config = config or RedactorConfig()

    def plan(self, text: str) -> RedactionPlan:
        """Scan text and build the ordered redaction plan with its counts."""
        scratch = TextDocument(text, tracking_supported=False)
        plan = RedactionPlan()

        for step in SCAN_STEPS:
            if step.kind.category.value in self.config.skip_types:
                continue

            hits = step.scan(scratch.text, self.config.allow_list)
            literals = unique(hits)
            count = len(literals) if step.count_unique else len(hits)
            _tally(plan, step.kind.category, count)
            if step.kind is MatchKind.SSN_PARTIAL:
                plan.partial_ssns = literals

            for literal in literals:
                entry = CandidateMatch(
                    kind=step.kind,
                    text=literal,
                    match_case=step.match_case,
                    whole_word=step.whole_word,
                )
                plan.entries.append(entry)
                _replace(scratch, entry, self.config.marker)

            logger.debug("%s: %d hit(s), %d unique", step.kind.value, count, len(literals))

        return plan

    def apply(
        self,
        plan: RedactionPlan,
        editor: DocumentEditor,
        result: RedactionResult | None = None,
    ) -> RedactionResult:
        """Execute a plan against an editor.

        Counts are copied into ``result`` before any edit, so a caller that
        passes its own result keeps them if a replacement raises.  Raises
        ``ReplacementError``; edits already made are not rolled back, and
        tracking is restored before the error propagates.
        """
        result = result if result is not None else RedactionResult()
        result.emails_redacted = plan.emails
        result.phones_redacted = plan.phones
        result.ssns_redacted = plan.ssns

        tracking = self.config.track_changes and editor.is_tracking_supported()
        if tracking:
            # Redactions should land as plain edits, not revisions
            editor.set_tracking_mode(False)

        try:
            for i, entry in enumerate(plan.entries):
                try:
                    replaced = _replace(editor, entry, self.config.marker)
                except Exception as exc:
                    raise ReplacementError(i, len(plan.entries), exc) from exc
                logger.debug("%s entry %d: %d occurrence(s) replaced", entry.kind.value, i, replaced)

            if self.config.header_text:
                editor.insert_header(self.config.header_text, self.config.header_style)
                result.header_added = True
        finally:
            # Tracking goes back on even when a replacement failed
            if tracking:
                editor.set_tracking_mode(True)

        result.tracking_enabled = tracking

        result.total_redacted = (
            result.emails_redacted + result.phones_redacted + result.ssns_redacted
        )
        result.success = True
        return result

    def redact_document(self, editor: DocumentEditor) -> RedactionResult:
        """Read, plan and redact a document.  Never raises.

        Any failure comes back as ``success=False`` with ``error`` set and
        whatever counts were tallied before it happened.
        """
        result = RedactionResult()
        try:
            try:
                text = editor.get_text()
            except Exception as exc:
                raise DocumentUnavailableError(f"Could not read document text: {exc}") from exc

            plan = self.plan(text)
            self.apply(plan, editor, result)
        except Exception as exc:
            logger.exception("Redaction pass failed")
            result.success = False
            result.error = str(exc) or "An unknown error occurred"
            return result

        logger.info(
            "Redacted %d item(s): %d email(s), %d phone(s), %d SSN(s)",
            result.total_redacted,
            result.emails_redacted,
            result.phones_redacted,
            result.ssns_redacted,
        )
        return result

    def redact_text(self, text: str) -> tuple[str, RedactionResult]:
        """Redact a plain string.  Returns the redacted body and the result."""
        doc = TextDocument(text)
        result = self.redact_document(doc)
        return doc.text, result


def _replace(editor: DocumentEditor, entry: CandidateMatch, marker: str) -> int:
    return editor.search_and_replace(
        entry.text,
        match_case=entry.match_case,
        match_whole_word=entry.whole_word,
        replacement=marker,
    )


def _tally(plan: RedactionPlan, category: RedactionCategory, count: int) -> None:
    if category is RedactionCategory.EMAIL:
        plan.emails += count
    elif category is RedactionCategory.PHONE:
        plan.phones += count
    else:
        plan.ssns += count
