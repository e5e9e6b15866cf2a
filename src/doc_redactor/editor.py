"""Document editor boundary.

The redactor never touches a live document directly; it drives anything
that satisfies ``DocumentEditor``.  ``TextDocument`` is the in-memory
implementation used for headless runs, the CLI and the HTTP sidecar, and
for simulating a plan before it is applied to a real editor.
"""

from __future__ import annotations
import re
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from .types import HeaderStyle


@runtime_checkable
class DocumentEditor(Protocol):
    """What the redactor needs from a host document.

    Callers must not run two passes against the same document at once,
    and each ``search_and_replace`` must be committed before it returns.
    """

    def get_text(self) -> str: ...

    def search_and_replace(
        self,
        literal: str,
        *,
        match_case: bool,
        match_whole_word: bool,
        replacement: str,
    ) -> int: ...

    def set_tracking_mode(self, enabled: bool) -> None: ...

    def is_tracking_supported(self) -> bool: ...

    def insert_header(self, text: str, style: HeaderStyle) -> None: ...


@dataclass(slots=True)
class HeaderParagraph:
    text: str
    style: HeaderStyle


@dataclass
class TextDocument:
    """A plain string posing as an editable document."""

    text: str = ""
    tracking_supported: bool = True
    tracking: bool = False
    headers: list[HeaderParagraph] = field(default_factory=list)

    def get_text(self) -> str:
        return self.text

    def search_and_replace(
        self,
        literal: str,
        *,
        match_case: bool = False,
        match_whole_word: bool = False,
        replacement: str,
    ) -> int:
        """Replace every occurrence of ``literal``.  Returns the number replaced."""
        if not literal:
            return 0
        pattern = re.escape(literal)
        if match_whole_word:
            pattern = rf"(?<!\w){pattern}(?!\w)"
        flags = re.ASCII if match_case else re.ASCII | re.IGNORECASE
        # Marker is inserted literally, never expanded as a template.
        self.text, count = re.subn(pattern, lambda _: replacement, self.text, flags=flags)
        return count

    def set_tracking_mode(self, enabled: bool) -> None:
        if not self.tracking_supported:
            raise RuntimeError("Track changes is not supported by this document")
        self.tracking = enabled

    def is_tracking_supported(self) -> bool:
        return self.tracking_supported

    def insert_header(self, text: str, style: HeaderStyle) -> None:
        """Insert a header paragraph at the start of the header."""
        self.headers.insert(0, HeaderParagraph(text, style))

    def render(self) -> str:
        """Headers followed by the body, as plain text."""
        if not self.headers:
            return self.text
        head = "\n".join(h.text for h in self.headers)
        return f"{head}\n\n{self.text}"
