"""Pattern matcher — regex table and per-kind validators.

Each scan step is one row of ``SCAN_STEPS``: the patterns to run, which
group holds the literal, how to validate it, and how the document editor
should search for it.  Steps run in table order; the redactor replays
them against the progressively redacted text.
"""

from __future__ import annotations
import re
from dataclasses import dataclass, replace
from typing import AbstractSet, Callable, Iterable

from .types import MatchKind

_FLAGS = re.IGNORECASE | re.ASCII

EMAIL = re.compile(
    r"\b[A-Za-z0-9._%+\-]+@[A-Za-z0-9.\-]+\.[A-Za-z]{2,}\b",
    _FLAGS,
)

# (123) 456-7890, 123.456.7890, +1 123 456 7890, +11234567890, 1234567890 ...
PHONE = re.compile(
    r"\+?1?[\-.\s]?\(?\d{3}\)?[\-.\s]?\d{3}[\-.\s]?\d{4}\b",
    _FLAGS,
)

# 123-45-6789, 123 45 6789, 123.45.6789, 123456789
SSN_FULL = re.compile(
    r"\b\d{3}[\-.\s]?\d{2}[\-.\s]?\d{4}\b",
    _FLAGS,
)

# xxxx1234, XXX-XX-1234, ***-**-1234, *xx-xx-1234
SSN_MASKED = re.compile(
    r"(?<![\w*])[x*]{3,4}[\-.\s]?[x*]{0,2}[\-.\s]?\d{4}\b",
    _FLAGS,
)

# "last four digits of my social are 1234"
SSN_LAST_DIGITS = re.compile(
    r"last\s+(?:four|4)\s+digits?(?:\s+\w+){0,10}\s+(?:are|is|:)?\s*(\d{4})\b",
    _FLAGS,
)

# "SSN ending in 1234", "ends in 1234"
SSN_ENDING_IN = re.compile(
    r"(?:(?:ssn|social\s*security(?:\s*number)?)\s+)?(?:ending|ends)\s+in\s+(\d{4})\b",
    _FLAGS,
)

# "SSN: 1234", "Social Security Number 123-45-6789"
SSN_LABELED = re.compile(
    r"(?:ssn|social\s*security(?:\s*number)?)[:\s]+"
    r"(?P<prefix>\d{3}[\-.\s]?\d{2}[\-.\s]?)?(\d{4})\b",
    _FLAGS,
)

PARTIAL_SSN_PATTERNS: tuple[re.Pattern, ...] = (SSN_LAST_DIGITS, SSN_ENDING_IN, SSN_LABELED)

_NON_DIGIT = re.compile(r"\D")


def digits_only(text: str) -> str:
    return _NON_DIGIT.sub("", text)


def is_valid_ssn(ssn: str) -> bool:
    """Check a full SSN against issuance rules.

    Area (first 3 digits) cannot be 000, 666 or 900-999, group (next 2)
    cannot be 00 and serial (last 4) cannot be 0000.  Separators are
    ignored; anything that is not exactly 9 digits is rejected.
    """
    digits = digits_only(ssn)
    if len(digits) != 9:
        return False

    area = int(digits[:3])
    group = int(digits[3:5])
    serial = int(digits[5:])

    if area == 0 or area == 666 or area >= 900:
        return False
    if group == 0:
        return False
    if serial == 0:
        return False
    return True


def is_valid_phone(phone: str) -> bool:
    """10 digits domestic, or 11 with the leading country code."""
    return 10 <= len(digits_only(phone)) <= 11


def _accept_partial(m: re.Match) -> bool:
    # A labeled match that carried area/group digits is really a full SSN.
    prefix = m.groupdict().get("prefix")
    if prefix:
        return is_valid_ssn(prefix + m.group(m.re.groups))
    return True


def _allowed(m: re.Match, literal: str, allow_list: AbstractSet[str]) -> bool:
    forms = {literal}
    # An allow-listed full SSN also covers its last four digits.
    prefix = m.groupdict().get("prefix")
    if prefix:
        full = prefix + literal
        forms.update((full, digits_only(full)))
    return not forms.isdisjoint(allow_list)


@dataclass(frozen=True, slots=True)
class ScanStep:
    """One row of the scan table."""
    kind: MatchKind
    patterns: tuple[re.Pattern, ...]
    validator: Callable[[re.Match], bool] | None = None
    match_case: bool = False
    whole_word: bool = False
    count_unique: bool = False      # count distinct literals instead of raw hits
    strip: bool = False

    def scan(self, text: str, allow_list: AbstractSet[str] = frozenset()) -> list[str]:
        """Accepted literals in document order, duplicates included."""
        found: list[str] = []
        for pattern in self.patterns:
            for m in pattern.finditer(text):
                if self.validator is not None and not self.validator(m):
                    continue
                # Context patterns capture the sensitive part in their last group.
                literal = m.group(pattern.groups) if pattern.groups else m.group()
                if self.strip:
                    literal = literal.strip()
                if allow_list and _allowed(m, literal, allow_list):
                    continue
                found.append(literal)
        return found


SCAN_STEPS: tuple[ScanStep, ...] = (
    ScanStep(MatchKind.EMAIL, (EMAIL,)),
    ScanStep(
        MatchKind.PHONE, (PHONE,),
        validator=lambda m: is_valid_phone(m.group()),
        match_case=True,
        strip=True,
    ),
    ScanStep(
        MatchKind.SSN_FULL, (SSN_FULL,),
        validator=lambda m: is_valid_ssn(m.group()),
        match_case=True,
    ),
    ScanStep(MatchKind.SSN_MASKED, (SSN_MASKED,)),
    ScanStep(
        MatchKind.SSN_PARTIAL, PARTIAL_SSN_PATTERNS,
        validator=_accept_partial,
        match_case=True,
        whole_word=True,
        count_unique=True,
    ),
)


def unique(literals: Iterable[str]) -> list[str]:
    """De-duplicate, keeping first-seen order."""
    return list(dict.fromkeys(literals))


def find_emails(text: str) -> list[str]:
    return SCAN_STEPS[0].scan(text)


def find_phones(text: str) -> list[str]:
    """Phone candidates with 10 or 11 digits."""
    return SCAN_STEPS[1].scan(text)


def find_full_ssns(text: str) -> list[str]:
    """Full SSN candidates passing ``is_valid_ssn``."""
    return SCAN_STEPS[2].scan(text)


def find_masked_ssns(text: str) -> list[str]:
    return SCAN_STEPS[3].scan(text)


def find_partial_ssns(
    text: str,
    patterns: Iterable[re.Pattern] = PARTIAL_SSN_PATTERNS,
) -> list[str]:
    """Union of the 4-digit values captured by the partial SSN context patterns.

    Each value appears once regardless of how many phrasings matched it.
    """
    step = replace(SCAN_STEPS[4], patterns=tuple(patterns))
    return unique(step.scan(text))
