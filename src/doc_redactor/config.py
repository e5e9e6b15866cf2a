"""YAML/dict config loader for doc-redactor.

Supports loading from a YAML file or a plain dict (for embedding in a
host application's own config).

Example YAML:

    doc_redactor:
      enabled: true
      marker: "[REDACTED]"
      track_changes: true
      header:
        enabled: true
        text: CONFIDENTIAL DOCUMENT
        bold: true
        size: 14
        color: "#C00000"
        alignment: centered
      skip_types:
        - PHONE
      allow_list:
        - support@example.com
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Any

from .editor import DocumentEditor
from .errors import ConfigError
from .redactor import CONFIDENTIAL_HEADER, REDACTION_MARKER, Redactor, RedactorConfig
from .types import HeaderStyle, RedactionCategory, RedactionPlan, RedactionResult

logger = logging.getLogger(__name__)

_ALIGNMENTS = {"left", "centered", "right", "justified"}


class _NoopRedactor:
    """Pass-through redactor when redaction is disabled."""

    def __init__(self) -> None:
        self.config = RedactorConfig(header_text=None, track_changes=False)

    def plan(self, text: str) -> RedactionPlan:
        return RedactionPlan()

    def apply(
        self,
        plan: RedactionPlan,
        editor: DocumentEditor,
        result: RedactionResult | None = None,
    ) -> RedactionResult:
        return RedactionResult(success=True)

    def redact_document(self, editor: DocumentEditor) -> RedactionResult:
        return RedactionResult(success=True)

    def redact_text(self, text: str) -> tuple[str, RedactionResult]:
        return text, RedactionResult(success=True)


def load_config(data: dict[str, Any]) -> dict[str, Any]:
    """Normalize a config dict (from YAML or inline)."""
    # Support nested under "doc_redactor" key or flat
    if "doc_redactor" in data:
        data = data["doc_redactor"] or {}
    if not isinstance(data, dict):
        raise ConfigError("doc_redactor config must be a mapping")

    header = data.get("header") or {}
    if not isinstance(header, dict):
        raise ConfigError("header must be a mapping")
    skip_types = {str(t).upper() for t in data.get("skip_types") or []}
    unknown = skip_types - {c.value for c in RedactionCategory}
    if unknown:
        raise ConfigError(f"Unknown skip_types: {', '.join(sorted(unknown))}")

    alignment = header.get("alignment", "centered")
    if alignment not in _ALIGNMENTS:
        raise ConfigError(f"Unknown header alignment: {alignment!r}")

    try:
        size = int(header.get("size", 14))
    except (TypeError, ValueError):
        raise ConfigError(f"header size must be an integer, got {header.get('size')!r}") from None

    return {
        "enabled": data.get("enabled", True),
        "marker": data.get("marker", REDACTION_MARKER),
        "track_changes": data.get("track_changes", True),
        "header_enabled": header.get("enabled", True),
        "header_text": header.get("text", CONFIDENTIAL_HEADER),
        "header_style": HeaderStyle(
            bold=header.get("bold", True),
            size=size,
            color=header.get("color", "#C00000"),
            alignment=alignment,
        ),
        "skip_types": skip_types,
        "allow_list": set(data.get("allow_list") or []),
    }


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file."""
    import yaml
    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be a mapping, got {type(data).__name__}")
    return load_config(data)


def create_redactor(config: dict[str, Any] | None = None) -> Redactor:
    """Create a fully configured redactor from a config dict."""
    config = config or {}
    cfg = load_config(config) if "header_style" not in config else config

    if not cfg["enabled"]:
        logger.info("Redaction disabled by config")
        return _NoopRedactor()

    if not cfg["marker"]:
        raise ConfigError("marker must be a non-empty string")

    return Redactor(RedactorConfig(
        marker=cfg["marker"],
        header_text=cfg["header_text"] if cfg["header_enabled"] else None,
        header_style=cfg["header_style"],
        track_changes=cfg["track_changes"],
        skip_types=cfg["skip_types"],
        allow_list=cfg["allow_list"],
    ))
