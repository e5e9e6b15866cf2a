"""Tests for config loading and the redactor factory."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest

from doc_redactor import ConfigError, HeaderStyle, Redactor, TextDocument
from doc_redactor.config import create_redactor, load_config, load_from_yaml


def test_defaults():
    cfg = load_config({})
    assert cfg["enabled"] is True
    assert cfg["marker"] == "[REDACTED]"
    assert cfg["track_changes"] is True
    assert cfg["header_enabled"] is True
    assert cfg["header_text"] == "CONFIDENTIAL DOCUMENT"
    assert cfg["header_style"] == HeaderStyle()
    assert cfg["skip_types"] == set()
    assert cfg["allow_list"] == set()


def test_nested_key():
    cfg = load_config({"doc_redactor": {"marker": "***", "skip_types": ["phone"]}})
    assert cfg["marker"] == "***"
    assert cfg["skip_types"] == {"PHONE"}


def test_unknown_skip_type():
    with pytest.raises(ConfigError):
        load_config({"skip_types": ["NAME"]})


def test_unknown_alignment():
    with pytest.raises(ConfigError):
        load_config({"header": {"alignment": "diagonal"}})


def test_load_from_yaml(tmp_path):
    path = tmp_path / "redactor.yaml"
    path.write_text(
        "doc_redactor:\n"
        "  marker: '[X]'\n"
        "  track_changes: false\n"
        "  header:\n"
        "    text: INTERNAL\n"
        "    size: 12\n"
        "    color: '#000000'\n"
        "    alignment: left\n"
        "  allow_list:\n"
        "    - support@example.com\n"
    )
    cfg = load_from_yaml(path)
    assert cfg["marker"] == "[X]"
    assert cfg["track_changes"] is False
    assert cfg["header_text"] == "INTERNAL"
    assert cfg["header_style"] == HeaderStyle(bold=True, size=12, color="#000000", alignment="left")
    assert cfg["allow_list"] == {"support@example.com"}


def test_load_empty_yaml(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_from_yaml(path) == load_config({})


def test_header_size_not_a_number():
    with pytest.raises(ConfigError, match="header size"):
        load_config({"header": {"size": "big"}})


def test_malformed_yaml(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("a: [\n")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_from_yaml(path)


def test_yaml_top_level_not_a_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- PHONE\n- EMAIL\n")
    with pytest.raises(ConfigError, match="mapping"):
        load_from_yaml(path)


def test_create_redactor():
    redactor = create_redactor({"marker": "[X]", "header": {"enabled": False}})
    assert isinstance(redactor, Redactor)
    doc = TextDocument("mail a@b.com")
    result = redactor.redact_document(doc)
    assert doc.text == "mail [X]"
    assert not result.header_added


def test_create_redactor_from_normalized():
    cfg = load_config({"track_changes": False})
    redactor = create_redactor(cfg)
    assert redactor.config.track_changes is False


def test_create_redactor_disabled():
    redactor = create_redactor({"enabled": False})
    doc = TextDocument("SSN: 123-45-6789")
    result = redactor.redact_document(doc)
    assert result.success
    assert result.total_redacted == 0
    assert doc.text == "SSN: 123-45-6789"
    assert redactor.redact_text("a@b.com")[0] == "a@b.com"


def test_disabled_redactors_do_not_share_config():
    a = create_redactor({"enabled": False})
    b = create_redactor({"enabled": False})
    a.config.allow_list.add("a@b.com")
    assert a.config is not b.config
    assert b.config.allow_list == set()


def test_empty_marker_rejected():
    with pytest.raises(ConfigError):
        create_redactor({"marker": ""})


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
