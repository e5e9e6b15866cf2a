"""Tests for the CLI and the HTTP sidecar."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import io
import json
import threading
import urllib.error
import urllib.request
from http.server import HTTPServer

import pytest

from doc_redactor import Redactor
from doc_redactor import server
from doc_redactor.cli import main


# ── CLI ──────────────────────────────────────────────────────────────

def test_redact_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("SSN: 123-45-6789"))
    assert main(["redact"]) == 0
    assert capsys.readouterr().out == "CONFIDENTIAL DOCUMENT\n\nSSN: [REDACTED]"


def test_redact_json(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("Contact: jane.doe@example.com or 555-123-4567"))
    assert main(["--no-header", "redact", "--json"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["text"] == "Contact: [REDACTED] or [REDACTED]"
    assert out["result"]["emailsRedacted"] == 1
    assert out["result"]["phonesRedacted"] == 1
    assert out["result"]["headerAdded"] is False


def test_redact_input_file(tmp_path, capsys):
    path = tmp_path / "letter.txt"
    path.write_text("mail a@b.com", encoding="utf-8")
    assert main(["--marker", "###", "--no-header", "redact", "--input", str(path)]) == 0
    assert capsys.readouterr().out == "mail ###"


def test_scan(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("account ending in 4321 and SSN ending in 4321"))
    assert main(["scan"]) == 0
    plan = json.loads(capsys.readouterr().out)
    assert plan["ssns"] == 1
    assert plan["partialSsns"] == ["4321"]
    assert plan["entries"] == [{
        "category": "SSN",
        "kind": "SSN_PARTIAL",
        "text": "4321",
        "matchCase": True,
        "matchWholeWord": True,
    }]


def test_skip_types_and_allow_list(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("a@b.com c@d.com 555-123-4567"))
    assert main(["--skip-types", "phone", "--allow-list", "c@d.com", "scan"]) == 0
    plan = json.loads(capsys.readouterr().out)
    assert [e["text"] for e in plan["entries"]] == ["a@b.com"]


def test_bad_skip_type(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO(""))
    assert main(["--skip-types", "NAME", "scan"]) == 2
    assert "Unknown skip_types" in capsys.readouterr().err


def test_bad_header_size_in_config(tmp_path, monkeypatch, capsys):
    path = tmp_path / "cfg.yaml"
    path.write_text("header:\n  size: big\n")
    monkeypatch.setattr(sys, "stdin", io.StringIO(""))
    assert main(["--config", str(path), "scan"]) == 2
    assert "header size" in capsys.readouterr().err


def test_malformed_config(tmp_path, monkeypatch, capsys):
    path = tmp_path / "cfg.yaml"
    path.write_text("a: [\n")
    monkeypatch.setattr(sys, "stdin", io.StringIO(""))
    assert main(["--config", str(path), "scan"]) == 2
    assert "Invalid YAML" in capsys.readouterr().err


def test_missing_input_file(tmp_path, capsys):
    assert main(["redact", "--input", str(tmp_path / "nope.txt")]) == 2


# ── HTTP sidecar ─────────────────────────────────────────────────────

@pytest.fixture
def sidecar(monkeypatch):
    monkeypatch.setattr(server, "_redactor", Redactor())
    httpd = HTTPServer(("127.0.0.1", 0), server.RedactionHandler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{httpd.server_address[1]}"
    httpd.shutdown()
    httpd.server_close()


def _post(url, payload):
    return _post_raw(url, json.dumps(payload).encode("utf-8"))


def _post_raw(url, data):
    req = urllib.request.Request(
        url,
        data=data,
        headers={"Content-Type": "application/json"},
        method="POST",
    )
    with urllib.request.urlopen(req) as resp:
        return resp.status, json.loads(resp.read())


def test_health(sidecar):
    with urllib.request.urlopen(f"{sidecar}/health") as resp:
        assert json.loads(resp.read()) == {"status": "ok"}


def test_redact_text_endpoint(sidecar):
    status, body = _post(f"{sidecar}/redact-text", {"text": "SSN: 123-45-6789"})
    assert status == 200
    assert body["text"] == "CONFIDENTIAL DOCUMENT\n\nSSN: [REDACTED]"
    assert body["result"]["ssnsRedacted"] == 1
    assert body["result"]["success"] is True


def test_scan_endpoint(sidecar):
    status, body = _post(f"{sidecar}/scan", {"text": "xxx-xx-5555"})
    assert status == 200
    assert body["ssns"] == 1
    assert body["entries"][0]["kind"] == "SSN_MASKED"


def test_unknown_path(sidecar):
    with pytest.raises(urllib.error.HTTPError) as exc:
        _post(f"{sidecar}/nope", {"text": ""})
    assert exc.value.code == 404


def test_bad_text(sidecar):
    with pytest.raises(urllib.error.HTTPError) as exc:
        _post(f"{sidecar}/scan", {"text": 42})
    assert exc.value.code == 400



@pytest.mark.parametrize("data, error", [
    (b"{", "body must be valid JSON"),
    (b"[1]", "body must be a JSON object"),
])
def test_bad_body(sidecar, data, error):
    with pytest.raises(urllib.error.HTTPError) as exc:
        _post_raw(f"{sidecar}/scan", data)
    assert exc.value.code == 400
    assert json.loads(exc.value.read()) == {"error": error}

if __name__ == "__main__":
    pytest.main([__file__, "-v"])
