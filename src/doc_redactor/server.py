"""HTTP sidecar server for doc-redactor.

Runs as a lightweight stdlib HTTP server on localhost so a host
application (an editor add-in, a document pipeline) can call it instead
of spawning a process per document.

Endpoints:
    POST /scan            — Build a redaction plan (JSON body)
    POST /redact-text     — Redact plain text (JSON body)
    GET  /health          — Health check

All endpoints expect/return JSON.
Body format: {"text": "..."}
"""

from __future__ import annotations
import json
import logging
import os
from http.server import HTTPServer, BaseHTTPRequestHandler
from typing import Any

from .config import create_redactor, load_from_yaml
from .editor import TextDocument
from .redactor import Redactor

logger = logging.getLogger(__name__)

DEFAULT_PORT = int(os.environ.get("DOC_REDACTOR_PORT", "18792"))
DEFAULT_CONFIG = os.environ.get("DOC_REDACTOR_CONFIG", "")

# Shared state
_redactor: Redactor | None = None
_config_path: str = DEFAULT_CONFIG


def _get_redactor() -> Redactor:
    global _redactor
    if _redactor is None:
        _redactor = create_redactor(load_from_yaml(_config_path) if _config_path else None)
    return _redactor


class RedactionHandler(BaseHTTPRequestHandler):
    """HTTP request handler for the redaction sidecar."""

    def _read_json(self) -> dict[str, Any]:
        length = int(self.headers.get("Content-Length", 0))
        body = self.rfile.read(length).decode("utf-8")
        return json.loads(body) if body else {}

    def _respond(self, status: int, data: Any) -> None:
        body = json.dumps(data, ensure_ascii=False).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args: Any) -> None:
        logger.debug("%s - " + format, self.address_string(), *args)

    def do_GET(self) -> None:
        if self.path == "/health":
            self._respond(200, {"status": "ok"})
        else:
            self._respond(404, {"error": "not found"})

    def do_POST(self) -> None:
        try:
            try:
                body = self._read_json()
            except ValueError:
                self._respond(400, {"error": "body must be valid JSON"})
                return
            if not isinstance(body, dict):
                self._respond(400, {"error": "body must be a JSON object"})
                return

            text = body.get("text", "")
            if not isinstance(text, str):
                self._respond(400, {"error": "text must be a string"})
                return
            redactor = _get_redactor()

            if self.path == "/scan":
                self._respond(200, redactor.plan(text).to_dict())

            elif self.path == "/redact-text":
                doc = TextDocument(text)
                result = redactor.redact_document(doc)
                self._respond(200, {"text": doc.render(), "result": result.to_dict()})

            else:
                self._respond(404, {"error": "not found"})

        except Exception as e:
            logger.exception("Request to %s failed", self.path)
            self._respond(500, {"error": str(e)})


def serve(port: int = DEFAULT_PORT, config_path: str = DEFAULT_CONFIG) -> None:
    """Start the redaction HTTP sidecar."""
    global _config_path, _redactor
    _config_path = config_path
    _redactor = None

    server = HTTPServer(("127.0.0.1", port), RedactionHandler)
    print(f"doc-redactor sidecar listening on http://127.0.0.1:{port}")
    print(f"  config: {config_path or '(defaults)'}")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        print("\nShutting down...")
        server.shutdown()


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="doc-redactor HTTP sidecar")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--config", default=DEFAULT_CONFIG)
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    serve(port=args.port, config_path=args.config)
