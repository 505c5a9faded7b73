"""stdio server mode: JSON line-delimited protocol over stdin/stdout."""

from __future__ import annotations

import json
import sys
from typing import Any, TextIO

from toonlite.contracts.common import Target
from toonlite.engine.dispatcher import error_code_for
from toonlite.engine.runner import preset_table, run_encode, run_stats
from toonlite.presets import resolve_options


class StdioServer:
    """Simple JSON-RPC-like server over stdin/stdout.

    Requests look like ``{"id": "1", "command": "encode", "args": {...}}``
    where ``args`` holds ``value`` plus optional ``preset`` and ``options``.
    """

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self._stdin = stdin
        self._stdout = stdout

    def handle_request(self, request: dict[str, Any]) -> dict[str, Any]:
        req_id = request.get("id", "")
        command = request.get("command", "")
        args = request.get("args", {}) or {}

        try:
            if command == "presets":
                return {"id": req_id, "ok": True, "result": [p.model_dump() for p in preset_table()]}

            if command not in ("encode", "stats"):
                return {"id": req_id, "ok": False, "error": f"Unknown command: {command}"}

            if "value" not in args:
                return {"id": req_id, "ok": False, "error": "Missing 'value' in args"}

            if command == "stats":
                env = run_stats(args["value"])
            else:
                preset = args.get("preset")
                options = resolve_options(preset, args.get("options") or {})
                env, _ = run_encode(args["value"], options, target=Target(preset=preset))

            response: dict[str, Any] = {"id": req_id, "ok": env.ok, "result": env.result}
            if env.warnings:
                response["warnings"] = [w.model_dump() for w in env.warnings]
            if env.errors:
                response["error"] = env.errors[0].message
                response["code"] = env.errors[0].code
            return response

        except Exception as e:
            return {"id": req_id, "ok": False, "error": str(e), "code": error_code_for(e)}

    def run(self) -> None:
        """Main server loop: read JSON lines from stdin, write responses to stdout."""
        stdin = self._stdin or sys.stdin
        stdout = self._stdout or sys.stdout
        for line in stdin:
            line = line.strip()
            if not line:
                continue
            try:
                request = json.loads(line)
            except json.JSONDecodeError as e:
                response = {"ok": False, "error": f"Invalid JSON: {e}"}
                stdout.write(json.dumps(response) + "\n")
                stdout.flush()
                continue

            if not isinstance(request, dict):
                response = {"ok": False, "error": "Request must be a JSON object"}
            else:
                response = self.handle_request(request)
            stdout.write(json.dumps(response, default=str) + "\n")
            stdout.flush()
