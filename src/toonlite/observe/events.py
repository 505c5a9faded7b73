"""Structured NDJSON event emission and timing."""

from __future__ import annotations

import json
import sys
import time
from datetime import datetime, timezone
from typing import Any, Callable, TextIO


class Timer:
    """Context manager measuring wall time for an envelope's ``metrics.duration_ms``.

    ``clock`` returns seconds and defaults to ``time.perf_counter``.
    """

    def __init__(self, clock: Callable[[], float] = time.perf_counter) -> None:
        self._clock = clock
        self._started: float | None = None
        self.elapsed_ms: int = 0

    def __enter__(self) -> "Timer":
        self._started = self._clock()
        return self

    def __exit__(self, *exc: Any) -> None:
        if self._started is not None:
            self.elapsed_ms = round((self._clock() - self._started) * 1000)


class EventEmitter:
    """Emits NDJSON lifecycle events to stderr."""

    def __init__(self, enabled: bool = False, stream: TextIO | None = None) -> None:
        self.enabled = enabled
        self._stream = stream

    def emit(self, event: str, data: dict[str, Any] | None = None) -> None:
        if not self.enabled:
            return
        payload = {
            "event": event,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "data": data or {},
        }
        stream = self._stream or sys.stderr
        stream.write(json.dumps(payload) + "\n")
        stream.flush()
