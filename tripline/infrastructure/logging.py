"""结构化日志：JSON line 格式"""

from __future__ import annotations

import json
import sys
import time
import uuid
from typing import Any, Optional


class StructuredLogger:
    """结构化日志器，输出 JSON line，每行带 trace_id。"""

    def __init__(self, trace_id: Optional[str] = None, output=None):
        self.trace_id = trace_id or str(uuid.uuid4())[:8]
        self._output = output or sys.stderr
        self._timers: dict[str, float] = {}

    def _emit(self, data: dict[str, Any]) -> None:
        data["trace_id"] = self.trace_id
        data["timestamp"] = time.time()
        try:
            line = json.dumps(data, ensure_ascii=False, default=str)
            self._output.write(line + "\n")
            self._output.flush()
        except Exception as exc:
            # Last-resort fallback to avoid silent logger failures.
            try:
                fallback = {
                    "event": "logger_internal_error",
                    "trace_id": self.trace_id,
                    "timestamp": time.time(),
                    "error": str(exc),
                }
                sys.stderr.write(json.dumps(fallback, ensure_ascii=False, default=str) + "\n")
                sys.stderr.flush()
            except Exception:
                return

    def build_start(self, stage: str, **extra: Any) -> None:
        self._timers[stage] = time.time()
        self._emit({"event": "build_start", "stage": stage, **extra})

    def build_end(self, stage: str, *, events_count: int = 0, **extra: Any) -> None:
        start = self._timers.pop(stage, time.time())
        duration_ms = round((time.time() - start) * 1000, 1)
        self._emit({
            "event": "build_end",
            "stage": stage,
            "duration_ms": duration_ms,
            "events_count": events_count,
            **extra,
        })

    def day_built(self, day_number: int, **extra: Any) -> None:
        self._emit({"event": "day_built", "day": day_number, **extra})

    def warning(self, stage: str, message: str, **extra: Any) -> None:
        self._emit({"event": "warning", "stage": stage, "message": message, **extra})

    def summary(self, **extra: Any) -> None:
        self._emit({"event": "summary", **extra})


# 全局 logger
_logger: Optional[StructuredLogger] = None


def get_logger(trace_id: Optional[str] = None) -> StructuredLogger:
    global _logger
    if _logger is None or (trace_id and _logger.trace_id != trace_id):
        _logger = StructuredLogger(trace_id=trace_id)
    return _logger


def reset_logger() -> None:
    global _logger
    _logger = None
