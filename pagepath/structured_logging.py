"""Structured JSONL trace of path resolutions."""

from __future__ import annotations

import json
import time
import uuid
from pathlib import Path
from typing import IO, Any, Dict, Optional


class ResolutionTrace:
    """Writes one JSONL event per resolved step."""

    def __init__(self, events_path: Path, run_id: Optional[str] = None) -> None:
        self.run_id = run_id or uuid.uuid4().hex[:12]
        self.events_path = events_path
        self._step = 0
        # Opened on the first event so an idle trace holds no file handle.
        self._events_file: Optional[IO[str]] = None

    @classmethod
    def in_directory(cls, base_dir: Path, run_id: Optional[str] = None) -> "ResolutionTrace":
        base_dir.mkdir(parents=True, exist_ok=True)
        return cls(base_dir / "events.jsonl", run_id=run_id)

    def log_step(
        self,
        *,
        path: str,
        step: int,
        kind: str,
        alias: Optional[str],
        scope_size: Optional[int] = None,
        error: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> int:
        self._step += 1
        payload = {
            "ts": time.time(),
            "run_id": self.run_id,
            "event": self._step,
            "path": path,
            "step": step,
            "kind": kind,
            "alias": alias,
            "scope_size": scope_size,
            "error": error,
            "metadata": metadata or {},
        }
        if self._events_file is None or self._events_file.closed:
            self._events_file = self.events_path.open("a", encoding="utf-8")
        self._events_file.write(json.dumps(payload, ensure_ascii=False) + "\n")
        self._events_file.flush()
        return self._step

    def close(self) -> None:
        if self._events_file is not None and not self._events_file.closed:
            self._events_file.close()

    @property
    def closed(self) -> bool:
        return self._events_file is None or self._events_file.closed

    def __enter__(self) -> "ResolutionTrace":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
