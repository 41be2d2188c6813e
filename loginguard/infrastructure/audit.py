"""Append-only audit logger for login events.

Writes newline-delimited JSON entries to `logs/audit.log` (or AUDIT_LOG_DIR).
Thread-safe via a module-level lock (suitable for single-process workers).
"""
import json
import logging
import os
import threading
from datetime import datetime, timezone
from pathlib import Path

_LOCK = threading.Lock()

ROOT = Path(__file__).resolve().parent.parent.parent
LOG_DIR = Path(os.environ.get("AUDIT_LOG_DIR") or ROOT / "logs")
LOG_FILE = LOG_DIR / "audit.log"

log = logging.getLogger("loginguard.audit")


def _ensure_dir():
    LOG_DIR.mkdir(parents=True, exist_ok=True)


def log_event(action: str, identifier: str | None, payload: dict | None = None) -> None:
    _ensure_dir()
    entry = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "action": action,
        "identifier": identifier,
        "payload": payload or {},
    }
    # Single JSON line per event; the lock prevents interleaved writes.
    with _LOCK:
        with open(LOG_FILE, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry, ensure_ascii=False) + "\n")


def try_log_event(action: str, identifier: str | None, payload: dict | None = None) -> None:
    """log_event for request paths: an unwritable log must not fail the request."""
    try:
        log_event(action, identifier, payload)
    except OSError as exc:
        log.error("Audit write failed for %s: %s", action, exc)
