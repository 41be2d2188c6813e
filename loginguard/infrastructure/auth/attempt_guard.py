"""In-memory brute-force protection for the login endpoint.

Tracks failed attempts per identifier (usually the client IP) within a
sliding window and blocks identifiers that hit the threshold. State is
process-local: one guard per application, no cross-instance coordination.

Expired records are ignored on access, so check/record_failure never depend
on the background reaper. The reaper only bounds memory.
"""
import logging
import math
import threading
import time
from typing import Callable, Dict, Optional

from loginguard.domain import messages
from loginguard.domain.attempt import AttemptRecord, Decision
from loginguard.domain.guard_config import GuardConfig

log = logging.getLogger("loginguard.guard")


def _seconds(value: float) -> int:
    return max(0, math.ceil(value))


def _key(identifier) -> str:
    return "" if identifier is None else str(identifier)


class AttemptGuard:
    """Per-identifier failure counter with temporary lockout.

    Thread-safe: every read-then-write sequence runs under a single lock,
    shared with the reaper thread.
    """

    def __init__(self, config: GuardConfig | None = None, clock: Callable[[], float] = time.time):
        self._config = config or GuardConfig()
        self._clock = clock
        self._records: Dict[str, AttemptRecord] = {}
        self._lock = threading.Lock()
        self._reaper: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    @property
    def config(self) -> GuardConfig:
        return self._config

    # ------------------------------------------------------------------
    # Decisions
    # ------------------------------------------------------------------

    def check(self, identifier: str) -> Decision:
        """Decide whether a login attempt may proceed. Never mutates state."""
        key = _key(identifier)
        with self._lock:
            now = self._clock()
            record = self._records.get(key)
            if record is None:
                return self._fresh_decision()
            if record.blocked:
                if record.block_active(now):
                    return self._blocked_decision(record, now)
                return self._fresh_decision()
            if record.window_elapsed(now, self._config.window):
                return self._fresh_decision()

            reset_in = self._window_left(record, now)
            remaining = self._config.max_attempts - record.count
            if remaining <= 0:
                return Decision(
                    allowed=False,
                    remaining=0,
                    reset_in=reset_in,
                    blocked=False,
                    message=messages.window_exhausted(),
                )
            return Decision(allowed=True, remaining=remaining, reset_in=reset_in)

    def record_failure(self, identifier: str) -> Decision:
        """Register one failed credential check and return the new state."""
        key = _key(identifier)
        cfg = self._config
        with self._lock:
            now = self._clock()
            record = self._records.get(key)

            if record is not None and record.block_active(now):
                return self._blocked_decision(record, now)

            if record is None or record.is_expired(now, cfg.window):
                self._records[key] = AttemptRecord(first_attempt=now)
                return Decision(
                    allowed=True,
                    remaining=cfg.max_attempts - 1,
                    reset_in=_seconds(cfg.window),
                )

            record.count += 1
            record.last_attempt = now

            if record.count >= cfg.max_attempts:
                record.blocked = True
                record.blocked_until = now + cfg.block_duration
                reset_in = _seconds(cfg.block_duration)
                log.warning(
                    "Identifier %s blocked for %ss after %s failed attempts",
                    key, reset_in, record.count,
                )
                return Decision(
                    allowed=False,
                    remaining=0,
                    reset_in=reset_in,
                    blocked=True,
                    message=messages.locked_out(reset_in),
                )

            remaining = cfg.max_attempts - record.count
            return Decision(
                allowed=True,
                remaining=remaining,
                reset_in=self._window_left(record, now),
                message=messages.attempts_remaining(remaining) if remaining <= 2 else None,
            )

    def clear(self, identifier: str) -> None:
        """Forget an identifier (successful login or manual unblock)."""
        with self._lock:
            self._records.pop(_key(identifier), None)

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def get_record(self, identifier: str) -> Optional[AttemptRecord]:
        """Return a detached copy of the stored record, or None."""
        with self._lock:
            record = self._records.get(_key(identifier))
            return record.copy() if record is not None else None

    def stats(self) -> dict:
        with self._lock:
            now = self._clock()
            blocked = sum(1 for r in self._records.values() if r.block_active(now))
            return {"tracked": len(self._records), "blocked": blocked}

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    # ------------------------------------------------------------------
    # Reaper
    # ------------------------------------------------------------------

    def purge_expired(self) -> int:
        """Drop records whose block or window has fully elapsed."""
        with self._lock:
            now = self._clock()
            window = self._config.window
            stale = [
                k for k, r in self._records.items()
                if (r.blocked and r.blocked_until < now)
                or (not r.blocked and now - r.first_attempt > window)
            ]
            for k in stale:
                del self._records[k]

        if stale:
            log.debug("Attempt guard cleanup: removed %s expired entries", len(stale))
        return len(stale)

    def start(self) -> None:
        """Launch the periodic cleanup thread. No-op if already running.

        A thread still winding down from an earlier stop() is joined first,
        so at most one reaper exists.
        """
        reaper = self._reaper
        if reaper is not None and reaper.is_alive():
            if not self._stop_event.is_set():
                return
            reaper.join()
        self._stop_event.clear()
        self._reaper = threading.Thread(
            target=self._run_reaper, name="loginguard-reaper", daemon=True
        )
        self._reaper.start()
        log.info("Attempt guard reaper started (interval=%ss)", self._config.cleanup_interval)

    def stop(self, timeout: float | None = 5.0) -> None:
        """Signal the cleanup thread and wait for it to exit."""
        reaper = self._reaper
        if reaper is None:
            return
        self._stop_event.set()
        reaper.join(timeout)
        if reaper.is_alive():
            log.warning("Attempt guard reaper did not stop within %ss", timeout)
            return
        self._reaper = None
        log.info("Attempt guard reaper stopped")

    @property
    def running(self) -> bool:
        return self._reaper is not None and self._reaper.is_alive()

    def _run_reaper(self) -> None:
        while not self._stop_event.wait(self._config.cleanup_interval):
            self.purge_expired()

    # ------------------------------------------------------------------
    # Internal helpers (called under lock)
    # ------------------------------------------------------------------

    def _fresh_decision(self) -> Decision:
        return Decision(
            allowed=True,
            remaining=self._config.max_attempts,
            reset_in=_seconds(self._config.window),
        )

    def _blocked_decision(self, record: AttemptRecord, now: float) -> Decision:
        reset_in = _seconds(record.blocked_until - now)
        return Decision(
            allowed=False,
            remaining=0,
            reset_in=reset_in,
            blocked=True,
            message=messages.retry_after_block(reset_in),
        )

    def _window_left(self, record: AttemptRecord, now: float) -> int:
        return _seconds(record.first_attempt + self._config.window - now)
