"""Attempt tracking entities -- per-identifier failure record and guard decision."""


class AttemptRecord:
    """Failed-login history for one identifier within the current window.

    Mutable: the guard updates it in place while holding its store lock.
    ``blocked_until`` is meaningful only while ``blocked`` is True.
    """

    def __init__(
        self,
        first_attempt: float,
        count: int = 1,
        last_attempt: float | None = None,
        blocked: bool = False,
        blocked_until: float = 0.0,
    ):
        self.count = count
        self.first_attempt = first_attempt
        self.last_attempt = first_attempt if last_attempt is None else last_attempt
        self.blocked = blocked
        self.blocked_until = blocked_until

    def window_elapsed(self, now: float, window: float) -> bool:
        return now - self.first_attempt > window

    def block_active(self, now: float) -> bool:
        return self.blocked and self.blocked_until > now

    def is_expired(self, now: float, window: float) -> bool:
        """True once the record no longer affects any decision."""
        if self.blocked:
            return self.blocked_until <= now
        return self.window_elapsed(now, window)

    def copy(self) -> "AttemptRecord":
        return AttemptRecord(
            first_attempt=self.first_attempt,
            count=self.count,
            last_attempt=self.last_attempt,
            blocked=self.blocked,
            blocked_until=self.blocked_until,
        )

    def to_dict(self) -> dict:
        return {
            "count": self.count,
            "first_attempt": self.first_attempt,
            "last_attempt": self.last_attempt,
            "blocked": self.blocked,
            "blocked_until": self.blocked_until,
        }


class Decision:
    """Outcome of a guard check or recorded failure. Immutable."""

    def __init__(
        self,
        allowed: bool,
        remaining: int,
        reset_in: int,
        blocked: bool = False,
        message: str | None = None,
    ):
        self._allowed = allowed
        self._remaining = remaining
        self._reset_in = reset_in
        self._blocked = blocked
        self._message = message

    @property
    def allowed(self) -> bool:
        return self._allowed

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def reset_in(self) -> int:
        """Seconds until the current window or block ends."""
        return self._reset_in

    @property
    def blocked(self) -> bool:
        return self._blocked

    @property
    def message(self) -> str | None:
        return self._message

    def to_dict(self) -> dict:
        return {
            "allowed": self._allowed,
            "remaining": self._remaining,
            "reset_in": self._reset_in,
            "blocked": self._blocked,
            "message": self._message,
        }

    def __repr__(self) -> str:
        return (
            f"Decision(allowed={self._allowed}, remaining={self._remaining}, "
            f"reset_in={self._reset_in}, blocked={self._blocked})"
        )
