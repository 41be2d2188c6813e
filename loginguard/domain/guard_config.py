"""Attempt guard configuration -- thresholds and durations, fixed at construction."""
import os


class GuardConfig:
    """Limits for the login attempt guard. All durations are in seconds."""

    DEFAULT_WINDOW = 15 * 60
    DEFAULT_MAX_ATTEMPTS = 5
    DEFAULT_BLOCK_DURATION = 30 * 60
    DEFAULT_CLEANUP_INTERVAL = 5 * 60

    def __init__(
        self,
        window: float = DEFAULT_WINDOW,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        block_duration: float = DEFAULT_BLOCK_DURATION,
        cleanup_interval: float = DEFAULT_CLEANUP_INTERVAL,
    ):
        if window <= 0:
            raise ValueError(f"window must be positive, got {window}")
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        if block_duration <= 0:
            raise ValueError(f"block_duration must be positive, got {block_duration}")
        if cleanup_interval <= 0:
            raise ValueError(f"cleanup_interval must be positive, got {cleanup_interval}")
        self._window = window
        self._max_attempts = max_attempts
        self._block_duration = block_duration
        self._cleanup_interval = cleanup_interval

    @property
    def window(self) -> float:
        return self._window

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    @property
    def block_duration(self) -> float:
        return self._block_duration

    @property
    def cleanup_interval(self) -> float:
        return self._cleanup_interval

    @classmethod
    def from_env(cls) -> "GuardConfig":
        """Build a config from LOGIN_* environment variables.

        Env vars:
            LOGIN_WINDOW_SECONDS            -- counting window (default 900)
            LOGIN_MAX_ATTEMPTS              -- failures before lockout (default 5)
            LOGIN_BLOCK_SECONDS             -- lockout length (default 1800)
            LOGIN_CLEANUP_INTERVAL_SECONDS  -- reaper cadence (default 300)
        """
        return cls(
            window=_env_number("LOGIN_WINDOW_SECONDS", cls.DEFAULT_WINDOW),
            max_attempts=int(_env_number("LOGIN_MAX_ATTEMPTS", cls.DEFAULT_MAX_ATTEMPTS)),
            block_duration=_env_number("LOGIN_BLOCK_SECONDS", cls.DEFAULT_BLOCK_DURATION),
            cleanup_interval=_env_number(
                "LOGIN_CLEANUP_INTERVAL_SECONDS", cls.DEFAULT_CLEANUP_INTERVAL
            ),
        )

    def to_dict(self) -> dict:
        return {
            "window": self._window,
            "max_attempts": self._max_attempts,
            "block_duration": self._block_duration,
            "cleanup_interval": self._cleanup_interval,
        }


def _env_number(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
