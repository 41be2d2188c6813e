"""Admin login use case -- guard check, credential verification, guard update."""
import logging
from typing import Callable

from loginguard.domain import messages
from loginguard.infrastructure.audit import try_log_event
from loginguard.infrastructure.auth.admin_credentials import ADMIN_SUBJECT, verify_admin_password
from loginguard.infrastructure.auth.attempt_guard import AttemptGuard
from loginguard.infrastructure.auth.jwt_handler import create_access_token

log = logging.getLogger("loginguard.auth")


class LoginResult:
    """Outcome of one login attempt, ready to be rendered by the API layer."""

    def __init__(
        self,
        success: bool,
        message: str,
        remaining: int | None = None,
        blocked: bool = False,
        reset_in: int | None = None,
        access_token: str | None = None,
        rate_limited: bool = False,
        invalid_input: bool = False,
    ):
        self.success = success
        self.message = message
        self.remaining = remaining
        self.blocked = blocked
        self.reset_in = reset_in
        self.access_token = access_token
        # Guard refused the attempt (before verification or by locking out).
        self.rate_limited = rate_limited
        # Request rejected before verification; not counted as a failure.
        self.invalid_input = invalid_input

    def to_dict(self) -> dict:
        data = {"success": self.success, "message": self.message}
        if self.remaining is not None:
            data["remaining"] = self.remaining
        if not self.success:
            data["blocked"] = self.blocked
        if self.reset_in is not None:
            data["reset_in"] = self.reset_in
        return data


class LoginService:
    """Runs the guarded admin login flow for one client identifier.

    check -> verify -> record_failure on mismatch / clear on success.
    """

    def __init__(
        self,
        guard: AttemptGuard,
        verify_password: Callable[[str], bool] = verify_admin_password,
    ):
        self._guard = guard
        self._verify = verify_password

    @property
    def guard(self) -> AttemptGuard:
        return self._guard

    def login(self, identifier: str, password: str) -> LoginResult:
        decision = self._guard.check(identifier)
        if not decision.allowed:
            try_log_event("login_rejected", identifier, {"reset_in": decision.reset_in})
            return LoginResult(
                success=False,
                message=decision.message or messages.LOGIN_RATE_LIMITED,
                remaining=decision.remaining,
                blocked=decision.blocked,
                reset_in=decision.reset_in,
                rate_limited=True,
            )

        if not password:
            return LoginResult(
                success=False,
                message=messages.LOGIN_PASSWORD_REQUIRED,
                invalid_input=True,
            )

        if not self._verify(password):
            return self._on_failure(identifier)

        self._guard.clear(identifier)
        try_log_event("login_succeeded", identifier)
        log.info("Admin login succeeded from %s", identifier)
        return LoginResult(
            success=True,
            message=messages.LOGIN_SUCCESS,
            access_token=create_access_token(ADMIN_SUBJECT, role="admin"),
        )

    def _on_failure(self, identifier: str) -> LoginResult:
        failure = self._guard.record_failure(identifier)

        if failure.blocked:
            message = failure.message or messages.LOGIN_RATE_LIMITED
            try_log_event("login_blocked", identifier, {"reset_in": failure.reset_in})
        elif failure.remaining <= 2:
            message = messages.login_invalid_with_remaining(failure.remaining)
            try_log_event("login_failed", identifier, {"remaining": failure.remaining})
        else:
            message = messages.LOGIN_INVALID
            try_log_event("login_failed", identifier, {"remaining": failure.remaining})

        return LoginResult(
            success=False,
            message=message,
            remaining=failure.remaining,
            blocked=failure.blocked,
            reset_in=failure.reset_in if failure.blocked else None,
            rate_limited=failure.blocked,
        )
