"""Unit tests for the guarded admin login use case."""
import pytest

from loginguard.application.login_service import LoginService
from loginguard.domain import messages
from loginguard.infrastructure.auth.jwt_handler import verify_token
from tests.conftest import make_guard

IP = "203.0.113.7"
GOOD = "right"


@pytest.fixture
def calls():
    return []


@pytest.fixture
def service(guard, calls):
    def verify(password):
        calls.append(password)
        return password == GOOD
    return LoginService(guard, verify_password=verify)


class TestSuccess:
    def test_returns_token_and_clears_failures(self, service, guard):
        service.login(IP, "wrong")
        result = service.login(IP, GOOD)
        assert result.success is True
        assert result.message == messages.LOGIN_SUCCESS
        assert verify_token(result.access_token)["role"] == "admin"
        assert guard.get_record(IP) is None

    def test_to_dict_omits_failure_fields(self, service):
        data = service.login(IP, GOOD).to_dict()
        assert data == {"success": True, "message": messages.LOGIN_SUCCESS}


class TestFailure:
    def test_generic_message_while_many_attempts_remain(self, service):
        result = service.login(IP, "wrong")
        assert result.success is False
        assert result.rate_limited is False
        assert result.message == messages.LOGIN_INVALID
        assert result.remaining == 4
        assert result.blocked is False

    def test_remaining_count_surfaced_near_threshold(self, service):
        for _ in range(2):
            service.login(IP, "wrong")
        result = service.login(IP, "wrong")
        assert result.remaining == 2
        assert result.message == messages.login_invalid_with_remaining(2)

    def test_fifth_failure_blocks(self, service):
        for _ in range(4):
            service.login(IP, "wrong")
        result = service.login(IP, "wrong")
        assert result.blocked is True
        assert result.rate_limited is True
        assert result.remaining == 0
        assert result.reset_in == 1800
        assert "30 minutes" in result.message


class TestRejectedBeforeVerification:
    def test_blocked_client_is_not_verified(self, service, calls):
        for _ in range(5):
            service.login(IP, "wrong")
        calls.clear()

        result = service.login(IP, GOOD)

        assert calls == []
        assert result.success is False
        assert result.rate_limited is True
        assert result.blocked is True
        assert result.reset_in == 1800

    def test_window_exhaustion_uses_guard_message(self, clock, calls):
        def verify(password):
            calls.append(password)
            return False

        service = LoginService(make_guard(clock, max_attempts=1), verify_password=verify)
        first = service.login(IP, "wrong")
        assert first.rate_limited is False
        assert first.remaining == 0

        second = service.login(IP, "wrong")
        assert second.rate_limited is True
        assert second.blocked is False
        assert second.message == messages.window_exhausted()
        assert len(calls) == 1

    def test_other_clients_unaffected(self, service):
        for _ in range(5):
            service.login(IP, "wrong")
        assert service.login("198.51.100.1", GOOD).success is True

    def test_empty_password_is_neither_verified_nor_counted(self, service, guard, calls):
        result = service.login(IP, "")

        assert calls == []
        assert guard.get_record(IP) is None
        assert result.success is False
        assert result.invalid_input is True
        assert result.rate_limited is False
        assert result.message == messages.LOGIN_PASSWORD_REQUIRED

    def test_blocked_client_with_empty_password_is_rate_limited(self, service, calls):
        for _ in range(5):
            service.login(IP, "wrong")

        result = service.login(IP, "")

        assert result.rate_limited is True
        assert result.invalid_input is False
        assert result.blocked is True


class TestAudit:
    def test_events_written(self, service, monkeypatch):
        import loginguard.application.login_service as mod
        events = []
        monkeypatch.setattr(mod, "try_log_event", lambda action, ident, payload=None: events.append(action))

        for _ in range(5):
            service.login(IP, "wrong")
        service.login(IP, GOOD)
        service.login("10.1.1.1", GOOD)

        assert events == ["login_failed"] * 4 + ["login_blocked", "login_rejected", "login_succeeded"]
