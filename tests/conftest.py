"""
Shared pytest fixtures for the loginguard test suite.

Strategy:
- Guard / domain tests: pure in-memory, driven by a fake clock (no sleeping).
- API tests: FastAPI TestClient around an app built with a fresh guard.
  The audit log is redirected to a temp directory for the whole session.
"""
import os
import tempfile

import bcrypt
import pytest

# ---------------------------------------------------------------------------
# Test environment (must be set before loginguard modules are imported)
# ---------------------------------------------------------------------------
ADMIN_TEST_PASSWORD = "Correct-Horse-42"

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-not-for-production-123456")
os.environ.setdefault("AUDIT_LOG_DIR", tempfile.mkdtemp(prefix="loginguard_audit_"))
os.environ["ADMIN_PASSWORD_HASH"] = bcrypt.hashpw(
    ADMIN_TEST_PASSWORD.encode("utf-8"), bcrypt.gensalt(rounds=4)
).decode("utf-8")
os.environ.pop("ADMIN_PASSWORD", None)


from loginguard.domain.guard_config import GuardConfig
from loginguard.infrastructure.auth.attempt_guard import AttemptGuard


class FakeClock:
    """Controllable replacement for time.time()."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_config(**kwargs) -> GuardConfig:
    defaults = {"window": 900, "max_attempts": 5, "block_duration": 1800, "cleanup_interval": 300}
    defaults.update(kwargs)
    return GuardConfig(**defaults)


def make_guard(clock=None, **kwargs) -> AttemptGuard:
    return AttemptGuard(make_config(**kwargs), clock=clock or FakeClock())


# ---------------------------------------------------------------------------
# pytest fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def guard(clock):
    """Fresh guard with the reference limits (900s / 5 / 1800s)."""
    g = make_guard(clock)
    yield g
    g.stop()


@pytest.fixture
def test_app(guard):
    from loginguard.main import create_app
    return create_app(guard)


@pytest.fixture
def client(test_app):
    from fastapi.testclient import TestClient
    return TestClient(test_app)


@pytest.fixture
def admin_headers(client):
    """Log in as admin from a dedicated IP and return Bearer headers."""
    resp = client.post(
        "/api/auth/login",
        json={"password": ADMIN_TEST_PASSWORD},
        headers={"X-Forwarded-For": "10.0.0.1"},
    )
    assert resp.status_code == 200, f"Login failed: {resp.text}"
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}
