"""Admin credential lookup and verification.

The login endpoint protects a single shared admin secret. Read from the
environment on every call so rotations take effect without a restart.

Primary: ADMIN_PASSWORD_HASH (bcrypt hash).
Development fallback: ADMIN_PASSWORD (plain text, constant-time compare).
"""
import logging
import os
import secrets

from loginguard.infrastructure.auth.password import is_bcrypt_hash, verify_password

log = logging.getLogger("loginguard.auth")

ADMIN_SUBJECT = "admin"


def configured_admin_hash() -> str:
    return os.environ.get("ADMIN_PASSWORD_HASH", "").strip()


def configured_admin_password() -> str:
    return os.environ.get("ADMIN_PASSWORD", "")


def admin_configured() -> bool:
    return bool(configured_admin_hash() or configured_admin_password())


def verify_admin_password(candidate: str | None) -> bool:
    """Return True if *candidate* matches the configured admin password.

    With no credential configured every candidate is rejected.
    """
    if not candidate:
        return False

    stored_hash = configured_admin_hash()
    if stored_hash:
        if not is_bcrypt_hash(stored_hash):
            log.error("ADMIN_PASSWORD_HASH is not a bcrypt hash; rejecting login")
            return False
        return verify_password(candidate, stored_hash)

    plain = configured_admin_password()
    if plain:
        return secrets.compare_digest(candidate.encode("utf-8"), plain.encode("utf-8"))

    log.warning("No admin credential configured (ADMIN_PASSWORD_HASH / ADMIN_PASSWORD)")
    return False
