"""Tests for scripts/hash_admin_password.py."""
from loginguard.infrastructure.auth.password import verify_password
from scripts import hash_admin_password
from scripts.hash_admin_password import main


def test_prints_env_line_with_verifiable_hash(capsys):
    assert main(["s3cret-admin"]) == 0
    line = capsys.readouterr().out.strip()
    key, _, value = line.partition("=")
    assert key == "ADMIN_PASSWORD_HASH"
    assert verify_password("s3cret-admin", value)


def test_empty_password_refused(capsys):
    assert main([""]) == 1
    assert "empty password" in capsys.readouterr().err


def test_prompted_passwords_must_match(monkeypatch, capsys):
    answers = iter(["first", "second"])
    monkeypatch.setattr(hash_admin_password.getpass, "getpass", lambda prompt="": next(answers))
    assert main([]) == 1
    assert "do not match" in capsys.readouterr().err


def test_prompted_password_hashed(monkeypatch, capsys):
    monkeypatch.setattr(hash_admin_password.getpass, "getpass", lambda prompt="": "typed-twice")
    assert main([]) == 0
    value = capsys.readouterr().out.strip().split("=", 1)[1]
    assert verify_password("typed-twice", value)
