"""Generate the ADMIN_PASSWORD_HASH value for .env.

Usage:
    python scripts/hash_admin_password.py            # prompts for the password
    python scripts/hash_admin_password.py <password>

Prints a line ready to paste into .env.
"""
import getpass
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from loginguard.infrastructure.auth.password import hash_password, verify_password


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if args:
        password = args[0]
    else:
        password = getpass.getpass("Admin password: ")
        if password != getpass.getpass("Repeat password: "):
            print("ERROR: passwords do not match", file=sys.stderr)
            return 1

    if not password:
        print("ERROR: empty password", file=sys.stderr)
        return 1

    pwd_hash = hash_password(password)
    # Sanity check before handing the hash out.
    if not verify_password(password, pwd_hash):  # pragma: no cover
        print("ERROR: generated hash does not verify", file=sys.stderr)
        return 1

    print(f"ADMIN_PASSWORD_HASH={pwd_hash}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
