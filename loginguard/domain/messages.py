"""User-facing texts for guard decisions and login results."""
import math


def minutes_ceil(seconds: float) -> int:
    return math.ceil(seconds / 60)


def retry_after_block(reset_in: int) -> str:
    return f"Too many login attempts. Please try again in {minutes_ceil(reset_in)} minutes."


def locked_out(block_seconds: int) -> str:
    return (
        "Too many login attempts. Access has been temporarily locked "
        f"for {minutes_ceil(block_seconds)} minutes."
    )


def window_exhausted() -> str:
    return "Too many attempts. Please try again later."


def attempts_remaining(remaining: int) -> str:
    return f"{remaining} attempts remaining"


# Login result copy
LOGIN_SUCCESS = "Login successful"
LOGIN_RATE_LIMITED = "Too many requests, please try again later"
LOGIN_INVALID = "Incorrect password"
LOGIN_PASSWORD_REQUIRED = "Please enter the password"


def login_invalid_with_remaining(remaining: int) -> str:
    return f"{LOGIN_INVALID}, {remaining} attempts remaining"
