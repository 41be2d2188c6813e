"""Client identifier extraction from proxy headers.

Precedence: Cloudflare -> X-Forwarded-For (first hop) -> X-Real-IP -> "unknown".
Every client without a usable header shares the "unknown" bucket.
"""
from typing import Mapping

UNKNOWN_CLIENT = "unknown"


def _header(headers: Mapping[str, str], name: str) -> str:
    # Starlette Headers are case-insensitive already; plain dicts may not be.
    value = headers.get(name)
    if value is None:
        for key, candidate in headers.items():
            if key.lower() == name:
                value = candidate
                break
    return (value or "").strip()


def get_client_ip(headers: Mapping[str, str]) -> str:
    """Return the best-effort client IP for rate limiting."""
    cf_ip = _header(headers, "cf-connecting-ip")
    if cf_ip:
        return cf_ip

    forwarded = _header(headers, "x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    real_ip = _header(headers, "x-real-ip")
    if real_ip:
        return real_ip

    return UNKNOWN_CLIENT
