"""Authentication API routes -- guarded admin login, profile, guard admin."""
from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field

from loginguard.api.client_ip import get_client_ip
from loginguard.application.login_service import LoginService
from loginguard.infrastructure.audit import try_log_event
from loginguard.infrastructure.auth.dependencies import get_current_user, require_admin


router = APIRouter(prefix="/api/auth", tags=["auth"])


def get_login_service(request: Request) -> LoginService:
    """The LoginService owned by the app serving this request."""
    return request.app.state.login_service


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class LoginRequest(BaseModel):
    # Emptiness is checked by LoginService after the guard, so locked-out
    # clients always get the lockout response.
    password: str = Field("", max_length=256)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/login")
def api_login(
    req: LoginRequest,
    request: Request,
    service: LoginService = Depends(get_login_service),
):
    """Authenticate the admin. Returns a bearer access token.

    Rejected with 429 while the client is locked out, 422 on an empty
    password and 401 with the remaining attempt count on a wrong password.
    """
    client_ip = get_client_ip(request.headers)
    result = service.login(client_ip, req.password)

    if result.rate_limited:
        raise HTTPException(
            status_code=429,
            detail=result.to_dict(),
            headers={"Retry-After": str(result.reset_in or 0)},
        )
    if result.invalid_input:
        raise HTTPException(status_code=422, detail=result.to_dict())
    if not result.success:
        raise HTTPException(status_code=401, detail=result.to_dict())

    return {
        "success": True,
        "message": result.message,
        "access_token": result.access_token,
        "token_type": "bearer",
    }


@router.get("/me")
def api_me(current_user: dict = Depends(get_current_user)):
    """Return the authenticated token subject."""
    return {"sub": current_user["sub"], "role": current_user.get("role")}


# ---------------------------------------------------------------------------
# Guard administration (admin only)
# ---------------------------------------------------------------------------

@router.get("/guard")
def api_guard_stats(
    admin: dict = Depends(require_admin),
    service: LoginService = Depends(get_login_service),
):
    """Tracked identifiers and active lockouts."""
    guard = service.guard
    return {**guard.stats(), "config": guard.config.to_dict()}


@router.get("/guard/{identifier}")
def api_guard_status(
    identifier: str,
    admin: dict = Depends(require_admin),
    service: LoginService = Depends(get_login_service),
):
    """The decision a login from *identifier* would get right now, plus its raw record."""
    guard = service.guard
    record = guard.get_record(identifier)
    return {
        **guard.check(identifier).to_dict(),
        "record": record.to_dict() if record is not None else None,
    }


@router.delete("/guard/{identifier}")
def api_guard_clear(
    identifier: str,
    admin: dict = Depends(require_admin),
    service: LoginService = Depends(get_login_service),
):
    """Manually lift a lockout / reset the failure count for *identifier*."""
    service.guard.clear(identifier)
    try_log_event("guard_cleared", identifier, {"by": admin["sub"]})
    return {"success": True, "identifier": identifier}
