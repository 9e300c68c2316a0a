from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, Header, HTTPException

from church_admin.core.config import settings
from church_admin.core.security import decode_access_token

ADMIN_ROLES = frozenset({"ADMIN", "PASTOR"})


@dataclass(frozen=True)
class AuthContext:
    user_id: int
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES


def get_auth_context(
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> AuthContext | None:
    """
    Auth boundary.

    With AUTH_MODE=jwt every request must carry `Authorization: Bearer <token>`
    issued by /auth/login. In dev/tests auth can be disabled (AUTH_MODE=none),
    in which case no context is produced and role checks are skipped.
    """
    if settings.auth_mode == "none":
        return None

    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="authentication required")
    claims = decode_access_token(authorization[len("Bearer "):].strip())
    if claims is None or claims.get("userId") is None:
        raise HTTPException(status_code=401, detail="invalid token")
    return AuthContext(user_id=int(claims["userId"]), role=str(claims.get("role") or "MEMBER"))


def require_auth(ctx: AuthContext | None = Depends(get_auth_context)) -> AuthContext:
    if ctx is None:
        raise HTTPException(status_code=401, detail="authentication required")
    return ctx


def require_admin(ctx: AuthContext | None = Depends(get_auth_context)) -> AuthContext | None:
    if ctx is not None and not ctx.is_admin:
        raise HTTPException(status_code=403, detail="admin role required")
    return ctx
