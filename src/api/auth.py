"""Role-based access dependencies for the API routes.

# ─── HOW THE ROLE GATE WORKS ─────────────────────────────────────────
#
# ``require_role("Admin")`` builds a FastAPI dependency that:
#
#   1. Reads the ``Authorization: Bearer <token>`` header.
#   2. Asks the IAuthGate on ``app.state.auth_gate`` who the token
#      belongs to.
#   3. Answers 401 (no/unknown token) or 403 (token lacks the role).
#
# FastAPI resolves dependencies before the route body runs, so a rejected
# request never reaches a store or a collection cache.
#
# Dev mode: when no gate is configured, or the gate has no tokens, the
# dependency lets the request through and yields ``None``.
# ─────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Annotated

import structlog
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.interfaces.auth_gate import IAuthGate
from src.models.auth import Principal
from src.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

ADMIN_ROLE = "Admin"

# auto_error=False: a missing header is reported by us as 401 with a
# WWW-Authenticate challenge rather than FastAPI's default 403.
_bearer_scheme = HTTPBearer(auto_error=False)

BearerDep = Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer_scheme)]

_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def _get_auth_gate(request: Request) -> IAuthGate | None:
    """Return the auth gate from application state, or ``None``."""
    return getattr(request.app.state, "auth_gate", None)


def require_role(role: str) -> Callable[..., Awaitable[Principal | None]]:
    """Build a dependency that admits only principals holding *role*."""

    async def _check(request: Request, credentials: BearerDep) -> Principal | None:
        gate = _get_auth_gate(request)
        if gate is None or not gate.enabled:
            return None

        if credentials is None:
            raise HTTPException(status_code=401, detail="Authentication required", headers=_CHALLENGE)

        principal = gate.authenticate(credentials.credentials)
        if principal is None:
            raise HTTPException(status_code=401, detail="Invalid bearer token", headers=_CHALLENGE)

        if not principal.has_role(role):
            _logger.info(
                "auth_role_denied",
                subject=principal.subject,
                required_role=role,
                path=str(request.url.path),
            )
            raise HTTPException(status_code=403, detail=f"Role '{role}' required")

        structlog.contextvars.bind_contextvars(principal=principal.subject)
        return principal

    return _check


AdminDep = Annotated[Principal | None, Depends(require_role(ADMIN_ROLE))]
