"""Bearer-token auth gate backed by a static token → roles table.

# ─── HOW THE STATIC TOKEN GATE WORKS ─────────────────────────────────
#
# Operators provision opaque tokens out of band and list them in the
# API_TOKENS setting as ``token:Role1|Role2`` pairs.  A request's bearer
# credential is looked up with a constant-time comparison against every
# configured token, so response timing doesn't reveal partial matches.
#
# Dev mode: if no tokens are configured the gate reports ``enabled=False``
# and the API layer lets every request through, mirroring how local
# development runs without credentials.
# ─────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import hashlib
import hmac
from collections.abc import Mapping

import structlog

from src.interfaces.auth_gate import IAuthGate
from src.models.auth import Principal

logger = structlog.get_logger(logger_name=__name__)


def _fingerprint(token: str) -> str:
    """Short non-reversible label for a token, safe to put in logs."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()[:12]


class StaticTokenAuthGate(IAuthGate):
    """Validates bearer tokens against a fixed table.

    Parameters
    ----------
    token_roles:
        Mapping of token string to the roles it grants.
    """

    def __init__(self, token_roles: Mapping[str, frozenset[str]]) -> None:
        self._principals = [
            (token.encode("utf-8"), Principal(subject=f"token:{_fingerprint(token)}", roles=roles))
            for token, roles in token_roles.items()
        ]

    @property
    def enabled(self) -> bool:
        return bool(self._principals)

    def authenticate(self, token: str) -> Principal | None:
        if not token:
            return None
        candidate = token.encode("utf-8")
        match: Principal | None = None
        # No early exit: every configured token is compared.
        for expected, principal in self._principals:
            if hmac.compare_digest(candidate, expected):
                match = principal
        if match is None:
            logger.info("auth_token_rejected", token=_fingerprint(token))
        return match
