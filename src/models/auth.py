"""Identity model produced by the auth gate."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Principal(BaseModel):
    """The caller behind a validated bearer credential.

    ``subject`` is a non-secret label for logs; the token itself is never
    stored on the principal.
    """

    model_config = ConfigDict(frozen=True)

    subject: str
    roles: frozenset[str] = Field(default_factory=frozenset)

    def has_role(self, role: str) -> bool:
        """Role names compare case-insensitively."""
        wanted = role.casefold()
        return any(r.casefold() == wanted for r in self.roles)
