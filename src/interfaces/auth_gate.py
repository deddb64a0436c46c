"""Abstract base class for bearer-credential validation.

The auth gate answers one question: which principal, if any, does this
bearer credential belong to?  Issuing credentials is somebody else's job.
Role checks happen in the API layer (``src/api/auth.py``); the collection
caches never see the caller's identity.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.auth import Principal


class IAuthGate(ABC):
    """Contract for bearer-credential validators."""

    @property
    @abstractmethod
    def enabled(self) -> bool:
        """``False`` when the gate is switched off and every request passes."""

    @abstractmethod
    def authenticate(self, token: str) -> Principal | None:
        """Return the principal for *token*, or ``None`` if it is not valid."""
