"""Unit tests for StaticTokenAuthGate and Principal."""

from __future__ import annotations

import pytest

from src.models.auth import Principal
from src.providers.auth.static_token_gate import StaticTokenAuthGate


@pytest.fixture
def gate() -> StaticTokenAuthGate:
    return StaticTokenAuthGate(
        {
            "admin-token": frozenset({"Admin"}),
            "viewer-token": frozenset({"Viewer"}),
        }
    )


class TestStaticTokenAuthGate:
    def test_enabled_with_tokens(self, gate) -> None:
        assert gate.enabled is True

    def test_disabled_without_tokens(self) -> None:
        assert StaticTokenAuthGate({}).enabled is False

    def test_known_token_yields_principal(self, gate) -> None:
        principal = gate.authenticate("admin-token")

        assert principal is not None
        assert principal.has_role("Admin")
        assert principal.subject.startswith("token:")
        assert "admin-token" not in principal.subject

    def test_unknown_token_rejected(self, gate) -> None:
        assert gate.authenticate("admin-token-2") is None

    def test_empty_token_rejected(self, gate) -> None:
        assert gate.authenticate("") is None


class TestPrincipal:
    def test_role_check_is_case_insensitive(self) -> None:
        principal = Principal(subject="token:abc", roles=frozenset({"Admin"}))
        assert principal.has_role("admin")
        assert not principal.has_role("Viewer")
