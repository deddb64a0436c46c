"""Auth gate providers.

StaticTokenAuthGate validates bearer tokens against the API_TOKENS setting.
"""

from src.providers.auth.static_token_gate import StaticTokenAuthGate

__all__ = ["StaticTokenAuthGate"]
