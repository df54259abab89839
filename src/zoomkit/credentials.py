"""
Authentication credentials and the cached access token
"""

from __future__ import annotations

import base64
import time
from dataclasses import dataclass


@dataclass(frozen=True)
class BearerToken:
    """Caller-supplied access token, sent as-is"""

    token: str

    def __repr__(self) -> str:
        return f"BearerToken(token_set={bool(self.token)})"


@dataclass(frozen=True)
class MachineCredential:
    """Server-to-Server OAuth app credentials"""

    account_id: str
    client_id: str
    client_secret: str

    def __repr__(self) -> str:
        return (
            f"MachineCredential("
            f"account_id_set={bool(self.account_id)}, "
            f"client_id_set={bool(self.client_id)}, "
            f"client_secret_set={bool(self.client_secret)}"
            f")"
        )

    @property
    def is_complete(self) -> bool:
        return bool(self.account_id and self.client_id and self.client_secret)

    def basic_auth_header(self) -> str:
        credentials = f"{self.client_id}:{self.client_secret}"
        return "Basic " + base64.b64encode(credentials.encode()).decode()


Credentials = BearerToken | MachineCredential


@dataclass(frozen=True)
class CachedToken:
    value: str
    expires_at: float

    def is_valid(self, now: float | None = None) -> bool:
        current = time.time() if now is None else now
        return current < self.expires_at
