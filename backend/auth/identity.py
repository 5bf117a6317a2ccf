# backend/auth/identity.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Protocol, Tuple

from fastapi import Request

from backend import config


@dataclass(frozen=True)
class Identity:
    id: int
    name: str


class IdentityProvider(Protocol):
    """Resolves an opaque API key to the user it belongs to."""

    def lookup(self, api_key: str) -> Optional[Identity]:
        ...


class StaticKeyDirectory:
    """Fixed in-memory key table; stands in for a real user store."""

    def __init__(self, keys: Mapping[str, Tuple[int, str]]):
        self._keys: Dict[str, Identity] = {
            key: Identity(id=user_id, name=name) for key, (user_id, name) in keys.items()
        }

    def lookup(self, api_key: str) -> Optional[Identity]:
        return self._keys.get(api_key)


def default_directory() -> StaticKeyDirectory:
    return StaticKeyDirectory(config.API_KEYS)


def get_identity_provider(request: Request) -> IdentityProvider:
    # installed on app.state at startup; swap it there for another store
    return request.app.state.identity_provider
