"""Credential lookup for summarization providers.

Providers never read the environment themselves; a resolver is passed
in so tests can supply keys explicitly.
"""

from __future__ import annotations

import os
from typing import Mapping, Protocol

from ..core.models import Provider

# Provider → env vars checked in order
KEY_ENV_VARS: dict[Provider, tuple[str, ...]] = {
    Provider.OPENAI: ("OPENAI_API_KEY",),
    Provider.GEMINI: ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
    Provider.CLAUDE: ("CLAUDE_API_KEY",),
}


class CredentialResolver(Protocol):
    def lookup(self, provider: Provider) -> str | None:
        """Return the secret for *provider*, or ``None`` when absent."""
        ...


class EnvironmentCredentialResolver:
    """Read API keys from the process environment (or a given mapping)."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = os.environ if environ is None else environ

    def lookup(self, provider: Provider) -> str | None:
        for name in KEY_ENV_VARS.get(Provider(provider), ()):
            value = (self._environ.get(name) or "").strip()
            if value:
                return value
        return None


class MappingCredentialResolver:
    """Keys supplied directly, keyed by provider name."""

    def __init__(self, keys: Mapping[Provider | str, str]) -> None:
        self._keys = {Provider(k): v for k, v in keys.items()}

    def lookup(self, provider: Provider) -> str | None:
        value = (self._keys.get(Provider(provider)) or "").strip()
        return value or None


def env_var_names(provider: Provider) -> list[str]:
    return list(KEY_ENV_VARS.get(Provider(provider), ()))
