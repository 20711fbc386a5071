"""Agregador de settings do relay.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Auth settings
from config.settings.auth import (
    AUTH_TOKEN_PREFIX,
    AuthSettings,
    get_auth_settings,
)

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    StoreBackend,
    StoreSettings,
    get_base_settings,
    get_store_settings,
)

# Relay settings
from config.settings.relay import (
    DEFAULT_CREDENTIAL_HEADER,
    RelaySettings,
    get_relay_settings,
)

__all__ = [
    # Constants
    "AUTH_TOKEN_PREFIX",
    "DEFAULT_CREDENTIAL_HEADER",
    # Auth
    "AuthSettings",
    # Base
    "BaseSettings",
    "Environment",
    # Relay
    "RelaySettings",
    "StoreBackend",
    "StoreSettings",
    "get_auth_settings",
    "get_base_settings",
    "get_relay_settings",
    "get_store_settings",
]
