"""Agregador de settings do transmitsms-bridge.

Re-exporta as settings e funções de cada módulo.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)

# Channel-specific settings
from config.settings.sms import (
    DEFAULT_WEBHOOKS_PREFIX,
    TRANSMITSMS_MMS_BASE_URL,
    TRANSMITSMS_SMS_BASE_URL,
    TransmitSmsSettings,
    get_transmitsms_settings,
)

__all__ = [
    # Constants
    "DEFAULT_WEBHOOKS_PREFIX",
    "TRANSMITSMS_MMS_BASE_URL",
    "TRANSMITSMS_SMS_BASE_URL",
    # Base
    "BaseSettings",
    "Environment",
    # Channels
    "TransmitSmsSettings",
    "get_base_settings",
    "get_transmitsms_settings",
]
