"""ABHA SDK - Client toolkit for India's ABHA digital health identity APIs."""

import importlib as _importlib
from typing import TYPE_CHECKING, Any

__version__ = "1.0.0"
__license__ = "MIT"

if TYPE_CHECKING:
    from .core.config.settings import ABHASettings as ABHASettings
    from .core.config.settings import get_settings as get_settings
    from .core.environment import Environment as Environment
    from .core.exceptions import ABHAError as ABHAError
    from .core.logger import setup_logging as setup_logging
    from .models.identifiers import HealthAddress as HealthAddress
    from .models.identifiers import HealthID as HealthID
    from .services.abha.client import ABHAClient as ABHAClient
    from .services.abha.encryption import CryptoChallengeEncoder as CryptoChallengeEncoder
    from .services.abha.otp_flow import OTPTransactionFlow as OTPTransactionFlow
    from .services.abha.session import SessionManager as SessionManager

# Explicit lazy-loading map: name -> (module_path, attribute_name)
_LAZY_MODULE_MAP = {
    # Core
    "ABHASettings": ("abha_sdk.core.config.settings", "ABHASettings"),
    "get_settings": ("abha_sdk.core.config.settings", "get_settings"),
    "Environment": ("abha_sdk.core.environment", "Environment"),
    "ABHAError": ("abha_sdk.core.exceptions", "ABHAError"),
    "setup_logging": ("abha_sdk.core.logger", "setup_logging"),
    # Identifiers
    "HealthID": ("abha_sdk.models.identifiers", "HealthID"),
    "HealthAddress": ("abha_sdk.models.identifiers", "HealthAddress"),
    # Services
    "ABHAClient": ("abha_sdk.services.abha.client", "ABHAClient"),
    "CryptoChallengeEncoder": ("abha_sdk.services.abha.encryption", "CryptoChallengeEncoder"),
    "OTPTransactionFlow": ("abha_sdk.services.abha.otp_flow", "OTPTransactionFlow"),
    "SessionManager": ("abha_sdk.services.abha.session", "SessionManager"),
}

# Auto-derive __all__ from _LAZY_MODULE_MAP to prevent manual sync issues
__all__ = list(_LAZY_MODULE_MAP.keys())


def __getattr__(name: str) -> Any:
    """Lazy import with explicit mapping - importlib based."""
    if name in _LAZY_MODULE_MAP:
        module_path, attr_name = _LAZY_MODULE_MAP[name]
        module = _importlib.import_module(module_path)
        attr = getattr(module, attr_name)
        # Cache in module globals to avoid repeated imports
        globals()[name] = attr
        return attr
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
