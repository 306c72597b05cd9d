"""ABDM deployment environment.

Single source of truth for which ABDM deployment a client talks to and which
domain suffix its ABHA addresses carry.
"""

from enum import Enum
from typing import Optional, Union


class Environment(str, Enum):
    """ABDM deployment targeted by a client configuration."""

    SANDBOX = "sandbox"
    PRODUCTION = "production"

    @property
    def address_domain(self) -> str:
        """Domain suffix used by ABHA addresses in this environment."""
        return "sbx" if self is Environment.SANDBOX else "abdm"

    @classmethod
    def from_domain(cls, domain: str) -> "Environment":
        """Map an ABHA address domain (``sbx``/``abdm``) to its environment."""
        return cls.SANDBOX if domain.lower() == "sbx" else cls.PRODUCTION

    @classmethod
    def coerce(cls, value: Optional[Union[str, "Environment"]]) -> "Environment":
        """Accept an enum member or its string value; ``None`` means production.

        Raises:
            ConfigurationError: If the value names no known environment
        """
        if value is None:
            return cls.PRODUCTION
        if isinstance(value, Environment):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            from .exceptions import ConfigurationError

            raise ConfigurationError(
                f"Unknown ABDM environment: {value!r}",
                details={"allowed": cls.values()},
            ) from None

    @classmethod
    def values(cls) -> list:
        """Return list of all enum values."""
        return [e.value for e in cls]
