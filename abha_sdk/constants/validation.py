"""Regular expressions for identifier validation."""

import re
from typing import Final, Pattern


class ValidationPatterns:
    """Compiled identifier grammars."""

    # XX-XXXX-XXXX-XXXX (2-4-4-4 digits)
    ABHA_NUMBER: Final[Pattern[str]] = re.compile(r"^[0-9]{2}-[0-9]{4}-[0-9]{4}-[0-9]{4}$")
    ABHA_NUMBER_RAW: Final[Pattern[str]] = re.compile(r"^[0-9]{14}$")
    ABHA_ADDRESS: Final[Pattern[str]] = re.compile(
        r"^[a-zA-Z0-9._-]{3,32}@(abdm|sbx)$", re.IGNORECASE | re.ASCII
    )
    # Indian mobile number: 10 digits starting with 6-9
    MOBILE: Final[Pattern[str]] = re.compile(r"^[6-9][0-9]{9}$")
    AADHAAR: Final[Pattern[str]] = re.compile(r"^[0-9]{12}$")
    PIN_CODE: Final[Pattern[str]] = re.compile(r"^[0-9]{6}$")
    OTP: Final[Pattern[str]] = re.compile(r"^[0-9]{6}$")
    EMAIL: Final[Pattern[str]] = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
    DATE: Final[Pattern[str]] = re.compile(r"^([0-9]{2})-([0-9]{2})-([0-9]{4})$")
