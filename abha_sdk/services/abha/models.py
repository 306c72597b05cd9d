"""ABHA API models - dataclass and pydantic definitions."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from ...core.enums import ABHAStatus, ABHAType, Gender, KYCDocumentType, LoginHint, Scope
from ...core.enums import TransactionState
from ...core.exceptions import ProtocolViolation
from ...utils.dates import calculate_age, parse_abha_date
from ...utils.formatting import format_abha_name
from ...utils.token_utils import calculate_effective_lifetime


@dataclass(frozen=True)
class SessionToken:
    """Gateway session token. Replaced on renewal, never mutated."""

    value: str
    issued_at: datetime
    expires_in_seconds: int
    refresh_token: str = ""
    refresh_expires_in_seconds: int = 0

    @property
    def expires_at(self) -> datetime:
        return self.issued_at + timedelta(seconds=self.expires_in_seconds)

    def is_expired(self, now: datetime, buffer_seconds: int = 0) -> bool:
        """
        Check whether the token must be renewed.

        Args:
            now: Current time (same timezone awareness as issued_at)
            buffer_seconds: Treat the token as expired this long before real expiry

        Returns:
            True once less than ``buffer_seconds`` of lifetime remain
        """
        usable = calculate_effective_lifetime(self.expires_in_seconds, buffer_seconds)
        return now >= self.issued_at + timedelta(seconds=usable)

    def __repr__(self) -> str:
        return (
            f"SessionToken(issued_at={self.issued_at.isoformat()}, "
            f"expires_in_seconds={self.expires_in_seconds})"
        )


@dataclass(frozen=True)
class PublicKeyMaterial:
    """RSA public key served by the ABHA certificate endpoint."""

    key: str
    algorithm: str


class _ABHAModel(BaseModel):
    """Base for response bodies: camelCase aliases, unknown fields ignored."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Tokens(_ABHAModel):
    """User-level tokens returned after OTP verification."""

    token: str
    expires_in: int = Field(default=0, alias="expiresIn")
    refresh_token: str = Field(default="", alias="refreshToken")
    refresh_expires_in: int = Field(default=0, alias="refreshExpiresIn")

    def __repr__(self) -> str:
        return f"Tokens(expires_in={self.expires_in})"


class Profile(_ABHAModel):
    """Full ABHA profile as returned by the V3 API."""

    # Name
    first_name: str = Field(default="", alias="firstName")
    middle_name: Optional[str] = Field(default=None, alias="middleName")
    last_name: str = Field(default="", alias="lastName")
    name: Optional[str] = None

    # Demographics
    dob: Optional[str] = None
    gender: Optional[Gender] = None
    mobile: Optional[str] = None
    email: Optional[str] = None

    # Identifiers
    abha_number: str = Field(alias="ABHANumber")
    phr_address: List[str] = Field(default_factory=list, alias="phrAddress")
    preferred_abha_address: Optional[str] = Field(default=None, alias="preferredAbhaAddress")
    abha_status: Optional[ABHAStatus] = Field(default=None, alias="abhaStatus")
    abha_type: Optional[ABHAType] = Field(default=None, alias="abhaType")

    # Address
    address: Optional[str] = None
    state_code: Optional[str] = Field(default=None, alias="stateCode")
    state_name: Optional[str] = Field(default=None, alias="stateName")
    district_code: Optional[str] = Field(default=None, alias="districtCode")
    district_name: Optional[str] = Field(default=None, alias="districtName")
    pin_code: Optional[str] = Field(default=None, alias="pinCode")
    town_name: Optional[str] = Field(default=None, alias="townName")
    village_name: Optional[str] = Field(default=None, alias="villageName")
    sub_district_name: Optional[str] = Field(default=None, alias="subDistrictName")

    photo: Optional[str] = None
    profile_photo: Optional[str] = Field(default=None, alias="profilePhoto")

    # Verification
    kyc_verified: Optional[bool] = Field(default=None, alias="kycVerified")
    kyc_document_type: Optional[KYCDocumentType] = Field(default=None, alias="kycDocumentType")
    verification_status: Optional[str] = Field(default=None, alias="verificationStatus")
    verification_type: Optional[str] = Field(default=None, alias="verificationType")
    email_verified: Optional[bool] = Field(default=None, alias="emailVerified")

    auth_methods: List[str] = Field(default_factory=list, alias="authMethods")
    tags: Dict[str, str] = Field(default_factory=dict)
    created_date: Optional[str] = Field(default=None, alias="createdDate")
    last_modified_date: Optional[str] = Field(default=None, alias="lastModifiedDate")

    @property
    def full_name(self) -> str:
        """Composed display name; falls back to ``name`` when parts are missing."""
        return format_abha_name(self.first_name, self.middle_name, self.last_name) or (
            self.name or ""
        )

    @property
    def date_of_birth(self):
        return parse_abha_date(self.dob) if self.dob else None

    @property
    def age(self) -> Optional[int]:
        return calculate_age(self.dob) if self.dob else None


class AccountSummary(_ABHAModel):
    """One ABHA account linked to a mobile number."""

    abha_number: str = Field(alias="ABHANumber")
    preferred_abha_address: Optional[str] = Field(default=None, alias="preferredAbhaAddress")
    name: str = ""
    status: Optional[ABHAStatus] = None
    profile_photo: Optional[str] = Field(default=None, alias="profilePhoto")


@dataclass
class OTPTransaction:
    """An OTP transaction bound to a server-issued txnId."""

    txn_id: str
    scope: Tuple[Scope, ...]
    login_hint: LoginHint
    created_at: datetime
    state: TransactionState = TransactionState.REQUESTED
    message: str = ""


@dataclass(frozen=True)
class OTPRequestResult:
    """Outcome of an OTP generate call."""

    txn_id: str
    message: str


@dataclass(frozen=True)
class ProfileResult:
    """Verify outcome carrying a single profile."""

    txn_id: str
    tokens: Tokens
    profile: Profile
    message: str = ""
    is_new: bool = False


@dataclass(frozen=True)
class AccountListResult:
    """Verify outcome carrying the accounts linked to the login hint."""

    txn_id: str
    tokens: Tokens
    accounts: List[AccountSummary] = field(default_factory=list)
    message: str = ""


VerifyResult = Union[ProfileResult, AccountListResult]


def parse_verify_response(data: Dict[str, Any], txn_id: str) -> VerifyResult:
    """
    Decide the verify result shape at the deserialization boundary.

    A payload must carry exactly one of ``ABHAProfile`` and a non-empty
    ``accounts`` list.

    Args:
        data: Parsed JSON body of the verify call
        txn_id: Transaction the response belongs to (used when the body omits it)

    Raises:
        ProtocolViolation: If the payload carries both shapes, neither, or is malformed
    """
    if not isinstance(data, dict):
        raise ProtocolViolation("Verify response is not a JSON object")

    has_profile = data.get("ABHAProfile") is not None
    has_accounts = data.get("accounts") is not None

    if has_profile and has_accounts:
        raise ProtocolViolation(
            "Verify response carries both a profile and an account list",
            details={"txn_id": txn_id},
        )
    if not has_profile and not has_accounts:
        raise ProtocolViolation(
            "Verify response carries neither a profile nor an account list",
            details={"txn_id": txn_id},
        )
    if has_accounts and not isinstance(data["accounts"], list):
        raise ProtocolViolation("Verify response 'accounts' is not a list", details={"txn_id": txn_id})

    try:
        tokens = Tokens.model_validate(data.get("tokens") or {})
        message = data.get("message") or ""
        result_txn_id = data.get("txnId") or txn_id

        if has_profile:
            return ProfileResult(
                txn_id=result_txn_id,
                tokens=tokens,
                profile=Profile.model_validate(data["ABHAProfile"]),
                message=message,
                is_new=bool(data.get("isNew", False)),
            )

        accounts = [AccountSummary.model_validate(item) for item in data["accounts"]]
    except PydanticValidationError as e:
        raise ProtocolViolation(
            f"Verify response could not be parsed: {e.error_count()} invalid field(s)",
            details={"txn_id": txn_id},
        ) from e

    if not accounts:
        raise ProtocolViolation(
            "Verify response carries an empty account list", details={"txn_id": txn_id}
        )
    return AccountListResult(
        txn_id=result_txn_id, tokens=tokens, accounts=accounts, message=message
    )
