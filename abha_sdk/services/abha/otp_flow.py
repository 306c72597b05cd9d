"""ABHA OTP login flow - generate and verify with a per-transaction state machine."""

import asyncio
from collections import OrderedDict
from datetime import timedelta
from typing import Iterable, List, Optional, Set, Tuple, Union

from loguru import logger

from ...constants.api import ABDM_BASE_URLS, ApiEndpoints
from ...constants.defaults import Defaults
from ...constants.errors import ErrorCodes
from ...core.enums import AuthMethod, LoginHint, OTPSystem, Scope, TransactionState
from ...core.environment import Environment
from ...core.exceptions import (
    InvalidTransactionState,
    ProtocolViolation,
    RateLimitError,
    TransportError,
    TransportTimeoutError,
    ValidationError,
)
from ...models.identifiers import HealthID, OTPCode, identifier_for_login_hint
from .encryption import CryptoChallengeEncoder
from .headers import build_headers
from .models import OTPRequestResult, OTPTransaction, VerifyResult, parse_verify_response
from .session import Clock, SessionManager, utc_now
from .transport import Transport


def normalize_scope(scope: Union[Scope, str, Iterable[Union[Scope, str]]]) -> Tuple[Scope, ...]:
    """
    Coerce a scope or list of scopes to an ordered tuple without duplicates.

    Raises:
        ValidationError: If the scope is empty or names an unknown value
    """
    items = [scope] if isinstance(scope, (Scope, str)) else list(scope or [])
    result: List[Scope] = []
    for item in items:
        try:
            value = Scope(item)
        except ValueError as e:
            raise ValidationError(
                f"Unknown scope '{item}'", code=ErrorCodes.INVALID_SCOPE, field="scope"
            ) from e
        if value not in result:
            result.append(value)
    if not result:
        raise ValidationError(
            "At least one scope is required", code=ErrorCodes.INVALID_SCOPE, field="scope"
        )
    return tuple(result)


class OTPTransactionFlow:
    """Two-step OTP login.

    ``request_otp`` sends an encrypted identifier and records a REQUESTED
    transaction under the returned txnId. ``verify_otp`` moves it to VERIFIED
    or FAILED. Terminal transactions can not be verified again.

    Only the most recent ``finished_limit`` terminal transactions are kept, and
    REQUESTED transactions older than ``transaction_ttl_seconds`` are dropped.
    An evicted txnId is treated like an unknown one.
    """

    def __init__(
        self,
        session: SessionManager,
        encoder: CryptoChallengeEncoder,
        transport: Transport,
        environment: Environment = Environment.SANDBOX,
        clock: Optional[Clock] = None,
        finished_limit: int = Defaults.FINISHED_TRANSACTIONS_KEPT,
        transaction_ttl_seconds: int = Defaults.OTP_TRANSACTION_TTL_SECONDS,
    ):
        self.session = session
        self.encoder = encoder
        self.transport = transport
        self.environment = Environment.coerce(environment)
        self._clock = clock or utc_now
        self.finished_limit = finished_limit
        self.transaction_ttl_seconds = transaction_ttl_seconds
        self._transactions: "OrderedDict[str, OTPTransaction]" = OrderedDict()
        self._verifying: Set[str] = set()

    @property
    def base_url(self) -> str:
        return ABDM_BASE_URLS[self.environment]

    def get_transaction(self, txn_id: str) -> Optional[OTPTransaction]:
        """Look up a transaction created by this flow."""
        return self._transactions.get(txn_id)

    def state_of(self, txn_id: str) -> Optional[TransactionState]:
        txn = self._transactions.get(txn_id)
        return txn.state if txn else None

    async def request_otp(
        self,
        scope: Union[Scope, str, Iterable[Union[Scope, str]]],
        login_hint: Union[LoginHint, str],
        identifier: str,
        otp_system: Union[OTPSystem, str] = OTPSystem.ABDM,
        timeout: Optional[float] = None,
        txn_id: Optional[str] = None,
    ) -> OTPRequestResult:
        """
        Ask ABHA to send an OTP for the given identifier.

        Input is validated before any network call is made. Passing the txnId
        of a REQUESTED transaction asks for the OTP to be sent again within
        that transaction.

        Args:
            scope: One or more scopes, e.g. ``[Scope.ABHA_LOGIN, Scope.MOBILE_VERIFY]``
            login_hint: Identifier family (abha-number, mobile, aadhaar, email)
            identifier: Identifier value for the login hint
            otp_system: Which mobile receives the OTP (abdm or aadhaar)
            timeout: Overall time limit in seconds
            txn_id: Transaction to resend the OTP for

        Returns:
            OTPRequestResult with the txnId and the server message

        Raises:
            ValidationError: If the identifier, scope or OTP system is invalid
            InvalidTransactionState: If ``txn_id`` is unknown, terminal or being verified
            TransportError: On network failure, timeout or error response
            ProtocolViolation: If the response has no txnId
        """
        parsed = identifier_for_login_hint(login_hint, identifier)
        scopes = normalize_scope(scope)
        try:
            system = OTPSystem(otp_system)
        except ValueError as e:
            raise ValidationError(
                f"Unknown OTP system '{otp_system}'",
                code=ErrorCodes.INVALID_OTP_SYSTEM,
                field="otp_system",
            ) from e
        hint = LoginHint(login_hint)
        if txn_id is not None:
            self._require_requested(txn_id)

        # ABHA numbers are sent in the hyphenated form
        login_id = parsed.display if isinstance(parsed, HealthID) else parsed.raw

        return await self._with_timeout(
            self._request(scopes, hint, login_id, system, parsed.masked, txn_id),
            timeout,
            "OTP request",
        )

    async def _request(
        self,
        scopes: Tuple[Scope, ...],
        hint: LoginHint,
        login_id: str,
        system: OTPSystem,
        masked_id: str,
        prior_txn_id: Optional[str],
    ) -> OTPRequestResult:
        public_key = await self.session.get_public_key()
        token = await self.session.get_token()
        body = {
            "scope": [s.value for s in scopes],
            "loginHint": hint.value,
            "loginId": self.encoder.encrypt(login_id, public_key),
            "otpSystem": system.value,
        }
        if prior_txn_id:
            body["txnId"] = prior_txn_id
            logger.info(f"Resending ABHA OTP for transaction {prior_txn_id}")
        else:
            logger.info(f"Requesting ABHA OTP via {hint.value} for {masked_id}")
        response = await self.transport.send(
            "POST",
            self.base_url + ApiEndpoints.LOGIN_REQUEST_OTP,
            build_headers(token.value),
            body,
        )
        data = response.json
        txn_id = data.get("txnId") if isinstance(data, dict) else None
        if not isinstance(txn_id, str) or not txn_id:
            raise ProtocolViolation("OTP request response has no txnId")

        message = data.get("message") or ""
        self._store(
            OTPTransaction(
                txn_id=txn_id,
                scope=scopes,
                login_hint=hint,
                created_at=self._clock(),
                state=TransactionState.REQUESTED,
                message=message,
            ),
            prior_txn_id,
        )
        logger.info(f"ABHA OTP sent, transaction {txn_id}")
        return OTPRequestResult(txn_id=txn_id, message=message)

    def _require_requested(self, txn_id: str) -> OTPTransaction:
        self._prune()
        txn = self._transactions.get(txn_id)
        if txn is None:
            raise InvalidTransactionState(txn_id)
        if txn.state != TransactionState.REQUESTED:
            raise InvalidTransactionState(txn_id, txn.state)
        if txn_id in self._verifying:
            raise InvalidTransactionState(
                txn_id, txn.state, f"Transaction {txn_id} is already being verified"
            )
        return txn

    def _store(self, txn: OTPTransaction, prior_txn_id: Optional[str]) -> None:
        """Record a REQUESTED transaction, replacing a resent one."""
        existing = self._transactions.get(txn.txn_id)
        if existing is not None and existing.state != TransactionState.REQUESTED:
            # Finished while the resend was in flight
            return
        if prior_txn_id and prior_txn_id != txn.txn_id:
            prior = self._transactions.get(prior_txn_id)
            if prior is not None and prior.state == TransactionState.REQUESTED:
                del self._transactions[prior_txn_id]
        self._transactions[txn.txn_id] = txn
        self._transactions.move_to_end(txn.txn_id)
        self._prune()

    def _prune(self) -> None:
        """Drop stale REQUESTED transactions and the oldest finished ones."""
        cutoff = self._clock() - timedelta(seconds=self.transaction_ttl_seconds)
        finished: List[str] = []
        for txn_id, txn in list(self._transactions.items()):
            if txn.state == TransactionState.REQUESTED:
                if txn.created_at < cutoff and txn_id not in self._verifying:
                    del self._transactions[txn_id]
                    logger.debug(f"Dropped expired OTP transaction {txn_id}")
            else:
                finished.append(txn_id)
        for txn_id in finished[: max(len(finished) - self.finished_limit, 0)]:
            del self._transactions[txn_id]

    async def verify_otp(
        self, txn_id: str, otp: str, timeout: Optional[float] = None
    ) -> VerifyResult:
        """
        Verify the OTP for a REQUESTED transaction.

        Args:
            txn_id: Transaction ID from ``request_otp``
            otp: 6-digit OTP entered by the user
            timeout: Overall time limit in seconds

        Returns:
            ProfileResult or AccountListResult

        Raises:
            ValidationError: If the OTP is malformed
            InvalidTransactionState: If the transaction is unknown, terminal or
                already being verified
            TransportError: On network failure, timeout or error response
            ProtocolViolation: If the response matches neither result shape
        """
        code = OTPCode.parse(otp)
        txn = self._require_requested(txn_id)

        self._verifying.add(txn_id)
        try:
            return await self._with_timeout(self._verify(txn, code), timeout, "OTP verification")
        finally:
            self._verifying.discard(txn_id)

    async def _verify(self, txn: OTPTransaction, code: OTPCode) -> VerifyResult:
        public_key = await self.session.get_public_key()
        token = await self.session.get_token()
        body = {
            "scope": [s.value for s in txn.scope],
            "authData": {
                "authMethods": [AuthMethod.OTP.value],
                "otp": {
                    "txnId": txn.txn_id,
                    "otpValue": self.encoder.encrypt(code.raw, public_key),
                },
            },
        }

        try:
            response = await self.transport.send(
                "POST",
                self.base_url + ApiEndpoints.LOGIN_VERIFY,
                build_headers(token.value),
                body,
            )
            result = parse_verify_response(response.json, txn.txn_id)
        except RateLimitError:
            raise
        except TransportError as e:
            # No status means the request may never have reached the server
            if e.status is not None:
                self._fail(txn, e)
            raise
        except ProtocolViolation as e:
            self._fail(txn, e)
            raise

        txn.state = TransactionState.VERIFIED
        txn.message = result.message
        self._prune()
        logger.info(f"ABHA OTP verified for transaction {txn.txn_id}")
        return result

    def _fail(self, txn: OTPTransaction, error: Exception) -> None:
        txn.state = TransactionState.FAILED
        txn.message = str(error)
        self._prune()
        logger.warning(f"ABHA OTP verification failed for transaction {txn.txn_id}: {error}")

    async def _with_timeout(self, coro, timeout: Optional[float], operation: str):
        if timeout is None:
            return await coro
        try:
            return await asyncio.wait_for(coro, timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"{operation} timed out after {timeout}s")
            raise TransportTimeoutError(f"{operation} timed out", timeout=timeout) from e
