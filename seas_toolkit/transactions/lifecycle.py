"""
Transaction lifecycle state machine.

    IDLE -> PENDING -> WAITING_FOR_RECEIPT -> CONFIRMED | FAILED
    CONFIRMED | FAILED -> IDLE   (reset)

PENDING may also fail directly (signer rejection, revert during gas
estimation, RPC down). A submitted transaction cannot be cancelled; the
lifecycle only reports what happened to it.

Listeners are notified on every transition. Nothing is refreshed
automatically on confirmation: callers that need fresh data subscribe
and re-run their reads.
"""

import asyncio
from functools import partial
from typing import Any, Callable, List, Optional, Tuple

from web3.exceptions import ContractLogicError, TimeExhausted

from seas_toolkit.shared.exceptions import (
    ContractRevertError,
    RetryableException,
    TransactionError,
    TransactionStateError,
    UserRejectedError,
)
from seas_toolkit.shared.logging import get_logger
from seas_toolkit.shared.services.web3_service import Web3Service
from seas_toolkit.transactions.models import (
    ALLOWED_TRANSITIONS,
    TERMINAL_STATUSES,
    FailureKind,
    TransactionState,
    TxStatus,
)

logger = get_logger(__name__)

Listener = Callable[[TransactionState], None]

USER_REJECTED_CODE = 4001  # EIP-1193
USER_REJECTION_MARKERS = (
    "user rejected",
    "user denied",
    "rejected by user",
    "request rejected",
)


def _rpc_error_code(exc: Exception) -> Optional[int]:
    candidates = [getattr(exc, "rpc_response", None)]
    if exc.args:
        candidates.append(exc.args[0])
    for candidate in candidates:
        if isinstance(candidate, dict):
            error = candidate.get("error", candidate)
            if isinstance(error, dict) and "code" in error:
                return error["code"]
    code = getattr(exc, "code", None)
    return code if isinstance(code, int) else None


def _error_message(exc: Exception) -> str:
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc) or exc.__class__.__name__


def classify_transaction_error(
    exc: Exception, tx_hash: Optional[str] = None
) -> Tuple[TransactionError, FailureKind]:
    """
    Map a raw write failure onto the toolkit's error taxonomy.

    Signers that do not report rejections distinctly end up as UNKNOWN.
    """
    if isinstance(exc, UserRejectedError):
        return exc, FailureKind.USER_REJECTED
    if isinstance(exc, ContractRevertError):
        return exc, FailureKind.CONTRACT_REVERT
    if isinstance(exc, TransactionError):
        return exc, FailureKind.UNKNOWN

    message = _error_message(exc)
    lowered = message.lower()

    if _rpc_error_code(exc) == USER_REJECTED_CODE or any(
        marker in lowered for marker in USER_REJECTION_MARKERS
    ):
        return UserRejectedError(message, tx_hash), FailureKind.USER_REJECTED
    if isinstance(exc, ContractLogicError):
        return ContractRevertError(message, tx_hash), FailureKind.CONTRACT_REVERT
    if isinstance(exc, TimeExhausted):
        return (
            TransactionError(
                f"Timed out waiting for confirmation: {message}", tx_hash
            ),
            FailureKind.NETWORK,
        )
    if isinstance(exc, (RetryableException, ConnectionError, TimeoutError, OSError)):
        return TransactionError(message, tx_hash), FailureKind.NETWORK
    return TransactionError(message, tx_hash), FailureKind.UNKNOWN


class TransactionLifecycle:
    """
    Session scoped tracker for one write action at a time.

    Attributes:
        web3_service: Provides wait_for_receipt
        receipt_timeout: Seconds to wait for a receipt, None for the service default
    """

    def __init__(
        self,
        web3_service: Web3Service,
        receipt_timeout: Optional[int] = None,
    ):
        self.web3_service = web3_service
        self.receipt_timeout = receipt_timeout
        self._state = TransactionState()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> TransactionState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a transition listener; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def reset(self) -> TransactionState:
        """Return to IDLE from a terminal state. No-op when already IDLE."""
        if self._state.status == TxStatus.IDLE:
            return self._state
        if self._state.is_in_flight:
            raise TransactionStateError(
                "Cannot reset while a transaction is in flight"
            )
        return self._transition(TransactionState(status=TxStatus.IDLE))

    def _transition(self, new_state: TransactionState) -> TransactionState:
        current = self._state.status
        if new_state.status not in ALLOWED_TRANSITIONS[current]:
            raise TransactionStateError(
                f"Illegal transition {current.value} -> {new_state.status.value}"
            )
        self._state = new_state
        logger.debug(
            f"Transaction {new_state.description or ''} "
            f"{current.value} -> {new_state.status.value}"
        )
        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception:
                logger.exception("Transaction listener failed")
        return new_state

    def _fail(self, exc: Exception, tx_hash: Optional[str] = None) -> TransactionState:
        error, kind = classify_transaction_error(exc, tx_hash)
        logger.error(
            f"Transaction {self._state.description or ''} failed "
            f"({kind.value}): {error.message}"
        )
        return self._transition(
            TransactionState(
                status=TxStatus.FAILED,
                description=self._state.description,
                tx_hash=tx_hash,
                error=error,
                failure_kind=kind,
            )
        )

    async def execute(
        self,
        submit: Callable[[], str],
        description: Optional[str] = None,
    ) -> TransactionState:
        """
        Drive one write from submission to a terminal state.

        Args:
            submit: Blocking callable that sends the transaction and returns its hash
            description: Label used in logs and the state snapshot

        Returns:
            The terminal TransactionState (CONFIRMED or FAILED)
        """
        if self._state.is_in_flight:
            raise TransactionStateError(
                f"Transaction {self._state.description or ''} is still in flight"
            )
        if self._state.status in TERMINAL_STATUSES:
            self.reset()

        self._transition(
            TransactionState(status=TxStatus.PENDING, description=description)
        )
        loop = asyncio.get_running_loop()

        try:
            tx_hash = await loop.run_in_executor(None, submit)
        except Exception as e:
            return self._fail(e)

        self._transition(
            TransactionState(
                status=TxStatus.WAITING_FOR_RECEIPT,
                description=description,
                tx_hash=tx_hash,
            )
        )

        try:
            receipt: Any = await loop.run_in_executor(
                None,
                partial(
                    self.web3_service.wait_for_receipt,
                    tx_hash,
                    self.receipt_timeout,
                ),
            )
        except Exception as e:
            return self._fail(e, tx_hash)

        if receipt.get("status") == 0:
            return self._fail(
                ContractRevertError("Transaction reverted on chain", tx_hash),
                tx_hash,
            )

        logger.info(f"Transaction {description or tx_hash} confirmed")
        return self._transition(
            TransactionState(
                status=TxStatus.CONFIRMED,
                description=description,
                tx_hash=tx_hash,
                receipt=receipt,
            )
        )
