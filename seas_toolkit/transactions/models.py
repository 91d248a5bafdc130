"""
Type definitions for the write transaction lifecycle.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from seas_toolkit.shared.exceptions import TransactionError


class TxStatus(Enum):
    """Transaction lifecycle states."""

    IDLE = "idle"  # Nothing submitted
    PENDING = "pending"  # Handed to the signer, not yet accepted
    WAITING_FOR_RECEIPT = "waiting_for_receipt"  # Accepted, not yet mined
    CONFIRMED = "confirmed"  # Receipt obtained
    FAILED = "failed"  # Terminal error, see failure_kind


class FailureKind(Enum):
    """Why a transaction failed, drives the message shown to the user."""

    USER_REJECTED = "user_rejected"
    CONTRACT_REVERT = "contract_revert"
    NETWORK = "network"
    UNKNOWN = "unknown"


TERMINAL_STATUSES = frozenset({TxStatus.CONFIRMED, TxStatus.FAILED})
IN_FLIGHT_STATUSES = frozenset({TxStatus.PENDING, TxStatus.WAITING_FOR_RECEIPT})

ALLOWED_TRANSITIONS = {
    TxStatus.IDLE: frozenset({TxStatus.PENDING}),
    TxStatus.PENDING: frozenset({TxStatus.WAITING_FOR_RECEIPT, TxStatus.FAILED}),
    TxStatus.WAITING_FOR_RECEIPT: frozenset(
        {TxStatus.CONFIRMED, TxStatus.FAILED}
    ),
    TxStatus.CONFIRMED: frozenset({TxStatus.IDLE}),
    TxStatus.FAILED: frozenset({TxStatus.IDLE}),
}


@dataclass(frozen=True)
class TransactionState:
    """
    Snapshot of one write action.

    Only CONFIRMED carries a receipt and only FAILED carries an error.
    """

    status: TxStatus = TxStatus.IDLE
    description: Optional[str] = None
    tx_hash: Optional[str] = None
    receipt: Optional[Dict[str, Any]] = None
    error: Optional[TransactionError] = None
    failure_kind: Optional[FailureKind] = None

    @property
    def is_idle(self) -> bool:
        return self.status == TxStatus.IDLE

    @property
    def is_in_flight(self) -> bool:
        return self.status in IN_FLIGHT_STATUSES

    @property
    def is_confirmed(self) -> bool:
        return self.status == TxStatus.CONFIRMED

    @property
    def is_failed(self) -> bool:
        return self.status == TxStatus.FAILED

    @property
    def error_message(self) -> Optional[str]:
        return self.error.message if self.error else None

    @property
    def is_user_rejection(self) -> bool:
        return self.failure_kind == FailureKind.USER_REJECTED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "description": self.description,
            "tx_hash": self.tx_hash,
            "error": self.error_message,
            "failure_kind": (
                self.failure_kind.value if self.failure_kind else None
            ),
        }
