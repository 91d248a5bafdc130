"""Write transactions and their lifecycle."""

from .lifecycle import TransactionLifecycle, classify_transaction_error
from .models import FailureKind, TransactionState, TxStatus
from .writer import CampaignWriter

__all__ = [
    "CampaignWriter",
    "FailureKind",
    "TransactionLifecycle",
    "TransactionState",
    "TxStatus",
    "classify_transaction_error",
]
