"""Fund distribution simulation for Sovereign Seas campaigns."""

from .calculator import (
    calculate_distribution,
    preview_distribution,
    ranked_entries,
    reconcile_distribution,
)
from .models import (
    DistributionResult,
    ProjectAllocation,
    RankedEntry,
    Reconciliation,
    ReconciliationRow,
)

__all__ = [
    "calculate_distribution",
    "preview_distribution",
    "ranked_entries",
    "reconcile_distribution",
    "DistributionResult",
    "ProjectAllocation",
    "RankedEntry",
    "Reconciliation",
    "ReconciliationRow",
]
