"""
Type definitions for fund distribution results.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class RankedEntry:
    """One voting-eligible project, in the chain's canonical rank order."""

    project_id: int
    vote_count: int


@dataclass
class ProjectAllocation:
    """Computed payout for one ranked project."""

    rank: int  # 1-based position in the chain's ordering
    project_id: int
    vote_count: int
    weight: int  # vote_count, or isqrt(vote_count) under quadratic
    funds_share: int  # Base units
    is_winner: bool


@dataclass
class DistributionResult:
    """
    Outcome of a distribution calculation.

    ``platform_fee + admin_fee + sum(funds_share) + unallocated_remainder``
    always equals ``total_funds``.
    """

    total_funds: int
    platform_fee: int
    admin_fee: int
    distributable_funds: int
    total_weight: int
    unallocated_remainder: int
    use_quadratic_distribution: bool
    max_winners: int
    allocations: List[ProjectAllocation] = field(default_factory=list)

    @property
    def winners(self) -> List[ProjectAllocation]:
        return [a for a in self.allocations if a.is_winner]

    @property
    def allocated_funds(self) -> int:
        return sum(a.funds_share for a in self.allocations)

    def share_for(self, project_id: int) -> int:
        for allocation in self.allocations:
            if allocation.project_id == project_id:
                return allocation.funds_share
        return 0

    def allocation_for(self, project_id: int) -> Optional[ProjectAllocation]:
        for allocation in self.allocations:
            if allocation.project_id == project_id:
                return allocation
        return None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ReconciliationRow:
    """Expected payout next to what the chain actually paid."""

    rank: int
    project_id: int
    vote_count: int
    expected: int
    actual: int

    @property
    def delta(self) -> int:
        return self.actual - self.expected


@dataclass
class Reconciliation:
    """Post-distribution comparison for a whole campaign."""

    campaign_id: int
    result: DistributionResult
    rows: List[ReconciliationRow] = field(default_factory=list)

    @property
    def total_paid(self) -> int:
        return sum(r.actual for r in self.rows)

    @property
    def matches(self) -> bool:
        return all(r.delta == 0 for r in self.rows)
