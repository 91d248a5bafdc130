"""
Fund distribution calculator.

Mirrors the arithmetic of the contract's ``distributeFunds``: integer
floor division everywhere, fees taken first, the rest split by weight
between the winners. Shown to users as a binding preview, so every
rounding step must match the chain.

Rounding dust (``distributable - sum(shares)``) is reported as
``unallocated_remainder`` and never credited to a project.
"""

import math
from typing import Iterable, List, Sequence

from seas_toolkit.campaigns.models import Campaign, Project
from seas_toolkit.distribution.models import (
    DistributionResult,
    ProjectAllocation,
    RankedEntry,
    Reconciliation,
    ReconciliationRow,
)
from seas_toolkit.shared.constants import FeeConstants
from seas_toolkit.shared.exceptions import ValidationError


def project_weight(vote_count: int, use_quadratic_distribution: bool) -> int:
    """Linear weight is the vote count, quadratic is its integer square root."""
    if use_quadratic_distribution:
        return math.isqrt(vote_count)
    return vote_count


def _validate_inputs(
    total_funds: int,
    admin_fee_percentage: int,
    platform_fee_percentage: int,
    max_winners: int,
    entries: Sequence[RankedEntry],
) -> None:
    if total_funds < 0:
        raise ValidationError("total_funds", "must be non-negative")
    if not 0 <= admin_fee_percentage <= FeeConstants.MAX_ADMIN_FEE_PERCENTAGE:
        raise ValidationError(
            "admin_fee_percentage",
            f"must be between 0 and {FeeConstants.MAX_ADMIN_FEE_PERCENTAGE}",
        )
    if platform_fee_percentage < 0:
        raise ValidationError("platform_fee_percentage", "must be non-negative")
    if admin_fee_percentage + platform_fee_percentage > 100:
        raise ValidationError(
            "admin_fee_percentage", "fees exceed 100% of campaign funds"
        )
    if max_winners < 0:
        raise ValidationError("max_winners", "must be non-negative")
    for entry in entries:
        if entry.vote_count < 0:
            raise ValidationError(
                "vote_count", f"project {entry.project_id} has negative votes"
            )


def calculate_distribution(
    total_funds: int,
    admin_fee_percentage: int,
    entries: Sequence[RankedEntry],
    use_quadratic_distribution: bool = False,
    max_winners: int = 0,
    platform_fee_percentage: int = FeeConstants.PLATFORM_FEE_PERCENTAGE,
) -> DistributionResult:
    """
    Compute fees and per-project shares.

    Args:
        total_funds: Campaign funds in base units
        admin_fee_percentage: Admin cut, 0-30
        entries: Approved projects in the chain's rank order
        use_quadratic_distribution: Weight by isqrt(votes) instead of votes
        max_winners: Rank cutoff, 0 for no cutoff
        platform_fee_percentage: Platform cut, 15 on the deployed contract

    Returns:
        DistributionResult with one allocation per entry; non-winners get 0
    """
    _validate_inputs(
        total_funds,
        admin_fee_percentage,
        platform_fee_percentage,
        max_winners,
        entries,
    )

    platform_fee = total_funds * platform_fee_percentage // 100
    admin_fee = total_funds * admin_fee_percentage // 100
    distributable = total_funds - platform_fee - admin_fee

    candidates = entries if max_winners == 0 else entries[:max_winners]
    winner_ids = {e.project_id for e in candidates if e.vote_count > 0}

    weights = {
        e.project_id: project_weight(e.vote_count, use_quadratic_distribution)
        for e in entries
        if e.project_id in winner_ids
    }
    total_weight = sum(weights.values())

    allocations: List[ProjectAllocation] = []
    for rank, entry in enumerate(entries, start=1):
        is_winner = entry.project_id in winner_ids
        weight = weights.get(entry.project_id, 0)
        share = 0
        if is_winner and total_weight > 0:
            share = distributable * weight // total_weight
        allocations.append(
            ProjectAllocation(
                rank=rank,
                project_id=entry.project_id,
                vote_count=entry.vote_count,
                weight=weight,
                funds_share=share,
                is_winner=is_winner,
            )
        )

    allocated = sum(a.funds_share for a in allocations)
    return DistributionResult(
        total_funds=total_funds,
        platform_fee=platform_fee,
        admin_fee=admin_fee,
        distributable_funds=distributable,
        total_weight=total_weight,
        unallocated_remainder=distributable - allocated,
        use_quadratic_distribution=use_quadratic_distribution,
        max_winners=max_winners,
        allocations=allocations,
    )


def ranked_entries(projects: Iterable[Project]) -> List[RankedEntry]:
    """Approved projects, keeping the order they were given in."""
    return [
        RankedEntry(project_id=p.id, vote_count=p.vote_count)
        for p in projects
        if p.approved
    ]


def preview_distribution(
    campaign: Campaign, sorted_projects: Sequence[Project]
) -> DistributionResult:
    """Projected payout from live vote counts, in the chain's order."""
    return calculate_distribution(
        total_funds=campaign.total_funds,
        admin_fee_percentage=campaign.admin_fee_percentage,
        entries=ranked_entries(sorted_projects),
        use_quadratic_distribution=campaign.use_quadratic_distribution,
        max_winners=campaign.max_winners,
    )


def reconcile_distribution(
    campaign: Campaign, sorted_projects: Sequence[Project]
) -> Reconciliation:
    """
    Compare the computed payout with ``funds_received`` after distribution.

    Uses the same calculation as the preview; only the inputs differ (the
    final vote counts and the recorded payouts).
    """
    result = preview_distribution(campaign, sorted_projects)
    received = {p.id: p.funds_received for p in sorted_projects}
    rows = [
        ReconciliationRow(
            rank=a.rank,
            project_id=a.project_id,
            vote_count=a.vote_count,
            expected=a.funds_share,
            actual=received.get(a.project_id, 0),
        )
        for a in result.allocations
    ]
    return Reconciliation(campaign_id=campaign.id, result=result, rows=rows)
