"""
Derived campaign views.

Everything here is a pure function of freshly read chain records and an
explicit ``now`` (unix seconds), so results are reproducible in tests and
never depend on cached state.
"""

import time
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence

from seas_toolkit.campaigns.models import (
    Campaign,
    CampaignOverview,
    CampaignStatus,
    CampaignSupport,
    Project,
    ProjectStats,
    TimeRemaining,
    Vote,
)
from seas_toolkit.shared.constants import ChainConstants

SECONDS_PER_DAY = 86400
SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60


def _now(now: Optional[int]) -> int:
    return int(time.time()) if now is None else int(now)


def derive_status(
    campaign: Campaign, now: Optional[int] = None
) -> CampaignStatus:
    """
    Lifecycle status of a campaign at ``now``.

    ENDED covers both a window that has closed and a campaign the admin
    switched off before its end time.
    """
    current = _now(now)
    if current < campaign.start_time:
        return CampaignStatus.UPCOMING
    if campaign.active and campaign.start_time <= current <= campaign.end_time:
        return CampaignStatus.ACTIVE
    return CampaignStatus.ENDED


def is_campaign_active(campaign: Campaign, now: Optional[int] = None) -> bool:
    return derive_status(campaign, now) == CampaignStatus.ACTIVE


def time_remaining(
    campaign: Campaign, now: Optional[int] = None
) -> TimeRemaining:
    """Time until ``end_time``, floored to zero once elapsed."""
    seconds = max(campaign.end_time - _now(now), 0)
    return TimeRemaining(
        days=seconds // SECONDS_PER_DAY,
        hours=(seconds % SECONDS_PER_DAY) // SECONDS_PER_HOUR,
        minutes=(seconds % SECONDS_PER_HOUR) // SECONDS_PER_MINUTE,
    )


def aggregate_project_stats(
    projects: Iterable[Project],
    decimals: int = ChainConstants.TOKEN_DECIMALS,
) -> ProjectStats:
    total = approved = 0
    raw_votes = 0
    for project in projects:
        total += 1
        if project.approved:
            approved += 1
        raw_votes += project.vote_count

    return ProjectStats(
        total=total,
        approved=approved,
        pending=total - approved,
        total_votes=Decimal(raw_votes) / (Decimal(10) ** decimals),
    )


def build_leaderboard(
    votes: Iterable[Vote], campaigns: Sequence[Campaign] = ()
) -> List[CampaignSupport]:
    """
    Group a voter's votes by campaign, largest summed amount first.

    Ties keep the order in which each campaign was first seen in ``votes``.
    """
    by_id: Dict[int, Campaign] = {c.id: c for c in campaigns}
    rows: Dict[int, CampaignSupport] = {}

    for vote in votes:
        row = rows.get(vote.campaign_id)
        if row is None:
            row = CampaignSupport(
                campaign_id=vote.campaign_id,
                total_amount=0,
                total_vote_count=0,
                vote_records=0,
                campaign=by_id.get(vote.campaign_id),
            )
            rows[vote.campaign_id] = row
        row.total_amount += vote.amount
        row.total_vote_count += vote.vote_count
        row.vote_records += 1

    # sorted() is stable with reverse=True, equal amounts keep insertion order
    return sorted(rows.values(), key=lambda r: r.total_amount, reverse=True)


def build_campaign_overview(
    campaign: Campaign,
    projects: Sequence[Project],
    now: Optional[int] = None,
) -> CampaignOverview:
    current = _now(now)
    return CampaignOverview(
        campaign=campaign,
        status=derive_status(campaign, current),
        time_remaining=time_remaining(campaign, current),
        stats=aggregate_project_stats(projects),
        projects=list(projects),
    )
