"""Campaign data and derived views for the Sovereign Seas toolkit."""

from .aggregator import (
    aggregate_project_stats,
    build_campaign_overview,
    build_leaderboard,
    derive_status,
    is_campaign_active,
    time_remaining,
)
from .models import (
    Campaign,
    CampaignOverview,
    CampaignStatus,
    CampaignSupport,
    Project,
    ProjectStats,
    TimeRemaining,
    Vote,
)

__all__ = [
    "Campaign",
    "CampaignOverview",
    "CampaignStatus",
    "CampaignSupport",
    "Project",
    "ProjectStats",
    "TimeRemaining",
    "Vote",
    "aggregate_project_stats",
    "build_campaign_overview",
    "build_leaderboard",
    "derive_status",
    "is_campaign_active",
    "time_remaining",
]
