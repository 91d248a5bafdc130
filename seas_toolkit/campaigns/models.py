"""
Type definitions for Sovereign Seas campaigns, projects and votes.
"""

from dataclasses import asdict, dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

# =============================================================================
# ENUMS
# =============================================================================


class CampaignStatus(Enum):
    """Campaign status enumeration."""

    UPCOMING = "upcoming"  # Voting window has not opened yet
    ACTIVE = "active"  # Enabled and inside the voting window
    ENDED = "ended"  # Window closed, or deactivated by the admin


# =============================================================================
# CHAIN RECORDS
# =============================================================================


@dataclass
class Campaign:
    """Campaign as returned by ``getCampaign``."""

    id: int
    admin: str  # Campaign owner address
    name: str
    description: str
    logo: str  # Optional URI, empty when unset
    demo_video: str  # Optional URI, empty when unset
    start_time: int  # Unix seconds
    end_time: int  # Unix seconds
    admin_fee_percentage: int  # 0-30
    vote_multiplier: int  # Votes granted per token unit
    max_winners: int  # 0 = every voted project wins
    use_quadratic_distribution: bool
    active: bool  # Admin toggle
    total_funds: int  # Base units (wei)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Project:
    """Project entry as returned by ``getProject``/``getSortedProjects``."""

    id: int
    campaign_id: int
    owner: str
    name: str
    description: str
    github_link: str = ""
    social_link: str = ""
    testing_link: str = ""
    logo: str = ""
    demo_video: str = ""
    contracts: List[str] = field(default_factory=list)
    approved: bool = False  # Gates voting eligibility
    vote_count: int = 0  # Accumulated weighted votes (wei scale)
    funds_received: int = 0  # Set once distributeFunds has run

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Vote:
    """Single vote record. ``vote_count == amount * vote_multiplier``."""

    voter: str
    campaign_id: int
    project_id: int
    amount: int  # Token base units contributed
    vote_count: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# =============================================================================
# DERIVED VIEWS
# =============================================================================


@dataclass(frozen=True)
class TimeRemaining:
    """Whole days/hours/minutes until the campaign ends."""

    days: int
    hours: int
    minutes: int

    @property
    def is_elapsed(self) -> bool:
        return self.days == 0 and self.hours == 0 and self.minutes == 0


@dataclass
class ProjectStats:
    """Approval partition and vote total for one campaign's projects."""

    total: int
    approved: int
    pending: int
    total_votes: Decimal  # Human units (vote counts divided by 10**decimals)


@dataclass
class CampaignSupport:
    """One row of a voter's "top campaigns supported" leaderboard."""

    campaign_id: int
    total_amount: int
    total_vote_count: int
    vote_records: int
    campaign: Optional[Campaign] = None

    @property
    def campaign_name(self) -> Optional[str]:
        return self.campaign.name if self.campaign else None


@dataclass
class CampaignOverview:
    """Everything a campaign page needs, derived from one read cycle."""

    campaign: Campaign
    status: CampaignStatus
    time_remaining: TimeRemaining
    stats: ProjectStats
    projects: List[Project] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "campaign": self.campaign.to_dict(),
            "status": self.status.value,
            "time_remaining": asdict(self.time_remaining),
            "stats": {
                "total": self.stats.total,
                "approved": self.stats.approved,
                "pending": self.stats.pending,
                "total_votes": str(self.stats.total_votes),
            },
            "projects": [p.to_dict() for p in self.projects],
        }
