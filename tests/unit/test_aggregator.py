"""
Unit tests for derived campaign views.
"""

from decimal import Decimal

import pytest

from seas_toolkit.campaigns import (
    CampaignStatus,
    aggregate_project_stats,
    build_campaign_overview,
    build_leaderboard,
    derive_status,
    is_campaign_active,
    time_remaining,
)
from seas_toolkit.campaigns.models import Vote
from seas_toolkit.contracts.reader import ContractReader

START = 1_700_000_000
END = START + 7 * 86400


@pytest.fixture
def campaign(campaign_factory):
    return ContractReader.decode_campaign(campaign_factory())


@pytest.fixture
def inactive_campaign(campaign_factory):
    return ContractReader.decode_campaign(campaign_factory(active=False))


def vote(campaign_id, amount, voter="0x5555555555555555555555555555555555555555"):
    return Vote(
        voter=voter,
        campaign_id=campaign_id,
        project_id=0,
        amount=amount,
        vote_count=amount * 2,
    )


class TestDeriveStatus:
    @pytest.mark.parametrize(
        "now,expected",
        [
            (START - 1, CampaignStatus.UPCOMING),
            (START, CampaignStatus.ACTIVE),
            (START + 3600, CampaignStatus.ACTIVE),
            (END, CampaignStatus.ACTIVE),
            (END + 1, CampaignStatus.ENDED),
        ],
    )
    def test_status_follows_the_voting_window(self, campaign, now, expected):
        assert derive_status(campaign, now) == expected

    def test_deactivated_campaign_inside_window_is_ended(self, inactive_campaign):
        assert derive_status(inactive_campaign, START + 10) == CampaignStatus.ENDED

    def test_deactivated_campaign_before_start_is_upcoming(
        self, inactive_campaign
    ):
        assert (
            derive_status(inactive_campaign, START - 10)
            == CampaignStatus.UPCOMING
        )

    def test_exactly_one_status_per_instant(self, campaign):
        for now in (START - 86400, START, END, END + 86400):
            statuses = [
                s for s in CampaignStatus if derive_status(campaign, now) == s
            ]
            assert len(statuses) == 1

    def test_is_campaign_active(self, campaign, inactive_campaign):
        assert is_campaign_active(campaign, START + 1)
        assert not is_campaign_active(inactive_campaign, START + 1)


class TestTimeRemaining:
    def test_splits_into_days_hours_minutes(self, campaign):
        now = END - (2 * 86400 + 5 * 3600 + 30 * 60 + 59)
        remaining = time_remaining(campaign, now)

        assert (remaining.days, remaining.hours, remaining.minutes) == (2, 5, 30)

    def test_floors_to_zero_after_end(self, campaign):
        remaining = time_remaining(campaign, END + 10_000)

        assert (remaining.days, remaining.hours, remaining.minutes) == (0, 0, 0)
        assert remaining.is_elapsed

    def test_never_rounds_up(self, campaign):
        remaining = time_remaining(campaign, END - 59)
        assert remaining.minutes == 0


class TestProjectStats:
    def test_partitions_and_sums_votes(self, project_factory):
        projects = [
            ContractReader.decode_project(
                project_factory(0, vote_count=3 * 10**18)
            ),
            ContractReader.decode_project(
                project_factory(1, vote_count=5 * 10**17, approved=False)
            ),
            ContractReader.decode_project(project_factory(2, vote_count=0)),
        ]

        stats = aggregate_project_stats(projects)

        assert stats.total == 3
        assert stats.approved == 2
        assert stats.pending == 1
        assert stats.approved + stats.pending == stats.total
        assert stats.total_votes == Decimal("3.5")

    def test_empty_campaign(self):
        stats = aggregate_project_stats([])

        assert (stats.total, stats.approved, stats.pending) == (0, 0, 0)
        assert stats.total_votes == 0


class TestLeaderboard:
    def test_groups_and_sorts_by_amount(self, campaign):
        votes = [vote(1, 10), vote(0, 5), vote(1, 20), vote(2, 40)]

        board = build_leaderboard(votes, [campaign])

        assert [r.campaign_id for r in board] == [2, 1, 0]
        assert board[1].total_amount == 30
        assert board[1].total_vote_count == 60
        assert board[1].vote_records == 2
        assert board[2].campaign_name == campaign.name
        assert board[0].campaign is None

    def test_ties_keep_first_seen_order(self):
        votes = [vote(7, 10), vote(3, 10), vote(5, 10)]

        board = build_leaderboard(votes)

        assert [r.campaign_id for r in board] == [7, 3, 5]

    def test_no_votes(self):
        assert build_leaderboard([]) == []


class TestOverview:
    def test_combines_status_time_and_stats(self, campaign, project_factory):
        projects = [
            ContractReader.decode_project(project_factory(0, vote_count=10**18))
        ]

        overview = build_campaign_overview(campaign, projects, START + 60)

        assert overview.status == CampaignStatus.ACTIVE
        assert overview.time_remaining.days == 6
        assert overview.stats.total == 1
        data = overview.to_dict()
        assert data["status"] == "active"
        assert data["stats"]["total_votes"] == "1"
        assert data["projects"][0]["id"] == 0
