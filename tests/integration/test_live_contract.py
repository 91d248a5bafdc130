"""
Test: Toolkit reads against a live Sovereign Seas deployment.

Needs SEAS_CONTRACT_ADDRESS (and optionally SEAS_RPC_URL) in the
environment; skipped otherwise.

Checks:
- Campaign listing decodes every record
- Distribution preview keeps the fee/share/remainder balance
"""

import os

import pytest

from seas_toolkit import SeasSession

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        not os.getenv("SEAS_CONTRACT_ADDRESS"),
        reason="SEAS_CONTRACT_ADDRESS is not set",
    ),
]


@pytest.fixture
def session():
    return SeasSession.from_env()


class TestLiveContract:
    """Read-only checks on the deployed contract."""

    @pytest.mark.asyncio
    async def test_campaigns_decode(self, session):
        campaigns = await session.campaigns.list_campaigns()

        for campaign in campaigns:
            assert campaign.end_time >= campaign.start_time
            assert 0 <= campaign.admin_fee_percentage <= 30

    @pytest.mark.asyncio
    async def test_preview_balances(self, session):
        campaigns = await session.campaigns.list_campaigns()
        if not campaigns:
            pytest.skip("No campaigns on this deployment")

        result = await session.campaigns.get_distribution_preview(
            campaigns[0].id
        )

        assert result is not None
        assert (
            result.platform_fee
            + result.admin_fee
            + result.allocated_funds
            + result.unallocated_remainder
            == result.total_funds
        )
