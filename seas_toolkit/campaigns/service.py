"""
CampaignService - read client for the Sovereign Seas contract

This service handles:
1. Listing campaigns and projects with a count-then-fan-out read pattern
2. The chain's canonical project ranking (getSortedProjects)
3. Per-user vote lookups
4. Admin role checks and creation fee balance
5. Aggregated views (overview, distribution preview/reconciliation,
   personal leaderboard) built from one fresh read cycle

Failure policy:
- Batch reads are all-or-nothing: one failed item fails the batch, so an
  inconsistent campaign set is never shown
- Every public read is fail-soft: errors are logged and an empty/zero
  value is returned instead of raising into the presentation layer

Technical Implementation:
- web3 calls are blocking, so each one runs in the default executor
- independent reads are issued together with asyncio.gather
"""

import asyncio
from functools import partial
from typing import Any, List, Optional, Sequence, Tuple

from seas_toolkit.campaigns.aggregator import (
    build_campaign_overview,
    build_leaderboard,
)
from seas_toolkit.campaigns.models import (
    Campaign,
    CampaignOverview,
    CampaignSupport,
    Project,
    Vote,
)
from seas_toolkit.contracts.reader import ContractReader
from seas_toolkit.contracts.validation import validate_address
from seas_toolkit.distribution.calculator import (
    preview_distribution,
    reconcile_distribution,
)
from seas_toolkit.distribution.models import DistributionResult, Reconciliation
from seas_toolkit.shared.constants import SeasConfig
from seas_toolkit.shared.logging import get_logger
from seas_toolkit.shared.services.web3_service import Web3Service

SEAS_ABI = "sovereign_seas"

logger = get_logger(__name__)


class CampaignService:
    """
    Service for reading Sovereign Seas campaign data.

    Attributes:
        web3_service: Chain read/write primitive
        config: Injected deployment configuration
        contract_reader: Decodes raw return values into models
    """

    def __init__(self, web3_service: Web3Service, config: SeasConfig):
        self.web3_service = web3_service
        self.config = config
        self.contract_reader = ContractReader()

    @property
    def contract_address(self) -> str:
        return self.config.require_contract_address()

    async def _read(self, function_name: str, *args: Any) -> Any:
        """Run one blocking view call in the default executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None,
            partial(
                self.web3_service.read_contract,
                self.contract_address,
                SEAS_ABI,
                function_name,
                args,
            ),
        )

    # -------------------------------------------------------------------------
    # Campaigns & projects
    # -------------------------------------------------------------------------

    async def _fetch_campaigns(self) -> List[Campaign]:
        count = int(await self._read("getCampaignCount"))
        results = await asyncio.gather(
            *(self._read("getCampaign", i) for i in range(count))
        )
        spam = set(self.config.spam_campaigns)
        campaigns = [self.contract_reader.decode_campaign(r) for r in results]
        return [c for c in campaigns if c.id not in spam]

    async def list_campaigns(self) -> List[Campaign]:
        """
        All campaigns, minus the configured spam ids.

        Returns an empty list if any single read fails.
        """
        try:
            return await self._fetch_campaigns()
        except Exception as e:
            logger.error(f"Error loading campaigns: {e}")
            return []

    async def _fetch_campaign(self, campaign_id: int) -> Campaign:
        result = await self._read("getCampaign", campaign_id)
        return self.contract_reader.decode_campaign(result)

    async def get_campaign(self, campaign_id: int) -> Optional[Campaign]:
        try:
            return await self._fetch_campaign(campaign_id)
        except Exception as e:
            logger.error(f"Error loading campaign {campaign_id}: {e}")
            return None

    async def _fetch_projects(self, campaign_id: int) -> List[Project]:
        count = int(await self._read("getProjectCount", campaign_id))
        results = await asyncio.gather(
            *(self._read("getProject", campaign_id, i) for i in range(count))
        )
        return [self.contract_reader.decode_project(r) for r in results]

    async def list_projects(self, campaign_id: int) -> List[Project]:
        """All projects of one campaign, or [] if any read fails."""
        try:
            return await self._fetch_projects(campaign_id)
        except Exception as e:
            logger.error(
                f"Error loading projects for campaign {campaign_id}: {e}"
            )
            return []

    async def _fetch_sorted_projects(self, campaign_id: int) -> List[Project]:
        results = await self._read("getSortedProjects", campaign_id)
        return self.contract_reader.decode_projects(results)

    async def get_sorted_projects(self, campaign_id: int) -> List[Project]:
        """
        Projects in the contract's own ranking.

        The order decides real payouts, so it is returned untouched.
        """
        try:
            return await self._fetch_sorted_projects(campaign_id)
        except Exception as e:
            logger.error(
                f"Error getting sorted projects for campaign {campaign_id}: {e}"
            )
            return []

    # -------------------------------------------------------------------------
    # Votes
    # -------------------------------------------------------------------------

    async def get_user_vote_history(self, voter: str) -> List[Vote]:
        try:
            voter = validate_address(voter, "voter")
            results = await self._read("getUserVoteHistory", voter)
            return self.contract_reader.decode_votes(results)
        except Exception as e:
            logger.error(f"Error getting vote history for {voter}: {e}")
            return []

    async def get_user_votes_for_project(
        self, campaign_id: int, project_id: int, voter: str
    ) -> int:
        try:
            voter = validate_address(voter, "voter")
            return int(
                await self._read(
                    "getUserVotesForProject", campaign_id, voter, project_id
                )
            )
        except Exception as e:
            logger.error(
                f"Error getting user votes for project {project_id} "
                f"in campaign {campaign_id}: {e}"
            )
            return 0

    async def get_user_total_votes_in_campaign(
        self, campaign_id: int, voter: str
    ) -> int:
        try:
            voter = validate_address(voter, "voter")
            return int(
                await self._read(
                    "getUserTotalVotesInCampaign", campaign_id, voter
                )
            )
        except Exception as e:
            logger.error(
                f"Error getting user total votes in campaign {campaign_id}: {e}"
            )
            return 0

    # -------------------------------------------------------------------------
    # Roles & fees
    # -------------------------------------------------------------------------

    async def is_campaign_admin(self, campaign_id: int, address: str) -> bool:
        try:
            address = validate_address(address)
            return bool(
                await self._read("isCampaignAdmin", campaign_id, address)
            )
        except Exception as e:
            logger.error(
                f"Error checking campaign admin for campaign {campaign_id}: {e}"
            )
            return False

    async def is_super_admin(self, address: str) -> bool:
        """Super admin on chain, or the configured contract deployer."""
        try:
            address = validate_address(address)
        except Exception as e:
            logger.error(f"Error checking super admin status: {e}")
            return False

        deployer = (self.config.contract_deployer or "").lower()
        if deployer and deployer == address.lower():
            return True

        try:
            return bool(await self._read("superAdmins", address))
        except Exception as e:
            logger.error(f"Error checking super admin status: {e}")
            return False

    async def get_available_creation_fees(self) -> int:
        try:
            return int(await self._read("getAvailableCreationFees"))
        except Exception as e:
            logger.error(f"Error loading creation fees: {e}")
            return 0

    # -------------------------------------------------------------------------
    # Aggregated views
    # -------------------------------------------------------------------------

    async def get_campaign_overview(
        self, campaign_id: int, now: Optional[int] = None
    ) -> Optional[CampaignOverview]:
        """Status, timing and project stats, or None if any read fails."""
        try:
            campaign, projects = await asyncio.gather(
                self._fetch_campaign(campaign_id),
                self._fetch_projects(campaign_id),
            )
        except Exception as e:
            logger.error(
                f"Error building overview for campaign {campaign_id}: {e}"
            )
            return None
        return build_campaign_overview(campaign, projects, now)

    async def _campaign_with_ranking(
        self, campaign_id: int
    ) -> Optional[Tuple[Campaign, List[Project]]]:
        try:
            campaign, ranking = await asyncio.gather(
                self._fetch_campaign(campaign_id),
                self._fetch_sorted_projects(campaign_id),
            )
        except Exception as e:
            logger.error(
                f"Error loading campaign {campaign_id} with its ranking: {e}"
            )
            return None
        return campaign, ranking

    async def get_distribution_preview(
        self, campaign_id: int
    ) -> Optional[DistributionResult]:
        """Projected payout from live votes in the chain's ranking."""
        loaded = await self._campaign_with_ranking(campaign_id)
        if loaded is None:
            return None
        return preview_distribution(*loaded)

    async def get_distribution_reconciliation(
        self, campaign_id: int
    ) -> Optional[Reconciliation]:
        """Computed payout next to the recorded ``funds_received``."""
        loaded = await self._campaign_with_ranking(campaign_id)
        if loaded is None:
            return None
        return reconcile_distribution(*loaded)

    async def get_user_leaderboard(
        self, voter: str, campaigns: Optional[Sequence[Campaign]] = None
    ) -> List[CampaignSupport]:
        """A voter's supported campaigns, largest contribution first."""
        if campaigns is None:
            votes, campaigns = await asyncio.gather(
                self.get_user_vote_history(voter), self.list_campaigns()
            )
        else:
            votes = await self.get_user_vote_history(voter)
        return build_leaderboard(votes, campaigns)
