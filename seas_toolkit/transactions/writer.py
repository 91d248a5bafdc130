"""
CampaignWriter - write helpers for the Sovereign Seas contract

Every helper validates its typed input first (a ValidationError is raised
before anything is signed), then drives the call through the session's
TransactionLifecycle and returns the terminal TransactionState.

Token-moving actions (voting and the creation fees) run approve-then-act:
the token ``approve`` is submitted and confirmed first, and the action is
only submitted once the allowance is on chain.
"""

from decimal import Decimal, InvalidOperation
from functools import partial
from typing import Any, Optional, Sequence

from web3 import Web3

from seas_toolkit.contracts.reader import ContractReader
from seas_toolkit.contracts.validation import (
    Amount,
    CampaignInput,
    CampaignUpdateInput,
    ProjectInput,
    ProjectUpdateInput,
    VoteInput,
    validate_address,
    validate_non_negative_int,
    validate_positive_amount,
)
from seas_toolkit.shared.constants import SeasConfig
from seas_toolkit.shared.logging import get_logger
from seas_toolkit.shared.services.web3_service import Web3Service
from seas_toolkit.transactions.lifecycle import TransactionLifecycle
from seas_toolkit.transactions.models import TransactionState
from seas_toolkit.utils.formatters import explorer_tx_url

SEAS_ABI = "sovereign_seas"
ERC20_ABI = "erc20"

logger = get_logger(__name__)


def to_base_units(amount: Decimal) -> int:
    """Whole-token Decimal to 18-decimal base units"""
    return int(Web3.to_wei(amount, "ether"))


def _is_zero(amount: Amount) -> bool:
    try:
        return Decimal(str(amount).strip()) == 0
    except InvalidOperation:
        return False


class CampaignWriter:
    """
    Submits contract writes on behalf of the configured sender.

    Attributes:
        web3_service: Chain write primitive
        config: Injected deployment configuration
        lifecycle: Tracks the state of the action in progress
    """

    def __init__(
        self,
        web3_service: Web3Service,
        config: SeasConfig,
        lifecycle: TransactionLifecycle,
    ):
        self.web3_service = web3_service
        self.config = config
        self.lifecycle = lifecycle
        self.contract_reader = ContractReader()

    @property
    def contract_address(self) -> str:
        return self.config.require_contract_address()

    @property
    def token_address(self) -> str:
        return self.config.require_token_address()

    def _call(
        self,
        function_name: str,
        args: Sequence[Any],
        address: Optional[str] = None,
        abi_name: str = SEAS_ABI,
    ):
        return partial(
            self.web3_service.write_contract,
            address or self.contract_address,
            abi_name,
            function_name,
            list(args),
        )

    def explorer_link(self, state: TransactionState) -> Optional[str]:
        if not state.tx_hash:
            return None
        return explorer_tx_url(self.config.explorer_url, state.tx_hash)

    async def _run(
        self, function_name: str, args: Sequence[Any], description: str
    ) -> TransactionState:
        state = await self.lifecycle.execute(
            self._call(function_name, args), description
        )
        if state.is_confirmed:
            logger.info(
                f"{description} confirmed: {self.explorer_link(state) or state.tx_hash}"
            )
        return state

    async def _approve_then(
        self,
        amount: int,
        function_name: str,
        args: Sequence[Any],
        description: str,
    ) -> TransactionState:
        """Confirm a token allowance for ``amount``, then submit the action."""
        approval = await self.lifecycle.execute(
            self._call(
                "approve",
                [Web3.to_checksum_address(self.contract_address), amount],
                address=self.token_address,
                abi_name=ERC20_ABI,
            ),
            f"Approve tokens for {description}",
        )
        if not approval.is_confirmed:
            logger.warning(
                f"Token approval failed, {description} was not submitted"
            )
            return approval
        return await self._run(function_name, args, description)

    # -------------------------------------------------------------------------
    # Campaigns
    # -------------------------------------------------------------------------

    async def create_campaign(self, campaign: CampaignInput) -> TransactionState:
        """
        Pay the creation fee and create a campaign.

        The new id is read from the receipt with ``created_campaign_id``.
        """
        campaign.validate()
        fee = validate_positive_amount(
            self.config.campaign_creation_fee, "campaign_creation_fee"
        )
        return await self._approve_then(
            to_base_units(fee),
            "createCampaign",
            campaign.to_args(),
            f"Create campaign {campaign.name}",
        )

    def created_campaign_id(self, state: TransactionState) -> Optional[int]:
        if not state.is_confirmed or not state.receipt:
            return None
        return self.contract_reader.extract_campaign_id(
            state.receipt, self.contract_address
        )

    async def update_campaign(
        self, update: CampaignUpdateInput
    ) -> TransactionState:
        update.validate()
        return await self._run(
            "updateCampaign",
            update.to_args(),
            f"Update campaign {update.campaign_id}",
        )

    async def distribute_funds(self, campaign_id: int) -> TransactionState:
        validate_non_negative_int(campaign_id, "campaign_id")
        return await self._run(
            "distributeFunds",
            [campaign_id],
            f"Distribute funds for campaign {campaign_id}",
        )

    # -------------------------------------------------------------------------
    # Projects & votes
    # -------------------------------------------------------------------------

    async def submit_project(self, project: ProjectInput) -> TransactionState:
        project.validate()
        fee = validate_positive_amount(
            self.config.project_creation_fee, "project_creation_fee"
        )
        return await self._approve_then(
            to_base_units(fee),
            "submitProject",
            project.to_args(),
            f"Submit project {project.name}",
        )

    async def update_project(
        self, update: ProjectUpdateInput
    ) -> TransactionState:
        update.validate()
        return await self._run(
            "updateProject",
            update.to_args(),
            f"Update project {update.project_id}",
        )

    async def approve_project(
        self, campaign_id: int, project_id: int
    ) -> TransactionState:
        validate_non_negative_int(campaign_id, "campaign_id")
        validate_non_negative_int(project_id, "project_id")
        return await self._run(
            "approveProject",
            [campaign_id, project_id],
            f"Approve project {project_id}",
        )

    async def vote(self, vote: VoteInput) -> TransactionState:
        vote.validate()
        amount = to_base_units(vote.amount)
        return await self._approve_then(
            amount,
            "vote",
            [vote.campaign_id, vote.project_id, amount],
            f"Vote {vote.amount} for project {vote.project_id}",
        )

    # -------------------------------------------------------------------------
    # Roles & fees
    # -------------------------------------------------------------------------

    async def add_admin(self, campaign_id: int, admin: str) -> TransactionState:
        validate_non_negative_int(campaign_id, "campaign_id")
        admin = validate_address(admin, "admin")
        return await self._run(
            "addCampaignAdmin",
            [campaign_id, admin],
            f"Add admin to campaign {campaign_id}",
        )

    async def remove_admin(
        self, campaign_id: int, admin: str
    ) -> TransactionState:
        validate_non_negative_int(campaign_id, "campaign_id")
        admin = validate_address(admin, "admin")
        return await self._run(
            "removeCampaignAdmin",
            [campaign_id, admin],
            f"Remove admin from campaign {campaign_id}",
        )

    async def add_super_admin(self, address: str) -> TransactionState:
        address = validate_address(address, "super_admin")
        return await self._run("addSuperAdmin", [address], "Add super admin")

    async def remove_super_admin(self, address: str) -> TransactionState:
        address = validate_address(address, "super_admin")
        return await self._run(
            "removeSuperAdmin", [address], "Remove super admin"
        )

    async def withdraw_fees(self, amount: Amount = "0") -> TransactionState:
        """
        Withdraw collected creation fees, in whole tokens.

        ``"0"`` asks the contract to withdraw everything available.
        """
        if _is_zero(amount):
            base_units = 0
        else:
            base_units = to_base_units(validate_positive_amount(amount))
        return await self._run(
            "withdrawCreationFees", [base_units], "Withdraw creation fees"
        )
