"""
Session context wiring the toolkit's services together.

One SeasSession per user interaction: it owns the chain connection, the
read and write clients, the transaction lifecycle and the verification
API client. Nothing here is a module-level singleton, so tests and
multi-chain callers can build as many sessions as they need.
"""

from dataclasses import dataclass
from typing import Optional

from seas_toolkit.campaigns.service import CampaignService
from seas_toolkit.shared.constants import SeasConfig
from seas_toolkit.shared.services.fetcher import RetryingFetcher
from seas_toolkit.shared.services.verification_service import (
    VerificationService,
)
from seas_toolkit.shared.services.web3_service import Web3Service
from seas_toolkit.transactions.lifecycle import TransactionLifecycle
from seas_toolkit.transactions.writer import CampaignWriter


@dataclass
class SeasSession:
    config: SeasConfig
    web3_service: Web3Service
    campaigns: CampaignService
    writer: CampaignWriter
    transaction: TransactionLifecycle
    verification: VerificationService

    @classmethod
    def from_config(
        cls,
        config: SeasConfig,
        web3_service: Optional[Web3Service] = None,
        fetcher: Optional[RetryingFetcher] = None,
    ) -> "SeasSession":
        web3_service = web3_service or Web3Service.from_config(config)
        transaction = TransactionLifecycle(web3_service)
        return cls(
            config=config,
            web3_service=web3_service,
            campaigns=CampaignService(web3_service, config),
            writer=CampaignWriter(web3_service, config, transaction),
            transaction=transaction,
            verification=VerificationService(config.verify_api_url, fetcher),
        )

    @classmethod
    def from_env(cls) -> "SeasSession":
        return cls.from_config(SeasConfig.from_env())
