"""All constants for the project"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

from seas_toolkit.shared.exceptions import ConfigurationException

load_dotenv()


class FeeConstants:
    """Fee split applied by the contract when distributing funds"""

    PLATFORM_FEE_PERCENTAGE = 15
    MAX_ADMIN_FEE_PERCENTAGE = 30

    # Creation fees in whole token units, paid through approve-then-act
    CAMPAIGN_CREATION_FEE = "2"
    PROJECT_CREATION_FEE = "1"


class ChainConstants:
    """Chain related defaults"""

    CELO_MAINNET = 42220
    CELO_ALFAJORES = 44787

    DEFAULT_RPC_URLS = {
        42220: "https://forno.celo.org",
        44787: "https://alfajores-forno.celo-testnet.org",
    }

    DEFAULT_EXPLORER_URLS = {
        42220: "https://celoscan.io",
        44787: "https://alfajores.celoscan.io",
    }

    TOKEN_DECIMALS = 18
    RECEIPT_TIMEOUT = 120  # seconds

    @classmethod
    def get_rpc_url(cls, chain_id: int) -> str:
        """RPC URL from SEAS_RPC_URL or the chain default"""
        url = os.getenv("SEAS_RPC_URL") or cls.DEFAULT_RPC_URLS.get(chain_id)
        if not url:
            raise ConfigurationException(
                f"No RPC URL configured for chain {chain_id}; set SEAS_RPC_URL"
            )
        return url


class ApiConstants:
    """Auxiliary verification API"""

    VERIFY_API_URL = os.getenv(
        "SEAS_VERIFY_API_URL", "https://selfauth.vercel.app"
    )
    VERIFY_PATH = "/api/verify"
    GOODDOLLAR_VERIFY_PATH = "/api/verify-gooddollar"


def _parse_id_list(raw: Optional[str]) -> List[int]:
    if not raw:
        return []
    ids = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            ids.append(int(part))
        except ValueError:
            raise ConfigurationException(
                f"Invalid campaign id in SEAS_SPAM_CAMPAIGNS: {part!r}"
            )
    return ids


@dataclass
class SeasConfig:
    """
    Injected environment configuration.

    Values are opaque to the toolkit: it never derives addresses or fees
    on its own, it only forwards what the deployment provides.
    """

    chain_id: int = ChainConstants.CELO_MAINNET
    rpc_url: Optional[str] = None
    contract_address: Optional[str] = None
    token_address: Optional[str] = None
    explorer_url: Optional[str] = None
    contract_deployer: Optional[str] = None
    private_key: Optional[str] = field(default=None, repr=False)
    spam_campaigns: List[int] = field(default_factory=list)
    verify_api_url: str = ApiConstants.VERIFY_API_URL
    campaign_creation_fee: str = FeeConstants.CAMPAIGN_CREATION_FEE
    project_creation_fee: str = FeeConstants.PROJECT_CREATION_FEE

    @classmethod
    def from_env(cls) -> "SeasConfig":
        chain_id = int(os.getenv("SEAS_CHAIN_ID", ChainConstants.CELO_MAINNET))
        return cls(
            chain_id=chain_id,
            rpc_url=os.getenv("SEAS_RPC_URL")
            or ChainConstants.DEFAULT_RPC_URLS.get(chain_id),
            contract_address=os.getenv("SEAS_CONTRACT_ADDRESS"),
            token_address=os.getenv("SEAS_TOKEN_ADDRESS"),
            explorer_url=os.getenv("SEAS_EXPLORER_URL")
            or ChainConstants.DEFAULT_EXPLORER_URLS.get(chain_id),
            contract_deployer=os.getenv("SEAS_CONTRACT_DEPLOYER"),
            private_key=os.getenv("SEAS_PRIVATE_KEY"),
            spam_campaigns=_parse_id_list(os.getenv("SEAS_SPAM_CAMPAIGNS")),
            verify_api_url=os.getenv(
                "SEAS_VERIFY_API_URL", ApiConstants.VERIFY_API_URL
            ),
        )

    def require_contract_address(self) -> str:
        if not self.contract_address:
            raise ConfigurationException(
                "SEAS_CONTRACT_ADDRESS is not configured"
            )
        return self.contract_address

    def require_token_address(self) -> str:
        if not self.token_address:
            raise ConfigurationException("SEAS_TOKEN_ADDRESS is not configured")
        return self.token_address

    def require_rpc_url(self) -> str:
        if not self.rpc_url:
            return ChainConstants.get_rpc_url(self.chain_id)
        return self.rpc_url
