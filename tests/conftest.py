"""
Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests.
"""

from typing import Any, Tuple
from unittest.mock import MagicMock

import pytest

from seas_toolkit.shared.constants import SeasConfig

CONTRACT_ADDRESS = "0x1111111111111111111111111111111111111111"
TOKEN_ADDRESS = "0x2222222222222222222222222222222222222222"
ADMIN_ADDRESS = "0x3333333333333333333333333333333333333333"
OWNER_ADDRESS = "0x4444444444444444444444444444444444444444"
VOTER_ADDRESS = "0x5555555555555555555555555555555555555555"
DEPLOYER_ADDRESS = "0x6666666666666666666666666666666666666666"

START_TIME = 1_700_000_000
END_TIME = START_TIME + 7 * 86400


def campaign_tuple(
    campaign_id: int = 0,
    total_funds: int = 1000,
    admin_fee: int = 5,
    max_winners: int = 0,
    quadratic: bool = False,
    active: bool = True,
) -> Tuple[Any, ...]:
    """Raw ``getCampaign`` return value."""
    return (
        campaign_id,
        ADMIN_ADDRESS,
        f"Campaign {campaign_id}",
        "A test campaign",
        "",
        "",
        START_TIME,
        END_TIME,
        admin_fee,
        1,
        max_winners,
        quadratic,
        active,
        total_funds,
    )


def project_tuple(
    project_id: int,
    campaign_id: int = 0,
    vote_count: int = 0,
    approved: bool = True,
    funds_received: int = 0,
) -> Tuple[Any, ...]:
    """Raw ``getProject`` / ``getSortedProjects`` item."""
    return (
        project_id,
        campaign_id,
        OWNER_ADDRESS,
        f"Project {project_id}",
        "A test project",
        "https://github.com/example/project",
        "",
        "",
        "",
        "",
        [],
        approved,
        vote_count,
        funds_received,
    )


@pytest.fixture
def seas_config() -> SeasConfig:
    """Config pointing at placeholder deployment addresses."""
    return SeasConfig(
        chain_id=44787,
        rpc_url="http://localhost:8545",
        contract_address=CONTRACT_ADDRESS,
        token_address=TOKEN_ADDRESS,
        explorer_url="https://alfajores.celoscan.io",
        contract_deployer=DEPLOYER_ADDRESS,
        spam_campaigns=[],
        verify_api_url="https://verify.example.com",
    )


@pytest.fixture
def mock_web3_service():
    """Mock Web3Service for unit tests."""
    service = MagicMock()
    service.write_contract.return_value = "0x" + "ab" * 32
    service.wait_for_receipt.return_value = {"status": 1, "logs": []}
    return service


@pytest.fixture
def sample_campaign_tuple():
    return campaign_tuple()


@pytest.fixture
def sample_project_tuple():
    return project_tuple(0, vote_count=300)


@pytest.fixture
def campaign_factory():
    """Build raw ``getCampaign`` tuples."""
    return campaign_tuple


@pytest.fixture
def project_factory():
    """Build raw project struct tuples."""
    return project_tuple


@pytest.fixture
def voter_address() -> str:
    return VOTER_ADDRESS


@pytest.fixture
def admin_address() -> str:
    return ADMIN_ADDRESS


@pytest.fixture
def deployer_address() -> str:
    return DEPLOYER_ADDRESS
