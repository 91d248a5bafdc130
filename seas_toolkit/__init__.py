"""Sovereign Seas Toolkit - Python client for Sovereign Seas campaign funding."""

__version__ = "0.1.0"

from .campaigns.service import CampaignService
from .session import SeasSession
from .transactions import CampaignWriter, TransactionLifecycle

__all__ = [
    "CampaignService",
    "CampaignWriter",
    "SeasSession",
    "TransactionLifecycle",
]
