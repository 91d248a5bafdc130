from seas_toolkit.contracts.reader import ContractReader, event_topic
from seas_toolkit.contracts.validation import (
    CampaignInput,
    CampaignUpdateInput,
    ProjectInput,
    ProjectUpdateInput,
    VoteInput,
    validate_address,
)

__all__ = [
    "ContractReader",
    "event_topic",
    "CampaignInput",
    "CampaignUpdateInput",
    "ProjectInput",
    "ProjectUpdateInput",
    "VoteInput",
    "validate_address",
]
